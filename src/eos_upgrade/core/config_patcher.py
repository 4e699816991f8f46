"""Removing the obsolete remote left behind by earlier migrations."""

import logging
from pathlib import Path

from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.descriptor import load_descriptor, save_descriptor

logger = logging.getLogger(__name__)


def remove_section_from_file(path: Path, section: str) -> bool:
    """Drop one section from a descriptor file.

    The file is left untouched (not even rewritten) when the section is absent.

    Returns:
        True if the file was changed
    """
    if not path.exists():
        return False

    descriptor = load_descriptor(path)
    if not descriptor.remove_section(section):
        return False

    save_descriptor(path, descriptor)
    return True


def patch_repository_configs(ctx: UpgradeContext) -> list[Path]:
    """Remove the obsolete remote from the system and secondary storage repos.

    Safe to run any number of times.

    Returns:
        Descriptor files that were changed
    """
    config = ctx.config
    paths = [config.repo_config_path]
    if config.secondary_storage.is_present():
        paths.append(config.secondary_storage.repo_config_path)

    changed: list[Path] = []
    for path in paths:
        if remove_section_from_file(path, config.obsolete_section):
            logger.debug("Removed [%s] from %s", config.obsolete_section, path)
            changed.append(path)
    return changed
