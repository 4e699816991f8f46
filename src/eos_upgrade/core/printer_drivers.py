"""Removal of printer drivers downloaded on EOS 2.

Each downloaded driver is a symlink in the PPD directory pointing into its own
top-level directory under the driver root:

    ppd/hp-laserjet.ppd -> drivers/hp-laserjet/share/ppd/hp-laserjet.ppd

Anything that doesn't fit this shape stops the cleanup. Remaining drivers are
left in place rather than risk deleting the driver root itself or anything
outside it.
"""

import logging
import os
import shutil
from pathlib import Path

from eos_upgrade.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


def driver_top_dir(target: Path, driver_root: Path) -> Path | None:
    """Walk up from target to the driver root's immediate child.

    Both paths must already be resolved.

    Returns:
        The driver's top-level directory, or None when target is not strictly
        inside driver_root
    """
    if target == driver_root or driver_root not in target.parents:
        return None

    current = target
    while current.parent != driver_root:
        current = current.parent

    if not current.name:
        return None
    return current


def remove_downloaded_drivers(ppd_dir: Path, driver_root: Path, feedback: UserFeedback) -> int:
    """Delete downloaded drivers and the PPD symlinks pointing at them.

    Returns:
        Number of PPD symlinks removed
    """
    if not ppd_dir.is_dir():
        return 0

    root = Path(os.path.realpath(driver_root))
    removed = 0

    for entry in sorted(ppd_dir.iterdir()):
        if not entry.is_symlink():
            feedback.warning(f"{entry} is not a symbolic link, skipping remaining printer drivers")
            break

        target = Path(os.path.realpath(entry))
        if not target.exists() or root not in target.parents:
            feedback.warning(f"{entry} does not point into {root}, removing the link only")
            entry.unlink()
            removed += 1
            break

        top = driver_top_dir(target, root)
        if top is None or not top.is_dir():
            feedback.warning(f"Could not find the driver directory for {entry}, stopping")
            break

        logger.debug("Removing driver %s for %s", top, entry)
        shutil.rmtree(top)
        entry.unlink()
        removed += 1

    return removed
