"""Folding a separate /boot partition into the root partition.

Early EOS 2 installs booted from their own /boot partition; EOS 3 expects
/boot on the root filesystem. Systems that never had a separate partition
skip this step entirely.
"""

import logging
import shutil
from pathlib import Path

from eos_upgrade.core.context import UpgradeContext

logger = logging.getLogger(__name__)


def drop_partition_entry(dump: str, device: str) -> str:
    """Remove the line for device from an sfdisk dump.

    Example line: "/dev/sda1 : start=2048, size=1048576, type=83"

    Raises:
        RuntimeError: If the dump has no entry for device
    """
    kept: list[str] = []
    found = False
    for line in dump.splitlines(keepends=True):
        if ":" in line and line.split(":", 1)[0].strip() == device:
            found = True
            continue
        kept.append(line)

    if not found:
        raise RuntimeError(f"Partition {device} not found in the partition table")
    return "".join(kept)


def _is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())


def migrate_boot_partition(ctx: UpgradeContext) -> bool:
    """Move /boot onto the root partition and drop the old partition.

    Every step is fatal on failure; there is no recovery path.

    Returns:
        True if a separate boot partition was migrated, False if skipped
    """
    config = ctx.config
    if not _is_empty_dir(config.root_boot_dir):
        logger.debug("%s is not an empty directory, no boot migration needed", config.root_boot_dir)
        return False

    boot_device = ctx.disks.find_mount_source(config.boot_mount)
    if boot_device is None:
        logger.debug("%s is not a separate mount, no boot migration needed", config.boot_mount)
        return False

    disk = ctx.disks.parent_disk(boot_device)
    ctx.feedback.info(f"Moving {config.boot_mount} from {boot_device} onto the root partition...")

    shutil.copytree(config.boot_mount, config.root_boot_dir, symlinks=True, dirs_exist_ok=True)
    ctx.disks.unmount(config.boot_mount)
    ctx.disks.install_bootloader(disk, config.root_boot_dir)
    ctx.disks.sync()

    table = ctx.disks.dump_partition_table(disk)
    ctx.disks.write_partition_table(disk, drop_partition_entry(table, boot_device))

    ctx.disks.bind_mount(config.root_boot_dir, config.boot_mount)
    return True
