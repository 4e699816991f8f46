"""Block device, mount and bootloader operations interface.

Used only by the boot partition migration. Every method is fatal on failure:
a half-migrated boot partition leaves the machine unbootable either way.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Disks(ABC):
    """Abstract interface for partition and mount tooling."""

    @abstractmethod
    def find_mount_source(self, mount_point: Path) -> str | None:
        """Return the block device mounted at mount_point, or None if it isn't a mount."""
        ...

    @abstractmethod
    def parent_disk(self, device: str) -> str:
        """Return the whole-disk device holding a partition (e.g. /dev/sda for /dev/sda1)."""
        ...

    @abstractmethod
    def unmount(self, mount_point: Path) -> None:
        """Unmount a filesystem."""
        ...

    @abstractmethod
    def bind_mount(self, source: Path, target: Path) -> None:
        """Bind-mount source over target."""
        ...

    @abstractmethod
    def install_bootloader(self, disk: str, boot_directory: Path) -> None:
        """Install the bootloader onto disk, reading its files from boot_directory."""
        ...

    @abstractmethod
    def sync(self) -> None:
        """Flush filesystem buffers to disk."""
        ...

    @abstractmethod
    def dump_partition_table(self, disk: str) -> str:
        """Return the partition table of disk in sfdisk dump format."""
        ...

    @abstractmethod
    def write_partition_table(self, disk: str, table: str) -> None:
        """Replace the partition table of disk with an sfdisk dump."""
        ...
