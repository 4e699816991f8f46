"""Production disk operations using util-linux tools and grub-install."""

from pathlib import Path

from eos_upgrade.core.subprocess import run_subprocess_with_context
from eos_upgrade.integrations.disks.abc import Disks


class RealDisks(Disks):
    def find_mount_source(self, mount_point: Path) -> str | None:
        # findmnt exits 1 when the path is not a mount point
        result = run_subprocess_with_context(
            ["findmnt", "--noheadings", "--output", "SOURCE", "--mountpoint", str(mount_point)],
            operation_context=f"find the device mounted at {mount_point}",
            check=False,
        )
        if result.returncode != 0:
            return None
        source = result.stdout.strip()
        return source or None

    def parent_disk(self, device: str) -> str:
        result = run_subprocess_with_context(
            ["lsblk", "--noheadings", "--nodeps", "--output", "PKNAME", device],
            operation_context=f"find the disk holding {device}",
        )
        name = result.stdout.strip()
        if not name:
            raise RuntimeError(f"Could not determine the parent disk of {device}")
        return f"/dev/{name}"

    def unmount(self, mount_point: Path) -> None:
        run_subprocess_with_context(
            ["umount", str(mount_point)],
            operation_context=f"unmount {mount_point}",
        )

    def bind_mount(self, source: Path, target: Path) -> None:
        run_subprocess_with_context(
            ["mount", "--bind", str(source), str(target)],
            operation_context=f"bind-mount {source} on {target}",
        )

    def install_bootloader(self, disk: str, boot_directory: Path) -> None:
        run_subprocess_with_context(
            ["grub-install", f"--boot-directory={boot_directory}", disk],
            operation_context=f"install the bootloader on {disk}",
        )

    def sync(self) -> None:
        run_subprocess_with_context(["sync"], operation_context="sync filesystems")

    def dump_partition_table(self, disk: str) -> str:
        result = run_subprocess_with_context(
            ["sfdisk", "--dump", disk],
            operation_context=f"read the partition table of {disk}",
        )
        return result.stdout

    def write_partition_table(self, disk: str, table: str) -> None:
        run_subprocess_with_context(
            ["sfdisk", "--no-reread", "--force", disk],
            operation_context=f"rewrite the partition table of {disk}",
            input=table,
        )
