"""OSTree operations interface.

The migration never re-implements OSTree behaviour: it reconfigures the
repository on disk and asks the ostree CLI to pull and deploy.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

_BOOTED_RE = re.compile(r"^\*\s+(?P<osname>\S+)\s+(?P<checksum>[0-9a-f]+)\.(?P<serial>\d+)")


@dataclass(frozen=True)
class Deployment:
    """A staged or booted OS deployment."""

    osname: str
    checksum: str
    serial: int

    def origin_path(self, deploy_root: Path) -> Path:
        """Path of the origin file recording the remote and branch this deployment tracks."""
        return deploy_root / self.osname / "deploy" / f"{self.checksum}.{self.serial}.origin"


def parse_booted_deployment(status_output: str) -> Deployment | None:
    """Find the booted deployment in `ostree admin status` output.

    The booted deployment is the line marked with an asterisk:

        * eos 8d6f0c...e1.0
            origin refspec: eos:os/eos/amd64/eos2
          eos 1234ab...9f.0 (rollback)

    Returns:
        The booted Deployment, or None if no line is marked
    """
    for line in status_output.splitlines():
        match = _BOOTED_RE.match(line.strip())
        if match is not None:
            return Deployment(
                osname=match.group("osname"),
                checksum=match.group("checksum"),
                serial=int(match.group("serial")),
            )
    return None


class Ostree(ABC):
    """Abstract interface for OSTree operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def get_booted_deployment(self) -> Deployment | None:
        """Return the currently booted deployment, or None if it can't be found."""
        ...

    @abstractmethod
    def init_repo(self, repo_path: Path, mode: str) -> None:
        """Initialize a repository at repo_path in the given storage mode.

        Raises:
            RuntimeError: If ostree init fails
        """
        ...

    @abstractmethod
    def gpg_import(self, repo_path: Path, remote: str, key_data: bytes) -> None:
        """Import a GPG keyring into a remote's trust store.

        Raises:
            RuntimeError: If the import fails
        """
        ...

    @abstractmethod
    def pull(self, repo_path: Path, remote: str, branch: str, disable_static_deltas: bool) -> None:
        """Pull a branch from a remote into the repository.

        Raises:
            RuntimeError: If the pull fails
        """
        ...

    @abstractmethod
    def admin_upgrade(self, allow_downgrade: bool) -> None:
        """Deploy the already-pulled commit of the booted deployment's origin.

        Raises:
            RuntimeError: If the deploy fails
        """
        ...
