"""Reading the installed OS version from os-release."""

from dataclasses import dataclass
from pathlib import Path

from eos_upgrade.core.errors import UnsupportedVersion


@dataclass(frozen=True)
class SystemIdentity:
    """Installed OS version, read once per run."""

    version: str
    major_version: int


def parse_os_release(text: str) -> dict[str, str]:
    """Parse KEY=value lines, dropping surrounding quotes from values.

    Example:
        >>> parse_os_release('NAME="Endless"\\nVERSION="2.6.10"\\n')
        {'NAME': 'Endless', 'VERSION': '2.6.10'}
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        values[key.strip()] = value
    return values


def read_system_identity(os_release_path: Path) -> SystemIdentity:
    """Read the VERSION key and derive the major version from it.

    Raises:
        FileNotFoundError: If the os-release file is missing
        UnsupportedVersion: If VERSION is absent or does not start with a number
    """
    values = parse_os_release(os_release_path.read_text(encoding="utf-8"))
    version = values.get("VERSION")
    if not version:
        raise UnsupportedVersion(f"Could not determine the OS version from {os_release_path}.")

    major_text = version.split(".", 1)[0]
    if not major_text.isdigit():
        raise UnsupportedVersion(f"Unsupported OS version {version}.")

    return SystemIdentity(version=version, major_version=int(major_text))
