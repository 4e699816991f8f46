"""Migration configuration data structures and loading.

Provides the immutable Configuration built once at the CLI entry point.
Defaults describe a stock Endless OS 2 appliance; any field can be
overridden from a TOML file for testing or unusual installs.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("/etc/eos-upgrade/config.toml")
CONFIG_PATH_ENV = "EOS_UPGRADE_CONFIG"


@dataclass(frozen=True)
class SecondaryStorage:
    """Paths for installs with a secondary storage device.

    The device is considered present when label_path exists.
    """

    label_path: Path = Path("/dev/disk/by-label/extra")
    repo_path: Path = Path("/var/endless-extra/flatpak/repo")
    repo_mode: str = "bare-user"

    @property
    def repo_config_path(self) -> Path:
        return self.repo_path / "config"

    def is_present(self) -> bool:
        return self.label_path.exists()


@dataclass(frozen=True)
class Configuration:
    """Immutable migration configuration.

    Loaded once at CLI entry point and stored in UpgradeContext.
    All fields are read-only after construction.
    """

    legacy_version: str = "2.6.10"
    legacy_major: int = 2
    target_major: int = 3
    target_branch_name: str = "eos3"
    arch_to_product: dict[str, str] = field(
        default_factory=lambda: {"armv7l": "ec100", "x86_64": "amd64"}
    )

    os_release_path: Path = Path("/etc/os-release")
    repo_path: Path = Path("/ostree/repo")
    repo_config_path: Path = Path("/ostree/repo/config")
    deploy_root: Path = Path("/ostree/deploy")
    secondary_storage: SecondaryStorage = field(default_factory=SecondaryStorage)

    legacy_data_dirs: tuple[Path, ...] = (
        Path("/endless"),
        Path("/var/endless-extra/endless"),
    )
    home_root: Path = Path("/home")
    user_app_data_dir: str = ".endlessm"
    version_check_marker: Path = Path("/var/lib/eos-app-manager/.version-check-done")

    driver_ppd_dir: Path = Path("/var/lib/eos-config-printer/ppd")
    driver_root: Path = Path("/var/lib/eos-config-printer/drivers")
    printing_service: str = "cups.service"

    boot_mount: Path = Path("/boot")
    root_boot_dir: Path = Path("/sysroot/boot")

    updater_units: tuple[str, ...] = (
        "eos-autoupdater.timer",
        "eos-autoupdater.service",
        "eos-updater.service",
    )
    update_check_service: str = "eos-autoupdater.service"

    main_remote: str = "eos"
    runtimes_remote: str = "eos-runtimes"
    apps_remote: str = "eos-apps"
    ostree_base_url: str = "https://ostree.endlessm.com/ostree"
    trusted_keys: tuple[str, ...] = (
        "https://ostree.endlessm.com/keys/eos-ostree-keyring.gpg",
        "https://ostree.endlessm.com/keys/eos-flatpak-keyring.gpg",
    )
    obsolete_section: str = 'remote "eos-external-apps"'

    def target_branch(self, product: str) -> str:
        """Return the OS branch the main remote is pinned to for a product."""
        return f"os/eos/{product}/{self.target_branch_name}"


_PATH_FIELDS = {
    "os_release_path",
    "repo_path",
    "repo_config_path",
    "deploy_root",
    "home_root",
    "version_check_marker",
    "driver_ppd_dir",
    "driver_root",
    "boot_mount",
    "root_boot_dir",
}
_TUPLE_FIELDS = {"updater_units", "trusted_keys"}


def config_path_from_env() -> Path | None:
    """Return the override file to load, or None when there is none.

    EOS_UPGRADE_CONFIG wins; otherwise the system-wide file is used if present.
    """
    env_value = os.environ.get(CONFIG_PATH_ENV)
    if env_value:
        return Path(env_value)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_configuration(path: Path | None = None) -> Configuration:
    """Load configuration, applying overrides from a TOML file.

    Example override file:
      legacy_version = "2.6.10"
      legacy_data_dirs = ["/endless"]

      [arch_to_product]
      x86_64 = "amd64"

      [secondary_storage]
      label_path = "/dev/disk/by-label/extra"

    Args:
        path: Override file. If None, defaults are returned unchanged.

    Returns:
        Configuration with overrides applied

    Raises:
        FileNotFoundError: If path is given but doesn't exist
        ValueError: If the file contains unknown keys
    """
    config = Configuration()
    if path is None:
        return config

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found at {path}")

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return apply_overrides(config, data, source=path)


def apply_overrides(
    config: Configuration, data: dict, *, source: Path | None = None
) -> Configuration:
    """Return a copy of config with the values in data applied."""
    known = {f.name for f in fields(Configuration)}
    changes: dict[str, object] = {}

    for key, value in data.items():
        if key not in known:
            raise ValueError(f"Unknown configuration key '{key}' in {source}")

        if key == "secondary_storage":
            changes[key] = _load_secondary_storage(value, source)
        elif key == "legacy_data_dirs":
            changes[key] = tuple(Path(str(p)) for p in value)
        elif key == "arch_to_product":
            changes[key] = {str(k): str(v) for k, v in value.items()}
        elif key in _PATH_FIELDS:
            changes[key] = Path(str(value))
        elif key in _TUPLE_FIELDS:
            changes[key] = tuple(str(v) for v in value)
        elif key in ("legacy_major", "target_major"):
            changes[key] = int(value)
        else:
            changes[key] = str(value)

    return replace(config, **changes)


def _load_secondary_storage(data: dict, source: Path | None) -> SecondaryStorage:
    storage = SecondaryStorage()
    known = {f.name for f in fields(SecondaryStorage)}
    for key in data:
        if key not in known:
            raise ValueError(f"Unknown configuration key 'secondary_storage.{key}' in {source}")

    return SecondaryStorage(
        label_path=Path(str(data.get("label_path", storage.label_path))),
        repo_path=Path(str(data.get("repo_path", storage.repo_path))),
        repo_mode=str(data.get("repo_mode", storage.repo_mode)),
    )


def configuration_items(config: Configuration) -> list[tuple[str, str]]:
    """Flatten a configuration into (key, value) display pairs."""
    items: list[tuple[str, str]] = []
    for f in fields(Configuration):
        value = getattr(config, f.name)
        if isinstance(value, SecondaryStorage):
            for sub in fields(SecondaryStorage):
                items.append((f"secondary_storage.{sub.name}", str(getattr(value, sub.name))))
        elif isinstance(value, dict):
            for k, v in value.items():
                items.append((f"{f.name}.{k}", str(v)))
        elif isinstance(value, tuple):
            items.append((f.name, ",".join(str(v) for v in value)))
        else:
            items.append((f.name, str(value)))
    return items
