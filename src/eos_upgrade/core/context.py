"""Application context with dependency injection."""

from dataclasses import dataclass

from eos_upgrade.core.configuration import Configuration, config_path_from_env, load_configuration
from eos_upgrade.core.user_feedback import InteractiveFeedback, UserFeedback
from eos_upgrade.integrations.apps import LegacyApps, RealLegacyApps
from eos_upgrade.integrations.disks import Disks, RealDisks
from eos_upgrade.integrations.host import Host, RealHost
from eos_upgrade.integrations.keys import KeyFetcher, RealKeyFetcher
from eos_upgrade.integrations.ostree import Ostree, RealOstree
from eos_upgrade.integrations.printing import PrintSystem, RealPrintSystem
from eos_upgrade.integrations.services import RealServices, Services


@dataclass(frozen=True)
class UpgradeContext:
    """Immutable context holding all dependencies for a migration run.

    Created at CLI entry point and threaded through every step.
    Frozen to prevent accidental modification at runtime.
    """

    config: Configuration
    host: Host
    ostree: Ostree
    apps: LegacyApps
    printing: PrintSystem
    services: Services
    disks: Disks
    keys: KeyFetcher
    feedback: UserFeedback


def create_context(config: Configuration | None = None) -> UpgradeContext:
    """Create production context with real implementations.

    Args:
        config: Configuration to use. If None, defaults are loaded and
                overridden from the file named by EOS_UPGRADE_CONFIG (or
                /etc/eos-upgrade/config.toml when it exists).

    Returns:
        UpgradeContext with real implementations
    """
    if config is None:
        config = load_configuration(config_path_from_env())

    return UpgradeContext(
        config=config,
        host=RealHost(),
        ostree=RealOstree(),
        apps=RealLegacyApps(),
        printing=RealPrintSystem(),
        services=RealServices(),
        disks=RealDisks(),
        keys=RealKeyFetcher(),
        feedback=InteractiveFeedback(),
    )
