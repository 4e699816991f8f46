from eos_upgrade.integrations.apps.abc import LegacyApps
from eos_upgrade.integrations.apps.real import RealLegacyApps

__all__ = ["LegacyApps", "RealLegacyApps"]
