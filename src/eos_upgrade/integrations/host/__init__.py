from eos_upgrade.integrations.host.abc import Host
from eos_upgrade.integrations.host.real import RealHost

__all__ = ["Host", "RealHost"]
