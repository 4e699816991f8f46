from eos_upgrade.integrations.services.abc import Services
from eos_upgrade.integrations.services.real import RealServices

__all__ = ["RealServices", "Services"]
