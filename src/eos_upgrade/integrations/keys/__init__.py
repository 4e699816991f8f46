from eos_upgrade.integrations.keys.abc import KeyFetcher
from eos_upgrade.integrations.keys.real import RealKeyFetcher

__all__ = ["KeyFetcher", "RealKeyFetcher"]
