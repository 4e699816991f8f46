from eos_upgrade.integrations.disks.abc import Disks
from eos_upgrade.integrations.disks.real import RealDisks

__all__ = ["Disks", "RealDisks"]
