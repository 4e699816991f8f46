from eos_upgrade.integrations.ostree.abc import Deployment, Ostree
from eos_upgrade.integrations.ostree.real import RealOstree

__all__ = ["Deployment", "Ostree", "RealOstree"]
