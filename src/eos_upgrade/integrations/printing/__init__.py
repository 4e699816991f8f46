from eos_upgrade.integrations.printing.abc import PrintSystem
from eos_upgrade.integrations.printing.real import RealPrintSystem

__all__ = ["PrintSystem", "RealPrintSystem"]
