"""Printing subsystem (CUPS) operations interface.

Restarting the CUPS daemon itself goes through the Services integration.
"""

from abc import ABC, abstractmethod


class PrintSystem(ABC):
    """Abstract interface for printer configuration."""

    @abstractmethod
    def list_printers(self) -> list[str]:
        """Return the names of configured printers (empty when there are none)."""
        ...

    @abstractmethod
    def cancel_all_jobs(self) -> None:
        """Cancel every pending and active print job on every printer."""
        ...

    @abstractmethod
    def remove_printer(self, name: str) -> None:
        """Delete a printer's configuration."""
        ...
