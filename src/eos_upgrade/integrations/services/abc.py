"""systemd unit control interface."""

from abc import ABC, abstractmethod


class Services(ABC):
    """Abstract interface for starting and stopping system units."""

    @abstractmethod
    def stop(self, units: list[str]) -> None:
        """Stop the given units (services or timers)."""
        ...

    @abstractmethod
    def restart(self, unit: str) -> None:
        """Restart one unit."""
        ...
