"""Process and machine facts interface."""

from abc import ABC, abstractmethod


class Host(ABC):
    @abstractmethod
    def is_superuser(self) -> bool:
        """Return True when running with root privileges."""
        ...

    @abstractmethod
    def machine(self) -> str:
        """Return the machine architecture as reported by uname (e.g. x86_64)."""
        ...
