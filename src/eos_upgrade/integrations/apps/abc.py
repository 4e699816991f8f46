"""Legacy (EOS 2 app manager) application operations interface."""

from abc import ABC, abstractmethod


class LegacyApps(ABC):
    """Abstract interface over the EOS 2 app manager."""

    @abstractmethod
    def list_apps(self) -> list[str]:
        """Return the IDs of every installed legacy app."""
        ...

    @abstractmethod
    def uninstall(self, app_id: str) -> None:
        """Uninstall one legacy app.

        Raises:
            RuntimeError: If the app manager reports a failure
        """
        ...
