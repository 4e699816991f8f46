"""Download interface for the signing keys the migration trusts."""

from abc import ABC, abstractmethod


class KeyFetcher(ABC):
    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """Download a public keyring.

        Raises:
            RuntimeError: If the download fails
        """
        ...
