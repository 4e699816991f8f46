"""Fake key downloads for testing."""

from eos_upgrade.integrations.keys import KeyFetcher


class FakeKeyFetcher(KeyFetcher):
    """Returns canned key data without touching the network.

    Unknown URLs return b"key:" + url so every download is distinguishable.
    """

    def __init__(self, *, keys: dict[str, bytes] | None = None, offline: bool = False) -> None:
        self._keys = keys if keys is not None else {}
        self._offline = offline
        self.fetched: list[str] = []

    def fetch(self, url: str) -> bytes:
        if self._offline:
            raise RuntimeError(f"Failed to download {url}: network unreachable")
        self.fetched.append(url)
        return self._keys.get(url, f"key:{url}".encode())
