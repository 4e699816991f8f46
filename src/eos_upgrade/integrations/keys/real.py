"""Production key download using requests."""

import logging

import requests

from eos_upgrade.integrations.keys.abc import KeyFetcher

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 30


class RealKeyFetcher(KeyFetcher):
    def fetch(self, url: str) -> bytes:
        logger.debug("Fetching key %s", url)
        try:
            response = requests.get(url, timeout=FETCH_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RuntimeError(f"Failed to download {url}: {e}") from e
        return response.content
