"""
Memoized "does this asset URL exist" probe
"""
import logging
import threading
from typing import Dict, Optional, Union

import requests
import requests_cache

from ..config import BoostergenConfig
from ..retryable_session import retryable_session

LOGGER = logging.getLogger(__name__)


class AssetExistenceCache:
    """
    Read-through cache of HEAD probes, safe to share across threads.
    Only the lookup table is locked; probes run outside the lock.
    """

    _lock: threading.Lock
    _known: Dict[str, bool]
    session: Union[requests.Session, requests_cache.CachedSession]
    timeout: float

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._known = {}
        self.session = session or retryable_session("AssetExistenceCache", retries=1)
        self.timeout = timeout if timeout is not None else BoostergenConfig().asset_probe_timeout

    def __len__(self) -> int:
        with self._lock:
            return len(self._known)

    def exists(self, url: str) -> bool:
        """
        Does the URL resolve to something (HTTP 200)
        :param url: URL to probe
        :return: URL exists
        """
        with self._lock:
            known = self._known.get(url)
        if known is not None:
            return known

        result = self._probe(url)
        with self._lock:
            self._known.setdefault(url, result)
            return self._known[url]

    def _probe(self, url: str) -> bool:
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as error:
            LOGGER.debug(f"Asset probe for {url} failed: {error}")
            return False
        return response.status_code == 200

    def resolve(self, url: str, fallback: str) -> str:
        """
        Use url when it exists, otherwise fallback
        :param url: Preferred URL
        :param fallback: URL to use when the preferred one is missing
        :return: URL to use
        """
        if self.exists(url):
            return url
        LOGGER.info(f"No asset at {url}, using {fallback}")
        return fallback

    def texture_url(self, kind: str, release_code: str) -> Optional[str]:
        """
        Texture for a release (pack art, prerelease box, spindown die),
        falling back to the default texture of that kind
        :param kind: Texture folder (Ex: pack, prerelease, spindowns)
        :param release_code: Release to find a texture for
        :return: Texture URL, or None when no asset host is configured
        """
        base_url = BoostergenConfig().get("Assets", "base_url").rstrip("/")
        if not base_url:
            return None
        return self.resolve(
            f"{base_url}/{kind}/{release_code.lower()}.jpg",
            f"{base_url}/{kind}/default.jpg",
        )
