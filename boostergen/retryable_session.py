"""
Retryable Session to talk to card data services
"""
import datetime
import functools
from typing import Union

import requests
import requests.adapters
import requests_cache
import urllib3

from . import constants
from .config import BoostergenConfig

RETRY_STATUS_CODES = (429, 500, 502, 504)


def retryable_session(
    cache_name: str,
    retries: int = 8,
    timeout: float = 5,
) -> Union[requests.Session, requests_cache.CachedSession]:
    """
    Session that re-attempts failed requests, optionally backed by an
    on-disk cache shared by everything using the same cache_name
    :param cache_name: Cache to use when caching is enabled (Ex: ScryfallProvider)
    :param retries: How many retries to attempt
    :param timeout: Default seconds before a request is abandoned
    :return: Session that does the downloading
    """
    config = BoostergenConfig()
    session: Union[requests.Session, requests_cache.CachedSession]

    if config.use_cache:
        session = requests_cache.CachedSession(
            cache_name=str(constants.CACHE_PATH.joinpath(cache_name)),
            expire_after=datetime.timedelta(days=1),
            stale_if_error=True,
        )
    else:
        session = requests.Session()

    retry = urllib3.util.retry.Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=0.3,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=None,
        raise_on_status=False,
    )

    adapter = requests.adapters.HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.request = functools.partial(session.request, timeout=timeout)  # type: ignore

    session.headers.update(
        {
            "User-Agent": f"BoosterGen/{config.boostergen_version}",
            "Accept": "application/json",
        }
    )
    return session
