"""
API for how providers need to interact with other classes
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Dict, List, Optional, Tuple, Union, TYPE_CHECKING

import requests
import requests_cache

from ..config import BoostergenConfig
from ..retryable_session import retryable_session

if TYPE_CHECKING:
    from ..classes import BoosterCardObject, ReleaseObject

LOGGER = logging.getLogger(__name__)


class AbstractProvider(abc.ABC):
    """
    Abstract class to indicate what other providers should provide
    """

    session: Union[requests.Session, requests_cache.CachedSession]

    def __init__(self, headers: Dict[str, str]) -> None:
        super().__init__()
        self.session = retryable_session(self.get_class_name())
        self.session.headers.update(headers)

    # Abstract Methods
    @abc.abstractmethod
    def _build_http_header(self) -> Dict[str, str]:
        """
        Construct the HTTP authorization header
        :return: Authorization header
        """

    @abc.abstractmethod
    def download(
        self, url: str, params: Optional[Dict[str, Union[str, int]]] = None
    ) -> Any:
        """
        Download an object from a service using appropriate authentication protocols
        :param url: URL to download content from
        :param params: Options to give to the GET request
        """

    # Class Methods
    @classmethod
    def get_class_name(cls) -> str:
        """
        Get the name of the provider, which also names its download cache
        :return: Provider class name
        """
        return cls.__name__

    @staticmethod
    def log_download(response: Any) -> None:
        """
        Log how the URL was acquired
        :param response: Response from Server
        """
        from_cache = (
            getattr(response, "from_cache", False)
            if BoostergenConfig().use_cache
            else False
        )
        LOGGER.debug(f"Downloaded {response.url} (Cache = {from_cache})")


class CardSource(abc.ABC):
    """
    Everything the generator needs from a card database.
    The partitioner also uses this contract for supplemental cards
    borrowed from related releases.
    """

    @abc.abstractmethod
    def get_release(self, release_code: str) -> ReleaseObject:
        """
        Release metadata
        :param release_code: Release to look up
        """

    @abc.abstractmethod
    def cards_in_release(self, release_code: str) -> List[BoosterCardObject]:
        """
        Every printing in a release
        :param release_code: Release to download
        """

    @abc.abstractmethod
    def search(self, query: str, unique_prints: bool = False) -> List[BoosterCardObject]:
        """
        Every card matching a search query
        :param query: Search query string
        :param unique_prints: Return each printing rather than each card
        """

    @abc.abstractmethod
    def named_fuzzy(self, name: str) -> BoosterCardObject:
        """
        Best match for an approximate card name
        :param name: Name to look up
        """

    @abc.abstractmethod
    def named_exact(self, name: str) -> BoosterCardObject:
        """
        Card with exactly this name
        :param name: Name to look up
        """

    @abc.abstractmethod
    def card_by_number(self, release_code: str, collector_number: str) -> BoosterCardObject:
        """
        Card at a collector number in a release
        :param release_code: Release to look in
        :param collector_number: Collector number
        """

    @abc.abstractmethod
    def card_by_id(self, scryfall_id: str) -> BoosterCardObject:
        """
        Card with a specific printing ID
        :param scryfall_id: Printing ID
        """

    @abc.abstractmethod
    def collection(
        self, identifiers: List[Dict[str, str]]
    ) -> Tuple[List[BoosterCardObject], List[Dict[str, str]]]:
        """
        Batch lookup of mixed identifiers
        :param identifiers: Identifier dictionaries (id, name, set, collector_number)
        :return: Found cards, and identifiers that matched nothing
        """
