"""
Scryfall 3rd party provider
"""
import logging
import random
from typing import Any, Dict, List, Optional, Tuple, Union

import pydantic
import ratelimit
from singleton_decorator import singleton

from .. import constants
from ..classes import BoosterCardObject, ReleaseObject
from ..config import BoostergenConfig
from ..errors import NoCardFound, NoCards
from ..parallel_call import parallel_call
from ..utils import chunked
from .abstract import AbstractProvider, CardSource
from .scryfall_models import CardListResponse, CardRecord, CollectionResponse, SetRecord

LOGGER = logging.getLogger(__name__)


@singleton
class ScryfallProvider(AbstractProvider, CardSource):
    """
    Scryfall container
    """

    ALL_SETS_URL: str = "https://api.scryfall.com/sets"
    SET_URL: str = "https://api.scryfall.com/sets/{0}"
    CARDS_URL: str = "https://api.scryfall.com/cards/{0}"
    CARD_BY_NUMBER_URL: str = "https://api.scryfall.com/cards/{0}/{1}"
    NAMED_URL: str = "https://api.scryfall.com/cards/named"
    RANDOM_URL: str = "https://api.scryfall.com/cards/random"
    SEARCH_URL: str = "https://api.scryfall.com/cards/search"
    COLLECTION_URL: str = "https://api.scryfall.com/cards/collection"

    def __init__(self) -> None:
        super().__init__(self._build_http_header())

    def _build_http_header(self) -> Dict[str, str]:
        """
        Construct the Authorization header for Scryfall
        :return: Authorization header
        """
        config = BoostergenConfig()
        if not config.has_section("Scryfall"):
            LOGGER.warning(
                "Scryfall section not established. Defaulting to non-authorized mode"
            )
            return {}

        client_secret = config.get("Scryfall", "client_secret")
        if not client_secret:
            LOGGER.debug("Scryfall client_secret missing. Defaulting to non-authorized mode")
            return {}

        return {
            "Authorization": f"Bearer {client_secret}",
            "Connection": "Keep-Alive",
        }

    @ratelimit.sleep_and_retry
    @ratelimit.limits(calls=10, period=1)
    def download(
        self, url: str, params: Optional[Dict[str, Union[str, int]]] = None
    ) -> Any:
        """
        Download content from Scryfall
        Api calls always return JSON from Scryfall
        :param url: URL to download from
        :param params: Options for URL download
        """
        response = self.session.get(url, params=params)
        self.log_download(response)
        try:
            return response.json()
        except ValueError as error:
            LOGGER.error(
                f'Unable to convert response: "{response.text}" to JSON for URL: {url} -> {error}'
            )
            return {"object": "error", "status": response.status_code, "details": response.text}

    @ratelimit.sleep_and_retry
    @ratelimit.limits(calls=10, period=1)
    def upload(self, url: str, payload: Dict[str, Any]) -> Any:
        """
        POST a JSON payload to Scryfall
        :param url: URL to post to
        :param payload: JSON body
        """
        response = self.session.post(url, json=payload)
        self.log_download(response)
        try:
            return response.json()
        except ValueError as error:
            LOGGER.error(f"Unable to convert response from {url} to JSON -> {error}")
            return {"object": "error", "status": response.status_code, "details": response.text}

    def download_all_pages(
        self, url: Optional[str], params: Optional[Dict[str, Union[str, int]]] = None
    ) -> List[BoosterCardObject]:
        """
        Follow a paged card list until it runs out
        :param url: First page URL
        :param params: Options for the first page
        :return: All cards from every page
        """
        cards: List[BoosterCardObject] = []
        page_downloaded = 1
        while url:
            LOGGER.debug(f"Downloading page {page_downloaded} of {url}")
            page_downloaded += 1

            page_json: Dict[str, Any] = self.download(url, params)
            if page_json.get("object") == "error":
                if page_json.get("status") != 404:
                    LOGGER.warning(f"Error downloading {url}: {page_json.get('details')}")
                break

            page = CardListResponse.model_validate(page_json)
            cards.extend(record.to_card_object() for record in page.data)

            if not page.has_more:
                break

            # next_page already carries the query string
            url = page.next_page
            params = None

        return cards

    def get_release(self, release_code: str) -> ReleaseObject:
        return self._download_set(release_code).to_release_object()

    def _download_set(self, release_code: str) -> SetRecord:
        set_json: Dict[str, Any] = self.download(self.SET_URL.format(release_code.lower()))
        if set_json.get("object") == "error":
            LOGGER.info(f"Downloading {release_code} failed -- {set_json.get('details')}")
            raise NoCards(f"No release found for {release_code}")
        return SetRecord.model_validate(set_json)

    def cards_in_release(self, release_code: str) -> List[BoosterCardObject]:
        """
        Connects to Scryfall API and goes through all redirects to get the
        card data from their several pages via multiple API calls.
        :param release_code: Set to download (Ex: AER, M19)
        :return: List of all card objects
        """
        LOGGER.info(f"Downloading {release_code} cards")
        set_record = self._download_set(release_code)
        cards = self.download_all_pages(set_record.search_uri)
        LOGGER.info(f"Downloaded {len(cards)} cards for {release_code}")
        return cards

    def search(self, query: str, unique_prints: bool = False) -> List[BoosterCardObject]:
        LOGGER.debug(f"Searching Scryfall for {query}")
        return self.download_all_pages(
            self.SEARCH_URL,
            {"q": query, "unique": "prints" if unique_prints else "cards"},
        )

    def _single_card(
        self, url: str, identifier: str, params: Optional[Dict[str, Union[str, int]]] = None
    ) -> BoosterCardObject:
        card_json: Dict[str, Any] = self.download(url, params)
        if card_json.get("object") == "error":
            raise NoCardFound(identifier)
        return CardRecord.model_validate(card_json).to_card_object()

    def named_fuzzy(self, name: str) -> BoosterCardObject:
        return self._single_card(self.NAMED_URL, name, {"fuzzy": name})

    def named_exact(self, name: str) -> BoosterCardObject:
        return self._single_card(self.NAMED_URL, name, {"exact": name})

    def card_by_number(self, release_code: str, collector_number: str) -> BoosterCardObject:
        return self._single_card(
            self.CARD_BY_NUMBER_URL.format(release_code.lower(), collector_number),
            f"{release_code.upper()} #{collector_number}",
        )

    def card_by_id(self, scryfall_id: str) -> BoosterCardObject:
        return self._single_card(self.CARDS_URL.format(scryfall_id), scryfall_id)

    def random_card(self) -> BoosterCardObject:
        return self._single_card(self.RANDOM_URL, "random card")

    def random_search_result(
        self, query: str, rng: Optional[random.Random] = None
    ) -> BoosterCardObject:
        """
        One random card among those matching a query
        :param query: Search query string
        :param rng: Random source
        :return: Matching card
        """
        cards = self.search(query)
        if not cards:
            raise NoCards(f"No cards match {query}")
        return (rng or random.Random()).choice(cards)

    def _collection_chunk(
        self, identifiers: List[Dict[str, str]]
    ) -> List[Tuple[List[BoosterCardObject], List[Dict[str, str]]]]:
        response_json = self.upload(self.COLLECTION_URL, {"identifiers": identifiers})
        if response_json.get("object") == "error":
            LOGGER.error(f"Scryfall collection lookup failed: {response_json.get('details')}")
            return [([], identifiers)]
        try:
            response = CollectionResponse.model_validate(response_json)
        except pydantic.ValidationError as error:
            LOGGER.error(f"Unexpected collection payload from Scryfall: {error}")
            return [([], identifiers)]
        return [([record.to_card_object() for record in response.data], response.not_found)]

    def collection(
        self, identifiers: List[Dict[str, str]]
    ) -> Tuple[List[BoosterCardObject], List[Dict[str, str]]]:
        """
        Look up a batch of identifiers, chunked to Scryfall's limit
        :param identifiers: Identifier dictionaries
        :return: Found cards, and identifiers that matched nothing
        """
        results = parallel_call(
            self._collection_chunk,
            list(chunked(identifiers, constants.COLLECTION_CHUNK_SIZE)),
            fold_list=True,
        )

        found: List[BoosterCardObject] = []
        not_found: List[Dict[str, str]] = []
        for chunk_found, chunk_not_found in results:
            found.extend(chunk_found)
            not_found.extend(chunk_not_found)
        return found, not_found

    def get_booster_releases(self) -> List[ReleaseObject]:
        """
        Every release that can be opened as booster packs
        :return: Releases, in Scryfall order
        """
        sets_json: Dict[str, Any] = self.download(self.ALL_SETS_URL)
        if sets_json.get("object") == "error":
            LOGGER.error(f"Unable to list Scryfall sets: {sets_json.get('details')}")
            return []

        releases: List[ReleaseObject] = []
        for set_json in sets_json.get("data", []):
            record = SetRecord.model_validate(set_json)
            if record.set_type not in constants.BOOSTER_SET_TYPES:
                continue
            if record.code in constants.EXCLUDED_BOOSTER_SETS:
                continue
            # Time Spiral Remastered is listed before its full card list is published
            if record.code == "tsr" and record.card_count < 390:
                continue

            release = record.to_release_object()
            if release.code == "mb1":
                release.code = "cmb1"
                release.name = "Mystery Booster (Convention Edition)"
            elif release.code == "fmb1":
                release.name = "Mystery Booster (Retail Edition)"
            releases.append(release)

        return releases
