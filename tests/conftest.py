"""Pytest configuration and fixtures for BoosterGen tests."""

import itertools
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from boostergen.classes import BoosterCardObject, ReleaseObject
from boostergen.consts.colors import COLORS
from boostergen.consts.rarities import Rarity
from boostergen.errors import NoCardFound, NoCards
from boostergen.providers.abstract import CardSource

_NUMBERS = itertools.count(1)


def make_card(
    name: str,
    rarity: Rarity = Rarity.COMMON,
    colors: Sequence[str] = ("W",),
    set_code: str = "tst",
    collector_number: Optional[str] = None,
    **kwargs,
) -> BoosterCardObject:
    """Build a card printing with a unique Scryfall ID."""
    number = next(_NUMBERS)
    kwargs.setdefault("oracle_id", f"oracle-{name}")
    kwargs.setdefault("type_line", "Creature — Test")
    return BoosterCardObject(
        scryfall_id=f"{set_code}-{number}",
        name=name,
        rarity=rarity,
        set_code=set_code,
        collector_number=collector_number or str(number),
        colors=list(colors),
        **kwargs,
    )


def make_basic_land(name: str, set_code: str = "tst", **kwargs) -> BoosterCardObject:
    kwargs.setdefault("type_line", f"Basic Land — {name}")
    return make_card(name, Rarity.COMMON, (), set_code, **kwargs)


def make_token(name: str, set_code: str = "ttst", **kwargs) -> BoosterCardObject:
    kwargs.setdefault("type_line", f"Token Creature — {name}")
    kwargs.setdefault("layout", "token")
    kwargs.setdefault("is_found_in_boosters", False)
    return make_card(name, Rarity.COMMON, kwargs.pop("colors", ("G",)), set_code, **kwargs)


def make_release_cards(
    set_code: str = "tst",
    counts: Tuple[int, int, int, int] = (12, 4, 3, 1),
    basic_lands: bool = True,
) -> List[BoosterCardObject]:
    """
    A five color release: per color the given number of commons,
    uncommons, rares and mythics, plus one printing of each basic land.
    """
    cards: List[BoosterCardObject] = []
    for color in COLORS:
        for rarity, count in zip(Rarity, counts):
            for index in range(count):
                cards.append(
                    make_card(
                        f"{color} {rarity.value.title()} {index}", rarity, (color,), set_code
                    )
                )
    if basic_lands:
        for name in ("Plains", "Island", "Swamp", "Mountain", "Forest"):
            cards.append(make_basic_land(name, set_code))
    return cards


def names_of(cards: Iterable[BoosterCardObject]) -> List[str]:
    return [card.name for card in cards]


class FakeCardSource(CardSource):
    """In-memory card data source."""

    def __init__(self) -> None:
        self.releases: Dict[str, ReleaseObject] = {}
        self.release_cards: Dict[str, List[BoosterCardObject]] = {}
        self.search_results: Dict[str, List[BoosterCardObject]] = {}
        self.cards_by_id: Dict[str, BoosterCardObject] = {}
        self.searches: List[str] = []
        self.collection_calls: List[List[Dict[str, str]]] = []

    def add_release(
        self, release: ReleaseObject, cards: List[BoosterCardObject]
    ) -> None:
        self.releases[release.code] = release
        self.add_cards(release.code, cards)

    def add_cards(self, release_code: str, cards: List[BoosterCardObject]) -> None:
        self.release_cards[release_code] = cards
        for card in cards:
            self.cards_by_id[card.scryfall_id] = card

    def get_release(self, release_code: str) -> ReleaseObject:
        if release_code.lower() not in self.releases:
            raise NoCards(f"No release {release_code}")
        return self.releases[release_code.lower()]

    def cards_in_release(self, release_code: str) -> List[BoosterCardObject]:
        if release_code.lower() not in self.release_cards:
            raise NoCards(f"No release {release_code}")
        return list(self.release_cards[release_code.lower()])

    def search(self, query: str, unique_prints: bool = False) -> List[BoosterCardObject]:
        self.searches.append(query)
        return list(self.search_results.get(query, []))

    def named_fuzzy(self, name: str) -> BoosterCardObject:
        return self.named_exact(name)

    def named_exact(self, name: str) -> BoosterCardObject:
        for card in self.cards_by_id.values():
            if card.name == name:
                return card
        raise NoCardFound(name)

    def card_by_number(self, release_code: str, collector_number: str) -> BoosterCardObject:
        for card in self.release_cards.get(release_code.lower(), []):
            if card.collector_number == collector_number:
                return card
        raise NoCardFound(f"{release_code} #{collector_number}")

    def card_by_id(self, scryfall_id: str) -> BoosterCardObject:
        if scryfall_id not in self.cards_by_id:
            raise NoCardFound(scryfall_id)
        return self.cards_by_id[scryfall_id]

    def _find(self, identifier: Dict[str, str]) -> Optional[BoosterCardObject]:
        for card in self.cards_by_id.values():
            if "id" in identifier and card.scryfall_id != identifier["id"]:
                continue
            if "name" in identifier and card.name.lower() != identifier["name"].lower():
                continue
            if "set" in identifier and card.set_code != identifier["set"].lower():
                continue
            if (
                "collector_number" in identifier
                and card.collector_number != identifier["collector_number"]
            ):
                continue
            return card
        return None

    def collection(
        self, identifiers: List[Dict[str, str]]
    ) -> Tuple[List[BoosterCardObject], List[Dict[str, str]]]:
        self.collection_calls.append(list(identifiers))
        found, not_found = [], []
        for identifier in identifiers:
            card = self._find(identifier)
            if card is None:
                not_found.append(identifier)
            else:
                found.append(card)
        return found, not_found


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so failures reproduce."""
    return random.Random(1234)


@pytest.fixture
def release_cards() -> List[BoosterCardObject]:
    return make_release_cards()


@pytest.fixture
def fake_source() -> FakeCardSource:
    return FakeCardSource()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Make sure each test gets fresh singletons."""
    from boostergen.config import BoostergenConfig
    from boostergen.providers.scryfall import ScryfallProvider

    BoostergenConfig._instance = None
    ScryfallProvider._instance = None
    yield
    BoostergenConfig._instance = None
    ScryfallProvider._instance = None
