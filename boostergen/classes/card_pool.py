"""
BoosterGen Card Pool Object
"""
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from ..consts.colors import COLORS
from ..consts.rarities import Rarity
from .booster_card import BoosterCardObject
from .json_object import JsonObject

RarityMap = Dict[Rarity, List[BoosterCardObject]]


def group_by_rarity(cards: Iterable[BoosterCardObject]) -> RarityMap:
    """
    Group cards into lists keyed by their rarity
    :param cards: Cards to group
    :return: Rarity to cards mapping
    """
    grouped: RarityMap = defaultdict(list)
    for card in cards:
        grouped[card.rarity].append(card)
    return dict(grouped)


def flatten(rarity_map: RarityMap, rarities: Optional[Iterable[Rarity]] = None) -> List[BoosterCardObject]:
    """
    Join a rarity mapping back into one list, in rarity order
    :param rarity_map: Rarity to cards mapping
    :param rarities: Only include these rarities (default: all)
    :return: Cards
    """
    wanted = set(rarities) if rarities is not None else set(Rarity)
    return [
        card
        for rarity in sorted(rarity_map)
        if rarity in wanted
        for card in rarity_map[rarity]
    ]


class CardPoolObject(JsonObject):
    """
    Every slot category for one release, built fresh per generation request
    """

    release_code: str
    rarities: RarityMap
    custom_slot_rarities: RarityMap
    basic_land_slot_cards: List[BoosterCardObject]
    tokens: List[BoosterCardObject]
    meld_results: List[BoosterCardObject]
    showcase_rarities: RarityMap
    extended_art_cards: List[BoosterCardObject]
    masterpieces: List[BoosterCardObject]
    basic_lands: List[BoosterCardObject]

    def __init__(self, release_code: str = "") -> None:
        self.release_code = release_code.lower()
        self.rarities = {}
        self.custom_slot_rarities = {}
        self.basic_land_slot_cards = []
        self.tokens = []
        self.meld_results = []
        self.showcase_rarities = {}
        self.extended_art_cards = []
        self.masterpieces = []
        self.basic_lands = []

    def main_cards(self) -> List[BoosterCardObject]:
        return flatten(self.rarities)

    def spans_all_colors(self) -> bool:
        """
        Do the non-land main cards of this pool cover every primary color
        :return: All 5 colors are present
        """
        present: Set[str] = {
            color for card in self.main_cards() if not card.is_land for color in card.colors
        }
        return present.issuperset(COLORS)

    def membership(self) -> Dict[str, FrozenSet[str]]:
        """
        Order-independent view of which printings sit in which slot category
        :return: Category name to set of Scryfall IDs
        """
        result: Dict[str, FrozenSet[str]] = {}
        for category in ("rarities", "custom_slot_rarities", "showcase_rarities"):
            rarity_map: RarityMap = getattr(self, category)
            for rarity, cards in rarity_map.items():
                result[f"{category}.{rarity.value}"] = frozenset(card.scryfall_id for card in cards)
        for category in (
            "basic_land_slot_cards",
            "tokens",
            "meld_results",
            "extended_art_cards",
            "masterpieces",
            "basic_lands",
        ):
            result[category] = frozenset(card.scryfall_id for card in getattr(self, category))
        return result

    def to_json(self):
        return {
            "releaseCode": self.release_code,
            "membership": {key: sorted(value) for key, value in self.membership().items()},
        }
