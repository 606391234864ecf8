"""
BoosterGen Booster Pack Object
"""
from typing import Any, Iterable, List, Optional, Set

from .booster_card import BoosterCardObject
from .json_object import JsonObject


class CardSelectionObject(JsonObject):
    """
    One card placed in a pack, and whether it is the foil printing
    """

    card: BoosterCardObject
    is_foil: bool

    def __init__(self, card: BoosterCardObject, is_foil: bool = False) -> None:
        self.card = card
        self.is_foil = is_foil

    def __repr__(self) -> str:
        return f"CardSelectionObject({self.card.name}{' (foil)' if self.is_foil else ''})"


class BoosterPackObject(JsonObject):
    """
    BoosterGen Booster Pack Object

    An ordered list of card selections. Index 0 is the front of the pack.
    """

    name: Optional[str]
    selections: List[CardSelectionObject]

    def __init__(
        self,
        selections: Optional[Iterable[CardSelectionObject]] = None,
        name: Optional[str] = None,
    ) -> None:
        self.name = name
        self.selections = list(selections or [])

    def __len__(self) -> int:
        return len(self.selections)

    def __iter__(self):
        return iter(self.selections)

    def __getitem__(self, index: int) -> BoosterCardObject:
        return self.selections[index].card

    @property
    def cards(self) -> List[BoosterCardObject]:
        return [selection.card for selection in self.selections]

    def insert(self, card: BoosterCardObject, index: int = 0, is_foil: bool = False) -> None:
        self.selections.insert(index, CardSelectionObject(card, is_foil))

    def insert_all(
        self, cards: Iterable[BoosterCardObject], index: int = 0, is_foil: bool = False
    ) -> None:
        self.selections[index:index] = [CardSelectionObject(card, is_foil) for card in cards]

    def append(self, card: BoosterCardObject, is_foil: bool = False) -> None:
        self.selections.append(CardSelectionObject(card, is_foil))

    def append_all(self, cards: Iterable[BoosterCardObject], is_foil: bool = False) -> None:
        self.selections.extend(CardSelectionObject(card, is_foil) for card in cards)

    def replace(self, index: int, card: BoosterCardObject, is_foil: bool = False) -> None:
        self.selections[index] = CardSelectionObject(card, is_foil)

    def reverse(self) -> None:
        self.selections.reverse()

    def clear(self) -> None:
        self.selections.clear()

    def unique_name_count(self) -> int:
        """
        Count distinct card names in the pack
        :return: Unique name count
        """
        return len({card.name for card in self.cards})

    def color_union(self, include_lands: bool = False) -> Set[str]:
        """
        All colors present in the pack
        :param include_lands: Count the colors of land cards too
        :return: Set of color letters
        """
        return {
            color
            for card in self.cards
            if include_lands or not card.is_land
            for color in card.colors
        }

    def to_json(self) -> Any:
        return {
            "name": self.name,
            "cards": [
                {"card": selection.card.to_json(), "isFoil": selection.is_foil}
                for selection in self.selections
            ],
        }
