"""
BoosterGen Singular Card Object
"""
import copy
from typing import Any, Iterable, List, Optional

from ..consts.layouts import TOKEN_LAYOUTS, LayoutVariant
from ..consts.rarities import Rarity
from .json_object import JsonObject


class RelatedCardObject(JsonObject):
    """
    Link from one card to another (tokens, meld pieces, combo pieces)
    """

    scryfall_id: str
    component: str
    name: str
    type_line: str

    def __init__(
        self, scryfall_id: str, component: str, name: str = "", type_line: str = ""
    ) -> None:
        self.scryfall_id = scryfall_id
        self.component = component
        self.name = name
        self.type_line = type_line

    def __repr__(self) -> str:
        return f"RelatedCardObject({self.component}: {self.name})"


class BoosterCardObject(JsonObject):
    """
    BoosterGen Singular Card Object

    Cards are treated as read-only once fetched. Use with_overrides()
    to derive a copy that differs in a superficial field.
    """

    scryfall_id: str
    oracle_id: Optional[str]
    name: str
    rarity: Rarity
    colors: List[str]
    face_colors: List[str]
    type_line: str
    oracle_text: str
    power: Optional[str]
    toughness: Optional[str]
    layout: str
    frame: str
    frame_effects: List[str]
    border_color: str
    is_full_art: bool
    has_foil: bool
    has_non_foil: bool
    is_found_in_boosters: bool
    is_promo: bool
    language: str
    set_code: str
    collector_number: str
    watermark: Optional[str]
    release_date: Optional[str]
    all_parts: List[RelatedCardObject]

    def __init__(
        self,
        scryfall_id: str,
        name: str,
        rarity: Rarity = Rarity.COMMON,
        set_code: str = "",
        collector_number: str = "",
        **kwargs: Any,
    ) -> None:
        self.scryfall_id = scryfall_id
        self.name = name
        self.rarity = rarity
        self.set_code = set_code.lower()
        self.collector_number = collector_number
        self.oracle_id = kwargs.get("oracle_id")
        self.colors = list(kwargs.get("colors", []))
        self.face_colors = list(kwargs.get("face_colors", []))
        self.type_line = kwargs.get("type_line", "")
        self.oracle_text = kwargs.get("oracle_text", "")
        self.power = kwargs.get("power")
        self.toughness = kwargs.get("toughness")
        self.layout = kwargs.get("layout", "normal")
        self.frame = kwargs.get("frame", "2015")
        self.frame_effects = list(kwargs.get("frame_effects", []))
        self.border_color = kwargs.get("border_color", "black")
        self.is_full_art = kwargs.get("is_full_art", False)
        self.has_foil = kwargs.get("has_foil", True)
        self.has_non_foil = kwargs.get("has_non_foil", True)
        self.is_found_in_boosters = kwargs.get("is_found_in_boosters", True)
        self.is_promo = kwargs.get("is_promo", False)
        self.language = kwargs.get("language", "en")
        self.watermark = kwargs.get("watermark")
        self.release_date = kwargs.get("release_date")
        self.all_parts = list(kwargs.get("all_parts", []))

    def __eq__(self, other: Any) -> bool:
        """
        Two card objects are the same printing if they share a Scryfall ID
        :param other: Other card
        :return: Same printing or not
        """
        if not isinstance(other, BoosterCardObject):
            return NotImplemented
        return self.scryfall_id == other.scryfall_id

    def __hash__(self) -> int:
        return hash(self.scryfall_id)

    def __repr__(self) -> str:
        return f"BoosterCardObject({self.name} [{self.set_code} #{self.collector_number}] {self.rarity.value})"

    def with_overrides(self, **overrides: Any) -> "BoosterCardObject":
        """
        Copy this card, replacing superficial fields
        :param overrides: Field names and their new values
        :return: New card object
        """
        card = copy.copy(self)
        for key, value in overrides.items():
            if not hasattr(card, key):
                raise AttributeError(f"BoosterCardObject has no field {key}")
            setattr(card, key, value)
        return card

    @property
    def is_showcase(self) -> bool:
        return "showcase" in self.frame_effects

    @property
    def is_extended_art(self) -> bool:
        return "extendedart" in self.frame_effects

    @property
    def is_etched(self) -> bool:
        return "etched" in self.frame_effects

    @property
    def is_colorshifted(self) -> bool:
        return "colorshifted" in self.frame_effects

    @property
    def is_borderless(self) -> bool:
        return self.border_color == "borderless"

    @property
    def is_foil_available(self) -> bool:
        return self.has_foil

    @property
    def is_basic_land(self) -> bool:
        return "Basic" in self.type_line and "Land" in self.type_line

    @property
    def is_land(self) -> bool:
        return "land" in self.type_line.lower()

    @property
    def is_planeswalker(self) -> bool:
        return "planeswalker" in self.type_line.lower()

    @property
    def is_legendary_creature(self) -> bool:
        type_line = self.type_line.lower()
        return "legendary" in type_line and "creature" in type_line

    @property
    def is_token_or_emblem(self) -> bool:
        """Token and emblem printings, by type line or by layout"""
        type_line = self.type_line.lower()
        return (
            "token" in type_line
            or "emblem" in type_line
            or self.layout in TOKEN_LAYOUTS
        )

    @property
    def has_partner(self) -> bool:
        return "partner with" in self.oracle_text.lower()

    @property
    def collector_number_value(self) -> int:
        """Integer collector number, or 0 when it is not purely numeric"""
        try:
            return int(self.collector_number)
        except ValueError:
            return 0

    def all_colors(self) -> List[str]:
        """Colors of the card and of each of its faces"""
        return sorted(set(self.colors) | set(self.face_colors))

    def partner_from(
        self, cards: Iterable["BoosterCardObject"]
    ) -> Optional["BoosterCardObject"]:
        """
        Find this card's specifically linked "partner with" card
        :param cards: Cards to search
        :return: Linked partner, if present among the cards
        """
        if not self.has_partner:
            return None

        part = next(
            (part for part in self.all_parts if part.component == "combo_piece"),
            None,
        )
        if part is None:
            return None

        return next((card for card in cards if card.scryfall_id == part.scryfall_id), None)

    def meld_result_part(self) -> Optional[RelatedCardObject]:
        """
        The meld result this card melds into, if any
        :return: Related meld result link
        """
        return next(
            (
                part
                for part in self.all_parts
                if part.component == "meld_result"
                and part.scryfall_id != self.scryfall_id
            ),
            None,
        )

    def is_meld_result(self) -> bool:
        """
        Is this card the back half of a meld pair
        :return: Card is a meld result
        """
        return self.layout == LayoutVariant.MELD.value and any(
            part.component == "meld_result" and part.scryfall_id == self.scryfall_id
            for part in self.all_parts
        )

    def build_keys_to_skip(self) -> List[str]:
        keys_to_skip = []
        if not self.all_parts:
            keys_to_skip.append("all_parts")
        if not self.face_colors:
            keys_to_skip.append("face_colors")
        return keys_to_skip

    def to_json(self) -> Any:
        parent = super().to_json()
        parent["rarity"] = self.rarity.value
        if "allParts" in parent:
            parent["allParts"] = [part.to_json() for part in self.all_parts]
        return parent
