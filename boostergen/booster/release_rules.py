"""
Release keyed rule table for diverting cards into slot categories.

Each entry is a small record of slot overrides. Releases without an
entry use DEFAULT_RULE, so a new release only needs a row here when it
deviates from the baseline.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Callable, Dict, Final, FrozenSet, Optional, Tuple

from ..classes import BoosterCardObject
from ..consts.layouts import DOUBLE_FACED_SLOT_LAYOUTS

CardPredicate = Callable[[BoosterCardObject], bool]


class LandSlotKind(enum.Enum):
    """Where the basic land slot gets its cards."""

    BASICS = "basics"  # the release's own basic lands
    BASICS_AND_GAIN_LANDS = "basicsAndGainLands"
    FULL_ART_BASICS = "fullArtBasics"
    MATCHING = "matching"  # the release's own cards matching a predicate
    QUERY = "query"  # supplemental cards from a search query
    NONE = "none"  # no land slot at all


class BasicLandKind(enum.Enum):
    """Where land packs get their basic lands."""

    DEFAULT = "default"
    QUERY = "query"
    OUTSIDE_BOOSTERS = "outsideBoosters"
    IN_BOOSTERS = "inBoosters"
    SLOT_WITHOUT_WASTES = "slotWithoutWastes"
    FULL_ART_SLOT = "fullArtSlot"


@dataclasses.dataclass(frozen=True)
class LandSlotRule:
    kind: LandSlotKind = LandSlotKind.BASICS
    query: Optional[str] = None
    unique_prints: bool = False
    predicate: Optional[CardPredicate] = None
    # Also keep the release's own typed basic lands (in addition to the query)
    with_local_typed_basics: bool = False
    # Land slot only filled when basic lands were requested
    requires_basic_lands: bool = True


@dataclasses.dataclass(frozen=True)
class ExtraCardsRule:
    """Cards added to the main pool from outside the release."""

    query: Optional[str] = None
    release_code: Optional[str] = None
    special_option: Optional[str] = None
    mark_found_in_boosters: bool = False


@dataclasses.dataclass(frozen=True)
class MasterpieceRule:
    release_code: str
    first_number: int
    last_number: int


@dataclasses.dataclass(frozen=True)
class ReleaseRule:
    land_slot: LandSlotRule = LandSlotRule()
    basic_lands: BasicLandKind = BasicLandKind.DEFAULT
    basic_land_query: Optional[str] = None
    extra_cards: Tuple[ExtraCardsRule, ...] = ()
    # Collector numbers dropped from the main pool unless a special option is set
    excluded_numbers: FrozenSet[str] = frozenset()
    keep_excluded_option: Optional[str] = None
    # Showcase printings only open in boosters when a regular printing does
    showcase_follows_regular: bool = False
    custom_slot: Optional[CardPredicate] = None
    masterpieces: Optional[MasterpieceRule] = None


HIGH_RES_BASIC_LAND_QUERY: Final[str] = "type:'basic land —' is:highres"


def is_gate(card: BoosterCardObject) -> bool:
    return "gate" in card.type_line.lower()


def has_conspiracy_watermark(card: BoosterCardObject) -> bool:
    return card.watermark == "conspiracy"


def is_gain_land(card: BoosterCardObject) -> bool:
    return (
        card.is_land
        and "enters the battlefield tapped" in card.oracle_text
        and "gain 1 life" in card.oracle_text
    )


def is_double_faced(card: BoosterCardObject) -> bool:
    return card.layout in DOUBLE_FACED_SLOT_LAYOUTS


def is_planeswalker(card: BoosterCardObject) -> bool:
    return card.is_planeswalker


def is_power_nine(card: BoosterCardObject) -> bool:
    return 1 <= card.collector_number_value <= 9


def borrowed_basics(release_code: str) -> LandSlotRule:
    return LandSlotRule(
        kind=LandSlotKind.QUERY,
        query=f"set:{release_code} type:'basic land'",
        unique_prints=True,
    )


DEFAULT_RULE: Final[ReleaseRule] = ReleaseRule()
NO_LAND_SLOT: Final[ReleaseRule] = ReleaseRule(
    land_slot=LandSlotRule(kind=LandSlotKind.NONE)
)

DOUBLE_FACED_RULE: Final[ReleaseRule] = ReleaseRule(custom_slot=is_double_faced)

RELEASE_RULES: Final[Dict[str, ReleaseRule]] = {
    "grn": ReleaseRule(
        land_slot=LandSlotRule(kind=LandSlotKind.MATCHING, predicate=is_gate, requires_basic_lands=False)
    ),
    "rna": ReleaseRule(
        land_slot=LandSlotRule(kind=LandSlotKind.MATCHING, predicate=is_gate, requires_basic_lands=False)
    ),
    "dgm": ReleaseRule(
        land_slot=LandSlotRule(
            kind=LandSlotKind.QUERY,
            query="(set:rtr or set:gtc) type:land -type:basic",
        ),
        basic_lands=BasicLandKind.QUERY,
        basic_land_query="(set:rtr or set:gtc) type:land type:basic",
        extra_cards=(ExtraCardsRule(query="(set:rtr or set:gtc) type:land oracle:'pay 2 life'"),),
    ),
    "frf": ReleaseRule(
        land_slot=LandSlotRule(
            kind=LandSlotKind.QUERY,
            query="((set:ktk oracle:'search your library') or (set:frf oracle:'gain 1 life')) type:land",
        )
    ),
    "cns": ReleaseRule(
        land_slot=LandSlotRule(
            kind=LandSlotKind.MATCHING, predicate=has_conspiracy_watermark, requires_basic_lands=False
        )
    ),
    "cn2": ReleaseRule(
        land_slot=LandSlotRule(
            kind=LandSlotKind.MATCHING, predicate=has_conspiracy_watermark, requires_basic_lands=False
        )
    ),
    "tsp": ReleaseRule(
        land_slot=LandSlotRule(kind=LandSlotKind.QUERY, query="is:timeshifted", requires_basic_lands=False),
        basic_lands=BasicLandKind.IN_BOOSTERS,
    ),
    "emn": ReleaseRule(land_slot=borrowed_basics("soi"), custom_slot=is_double_faced),
    "aer": ReleaseRule(
        land_slot=borrowed_basics("kld"),
        masterpieces=MasterpieceRule("mps", 31, 54),
    ),
    "ogw": ReleaseRule(
        land_slot=LandSlotRule(
            kind=LandSlotKind.QUERY,
            query="set:bfz type:'basic land'",
            unique_prints=True,
            with_local_typed_basics=True,
        ),
        basic_lands=BasicLandKind.SLOT_WITHOUT_WASTES,
        masterpieces=MasterpieceRule("exp", 26, 45),
    ),
    "bng": ReleaseRule(land_slot=borrowed_basics("ths")),
    "jou": ReleaseRule(land_slot=borrowed_basics("ths")),
    "gtc": ReleaseRule(land_slot=borrowed_basics("rtr")),
    "dka": ReleaseRule(land_slot=borrowed_basics("isd"), custom_slot=is_double_faced),
    "wwk": ReleaseRule(land_slot=borrowed_basics("zen")),
    "arb": ReleaseRule(land_slot=borrowed_basics("ala")),
    "con": ReleaseRule(land_slot=borrowed_basics("ala")),
    "akr": ReleaseRule(land_slot=borrowed_basics("akh,hou")),
    "iko": ReleaseRule(
        land_slot=LandSlotRule(kind=LandSlotKind.BASICS_AND_GAIN_LANDS),
        extra_cards=(
            ExtraCardsRule(
                query="set:c20 o:'partner with'",
                special_option="c20partners",
                mark_found_in_boosters=True,
            ),
        ),
        excluded_numbers=frozenset([str(number) for number in range(364, 388)] + ["373A"]),
        keep_excluded_option="godzilla",
    ),
    "m21": ReleaseRule(land_slot=LandSlotRule(kind=LandSlotKind.BASICS_AND_GAIN_LANDS)),
    "znr": ReleaseRule(
        land_slot=LandSlotRule(kind=LandSlotKind.FULL_ART_BASICS),
        basic_lands=BasicLandKind.FULL_ART_SLOT,
        showcase_follows_regular=True,
    ),
    "thb": ReleaseRule(basic_lands=BasicLandKind.OUTSIDE_BOOSTERS),
    "cmb1": ReleaseRule(extra_cards=(ExtraCardsRule(release_code="mb1"),)),
    "fmb1": ReleaseRule(extra_cards=(ExtraCardsRule(release_code="mb1"),)),
    "mb1": ReleaseRule(extra_cards=(ExtraCardsRule(release_code="fmb1"),)),
    "isd": DOUBLE_FACED_RULE,
    "soi": DOUBLE_FACED_RULE,
    "war": ReleaseRule(custom_slot=is_planeswalker),
    "vma": ReleaseRule(custom_slot=is_power_nine),
    "bfz": ReleaseRule(masterpieces=MasterpieceRule("exp", 1, 25)),
    "kld": ReleaseRule(masterpieces=MasterpieceRule("mps", 1, 30)),
    "akh": ReleaseRule(masterpieces=MasterpieceRule("mp2", 1, 30)),
    "hou": ReleaseRule(masterpieces=MasterpieceRule("mp2", 31, 54)),
}

# Releases printed before the dedicated basic land slot (or without one)
for _release_code in (
    "mir vis 5ed por wth tmp sth exo p02 usg ulg 6ed ptk uds mmq nem pcy inv pls "
    "7ed csp dis gpt rav 9ed lrw mor shm eve apc ody tor jud ons lgn scg mrd dst "
    "5dn chk bok sok plc 2xm"
).split():
    RELEASE_RULES[_release_code] = NO_LAND_SLOT


def rule_for(release_code: str) -> ReleaseRule:
    """
    Find the rule row for a release
    :param release_code: Release to look up
    :return: Rule row, or the default rule
    """
    return RELEASE_RULES.get(release_code.lower(), DEFAULT_RULE)
