"""
Static policy tables: rule Mode, foil odds and mythic odds per release.
"""

from __future__ import annotations

import dataclasses
import enum
import random
from typing import Dict, Final, FrozenSet, Optional, Tuple

from .. import constants
from ..classes import ReleaseObject
from ..consts.rarities import Rarity
from ..utils import roll


class Mode(enum.Enum):
    """Release deviations from the baseline slot model. One is active per run."""

    DEFAULT = "default"
    WAR_OF_THE_SPARK = "warOfTheSpark"  # one planeswalker per pack
    DOMINARIA = "dominaria"  # at least one legendary creature
    TWO_LANDS = "twoLands"
    FUTURE_SIGHT = "futureSight"  # 5 to 10 future frame cards
    UNGLUED = "unglued"
    ALLIANCES_CHRONICLES = "alliancesChronicles"
    INNISTRAD_DOUBLE_FACED = "innistradDoubleFaced"
    SHADOWS_OVER_INNISTRAD_DOUBLE_FACED = "shadowsOverInnistradDoubleFaced"
    IKORIA = "ikoria"
    M21 = "m21"
    ZENDIKAR_RISING = "zendikarRising"  # guaranteed modal double-faced card
    DOUBLE_MASTERS = "doubleMasters"  # two foils and two rares, no land
    ZENDIKAR_EXPEDITIONS = "zendikarExpeditions"
    AMONKHET_INVOCATIONS = "amonkhetInvocations"
    KALADESH_INVENTIONS = "kaladeshInventions"
    VINTAGE_MASTERS = "vintageMasters"
    COMMANDER_LEGENDS = "commanderLegends"


MODES_BY_RELEASE: Final[Dict[str, Mode]] = {
    "dom": Mode.DOMINARIA,
    "war": Mode.WAR_OF_THE_SPARK,
    "s99": Mode.TWO_LANDS,
    "fut": Mode.FUTURE_SIGHT,
    "ugl": Mode.UNGLUED,
    "all": Mode.ALLIANCES_CHRONICLES,
    "chr": Mode.ALLIANCES_CHRONICLES,
    "isd": Mode.INNISTRAD_DOUBLE_FACED,
    "dka": Mode.INNISTRAD_DOUBLE_FACED,
    "soi": Mode.SHADOWS_OVER_INNISTRAD_DOUBLE_FACED,
    "emn": Mode.SHADOWS_OVER_INNISTRAD_DOUBLE_FACED,
    "iko": Mode.IKORIA,
    "akh": Mode.AMONKHET_INVOCATIONS,
    "hou": Mode.AMONKHET_INVOCATIONS,
    "bfz": Mode.ZENDIKAR_EXPEDITIONS,
    "ogw": Mode.ZENDIKAR_EXPEDITIONS,
    "kld": Mode.KALADESH_INVENTIONS,
    "aer": Mode.KALADESH_INVENTIONS,
    "vma": Mode.VINTAGE_MASTERS,
    "m21": Mode.M21,
    "2xm": Mode.DOUBLE_MASTERS,
    "znr": Mode.ZENDIKAR_RISING,
    "cmr": Mode.COMMANDER_LEGENDS,
}


class FoilPolicy(enum.Enum):
    """Per-mille chance that a pack's special slot holds a foil."""

    PRE_2020 = 225  # 1 in 67 cards
    MODERN = 334  # 1 in 45 cards
    VINTAGE_MASTERS = 981  # 52 of 53 packs

    @property
    def limit(self) -> int:
        return self.value


class MythicPolicy(enum.Enum):
    """How often the rare slot upgrades to a mythic rare."""

    PREVIOUS = "previous"  # 1 in 8 packs
    POST_M21 = "postM21"  # 1 in 7.4 packs

    def includes_mythic(self, rng: random.Random) -> bool:
        """
        Roll for a mythic rare upgrade
        :param rng: Random source
        :return: Rare slot should hold a mythic
        """
        if self is MythicPolicy.PREVIOUS:
            return roll(rng, PREVIOUS_MYTHIC_SIDES) == PREVIOUS_MYTHIC_SIDES
        return roll(rng, 100) >= POST_M21_MYTHIC_THRESHOLD


PREVIOUS_MYTHIC_SIDES: Final[int] = 8
# Custom releases that keep the older odds regardless of date
PREVIOUS_MYTHIC_RELEASES: Final[FrozenSet[str]] = frozenset({"net"})
# Rolls of 74..100 out of 100 are mythic (27 percent)
POST_M21_MYTHIC_THRESHOLD: Final[int] = 74

# Upper bounds, per mille, of the foil rarity bands
FOIL_RARITY_BANDS: Final[Tuple[Tuple[int, Rarity], ...]] = (
    (500, Rarity.COMMON),
    (833, Rarity.UNCOMMON),
    (979, Rarity.RARE),
    (1000, Rarity.MYTHIC),
)


def foil_rarity(rng: random.Random) -> Rarity:
    """
    Pick the rarity of a foil by weight band
    :param rng: Random source
    :return: Foil rarity
    """
    value = roll(rng, 1000)
    for upper_bound, rarity in FOIL_RARITY_BANDS:
        if value <= upper_bound:
            return rarity
    return Rarity.MYTHIC


class ShowcaseRarity(enum.Enum):
    """Rarity band a showcase swap may use."""

    RANDOM = "random"
    COMMON_UNCOMMON = "commonUncommon"
    RARE_MYTHIC = "rareMythic"

    @property
    def allowed_rarities(self) -> FrozenSet[Rarity]:
        if self is ShowcaseRarity.COMMON_UNCOMMON:
            return frozenset({Rarity.COMMON, Rarity.UNCOMMON})
        if self is ShowcaseRarity.RARE_MYTHIC:
            return frozenset({Rarity.RARE, Rarity.MYTHIC})
        return frozenset(Rarity)


def showcase_rarity(mode: Mode, rng: random.Random) -> Optional[ShowcaseRarity]:
    """
    Roll whether (and in which band) a pack gets a showcase swap
    :param mode: Active mode
    :param rng: Random source
    :return: Band for the swap, or None for no swap
    """
    if mode in (Mode.IKORIA, Mode.ZENDIKAR_RISING):
        if roll(rng, 29) <= 2:
            return ShowcaseRarity.RARE_MYTHIC
        if roll(rng, 3) == 1:
            return ShowcaseRarity.COMMON_UNCOMMON
        return None

    if mode is Mode.M21:
        if roll(rng, 15) == 1:
            return ShowcaseRarity.RARE_MYTHIC
        if roll(rng, 7) <= 2:
            return ShowcaseRarity.COMMON_UNCOMMON
        return None

    return ShowcaseRarity.RANDOM if roll(rng, 9) == 9 else None


# 1 in N chance of a masterpiece in the special slot
MASTERPIECE_ODDS: Final[Dict[Mode, int]] = {
    Mode.AMONKHET_INVOCATIONS: 129,
    Mode.KALADESH_INVENTIONS: 144,
    Mode.ZENDIKAR_EXPEDITIONS: 112,
}

FOIL_BORDERLESS_ODDS: Final[int] = 35
BORDERLESS_PLANESWALKER_ODDS: Final[int] = 126
SHOWCASE_LAND_ODDS: Final[int] = 7
RARE_DOUBLE_FACED_ODDS: Final[int] = 8

# Guaranteed modal double-faced card rarity weights
ZENDIKAR_RISING_DFC_WEIGHTS: Final[Tuple[Tuple[Rarity, int], ...]] = (
    (Rarity.MYTHIC, 5),
    (Rarity.RARE, 11),
    (Rarity.UNCOMMON, 20),
)


@dataclasses.dataclass(frozen=True)
class GenerationPolicy:
    """Mode and both odds policies, chosen once per request."""

    mode: Mode
    foil_policy: FoilPolicy
    mythic_policy: MythicPolicy


def mode_for_release(release_code: str) -> Mode:
    return MODES_BY_RELEASE.get(release_code.lower(), Mode.DEFAULT)


def foil_policy_for_release(release: ReleaseObject) -> FoilPolicy:
    if release.code == "vma":
        return FoilPolicy.VINTAGE_MASTERS
    if release.released_before(constants.MODERN_FOIL_CUTOFF_DATE):
        return FoilPolicy.PRE_2020
    return FoilPolicy.MODERN


def mythic_policy_for_release(release: ReleaseObject) -> MythicPolicy:
    if release.code in PREVIOUS_MYTHIC_RELEASES:
        return MythicPolicy.PREVIOUS
    if release.released_before(constants.POST_M21_MYTHIC_CUTOFF_DATE):
        return MythicPolicy.PREVIOUS
    return MythicPolicy.POST_M21


def policies_for_release(release: ReleaseObject) -> GenerationPolicy:
    """
    Look up every policy for a release
    :param release: Release metadata
    :return: Policies to pass to the assembler
    """
    return GenerationPolicy(
        mode=mode_for_release(release.code),
        foil_policy=foil_policy_for_release(release),
        mythic_policy=mythic_policy_for_release(release),
    )
