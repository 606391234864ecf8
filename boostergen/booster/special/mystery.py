"""
Mystery-style packs: 15 cards drawn from fixed slot groups
"""
import enum
import random
from typing import Dict, List, Optional, Sequence, Tuple

from ...classes import BoosterCardObject, BoosterPackObject
from ...consts.colors import COLORS
from ...consts.rarities import Rarity
from ...errors import NoCards
from ...providers.abstract import CardSource
from ...utils import choose
from ..retry import generate_until_valid
from ..validator import color_problems, unique_count_problems

MYSTERY_PACK_SIZE = 15
PLAYTEST_RELEASE = "cmb1"
FOIL_RELEASE = "fmb1"
MODERN_FRAME = "2015"

# Cards borrowed from a companion release
COMPANION_RELEASES: Dict[str, str] = {
    "cmb1": "mb1",
    "fmb1": "mb1",
    "mb1": "fmb1",
}


class MysterySlot(enum.Enum):
    MONOCOLOR = "monocolorCommonUncommon"
    MULTICOLOR = "multicolorCommonUncommon"
    ARTIFACT_LAND = "artifactLandCommonUncommon"
    PRE_M15 = "preM15"
    RARE_MYTHIC = "m15RareMythic"
    PLAYTEST = "playtest"
    FOIL = "foil"


SlotKey = Tuple[MysterySlot, Optional[str]]
MysteryPool = Dict[SlotKey, List[BoosterCardObject]]


def slot_for(card: BoosterCardObject) -> SlotKey:
    """
    Which mystery slot group a card belongs to
    :param card: Card
    :return: Slot and, for monocolor cards, the color
    """
    if card.set_code == PLAYTEST_RELEASE:
        return MysterySlot.PLAYTEST, None
    if card.set_code == FOIL_RELEASE:
        return MysterySlot.FOIL, None
    if card.frame != MODERN_FRAME:
        return MysterySlot.PRE_M15, None

    type_line = card.type_line.lower()
    common_or_uncommon = card.rarity in (Rarity.COMMON, Rarity.UNCOMMON)
    if ("land" in type_line or "artifact" in type_line) and common_or_uncommon:
        return MysterySlot.ARTIFACT_LAND, None
    if not common_or_uncommon:
        return MysterySlot.RARE_MYTHIC, None
    if len(card.colors) == 1 and card.colors[0] in COLORS:
        return MysterySlot.MONOCOLOR, card.colors[0]
    return MysterySlot.MULTICOLOR, None


def partition_mystery(
    cards: Sequence[BoosterCardObject],
    release_code: str,
    source: Optional[CardSource] = None,
) -> MysteryPool:
    """
    Group a mystery release, plus its companion release, into slot groups
    :param cards: Every printing in the release
    :param release_code: Release the cards belong to
    :param source: Where to fetch the companion release
    :return: Slot key to cards
    """
    if not cards:
        raise NoCards(f"No cards to partition for {release_code}")

    all_cards = list(cards)
    companion = COMPANION_RELEASES.get(release_code.lower())
    if companion and source is not None:
        all_cards += source.cards_in_release(companion)

    pool: MysteryPool = {}
    for card in all_cards:
        pool.setdefault(slot_for(card), []).append(card)
    return pool


def _pick(pool: MysteryPool, key: SlotKey, rng: random.Random) -> Optional[BoosterCardObject]:
    cards = pool.get(key)
    return rng.choice(cards) if cards else None


def _assemble_candidate(pool: MysteryPool, rng: random.Random) -> BoosterPackObject:
    pack = BoosterPackObject()

    for color in COLORS:
        pack.append_all(choose(rng, pool.get((MysterySlot.MONOCOLOR, color), []), 2))

    for slot in (
        MysterySlot.MULTICOLOR,
        MysterySlot.ARTIFACT_LAND,
        MysterySlot.PRE_M15,
        MysterySlot.RARE_MYTHIC,
    ):
        card = _pick(pool, (slot, None), rng)
        if card is not None:
            pack.append(card)

    playtest = _pick(pool, (MysterySlot.PLAYTEST, None), rng)
    foil = _pick(pool, (MysterySlot.FOIL, None), rng)
    if playtest is not None:
        pack.append(playtest)
    elif foil is not None:
        pack.append(foil, is_foil=True)

    return pack


def validate_mystery_pack(pack: BoosterPackObject) -> List[str]:
    return color_problems(pack, include_lands=True) + unique_count_problems(
        pack, MYSTERY_PACK_SIZE
    )


def generate_mystery_pack(
    pool: MysteryPool,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> BoosterPackObject:
    """
    Produce one validated mystery-style pack
    :param pool: Mystery slot groups
    :param rng: Random source
    :param max_attempts: Retry cap
    :return: Accepted pack, in slot order
    """
    rng = rng or random.Random()
    return generate_until_valid(
        lambda: _assemble_candidate(pool, rng),
        validate_mystery_pack,
        "mystery booster",
        max_attempts,
    )
