"""
Color-shifted packs (Planar Chaos): normal and shifted cards in fixed counts
"""
import random
from typing import List, Optional, Sequence, Tuple

from ...classes import BoosterCardObject, BoosterPackObject, group_by_rarity
from ...classes.card_pool import RarityMap
from ...consts.rarities import Rarity
from ...errors import NotInBoosters
from ...utils import choose
from ..retry import generate_until_valid
from ..validator import color_problems, unique_count_problems

COLOR_SHIFT_PACK_SIZE = 15
NORMAL_COMMON_COUNT = 8
NORMAL_UNCOMMON_COUNT = 2
SHIFTED_COMMON_COUNT = 3


def partition_colorshift(cards: Sequence[BoosterCardObject]) -> Tuple[RarityMap, RarityMap]:
    """
    Split a color-shifted release into normal and shifted cards
    :param cards: Every printing in the release
    :return: Normal cards by rarity, shifted cards by rarity
    """
    in_boosters = [card for card in cards if card.is_found_in_boosters and not card.is_promo]
    if not in_boosters:
        raise NotInBoosters("No color-shifted release cards are found in boosters")

    normal = group_by_rarity(card for card in in_boosters if not card.is_colorshifted)
    shifted = group_by_rarity(card for card in in_boosters if card.is_colorshifted)
    return normal, shifted


def _assemble_candidate(
    normal: RarityMap, shifted: RarityMap, rng: random.Random
) -> BoosterPackObject:
    pack = BoosterPackObject()
    pack.append_all(choose(rng, normal.get(Rarity.COMMON, []), NORMAL_COMMON_COUNT))
    pack.append_all(choose(rng, normal.get(Rarity.UNCOMMON, []), NORMAL_UNCOMMON_COUNT))
    if normal.get(Rarity.RARE):
        pack.append(rng.choice(normal[Rarity.RARE]))
    pack.append_all(choose(rng, shifted.get(Rarity.COMMON, []), SHIFTED_COMMON_COUNT))

    # Only offered when the release has both shifted uncommons and shifted rares
    if shifted.get(Rarity.UNCOMMON) and shifted.get(Rarity.RARE):
        pack.append(rng.choice(shifted[Rarity.UNCOMMON] + shifted[Rarity.RARE]))
    return pack


def validate_colorshift_pack(pack: BoosterPackObject) -> List[str]:
    return color_problems(pack, include_lands=True) + unique_count_problems(
        pack, COLOR_SHIFT_PACK_SIZE
    )


def generate_colorshift_pack(
    normal: RarityMap,
    shifted: RarityMap,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> BoosterPackObject:
    """
    Produce one validated color-shifted pack
    :param normal: Normal cards by rarity
    :param shifted: Shifted cards by rarity
    :param rng: Random source
    :param max_attempts: Retry cap
    :return: Accepted pack
    """
    rng = rng or random.Random()
    return generate_until_valid(
        lambda: _assemble_candidate(normal, shifted, rng),
        validate_colorshift_pack,
        "color-shifted booster",
        max_attempts,
    )
