"""
Pack Validator

Candidate checks return human readable problems. An empty list means
the candidate is accepted.
"""
from typing import List, Optional

from ..classes import BoosterPackObject, CardPoolObject, flatten
from ..consts.colors import COLORS
from .assembler import PackPlan
from .policies import Mode

FUTURE_SIGHT_FRAME = "future"
FUTURE_SIGHT_RANGE = range(5, 11)


def color_problems(pack: BoosterPackObject, include_lands: bool = False) -> List[str]:
    """
    Check that the cards of a pack show every color
    :param pack: Candidate pack
    :param include_lands: Count land colors as well
    :return: Problems found
    """
    missing = [color for color in COLORS if color not in pack.color_union(include_lands)]
    if missing:
        return [f"missing colors {''.join(missing)}"]
    return []


def unique_count_problems(pack: BoosterPackObject, expected: int) -> List[str]:
    """
    Check the number of distinct card names
    :param pack: Candidate pack
    :param expected: Required distinct name count
    :return: Problems found
    """
    unique_count = pack.unique_name_count()
    if unique_count != expected:
        return [f"{unique_count} unique cards, expected {expected}"]
    return []


def _showcase_okay(pack: BoosterPackObject, plan: PackPlan) -> bool:
    if plan.showcase_rarity is None or not flatten(plan.showcase_rarities):
        return True

    allowed = plan.showcase_rarity.allowed_rarities
    return any(
        (card.is_showcase or card.is_borderless) and card.rarity in allowed
        for card in pack.cards
        if not card.is_basic_land
    )


def validate(
    pack: BoosterPackObject, plan: PackPlan, pool: Optional[CardPoolObject] = None
) -> List[str]:
    """
    Run every check that applies to a baseline candidate
    :param pack: Candidate pack
    :param plan: Plan the candidate was built from
    :param pool: Pool the candidate was drawn from; colors are only
                 required when its main cards cover all five
    :return: Problems found
    """
    problems: List[str] = []

    if pool is None or pool.spans_all_colors():
        problems.extend(color_problems(pack))

    problems.extend(unique_count_problems(pack, plan.card_count))

    if plan.mode is Mode.FUTURE_SIGHT:
        future_count = sum(1 for card in pack.cards if card.frame == FUTURE_SIGHT_FRAME)
        if future_count not in FUTURE_SIGHT_RANGE:
            problems.append(f"{future_count} future frame cards")

    if not _showcase_okay(pack, plan):
        problems.append("no showcase card")

    if plan.mode is Mode.DOMINARIA and not any(card.is_legendary_creature for card in pack.cards):
        problems.append("no legendary creature")

    return problems
