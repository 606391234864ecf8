"""
Legends-draft packs (Commander Legends): 20 cards with two legends
and a guaranteed foil.
"""
import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from ...classes import BoosterCardObject, BoosterPackObject, group_by_rarity
from ...classes.card_pool import RarityMap
from ...constants import PRISMATIC_PIPER_ID
from ...consts.rarities import Rarity
from ...errors import NotInBoosters
from ...utils import choose, roll
from ..policies import foil_rarity
from ..retry import generate_until_valid
from ..tokens import resolve_token
from ..validator import color_problems, unique_count_problems

LOGGER = logging.getLogger(__name__)

LEGENDS_PACK_SIZE = 20
COMMON_SLOT_SIZE = 13
UNCOMMON_COUNT = 3
PRISMATIC_PIPER_SIDES = 6
LEGENDS_MYTHIC_THRESHOLD = 74
# Etched reprints above this number are the collector-only printings
LAST_BOOSTER_ETCHED_NUMBER = 546

LEGEND_RARITY_WEIGHTS: Tuple[Tuple[Dict[Rarity, int], float], ...] = (
    ({Rarity.UNCOMMON: 2}, 17),
    ({Rarity.UNCOMMON: 1, Rarity.RARE: 1}, 12),
    ({Rarity.RARE: 2}, 2),
    ({Rarity.UNCOMMON: 1, Rarity.MYTHIC: 1}, 1),
    ({Rarity.RARE: 1, Rarity.MYTHIC: 1}, 0.5),
)


class LegendsPoolObject:
    """
    Cards of a legends-draft release, split for the assembler
    """

    rarities: RarityMap
    legend_rarities: RarityMap
    borderless_planeswalkers: List[BoosterCardObject]
    etched_foils: List[BoosterCardObject]
    extended_art: List[BoosterCardObject]
    tokens: List[BoosterCardObject]
    prismatic_piper: Optional[BoosterCardObject]

    def __init__(self) -> None:
        self.rarities = {}
        self.legend_rarities = {}
        self.borderless_planeswalkers = []
        self.etched_foils = []
        self.extended_art = []
        self.tokens = []
        self.prismatic_piper = None

    def foil_rarities(self) -> RarityMap:
        """
        Foil candidates per rarity. Non-legends are listed twice so half
        of all legend foils can come out etched without skewing the odds.
        :return: Rarity to foil candidates
        """
        etched_reprints = [
            card
            for card in self.etched_foils
            if 0 < card.collector_number_value <= LAST_BOOSTER_ETCHED_NUMBER
        ]
        foil_rarities: RarityMap = {}
        for rarity in Rarity:
            cards = (
                self.rarities.get(rarity, [])
                + self.legend_rarities.get(rarity, [])
                + self.rarities.get(rarity, [])
            )
            if rarity is Rarity.MYTHIC:
                cards += etched_reprints + self.borderless_planeswalkers
            foil_rarities[rarity] = cards
        return foil_rarities


def _is_legend(card: BoosterCardObject) -> bool:
    type_line = card.type_line.lower()
    return "legendary" in type_line and ("creature" in type_line or "planeswalker" in type_line)


def partition_legends(
    cards: Sequence[BoosterCardObject], tokens: Sequence[BoosterCardObject] = ()
) -> LegendsPoolObject:
    """
    Split a legends-draft release into its pools
    :param cards: Every printing in the release
    :param tokens: Tokens for the release
    :return: Legends pool
    """
    pool = LegendsPoolObject()
    remaining: List[BoosterCardObject] = []
    for card in cards:
        if card.scryfall_id == PRISMATIC_PIPER_ID and pool.prismatic_piper is None:
            pool.prismatic_piper = card
        elif card.is_etched:
            pool.etched_foils.append(card)
        elif card.is_extended_art:
            pool.extended_art.append(card)
        elif card.is_borderless:
            pool.borderless_planeswalkers.append(card)
        elif card.is_found_in_boosters:
            remaining.append(card)

    if not remaining:
        raise NotInBoosters("No legends-draft cards are found in boosters")

    pool.legend_rarities = group_by_rarity(card for card in remaining if _is_legend(card))
    pool.rarities = group_by_rarity(card for card in remaining if not _is_legend(card))
    pool.tokens = list(tokens)
    return pool


def choose_legend_rarities(rng: random.Random) -> Dict[Rarity, int]:
    """
    Pick the rarities of the two legends by weight
    :param rng: Random source
    :return: Rarity to number of legends
    """
    total = sum(weight for _, weight in LEGEND_RARITY_WEIGHTS)
    value = rng.uniform(0, total)
    for rarities, weight in LEGEND_RARITY_WEIGHTS:
        value -= weight
        if value <= 0:
            return rarities
    return LEGEND_RARITY_WEIGHTS[-1][0]


def _add_foil(
    pack: BoosterPackObject,
    pool: LegendsPoolObject,
    foil_rarities: RarityMap,
    rarity: Rarity,
    rng: random.Random,
) -> None:
    candidates = foil_rarities.get(rarity, [])
    if not candidates:
        return

    foil = rng.choice(candidates)
    etched = next(
        (card for card in pool.etched_foils if card.oracle_id == foil.oracle_id), None
    )
    extended_art = next((card for card in pool.extended_art if card.name == foil.name), None)
    if rng.random() < 0.5 and not foil.is_etched and etched is not None:
        pack.insert(etched, is_foil=True)
    elif extended_art is not None:
        pack.insert(extended_art, is_foil=True)
    else:
        pack.insert(foil, is_foil=True)


def _assemble_candidate(
    pool: LegendsPoolObject,
    legend_rarities: Dict[Rarity, int],
    include_mythic: bool,
    included_foil_rarity: Rarity,
    include_piper: bool,
    rng: random.Random,
) -> BoosterPackObject:
    pack = BoosterPackObject()

    if include_piper and pool.prismatic_piper is not None:
        pack.insert(pool.prismatic_piper)

    pack.insert_all(choose(rng, pool.rarities.get(Rarity.COMMON, []), COMMON_SLOT_SIZE - len(pack)))
    pack.insert_all(choose(rng, pool.rarities.get(Rarity.UNCOMMON, []), UNCOMMON_COUNT))

    rares = pool.rarities.get(Rarity.MYTHIC if include_mythic else Rarity.RARE, [])
    if rares:
        pack.insert(rng.choice(rares))

    for rarity, count in legend_rarities.items():
        pack.insert_all(choose(rng, pool.legend_rarities.get(rarity, []), count))

    if rng.random() < 0.5:
        borderless_oracle_ids = {card.oracle_id for card in pool.borderless_planeswalkers}
        index = next(
            (
                index
                for index, card in enumerate(pack.cards)
                if card.oracle_id is not None and card.oracle_id in borderless_oracle_ids
            ),
            None,
        )
        if index is not None:
            borderless = next(
                card
                for card in pool.borderless_planeswalkers
                if card.oracle_id == pack[index].oracle_id
            )
            pack.replace(index, borderless)

    _add_foil(pack, pool, pool.foil_rarities(), included_foil_rarity, rng)
    return pack


def validate_legends_pack(pack: BoosterPackObject) -> List[str]:
    return color_problems(pack, include_lands=True) + unique_count_problems(
        pack, LEGENDS_PACK_SIZE
    )


def generate_legends_pack(
    pool: LegendsPoolObject,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> BoosterPackObject:
    """
    Produce one validated legends-draft pack
    :param pool: Legends pool
    :param rng: Random source
    :param max_attempts: Retry cap
    :return: Accepted pack, commons first, with its token at the back
    """
    rng = rng or random.Random()

    legend_rarities = choose_legend_rarities(rng)
    include_mythic = roll(rng, 100) >= LEGENDS_MYTHIC_THRESHOLD
    included_foil_rarity = foil_rarity(rng)
    include_piper = roll(rng, PRISMATIC_PIPER_SIDES) == PRISMATIC_PIPER_SIDES

    pack = generate_until_valid(
        lambda: _assemble_candidate(
            pool, legend_rarities, include_mythic, included_foil_rarity, include_piper, rng
        ),
        validate_legends_pack,
        "legends-draft booster",
        max_attempts,
    )
    pack.reverse()

    token = resolve_token(pack.cards, pool.tokens, rng)
    if token is not None:
        pack.append(token)

    LOGGER.debug(f"Legends-draft pack legends: {legend_rarities}")
    return pack
