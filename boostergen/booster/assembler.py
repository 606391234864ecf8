"""
Pack Assembler

Builds one candidate booster pack from a partitioned card pool. A pack
is assembled back to front: every slot inserts at the front, so the
final order is commons, uncommons, rare, special slot, lands and then
the token appended last.
"""
import dataclasses
import logging
import random
from typing import Iterable, List, Optional, Set

from ..classes import BoosterCardObject, BoosterPackObject, CardPoolObject, flatten, group_by_rarity
from ..classes.card_pool import RarityMap
from ..consts.layouts import LayoutVariant
from ..consts.rarities import Rarity
from ..utils import choose, roll
from .options import GenerationOptions
from .policies import (
    BORDERLESS_PLANESWALKER_ODDS,
    FOIL_BORDERLESS_ODDS,
    MASTERPIECE_ODDS,
    RARE_DOUBLE_FACED_ODDS,
    SHOWCASE_LAND_ODDS,
    ZENDIKAR_RISING_DFC_WEIGHTS,
    FoilPolicy,
    GenerationPolicy,
    Mode,
    MythicPolicy,
    ShowcaseRarity,
    foil_rarity,
    showcase_rarity,
)
from .tokens import resolve_token

LOGGER = logging.getLogger(__name__)

M21_DUPLICATED_MYTHIC = "Teferi, Master of Time"
MODAL_DOUBLE_FACED_LAYOUT = LayoutVariant.MODAL_DFC.value


@dataclasses.dataclass
class PackPlan:
    """
    Decisions rolled once per pack. Retries of the same pack reuse
    the plan, so only the card draws themselves change between candidates.
    """

    mode: Mode
    foil_policy: FoilPolicy
    mythic_policy: MythicPolicy
    include_extended_art: bool
    rarities: RarityMap
    all_rarities: RarityMap
    showcase_rarities: RarityMap
    land_rarities: Optional[RarityMap]
    tokens: List[BoosterCardObject]
    guaranteed_planeswalker_slot: Optional[int] = None
    showcase_rarity: Optional[ShowcaseRarity] = None
    include_rare_double_faced: bool = False
    include_masterpiece: bool = False
    double_faced_rarity: Optional[Rarity] = None
    land_rarity: Rarity = Rarity.COMMON
    land_count: int = 1
    card_count: int = 15
    include_showcase_land: bool = False
    borderless_cards: List[BoosterCardObject] = dataclasses.field(default_factory=list)
    include_foil_borderless: bool = False
    include_borderless_planeswalker: bool = False


def _single_copy(cards: List[BoosterCardObject], predicate, rng: random.Random) -> List[BoosterCardObject]:
    copies = [card for card in cards if predicate(card)]
    if not copies:
        return cards
    return [card for card in cards if not predicate(card)] + [rng.choice(copies)]


def _swappable_showcases(
    showcase_rarities: RarityMap,
    allowed_rarities: Iterable[Rarity],
    mode: Mode,
    regular_names: Set[str],
) -> List[BoosterCardObject]:
    """
    Showcase printings that can stand in for a drawable regular printing
    :param showcase_rarities: Showcase and borderless printings by rarity
    :param allowed_rarities: Rarities the swap may use
    :param mode: Active mode; only M21 swaps in planeswalkers
    :param regular_names: Names of the cards packs are drawn from
    :return: Candidate showcase printings
    """
    return [
        card
        for card in flatten(showcase_rarities, allowed_rarities)
        if card.is_found_in_boosters
        and card.name in regular_names
        and (mode is Mode.M21 or not card.is_planeswalker)
    ]


def _showcase_band(
    mode: Mode, showcase_rarities: RarityMap, regular_names: Set[str], rng: random.Random
) -> Optional[ShowcaseRarity]:
    if not _swappable_showcases(showcase_rarities, Rarity, mode, regular_names):
        return None

    band = showcase_rarity(mode, rng)
    if band is None:
        return None

    # A band with nothing to swap in could never be met
    if not _swappable_showcases(showcase_rarities, band.allowed_rarities, mode, regular_names):
        return None
    return band


def _land_rarity(land_rarities: Optional[RarityMap], rng: random.Random) -> Rarity:
    value = roll(rng, 13)
    if value == 1:
        if land_rarities and land_rarities.get(Rarity.MYTHIC) and roll(rng, 8) == 8:
            return Rarity.MYTHIC
        if land_rarities and land_rarities.get(Rarity.RARE):
            return Rarity.RARE
        return Rarity.UNCOMMON
    if value <= 4:
        return Rarity.UNCOMMON
    return Rarity.COMMON


def _card_count(mode: Mode, has_land_slot: bool, has_tokens: bool) -> int:
    if mode is Mode.UNGLUED:
        count = 11
    elif mode is Mode.ALLIANCES_CHRONICLES:
        count = 14
    else:
        count = 16

    if not has_land_slot:
        count -= 1
    if not has_tokens:
        count -= 1
    if mode in (Mode.VINTAGE_MASTERS, Mode.DOUBLE_MASTERS):
        count += 1
    return count


def roll_plan(
    pool: CardPoolObject,
    policy: GenerationPolicy,
    options: Optional[GenerationOptions] = None,
    rng: Optional[random.Random] = None,
) -> PackPlan:
    """
    Roll every per-pack decision
    :param pool: Partitioned card pool
    :param policy: Mode, foil and mythic policies
    :param options: Generation options
    :param rng: Random source
    :return: Plan shared by all candidates of one pack
    """
    options = options or GenerationOptions()
    rng = rng or random.Random()
    mode = policy.mode

    showcase_rarities = dict(pool.showcase_rarities)
    rarities = dict(pool.rarities)
    if mode is Mode.M21:
        showcase_rarities[Rarity.MYTHIC] = _single_copy(
            showcase_rarities.get(Rarity.MYTHIC, []),
            lambda card: card.name == M21_DUPLICATED_MYTHIC and not card.is_borderless,
            rng,
        )
        rarities[Rarity.MYTHIC] = _single_copy(
            rarities.get(Rarity.MYTHIC, []),
            lambda card: card.name == M21_DUPLICATED_MYTHIC,
            rng,
        )

    all_rarities = dict(rarities)
    if mode is Mode.ZENDIKAR_RISING:
        rarities = {
            rarity: [card for card in cards if card.layout != MODAL_DOUBLE_FACED_LAYOUT]
            for rarity, cards in rarities.items()
        }

    land_slot_cards = pool.basic_land_slot_cards
    land_rarities = None
    if len({card.rarity for card in land_slot_cards}) > 1:
        land_rarities = group_by_rarity(land_slot_cards)

    tokens = list(pool.tokens) if options.include_tokens else []
    borderless_cards = [card for card in flatten(showcase_rarities) if card.is_borderless]

    plan = PackPlan(
        mode=mode,
        foil_policy=policy.foil_policy,
        mythic_policy=policy.mythic_policy,
        include_extended_art=options.include_extended_art,
        rarities=rarities,
        all_rarities=all_rarities,
        showcase_rarities=showcase_rarities,
        land_rarities=land_rarities,
        tokens=tokens,
        borderless_cards=borderless_cards,
    )

    if mode is Mode.WAR_OF_THE_SPARK:
        plan.guaranteed_planeswalker_slot = rng.randint(0, 3)
    regular_names = {
        card.name for card in flatten(all_rarities) + flatten(pool.custom_slot_rarities)
    }
    plan.showcase_rarity = _showcase_band(mode, showcase_rarities, regular_names, rng)
    plan.include_rare_double_faced = roll(rng, RARE_DOUBLE_FACED_ODDS) == RARE_DOUBLE_FACED_ODDS
    if pool.masterpieces and mode in MASTERPIECE_ODDS:
        plan.include_masterpiece = roll(rng, MASTERPIECE_ODDS[mode]) == 1
    if mode is Mode.ZENDIKAR_RISING:
        dfc_rarities, weights = zip(*ZENDIKAR_RISING_DFC_WEIGHTS)
        plan.double_faced_rarity = rng.choices(dfc_rarities, weights=weights)[0]
    plan.land_rarity = _land_rarity(land_rarities, rng)

    if mode is Mode.TWO_LANDS:
        plan.land_count = 2
    elif mode is Mode.DOUBLE_MASTERS:
        plan.land_count = 0
    plan.card_count = _card_count(mode, bool(land_slot_cards), bool(tokens))

    plan.include_showcase_land = (
        mode is Mode.M21
        and roll(rng, SHOWCASE_LAND_ODDS) == 1
        and any(card.is_showcase for card in land_slot_cards)
    )
    plan.include_foil_borderless = (
        mode is not Mode.M21
        and roll(rng, FOIL_BORDERLESS_ODDS) == FOIL_BORDERLESS_ODDS
        and bool(borderless_cards)
    )
    plan.include_borderless_planeswalker = (
        mode is not Mode.M21 and roll(rng, BORDERLESS_PLANESWALKER_ODDS) == 1
    )
    return plan


def _included_foil_rarity(plan: PackPlan, rng: random.Random) -> Optional[Rarity]:
    if plan.mode is not Mode.DOUBLE_MASTERS and roll(rng, 1000) > plan.foil_policy.limit:
        return None
    return foil_rarity(rng)


def _add_foil(
    pack: BoosterPackObject, pool: CardPoolObject, plan: PackPlan, rng: random.Random
) -> bool:
    """
    Roll for a foil and put it at the front of the pack
    :return: A foil was rolled and a candidate existed
    """
    rarity = _included_foil_rarity(plan, rng)
    if rarity is None:
        return False

    candidates = [
        card
        for card in plan.all_rarities.get(rarity, []) + pool.custom_slot_rarities.get(rarity, [])
        if card.is_foil_available
    ]
    if not candidates:
        return False

    foil = rng.choice(candidates)
    extended_art = [card for card in pool.extended_art_cards if card.name == foil.name]
    if plan.include_extended_art and extended_art:
        pack.insert(rng.choice(extended_art), is_foil=True)
    elif rarity is not Rarity.COMMON:
        # A common foil takes a common's place, which the common slot fills anyway
        pack.insert(foil, is_foil=True)
    return True


def _add_special_slot(
    pack: BoosterPackObject, pool: CardPoolObject, plan: PackPlan, rng: random.Random
) -> None:
    if plan.include_masterpiece and pool.masterpieces:
        pack.insert(rng.choice(pool.masterpieces), is_foil=True)
    elif plan.include_foil_borderless and plan.borderless_cards:
        pack.insert(rng.choice(plan.borderless_cards), is_foil=True)
    elif _add_foil(pack, pool, plan, rng):
        pass
    elif plan.mode is Mode.VINTAGE_MASTERS and flatten(pool.custom_slot_rarities):
        pack.insert(rng.choice(flatten(pool.custom_slot_rarities)))


def _add_rare_or_mythic(
    pack: BoosterPackObject, pool: CardPoolObject, plan: PackPlan, rng: random.Random
) -> None:
    if plan.double_faced_rarity in (Rarity.RARE, Rarity.MYTHIC):
        return

    slot_rarities = (
        pool.custom_slot_rarities if plan.guaranteed_planeswalker_slot == 3 else plan.rarities
    )
    if plan.mythic_policy.includes_mythic(rng) and slot_rarities.get(Rarity.MYTHIC):
        card = rng.choice(slot_rarities[Rarity.MYTHIC])
    elif slot_rarities.get(Rarity.RARE):
        card = rng.choice(slot_rarities[Rarity.RARE])
    else:
        return

    pack.insert(card)
    partner = card.partner_from(flatten(plan.rarities))
    if partner is not None:
        pack.insert(partner)


def _draw_uncommons(
    pack: BoosterPackObject, plan: PackPlan, count: int, rng: random.Random
) -> List[BoosterCardObject]:
    candidates = plan.rarities.get(Rarity.UNCOMMON, [])
    main_cards = flatten(plan.rarities)
    pack_has_partner = any(card.has_partner for card in pack.cards)
    uncommons: List[BoosterCardObject] = []

    while len(uncommons) < count:
        partner_taken = pack_has_partner or any(card.has_partner for card in uncommons)
        valid = [
            card
            for card in candidates
            if card not in uncommons and not (card.has_partner and partner_taken)
        ]
        if not valid:
            break

        card = rng.choice(valid)
        uncommons.append(card)
        partner = card.partner_from(main_cards)
        if partner is not None:
            uncommons.append(partner)

    while len(uncommons) > count:
        removable = [index for index, card in enumerate(uncommons) if not card.has_partner]
        if not removable:
            return []
        del uncommons[rng.choice(removable)]

    return uncommons


def _add_uncommons(
    pack: BoosterPackObject, pool: CardPoolObject, plan: PackPlan, rng: random.Random
) -> None:
    count = 2 if plan.mode is Mode.UNGLUED else 3
    if any(card.has_partner for card in pack.cards):
        count -= 1
    if plan.double_faced_rarity is Rarity.UNCOMMON:
        count -= 1

    uncommons = _draw_uncommons(pack, plan, count, rng)

    slot = plan.guaranteed_planeswalker_slot
    planeswalkers = pool.custom_slot_rarities.get(Rarity.UNCOMMON, [])
    if slot is not None and slot != 3 and planeswalkers and slot < len(uncommons):
        uncommons[slot] = rng.choice(planeswalkers)

    pack.insert_all(uncommons)


def _add_double_faced(
    pack: BoosterPackObject, pool: CardPoolObject, plan: PackPlan, rng: random.Random
) -> None:
    custom = pool.custom_slot_rarities
    if plan.mode is Mode.INNISTRAD_DOUBLE_FACED and flatten(custom):
        pack.insert(rng.choice(flatten(custom)))

    if plan.mode is Mode.SHADOWS_OVER_INNISTRAD_DOUBLE_FACED:
        rare_or_mythic = flatten(custom, (Rarity.RARE, Rarity.MYTHIC))
        if plan.include_rare_double_faced and rare_or_mythic:
            pack.insert(rng.choice(rare_or_mythic))

        common_or_uncommon = flatten(custom, (Rarity.COMMON, Rarity.UNCOMMON))
        if common_or_uncommon:
            pack.insert(rng.choice(common_or_uncommon))


def _swap_showcase(pack: BoosterPackObject, plan: PackPlan, rng: random.Random) -> None:
    if plan.showcase_rarity is None:
        return

    showcase_cards = _swappable_showcases(
        plan.showcase_rarities,
        plan.showcase_rarity.allowed_rarities,
        plan.mode,
        {card.name for card in pack.cards},
    )
    swaps = []
    for index, card in enumerate(pack.cards):
        if card.is_extended_art or card.is_basic_land:
            continue
        versions = [showcase for showcase in showcase_cards if showcase.name == card.name]
        if versions:
            swaps.append((index, rng.choice(versions)))

    if swaps:
        index, showcase = rng.choice(swaps)
        pack.replace(index, showcase, is_foil=pack.selections[index].is_foil)


def _add_borderless_planeswalker(
    pack: BoosterPackObject, plan: PackPlan, rng: random.Random
) -> None:
    if not plan.include_borderless_planeswalker:
        return

    planeswalkers = [card for card in plan.borderless_cards if card.is_planeswalker]
    commons = [index for index, card in enumerate(pack.cards) if card.rarity is Rarity.COMMON]
    if planeswalkers and commons:
        pack.replace(rng.choice(commons), rng.choice(planeswalkers))


def assemble_candidate(
    pool: CardPoolObject, plan: PackPlan, rng: Optional[random.Random] = None
) -> BoosterPackObject:
    """
    Build one candidate pack. The candidate is not validated.
    :param pool: Partitioned card pool
    :param plan: Per-pack decisions
    :param rng: Random source
    :return: Candidate pack
    """
    rng = rng or random.Random()
    pack = BoosterPackObject()

    lands = plan.land_rarities.get(plan.land_rarity) if plan.land_rarities else None
    lands = lands or pool.basic_land_slot_cards
    if plan.include_showcase_land:
        lands = [card for card in lands if card.is_showcase]
    pack.insert_all(choose(rng, lands, plan.land_count))

    _add_special_slot(pack, pool, plan, rng)
    if plan.mode is Mode.DOUBLE_MASTERS:
        _add_foil(pack, pool, plan, rng)

    if plan.double_faced_rarity is not None:
        dfcs = [
            card
            for card in plan.all_rarities.get(plan.double_faced_rarity, [])
            if card.layout == MODAL_DOUBLE_FACED_LAYOUT
        ]
        if dfcs:
            pack.insert(rng.choice(dfcs))
        else:
            LOGGER.debug(f"No {plan.double_faced_rarity.value} modal double-faced card to add")

    _add_rare_or_mythic(pack, pool, plan, rng)
    if plan.mode is Mode.DOUBLE_MASTERS:
        _add_rare_or_mythic(pack, pool, plan, rng)

    _add_uncommons(pack, pool, plan, rng)
    _add_double_faced(pack, pool, plan, rng)

    common_count = plan.card_count - len(pack) - (1 if plan.tokens else 0)
    pack.insert_all(choose(rng, plan.rarities.get(Rarity.COMMON, []), common_count))

    token = resolve_token(pack.cards, plan.tokens, rng, pool.meld_results)
    if token is not None:
        pack.append(token)

    _swap_showcase(pack, plan, rng)
    _add_borderless_planeswalker(pack, plan, rng)
    return pack


def assemble(
    pool: CardPoolObject,
    mode: Mode,
    foil_policy: FoilPolicy,
    mythic_policy: MythicPolicy,
    options: Optional[GenerationOptions] = None,
    rng: Optional[random.Random] = None,
) -> BoosterPackObject:
    """
    Roll a plan and build one candidate pack from it
    :param pool: Partitioned card pool
    :param mode: Active rule mode
    :param foil_policy: Foil odds
    :param mythic_policy: Mythic odds
    :param options: Generation options
    :param rng: Random source
    :return: Candidate pack
    """
    rng = rng or random.Random()
    plan = roll_plan(pool, GenerationPolicy(mode, foil_policy, mythic_policy), options, rng)
    return assemble_candidate(pool, plan, rng)
