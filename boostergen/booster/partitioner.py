"""
Card Pool Partitioner

Splits the flat card list of one release into the slot categories
the assembler draws from.
"""
import logging
from typing import Callable, List, Optional

from ..classes import BoosterCardObject, CardPoolObject, group_by_rarity
from ..constants import BASIC_LAND_NAMES
from ..errors import NoCards, NotInBoosters, Unsupported
from ..providers.abstract import CardSource
from .options import GenerationOptions
from .release_rules import (
    HIGH_RES_BASIC_LAND_QUERY,
    BasicLandKind,
    LandSlotKind,
    ReleaseRule,
    is_gain_land,
    rule_for,
)

LOGGER = logging.getLogger(__name__)


def separate_all(
    cards: List[BoosterCardObject], predicate: Callable[[BoosterCardObject], bool]
) -> List[BoosterCardObject]:
    """
    Remove every matching card from the list, in place
    :param cards: Cards to split (modified)
    :param predicate: Which cards to take out
    :return: Cards that were taken out
    """
    taken = [card for card in cards if predicate(card)]
    cards[:] = [card for card in cards if not predicate(card)]
    return taken


def _is_typed_basic_land(card: BoosterCardObject) -> bool:
    # Typed basics have a subtype (Plains, Snow-Covered Island, ...), Wastes does not
    return card.is_basic_land and "—" in card.type_line


def _is_basic_land_lowercase(card: BoosterCardObject) -> bool:
    type_line = card.type_line.lower()
    return "basic" in type_line and "land" in type_line


def _require_source(
    source: Optional[CardSource], release_code: str
) -> CardSource:
    if source is None:
        raise Unsupported(f"{release_code} without a supplemental card source")
    return source


def _land_slot_cards(
    main_cards: List[BoosterCardObject],
    release_code: str,
    rule: ReleaseRule,
    options: GenerationOptions,
    source: Optional[CardSource],
) -> List[BoosterCardObject]:
    land_rule = rule.land_slot

    if land_rule.kind is LandSlotKind.NONE:
        return []

    own_basics = separate_all(main_cards, lambda card: card.is_basic_land)
    if land_rule.requires_basic_lands and not options.include_basic_lands:
        return []

    if land_rule.kind is LandSlotKind.BASICS:
        return own_basics

    if land_rule.kind is LandSlotKind.BASICS_AND_GAIN_LANDS:
        return own_basics + separate_all(main_cards, is_gain_land)

    if land_rule.kind is LandSlotKind.FULL_ART_BASICS:
        return [card for card in own_basics if card.is_full_art]

    if land_rule.kind is LandSlotKind.MATCHING:
        return [card for card in main_cards + own_basics if land_rule.predicate(card)]

    slot_cards = _require_source(source, release_code).search(
        land_rule.query, unique_prints=land_rule.unique_prints
    )
    if land_rule.with_local_typed_basics:
        slot_cards += [card for card in own_basics if _is_typed_basic_land(card)]
    return slot_cards


def _basic_lands(
    cards: List[BoosterCardObject],
    land_slot_cards: List[BoosterCardObject],
    release_code: str,
    rule: ReleaseRule,
    source: Optional[CardSource],
) -> List[BoosterCardObject]:
    if rule.basic_lands is BasicLandKind.QUERY:
        return _require_source(source, release_code).search(
            rule.basic_land_query, unique_prints=True
        )

    if rule.basic_lands is BasicLandKind.OUTSIDE_BOOSTERS:
        return [
            card
            for card in cards
            if _is_basic_land_lowercase(card)
            and not card.is_found_in_boosters
            and not card.is_promo
        ]

    if rule.basic_lands is BasicLandKind.IN_BOOSTERS or not land_slot_cards:
        return [
            card
            for card in cards
            if _is_basic_land_lowercase(card) and card.is_found_in_boosters and not card.is_promo
        ]

    if rule.basic_lands is BasicLandKind.SLOT_WITHOUT_WASTES:
        return [card for card in land_slot_cards if card.name != "Wastes"]

    if rule.basic_lands is BasicLandKind.FULL_ART_SLOT:
        return [card for card in land_slot_cards if card.is_full_art]

    typed_basics = [
        card
        for card in land_slot_cards
        if _is_typed_basic_land(card) and not card.is_showcase
    ]
    if {card.name for card in typed_basics} >= set(BASIC_LAND_NAMES):
        return typed_basics

    if source is None:
        LOGGER.debug(f"No basic lands for {release_code} land packs")
        return []
    return source.search(HIGH_RES_BASIC_LAND_QUERY, unique_prints=False)


def _extra_cards(
    release_code: str,
    rule: ReleaseRule,
    options: GenerationOptions,
    source: Optional[CardSource],
) -> List[BoosterCardObject]:
    extra_cards: List[BoosterCardObject] = []
    for extra in rule.extra_cards:
        if extra.special_option and not options.has_special(extra.special_option):
            continue

        card_source = _require_source(source, release_code)
        if extra.release_code:
            found = card_source.cards_in_release(extra.release_code)
        else:
            found = card_source.search(extra.query)

        if extra.mark_found_in_boosters:
            found = [card.with_overrides(is_found_in_boosters=True) for card in found]

        LOGGER.debug(f"Adding {len(found)} extra cards to {release_code}")
        extra_cards.extend(found)
    return extra_cards


def _masterpieces(
    release_code: str, rule: ReleaseRule, source: Optional[CardSource]
) -> List[BoosterCardObject]:
    if rule.masterpieces is None:
        return []

    masterpiece_rule = rule.masterpieces
    return [
        card
        for card in _require_source(source, release_code).cards_in_release(
            masterpiece_rule.release_code
        )
        if masterpiece_rule.first_number
        <= card.collector_number_value
        <= masterpiece_rule.last_number
    ]


def partition(
    cards: List[BoosterCardObject],
    release_code: str,
    options: Optional[GenerationOptions] = None,
    supplemental_source: Optional[CardSource] = None,
) -> CardPoolObject:
    """
    Split a release's cards into the typed pools used by the assembler.
    The input list is never modified.
    :param cards: Every printing in the release
    :param release_code: Release the cards belong to
    :param options: Generation options
    :param supplemental_source: Where to fetch cards borrowed from other releases
    :return: Card pool for one generation request
    """
    if not cards:
        raise NoCards(f"No cards to partition for {release_code}")

    options = options or GenerationOptions()
    release_code = release_code.lower()
    rule = rule_for(release_code)
    main_cards = list(cards)

    land_slot_cards = [
        card
        for card in _land_slot_cards(main_cards, release_code, rule, options, supplemental_source)
        if card.is_found_in_boosters and not card.is_promo
    ]
    basic_lands = _basic_lands(cards, land_slot_cards, release_code, rule, supplemental_source)

    main_cards.extend(_extra_cards(release_code, rule, options, supplemental_source))

    if rule.excluded_numbers and not options.has_special(rule.keep_excluded_option or ""):
        separate_all(main_cards, lambda card: card.collector_number in rule.excluded_numbers)

    if rule.showcase_follows_regular:
        names_in_boosters = {
            card.name for card in main_cards if card.is_found_in_boosters and not card.is_showcase
        }
        main_cards = [
            card.with_overrides(is_found_in_boosters=card.name in names_in_boosters)
            if card.is_showcase
            else card
            for card in main_cards
        ]

    pool = CardPoolObject(release_code)
    pool.basic_land_slot_cards = land_slot_cards
    pool.basic_lands = basic_lands
    pool.showcase_rarities = group_by_rarity(
        separate_all(main_cards, lambda card: card.is_showcase or card.is_borderless)
    )
    pool.extended_art_cards = separate_all(
        main_cards, lambda card: card.is_extended_art and not card.is_borderless
    )
    pool.tokens = separate_all(main_cards, lambda card: card.is_token_or_emblem)

    main_cards = [
        card
        for card in main_cards
        if card.is_found_in_boosters and card.language == "en" and not card.is_promo
    ]
    if not main_cards:
        raise NotInBoosters(f"No cards from {release_code} are found in boosters")

    pool.meld_results = separate_all(main_cards, lambda card: card.is_meld_result())
    if rule.custom_slot is not None:
        pool.custom_slot_rarities = group_by_rarity(separate_all(main_cards, rule.custom_slot))
    pool.masterpieces = _masterpieces(release_code, rule, supplemental_source)
    pool.rarities = group_by_rarity(main_cards)

    LOGGER.debug(
        f"Partitioned {len(cards)} {release_code} cards: "
        f"{len(main_cards)} main, {len(land_slot_cards)} land slot, "
        f"{len(pool.tokens)} tokens, {len(pool.masterpieces)} masterpieces"
    )
    return pool
