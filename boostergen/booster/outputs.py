"""
Output-shape adapters

Thin wrappers that ask a BoosterFactory for packs and arrange them as
a single pack, a box, a prerelease kit, land packs or a boxing-league
box. Serialising the results for a particular client is left to the
caller.
"""
import json
import logging
import random
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .. import constants
from ..classes import BoosterCardObject, BoosterPackObject, CardSelectionObject, JsonObject
from ..consts.colors import Color
from ..consts.rarities import Rarity
from ..errors import NoCards, NotEnoughBasicLands, NoValidPromo, Unsupported
from ..providers.abstract import CardSource
from ..utils import roll
from .factory import BoosterFactory, PackKind

LOGGER = logging.getLogger(__name__)

PROMO_MYTHIC_SIDES = 8
BOXING_LEAGUE_EXCLUDED_LAYOUTS = frozenset({"token", "double_faced_token"})


class PrereleaseKitObject(JsonObject):
    """
    Boosters, a promo card, land packs and tokens for one prerelease
    """

    boosters: List[BoosterPackObject]
    promo: Optional[BoosterCardObject]
    land_packs: List[BoosterPackObject]
    tokens: List[BoosterCardObject]

    def __init__(self) -> None:
        self.boosters = []
        self.promo = None
        self.land_packs = []
        self.tokens = []

    def selections(self) -> List[CardSelectionObject]:
        """Every card in the kit that belongs in a card list"""
        selections = [selection for pack in self.boosters for selection in pack]
        if self.promo is not None:
            selections.append(CardSelectionObject(self.promo, is_foil=True))
        return selections

    def to_json(self):
        return {
            "boosters": [pack.to_json() for pack in self.boosters],
            "promo": self.promo.to_json() if self.promo else None,
            "landPacks": [pack.to_json() for pack in self.land_packs],
            "tokens": [token.to_json() for token in self.tokens],
        }


class BoxingLeagueBoxObject(JsonObject):
    """
    A box of packs opened and sorted into named groups
    """

    name: str
    groups: List[BoosterPackObject]
    token: Optional[BoosterCardObject]

    def __init__(self, name: str) -> None:
        self.name = name
        self.groups = []
        self.token = None

    def to_json(self):
        return {
            "name": self.name,
            "groups": [group.to_json() for group in self.groups],
            "token": self.token.to_json() if self.token else None,
        }


def box_pack_count(
    release_code: str, requested: Optional[int] = None, boxing_league: bool = False
) -> int:
    """
    How many packs go in a box
    :param release_code: Release
    :param requested: Explicit count (ignored unless positive)
    :param boxing_league: Boxing-league boxes never use the legends-draft size
    :return: Pack count
    """
    if requested is not None and requested > 0:
        return requested

    small_box_releases = constants.SMALL_BOX_RELEASES
    if boxing_league:
        small_box_releases = small_box_releases - constants.LEGENDS_DRAFT_RELEASES
    if release_code.lower() in small_box_releases:
        return constants.SMALL_BOX_PACK_COUNT
    return constants.DEFAULT_BOX_PACK_COUNT


def booster_pack(factory: BoosterFactory) -> BoosterPackObject:
    return factory.new_pack()


def booster_box(factory: BoosterFactory, count: Optional[int] = None) -> List[BoosterPackObject]:
    """
    Generate a full box of packs
    :param factory: Pack source for the release
    :param count: Pack count (default depends on the release)
    :return: Packs
    """
    return factory.new_packs(box_pack_count(factory.release.code, count))


def land_packs(
    basic_lands: Iterable[BoosterCardObject], rng: Optional[random.Random] = None
) -> List[BoosterPackObject]:
    """
    One 20-card pack per basic land name
    :param basic_lands: Basic land printings to use
    :param rng: Random source
    :return: Land packs in WUBRG order
    """
    rng = rng or random.Random()
    basic_lands = list(basic_lands)

    lands_by_name: List[Tuple[str, List[BoosterCardObject]]] = [
        (name, [card for card in basic_lands if card.name == name])
        for name in constants.BASIC_LAND_NAMES
    ]
    missing = [name for name, lands in lands_by_name if not lands]
    if missing:
        raise NotEnoughBasicLands(f"No printings of {', '.join(missing)}")

    packs: List[BoosterPackObject] = []
    for name, lands in lands_by_name:
        cards: List[BoosterCardObject] = []
        while len(cards) < constants.LAND_PACK_SIZE:
            cards.extend(lands)
        rng.shuffle(cards)

        pack = BoosterPackObject(name=name)
        pack.append_all(cards[: constants.LAND_PACK_SIZE])
        packs.append(pack)
    return packs


def select_promo(factory: BoosterFactory, source: CardSource) -> BoosterCardObject:
    """
    Pick the promo card for a prerelease kit
    :param factory: Pack source for the release
    :param source: Where to search for prerelease promos
    :return: Promo card
    """
    rng = factory.rng
    promo_rarity = (
        Rarity.MYTHIC if roll(rng, PROMO_MYTHIC_SIDES) == PROMO_MYTHIC_SIDES else Rarity.RARE
    )

    promos = source.search(f"set:p{factory.release.code} is:prerelease")
    by_rarity = [card for card in promos if card.rarity is promo_rarity] or [
        card for card in promos if card.rarity is Rarity.RARE
    ]
    if by_rarity:
        return rng.choice(by_rarity)

    pool = factory.pool
    candidates = pool.rarities.get(promo_rarity) or pool.rarities.get(Rarity.RARE, [])
    candidates = [card for card in candidates if not card.is_showcase]
    if not candidates:
        raise NoValidPromo(f"No promo card for {factory.release.code}")

    card = rng.choice(candidates)
    if factory.options.include_extended_art:
        versions = [
            version for version in pool.extended_art_cards if version.name == card.name
        ] or [
            version
            for version in pool.showcase_rarities.get(card.rarity, [])
            if version.name == card.name
        ]
        if versions:
            return rng.choice(versions)
    return card


def prerelease_kit(
    factory: BoosterFactory,
    source: CardSource,
    booster_count: Optional[int] = None,
    include_promo: bool = True,
    include_lands: bool = True,
) -> PrereleaseKitObject:
    """
    Build one prerelease kit
    :param factory: Pack source for the release
    :param source: Where to look up promos and borrowed lands
    :param booster_count: Boosters in the kit
    :param include_promo: Add the promo card
    :param include_lands: Add land packs
    :return: Prerelease kit
    """
    if factory.kind is PackKind.MYSTERY:
        raise Unsupported(f"prerelease kit for {factory.release.code}")

    booster_count = booster_count or constants.PRERELEASE_BOOSTER_COUNT
    kit = PrereleaseKitObject()

    if factory.kind is PackKind.COLOR_SHIFT:
        kit.boosters = factory.new_packs(booster_count)
        if include_promo:
            kit.promo = source.card_by_id(constants.COLOR_SHIFT_PROMO_ID)
        if include_lands:
            basic_lands = source.search(constants.COLOR_SHIFT_BASIC_LAND_QUERY, unique_prints=True)
            kit.land_packs = land_packs(basic_lands, factory.rng)
        return kit

    # Kits always carry basic lands and tokens, and use the baseline slots
    factory = factory.with_options(include_basic_lands=True, include_tokens=True)
    kit.boosters = [factory.baseline_pack() for _ in range(booster_count)]
    if include_promo:
        kit.promo = select_promo(factory, source)
    if include_lands:
        kit.land_packs = land_packs(factory.pool.basic_lands, factory.rng)
    kit.tokens = factory.tokens()
    return kit


def all_tokens_for_release(source: CardSource, release_code: str) -> List[BoosterCardObject]:
    """
    Every token of a release, from its token release when there is one
    :param source: Card data source
    :param release_code: Release
    :return: Tokens, sorted by name
    """
    try:
        tokens = source.cards_in_release(f"t{release_code}")
    except NoCards:
        tokens = [
            card for card in source.cards_in_release(release_code) if card.is_token_or_emblem
        ]

    if not tokens:
        raise NoCards(f"No tokens for {release_code}")
    return sorted(tokens, key=lambda token: token.name)


def _group_colors(card: BoosterCardObject) -> Set[str]:
    return set(card.all_colors())


def boxing_league_box(
    factory: BoosterFactory, source: Optional[CardSource] = None, count: Optional[int] = None
) -> BoxingLeagueBoxObject:
    """
    Open a box and sort its cards into named groups
    :param factory: Pack source for the release
    :param source: Card data source used to find the release's token
    :param count: Pack count (default depends on the release)
    :return: Grouped box
    """
    packs = factory.new_packs(box_pack_count(factory.release.code, count, boxing_league=True))
    cards = sorted((card for pack in packs for card in pack.cards), key=lambda card: card.name)
    cards = [
        card
        for card in cards
        if "basic" not in card.type_line.lower()
        and card.layout not in BOXING_LEAGUE_EXCLUDED_LAYOUTS
    ]

    def take(predicate) -> List[BoosterCardObject]:
        taken = [card for card in cards if predicate(card)]
        cards[:] = [card for card in cards if not predicate(card)]
        return taken

    groups: List[Tuple[str, List[BoosterCardObject]]] = [
        ("Commanders", take(lambda card: card.is_legendary_creature)),
        ("Rares", take(lambda card: card.rarity in (Rarity.RARE, Rarity.MYTHIC))),
    ]
    for color in Color:
        groups.append(
            (
                f"{color.display_name} Commons & Uncommons",
                take(lambda card, value=color.value: _group_colors(card) == {value}),
            )
        )
    groups.append(("Multicolor Commons & Uncommons", take(lambda card: len(_group_colors(card)) > 1)))
    groups.append(("Colorless Commons & Uncommons", list(cards)))

    box = BoxingLeagueBoxObject(factory.release.name)
    for name, group_cards in groups:
        if group_cards:
            group = BoosterPackObject(name=name)
            group.append_all(group_cards)
            box.groups.append(group)

    if source is not None:
        box.token = all_tokens_for_release(source, factory.release.code)[0]
    return box


def card_list_output(selections: Iterable[CardSelectionObject]) -> str:
    """
    Plain text card list, one line per (card, foil) pair, wrapped in JSON
    :param selections: Selected cards
    :return: JSON document with a downloadOutput key
    """
    lines: Dict[Tuple[str, bool], List] = {}
    for selection in selections:
        card = selection.card
        if "token" in card.layout or "emblem" in card.layout or card.oracle_id is None:
            continue

        key = (card.oracle_id, selection.is_foil)
        if key in lines:
            lines[key][0] += 1
        else:
            lines[key] = [1, card, selection.is_foil]

    rendered = []
    for count, card, is_foil in sorted(lines.values(), key=lambda line: line[1].name):
        line = f"{count} {card.name} ({card.set_code.upper()}) {card.collector_number}"
        if is_foil:
            line += " #!Foil"
        rendered.append(line)

    return json.dumps({"downloadOutput": "\n".join(rendered)})
