"""
BoosterGen request entry point
"""
import enum
import logging
import random
from typing import Any, List, Optional, Tuple

from . import constants
from .booster.factory import BoosterFactory
from .booster.options import GenerationOptions
from .booster.outputs import (
    booster_box,
    booster_pack,
    boxing_league_box,
    card_list_output,
    land_packs,
    prerelease_kit,
)
from .booster.release_rules import HIGH_RES_BASIC_LAND_QUERY
from .classes import BoosterCardObject, ReleaseObject
from .errors import NoCards
from .providers.abstract import CardSource

LOGGER = logging.getLogger(__name__)


class OutputShape(enum.Enum):
    BOOSTER_PACK = "boosterPack"
    BOOSTER_BOX = "boosterBox"
    PRERELEASE_KIT = "prereleaseKit"
    LAND_PACKS = "landPacks"
    BOXING_LEAGUE_BOX = "boxingLeagueBox"


def load_release(
    release_code: str, source: CardSource, options: GenerationOptions
) -> Tuple[ReleaseObject, List[BoosterCardObject], List[BoosterCardObject]]:
    """
    Fetch a release, its cards and (when wanted) its tokens
    :param release_code: Release to fetch
    :param source: Card data source
    :param options: Generation options
    :return: Release metadata, cards, release tokens
    """
    release = source.get_release(release_code)
    cards = source.cards_in_release(release.code)
    if not cards:
        raise NoCards(f"No cards in {release.code}")

    tokens: List[BoosterCardObject] = []
    if (
        options.include_tokens
        and release.release_date is not None
        and not release.released_before(constants.TOKEN_CUTOFF_DATE)
    ):
        try:
            tokens = source.cards_in_release(f"t{release.code}")
        except NoCards:
            LOGGER.info(f"No token release for {release.code}")

    return release, cards, tokens


def generate(
    release_code: Optional[str],
    output: OutputShape,
    source: CardSource,
    options: Optional[GenerationOptions] = None,
    count: Optional[int] = None,
    card_list: bool = False,
    prerelease_booster_count: Optional[int] = None,
    prerelease_include_promo: bool = True,
    prerelease_include_lands: bool = True,
    rng: Optional[random.Random] = None,
) -> Any:
    """
    Generate one output shape for a release
    :param release_code: Release to open (land packs accept None)
    :param output: Output shape
    :param source: Card data source
    :param options: Generation options
    :param count: Box pack count, or prerelease kit count
    :param card_list: Return a card list document instead of JSON objects
    :param prerelease_booster_count: Boosters per prerelease kit
    :param prerelease_include_promo: Add the prerelease promo
    :param prerelease_include_lands: Add land packs to prerelease kits
    :param rng: Random source
    :return: JSON serialisable result, or the card list document
    """
    options = options or GenerationOptions()
    rng = rng or random.Random()

    if release_code is None:
        if output is not OutputShape.LAND_PACKS:
            raise NoCards("A release code is required")
        basic_lands = source.search(HIGH_RES_BASIC_LAND_QUERY)
        return [pack.to_json() for pack in land_packs(basic_lands, rng)]

    release, cards, tokens = load_release(release_code, source, options)
    factory = BoosterFactory(release, cards, tokens, options, source, rng)
    LOGGER.info(f"Generating {output.value} for {release.name} ({release.code.upper()})")

    if output is OutputShape.BOOSTER_PACK:
        pack = booster_pack(factory)
        if card_list:
            return card_list_output(pack)
        return {"pack": pack.to_json(), "tokens": [token.to_json() for token in factory.tokens()]}

    if output is OutputShape.BOOSTER_BOX:
        packs = booster_box(factory, count)
        if card_list:
            return card_list_output(selection for pack in packs for selection in pack)
        return {
            "packs": [pack.to_json() for pack in packs],
            "tokens": [token.to_json() for token in factory.tokens()],
        }

    if output is OutputShape.PRERELEASE_KIT:
        kits = [
            prerelease_kit(
                factory,
                source,
                prerelease_booster_count,
                prerelease_include_promo,
                prerelease_include_lands,
            )
            for _ in range(count or 1)
        ]
        if card_list:
            return card_list_output(selection for kit in kits for selection in kit.selections())
        return [kit.to_json() for kit in kits]

    if output is OutputShape.LAND_PACKS:
        basics = factory.with_options(include_basic_lands=True).pool.basic_lands
        return [pack.to_json() for pack in land_packs(basics, rng)]

    return boxing_league_box(factory, source, count).to_json()
