"""
Per-release pack source

Every output shape asks a BoosterFactory for packs. The factory decides
once whether a release uses the baseline assembler or a special
generator, partitions the cards lazily and reuses the partition for
every pack it hands out.
"""
import enum
import logging
import random
from typing import List, Optional, Sequence

from .. import constants
from ..classes import BoosterCardObject, BoosterPackObject, CardPoolObject, ReleaseObject
from ..providers.abstract import CardSource
from .options import GenerationOptions
from .partitioner import partition
from .policies import GenerationPolicy, policies_for_release
from .retry import generate_pack
from .special.colorshift import generate_colorshift_pack, partition_colorshift
from .special.legends import LegendsPoolObject, generate_legends_pack, partition_legends
from .special.mystery import MysteryPool, generate_mystery_pack, partition_mystery

LOGGER = logging.getLogger(__name__)


class PackKind(enum.Enum):
    BASELINE = "baseline"
    LEGENDS = "legends"
    MYSTERY = "mystery"
    COLOR_SHIFT = "colorShift"


def pack_kind_for(release_code: str) -> PackKind:
    release_code = release_code.lower()
    if release_code in constants.LEGENDS_DRAFT_RELEASES:
        return PackKind.LEGENDS
    if release_code in constants.MYSTERY_BOOSTER_RELEASES:
        return PackKind.MYSTERY
    if release_code in constants.COLOR_SHIFT_RELEASES:
        return PackKind.COLOR_SHIFT
    return PackKind.BASELINE


class BoosterFactory:
    """
    Produces validated packs for one release and one set of options
    """

    release: ReleaseObject
    cards: List[BoosterCardObject]
    release_tokens: List[BoosterCardObject]
    options: GenerationOptions
    policy: GenerationPolicy
    source: Optional[CardSource]
    rng: random.Random
    max_attempts: Optional[int]
    kind: PackKind

    def __init__(
        self,
        release: ReleaseObject,
        cards: Sequence[BoosterCardObject],
        release_tokens: Sequence[BoosterCardObject] = (),
        options: Optional[GenerationOptions] = None,
        source: Optional[CardSource] = None,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
        policy: Optional[GenerationPolicy] = None,
    ) -> None:
        self.release = release
        self.cards = list(cards)
        self.release_tokens = list(release_tokens)
        self.options = options or GenerationOptions()
        self.policy = policy or policies_for_release(release)
        self.source = source
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.kind = pack_kind_for(release.code)

        self._pool: Optional[CardPoolObject] = None
        self._legends_pool: Optional[LegendsPoolObject] = None
        self._mystery_pool: Optional[MysteryPool] = None
        self._colorshift_pool = None

    def with_options(self, **changes) -> "BoosterFactory":
        """
        Same release and random source, different options
        :param changes: GenerationOptions fields to change
        :return: New factory
        """
        fields = {
            "include_extended_art": self.options.include_extended_art,
            "include_basic_lands": self.options.include_basic_lands,
            "include_tokens": self.options.include_tokens,
            "special_options": self.options.special_options,
        }
        fields.update(changes)
        return BoosterFactory(
            self.release,
            self.cards,
            self.release_tokens,
            GenerationOptions.build(**fields),
            self.source,
            self.rng,
            self.max_attempts,
            self.policy,
        )

    @property
    def pool(self) -> CardPoolObject:
        """Baseline partition of the release, with release tokens in front"""
        if self._pool is None:
            pool = partition(self.cards, self.release.code, self.options, self.source)
            pool.tokens = self.release_tokens + pool.tokens
            self._pool = pool
        return self._pool

    def tokens(self) -> List[BoosterCardObject]:
        """
        Tokens that go alongside this release's packs
        :return: Token printings
        """
        if self.kind is PackKind.BASELINE:
            return list(self.pool.tokens) if self.options.include_tokens else []
        if self.kind is PackKind.LEGENDS:
            return list(self.release_tokens)
        return []

    def new_pack(self) -> BoosterPackObject:
        """
        One validated pack
        :return: Pack
        """
        if self.kind is PackKind.LEGENDS:
            if self._legends_pool is None:
                self._legends_pool = partition_legends(self.cards, self.release_tokens)
            return generate_legends_pack(self._legends_pool, self.rng, self.max_attempts)

        if self.kind is PackKind.MYSTERY:
            if self._mystery_pool is None:
                self._mystery_pool = partition_mystery(self.cards, self.release.code, self.source)
            return generate_mystery_pack(self._mystery_pool, self.rng, self.max_attempts)

        if self.kind is PackKind.COLOR_SHIFT:
            if self._colorshift_pool is None:
                self._colorshift_pool = partition_colorshift(self.cards)
            normal, shifted = self._colorshift_pool
            return generate_colorshift_pack(normal, shifted, self.rng, self.max_attempts)

        return self.baseline_pack()

    def baseline_pack(self) -> BoosterPackObject:
        """
        One validated pack from the baseline slot model, whatever the release
        :return: Pack
        """
        return generate_pack(self.pool, self.policy, self.options, self.rng, self.max_attempts)

    def new_packs(self, count: int) -> List[BoosterPackObject]:
        LOGGER.info(f"Generating {count} {self.release.code.upper()} packs")
        return [self.new_pack() for _ in range(count)]
