"""
Card rarity ordering.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering


@total_ordering
class Rarity(Enum):
    """Ordered booster rarities (special and bonus collapse to mythic)."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    MYTHIC = "mythic"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: str) -> Rarity:
        """
        Map a card database rarity string to a Rarity
        :param value: Rarity string (Ex: "common", "special")
        :return: Rarity
        """
        try:
            return cls(value.lower())
        except ValueError:
            return cls.MYTHIC


_RANKS = {
    Rarity.COMMON: 0,
    Rarity.UNCOMMON: 1,
    Rarity.RARE: 2,
    Rarity.MYTHIC: 3,
}
