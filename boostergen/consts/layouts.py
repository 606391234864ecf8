"""
Card layouts that change how a card is slotted into a pack.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, FrozenSet


class LayoutVariant(Enum):
    """Scryfall card layouts with pack-level meaning."""

    NORMAL = "normal"
    TRANSFORM = "transform"
    MODAL_DFC = "modal_dfc"
    MELD = "meld"
    TOKEN = "token"
    DOUBLE_FACED_TOKEN = "double_faced_token"
    EMBLEM = "emblem"


# Never opened in the main part of a pack
TOKEN_LAYOUTS: Final[FrozenSet[str]] = frozenset(
    {
        LayoutVariant.TOKEN.value,
        LayoutVariant.DOUBLE_FACED_TOKEN.value,
        LayoutVariant.EMBLEM.value,
    }
)

# Filled by the dedicated double-faced slot of Innistrad style releases
DOUBLE_FACED_SLOT_LAYOUTS: Final[FrozenSet[str]] = frozenset(
    {
        LayoutVariant.TRANSFORM.value,
        LayoutVariant.MELD.value,
    }
)
