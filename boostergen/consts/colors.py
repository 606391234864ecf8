"""
The five primary colors.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Tuple


class Color(Enum):
    """Primary card colors, in WUBRG order."""

    WHITE = "W"
    BLUE = "U"
    BLACK = "B"
    RED = "R"
    GREEN = "G"

    @property
    def display_name(self) -> str:
        return self.name.title()


COLORS: Final[Tuple[str, ...]] = tuple(color.value for color in Color)
