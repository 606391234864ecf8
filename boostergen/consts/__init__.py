"""
BoosterGen constant classifications
"""

from .colors import COLORS, Color
from .layouts import TOKEN_LAYOUTS, LayoutVariant
from .rarities import Rarity
