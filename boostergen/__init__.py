"""
BoosterGen, a booster pack generation engine for Magic: The Gathering releases
"""

from ._version import __version__
from .booster.factory import BoosterFactory
from .booster.options import GenerationOptions
from .generator import OutputShape, generate

__all__ = [
    "__version__",
    "BoosterFactory",
    "GenerationOptions",
    "OutputShape",
    "generate",
]
