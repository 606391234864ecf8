"""
Upstream data providers
"""

from .abstract import AbstractProvider, CardSource
from .asset_probe import AssetExistenceCache
from .scryfall import ScryfallProvider
