"""
BoosterGen Class Dispatcher
"""

from .booster_card import BoosterCardObject, RelatedCardObject
from .booster_pack import BoosterPackObject, CardSelectionObject
from .card_pool import CardPoolObject, flatten, group_by_rarity
from .json_object import JsonObject
from .release import ReleaseObject
