"""
BoosterGen Constants that cannot be changed and are hardcoded intentionally
"""

import datetime
import os
import pathlib
from typing import Dict, FrozenSet, Set, Tuple

TOP_LEVEL_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
RESOURCE_PATH: pathlib.Path = TOP_LEVEL_DIR.joinpath("boostergen").joinpath("resources")
CONFIG_PATH: pathlib.Path = RESOURCE_PATH.joinpath("boostergen.properties")
ENV_OUT_PATH: pathlib.Path = (
    pathlib.Path(os.environ.get("BOOSTERGEN_OUTPUT_PATH", TOP_LEVEL_DIR))
    .expanduser()
    .resolve()
)
OUTPUT_PATH: pathlib.Path = ENV_OUT_PATH.joinpath("output")

LOG_PATH: pathlib.Path = ENV_OUT_PATH.joinpath("boostergen_logs")

CACHE_PATH: pathlib.Path = TOP_LEVEL_DIR.joinpath(".boostergen_cache")

# Release date cutoffs (UTC)
TOKEN_CUTOFF_DATE: datetime.date = datetime.date(2007, 7, 13)
MODERN_FOIL_CUTOFF_DATE: datetime.date = datetime.date(2019, 7, 12)
POST_M21_MYTHIC_CUTOFF_DATE: datetime.date = datetime.date(2020, 7, 30)

BASIC_LAND_NAMES: Tuple[str, ...] = ("Plains", "Island", "Swamp", "Mountain", "Forest")

# Releases sold in 24 pack boxes
SMALL_BOX_RELEASES: FrozenSet[str] = frozenset(
    {
        "cns",
        "cn2",
        "med",
        "me2",
        "me3",
        "me4",
        "vma",
        "tpr",
        "mma",
        "mm2",
        "mm3",
        "ema",
        "ima",
        "a25",
        "uma",
        "2xm",
        "cmr",
    }
)
SMALL_BOX_PACK_COUNT: int = 24
DEFAULT_BOX_PACK_COUNT: int = 36
PRERELEASE_BOOSTER_COUNT: int = 6
LAND_PACK_SIZE: int = 20

MYSTERY_BOOSTER_RELEASES: FrozenSet[str] = frozenset({"mb1", "fmb1", "cmb1"})
LEGENDS_DRAFT_RELEASES: FrozenSet[str] = frozenset({"cmr"})
COLOR_SHIFT_RELEASES: FrozenSet[str] = frozenset({"plc"})

# Planar Chaos prerelease promo and its basic lands
COLOR_SHIFT_PROMO_ID: str = "c287d593-cfd0-46b6-bde0-0c04a83d828b"
COLOR_SHIFT_BASIC_LAND_QUERY: str = "set:tsp type:'basic land'"

PRISMATIC_PIPER_ID: str = "a69e6d8f-f742-4508-a83a-38ae84be228c"

# Legacy set codes still found in exported decklists
FIXED_SET_CODES: Dict[str, str] = {
    "dar": "dom",
    "7e": "7ed",
    "8e": "8ed",
    "eo2": "e02",
    "mi": "mir",
    "ul": "ulg",
    "od": "ody",
    "wl": "wth",
    "uz": "usg",
}
MYSTERY_DECKLIST_SET_CODES: Dict[str, str] = {"MYSTOR": "fmb1", "MYS1": "mb1"}

COLLECTION_CHUNK_SIZE: int = 75

BOOSTER_SET_TYPES: Set[str] = {"core", "expansion", "masters", "draft_innovation"}
EXCLUDED_BOOSTER_SETS: Set[str] = {"plist"}
