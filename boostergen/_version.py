"""Dynamic version read from boostergen.properties."""

import configparser
import pathlib

_config = configparser.ConfigParser()
_config.read(pathlib.Path(__file__).parent / "resources" / "boostergen.properties")
__version__ = _config.get("BoosterGen", "version", fallback="1.0.0+fallback")
