"""
BoosterGen simple utilities
"""

import logging
import os
import random
import time
from typing import Iterator, List, Sequence, TypeVar

from . import constants

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def init_logger() -> None:
    """
    Initialize the main system logger
    """
    constants.LOG_PATH.mkdir(parents=True, exist_ok=True)

    start_time = time.strftime("%Y-%m-%d_%H.%M.%S")

    logging.basicConfig(
        level=(
            logging.DEBUG
            if os.environ.get("BOOSTERGEN_DEBUG", "").lower() in ["true", "1"]
            else logging.INFO
        ),
        format="[%(levelname)s] %(asctime)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(
                str(constants.LOG_PATH.joinpath(f"boostergen_{start_time}.log"))
            ),
        ],
    )
    logging.getLogger("urllib3").setLevel(logging.ERROR)


def to_camel_case(snake_str: str) -> str:
    """
    Convert "snake_case" => "camelCase"
    :param snake_str: Snake String
    :return: Camel String
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def roll(rng: random.Random, sides: int) -> int:
    """
    Roll a die with the given number of sides
    :param rng: Random source
    :param sides: Highest face value
    :return: Value in 1...sides
    """
    return rng.randint(1, sides)


def choose(rng: random.Random, population: Sequence[T], count: int) -> List[T]:
    """
    Draw up to count distinct elements from a population.
    Drawing more than the population holds returns it all, shuffled.
    :param rng: Random source
    :param population: Elements to draw from
    :param count: How many elements to draw
    :return: Drawn elements
    """
    if count <= 0 or not population:
        return []
    return rng.sample(list(population), min(count, len(population)))


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Split a sequence into chunks of at most size elements
    :param items: Items to split
    :param size: Max size per chunk
    :return: Chunks, in order
    """
    for index in range(0, len(items), size):
        yield list(items[index : index + size])
