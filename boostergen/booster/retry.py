"""
Bounded rejection sampling for pack candidates
"""
import logging
import random
from typing import Callable, List, Optional, TypeVar

from ..classes import BoosterPackObject, CardPoolObject
from ..config import BoostergenConfig
from ..errors import GenerationExhausted
from .assembler import assemble_candidate, roll_plan
from .options import GenerationOptions
from .policies import GenerationPolicy
from .validator import validate

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def generate_until_valid(
    build: Callable[[], T],
    check: Callable[[T], List[str]],
    description: str,
    max_attempts: Optional[int] = None,
) -> T:
    """
    Build candidates until one passes its checks
    :param build: Makes a fresh candidate
    :param check: Returns the problems of a candidate
    :param description: What is being generated, for logs and errors
    :param max_attempts: Give up after this many candidates (default from config)
    :return: First accepted candidate
    """
    if max_attempts is None:
        max_attempts = BoostergenConfig().max_generation_attempts

    problems: List[str] = []
    for attempt in range(1, max_attempts + 1):
        candidate = build()
        problems = check(candidate)
        if not problems:
            if attempt > 1:
                LOGGER.debug(f"Accepted {description} after {attempt} attempts")
            return candidate
        LOGGER.debug(f"Rejected {description} attempt {attempt}: {', '.join(problems)}")

    LOGGER.error(f"Gave up on {description} after {max_attempts} attempts")
    raise GenerationExhausted(description, max_attempts, problems)


def generate_pack(
    pool: CardPoolObject,
    policy: GenerationPolicy,
    options: Optional[GenerationOptions] = None,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> BoosterPackObject:
    """
    Produce one validated baseline pack
    :param pool: Partitioned card pool
    :param policy: Mode, foil and mythic policies
    :param options: Generation options
    :param rng: Random source
    :param max_attempts: Retry cap
    :return: Accepted pack
    """
    rng = rng or random.Random()
    plan = roll_plan(pool, policy, options, rng)
    return generate_until_valid(
        lambda: assemble_candidate(pool, plan, rng),
        lambda pack: validate(pack, plan, pool),
        f"{pool.release_code} booster",
        max_attempts,
    )
