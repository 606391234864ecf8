"""
BoosterGen error taxonomy
"""
from typing import List, Optional


class PackError(Exception):
    """Base class for every failure surfaced by pack generation."""

    code: int = -1
    message: str = "Pack generation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class WrongCardCount(PackError):
    """Looked up cards did not line up with the requested identifiers."""

    code = 0
    message = "Wrong number of cards returned"


class NoValidPromo(PackError):
    """No promotional card could be found for a prerelease kit."""

    code = 2
    message = "No valid promo card"


class NotInBoosters(PackError):
    """The release has no cards that appear in booster packs."""

    code = 3
    message = "No cards in this release are found in booster packs"


class NotEnoughBasicLands(PackError):
    """A land pack could not be built because a basic land name is missing."""

    code = 4
    message = "Not enough basic lands to build land packs"


class NoCards(PackError):
    """A lookup returned no cards at all."""

    code = 5
    message = "No cards found"


class Unsupported(PackError):
    """The requested release and output combination cannot be generated."""

    code = 6

    def __init__(self, combination: str):
        self.combination = combination
        super().__init__(f"Unsupported combination: {combination}")


class NoCardFound(PackError):
    """A specific card identifier could not be resolved."""

    code = 8

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No card found for {identifier}")


class EmptyInput(PackError):
    """The input contained nothing to look up."""

    code = 9
    message = "Input is empty"


class GenerationExhausted(PackError):
    """Rejection sampling gave up after too many invalid candidates."""

    code = 13

    def __init__(
        self, description: str, attempts: int, problems: Optional[List[str]] = None
    ):
        self.description = description
        self.attempts = attempts
        self.problems = problems or []
        super().__init__(
            f"Unable to generate a valid {description} after {attempts} attempts"
            + (f" (last problems: {', '.join(self.problems)})" if self.problems else "")
        )
