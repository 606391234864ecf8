"""
Per-request generation options
"""
import dataclasses
from typing import FrozenSet, Iterable


@dataclasses.dataclass(frozen=True)
class GenerationOptions:
    """Named boolean switches supplied with a generation request."""

    include_extended_art: bool = True
    include_basic_lands: bool = True
    include_tokens: bool = True
    special_options: FrozenSet[str] = frozenset()

    @classmethod
    def build(
        cls,
        include_extended_art: bool = True,
        include_basic_lands: bool = True,
        include_tokens: bool = True,
        special_options: Iterable[str] = (),
    ) -> "GenerationOptions":
        return cls(
            include_extended_art=include_extended_art,
            include_basic_lands=include_basic_lands,
            include_tokens=include_tokens,
            special_options=frozenset(option.lower() for option in special_options),
        )

    def has_special(self, option: str) -> bool:
        return option.lower() in self.special_options
