"""
BoosterGen Release Object
"""
import datetime
from typing import Any, Optional

from .json_object import JsonObject


class ReleaseObject(JsonObject):
    """
    Metadata for one release (set) as reported by the card data source
    """

    code: str
    name: str
    release_date: Optional[datetime.date]
    set_type: str
    card_count: int

    def __init__(
        self,
        code: str,
        name: str = "",
        release_date: Optional[datetime.date] = None,
        set_type: str = "expansion",
        card_count: int = 0,
    ) -> None:
        self.code = code.lower()
        self.name = name or code.upper()
        self.release_date = release_date
        self.set_type = set_type
        self.card_count = card_count

    def released_before(self, cutoff: datetime.date) -> bool:
        """
        Was this release out before the cutoff (unknown dates never are)
        :param cutoff: Date to compare against
        :return: Released strictly before the cutoff
        """
        return self.release_date is not None and self.release_date < cutoff

    def to_json(self) -> Any:
        parent = super().to_json()
        parent["releaseDate"] = self.release_date.isoformat() if self.release_date else None
        return parent
