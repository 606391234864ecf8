"""Scryfall API data models."""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..classes import BoosterCardObject, RelatedCardObject, ReleaseObject
from ..consts.rarities import Rarity


class RelatedCardRecord(BaseModel):
    """Entry of a card's all_parts list."""

    id: str
    component: str
    name: str = ""
    type_line: str = ""


class CardFaceRecord(BaseModel):
    """One face of a multi-faced card."""

    name: str = ""
    oracle_id: Optional[str] = None
    type_line: str = ""
    oracle_text: str = ""
    colors: List[str] = Field(default_factory=list)
    power: Optional[str] = None
    toughness: Optional[str] = None


class CardRecord(BaseModel):
    """Card object from the Scryfall API."""

    id: str
    name: str
    oracle_id: Optional[str] = None
    rarity: str = "common"
    lang: str = "en"
    set: str = ""
    collector_number: str = ""
    released_at: Optional[datetime.date] = None
    layout: str = "normal"
    type_line: Optional[str] = None
    oracle_text: Optional[str] = None
    colors: Optional[List[str]] = None
    power: Optional[str] = None
    toughness: Optional[str] = None
    frame: str = "2015"
    frame_effects: List[str] = Field(default_factory=list)
    border_color: str = "black"
    full_art: bool = False
    foil: bool = False
    nonfoil: bool = True
    booster: bool = False
    promo: bool = False
    watermark: Optional[str] = None
    card_faces: List[CardFaceRecord] = Field(default_factory=list)
    all_parts: List[RelatedCardRecord] = Field(default_factory=list)

    def to_card_object(self) -> BoosterCardObject:
        """
        Convert a Scryfall record into a BoosterGen card
        :return: Card object
        """
        faces = self.card_faces
        face_colors = sorted({color for face in faces for color in face.colors})

        return BoosterCardObject(
            scryfall_id=self.id,
            name=self.name,
            rarity=Rarity.parse(self.rarity),
            set_code=self.set,
            collector_number=self.collector_number,
            oracle_id=self.oracle_id or next((face.oracle_id for face in faces if face.oracle_id), None),
            colors=self.colors if self.colors is not None else face_colors,
            face_colors=face_colors,
            type_line=self.type_line
            if self.type_line is not None
            else " // ".join(face.type_line for face in faces),
            oracle_text=self.oracle_text
            if self.oracle_text is not None
            else "\n//\n".join(face.oracle_text for face in faces),
            power=self.power if self.power is not None else next((face.power for face in faces if face.power), None),
            toughness=self.toughness
            if self.toughness is not None
            else next((face.toughness for face in faces if face.toughness), None),
            layout=self.layout,
            frame=self.frame,
            frame_effects=self.frame_effects,
            border_color=self.border_color,
            is_full_art=self.full_art,
            has_foil=self.foil,
            has_non_foil=self.nonfoil,
            is_found_in_boosters=self.booster,
            is_promo=self.promo,
            language=self.lang,
            watermark=self.watermark,
            release_date=self.released_at.isoformat() if self.released_at else None,
            all_parts=[
                RelatedCardObject(part.id, part.component, part.name, part.type_line)
                for part in self.all_parts
            ],
        )


class SetRecord(BaseModel):
    """Set object from the Scryfall API."""

    code: str
    name: str = ""
    released_at: Optional[datetime.date] = None
    set_type: str = "expansion"
    card_count: int = 0
    search_uri: Optional[str] = None

    def to_release_object(self) -> ReleaseObject:
        return ReleaseObject(
            code=self.code,
            name=self.name,
            release_date=self.released_at,
            set_type=self.set_type,
            card_count=self.card_count,
        )


class CardListResponse(BaseModel):
    """Paged list of cards (search results, set contents)."""

    data: List[CardRecord] = Field(default_factory=list)
    has_more: bool = False
    next_page: Optional[str] = None


class CollectionResponse(BaseModel):
    """Result of a /cards/collection lookup."""

    data: List[CardRecord] = Field(default_factory=list)
    not_found: List[dict] = Field(default_factory=list)
