"""
Decklist to pack adapter

Turns named groups of card identifiers into fixed packs: one pack per
group, with the tokens the cards make.
"""
import dataclasses
import enum
import json
import logging
import pathlib
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from . import constants
from .classes import BoosterCardObject, BoosterPackObject, JsonObject
from .errors import EmptyInput, NoCardFound, NoCards, WrongCardCount
from .providers.abstract import CardSource

LOGGER = logging.getLogger(__name__)

TOKEN_PACK_NAME = "Token"
VALID_SET_CODE_LENGTHS = range(3, 7)


class IdentifierKind(enum.Enum):
    ID = "id"
    NAME = "name"
    NAME_SET = "nameSet"
    COLLECTOR_NUMBER_SET = "collectorNumberSet"


@dataclasses.dataclass(frozen=True)
class CardIdentifier:
    """One way of naming a card printing in a decklist."""

    kind: IdentifierKind
    scryfall_id: Optional[str] = None
    name: Optional[str] = None
    set_code: Optional[str] = None
    collector_number: Optional[str] = None

    @classmethod
    def by_id(cls, scryfall_id: str) -> "CardIdentifier":
        return cls(IdentifierKind.ID, scryfall_id=scryfall_id)

    @classmethod
    def by_name(cls, name: str) -> "CardIdentifier":
        return cls(IdentifierKind.NAME, name=name)

    @classmethod
    def by_name_set(cls, name: str, set_code: str) -> "CardIdentifier":
        return cls(IdentifierKind.NAME_SET, name=name, set_code=set_code)

    @classmethod
    def by_number_set(
        cls, collector_number: str, set_code: str, name: Optional[str] = None
    ) -> "CardIdentifier":
        return cls(
            IdentifierKind.COLLECTOR_NUMBER_SET,
            name=name,
            set_code=set_code,
            collector_number=collector_number,
        )

    def to_scryfall(self) -> Dict[str, str]:
        """
        Identifier dictionary for a collection lookup
        :return: Scryfall identifier
        """
        if self.kind is IdentifierKind.ID:
            return {"id": self.scryfall_id or ""}
        if self.kind is IdentifierKind.NAME:
            return {"name": self.name or ""}
        if self.kind is IdentifierKind.NAME_SET:
            return {"name": self.name or "", "set": self.set_code or ""}
        return {"collector_number": self.collector_number or "", "set": self.set_code or ""}

    def matches_not_found(self, not_found: Dict[str, str]) -> bool:
        """
        Is this identifier the one reported back as not found
        :param not_found: Scryfall identifier from the not_found list
        :return: Same lookup
        """
        return {key: value.lower() for key, value in self.to_scryfall().items()} == {
            key: str(value).lower() for key, value in not_found.items()
        }

    def _name_matches(self, card: BoosterCardObject) -> bool:
        name = (self.name or "").lower()
        card_name = card.name.lower()
        return card_name == name or name in (face.strip() for face in card_name.split("//"))

    def matches(self, card: BoosterCardObject) -> bool:
        """
        Does a looked up card satisfy this identifier
        :param card: Found card
        :return: Card matches
        """
        if self.kind is IdentifierKind.ID:
            return card.scryfall_id == self.scryfall_id
        if self.kind is IdentifierKind.NAME:
            return self._name_matches(card)
        if self.kind is IdentifierKind.NAME_SET:
            return self._name_matches(card) and card.set_code == (self.set_code or "").lower()
        return (
            card.collector_number.lower() == (self.collector_number or "").lower()
            and card.set_code == (self.set_code or "").lower()
        )

    def __str__(self) -> str:
        if self.kind is IdentifierKind.ID:
            return self.scryfall_id or ""
        if self.kind is IdentifierKind.NAME:
            return self.name or ""
        if self.kind is IdentifierKind.NAME_SET:
            return f"{self.name} ({self.set_code})"
        return f"{self.set_code} #{self.collector_number}"


@dataclasses.dataclass
class CardCount:
    identifier: CardIdentifier
    count: int = 1


@dataclasses.dataclass
class CardGroup:
    name: str
    card_counts: List[CardCount] = dataclasses.field(default_factory=list)


class CardLineRecord(BaseModel):
    """Card line of a JSON decklist file."""

    count: int = 1
    id: Optional[str] = None
    name: Optional[str] = None
    set: Optional[str] = None
    collector_number: Optional[str] = Field(default=None, alias="collectorNumber")

    def to_card_count(self) -> CardCount:
        if self.id:
            identifier = CardIdentifier.by_id(self.id)
        elif self.set and self.collector_number:
            identifier = CardIdentifier.by_number_set(self.collector_number, self.set, self.name)
        elif self.set and self.name:
            identifier = CardIdentifier.by_name_set(self.name, self.set)
        elif self.name:
            identifier = CardIdentifier.by_name(self.name)
        else:
            raise EmptyInput("Decklist line without an id or name")
        return CardCount(identifier, self.count)


class CardGroupRecord(BaseModel):
    """Named group of a JSON decklist file."""

    name: str = ""
    cards: List[CardLineRecord] = Field(default_factory=list)


def load_card_groups(path: pathlib.Path) -> List[CardGroup]:
    """
    Read card groups from a JSON decklist file
    :param path: File holding a list of {"name", "cards": [...]} groups
    :return: Card groups
    """
    with path.open(encoding="utf-8") as file:
        groups_json = json.load(file)

    return [
        CardGroup(record.name, [line.to_card_count() for line in record.cards])
        for record in (CardGroupRecord.model_validate(group) for group in groups_json)
    ]


def fix_identifier(identifier: CardIdentifier, autofix: bool = True) -> CardIdentifier:
    """
    Rewrite legacy or unusable set codes in an identifier
    :param identifier: Identifier as written in the decklist
    :param autofix: Replace unusable set codes by a name-only lookup
    :return: Identifier to look up
    """
    set_code = identifier.set_code or ""
    fixed_code = constants.FIXED_SET_CODES.get(set_code.lower())

    if identifier.kind is IdentifierKind.NAME_SET:
        if fixed_code:
            return CardIdentifier.by_name_set(identifier.name or "", fixed_code)
        if set_code.upper() in constants.MYSTERY_DECKLIST_SET_CODES:
            return CardIdentifier.by_name(identifier.name or "")
        if autofix and len(set_code) not in VALID_SET_CODE_LENGTHS:
            return CardIdentifier.by_name(identifier.name or "")

    if identifier.kind is IdentifierKind.COLLECTOR_NUMBER_SET:
        if fixed_code:
            return CardIdentifier.by_number_set(
                identifier.collector_number or "", fixed_code, identifier.name
            )
        mystery_code = constants.MYSTERY_DECKLIST_SET_CODES.get(set_code.upper())
        if identifier.name and mystery_code:
            return CardIdentifier.by_name_set(identifier.name, mystery_code)
        if identifier.name and autofix and len(set_code) not in VALID_SET_CODE_LENGTHS:
            return CardIdentifier.by_name(identifier.name)

    return identifier


class DeckObject(JsonObject):
    """
    Packs built from a decklist, and the tokens its cards make
    """

    packs: List[BoosterPackObject]
    tokens: List[BoosterCardObject]

    def __init__(self) -> None:
        self.packs = []
        self.tokens = []

    def to_json(self):
        return {
            "packs": [pack.to_json() for pack in self.packs],
            "tokens": [token.to_json() for token in self.tokens],
        }


class _Lookup:
    """Found cards and outstanding identifiers across the retry rounds"""

    def __init__(self, source: CardSource) -> None:
        self.source = source
        self.found: List[BoosterCardObject] = []
        self.not_found: List[CardIdentifier] = []

    def fetch(self, identifiers: Sequence[CardIdentifier]) -> None:
        if not identifiers:
            return
        found, not_found = self.source.collection(
            [identifier.to_scryfall() for identifier in identifiers]
        )
        self.found.extend(found)
        self.not_found.extend(
            identifier
            for identifier in identifiers
            if any(identifier.matches_not_found(missing) for missing in not_found)
        )

    def retry(self, rewrite) -> Dict[CardIdentifier, CardIdentifier]:
        """
        Rewrite not-found identifiers and look them up again
        :param rewrite: Returns a replacement identifier, or None to keep it
        :return: Old identifier to replacement
        """
        replacements: Dict[CardIdentifier, CardIdentifier] = {}
        for identifier in self.not_found:
            replacement = rewrite(identifier)
            if replacement is not None and replacement != identifier:
                replacements[identifier] = replacement

        if replacements:
            LOGGER.info(f"Retrying {len(replacements)} decklist cards with looser identifiers")
            self.not_found = [
                identifier for identifier in self.not_found if identifier not in replacements
            ]
            self.fetch(list(dict.fromkeys(replacements.values())))
        return replacements


def _drop_collector_number(identifier: CardIdentifier) -> Optional[CardIdentifier]:
    if identifier.kind is IdentifierKind.COLLECTOR_NUMBER_SET and identifier.name:
        return CardIdentifier.by_name_set(identifier.name, identifier.set_code or "")
    return None


def _drop_set(identifier: CardIdentifier) -> Optional[CardIdentifier]:
    if identifier.name:
        return CardIdentifier.by_name(identifier.name)
    return None


def _apply(groups: List[CardGroup], replacements: Dict[CardIdentifier, CardIdentifier]) -> None:
    for group in groups:
        for card_count in group.card_counts:
            card_count.identifier = replacements.get(card_count.identifier, card_count.identifier)


def _newest_per_oracle_id(tokens: List[BoosterCardObject]) -> List[BoosterCardObject]:
    newest: Dict[Optional[str], BoosterCardObject] = {}
    for token in tokens:
        current = newest.get(token.oracle_id)
        if current is None or (token.release_date or "") > (current.release_date or ""):
            newest[token.oracle_id] = token
    return list(newest.values())


def _related_tokens(
    source: CardSource, cards: List[BoosterCardObject], tokens: List[BoosterCardObject]
) -> List[BoosterCardObject]:
    token_ids = list(
        dict.fromkeys(
            part.scryfall_id for card in cards for part in card.all_parts if part.component == "token"
        )
    )
    if not token_ids:
        return tokens

    found, _ = source.collection([{"id": token_id} for token_id in token_ids])
    known_oracle_ids = {token.oracle_id for token in tokens}
    tokens = tokens + [
        card for card in found if card.oracle_id is not None and card.oracle_id not in known_oracle_ids
    ]
    return _newest_per_oracle_id(tokens)


def build_deck(
    groups: Sequence[CardGroup],
    source: CardSource,
    include_tokens: bool = True,
    autofix: bool = True,
) -> DeckObject:
    """
    Look up every card of a decklist and lay the groups out as packs
    :param groups: Named card groups
    :param source: Card data source
    :param include_tokens: Look up tokens made by the cards
    :param autofix: Loosen identifiers that match nothing
    :return: Deck packs and tokens
    """
    groups = [
        CardGroup(
            group.name,
            [CardCount(fix_identifier(count.identifier, autofix), count.count) for count in group.card_counts],
        )
        for group in groups
        if group.card_counts
    ]

    identifiers = list(
        dict.fromkeys(count.identifier for group in groups for count in group.card_counts)
    )
    if not identifiers:
        raise EmptyInput()

    lookup = _Lookup(source)
    lookup.fetch(identifiers)

    if lookup.not_found and autofix:
        _apply(groups, lookup.retry(_drop_collector_number))
    if lookup.not_found and autofix:
        _apply(groups, lookup.retry(_drop_set))

    if lookup.not_found:
        raise NoCardFound(", ".join(str(identifier) for identifier in lookup.not_found))
    if not lookup.found:
        raise NoCards("No decklist cards were found")

    resolved: Dict[CardIdentifier, BoosterCardObject] = {}
    for group in groups:
        for card_count in group.card_counts:
            identifier = card_count.identifier
            if identifier in resolved:
                continue
            card = next((card for card in lookup.found if identifier.matches(card)), None)
            if card is None:
                raise WrongCardCount(f"No looked up card lines up with {identifier}")
            resolved[identifier] = card

    deck = DeckObject()
    tokens: List[BoosterCardObject] = []
    packs: List[BoosterPackObject] = []
    for group in groups:
        pack = BoosterPackObject(name=group.name)
        for card_count in group.card_counts:
            card = resolved[card_count.identifier]
            if include_tokens and card.is_token_or_emblem:
                tokens.extend([card] * card_count.count)
            else:
                pack.append_all([card] * card_count.count)
        packs.append(pack)

    if include_tokens:
        tokens = _related_tokens(source, list(resolved.values()), tokens)
    deck.tokens = sorted(tokens, key=lambda token: token.name)

    if len(packs) == 1:
        if deck.tokens:
            packs[0].insert(deck.tokens[0])
        deck.packs = packs
    else:
        deck.packs = list(reversed(packs))
        if deck.tokens:
            token_pack = BoosterPackObject(name=TOKEN_PACK_NAME)
            token_pack.append(deck.tokens[0])
            deck.packs.insert(0, token_pack)

    LOGGER.info(f"Built {len(deck.packs)} decklist packs with {len(deck.tokens)} tokens")
    return deck
