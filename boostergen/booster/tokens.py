"""
Token Resolver

Picks the one token that goes in the back of a pack, preferring
tokens that something in the pack actually makes.
"""
import random
from typing import Iterable, List, Optional, Sequence

from ..classes import BoosterCardObject


def tokens_are_equal(first: BoosterCardObject, second: BoosterCardObject) -> bool:
    """
    Are two token printings interchangeable
    :param first: Token
    :param second: Other token
    :return: Same token
    """
    if first.oracle_id is not None and first.oracle_id == second.oracle_id:
        return True
    if first == second:
        return True
    return (
        first.name == second.name
        and first.type_line == second.type_line
        and first.colors == second.colors
        and first.oracle_text == second.oracle_text
        and first.power == second.power
        and first.toughness == second.toughness
    )


def unique_tokens(tokens: Iterable[BoosterCardObject]) -> List[BoosterCardObject]:
    unique: List[BoosterCardObject] = []
    for token in tokens:
        if not any(tokens_are_equal(token, other) for other in unique):
            unique.append(token)
    return unique


def _token_is_made_by(token: BoosterCardObject, card: BoosterCardObject) -> bool:
    if any(part.scryfall_id == token.scryfall_id for part in card.all_parts):
        return True
    if any(part.scryfall_id == card.scryfall_id for part in token.all_parts):
        return True
    if token.name and token.name.lower() in card.oracle_text.lower():
        return True
    if any(part.name == token.name for part in card.all_parts):
        return True
    return any(part.name == card.name for part in token.all_parts)


def relevant_tokens(
    cards: Sequence[BoosterCardObject],
    tokens: Sequence[BoosterCardObject],
    meld_results: Sequence[BoosterCardObject] = (),
) -> List[BoosterCardObject]:
    """
    Tokens that the given cards (or what they meld into) can make
    :param cards: Main deck cards in the pack
    :param tokens: Candidate tokens
    :param meld_results: Meld result cards of the release
    :return: Matching tokens, one entry per match
    """
    cards_to_check = list(cards)
    for card in cards:
        meld_part = card.meld_result_part()
        if meld_part is None:
            continue
        meld_result = next(
            (result for result in meld_results if result.scryfall_id == meld_part.scryfall_id),
            None,
        )
        if meld_result is not None:
            cards_to_check.append(meld_result)

    return [
        token
        for token in unique_tokens(tokens)
        for card in cards_to_check
        if _token_is_made_by(token, card)
    ]


def resolve_token(
    cards: Sequence[BoosterCardObject],
    tokens: Sequence[BoosterCardObject],
    rng: random.Random,
    meld_results: Sequence[BoosterCardObject] = (),
) -> Optional[BoosterCardObject]:
    """
    Choose the token for a pack
    :param cards: Main deck cards in the pack
    :param tokens: Token pool (every printing)
    :param rng: Random source
    :param meld_results: Meld result cards of the release
    :return: A token printing, or None without a token pool
    """
    if not tokens:
        return None

    available = relevant_tokens(cards, tokens, meld_results) or list(tokens)
    token = rng.choice(available)
    return rng.choice([printing for printing in tokens if tokens_are_equal(token, printing)])
