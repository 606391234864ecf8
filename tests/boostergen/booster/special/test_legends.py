import pytest

from boostergen.booster.special.legends import (
    LEGENDS_PACK_SIZE,
    choose_legend_rarities,
    generate_legends_pack,
    partition_legends,
)
from boostergen.constants import PRISMATIC_PIPER_ID
from boostergen.consts.colors import COLORS
from boostergen.consts.rarities import Rarity
from boostergen.errors import NotInBoosters

from conftest import make_card, make_release_cards, make_token


def _legend(name, rarity, color):
    return make_card(name, rarity, (color,), "cmr", type_line="Legendary Creature — Elf")


@pytest.fixture
def legends_cards():
    cards = make_release_cards("cmr", counts=(14, 4, 2, 1), basic_lands=False)
    for color in COLORS:
        for rarity in (Rarity.UNCOMMON, Rarity.RARE, Rarity.MYTHIC):
            cards.append(_legend(f"{color} Legend {rarity.value}", rarity, color))
    return cards


def test_partition_splits_legends_and_printings(legends_cards):
    etched = make_card("W Legend rare", Rarity.RARE, set_code="cmr", collector_number="600", frame_effects=["etched"])
    extended = make_card("W Rare 0", Rarity.RARE, set_code="cmr", frame_effects=["extendedart"])
    borderless = make_card("W Legend mythic", Rarity.MYTHIC, set_code="cmr", border_color="borderless")

    pool = partition_legends(legends_cards + [etched, extended, borderless], [make_token("Elf")])

    assert len(pool.legend_rarities[Rarity.UNCOMMON]) == 5
    assert all("Legendary" not in card.type_line for card in pool.rarities[Rarity.RARE])
    assert pool.etched_foils == [etched]
    assert pool.extended_art == [extended]
    assert pool.borderless_planeswalkers == [borderless]
    assert len(pool.tokens) == 1


def test_prismatic_piper_is_kept_aside(legends_cards):
    piper = make_card("The Prismatic Piper", set_code="cmr", colors=())
    piper.scryfall_id = PRISMATIC_PIPER_ID

    pool = partition_legends(legends_cards + [piper])

    assert pool.prismatic_piper is piper
    assert piper not in pool.rarities[Rarity.COMMON]


def test_partition_without_booster_cards_raises():
    with pytest.raises(NotInBoosters):
        partition_legends([make_card("Precon", set_code="cmr", is_found_in_boosters=False)])


def test_foil_candidates_list_non_legends_twice(legends_cards):
    pool = partition_legends(legends_cards)
    foils = pool.foil_rarities()

    rare_count = len(pool.rarities[Rarity.RARE])
    legend_count = len(pool.legend_rarities[Rarity.RARE])
    assert len(foils[Rarity.RARE]) == 2 * rare_count + legend_count


def test_etched_reprints_join_mythic_foils(legends_cards):
    in_boosters = make_card("Etched", set_code="cmr", collector_number="500", frame_effects=["etched"])
    collector_only = make_card("Etched Later", set_code="cmr", collector_number="547", frame_effects=["etched"])

    foils = partition_legends(legends_cards + [in_boosters, collector_only]).foil_rarities()

    assert in_boosters in foils[Rarity.MYTHIC]
    assert collector_only not in foils[Rarity.MYTHIC]


def test_legend_rarities_always_pick_two(rng):
    for _ in range(500):
        assert sum(choose_legend_rarities(rng).values()) == 2


def test_legends_pack_shape(legends_cards, rng):
    pool = partition_legends(legends_cards, [make_token("Elf Warrior")])

    pack = generate_legends_pack(pool, rng)

    assert len(pack) == LEGENDS_PACK_SIZE + 1
    assert pack.cards[-1].is_token_or_emblem
    assert pack.unique_name_count() == LEGENDS_PACK_SIZE + 1
    assert sum(selection.is_foil for selection in pack) == 1
    legends = [card for card in pack.cards if "Legendary" in card.type_line]
    assert len(legends) >= 2
    assert pack.cards[0].rarity is Rarity.COMMON
