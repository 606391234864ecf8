import pytest

from boostergen.booster import assembler
from boostergen.booster.assembler import assemble, assemble_candidate, roll_plan
from boostergen.booster.options import GenerationOptions
from boostergen.booster.partitioner import partition
from boostergen.booster.policies import (
    FoilPolicy,
    GenerationPolicy,
    Mode,
    MythicPolicy,
    ShowcaseRarity,
)
from boostergen.booster.retry import generate_pack
from boostergen.classes import RelatedCardObject
from boostergen.consts.rarities import Rarity

from conftest import make_card, make_release_cards, make_token

DEFAULT_POLICY = GenerationPolicy(Mode.DEFAULT, FoilPolicy.MODERN, MythicPolicy.POST_M21)


@pytest.fixture
def no_foils(mocker):
    return mocker.patch.object(assembler, "_included_foil_rarity", return_value=None)


@pytest.fixture
def pool(release_cards):
    return partition(release_cards + [make_token("Soldier"), make_token("Zombie")], "tst")


def test_baseline_pack_layout(pool, rng, no_foils):
    plan = roll_plan(pool, DEFAULT_POLICY, rng=rng)
    plan.showcase_rarity = None
    pack = assemble_candidate(pool, plan, rng)

    assert len(pack) == 16
    assert all(card.rarity is Rarity.COMMON for card in pack.cards[:10])
    assert all(card.rarity is Rarity.UNCOMMON for card in pack.cards[10:13])
    assert pack.cards[13].rarity in (Rarity.RARE, Rarity.MYTHIC)
    assert pack.cards[14].is_basic_land
    assert pack.cards[15].is_token_or_emblem
    assert not any(selection.is_foil for selection in pack)


def test_pack_without_tokens_has_fifteen_cards(pool, rng, no_foils):
    pack = assemble(
        pool,
        Mode.DEFAULT,
        FoilPolicy.MODERN,
        MythicPolicy.POST_M21,
        GenerationOptions(include_tokens=False),
        rng,
    )

    assert len(pack) == 15
    assert not any(card.is_token_or_emblem for card in pack.cards)


def test_non_common_foil_takes_a_common_slot(pool, rng, mocker):
    mocker.patch.object(assembler, "_included_foil_rarity", return_value=Rarity.RARE)
    plan = roll_plan(pool, DEFAULT_POLICY, rng=rng)
    plan.include_masterpiece = False
    plan.include_foil_borderless = False
    pack = assemble_candidate(pool, plan, rng)

    foils = [selection.card for selection in pack if selection.is_foil]
    assert len(pack) == 16
    assert len(foils) == 1
    assert foils[0].rarity is Rarity.RARE
    assert sum(card.rarity is Rarity.COMMON and not card.is_basic_land for card in pack.cards) == 9


def test_common_foil_is_not_inserted(pool, rng, mocker):
    mocker.patch.object(assembler, "_included_foil_rarity", return_value=Rarity.COMMON)
    plan = roll_plan(pool, DEFAULT_POLICY, rng=rng)
    pack = assemble_candidate(pool, plan, rng)

    assert not any(selection.is_foil for selection in pack)
    assert len(pack) == 16


def test_extended_art_version_replaces_foil(rng, mocker):
    mocker.patch.object(assembler, "_included_foil_rarity", return_value=Rarity.RARE)
    cards = make_release_cards(counts=(12, 4, 1, 1))
    extended = [
        make_card(card.name, Rarity.RARE, card.colors, frame_effects=["extendedart"])
        for card in cards
        if card.rarity is Rarity.RARE
    ]
    pool = partition(cards + extended, "tst")

    plan = roll_plan(pool, DEFAULT_POLICY, rng=rng)
    plan.include_foil_borderless = False
    pack = assemble_candidate(pool, plan, rng)
    foils = [selection.card for selection in pack if selection.is_foil]
    assert foils[0].is_extended_art

    plan.include_extended_art = False
    pack = assemble_candidate(pool, plan, rng)
    foils = [selection.card for selection in pack if selection.is_foil]
    assert not foils[0].is_extended_art


def test_generated_pack_passes_validation(pool, rng):
    pack = generate_pack(pool, DEFAULT_POLICY, rng=rng)

    assert len(pack) == 16
    assert pack.unique_name_count() == 16
    assert pack.color_union() >= {"W", "U", "B", "R", "G"}


def test_partners_are_drawn_together(rng, no_foils):
    cards = make_release_cards()
    first = make_card("Pir", Rarity.UNCOMMON, oracle_text="Partner with Toothy")
    second = make_card("Toothy", Rarity.UNCOMMON, ("U",), oracle_text="Partner with Pir")
    first.all_parts = [RelatedCardObject(second.scryfall_id, "combo_piece", second.name)]
    second.all_parts = [RelatedCardObject(first.scryfall_id, "combo_piece", first.name)]
    pool = partition(cards + [first, second], "tst")

    plan = roll_plan(pool, DEFAULT_POLICY, GenerationOptions(include_tokens=False), rng)
    plan.showcase_rarity = None
    seen_pair = False
    for _ in range(200):
        pack = assemble_candidate(pool, plan, rng)
        names = {card.name for card in pack.cards}
        assert ("Pir" in names) == ("Toothy" in names)
        assert sum(card.rarity is Rarity.UNCOMMON for card in pack.cards) == 3
        seen_pair = seen_pair or "Pir" in names
    assert seen_pair


@pytest.mark.parametrize(
    "rarity, partnered, first_type",
    [
        pytest.param(Rarity.RARE, True, "Legendary Creature — Test", id="rare-partners"),
        pytest.param(Rarity.MYTHIC, True, "Legendary Creature — Test", id="mythic-partners"),
        pytest.param(
            Rarity.MYTHIC, False, "Legendary Planeswalker — Huatli", id="planeswalker-without-partner"
        ),
    ],
)
def test_rare_slot_partners(rng, no_foils, rarity, partnered, first_type):
    first = make_card("Huatli, Dragon Hero", rarity, ("R",), type_line=first_type)
    second = make_card("Sun-Crested Raptor", rarity, ("W",))
    if partnered:
        first.oracle_text = f"Partner with {second.name}"
        second.oracle_text = f"Partner with {first.name}"
        first.all_parts = [RelatedCardObject(second.scryfall_id, "combo_piece", second.name)]
        second.all_parts = [RelatedCardObject(first.scryfall_id, "combo_piece", first.name)]
    else:
        first.oracle_text = "+1: Create a 3/3 green Dinosaur creature token with trample."
        first.all_parts = [RelatedCardObject(second.scryfall_id, "token", second.name)]
    pool = partition(make_release_cards() + [first, second], "tst")

    plan = roll_plan(pool, DEFAULT_POLICY, GenerationOptions(include_tokens=False), rng)
    plan.showcase_rarity = None
    seen_first = False
    for _ in range(400):
        pack = assemble_candidate(pool, plan, rng)
        names = {card.name for card in pack.cards}
        pair_in_pack = first.name in names and second.name in names
        rare_count = sum(card.rarity in (Rarity.RARE, Rarity.MYTHIC) for card in pack.cards)
        uncommon_count = sum(card.rarity is Rarity.UNCOMMON for card in pack.cards)

        assert len(pack) == plan.card_count == 15
        if partnered:
            assert (first.name in names) == (second.name in names)
        else:
            assert not pair_in_pack
        assert rare_count == (2 if pair_in_pack else 1)
        assert uncommon_count == (2 if pair_in_pack else 3)
        seen_first = seen_first or first.name in names
    assert seen_first


def test_showcase_band_needs_a_drawable_regular_printing(pool, rng, mocker):
    mocker.patch.object(assembler, "showcase_rarity", return_value=ShowcaseRarity.RARE_MYTHIC)
    policy = GenerationPolicy(Mode.IKORIA, FoilPolicy.MODERN, MythicPolicy.POST_M21)
    rare = pool.rarities[Rarity.RARE][0]
    pool.showcase_rarities = {
        Rarity.RARE: [
            make_card("Box Topper", Rarity.RARE, frame_effects=["showcase"]),
            make_card(
                rare.name, Rarity.RARE, rare.colors, frame_effects=["showcase"], is_found_in_boosters=False
            ),
        ]
    }

    assert roll_plan(pool, policy, rng=rng).showcase_rarity is None
    pack = generate_pack(pool, policy, rng=rng, max_attempts=50)
    assert not any(card.is_showcase for card in pack.cards)

    pool.showcase_rarities[Rarity.RARE].append(
        make_card(rare.name, Rarity.RARE, rare.colors, frame_effects=["showcase"])
    )
    assert roll_plan(pool, policy, rng=rng).showcase_rarity is ShowcaseRarity.RARE_MYTHIC


def test_double_masters_has_two_rares_and_no_land(rng):
    pool = partition(make_release_cards("2xm", basic_lands=False), "2xm")
    policy = GenerationPolicy(Mode.DOUBLE_MASTERS, FoilPolicy.MODERN, MythicPolicy.POST_M21)

    plan = roll_plan(pool, policy, rng=rng)
    assert plan.land_count == 0
    assert plan.card_count == 15

    pack = assemble_candidate(pool, plan, rng)
    rares = [
        selection.card
        for selection in pack
        if not selection.is_foil and selection.card.rarity in (Rarity.RARE, Rarity.MYTHIC)
    ]
    assert len(rares) == 2
    assert len(pack) == 15


def test_war_packs_always_hold_a_planeswalker(rng, no_foils):
    cards = make_release_cards("war")
    walkers = [
        make_card(f"Walker {rarity.value}", rarity, set_code="war", type_line="Legendary Planeswalker — Test")
        for rarity in (Rarity.UNCOMMON, Rarity.RARE, Rarity.MYTHIC)
    ]
    pool = partition(cards + walkers, "war")
    policy = GenerationPolicy(Mode.WAR_OF_THE_SPARK, FoilPolicy.MODERN, MythicPolicy.POST_M21)

    for _ in range(50):
        plan = roll_plan(pool, policy, rng=rng)
        assert plan.guaranteed_planeswalker_slot in range(4)
        pack = assemble_candidate(pool, plan, rng)
        assert sum(card.is_planeswalker for card in pack.cards) == 1


def test_m21_keeps_a_single_teferi(rng):
    cards = make_release_cards("m21")
    teferis = [
        make_card("Teferi, Master of Time", Rarity.MYTHIC, ("U",), set_code="m21")
        for _ in range(4)
    ]
    pool = partition(cards + teferis, "m21")
    policy = GenerationPolicy(Mode.M21, FoilPolicy.MODERN, MythicPolicy.POST_M21)

    plan = roll_plan(pool, policy, rng=rng)

    names = [card.name for card in plan.rarities[Rarity.MYTHIC]]
    assert names.count("Teferi, Master of Time") == 1
    assert len(pool.rarities[Rarity.MYTHIC]) == 9


def test_showcase_swap_keeps_pack_size(pool, rng, no_foils):
    showcases = [
        make_card(card.name, card.rarity, card.colors, frame_effects=["showcase"])
        for card in pool.rarities[Rarity.COMMON]
    ]
    pool.showcase_rarities = {Rarity.COMMON: showcases}

    plan = roll_plan(pool, DEFAULT_POLICY, rng=rng)
    plan.showcase_rarity = ShowcaseRarity.COMMON_UNCOMMON
    pack = assemble_candidate(pool, plan, rng)

    assert len(pack) == 16
    assert sum(card.is_showcase for card in pack.cards) == 1


def test_zendikar_rising_guaranteed_double_faced_rare(rng, no_foils):
    cards = make_release_cards("znr")
    modal = [
        make_card(f"Modal {index}", Rarity.RARE, set_code="znr", layout="modal_dfc")
        for index in range(3)
    ]
    pool = partition(cards + modal, "znr")
    policy = GenerationPolicy(Mode.ZENDIKAR_RISING, FoilPolicy.MODERN, MythicPolicy.POST_M21)

    plan = roll_plan(pool, policy, rng=rng)
    assert all(card.layout != "modal_dfc" for card in plan.rarities[Rarity.RARE])
    plan.double_faced_rarity = Rarity.RARE
    plan.showcase_rarity = None
    plan.include_borderless_planeswalker = False
    pack = assemble_candidate(pool, plan, rng)

    rares = [card for card in pack.cards if card.rarity in (Rarity.RARE, Rarity.MYTHIC)]
    assert len(rares) == 1
    assert rares[0].layout == "modal_dfc"


@pytest.mark.parametrize(
    "mode, has_land_slot, has_tokens, count",
    [
        pytest.param(Mode.DEFAULT, True, True, 16, id="default"),
        pytest.param(Mode.DEFAULT, False, True, 15, id="no-land-slot"),
        pytest.param(Mode.DEFAULT, True, False, 15, id="no-tokens"),
        pytest.param(Mode.UNGLUED, True, False, 10, id="unglued"),
        pytest.param(Mode.ALLIANCES_CHRONICLES, False, False, 12, id="chronicles"),
        pytest.param(Mode.VINTAGE_MASTERS, True, True, 17, id="vintage-masters"),
    ],
)
def test_card_count(mode, has_land_slot, has_tokens, count):
    assert assembler._card_count(mode, has_land_slot, has_tokens) == count
