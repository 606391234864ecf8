import logging

import pytest

from boostergen.booster import assembler
from boostergen.booster.assembler import roll_plan
from boostergen.booster.partitioner import partition
from boostergen.booster.policies import FoilPolicy, GenerationPolicy, Mode, MythicPolicy, ShowcaseRarity
from boostergen.booster.retry import generate_pack, generate_until_valid
from boostergen.booster.validator import color_problems, unique_count_problems, validate
from boostergen.classes import BoosterPackObject
from boostergen.consts.rarities import Rarity
from boostergen.errors import GenerationExhausted

from conftest import make_basic_land, make_card, make_release_cards


def _pack(cards):
    pack = BoosterPackObject()
    pack.append_all(cards)
    return pack


def _plan(pool, mode=Mode.DEFAULT, rng=None):
    plan = roll_plan(pool, GenerationPolicy(mode, FoilPolicy.MODERN, MythicPolicy.POST_M21), rng=rng)
    plan.showcase_rarity = None
    return plan


def test_color_problems_ignore_lands_by_default():
    cards = [make_card(f"Card {color}", colors=(color,)) for color in "WUBR"]
    cards.append(make_card("Green Land", colors=("G",), type_line="Land"))

    assert color_problems(_pack(cards)) == ["missing colors G"]
    assert color_problems(_pack(cards), include_lands=True) == []


def test_unique_count_problems():
    pack = _pack([make_card("A"), make_card("A"), make_card("B")])

    assert unique_count_problems(pack, 2) == []
    assert unique_count_problems(pack, 3) == ["2 unique cards, expected 3"]


def test_validate_rejects_duplicate_names(rng):
    pool = partition(make_release_cards(), "tst")
    plan = _plan(pool, rng=rng)
    cards = [make_card(f"Card {color}", colors=(color,)) for color in "WUBRG"]

    problems = validate(_pack(cards + cards[:1]), plan, pool)

    assert problems == [f"5 unique cards, expected {plan.card_count}"]


def test_validate_skips_colors_for_mono_color_pools(rng):
    pool = partition(
        [make_card(f"White {index}") for index in range(20)] + [make_basic_land("Plains")], "tst"
    )
    plan = _plan(pool, rng=rng)
    plan.card_count = 1

    assert validate(_pack([make_card("White 0")]), plan, pool) == []


def test_dominaria_requires_a_legendary_creature(rng):
    pool = partition(make_release_cards("dom"), "dom")
    plan = _plan(pool, Mode.DOMINARIA, rng)
    cards = [make_card(f"Card {color}", colors=(color,)) for color in "WUBRG"]
    plan.card_count = 5

    assert validate(_pack(cards), plan, pool) == ["no legendary creature"]

    cards[0] = make_card("Legend", type_line="Legendary Creature — Human")
    assert validate(_pack(cards), plan, pool) == []


@pytest.mark.parametrize(
    "future_count, valid",
    [(4, False), (5, True), (10, True), (11, False)],
)
def test_future_sight_frame_count(rng, future_count, valid):
    pool = partition(make_release_cards("fut"), "fut")
    plan = _plan(pool, Mode.FUTURE_SIGHT, rng)
    cards = [
        make_card(f"Card {index}", colors=("WUBRG"[index % 5],), frame="future" if index < future_count else "2003")
        for index in range(15)
    ]
    plan.card_count = 15

    assert (validate(_pack(cards), plan, pool) == []) is valid


def test_showcase_band_must_be_met(rng):
    pool = partition(make_release_cards(), "tst")
    pool.showcase_rarities = {Rarity.RARE: [make_card("Fancy", Rarity.RARE, frame_effects=["showcase"])]}
    plan = _plan(pool, rng=rng)
    plan.showcase_rarity = ShowcaseRarity.RARE_MYTHIC
    plan.card_count = 5
    cards = [make_card(f"Card {color}", colors=(color,)) for color in "WUBRG"]

    assert validate(_pack(cards), plan, pool) == ["no showcase card"]

    cards[0] = make_card("Fancy", Rarity.RARE, frame_effects=["showcase"])
    assert validate(_pack(cards), plan, pool) == []


@pytest.mark.parametrize(
    "mode", [pytest.param(Mode.IKORIA, id="ikoria"), pytest.param(Mode.ZENDIKAR_RISING, id="zendikar-rising")]
)
@pytest.mark.parametrize(
    "band",
    [
        pytest.param(ShowcaseRarity.COMMON_UNCOMMON, id="common-uncommon"),
        pytest.param(ShowcaseRarity.RARE_MYTHIC, id="rare-mythic"),
    ],
)
def test_generated_packs_hold_one_showcase_of_the_band(rng, mocker, mode, band):
    mocker.patch.object(assembler, "showcase_rarity", return_value=band)
    cards = make_release_cards()
    modal = [
        make_card(f"Modal {rarity.value}", rarity, (color,), layout="modal_dfc")
        for rarity, color in zip((Rarity.UNCOMMON, Rarity.RARE, Rarity.MYTHIC), "WUB")
    ]
    showcases = [
        make_card(card.name, card.rarity, card.colors, layout=card.layout, frame_effects=["showcase"])
        for card in cards + modal
        if not card.is_basic_land
    ]
    pool = partition(cards + modal + showcases, "tst")

    pack = generate_pack(pool, GenerationPolicy(mode, FoilPolicy.MODERN, MythicPolicy.POST_M21), rng=rng)

    showcases_in_pack = [card for card in pack.cards if card.is_showcase]
    assert len(showcases_in_pack) == 1
    assert showcases_in_pack[0].rarity in band.allowed_rarities
    assert len(pack) == pack.unique_name_count() == 15


def test_generate_until_valid_retries(caplog):
    candidates = iter(range(10))
    caplog.set_level(logging.DEBUG)

    result = generate_until_valid(
        lambda: next(candidates),
        lambda value: [] if value == 3 else ["too small"],
        "number",
        max_attempts=10,
    )

    assert result == 3
    assert "Rejected number attempt 1: too small" in caplog.text


def test_generate_until_valid_gives_up():
    with pytest.raises(GenerationExhausted) as error:
        generate_until_valid(lambda: 1, lambda value: ["always wrong"], "thing", max_attempts=5)

    assert error.value.attempts == 5
    assert error.value.problems == ["always wrong"]
    assert "thing" in str(error.value)


def test_impossible_pack_is_exhausted(rng):
    # Too few commons to ever fill a pack
    cards = make_release_cards()
    pool = partition(cards, "tst")
    pool.rarities[Rarity.COMMON] = pool.rarities[Rarity.COMMON][:3]

    with pytest.raises(GenerationExhausted):
        generate_pack(
            pool,
            GenerationPolicy(Mode.DEFAULT, FoilPolicy.MODERN, MythicPolicy.POST_M21),
            rng=rng,
            max_attempts=20,
        )
