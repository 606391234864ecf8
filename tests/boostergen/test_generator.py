import datetime
import json

import pytest

from boostergen.booster.options import GenerationOptions
from boostergen.booster.release_rules import HIGH_RES_BASIC_LAND_QUERY
from boostergen.classes import ReleaseObject
from boostergen.constants import BASIC_LAND_NAMES
from boostergen.errors import NoCards
from boostergen.generator import OutputShape, generate, load_release

from conftest import FakeCardSource, make_basic_land, make_release_cards, make_token


@pytest.fixture
def source():
    source = FakeCardSource()
    source.add_release(
        ReleaseObject("tst", "Test Release", datetime.date(2021, 4, 23)), make_release_cards()
    )
    source.add_cards("ttst", [make_token("Zombie"), make_token("Angel")])
    source.add_release(
        ReleaseObject("old", "Old Release", datetime.date(1999, 2, 15)), make_release_cards("old")
    )
    source.add_cards("told", [make_token("Saproling", set_code="told")])
    return source


def test_load_release_fetches_tokens(source):
    release, cards, tokens = load_release("TST", source, GenerationOptions())

    assert release.code == "tst"
    assert len(cards) == 105
    assert {token.name for token in tokens} == {"Zombie", "Angel"}


def test_load_release_skips_tokens_before_cutoff(source):
    _, _, tokens = load_release("old", source, GenerationOptions())
    assert tokens == []


def test_load_release_skips_tokens_when_disabled(source):
    _, _, tokens = load_release("tst", source, GenerationOptions(include_tokens=False))
    assert tokens == []


def test_load_release_without_token_release(source):
    source.release_cards.pop("ttst")

    _, _, tokens = load_release("tst", source, GenerationOptions())

    assert tokens == []


def test_generate_booster_pack(source, rng):
    result = generate("tst", OutputShape.BOOSTER_PACK, source, rng=rng)

    assert len(result["pack"]["cards"]) == 16
    assert {token["name"] for token in result["tokens"]} == {"Zombie", "Angel"}
    json.dumps(result)


def test_generate_booster_box(source, rng):
    result = generate("tst", OutputShape.BOOSTER_BOX, source, count=2, rng=rng)

    assert len(result["packs"]) == 2


def test_generate_card_list(source, rng):
    result = json.loads(generate("tst", OutputShape.BOOSTER_PACK, source, card_list=True, rng=rng))

    lines = result["downloadOutput"].split("\n")
    assert sum(int(line.split(" ")[0]) for line in lines) == 15
    assert all("(TST)" in line for line in lines)


def test_generate_prerelease_kits(source, rng):
    source.search_results["set:ptst is:prerelease"] = []

    result = generate(
        "tst",
        OutputShape.PRERELEASE_KIT,
        source,
        count=2,
        prerelease_booster_count=3,
        prerelease_include_lands=False,
        rng=rng,
    )

    assert len(result) == 2
    assert all(len(kit["boosters"]) == 3 for kit in result)
    assert all(kit["landPacks"] == [] for kit in result)


def test_generate_land_packs_for_release(source, rng):
    result = generate("tst", OutputShape.LAND_PACKS, source, rng=rng)

    assert [pack["name"] for pack in result] == list(BASIC_LAND_NAMES)
    assert all(len(pack["cards"]) == 20 for pack in result)


def test_generate_land_packs_without_release(source, rng):
    source.search_results[HIGH_RES_BASIC_LAND_QUERY] = [
        make_basic_land(name, "hr") for name in BASIC_LAND_NAMES
    ]

    result = generate(None, OutputShape.LAND_PACKS, source, rng=rng)

    assert len(result) == 5
    assert source.searches == [HIGH_RES_BASIC_LAND_QUERY]


def test_generate_requires_release_for_packs(source):
    with pytest.raises(NoCards):
        generate(None, OutputShape.BOOSTER_PACK, source)


def test_generate_boxing_league_box(source, rng):
    result = generate("tst", OutputShape.BOXING_LEAGUE_BOX, source, count=2, rng=rng)

    assert result["name"] == "Test Release"
    assert result["token"]["name"] == "Angel"
    assert result["groups"]


def test_generate_unknown_release(source):
    with pytest.raises(NoCards):
        generate("zzz", OutputShape.BOOSTER_PACK, source)
