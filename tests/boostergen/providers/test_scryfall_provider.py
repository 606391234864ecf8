import datetime

import pytest
import responses
from responses import matchers

from boostergen.consts.rarities import Rarity
from boostergen.errors import NoCardFound, NoCards
from boostergen.providers.scryfall import ScryfallProvider

SET_URL = "https://api.scryfall.com/sets/tst"
SEARCH_URL = "https://api.scryfall.com/cards/search"
COLLECTION_URL = "https://api.scryfall.com/cards/collection"


def card_json(name, **overrides):
    card = {
        "object": "card",
        "id": f"id-{name.lower().replace(' ', '-')}",
        "oracle_id": f"oracle-{name.lower()}",
        "name": name,
        "lang": "en",
        "set": "tst",
        "collector_number": "1",
        "rarity": "common",
        "layout": "normal",
        "type_line": "Creature — Bear",
        "oracle_text": "",
        "colors": ["G"],
        "frame": "2015",
        "border_color": "black",
        "foil": True,
        "nonfoil": True,
        "booster": True,
        "promo": False,
    }
    card.update(overrides)
    return card


def set_json(code="tst", **overrides):
    record = {
        "object": "set",
        "code": code,
        "name": f"{code.upper()} Release",
        "released_at": "2021-04-23",
        "set_type": "expansion",
        "card_count": 2,
        "search_uri": f"https://api.scryfall.com/cards/search?order=set&q=e%3A{code}&unique=prints",
    }
    record.update(overrides)
    return record


def error_json(status=404):
    return {"object": "error", "status": status, "details": "Not found"}


@responses.activate
def test_get_release():
    responses.add(responses.GET, SET_URL, json=set_json())

    release = ScryfallProvider().get_release("TST")

    assert release.code == "tst"
    assert release.name == "TST Release"
    assert release.release_date == datetime.date(2021, 4, 23)


@responses.activate
def test_get_release_missing():
    responses.add(responses.GET, SET_URL, json=error_json(), status=404)

    with pytest.raises(NoCards):
        ScryfallProvider().get_release("tst")


@responses.activate
def test_cards_in_release_follows_pages():
    responses.add(responses.GET, SET_URL, json=set_json())
    responses.add(
        responses.GET,
        "https://api.scryfall.com/cards/search?order=set&q=e%3Atst&unique=prints",
        json={
            "object": "list",
            "has_more": True,
            "next_page": "https://api.scryfall.com/cards/search?order=set&page=2&q=e%3Atst&unique=prints",
            "data": [card_json("Bear")],
        },
    )
    responses.add(
        responses.GET,
        "https://api.scryfall.com/cards/search?order=set&page=2&q=e%3Atst&unique=prints",
        json={"object": "list", "has_more": False, "data": [card_json("Wolf", rarity="uncommon")]},
    )

    cards = ScryfallProvider().cards_in_release("tst")

    assert [card.name for card in cards] == ["Bear", "Wolf"]
    assert cards[1].rarity is Rarity.UNCOMMON
    assert cards[0].is_found_in_boosters


@responses.activate
def test_search_sends_query_and_unique_mode():
    responses.add(
        responses.GET,
        SEARCH_URL,
        match=[matchers.query_param_matcher({"q": "t:goblin", "unique": "prints"})],
        json={"object": "list", "has_more": False, "data": [card_json("Goblin")]},
    )

    cards = ScryfallProvider().search("t:goblin", unique_prints=True)

    assert [card.name for card in cards] == ["Goblin"]


@responses.activate
def test_search_without_results_is_empty():
    responses.add(responses.GET, SEARCH_URL, json=error_json(), status=404)

    assert ScryfallProvider().search("t:nothing") == []


@responses.activate
def test_named_exact_missing_card():
    responses.add(responses.GET, "https://api.scryfall.com/cards/named", json=error_json(), status=404)

    with pytest.raises(NoCardFound):
        ScryfallProvider().named_exact("Nonexistent")


@responses.activate
def test_card_by_number():
    responses.add(
        responses.GET,
        "https://api.scryfall.com/cards/tst/7",
        json=card_json("Bear", collector_number="7"),
    )

    card = ScryfallProvider().card_by_number("TST", "7")

    assert card.collector_number == "7"
    assert card.set_code == "tst"


@responses.activate
def test_double_faced_card_takes_face_fields():
    responses.add(
        responses.GET,
        "https://api.scryfall.com/cards/id-delver",
        json=card_json(
            "Delver of Secrets // Insectile Aberration",
            id="id-delver",
            oracle_id=None,
            layout="transform",
            colors=None,
            type_line=None,
            oracle_text=None,
            card_faces=[
                {
                    "name": "Delver of Secrets",
                    "oracle_id": "oracle-delver",
                    "type_line": "Creature — Human Wizard",
                    "oracle_text": "Transform it.",
                    "colors": ["U"],
                    "power": "1",
                    "toughness": "1",
                },
                {
                    "name": "Insectile Aberration",
                    "type_line": "Creature — Human Insect",
                    "oracle_text": "Flying",
                    "colors": ["U"],
                    "power": "3",
                    "toughness": "2",
                },
            ],
        ),
    )

    card = ScryfallProvider().card_by_id("id-delver")

    assert card.oracle_id == "oracle-delver"
    assert card.colors == ["U"]
    assert card.type_line == "Creature — Human Wizard // Creature — Human Insect"
    assert card.power == "1"


@responses.activate
def test_collection_is_chunked():
    identifiers = [{"name": f"Card {index}"} for index in range(80)]
    responses.add(
        responses.POST,
        COLLECTION_URL,
        json={"object": "list", "data": [card_json("Card 0")], "not_found": []},
    )
    responses.add(
        responses.POST,
        COLLECTION_URL,
        json={"object": "list", "data": [], "not_found": [{"name": "Card 79"}]},
    )

    found, not_found = ScryfallProvider().collection(identifiers)

    assert len(responses.calls) == 2
    assert [card.name for card in found] == ["Card 0"]
    assert not_found == [{"name": "Card 79"}]


@responses.activate
def test_collection_error_marks_everything_not_found():
    responses.add(responses.POST, COLLECTION_URL, json=error_json(400), status=400)

    found, not_found = ScryfallProvider().collection([{"name": "Bear"}])

    assert found == []
    assert not_found == [{"name": "Bear"}]


@responses.activate
def test_get_booster_releases_filters_and_renames():
    responses.add(
        responses.GET,
        "https://api.scryfall.com/sets",
        json={
            "object": "list",
            "data": [
                set_json("znr"),
                set_json("tznr", set_type="token"),
                set_json("plist", set_type="masters"),
                set_json("tsr", set_type="masters", card_count=100),
                set_json("mb1", set_type="masters"),
                set_json("fmb1", set_type="masters"),
            ],
        },
    )

    releases = ScryfallProvider().get_booster_releases()

    assert [release.code for release in releases] == ["znr", "cmb1", "fmb1"]
    assert releases[1].name == "Mystery Booster (Convention Edition)"


@responses.activate
def test_random_search_result(rng):
    responses.add(
        responses.GET,
        SEARCH_URL,
        json={"object": "list", "has_more": False, "data": [card_json("Bear"), card_json("Wolf")]},
    )

    assert ScryfallProvider().random_search_result("t:beast", rng).name in ("Bear", "Wolf")
