import json

import pytest

from core.domain.models import App, CommunityVisibilityState, OwnedGame, PersonaState, Player
from core.domain.store import AppData, Genre, PackageGroup
from core.mapping import KeyMissingError, TypeMismatchError


def test_player_summary_maps_public_and_private_fields(player_payload):
    player = Player.from_json(player_payload)

    assert player.steamid == "76561197960435530"
    assert player.personaname == "Robin"
    assert player.personastate is PersonaState.OFFLINE
    assert player.communityvisibilitystate is CommunityVisibilityState.PUBLIC
    assert player.is_public
    assert player.realname == "Robin Walker"
    assert player.loccityid == 3961
    assert player.gameid is None


def test_private_player_has_no_private_fields(player_payload):
    for key in ("realname", "primaryclanid", "timecreated", "loccountrycode", "locstatecode", "loccityid"):
        del player_payload[key]
    player_payload["communityvisibilitystate"] = 1

    player = Player.from_json(player_payload)

    assert player.realname is None
    assert player.timecreated is None
    assert not player.is_public


def test_player_unknown_persona_state_is_a_type_mismatch(player_payload):
    player_payload["personastate"] = 42
    with pytest.raises(TypeMismatchError):
        Player.from_json(player_payload)


def test_app_with_only_appid():
    app = App.from_json({"appid": 20})

    assert app.appid == 20
    assert app.name is None
    assert app.playtime_forever is None
    assert OwnedGame is App


def test_app_data_full_payload(app_data_payload):
    details = AppData.from_json(app_data_payload)

    assert details.steam_appid == 440
    assert details.required_age == 0
    assert details.is_free is True
    assert details.developers == ("Valve",)
    assert details.packages == (197845, 330198)
    assert details.package_groups[0].display_type == 0
    assert details.package_groups[0].subs[0].is_free_license is True
    assert [genre.id for genre in details.genres] == [1, 37]
    assert details.movies[0].webm.p480.endswith("movie480.webm")
    assert details.achievements.highlighted[0].name == "Head of the Class"
    assert details.metacritic.score == 92
    assert details.content_descriptors.ids == ()
    assert details.content_descriptors.notes is None
    assert details.price_overview is None
    assert details.fullgame is None


@pytest.mark.parametrize("required_age", [0, "0"])
def test_required_age_accepts_number_or_string(app_data_payload, required_age):
    app_data_payload["required_age"] = required_age
    assert AppData.from_json(app_data_payload).required_age == 0


def test_requirements_objects_are_kept_and_empty_arrays_dropped(app_data_payload):
    details = AppData.from_json(app_data_payload)

    assert details.pc_requirements.minimum.startswith("<strong>Minimum")
    assert details.pc_requirements.recommended is not None
    assert details.mac_requirements.recommended is None
    assert details.linux_requirements is None


def test_requirements_errors_are_reported_with_their_key(app_data_payload):
    app_data_payload["pc_requirements"] = {"recommended": "x"}

    with pytest.raises(KeyMissingError) as excinfo:
        AppData.from_json(app_data_payload)

    assert excinfo.value.path == ("pc_requirements", "minimum")


def test_dlc_with_fullgame_and_price(app_data_payload):
    app_data_payload.update(
        type="dlc",
        is_free=False,
        fullgame={"appid": "440", "name": "Team Fortress 2"},
        price_overview={
            "currency": "EUR",
            "initial": 499,
            "final": 249,
            "discount_percent": 50,
            "initial_formatted": "4,99€",
            "final_formatted": "2,49€",
        },
    )

    details = AppData.from_json(app_data_payload)

    assert details.fullgame.appid == 440
    assert details.price_overview.final == 249


def test_genre_and_package_group_leniency():
    assert Genre.from_json({"id": "23", "description": "Indie"}).id == 23
    assert Genre.from_json({"id": 23, "description": "Indie"}).id == 23
    group = {
        "name": "subscriptions",
        "title": "Buy",
        "description": "",
        "selection_text": "",
        "save_text": "",
        "display_type": 1,
        "is_recurring_subscription": "true",
        "subs": [],
    }
    assert PackageGroup.from_json(group).display_type == 1


def test_app_data_from_json_string_success(app_data_payload):
    body = json.dumps({"440": {"success": True, "data": app_data_payload}})
    details = AppData.from_json_string(body)

    assert details is not None
    assert details.name == "Team Fortress 2"


def test_app_data_from_json_string_failure_is_no_data():
    assert AppData.from_json_string('{"12345":{"success":false}}') is None


def test_app_data_from_json_string_error_path(app_data_payload):
    del app_data_payload["platforms"]
    body = json.dumps({"440": {"success": True, "data": app_data_payload}})

    with pytest.raises(KeyMissingError) as excinfo:
        AppData.from_json_string(body)

    assert excinfo.value.path == ("440", "data", "platforms")


def test_app_data_round_trip(app_data_payload):
    details = AppData.from_json(app_data_payload)
    again = AppData.from_json(details.to_json())

    assert again == details
    assert again.linux_requirements is None
