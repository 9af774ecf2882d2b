import copy
import json

import pytest

from core.config import AppSettings


class FakeFetcher:
    """TextFetcher that returns canned bodies and records every call."""

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.calls = []

    def get_text(self, url, params=None):
        self.calls.append((url, dict(params or {})))
        body = self.bodies.pop(0)
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (dict, list)):
            return json.dumps(body)
        return body


PLAYER = {
    "steamid": "76561197960435530",
    "communityvisibilitystate": 3,
    "profilestate": 1,
    "personaname": "Robin",
    "profileurl": "https://steamcommunity.com/id/robinwalker/",
    "avatar": "https://avatars.example/a.jpg",
    "avatarmedium": "https://avatars.example/a_medium.jpg",
    "avatarfull": "https://avatars.example/a_full.jpg",
    "lastlogoff": 1700000000,
    "personastate": 0,
    "realname": "Robin Walker",
    "primaryclanid": "103582791429521412",
    "timecreated": 1063407589,
    "personastateflags": 0,
    "loccountrycode": "US",
    "locstatecode": "WA",
    "loccityid": 3961,
}

APP_DATA = {
    "type": "game",
    "name": "Team Fortress 2",
    "steam_appid": 440,
    "required_age": 0,
    "is_free": True,
    "detailed_description": "Nine distinct classes.",
    "about_the_game": "Nine distinct classes.",
    "short_description": "Team-based action.",
    "supported_languages": "English, French",
    "header_image": "https://cdn.example/440/header.jpg",
    "website": "http://www.teamfortress.com/",
    "pc_requirements": {"minimum": "<strong>Minimum:</strong> 1.7 GHz", "recommended": "<strong>Recommended:</strong> 2 GHz"},
    "mac_requirements": {"minimum": "<strong>Minimum:</strong> OS X 10.5"},
    "linux_requirements": [],
    "developers": ["Valve"],
    "publishers": ["Valve"],
    "packages": [197845, 330198],
    "package_groups": [
        {
            "name": "default",
            "title": "Buy Team Fortress 2",
            "description": "",
            "selection_text": "Select a purchase option",
            "save_text": "",
            "display_type": "0",
            "is_recurring_subscription": "false",
            "subs": [
                {
                    "packageid": 197845,
                    "percent_savings_text": " ",
                    "percent_savings": 0,
                    "option_text": "Team Fortress 2 - Free",
                    "option_description": "",
                    "can_get_free_license": "0",
                    "is_free_license": True,
                    "price_in_cents_with_discount": 0,
                }
            ],
        }
    ],
    "platforms": {"windows": True, "mac": False, "linux": True},
    "metacritic": {"score": 92, "url": "https://www.metacritic.com/game/pc/team-fortress-2"},
    "categories": [{"id": 1, "description": "Multi-player"}, {"id": 22, "description": "Steam Achievements"}],
    "genres": [{"id": "1", "description": "Action"}, {"id": 37, "description": "Free to Play"}],
    "screenshots": [{"id": 0, "path_thumbnail": "https://cdn.example/ss_0.600x338.jpg", "path_full": "https://cdn.example/ss_0.jpg"}],
    "movies": [
        {
            "id": 2028,
            "name": "Meet the Heavy",
            "thumbnail": "https://cdn.example/movie.jpg",
            "webm": {"480": "https://cdn.example/movie480.webm", "max": "https://cdn.example/movie_max.webm"},
            "mp4": {"480": "https://cdn.example/movie480.mp4", "max": "https://cdn.example/movie_max.mp4"},
            "highlight": True,
        }
    ],
    "recommendations": {"total": 1000000},
    "achievements": {"total": 520, "highlighted": [{"name": "Head of the Class", "path": "https://cdn.example/ach.jpg"}]},
    "release_date": {"coming_soon": False, "date": "10 Oct, 2007"},
    "support_info": {"url": "http://steamcommunity.com/app/440", "email": ""},
    "background": "https://cdn.example/440/page_bg.jpg",
    "content_descriptors": {"ids": [], "notes": None},
}


@pytest.fixture
def player_payload():
    return copy.deepcopy(PLAYER)


@pytest.fixture
def app_data_payload():
    return copy.deepcopy(APP_DATA)


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, api_key="test-key")


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher
