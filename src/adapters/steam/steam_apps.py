"""ISteamApps: catálogo completo de aplicaciones."""

from __future__ import annotations

import logging

from adapters.steam.base import SteamInterface
from core.domain.models import App
from core.mapping import convert_list, unwrap_list

logger = logging.getLogger(__name__)


class SteamApps(SteamInterface):
    def get_app_list(self) -> tuple[App, ...]:
        """`ISteamApps/GetAppList/v2` -> todas las apps (`appid` + `name`)."""

        payload = self._get_json(self._web_api_url("ISteamApps", "GetAppList", 2))
        apps = convert_list(App, unwrap_list(payload, "applist", "apps"))
        logger.info("GetAppList returned %d apps", len(apps))
        return apps
