"""Store API: detalles de aplicaciones (`/api/appdetails`)."""

from __future__ import annotations

import logging

from adapters.steam.base import SteamInterface
from core.domain.store import AppData

logger = logging.getLogger(__name__)


class StoreAPI(SteamInterface):
    def _app_details_params(self, appid: int) -> dict[str, str]:
        params = {"appids": str(appid)}
        if self._settings.store_country_code:
            params["cc"] = self._settings.store_country_code
        if self._settings.store_language:
            params["l"] = self._settings.store_language
        return params

    def app_details_raw(self, appid: int) -> str:
        """Cuerpo crudo (JSON como texto) de `appdetails`."""

        url = f"{self._settings.store_base_url.rstrip('/')}/api/appdetails"
        return self._fetcher.get_text(url, self._app_details_params(appid))

    def app_details(self, appid: int) -> AppData | None:
        """Detalles de la app o `None` si la tienda responde `success=false`."""

        details = AppData.from_json_string(self.app_details_raw(appid))
        if details is None:
            logger.info("appdetails: no data for appid %s", appid)
        return details
