# Fetches the public Estama shop pages (cast list, schedule).

from typing import Any, Callable, Optional

import requests

from salon_ai.log import get_logger

logger = get_logger("estama")

ESTAMA_SHOP_URL = "https://estama.jp/shop/43923"


class EstamaError(RuntimeError):
    def __init__(self, status_code: int):
        super().__init__(f"Failed to fetch website: {status_code}")
        self.status_code = status_code


class EstamaClient:
    def __init__(
        self,
        shop_url: str = ESTAMA_SHOP_URL,
        timeout: Optional[float] = 30,
        http_get: Callable[..., Any] = requests.get,
    ):
        self.shop_url = shop_url.rstrip("/")
        self.timeout = timeout
        self._get = http_get

    def _fetch(self, path: str) -> str:
        url = f"{self.shop_url}/{path}/"
        logger.info("Fetching Estama page: %s", url)
        resp = self._get(url, timeout=self.timeout)
        if not 200 <= resp.status_code < 300:
            logger.error("Estama fetch failed (%s): %s", path, resp.status_code)
            raise EstamaError(resp.status_code)
        return resp.text

    def fetch_cast_page(self) -> str:
        return self._fetch("cast")

    def fetch_schedule_page(self) -> str:
        return self._fetch("schedule")
