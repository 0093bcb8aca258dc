# Thin client for the Notion REST API (databases, pages, block children).

from typing import Any, Callable, Dict, Optional

import requests

from salon_ai.log import get_logger

logger = get_logger("notion")

NOTION_API = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionAPIError(RuntimeError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Notion API error: {status_code}")
        self.status_code = status_code
        self.body = body


class NotionClient:
    def __init__(
        self,
        api_key: str,
        version: str = NOTION_VERSION,
        base_url: str = NOTION_API,
        timeout: Optional[float] = 30,
        http_get: Callable[..., Any] = requests.get,
        http_post: Callable[..., Any] = requests.post,
    ):
        self.api_key = api_key
        self.version = version
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._get = http_get
        self._post = http_post

    def _headers(self, with_body: bool = False) -> Dict[str, str]:
        h = {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.version,
        }
        if with_body:
            h["Content-Type"] = "application/json"
        return h

    def _check(self, resp, what: str) -> Dict[str, Any]:
        if not 200 <= resp.status_code < 300:
            logger.error("Notion API error (%s): %s", what, resp.text)
            raise NotionAPIError(resp.status_code, resp.text)
        return resp.json()

    def query_database(self, database_id: str, page_size: int = 100) -> Dict[str, Any]:
        resp = self._post(
            f"{self.base_url}/databases/{database_id}/query",
            headers=self._headers(with_body=True),
            json={"page_size": page_size},
            timeout=self.timeout,
        )
        return self._check(resp, "database")

    def get_page(self, page_id: str) -> Dict[str, Any]:
        resp = self._get(f"{self.base_url}/pages/{page_id}", headers=self._headers(), timeout=self.timeout)
        return self._check(resp, "page")

    def get_block_children(self, block_id: str) -> Dict[str, Any]:
        resp = self._get(
            f"{self.base_url}/blocks/{block_id}/children",
            headers=self._headers(),
            timeout=self.timeout,
        )
        return self._check(resp, "blocks")
