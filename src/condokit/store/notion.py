"""Notion API record store."""

import logging
from typing import Any, Optional

import requests

from condokit.domain.errors import RecordStoreError
from condokit.store.base import RecordStore

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
DEFAULT_TIMEOUT = 30


class NotionRecordStore(RecordStore):
    """Record store creating pages in Notion databases."""

    def __init__(
        self,
        token: str,
        base_url: str = NOTION_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Notion record store.

        Args:
            token: Notion integration token
            base_url: API root, overridable for tests
            timeout: Per-request timeout in seconds
            session: Optional preconfigured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            }
        )

    def create_record(self, collection_id: str, properties: dict[str, Any]) -> str:
        """Create a page in a Notion database. Returns the page ID."""
        body = {"parent": {"database_id": collection_id}, "properties": properties}
        url = f"{self.base_url}/pages"
        logger.debug("POST %s (database %s)", url, collection_id)
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise RecordStoreError(f"Request to Notion failed: {e}") from e

        if not response.ok:
            raise RecordStoreError(
                f"HTTP {response.status_code} POST /pages: {_error_message(response)}"
            )
        return response.json()["id"]

    def close(self) -> None:
        self.session.close()


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    return payload.get("message") or response.text
