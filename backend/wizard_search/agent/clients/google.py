"""
Google Custom Search JSON API client. Uses GOOGLE_API_KEY and GOOGLE_CX.
Reuses a single requests.Session for connection pooling.
"""

import logging
from typing import Any, Optional

import requests

from wizard_search.agent.schemas import SearchResultItem
from wizard_search.errors import ProviderError

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
# The API rejects num outside 1..10
MAX_RESULTS_PER_CALL = 10


def _thumbnail_url(item: dict[str, Any]) -> Optional[str]:
    pagemap = item.get("pagemap")
    if not isinstance(pagemap, dict):
        return None
    thumbnails = pagemap.get("cse_thumbnail")
    if isinstance(thumbnails, list) and thumbnails and isinstance(thumbnails[0], dict):
        src = thumbnails[0].get("src")
        return str(src) if src else None
    return None


def parse_google_items(data: Any) -> list[SearchResultItem]:
    """Project a Custom Search response body onto SearchResultItem. Raises ProviderError if malformed."""
    if not isinstance(data, dict):
        raise ProviderError("Malformed search response: body is not a JSON object")
    items = data.get("items", [])
    if items is None:
        items = []
    if not isinstance(items, list):
        raise ProviderError("Malformed search response: 'items' is not a list")

    results = []
    for item in items:
        if not isinstance(item, dict):
            raise ProviderError("Malformed search response: item is not an object")
        results.append(
            SearchResultItem(
                title=str(item.get("title") or ""),
                link=str(item.get("link") or ""),
                snippet=str(item.get("snippet") or ""),
                display_link=str(item.get("displayLink") or ""),
                thumbnail_url=_thumbnail_url(item),
            )
        )
    return results


class GoogleSearchClient:
    """search(query, limit) -> list[SearchResultItem] against Google Programmable Search."""

    name = "google"

    def __init__(
        self,
        api_key: str,
        cx: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.cx = cx
        self.timeout = timeout
        self._session = session or requests.Session()

    def search(self, query: str, limit: int = 3) -> list[SearchResultItem]:
        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "num": max(1, min(limit, MAX_RESULTS_PER_CALL)),
        }
        try:
            response = self._session.get(GOOGLE_SEARCH_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning("Google search error for query %r: HTTP %s", query, status)
            raise ProviderError(f"Search provider returned HTTP {status}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            logger.warning("Google search error for query %r: %s", query, e)
            raise ProviderError(f"Search provider request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Malformed search response: {e}") from e

        return parse_google_items(data)[:limit]
