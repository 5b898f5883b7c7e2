"""
Tavily Search API client. Uses TAVILY_API_KEY. Selected with SEARCH_PROVIDER=tavily.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlparse

from tavily import TavilyClient

from wizard_search.agent.schemas import SearchResultItem
from wizard_search.errors import ProviderError

logger = logging.getLogger(__name__)

# Tavily caps max_results at 20
MAX_RESULTS_PER_CALL = 20


def _display_link(url: str) -> str:
    try:
        return urlparse(url).netloc
    except ValueError:
        return ""


def parse_tavily_results(response: Any) -> list[SearchResultItem]:
    if not isinstance(response, dict) or not isinstance(response.get("results", []), list):
        raise ProviderError("Malformed Tavily response")
    results = []
    for item in response.get("results", []):
        if not isinstance(item, dict):
            raise ProviderError("Malformed Tavily response: result is not an object")
        url = str(item.get("url") or "")
        results.append(
            SearchResultItem(
                title=str(item.get("title") or ""),
                link=url,
                snippet=str(item.get("content") or ""),
                display_link=_display_link(url),
            )
        )
    return results


class TavilySearchClient:
    name = "tavily"

    def __init__(self, api_key: str, timeout: float = 10.0, client: Optional[TavilyClient] = None):
        self.timeout = timeout
        self._client = client or TavilyClient(api_key=api_key)

    def search(self, query: str, limit: int = 3) -> list[SearchResultItem]:
        try:
            response = self._client.search(
                query=query,
                search_depth="basic",
                max_results=max(1, min(limit, MAX_RESULTS_PER_CALL)),
                timeout=int(self.timeout),
            )
        except Exception as e:
            logger.warning("Tavily search error for query %r: %s", query, e)
            raise ProviderError(f"Search provider request failed: {e}") from e
        return parse_tavily_results(response)[:limit]
