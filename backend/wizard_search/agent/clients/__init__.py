"""Search API clients: Google Custom Search and Tavily."""

from typing import Protocol

from wizard_search.agent.schemas import SearchResultItem
from wizard_search.config import Settings
from wizard_search.errors import ConfigurationError

from .google import GoogleSearchClient
from .tavily import TavilySearchClient


class SearchClient(Protocol):
    """search(query, limit) -> results. Raises ProviderError on any failure."""

    def search(self, query: str, limit: int = 3) -> list[SearchResultItem]: ...


def build_search_client(settings: Settings) -> SearchClient:
    provider = settings.search_provider.lower().strip()
    if provider == "google":
        return GoogleSearchClient(
            api_key=settings.google_api_key,
            cx=settings.google_cx,
            timeout=settings.request_timeout_seconds,
        )
    if provider == "tavily":
        return TavilySearchClient(
            api_key=settings.tavily_api_key,
            timeout=settings.request_timeout_seconds,
        )
    raise ConfigurationError(f"Unsupported SEARCH_PROVIDER: {settings.search_provider}")


__all__ = ["GoogleSearchClient", "SearchClient", "TavilySearchClient", "build_search_client"]
