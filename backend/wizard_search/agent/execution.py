"""
Stage 2: Multi-Query Execution.

Runs every refined query against the search client on a small thread pool.
A failing sub-search is recorded as failed with no results; it never aborts
the batch. Output order always matches input order.
"""

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Optional, Union

from wizard_search.agent.clients import SearchClient
from wizard_search.agent.schemas import SearchResultItem, SubSearch
from wizard_search.errors import ProviderError

logger = logging.getLogger(__name__)

RESULTS_PER_QUERY = 3


@dataclass
class SubSearchOutcome:
    query: str
    outcome: Union[list[SearchResultItem], ProviderError]

    def to_sub_search(self) -> SubSearch:
        if isinstance(self.outcome, ProviderError):
            return SubSearch(query=self.query, results=[], failed=True)
        return SubSearch(query=self.query, results=self.outcome, failed=False)


def _run_one(client: SearchClient, query: str, limit: int) -> SubSearchOutcome:
    try:
        return SubSearchOutcome(query=query, outcome=client.search(query, limit))
    except ProviderError as e:
        return SubSearchOutcome(query=query, outcome=e)


def execute_all(
    refined_queries: list[str],
    client: SearchClient,
    *,
    results_per_query: int = RESULTS_PER_QUERY,
    max_workers: Optional[int] = None,
) -> list[SubSearch]:
    """Run Stage 2: one SubSearch per refined query, in the same order."""
    if not refined_queries:
        return []

    max_workers = max_workers if max_workers is not None else len(refined_queries)
    max_workers = max(1, min(max_workers, len(refined_queries)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        # executor.map yields in submission order
        outcomes = list(
            executor.map(lambda q: _run_one(client, q, results_per_query), refined_queries)
        )

    searches = []
    for outcome in outcomes:
        if isinstance(outcome.outcome, ProviderError):
            logger.warning("Sub-search failed for %r: %s", outcome.query, outcome.outcome)
        searches.append(outcome.to_sub_search())
    return searches
