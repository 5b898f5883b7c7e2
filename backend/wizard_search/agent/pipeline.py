"""
Agent search pipeline: run Stage 1 → 2 → 3 and assemble the response.

START → REFINING → EXECUTING → SYNTHESIZING → DONE, with ERRORED reachable
from REFINING and SYNTHESIZING. Execution never fails the run; its per-query
failures are carried in the response as failed sub-searches.
"""

import logging
import time
from enum import Enum
from typing import Optional

from wizard_search.agent.clients import SearchClient, build_search_client
from wizard_search.agent.execution import RESULTS_PER_QUERY, execute_all
from wizard_search.agent.llm_utils import OpenAITextModel, TextModel
from wizard_search.agent.refinement import refine
from wizard_search.agent.schemas import AgentSearchResponse
from wizard_search.agent.synthesis import synthesize
from wizard_search.config import Settings
from wizard_search.errors import (
    AgentPipelineError,
    QueryValidationError,
    RefinementError,
    SynthesisError,
)
from wizard_search.logger import log_event

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    START = "start"
    REFINING = "refining"
    EXECUTING = "executing"
    SYNTHESIZING = "synthesizing"
    DONE = "done"
    ERRORED = "errored"


def validate_query(query: Optional[str]) -> str:
    """Return the trimmed query, or raise QueryValidationError if it is missing or blank."""
    if query is None or not isinstance(query, str) or not query.strip():
        raise QueryValidationError("Search query is required")
    return query.strip()


class AgentSearchPipeline:
    """Sequences refine → execute → synthesize for one query at a time."""

    def __init__(
        self,
        model: TextModel,
        search_client: SearchClient,
        *,
        results_per_query: int = RESULTS_PER_QUERY,
        max_parallel_searches: Optional[int] = None,
    ):
        self.model = model
        self.search_client = search_client
        self.results_per_query = results_per_query
        self.max_parallel_searches = max_parallel_searches

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentSearchPipeline":
        settings.validate_for_agent_search()
        return cls(
            model=OpenAITextModel.from_settings(settings),
            search_client=build_search_client(settings),
            results_per_query=settings.search_results_per_query,
            max_parallel_searches=settings.max_parallel_searches,
        )

    def _transition(self, state: PipelineState, query: str, started: float) -> None:
        logger.debug(
            "Agent search %r -> %s (%.0f ms)", query, state.value, (time.monotonic() - started) * 1000
        )

    def run(self, query: Optional[str]) -> AgentSearchResponse:
        """
        Run the full pipeline for one query.

        Raises QueryValidationError before any external call if the query is blank,
        AgentPipelineError(stage="refine" | "synthesize") on a fatal stage failure.
        """
        original_query = validate_query(query)
        started = time.monotonic()
        self._transition(PipelineState.START, original_query, started)

        self._transition(PipelineState.REFINING, original_query, started)
        try:
            refinement = refine(original_query, self.model)
        except RefinementError as e:
            self._transition(PipelineState.ERRORED, original_query, started)
            log_event("agent_search_failed", str(e), query=original_query, stage="refine")
            raise AgentPipelineError("refine", e) from e

        self._transition(PipelineState.EXECUTING, original_query, started)
        searches = execute_all(
            refinement.refined_queries,
            self.search_client,
            results_per_query=self.results_per_query,
            max_workers=self.max_parallel_searches,
        )

        self._transition(PipelineState.SYNTHESIZING, original_query, started)
        try:
            summary = synthesize(original_query, refinement.refined_queries, self.model)
        except SynthesisError as e:
            self._transition(PipelineState.ERRORED, original_query, started)
            log_event("agent_search_failed", str(e), query=original_query, stage="synthesize")
            raise AgentPipelineError("synthesize", e) from e

        response = AgentSearchResponse(
            original_query=original_query,
            analysis=refinement.analysis,
            reasoning=refinement.reasoning,
            searches=searches,
            summary=summary,
        )
        self._transition(PipelineState.DONE, original_query, started)
        log_event(
            "agent_search_completed",
            "Agent search finished",
            query=original_query,
            searches=len(searches),
            failed_searches=sum(1 for s in searches if s.failed),
        )
        return response


def run_agent_search(query: str, settings: Optional[Settings] = None) -> AgentSearchResponse:
    """Build a pipeline from settings and run it once."""
    settings = settings or Settings()
    return AgentSearchPipeline.from_settings(settings).run(query)
