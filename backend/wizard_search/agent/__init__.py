"""Agent search: refine the query, run the refined searches, summarize."""

from .execution import execute_all
from .pipeline import AgentSearchPipeline, PipelineState, run_agent_search, validate_query
from .refinement import parse_refinement, refine
from .schemas import (
    AgentSearchResponse,
    ParseMalformed,
    ParseOk,
    RefinementResult,
    SearchResultItem,
    SubSearch,
)
from .synthesis import synthesize

__all__ = [
    "execute_all",
    "parse_refinement",
    "refine",
    "run_agent_search",
    "synthesize",
    "validate_query",
    "AgentSearchPipeline",
    "AgentSearchResponse",
    "ParseMalformed",
    "ParseOk",
    "PipelineState",
    "RefinementResult",
    "SearchResultItem",
    "SubSearch",
]
