"""
Agent search: Pydantic schemas for the refine → execute → synthesize pipeline.

JSON keys are camelCase on the wire (refinedQueries, displayLink, ...);
Python code uses the snake_case field names.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----- Stage 1: Query Refinement -----


class RefinementResult(CamelModel):
    """Structured output of the refinement model call."""

    analysis: str = Field(..., description="Short analysis of what the user is looking for")
    refined_queries: list[str] = Field(
        ...,
        min_length=2,
        max_length=3,
        description="2-3 more specific search queries, in the order they should run",
    )
    reasoning: str = Field(..., description="Why these refined queries were chosen")

    @field_validator("refined_queries")
    @classmethod
    def _queries_not_blank(cls, value: list[str]) -> list[str]:
        cleaned = [q.strip() for q in value]
        if any(not q for q in cleaned):
            raise ValueError("refined queries must be non-empty strings")
        return cleaned


@dataclass(frozen=True)
class ParseOk:
    result: RefinementResult


@dataclass(frozen=True)
class ParseMalformed:
    reason: str


ParseOutcome = Union[ParseOk, ParseMalformed]


# ----- Stage 2: Multi-Query Execution -----


class SearchResultItem(CamelModel):
    """Normalized projection of one provider result."""

    title: str = ""
    link: str = ""
    snippet: str = ""
    display_link: str = ""
    thumbnail_url: Optional[str] = None


class SubSearch(CamelModel):
    """One refined query and what the provider returned for it."""

    query: str
    results: list[SearchResultItem] = Field(default_factory=list)
    failed: bool = False


# ----- Pipeline output -----


class AgentSearchResponse(CamelModel):
    """Complete output of one pipeline run."""

    original_query: str
    analysis: str
    reasoning: str
    searches: list[SubSearch]
    summary: str


# ----- HTTP payloads -----


class AgentSearchRequest(BaseModel):
    query: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
