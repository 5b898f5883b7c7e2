"""Tests for agent search schemas."""

import pytest
from pydantic import ValidationError

from wizard_search.agent.schemas import (
    AgentSearchResponse,
    RefinementResult,
    SearchResultItem,
    SubSearch,
)


class TestRefinementResult:
    """Refinement payload schema."""

    def test_valid_from_camel_case(self):
        result = RefinementResult.model_validate({
            "analysis": "a",
            "refinedQueries": ["q1", "q2"],
            "reasoning": "r",
        })
        assert result.refined_queries == ["q1", "q2"]

    def test_three_queries_allowed(self):
        result = RefinementResult(analysis="a", refined_queries=["q1", "q2", "q3"], reasoning="r")
        assert len(result.refined_queries) == 3

    def test_single_query_rejected(self):
        with pytest.raises(ValidationError):
            RefinementResult(analysis="a", refined_queries=["q1"], reasoning="r")

    def test_four_queries_rejected(self):
        with pytest.raises(ValidationError):
            RefinementResult(analysis="a", refined_queries=["q1", "q2", "q3", "q4"], reasoning="r")

    def test_blank_query_rejected(self):
        with pytest.raises(ValidationError):
            RefinementResult(analysis="a", refined_queries=["q1", "   "], reasoning="r")

    def test_non_string_query_rejected(self):
        with pytest.raises(ValidationError):
            RefinementResult.model_validate({"analysis": "a", "refinedQueries": ["q1", 2], "reasoning": "r"})

    def test_missing_reasoning_rejected(self):
        with pytest.raises(ValidationError):
            RefinementResult.model_validate({"analysis": "a", "refinedQueries": ["q1", "q2"]})

    def test_queries_are_trimmed(self):
        result = RefinementResult(analysis="a", refined_queries=["  q1 ", "q2\n"], reasoning="r")
        assert result.refined_queries == ["q1", "q2"]


class TestSearchResultItem:
    """Normalized provider result."""

    def test_thumbnail_optional(self):
        item = SearchResultItem(title="t", link="https://x.dev", snippet="s", display_link="x.dev")
        assert item.thumbnail_url is None

    def test_json_uses_camel_case(self):
        item = SearchResultItem(
            title="t", link="https://x.dev", snippet="s", display_link="x.dev", thumbnail_url="https://x.dev/t.png"
        )
        data = item.model_dump(by_alias=True)
        assert data["displayLink"] == "x.dev"
        assert data["thumbnailUrl"] == "https://x.dev/t.png"


class TestAgentSearchResponse:
    """Full pipeline response."""

    def test_json_shape(self):
        response = AgentSearchResponse(
            original_query="rust",
            analysis="a",
            reasoning="r",
            searches=[SubSearch(query="q1"), SubSearch(query="q2", failed=True)],
            summary="s",
        )
        data = response.model_dump(by_alias=True)
        assert set(data) == {"originalQuery", "analysis", "reasoning", "searches", "summary"}
        assert data["searches"][0] == {"query": "q1", "results": [], "failed": False}
        assert data["searches"][1]["failed"] is True

    def test_original_query_required(self):
        with pytest.raises(ValidationError):
            AgentSearchResponse(analysis="a", reasoning="r", searches=[], summary="s")
