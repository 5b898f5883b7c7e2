"""Pytest fixtures for agent search tests."""

import json

import pytest

from stubs import StubModel, StubSearchClient, make_items
from wizard_search.errors import ProviderError


@pytest.fixture
def refined_queries():
    return ["rust web framework benchmarks 2024", "rust async web framework comparison"]


@pytest.fixture
def refinement_json(refined_queries):
    """Valid refinement payload as returned by the model."""
    return json.dumps({
        "analysis": "The user wants to compare Rust web frameworks.",
        "refinedQueries": refined_queries,
        "reasoning": "Benchmarks and feature comparisons narrow the field.",
    })


@pytest.fixture
def refinement_with_markdown(refinement_json):
    """Refinement payload wrapped in a markdown code block."""
    return "```json\n" + refinement_json + "\n```"


@pytest.fixture
def summary_text():
    return (
        "Your quest led through benchmark scrolls and comparison tomes of Rust's web frameworks. "
        "Together they reveal which framework suits your craft."
    )


@pytest.fixture
def stub_model(refinement_json, summary_text):
    return StubModel(refine=refinement_json, synthesize=summary_text)


@pytest.fixture
def stub_search(refined_queries):
    return StubSearchClient({q: make_items(q, 2) for q in refined_queries})


@pytest.fixture
def provider_error():
    return ProviderError("Search provider returned HTTP 500", status_code=500)
