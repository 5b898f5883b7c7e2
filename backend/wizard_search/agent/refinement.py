"""
Stage 1: Query Refinement.

- Ask the model to analyze the raw query
- Get back 2-3 more specific search queries plus the reasoning behind them
- Parse strictly: a malformed shape is rejected, never patched up
"""

import json

from pydantic import ValidationError

from wizard_search.errors import ModelError, RefinementError, RefinementParseError

from .llm_utils import TextModel, strip_code_fences
from .schemas import ParseMalformed, ParseOk, ParseOutcome, RefinementResult

REFINEMENT_PROMPT_TEMPLATE = """You are a search wizard helping a user find exactly what they need on the web.

Analyze this search query and produce 2-3 refined search queries that are more specific and more likely to surface useful results.

Query: "{query}"

Return only valid JSON with exactly these keys:
{{
  "analysis": "one or two sentences on what the user is really looking for",
  "refinedQueries": ["refined query 1", "refined query 2", "optional refined query 3"],
  "reasoning": "one sentence on why these queries will find better results"
}}

No markdown or explanation. Valid JSON only."""


def build_refinement_prompt(original_query: str) -> str:
    return REFINEMENT_PROMPT_TEMPLATE.format(query=original_query)


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
    return f"{location}: {first.get('msg', 'invalid value')}"


def parse_refinement(content: str) -> ParseOutcome:
    """Parse model text into a RefinementResult, or say why it is malformed."""
    text = strip_code_fences(content)
    if not text:
        return ParseMalformed("empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return ParseMalformed(f"invalid JSON ({e.msg})")
    except RecursionError:
        return ParseMalformed("invalid JSON (nesting too deep)")
    if not isinstance(data, dict):
        return ParseMalformed("expected a JSON object")
    try:
        return ParseOk(RefinementResult.model_validate(data))
    except ValidationError as e:
        return ParseMalformed(_describe_validation_error(e))


def refine(original_query: str, model: TextModel) -> RefinementResult:
    """
    Run Stage 1: turn the raw query into analysis, 2-3 refined queries, and reasoning.

    Raises RefinementParseError when the model output is not the expected JSON shape,
    RefinementError when the model call itself fails.
    """
    prompt = build_refinement_prompt(original_query)
    try:
        content = model.generate(prompt, caller="refine")
    except ModelError as e:
        raise RefinementError(str(e)) from e

    outcome = parse_refinement(content)
    if isinstance(outcome, ParseMalformed):
        raise RefinementParseError(outcome.reason, raw=content)
    return outcome.result
