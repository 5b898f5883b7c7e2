"""
Stage 3: Synthesis.

Asks the model for a short summary of the search strategy. Only the queries
go into the prompt, not the result sets. The text comes back verbatim.
"""

from wizard_search.errors import ModelError, SynthesisError

from .llm_utils import TextModel

SUMMARY_TONE = "a wise, friendly wizard: warm and a little whimsical, but clear and helpful"

SYNTHESIS_PROMPT_TEMPLATE = """The user searched for: "{query}"

To answer it, these refined searches were run:
{query_list}

Write a 2-3 sentence summary of what these searches cover and how they help answer the user's question.
Speak in the voice of {tone}. Plain prose only, no lists or markdown."""


def build_synthesis_prompt(original_query: str, refined_queries: list[str], tone: str = SUMMARY_TONE) -> str:
    query_list = "\n".join(f"{i}. {q}" for i, q in enumerate(refined_queries, start=1))
    return SYNTHESIS_PROMPT_TEMPLATE.format(query=original_query, query_list=query_list, tone=tone)


def synthesize(original_query: str, refined_queries: list[str], model: TextModel) -> str:
    """Run Stage 3. Raises SynthesisError if the model call fails."""
    prompt = build_synthesis_prompt(original_query, refined_queries)
    try:
        return model.generate(prompt, caller="synthesize")
    except ModelError as e:
        raise SynthesisError(str(e)) from e
