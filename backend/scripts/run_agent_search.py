"""
Run one agent search end to end: refine → search → synthesize.

Run from backend with:
  python scripts/run_agent_search.py
  python scripts/run_agent_search.py "Your search query here"

Requires: OPENAI_API_KEY plus GOOGLE_API_KEY and GOOGLE_CX (or TAVILY_API_KEY with
SEARCH_PROVIDER=tavily) in env or .env. Prints each stage's output.
"""

import os
import sys
import time
from textwrap import shorten

# Add backend root so "wizard_search" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from wizard_search.agent import AgentSearchPipeline, execute_all, refine, synthesize
from wizard_search.config import Settings
from wizard_search.errors import ConfigurationError, WizardSearchError
from wizard_search.logger import configure_logging


def _trunc(s: str, max_len: int = 72) -> str:
    return shorten(s, width=max_len, placeholder="…") if s else ""


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def main() -> None:
    query = (sys.argv[1] if len(sys.argv) > 1 else "best rust web frameworks").strip()
    if not query:
        query = "best rust web frameworks"

    settings = Settings()
    configure_logging(settings.app_log_level, settings.noisy_log_level)
    try:
        pipeline = AgentSearchPipeline.from_settings(settings)
    except ConfigurationError as e:
        print(f"Not configured: {e}")
        sys.exit(1)

    try:
        _section("STAGE 1: Refinement")
        print(f"Input query: {query}")
        t0 = time.monotonic()
        refinement = refine(query, pipeline.model)
        print(f"  Analysis: {refinement.analysis}")
        print(f"  Reasoning: {refinement.reasoning}")
        for i, q in enumerate(refinement.refined_queries, 1):
            print(f"  {i}. {q}")

        _section(f"STAGE 2: Search ({settings.search_provider})")
        searches = execute_all(
            refinement.refined_queries,
            pipeline.search_client,
            results_per_query=pipeline.results_per_query,
            max_workers=pipeline.max_parallel_searches,
        )
        for search in searches:
            status = "FAILED" if search.failed else f"{len(search.results)} results"
            print(f"\n--- {search.query} ({status}) ---")
            for r in search.results:
                print(f"  {r.display_link:<28}  {_trunc(r.title, 44)}")
                print(f"  {'':<28}  {r.link}")

        _section("STAGE 3: Synthesis")
        print(synthesize(query, refinement.refined_queries, pipeline.model))
    except WizardSearchError as e:
        print(f"Agent search failed: {e}")
        sys.exit(1)

    _section("DONE")
    print(f"Query: {query}")
    print(f"{len(searches)} searches, {sum(1 for s in searches if s.failed)} failed, {time.monotonic() - t0:.1f}s")
    print()


if __name__ == "__main__":
    main()
