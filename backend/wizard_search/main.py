"""
Wizard Search API: AI agent search (refine → search → synthesize) and usage analytics.
"""

import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wizard_search.agent import AgentSearchPipeline, validate_query
from wizard_search.agent.schemas import AgentSearchRequest, AgentSearchResponse, ErrorResponse
from wizard_search.analytics import AnalyticsService, AnalyticsSnapshot
from wizard_search.config import get_settings
from wizard_search.errors import AgentPipelineError, ConfigurationError, QueryValidationError
from wizard_search.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.app_log_level, settings.noisy_log_level)
    try:
        settings.validate_for_agent_search()
    except ConfigurationError as e:
        logger.warning("Agent search is not configured: %s", e)
    yield


app = FastAPI(title="Wizard Search", version="0.1.0", lifespan=lifespan)


@lru_cache
def _analytics() -> AnalyticsService:
    return AnalyticsService(history_size=get_settings().analytics_history_size)


@lru_cache
def _pipeline() -> AgentSearchPipeline:
    return AgentSearchPipeline.from_settings(get_settings())


def get_analytics() -> AnalyticsService:
    return _analytics()


def get_pipeline() -> AgentSearchPipeline:
    return _pipeline()


def require_query(body: AgentSearchRequest) -> str:
    return validate_query(body.query)


@app.exception_handler(QueryValidationError)
async def query_validation_error_handler(request: Request, exc: QueryValidationError):
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request body", details=str(exc.errors())).model_dump(),
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(
        status_code=503,
        content=ErrorResponse(error="Search service is not configured", details=str(exc)).model_dump(),
    )


@app.exception_handler(AgentPipelineError)
async def agent_pipeline_error_handler(request: Request, exc: AgentPipelineError):
    logger.error("Agent search error (%s): %s", exc.stage, exc.cause)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Agent search failed", details=str(exc)).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Agent search failed").model_dump(exclude_none=True),
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post(
    "/api/agent-search",
    response_model=AgentSearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def agent_search(
    query: str = Depends(require_query),
    pipeline: AgentSearchPipeline = Depends(get_pipeline),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """
    Agent search: refine the query into 2-3 searches, run them, and summarize.

    Returns: originalQuery, analysis, reasoning, searches (query, results, failed), summary.
    A client disconnect does not cancel model or search calls already in flight;
    each one still ends at its configured timeout.
    """
    start = time.monotonic()
    response = pipeline.run(query)
    analytics.record_search(query, int((time.monotonic() - start) * 1000))
    return response


@app.get("/api/analytics", response_model=AnalyticsSnapshot)
def analytics_snapshot(analytics: AnalyticsService = Depends(get_analytics)):
    return analytics.snapshot()
