"""FastAPI application exposing search, matching and saved jobs."""

import time
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pathfinder import __version__
from pathfinder.logging import get_logger
from pathfinder.logging.context import log_context
from pathfinder.persistence.exceptions import PersistenceError
from pathfinder.pipeline.exceptions import PipelineError
from pathfinder.services import Services

from .schemas import (
    HealthResponse,
    MatchRequest,
    MatchResponse,
    SavedJobsResponse,
    SearchResponse,
)

logger = get_logger(__name__, component="api")

DEFAULT_RESULT_LIMIT = 50


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_remote(value: Optional[str]) -> Optional[bool]:
    """Only the literal "true" enables the remote filter; absent means don't care."""
    if value is None:
        return None
    return value == "true"


def _parse_limit(value: Optional[str]) -> int:
    if value is None or value == "":
        return DEFAULT_RESULT_LIMIT
    limit = int(value)
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    return limit


def create_app(services: Services) -> FastAPI:
    """Build the FastAPI app around already-constructed services.

    Args:
        services: Search, scorer pipeline and job store shared by all requests

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title="Pathfinder Job Matching", version=__version__)
    app.state.services = services

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        started = time.perf_counter()

        with log_context(request_id=request_id):
            response = await call_next(request)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "event": "http.request.completed",
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 3),
                },
            )

        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = "Invalid request"
        if location:
            message = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
        logger.info(
            message,
            extra={"event": "http.request.invalid", "path": request.url.path, "error_count": len(errors)},
        )
        return _error(400, message)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse()

    @app.post("/api/jobs/match")
    def match_jobs(request: Request, payload: MatchRequest):
        if payload.user_skills is None or not (payload.target_role or "").strip():
            return _error(400, "Missing required fields")

        pipeline = request.app.state.services.pipeline
        if pipeline is None:
            return _error(503, "Job matching is not configured")

        try:
            matches = pipeline.find_matching_jobs(
                payload.user_skills,
                payload.target_role.strip(),
                location=payload.location,
                remote=payload.remote,
            )
        except PipelineError as e:
            return _error(500, str(e))

        return MatchResponse(matches=[match.to_api() for match in matches])

    @app.get("/api/jobs/search")
    def search_jobs(
        request: Request,
        query: Optional[str] = None,
        location: Optional[str] = None,
        remote: Optional[str] = None,
        limit: Optional[str] = None,
    ):
        if not query:
            return _error(400, "Query parameter is required")

        try:
            parsed_limit = _parse_limit(limit)
        except ValueError:
            return _error(400, "limit must be a positive integer")

        jobs = request.app.state.services.search.search_jobs(
            query,
            location=location or None,
            remote=_parse_remote(remote),
            limit=parsed_limit,
        )
        return SearchResponse(jobs=[job.to_api() for job in jobs], count=len(jobs))

    @app.get("/api/jobs/saved")
    def saved_jobs(request: Request, limit: Optional[str] = None):
        try:
            parsed_limit = _parse_limit(limit)
        except ValueError:
            return _error(400, "limit must be a positive integer")

        try:
            jobs = request.app.state.services.job_store.list_recent(parsed_limit)
        except PersistenceError as e:
            logger.error(
                f"Failed to list saved jobs: {e}",
                extra={"event": "http.saved.failed", "error_type": type(e).__name__},
            )
            return _error(500, str(e))

        return SavedJobsResponse(jobs=[job.to_api() for job in jobs])

    return app
