from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.models.common import ErrorResponse
from app.models.metadata.schemas import FetchMetadataResponse
from app.services.metadata.service import MetadataService
from app.services.metadata.validator import is_valid_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metadata"])


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_service() -> MetadataService:
    """FastAPI dependency that builds a ``MetadataService`` for each request."""
    return MetadataService()


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


# ---------------------------------------------------------------------------
# POST /fetch-metadata
# ---------------------------------------------------------------------------


@router.post(
    "/fetch-metadata",
    responses={
        200: {"model": FetchMetadataResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Fetch a page and extract its metadata",
)
async def fetch_metadata(
    request: Request,
    service: MetadataService = Depends(_get_service),
) -> JSONResponse:
    """Fetch the page at ``url`` and return its normalized metadata.

    The body is read by hand rather than through a pydantic model so that a
    missing or malformed ``url`` gets this endpoint's own 400 payload instead
    of FastAPI's 422.

    - **200** — metadata extracted, or the target page could not be
      retrieved (``metadata`` is ``null`` and ``message`` explains why)
    - **400** — ``url`` missing or not a valid absolute URL
    - **500** — unexpected failure inside this service
    """
    try:
        body = await request.json()
        url = body.get("url") if isinstance(body, dict) else None

        if not url:
            return _error(400, "URL is required")
        if not is_valid_url(url):
            return _error(400, "Invalid URL format")

        result = await service.fetch_metadata(url)
        return JSONResponse(status_code=200, content=result.to_payload())
    except Exception as exc:
        logger.exception("POST /fetch-metadata failed: %s", exc)
        return _error(500, "Internal server error", details=str(exc))
