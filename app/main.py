from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api.router import router
from app.core.config import settings
from app.workers.fetcher import close_http_client


def _configure_logging() -> None:
    """Route the ``app`` loggers to a single stderr handler.

    Fetch failures are logged at WARNING by the metadata service and
    unexpected errors in the route via ``logger.exception``; both land here
    at ``settings.log_level``, with propagation to the root logger disabled
    so uvicorn's own handlers do not duplicate them.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    app_log = logging.getLogger("app")
    app_log.setLevel(level)
    if not app_log.handlers:
        app_log.addHandler(handler)
    app_log.propagate = False


_configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    await close_http_client()


app = FastAPI(
    title="Link Metadata",
    description="Fetches a web page and returns normalized link-preview metadata.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
