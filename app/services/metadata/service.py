from __future__ import annotations

import logging
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from app.models.metadata.failure import ClassifiedFailure
from app.models.metadata.schemas import (
    ClassifiedFailureResponse,
    FetchMetadataResponse,
    MetadataRecord,
)
from app.services.metadata.aggregator import (
    collect_all_meta_tags,
    collect_open_graph,
    collect_twitter_card,
)
from app.services.metadata.classifier import classify_failure
from app.services.metadata.resolver import resolve_fields
from app.services.metadata.sanitizer import sanitize_image
from app.workers.fetcher import FetchError, fetch_page

logger = logging.getLogger(__name__)


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def extract_metadata(url: str, soup: BeautifulSoup) -> MetadataRecord:
    """Build the metadata record for an already-parsed document.

    Pure: the same document always yields an identical record.
    """
    fields = resolve_fields(soup)
    fields["image"] = sanitize_image(fields["image"])
    return MetadataRecord(
        url=url,
        **fields,
        open_graph=collect_open_graph(soup),
        twitter_card=collect_twitter_card(soup),
        all_meta_tags=collect_all_meta_tags(soup),
    )


def success_response(record: MetadataRecord) -> FetchMetadataResponse:
    return FetchMetadataResponse(metadata=record, timestamp=datetime.now(timezone.utc))


def failure_response(classified: ClassifiedFailure) -> ClassifiedFailureResponse:
    return ClassifiedFailureResponse(
        message=classified.message,
        status=classified.status,
        error=classified.error,
        timestamp=datetime.now(timezone.utc),
    )


class MetadataService:
    """Fetches a page and turns it into a metadata or classified-failure response."""

    async def fetch_metadata(
        self, url: str
    ) -> FetchMetadataResponse | ClassifiedFailureResponse:
        """Fetch *url* and extract its metadata.

        Upstream failures are classified and returned, never raised.  Anything
        else (parser crash, programming error) propagates to the caller.
        """
        try:
            html = await fetch_page(url)
        except FetchError as exc:
            classified = classify_failure(exc.failure)
            logger.warning(
                "Fetch failed for %s (%s): %s", url, classified.category.value, exc
            )
            return failure_response(classified)

        record = extract_metadata(url, parse_document(html))
        return success_response(record)
