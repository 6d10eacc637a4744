from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


def _iso_timestamp(value: datetime) -> str:
    """``2024-01-31T12:00:00.000Z`` style, millisecond precision, UTC."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class MetadataRecord(BaseModel):
    """Normalized metadata extracted from one page.

    Serialized with camelCase keys (``pubDate``, ``openGraph``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    title: str = ""
    description: str = ""
    author: str = ""
    pub_date: str = ""
    image: str = ""
    robots: str = ""
    keywords: str = ""
    language: str = ""
    viewport: str = ""
    charset: str = ""
    theme_color: str = ""
    favicon: str = ""
    open_graph: dict[str, str] = Field(default_factory=dict)
    twitter_card: dict[str, str] = Field(default_factory=dict)
    all_meta_tags: dict[str, str] = Field(default_factory=dict)


class FetchMetadataResponse(BaseModel):
    """200 body when the page was fetched and parsed."""

    success: Literal[True] = True
    metadata: MetadataRecord
    timestamp: datetime

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return _iso_timestamp(value)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ClassifiedFailureResponse(BaseModel):
    """200 body when the target page could not be retrieved.

    ``status`` and ``error`` are omitted when not set; ``metadata`` is always
    present and ``null``.
    """

    success: Literal[True] = True
    metadata: None = None
    message: str
    status: Optional[int] = None
    error: Optional[str] = None
    timestamp: datetime

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return _iso_timestamp(value)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", exclude_none=True)
        payload["metadata"] = None
        return payload
