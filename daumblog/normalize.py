"""Normalize blog search API responses to display records."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import ValidationError

from daumblog.exceptions import SearchFailed
from daumblog.models import BlogDocument, BlogPayload, DisplayRecord

logger = logging.getLogger(__name__)


def parse_blog_payload(data: Any) -> BlogPayload:
    """Validate a decoded JSON body into a payload."""
    try:
        return BlogPayload.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected blog search payload: {e.error_count()} validation errors")
        raise SearchFailed("Malformed response from blog search API") from e


def normalize_thumbnail_url(value: Optional[str]) -> Optional[str]:
    """Return the thumbnail as a URL if it parses as an absolute one.

    Whitespace anywhere, padding included, makes the string invalid.
    """
    if not value or any(ch.isspace() for ch in value):
        return None
    try:
        parsed = urlparse(value)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return value


def normalize_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps without an offset are taken as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def to_display_record(document: BlogDocument) -> DisplayRecord:
    return DisplayRecord(
        thumbnail_url=normalize_thumbnail_url(document.thumbnail),
        name=document.name,
        title=document.title,
        timestamp=normalize_timestamp(document.timestamp),
    )


def map_to_display_records(payload: BlogPayload) -> list[DisplayRecord]:
    """One record per document, in payload order. Nothing is filtered out."""
    return [to_display_record(document) for document in payload.documents]
