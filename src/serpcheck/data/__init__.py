"""Data models for serpcheck."""

from serpcheck.data.models import (
    ANY_COUNTRY,
    Device,
    SearchQuery,
    SearchResult,
    SearchStatus,
)

__all__ = [
    "ANY_COUNTRY",
    "Device",
    "SearchQuery",
    "SearchResult",
    "SearchStatus",
]
