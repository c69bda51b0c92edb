"""No-op scraping strategy used when no scraping engine is wired in."""

import logging

from serpcheck.cancel import CancelToken
from serpcheck.data import SearchQuery, SearchResult, SearchStatus

logger = logging.getLogger(__name__)


class NoOpSearcher:
    """Scraping strategy that never downloads anything.

    Stands in for the HTML scraping engine, so the API fallback path stays
    observable (a warning per query) without a scraper installed. Honours
    cancellation like any other strategy.
    """

    async def search(
        self,
        query: SearchQuery,
        *,
        cancel: CancelToken | None = None,
    ) -> SearchResult:
        if cancel is not None and cancel.cancelled:
            return SearchResult(status=SearchStatus.INTERRUPTED)
        logger.warning("No scraping engine configured, returning no results for %r", query.keyword)
        return SearchResult(status=SearchStatus.OK)
