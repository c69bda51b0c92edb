from typing import Protocol

from serpcheck.cancel import CancelToken
from serpcheck.data import SearchQuery, SearchResult


class SerpSearcher(Protocol):
    """Interface shared by the Custom Search API strategy and the scraping engine."""

    async def search(
        self,
        query: SearchQuery,
        *,
        cancel: CancelToken | None = None,
    ) -> SearchResult:
        """Fetch result URLs for a query.

        Implementations never raise for network or configuration problems;
        they report them through ``SearchResult.status``. Once ``cancel``
        fires they stop at the next suspension point and return an
        ``INTERRUPTED`` result, never a partial ``OK`` one.

        Args:
            query: Keyword and pagination parameters.
            cancel: Optional cancellation token.

        Returns:
            The search result.
        """
        ...
