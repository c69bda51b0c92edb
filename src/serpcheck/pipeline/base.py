"""Pipeline protocol for running keyword batches."""

from typing import Protocol

from serpcheck.cancel import CancelToken
from serpcheck.data import SearchQuery, SearchResult


class Pipeline(Protocol):
    """Interface for running many keyword searches."""

    async def run(
        self,
        keywords: list[str],
        *,
        cancel: CancelToken | None = None,
    ) -> list[tuple[SearchQuery, SearchResult]]:
        """Search every keyword.

        Args:
            keywords: Keywords to look up.
            cancel: Optional cancellation token shared by all searches.

        Returns:
            One (query, result) pair per keyword, in input order.
        """
        ...
