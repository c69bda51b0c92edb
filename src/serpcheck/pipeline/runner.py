"""Concurrent keyword runner."""

import asyncio
import logging
import time
from collections.abc import Callable

from serpcheck.cancel import CancelToken
from serpcheck.config.models import SearchSettings
from serpcheck.data import SearchQuery, SearchResult, SearchStatus
from serpcheck.errors import ConfigurationError, SearchCancelledError
from serpcheck.search.selector import StrategySelector

logger = logging.getLogger(__name__)


class SearchRunner:
    """Run keyword searches on a bounded pool of tasks.

    Flow per keyword:
    1. Take a fresh settings snapshot
    2. Ask the selector for a strategy (API or scraping)
    3. Run the search with the shared cancellation token

    Concurrency is capped by ``max_threads`` from the snapshot taken when
    ``run`` starts. The only state shared between searches is the quota
    counter behind the selector.

    Args:
        selector: Strategy selector.
        load_settings: Returns the current settings snapshot.
    """

    def __init__(
        self,
        selector: StrategySelector,
        load_settings: Callable[[], SearchSettings],
    ) -> None:
        self._selector = selector
        self._load_settings = load_settings

    async def run(
        self,
        keywords: list[str],
        *,
        cancel: CancelToken | None = None,
    ) -> list[tuple[SearchQuery, SearchResult]]:
        """Search every keyword; results keep the input order.

        A keyword whose settings snapshot fails to load comes back as
        ``ERROR_NETWORK`` without stopping the others. A strategy that stops on
        the cancellation token comes back as ``INTERRUPTED``.

        Raises:
            ConfigurationError: If the settings sizing the pool cannot be loaded.
        """
        if not keywords:
            return []

        token = cancel or CancelToken()
        settings = self._load_settings()
        semaphore = asyncio.Semaphore(settings.max_threads)

        async def worker(keyword: str) -> tuple[SearchQuery, SearchResult]:
            async with semaphore:
                return await self._search_one(keyword, token)

        t0 = time.monotonic()
        results = await asyncio.gather(*(worker(k) for k in keywords))
        logger.info(
            "Searched %d keywords in %.1fs (%d ok)",
            len(keywords),
            time.monotonic() - t0,
            sum(1 for _, r in results if r.ok),
        )
        return list(results)

    async def _search_one(
        self, keyword: str, cancel: CancelToken
    ) -> tuple[SearchQuery, SearchResult]:
        try:
            settings = self._load_settings()
        except ConfigurationError as e:
            logger.error("Cannot load search settings for %r: %s", keyword, e)
            return (SearchQuery(keyword=keyword), SearchResult(status=SearchStatus.ERROR_NETWORK))

        query = settings.query_for(keyword)
        if cancel.cancelled:
            return (query, SearchResult(status=SearchStatus.INTERRUPTED))

        searcher = self._selector.select(settings)
        try:
            result = await searcher.search(query, cancel=cancel)
        except SearchCancelledError:
            result = SearchResult(status=SearchStatus.INTERRUPTED)
        except Exception as e:
            logger.error(
                "Search strategy %s failed for %r: %s",
                type(searcher).__name__,
                keyword,
                e,
                exc_info=True,
            )
            result = SearchResult(status=SearchStatus.ERROR_NETWORK)

        if cancel.cancelled and result.status is SearchStatus.ERROR_NETWORK:
            result = SearchResult(status=SearchStatus.INTERRUPTED)

        logger.info(
            "%r via %s: %s, %d urls", keyword, type(searcher).__name__, result.status, len(result.urls)
        )
        return (query, result)
