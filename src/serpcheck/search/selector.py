"""Per-query choice between the Custom Search API and the scraping engine."""

import logging

from serpcheck.config.models import SearchSettings
from serpcheck.quota import QueryCounter
from serpcheck.search.base import SerpSearcher
from serpcheck.search.cse import CseClient
from serpcheck.search.custom_search import CustomSearchAPISearcher

logger = logging.getLogger(__name__)


class StrategySelector:
    """Pick the strategy for the next query from live settings and quota.

    Nothing is cached: every ``select`` call re-reads the quota, because
    other workers may have used it up since the previous query.

    Args:
        scraper: Scraping strategy used whenever the API is unusable.
        counter: Shared daily quota.
        client: Optional Custom Search client handed to API searchers.
        http_timeout: Transport timeout for API searchers without a client.
    """

    def __init__(
        self,
        scraper: SerpSearcher,
        counter: QueryCounter,
        *,
        client: CseClient | None = None,
        http_timeout: float = 30.0,
    ) -> None:
        self._scraper = scraper
        self._counter = counter
        self._client = client
        self._http_timeout = http_timeout

    @property
    def scraper(self) -> SerpSearcher:
        return self._scraper

    def select(self, settings: SearchSettings) -> SerpSearcher:
        """Return the strategy to use for one query under ``settings``."""
        if not settings.api_configured:
            logger.debug("Using traditional scraping method (API not configured or disabled)")
            return self._scraper

        max_daily = settings.max_daily_api_queries
        if self._counter.limit_reached(max_daily):
            logger.warning(
                "Daily API queries limit reached (%d / %d). Falling back to traditional scraping.",
                self._counter.today_count(),
                max_daily,
            )
            return self._scraper

        logger.info("Using Custom Search API instead of scraping")
        return CustomSearchAPISearcher(
            api_key=settings.api_key,
            engine_id=settings.custom_search_engine_id,
            counter=self._counter,
            max_daily_queries=max_daily,
            client=self._client,
            http_timeout=self._http_timeout,
        )
