"""Tests for protocol compliance."""

from datetime import date

from serpcheck.cancel import CancelToken
from serpcheck.config import MemoryConfigStore, SearchSettings
from serpcheck.data import SearchQuery, SearchResult, SearchStatus
from serpcheck.pipeline import Pipeline, SearchRunner
from serpcheck.quota import QuotaTracker
from serpcheck.search.custom_search import CustomSearchAPISearcher
from serpcheck.search.noop import NoOpSearcher
from serpcheck.search.selector import StrategySelector


class MockScraper:
    """A minimal scraping engine to verify protocol requirements."""

    async def search(
        self, query: SearchQuery, *, cancel: CancelToken | None = None
    ) -> SearchResult:
        return SearchResult(status=SearchStatus.OK, urls=[f"https://example.com/?q={query.keyword}"])


def test_custom_search_searcher_matches_protocol() -> None:
    """Verify CustomSearchAPISearcher structurally matches the SerpSearcher protocol."""
    searcher = CustomSearchAPISearcher(
        api_key="key",
        engine_id="cx",
        counter=QuotaTracker(MemoryConfigStore()),
        max_daily_queries=10,
    )
    assert hasattr(searcher, "search")
    assert callable(searcher.search)


def test_quota_tracker_matches_counter_protocol() -> None:
    tracker = QuotaTracker(MemoryConfigStore(), today=lambda: date(2026, 1, 1))
    for name in ("today_count", "increment", "limit_reached"):
        assert callable(getattr(tracker, name))


async def test_mock_scraper_satisfies_protocol() -> None:
    """Any class with the right method signature satisfies the protocol."""
    result = await MockScraper().search(SearchQuery(keyword="tea"))
    assert result.urls == ["https://example.com/?q=tea"]


def test_search_runner_matches_pipeline_protocol() -> None:
    """Verify SearchRunner structurally matches the Pipeline protocol."""
    quota = QuotaTracker(MemoryConfigStore())
    runner: Pipeline = SearchRunner(StrategySelector(NoOpSearcher(), quota), lambda: SearchSettings())
    assert callable(runner.run)
