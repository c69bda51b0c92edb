"""Result retrieval through the quota-limited Google Custom Search JSON API."""

import logging
from contextlib import AsyncExitStack

import httpx

from serpcheck.cancel import CancelToken
from serpcheck.data import SearchQuery, SearchResult, SearchStatus
from serpcheck.errors import ConfigurationError, SearchCancelledError
from serpcheck.quota import QueryCounter
from serpcheck.search.cse import MAX_RESULTS_PER_PAGE, CseClient, CustomSearchClient

logger = logging.getLogger(__name__)

# Best-effort language restriction from a free-text locale. Only these
# substrings are recognised; anything else gets no ``lr`` parameter. This is
# not a locale resolver and is not meant to become one.
LOCALE_LANGUAGE_HINTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("japan", "tokyo"), "lang_ja"),
    (("france", "paris"), "lang_fr"),
    (("germany", "berlin"), "lang_de"),
    (("spain", "madrid"), "lang_es"),
    (("italy", "rome"), "lang_it"),
)


class CustomSearchAPISearcher:
    """Fetch result URLs page by page from the Custom Search API.

    Every page re-checks the daily quota, and the counter is incremented
    before each call is issued, so failed calls count against the quota too.
    Pages are separated by a random pause drawn from the query's bounds.

    Args:
        api_key: Google API key.
        engine_id: Custom search engine id (``cx``).
        counter: Shared daily quota.
        max_daily_queries: Daily ceiling on API calls.
        client: Client to issue calls with. When omitted, an httpx-backed
            client is opened for the duration of each ``search`` call.
        http_timeout: Transport timeout for that httpx client, in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str,
        engine_id: str,
        counter: QueryCounter,
        max_daily_queries: int,
        client: CseClient | None = None,
        http_timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._engine_id = engine_id
        self._counter = counter
        self._max_daily = max_daily_queries
        self._client = client
        self._http_timeout = http_timeout

    @property
    def max_daily_queries(self) -> int:
        return self._max_daily

    async def search(
        self,
        query: SearchQuery,
        *,
        cancel: CancelToken | None = None,
    ) -> SearchResult:
        """Run the paginated query.

        Stopping because the quota ran out or because the provider returned a
        short page is not an error: the URLs gathered so far come back with
        status ``OK``. Network and unexpected failures come back as
        ``ERROR_NETWORK`` with the URLs gathered before the failure.
        Cancellation yields ``INTERRUPTED`` and no URLs.
        """
        try:
            self._check_configured()
        except ConfigurationError as e:
            logger.error("Custom Search API is not properly configured: %s", e)
            return SearchResult(status=SearchStatus.ERROR_NETWORK)

        token = cancel or CancelToken()
        urls: list[str] = []
        total_results = 0

        try:
            async with AsyncExitStack() as stack:
                client = self._client
                if client is None:
                    http = await stack.enter_async_context(
                        httpx.AsyncClient(timeout=self._http_timeout)
                    )
                    client = CustomSearchClient(http)
                total_results = await self._paginate(client, query, token, urls)
        except SearchCancelledError:
            logger.info(
                "Search for %r interrupted after %d URLs, discarding them",
                query.keyword,
                len(urls),
            )
            return SearchResult(status=SearchStatus.INTERRUPTED)
        except httpx.HTTPError as e:
            logger.error(
                "Error calling Custom Search API for %r: %s",
                query.keyword,
                e,
                exc_info=True,
            )
            return SearchResult(status=SearchStatus.ERROR_NETWORK, urls=urls)
        except Exception:
            logger.exception("Unexpected error in Custom Search API for %r", query.keyword)
            return SearchResult(status=SearchStatus.ERROR_NETWORK, urls=urls)

        return SearchResult(status=SearchStatus.OK, urls=urls, total_results=total_results)

    async def _paginate(
        self,
        client: CseClient,
        query: SearchQuery,
        cancel: CancelToken,
        urls: list[str],
    ) -> int:
        """Fetch pages into ``urls`` and return the total-results estimate."""
        per_page = min(query.result_per_page, MAX_RESULTS_PER_PAGE)
        total_results = 0

        for page in range(query.pages):
            cancel.raise_if_cancelled()

            if self._counter.limit_reached(self._max_daily):
                logger.warning(
                    "Daily API queries limit reached during pagination (%d / %d). "
                    "Stopping %r at page %d.",
                    self._counter.today_count(),
                    self._max_daily,
                    query.keyword,
                    page,
                )
                break

            start = page * per_page + 1
            params = self._build_params(query, num=per_page, start=start)
            logger.debug(
                "Querying Custom Search API: keyword=%r, page=%d, start=%d",
                query.keyword,
                page,
                start,
            )

            count = self._counter.increment()
            logger.debug("API queries count incremented to: %d / %d", count, self._max_daily)

            try:
                result_page = await client.list_results(params)
            except httpx.HTTPError as e:
                logger.warning(
                    "Custom Search call failed for %r on page %d: %s", query.keyword, page, e
                )
                raise

            urls.extend(result_page.links)

            if page == 0 and result_page.total_results is not None:
                try:
                    total_results = int(result_page.total_results)
                except ValueError:
                    logger.warning(
                        "Could not parse total results count %r", result_page.total_results
                    )

            if result_page.item_count == 0 or result_page.item_count < per_page:
                break

            if page < query.pages - 1:
                pause = query.random_page_pause()
                if pause > 0:
                    logger.debug("Sleeping %.2f seconds before page %d", pause, page + 1)
                    await cancel.sleep(pause)

        # A cancel that lands during the last call still wins over its results.
        cancel.raise_if_cancelled()
        return total_results

    def _check_configured(self) -> None:
        if not self._api_key:
            raise ConfigurationError("API key is empty")
        if not self._engine_id:
            raise ConfigurationError("custom search engine id is empty")

    def _build_params(self, query: SearchQuery, *, num: int, start: int) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query.keyword,
            "num": num,
            "start": start,
        }
        if query.has_country and query.country is not None:
            params["gl"] = query.country.lower()
        language = language_hint(query.local)
        if language is not None:
            params["lr"] = language
        return params


def language_hint(local: str | None) -> str | None:
    """Guess an ``lr`` language restriction from a free-text locale.

    Approximate by design: matches a handful of country/city substrings from
    ``LOCALE_LANGUAGE_HINTS`` and returns None for everything else.
    """
    if not local:
        return None
    lowered = local.lower()
    for needles, language in LOCALE_LANGUAGE_HINTS:
        if any(needle in lowered for needle in needles):
            return language
    return None
