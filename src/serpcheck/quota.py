"""Daily API query quota, persisted in the config store."""

import logging
import threading
from collections.abc import Callable
from datetime import date
from typing import Protocol

from serpcheck.config.options import API_QUERIES_COUNT, API_QUERIES_COUNT_DATE
from serpcheck.config.store import ConfigStore

logger = logging.getLogger(__name__)


class QueryCounter(Protocol):
    """Capability the API searcher and the selector need from the quota."""

    def today_count(self) -> int:
        """Number of API calls made today."""
        ...

    def increment(self) -> int:
        """Record one more API call and return today's new count."""
        ...

    def limit_reached(self, max_daily: int) -> bool:
        """Whether today's count has reached ``max_daily``."""
        ...


class QuotaTracker:
    """Day-scoped counter of Custom Search API calls.

    The counter is stored as two keys: the ISO date it belongs to and the
    count for that date. A count stored for any other day than today reads
    as 0; the rollover happens lazily on the first increment after midnight,
    there is no reset operation.

    All increments go through one lock, so concurrent callers (tasks or
    threads) never persist the same count twice, including when they race
    across midnight.

    Args:
        store: Backing key/value store.
        today: Returns the current local calendar day (injectable for tests).
    """

    def __init__(
        self,
        store: ConfigStore,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._today = today
        self._lock = threading.Lock()

    def today_count(self) -> int:
        today = self._today().isoformat()
        stored_date = self._store.get_string(API_QUERIES_COUNT_DATE)
        if stored_date != today:
            return 0
        return self._store.get_int(API_QUERIES_COUNT, 0)

    def increment(self) -> int:
        with self._lock:
            today = self._today().isoformat()
            stored_date = self._store.get_string(API_QUERIES_COUNT_DATE)
            if stored_date != today:
                if stored_date is not None:
                    logger.info("API quota rolled over from %s to %s", stored_date, today)
                # Count before date: a stale date always reads as 0, so a
                # failure between the two writes never carries yesterday over.
                self._store.set(API_QUERIES_COUNT, 1)
                self._store.set(API_QUERIES_COUNT_DATE, today)
                return 1
            count = self._store.get_int(API_QUERIES_COUNT, 0) + 1
            self._store.set(API_QUERIES_COUNT, count)
            return count

    def limit_reached(self, max_daily: int) -> bool:
        return self.today_count() >= max_daily
