"""Cooperative cancellation for long-running searches."""

import asyncio
import logging

from serpcheck.errors import SearchCancelledError

logger = logging.getLogger(__name__)


class CancelToken:
    """Cancellation signal shared between a caller and running searches.

    Searches observe it at defined suspension points only: the top of each
    page iteration, the pause between pages and the end of pagination. A
    request that is already on the wire is allowed to complete, but its
    results are discarded.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        if not self._event.is_set():
            logger.debug("Cancellation requested")
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``SearchCancelledError`` if cancellation was requested."""
        if self._event.is_set():
            raise SearchCancelledError()

    async def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds``, waking early if cancelled.

        Raises:
            SearchCancelledError: If cancellation is requested before or
                during the sleep.
        """
        self.raise_if_cancelled()
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except TimeoutError:
            return
        raise SearchCancelledError()
