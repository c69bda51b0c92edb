"""Thin async client for the Google Custom Search JSON API."""

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

CSE_API_URL = "https://www.googleapis.com/customsearch/v1"
# Hard cap on ``num`` enforced by the API.
MAX_RESULTS_PER_PAGE = 10


@dataclass(frozen=True)
class CsePage:
    """One page of Custom Search results."""

    links: list[str] = field(default_factory=list)
    total_results: str | None = None
    item_count: int = 0


class CseClient(Protocol):
    """Black-box RPC against the search endpoint."""

    async def list_results(self, params: dict[str, str | int]) -> CsePage: ...


class CustomSearchClient:
    """Issue ``cse.list`` calls over a caller-owned ``httpx.AsyncClient``.

    Transport failures and non-2xx responses surface as ``httpx.HTTPError``.

    Args:
        http: HTTP client; its timeout applies to each call.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def list_results(self, params: dict[str, str | int]) -> CsePage:
        response = await self._http.get(CSE_API_URL, params=params)
        response.raise_for_status()
        return parse_page(response.json())


def parse_page(data: dict[str, Any]) -> CsePage:
    """Extract links and the total-results estimate from a response body."""
    items = data.get("items") or []
    links = [item["link"] for item in items if item.get("link")]
    total = (data.get("searchInformation") or {}).get("totalResults")
    return CsePage(
        links=links,
        total_results=str(total) if total is not None else None,
        item_count=len(items),
    )
