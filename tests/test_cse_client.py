"""Tests for CustomSearchClient."""

from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from serpcheck.search.cse import CSE_API_URL, CsePage, CustomSearchClient, parse_page


@pytest.fixture
def mock_response_data() -> dict[str, Any]:
    """Sample Custom Search JSON API response."""
    return {
        "searchInformation": {"totalResults": "12300", "searchTime": 0.2},
        "items": [
            {"title": "One", "link": "https://one.example.com/"},
            {"title": "Two", "link": "https://two.example.com/page"},
        ],
    }


def test_parse_page_extracts_links_and_total(mock_response_data: dict[str, Any]) -> None:
    page = parse_page(mock_response_data)
    assert page == CsePage(
        links=["https://one.example.com/", "https://two.example.com/page"],
        total_results="12300",
        item_count=2,
    )


def test_parse_page_without_items() -> None:
    page = parse_page({"searchInformation": {"totalResults": "0"}})
    assert page.links == []
    assert page.item_count == 0
    assert page.total_results == "0"


def test_parse_page_without_search_information() -> None:
    assert parse_page({}).total_results is None


def test_parse_page_counts_items_without_link() -> None:
    page = parse_page({"items": [{"title": "no link"}, {"link": "https://a.example/"}]})
    assert page.links == ["https://a.example/"]
    assert page.item_count == 2


async def test_list_results_sends_params(
    mock_response_data: dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    mock_response = MagicMock()
    mock_response.json.return_value = mock_response_data
    mock_response.raise_for_status = MagicMock()
    calls: list[tuple[Any, ...]] = []

    async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> MagicMock:
        calls.append((url, kwargs))
        return mock_response

    monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

    params: dict[str, str | int] = {"key": "k", "cx": "c", "q": "coffee", "num": 10, "start": 1}
    async with httpx.AsyncClient() as http:
        page = await CustomSearchClient(http).list_results(params)

    assert calls == [(CSE_API_URL, {"params": params})]
    assert page.item_count == 2
    mock_response.raise_for_status.assert_called_once()


async def test_list_results_raises_on_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    request = httpx.Request("GET", CSE_API_URL)

    async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
        return httpx.Response(403, request=request, json={"error": {"message": "quota"}})

    monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

    async with httpx.AsyncClient() as http:
        with pytest.raises(httpx.HTTPStatusError):
            await CustomSearchClient(http).list_results({"q": "x"})
