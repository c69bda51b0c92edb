"""Core data models for serpcheck."""

import random
from dataclasses import dataclass, field
from enum import StrEnum

# Country codes meaning "no country restriction".
ANY_COUNTRY = "__"
_ANY_COUNTRY_VALUES = frozenset({"", ANY_COUNTRY, "any"})


class SearchStatus(StrEnum):
    """Outcome of a single search."""

    OK = "ok"
    ERROR_NETWORK = "error_network"
    INTERRUPTED = "interrupted"


class Device(StrEnum):
    """Device the scraping engine emulates."""

    DESKTOP = "desktop"
    MOBILE = "mobile"


@dataclass(frozen=True)
class SearchQuery:
    """A keyword to look up, with the pagination and locality parameters for it."""

    keyword: str
    country: str | None = None
    local: str | None = None
    pages: int = 5
    result_per_page: int = 10
    min_pause_sec: int = 0
    max_pause_sec: int = 0
    device: Device = Device.DESKTOP
    datacenter: str | None = None
    custom_parameters: str | None = None

    @property
    def has_country(self) -> bool:
        """Whether the query is restricted to a specific country."""
        return self.country is not None and self.country.lower() not in _ANY_COUNTRY_VALUES

    def random_page_pause(self) -> float:
        """Pick a pause in seconds, uniformly within the query's pause bounds."""
        if self.max_pause_sec <= self.min_pause_sec:
            return float(self.min_pause_sec)
        return random.uniform(self.min_pause_sec, self.max_pause_sec)


@dataclass
class SearchResult:
    """Result of one search.

    ``urls`` keeps the provider ranking and may contain duplicates across
    pages. ``total_results`` is the provider's best-effort estimate, 0 when
    unknown.
    """

    status: SearchStatus
    urls: list[str] = field(default_factory=list)
    total_results: int = 0

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.OK
