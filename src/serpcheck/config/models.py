"""Pydantic configuration models for serpcheck."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from serpcheck.data import ANY_COUNTRY, Device, SearchQuery

# ============================================================
# Search Settings
# ============================================================


class SearchSettings(BaseModel):
    """Immutable snapshot of the persisted search settings.

    Scraping-only values (``fetch_retry``, datacenter, device, custom
    parameters) are carried through for the scraping engine and ignored by
    the Custom Search API path.
    """

    pages: int = Field(default=5, ge=1)
    result_per_page: int = Field(default=10, ge=1)
    min_pause_between_page_sec: int = Field(default=5, ge=0)
    max_pause_between_page_sec: int = Field(default=5, ge=0)
    max_threads: int = Field(default=1, ge=1)
    fetch_retry: int = Field(default=3, ge=0)

    default_datacenter: str | None = None
    default_device: Device = Device.DESKTOP
    default_local: str | None = None
    default_country: str = ANY_COUNTRY
    default_custom_parameters: str | None = None

    api_key: str = ""
    custom_search_engine_id: str = ""
    use_custom_search_api: bool = False
    max_daily_api_queries: int = Field(default=50, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def pause_bounds_ordered(self) -> "SearchSettings":
        if self.max_pause_between_page_sec < self.min_pause_between_page_sec:
            msg = (
                "max_pause_between_page_sec must be >= min_pause_between_page_sec "
                f"({self.max_pause_between_page_sec} < {self.min_pause_between_page_sec})"
            )
            raise ValueError(msg)
        return self

    @property
    def api_configured(self) -> bool:
        """Whether the API is enabled and both credentials are present."""
        return self.use_custom_search_api and bool(self.api_key) and bool(self.custom_search_engine_id)

    def query_for(
        self,
        keyword: str,
        *,
        country: str | None = None,
        local: str | None = None,
    ) -> SearchQuery:
        """Build a query for ``keyword`` using this snapshot's defaults."""
        return SearchQuery(
            keyword=keyword,
            country=country if country is not None else self.default_country,
            local=local if local is not None else self.default_local,
            pages=self.pages,
            result_per_page=self.result_per_page,
            min_pause_sec=self.min_pause_between_page_sec,
            max_pause_sec=self.max_pause_between_page_sec,
            device=self.default_device,
            datacenter=self.default_datacenter,
            custom_parameters=self.default_custom_parameters,
        )


# ============================================================
# Store Config
# ============================================================


class StoreConfig(BaseModel):
    """Where persisted settings and the API quota counter live."""

    type: Literal["memory", "json"] = "json"
    path: str = "data/serpcheck.json"

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for the standard library root logger."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class SerpcheckConfig(BaseModel):
    """Root configuration for serpcheck.

    ``search`` holds per-run overrides applied on top of the settings read
    from the store; keys are ``SearchSettings`` field names.
    """

    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: dict[str, Any] = Field(default_factory=dict)
    http_timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}
