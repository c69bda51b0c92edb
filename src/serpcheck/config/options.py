"""Mapping between the persisted key/value store and ``SearchSettings``."""

import logging

from pydantic import ValidationError

from serpcheck.config.models import SearchSettings
from serpcheck.config.store import ConfigStore, StoreValue
from serpcheck.data import Device
from serpcheck.errors import ConfigurationError

logger = logging.getLogger(__name__)

PAGES = "google.pages"
RESULT_PER_PAGE = "google.result_per_page"
MIN_PAUSE_BETWEEN_PAGE_SEC = "google.min_pause_between_page_sec"
MAX_PAUSE_BETWEEN_PAGE_SEC = "google.max_pause_between_page_sec"
MAX_THREADS = "google.maxThreads"
FETCH_RETRY = "google.fetchRetry"

DEFAULT_DATACENTER = "google.default_datacenter"
DEFAULT_DEVICE = "google.default.device"
DEFAULT_LOCAL = "google.default.local"
DEFAULT_COUNTRY = "google.default.country"
DEFAULT_CUSTOM_PARAMETERS = "google.default.custom"

API_KEY = "google.api_key"
CUSTOM_SEARCH_ENGINE_ID = "google.custom_search_engine_id"
USE_CUSTOM_SEARCH_API = "google.use_custom_search_api"
MAX_DAILY_API_QUERIES = "google.max_daily_api_queries"

# Owned by QuotaTracker.
API_QUERIES_COUNT_DATE = "google.api_queries_count_date"
API_QUERIES_COUNT = "google.api_queries_count"


class SearchOptions:
    """Reads and writes search settings in a ``ConfigStore``.

    Unset keys read as the ``SearchSettings`` defaults; on write, values equal
    to their default are removed from the store rather than persisted.

    Args:
        store: Backing key/value store.
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def load(self) -> SearchSettings:
        """Read a fresh settings snapshot from the store.

        Raises:
            ConfigurationError: If the stored values fail validation.
        """
        d = SearchSettings()
        s = self._store
        values = {
            "pages": s.get_int(PAGES, d.pages),
            "result_per_page": s.get_int(RESULT_PER_PAGE, d.result_per_page),
            "min_pause_between_page_sec": s.get_int(
                MIN_PAUSE_BETWEEN_PAGE_SEC, d.min_pause_between_page_sec
            ),
            "max_pause_between_page_sec": s.get_int(
                MAX_PAUSE_BETWEEN_PAGE_SEC, d.max_pause_between_page_sec
            ),
            "max_threads": s.get_int(MAX_THREADS, d.max_threads),
            "fetch_retry": s.get_int(FETCH_RETRY, d.fetch_retry),
            "default_datacenter": s.get_string(DEFAULT_DATACENTER, d.default_datacenter),
            "default_device": _parse_device(s.get_string(DEFAULT_DEVICE)),
            "default_local": s.get_string(DEFAULT_LOCAL, d.default_local),
            "default_country": s.get_string(DEFAULT_COUNTRY) or d.default_country,
            "default_custom_parameters": s.get_string(
                DEFAULT_CUSTOM_PARAMETERS, d.default_custom_parameters
            ),
            "api_key": s.get_string(API_KEY) or "",
            "custom_search_engine_id": s.get_string(CUSTOM_SEARCH_ENGINE_ID) or "",
            "use_custom_search_api": s.get_bool(USE_CUSTOM_SEARCH_API, d.use_custom_search_api),
            "max_daily_api_queries": s.get_int(MAX_DAILY_API_QUERIES, d.max_daily_api_queries),
        }
        try:
            return SearchSettings.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid stored search settings: {e}") from e

    def update(self, settings: SearchSettings) -> None:
        """Persist ``settings``, clearing keys whose value is the default."""
        d = SearchSettings()
        pairs: list[tuple[str, StoreValue, StoreValue]] = [
            (PAGES, settings.pages, d.pages),
            (RESULT_PER_PAGE, settings.result_per_page, d.result_per_page),
            (
                MIN_PAUSE_BETWEEN_PAGE_SEC,
                settings.min_pause_between_page_sec,
                d.min_pause_between_page_sec,
            ),
            (
                MAX_PAUSE_BETWEEN_PAGE_SEC,
                settings.max_pause_between_page_sec,
                d.max_pause_between_page_sec,
            ),
            (MAX_THREADS, settings.max_threads, d.max_threads),
            (FETCH_RETRY, settings.fetch_retry, d.fetch_retry),
            (DEFAULT_DATACENTER, settings.default_datacenter, d.default_datacenter),
            (DEFAULT_DEVICE, settings.default_device.value, d.default_device.value),
            (DEFAULT_LOCAL, settings.default_local, d.default_local),
            (DEFAULT_COUNTRY, settings.default_country, d.default_country),
            (
                DEFAULT_CUSTOM_PARAMETERS,
                settings.default_custom_parameters,
                d.default_custom_parameters,
            ),
            (API_KEY, settings.api_key, d.api_key),
            (CUSTOM_SEARCH_ENGINE_ID, settings.custom_search_engine_id, d.custom_search_engine_id),
            (USE_CUSTOM_SEARCH_API, settings.use_custom_search_api, d.use_custom_search_api),
            (MAX_DAILY_API_QUERIES, settings.max_daily_api_queries, d.max_daily_api_queries),
        ]
        for key, value, default in pairs:
            self._store.set(key, _none_if_default(value, default))


def _none_if_default(value: StoreValue, default: StoreValue) -> StoreValue:
    """Return None when ``value`` equals ``default`` so the key gets cleared."""
    if value is None or value == default:
        return None
    return value


def _parse_device(raw: str | None) -> Device:
    if raw is None:
        return Device.DESKTOP
    try:
        return Device(raw.lower())
    except ValueError:
        logger.warning("Unknown device %r in settings, using desktop", raw)
        return Device.DESKTOP
