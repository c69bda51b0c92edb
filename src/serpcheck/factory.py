"""Factory functions to create components from configuration."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from serpcheck.config.models import SearchSettings, SerpcheckConfig, StoreConfig
from serpcheck.config.options import SearchOptions
from serpcheck.config.store import ConfigStore, JsonFileConfigStore, MemoryConfigStore
from serpcheck.errors import ConfigurationError
from serpcheck.pipeline.runner import SearchRunner
from serpcheck.quota import QuotaTracker
from serpcheck.search.base import SerpSearcher
from serpcheck.search.noop import NoOpSearcher
from serpcheck.search.selector import StrategySelector


@dataclass
class App:
    """Components wired from one configuration."""

    store: ConfigStore
    options: SearchOptions
    quota: QuotaTracker
    selector: StrategySelector
    runner: SearchRunner
    load_settings: Callable[[], SearchSettings]


def create_store(config: StoreConfig) -> ConfigStore:
    """Create a config store from config.

    Uses explicit type matching rather than getattr.
    """
    if config.type == "memory":
        return MemoryConfigStore()
    if config.type == "json":
        return JsonFileConfigStore(Path(config.path))
    msg = f"Unknown store type: {config.type}"
    raise ValueError(msg)


def settings_loader(
    options: SearchOptions,
    overrides: dict[str, object],
) -> Callable[[], SearchSettings]:
    """Return a callable reading settings from the store with ``overrides`` applied.

    Raises:
        ConfigurationError: If an override names an unknown setting.
    """
    unknown = set(overrides) - set(SearchSettings.model_fields)
    if unknown:
        raise ConfigurationError(f"Unknown search settings: {', '.join(sorted(unknown))}")

    def load() -> SearchSettings:
        settings = options.load()
        if not overrides:
            return settings
        try:
            return SearchSettings.model_validate({**settings.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid search setting overrides: {e}") from e

    return load


def create_from_config(
    config: SerpcheckConfig,
    *,
    scraper: SerpSearcher | None = None,
) -> App:
    """Wire the store, quota, selector and runner for a root config.

    Args:
        config: Root configuration.
        scraper: Scraping strategy for the fallback path. Defaults to
            ``NoOpSearcher`` when no scraping engine is available.

    Returns:
        The wired components.
    """
    store = create_store(config.store)
    options = SearchOptions(store)
    quota = QuotaTracker(store)
    selector = StrategySelector(
        scraper or NoOpSearcher(),
        quota,
        http_timeout=config.http_timeout,
    )
    load_settings = settings_loader(options, config.search)
    runner = SearchRunner(selector, load_settings)
    return App(
        store=store,
        options=options,
        quota=quota,
        selector=selector,
        runner=runner,
        load_settings=load_settings,
    )
