"""Configuration module for serpcheck."""

from serpcheck.config.loader import get_default_config_path, load_config
from serpcheck.config.models import LoggingConfig, SearchSettings, SerpcheckConfig, StoreConfig
from serpcheck.config.options import SearchOptions
from serpcheck.config.store import ConfigStore, JsonFileConfigStore, MemoryConfigStore

__all__ = [
    "ConfigStore",
    "JsonFileConfigStore",
    "LoggingConfig",
    "MemoryConfigStore",
    "SearchOptions",
    "SearchSettings",
    "SerpcheckConfig",
    "StoreConfig",
    "get_default_config_path",
    "load_config",
]
