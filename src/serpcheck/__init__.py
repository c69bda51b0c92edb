"""serpcheck: search-engine result retrieval with a quota-limited API and scraping fallback."""

__version__ = "0.1.0"
