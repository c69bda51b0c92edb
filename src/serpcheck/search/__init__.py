from serpcheck.search.base import SerpSearcher
from serpcheck.search.cse import CsePage, CseClient, CustomSearchClient
from serpcheck.search.custom_search import CustomSearchAPISearcher, language_hint
from serpcheck.search.noop import NoOpSearcher
from serpcheck.search.selector import StrategySelector

__all__ = [
    "CseClient",
    "CsePage",
    "CustomSearchAPISearcher",
    "CustomSearchClient",
    "NoOpSearcher",
    "SerpSearcher",
    "StrategySelector",
    "language_hint",
]
