from serpcheck.pipeline.base import Pipeline
from serpcheck.pipeline.runner import SearchRunner

__all__ = ["Pipeline", "SearchRunner"]
