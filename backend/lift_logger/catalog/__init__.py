"""Exercise catalog - cached canonical names, refresh scheduling and ranking."""

from .cache import CatalogSnapshot, ExerciseCatalog
from .ranker import MAX_SUGGESTIONS, rank
from .refresher import CatalogRefresher

__all__ = [
    "CatalogRefresher",
    "CatalogSnapshot",
    "ExerciseCatalog",
    "MAX_SUGGESTIONS",
    "rank",
]
