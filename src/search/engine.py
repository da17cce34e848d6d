"""
Filtered product search.

interpret -> catalog match -> drop disliked -> cap. Results keep catalog
order; there is no relevance ranking.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from catalog.catalog import Catalog
from catalog.models import FilterSet, Product
from core.logging import get_logger
from preferences.store import PreferenceStore
from search.query_interpreter import interpret

logger = get_logger(__name__)

DEFAULT_MAX_RESULTS = 5

FOLLOW_UP_BROADEN = "I couldn't find exact matches. Would you like to broaden your search?"
FOLLOW_UP_MORE_OPTIONS = "Would you like to see more options with different filters?"
FOLLOW_UP_REFINE = "Would you like to filter by delivery time or rating?"


def follow_up_for(result_count: int) -> str:
    """Pick the follow-up prompt from the number of products shown."""
    if result_count == 0:
        return FOLLOW_UP_BROADEN
    if result_count < 3:
        return FOLLOW_UP_MORE_OPTIONS
    return FOLLOW_UP_REFINE


@dataclass
class SearchResult:
    products: List[Product] = field(default_factory=list)
    filters: FilterSet = field(default_factory=dict)
    follow_up: str = FOLLOW_UP_BROADEN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "products": [p.to_dict() for p in self.products],
            "filters": dict(self.filters),
            "followUp": self.follow_up,
        }


class SearchEngine:
    """
    Composes the catalog, the query interpreter and the preference store.

    Args:
        catalog: Product inventory to search
        preferences: Store consulted for the caller's dislikes
        max_results: Cap on returned products
        interpreter: Text -> FilterSet function (defaults to interpret)
    """

    def __init__(
        self,
        catalog: Catalog,
        preferences: PreferenceStore,
        max_results: int = DEFAULT_MAX_RESULTS,
        interpreter: Callable[[str], FilterSet] = interpret,
    ):
        self._catalog = catalog
        self._preferences = preferences
        self._max_results = max_results
        self._interpret = interpreter

    def search(self, user_id: str, raw_text: str) -> SearchResult:
        filters = self._interpret(raw_text)
        candidates = self._catalog.match(filters)

        disliked = self._preferences.get(user_id).disliked
        products = [p for p in candidates if p.id not in disliked][:self._max_results]

        logger.info(
            "Search completed",
            user_id=user_id,
            filters=filters,
            candidates=len(candidates),
            returned=len(products),
        )
        return SearchResult(
            products=products,
            filters=filters,
            follow_up=follow_up_for(len(products)),
        )
