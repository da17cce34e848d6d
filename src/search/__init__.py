"""
Search Module: free-text query interpretation and filtered catalog search.

Provides:
- interpret: message -> FilterSet
- SearchEngine: FilterSet + preferences -> capped product list and follow-up
"""

from search.engine import (
    FOLLOW_UP_BROADEN,
    FOLLOW_UP_MORE_OPTIONS,
    FOLLOW_UP_REFINE,
    SearchEngine,
    SearchResult,
    follow_up_for,
)
from search.query_interpreter import interpret

__all__ = [
    "FOLLOW_UP_BROADEN",
    "FOLLOW_UP_MORE_OPTIONS",
    "FOLLOW_UP_REFINE",
    "SearchEngine",
    "SearchResult",
    "follow_up_for",
    "interpret",
]
