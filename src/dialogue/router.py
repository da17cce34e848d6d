"""
Dialogue Router.

Classifies an inbound chat message and answers it:
1. greeting  -> canned introduction
2. wishlist  -> the user's saved products
3. otherwise -> filtered product search
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from catalog.catalog import Catalog
from catalog.models import FilterSet, Product
from core.logging import get_logger
from preferences.store import PreferenceStore
from search.engine import SearchEngine

logger = get_logger(__name__)

GREETING_PATTERN = re.compile(r"^(hi|hello|hey)")
WISHLIST_KEYWORDS = ("wishlist", "saved")

INTRODUCTION = (
    "Hello! I'm your AI shopping assistant. Tell me what you're looking for! "
    "For example: 'red khaadi kurta for men under ₹3000' or 'beige sneakers under ₹2000'"
)
EMPTY_WISHLIST = "Your wishlist is empty. Save items by clicking the heart icon!"
NO_MATCHES = "I couldn't find exact matches. Try adjusting your filters or browse our collection!"


class ReplyType(str, Enum):
    TEXT = "text"
    PRODUCTS = "products"


class Intent(str, Enum):
    GREETING = "greeting"
    WISHLIST = "wishlist"
    SEARCH = "search"


def classify(message: str) -> Intent:
    lowered = (message or "").lower()
    if GREETING_PATTERN.match(lowered):
        return Intent.GREETING
    if any(keyword in lowered for keyword in WISHLIST_KEYWORDS):
        return Intent.WISHLIST
    return Intent.SEARCH


@dataclass
class ChatReply:
    content: str
    type: ReplyType = ReplyType.TEXT
    products: Optional[List[Product]] = None
    filters: Optional[FilterSet] = None
    follow_up: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"content": self.content, "type": self.type.value}
        if self.products is not None:
            data["products"] = [p.to_dict() for p in self.products]
        if self.filters is not None:
            data["filters"] = dict(self.filters)
        if self.follow_up is not None:
            data["followUp"] = self.follow_up
        return data


class DialogueRouter:
    """Routes chat messages to a canned reply, the wishlist or the search engine."""

    def __init__(self, catalog: Catalog, preferences: PreferenceStore, engine: SearchEngine):
        self._catalog = catalog
        self._preferences = preferences
        self._engine = engine

    def route(self, user_id: str, message: str) -> ChatReply:
        intent = classify(message)
        logger.debug("Chat message classified", user_id=user_id, intent=intent.value)

        if intent is Intent.GREETING:
            return ChatReply(content=INTRODUCTION)
        if intent is Intent.WISHLIST:
            return self._wishlist_reply(user_id)
        return self._search_reply(user_id, message)

    def _wishlist_reply(self, user_id: str) -> ChatReply:
        saved = self._catalog.resolve(self._preferences.wishlist(user_id))
        content = (
            f"Here are your {len(saved)} saved items:" if saved else EMPTY_WISHLIST
        )
        return ChatReply(content=content, type=ReplyType.PRODUCTS, products=saved)

    def _search_reply(self, user_id: str, message: str) -> ChatReply:
        result = self._engine.search(user_id, message)
        count = len(result.products)
        content = (
            f"I found {count} products matching your search:" if count else NO_MATCHES
        )
        return ChatReply(
            content=content,
            type=ReplyType.PRODUCTS,
            products=result.products,
            filters=result.filters,
            follow_up=result.follow_up,
        )
