"""
Query Interpreter.

Turns a free-text shopping message into a sparse FilterSet:

    "red khaadi kurta for men under ₹3000"
    -> {"category": "kurta", "color": "red", "material": "khaadi",
        "gender": "men", "maxPrice": 3000}

Pure keyword and regex extraction. Deterministic, no I/O, never raises.
Vocabulary order is significant: each dimension takes the first entry of its
table that occurs anywhere in the message, so "t-shirt" must stay ahead of
"shirt" and "khaadi" ahead of "khadi".
"""

import re
from typing import Optional, Pattern, Sequence, Tuple

from catalog.models import FilterSet


# ============================================================================
# Vocabularies (ordered, first hit wins)
# ============================================================================

CATEGORIES: Tuple[str, ...] = (
    "kurta", "saree", "jeans", "jacket", "t-shirt", "tshirt", "shirt",
    "dress", "sneakers", "shoes", "blazer", "trousers", "pants",
)

COLORS: Tuple[str, ...] = (
    "red", "blue", "black", "white", "green", "yellow", "pink", "purple",
    "orange", "brown", "grey", "gray", "beige", "maroon", "navy", "golden",
)

BRANDS: Tuple[str, ...] = (
    "nike", "adidas", "puma", "manyavar", "fabindia", "zara", "h&m",
    "levis", "levi's", "raymond", "biba", "sabyasachi",
)

MATERIALS: Tuple[str, ...] = (
    "cotton", "silk", "khaadi", "khadi", "leather", "denim", "wool",
    "linen", "polyester", "canvas", "synthetic",
)


# ============================================================================
# Price patterns (matched against the raw message, case-insensitive)
# ============================================================================

_AMOUNT = r"₹?(\d+)"

MAX_PRICE_PATTERNS: Tuple[Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE) for p in (
        rf"under {_AMOUNT}",
        rf"below {_AMOUNT}",
        rf"less than {_AMOUNT}",
        rf"max {_AMOUNT}",
        rf"{_AMOUNT} or less",
        rf"up to {_AMOUNT}",
    )
)

MIN_PRICE_PATTERNS: Tuple[Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE) for p in (
        rf"above {_AMOUNT}",
        rf"over {_AMOUNT}",
        rf"more than {_AMOUNT}",
        rf"min {_AMOUNT}",
    )
)

PRICE_RANGE_PATTERN: Pattern = re.compile(
    rf"{_AMOUNT}\s*(?:to|-)\s*{_AMOUNT}", re.IGNORECASE
)


# ============================================================================
# Extraction helpers
# ============================================================================

def _first_token(text: str, vocabulary: Sequence[str]) -> Optional[str]:
    for token in vocabulary:
        if token in text:
            return token
    return None


def _first_amount(text: str, patterns: Sequence[Pattern]) -> Optional[int]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def _gender(text: str) -> Optional[str]:
    # Kept exactly as the product rules state it: "women" also contains "men",
    # so the first branch wins for most women's queries.
    if "men" in text or ("male" in text and "female" not in text):
        return "men"
    if "women" in text or "female" in text:
        return "women"
    return None


# ============================================================================
# Public API
# ============================================================================

def interpret(text: str) -> FilterSet:
    """
    Extract structured filters from a free-text message.

    Args:
        text: Raw user message. Empty or unmatched text yields an empty dict.

    Returns:
        FilterSet with only the keys that were actually found.
    """
    filters: FilterSet = {}
    raw = text or ""
    lowered = raw.lower()

    for key, vocabulary in (
        ("category", CATEGORIES),
        ("color", COLORS),
        ("brand", BRANDS),
        ("material", MATERIALS),
    ):
        token = _first_token(lowered, vocabulary)
        if token is not None:
            filters[key] = token

    gender = _gender(lowered)
    if gender is not None:
        filters["gender"] = gender

    max_price = _first_amount(raw, MAX_PRICE_PATTERNS)
    if max_price is not None:
        filters["maxPrice"] = max_price

    min_price = _first_amount(raw, MIN_PRICE_PATTERNS)
    if min_price is not None:
        filters["minPrice"] = min_price

    # A range always overrides the single-bound matches above.
    range_match = PRICE_RANGE_PATTERN.search(raw)
    if range_match:
        filters["minPrice"] = int(range_match.group(1))
        filters["maxPrice"] = int(range_match.group(2))

    return filters
