"""
In-memory product catalog.

Loaded once at startup from a JSON array of products and never mutated
afterwards. Matching keeps the stored order; there is no re-sorting.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from catalog.models import PRICE_FILTER_KEYS, TEXT_FILTER_KEYS, FilterSet, Product
from core.logging import get_logger

logger = get_logger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).parent / "data" / "products.json"


class CatalogError(Exception):
    """Raised when a catalog file cannot be loaded."""
    pass


class Catalog:
    """Immutable, ordered collection of Products."""

    def __init__(self, products: Iterable[Product]):
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_id: Dict[str, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise CatalogError(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "Catalog":
        """Load a catalog from a JSON array of product objects."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                rows = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Failed to read catalog {path}: {e}") from e

        if not isinstance(rows, list):
            raise CatalogError(f"Catalog {path} must contain a JSON array")

        try:
            products = [Product.from_dict(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Malformed product in {path}: {e}") from e

        catalog = cls(products)
        logger.info("Catalog loaded", path=str(path), products=len(catalog))
        return catalog

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    @property
    def products(self) -> Sequence[Product]:
        return self._products

    def get(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(product_id)

    def resolve(self, product_ids: Iterable[str]) -> List[Product]:
        """Products for the given ids, in catalog order. Unknown ids are skipped."""
        wanted = set(product_ids)
        return [p for p in self._products if p.id in wanted]

    def match(self, filters: FilterSet) -> List[Product]:
        """
        Products satisfying every constraint present in ``filters``.

        Text keys must appear as a case-insensitive substring of the
        corresponding product field; price bounds are inclusive. An empty
        FilterSet returns the whole catalog in stored order.
        """
        return [p for p in self._products if _matches(p, filters)]


def _matches(product: Product, filters: FilterSet) -> bool:
    for key in TEXT_FILTER_KEYS:
        wanted = filters.get(key)
        if wanted is None:
            continue
        if str(wanted).lower() not in getattr(product, key).lower():
            return False

    min_price, max_price = (filters.get(k) for k in PRICE_FILTER_KEYS)
    if max_price is not None and product.price > max_price:
        return False
    if min_price is not None and product.price < min_price:
        return False
    return True


@lru_cache(maxsize=1)
def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Get the process-wide catalog, loading it on first use.

    Args:
        path: Optional JSON file; defaults to the bundled catalog.
    """
    return Catalog.from_json(path or BUNDLED_CATALOG_PATH)
