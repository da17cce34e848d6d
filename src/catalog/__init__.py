"""
Product catalog: the immutable inventory searched by the assistant.
"""

from catalog.catalog import BUNDLED_CATALOG_PATH, Catalog, CatalogError, load_catalog
from catalog.models import FILTER_KEYS, FilterSet, Product

__all__ = [
    "BUNDLED_CATALOG_PATH",
    "Catalog",
    "CatalogError",
    "FILTER_KEYS",
    "FilterSet",
    "Product",
    "load_catalog",
]
