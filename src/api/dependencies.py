"""
FastAPI dependency providers.

Long-lived services are process singletons (lru_cache). Tests replace them
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from catalog.catalog import Catalog, load_catalog
from config.settings import Settings, get_settings
from dialogue.router import DialogueRouter
from payments.orders import OrderService
from preferences.store import PreferenceStore, create_preference_store
from search.engine import SearchEngine


def get_catalog() -> Catalog:
    settings = get_settings()
    return load_catalog(str(settings.catalog_path) if settings.catalog_path else None)


@lru_cache(maxsize=1)
def get_preference_store() -> PreferenceStore:
    return create_preference_store(get_settings())


@lru_cache(maxsize=1)
def get_order_service() -> OrderService:
    return OrderService(get_settings())


def get_search_engine(
    catalog: Catalog = Depends(get_catalog),
    preferences: PreferenceStore = Depends(get_preference_store),
    settings: Settings = Depends(get_settings),
) -> SearchEngine:
    return SearchEngine(catalog, preferences, max_results=settings.max_results)


def get_dialogue_router(
    catalog: Catalog = Depends(get_catalog),
    preferences: PreferenceStore = Depends(get_preference_store),
    engine: SearchEngine = Depends(get_search_engine),
) -> DialogueRouter:
    return DialogueRouter(catalog, preferences, engine)
