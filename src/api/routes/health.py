"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog, get_preference_store
from catalog.catalog import Catalog
from config.settings import Settings, get_settings
from preferences.store import PreferenceStore


router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "shopping-assistant",
    }


@router.get("/health/detailed")
def detailed_health_check(
    catalog: Catalog = Depends(get_catalog),
    store: PreferenceStore = Depends(get_preference_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Reports "degraded" when preferences are served from the in-memory
    fallback instead of Redis.
    """
    return {
        "status": "degraded" if store.is_degraded else "healthy",
        "service": "shopping-assistant",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "catalog": {"products": len(catalog)},
            "preferences": store.get_stats(),
        },
    }


@router.get("/ready")
def readiness_check(catalog: Catalog = Depends(get_catalog)) -> Dict[str, str]:
    """
    Kubernetes-style readiness probe.

    Preferences always have a fallback, so only an empty catalog blocks traffic.
    """
    if len(catalog) == 0:
        return {"status": "not_ready", "reason": "catalog_empty"}
    return {"status": "ready"}


@router.get("/live")
def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}
