"""
Preference and Wishlist API Routes.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog, get_preference_store
from api.models import PreferenceRequest, PreferenceResponse, PreferencesModel, WishlistResponse
from catalog.catalog import Catalog
from config.settings import Settings, get_settings
from core.logging import bind_context
from preferences.store import PreferenceStore

router = APIRouter(prefix="/api", tags=["Preferences"])


@router.post("/preference", response_model=PreferenceResponse)
def update_preference(
    request: PreferenceRequest,
    store: PreferenceStore = Depends(get_preference_store),
    settings: Settings = Depends(get_settings),
) -> PreferenceResponse:
    """Record a like, dislike or save for a product."""
    user_id = request.user_id or settings.default_user_id
    bind_context(user_id=user_id)

    prefs = store.update(user_id, request.product_id, request.action)
    return PreferenceResponse(preferences=PreferencesModel(**prefs.to_dict()))


@router.get("/wishlist/{user_id}", response_model=WishlistResponse)
def get_wishlist(
    user_id: str,
    store: PreferenceStore = Depends(get_preference_store),
    catalog: Catalog = Depends(get_catalog),
) -> WishlistResponse:
    """Saved products for a user, in catalog order."""
    products = catalog.resolve(store.wishlist(user_id))
    return WishlistResponse.model_validate({"products": [p.to_dict() for p in products]})
