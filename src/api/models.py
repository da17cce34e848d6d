"""
Pydantic models for the shopping assistant API.

Wire names are camelCase (userId, productId, followUp, orderId); Python
attributes are snake_case and populated through aliases.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dialogue.router import ReplyType
from preferences.store import PreferenceAction


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Shared
# ============================================================================

class ProductModel(BaseModel):
    """A catalog product as returned to clients."""
    id: str
    title: str
    brand: str
    color: str
    material: str
    category: str
    gender: str
    price: int
    size: List[str] = Field(default_factory=list)
    rating: float = 0.0
    delivery: str = ""
    image: str = ""
    link: str = ""


FilterSetModel = Dict[str, Union[int, str]]


class PreferencesModel(BaseModel):
    liked: List[str] = Field(default_factory=list)
    disliked: List[str] = Field(default_factory=list)
    saved: List[str] = Field(default_factory=list)


# ============================================================================
# Chat / Search
# ============================================================================

class ChatRequest(_CamelModel):
    """Chat or search message. Either ``message`` or ``query`` is required."""
    message: Optional[str] = Field(None, description="User message")
    query: Optional[str] = Field(None, description="Alias of message")
    user_id: Optional[str] = Field(None, alias="userId", description="Defaults to the guest user")

    @model_validator(mode="after")
    def require_text(self):
        if self.message is None and self.query is None:
            raise ValueError("Either 'message' or 'query' must be provided")
        return self

    @property
    def text(self) -> str:
        return self.message if self.message is not None else self.query


class ChatResponse(_CamelModel):
    content: str
    type: ReplyType
    products: Optional[List[ProductModel]] = None
    filters: Optional[FilterSetModel] = None
    follow_up: Optional[str] = Field(None, alias="followUp")


class SearchResponse(_CamelModel):
    products: List[ProductModel]
    filters: FilterSetModel
    follow_up: str = Field(..., alias="followUp")


# ============================================================================
# Preferences
# ============================================================================

class PreferenceRequest(_CamelModel):
    user_id: Optional[str] = Field(None, alias="userId")
    product_id: str = Field(..., alias="productId", min_length=1)
    action: PreferenceAction


class PreferenceResponse(BaseModel):
    success: bool = True
    preferences: PreferencesModel


class WishlistResponse(BaseModel):
    products: List[ProductModel]


# ============================================================================
# Payments
# ============================================================================

class PaymentCreateRequest(_CamelModel):
    amount: float = Field(..., gt=0, description="Amount in rupees, paise allowed")
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class PaymentCreateResponse(_CamelModel):
    order_id: str = Field(..., alias="orderId")
    amount: int
    currency: str
    mock: Optional[bool] = None


class PaymentVerifyRequest(_CamelModel):
    order_id: str = Field(..., alias="orderId")
    payment_id: str = Field(..., alias="paymentId")
    signature: str = ""


class PaymentVerifyResponse(BaseModel):
    success: bool = True
    verified: bool
