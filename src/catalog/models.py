"""
Catalog data model.

Products are immutable once loaded: the catalog owns them and nothing else
mutates them. FilterSet is the sparse criteria mapping produced per query.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union


# Keys a FilterSet may carry. Text keys are lowercase substrings, price keys
# are inclusive integer bounds.
TEXT_FILTER_KEYS: Tuple[str, ...] = ("category", "color", "brand", "material", "gender")
PRICE_FILTER_KEYS: Tuple[str, ...] = ("minPrice", "maxPrice")
FILTER_KEYS: Tuple[str, ...] = TEXT_FILTER_KEYS + PRICE_FILTER_KEYS

FilterSet = Dict[str, Union[str, int]]


@dataclass(frozen=True)
class Product:
    """A single catalog item."""
    id: str
    title: str
    brand: str
    color: str
    material: str
    category: str
    gender: str
    price: int
    size: Tuple[str, ...] = field(default_factory=tuple)
    rating: float = 0.0
    delivery: str = ""
    image: str = ""
    link: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "brand": self.brand,
            "color": self.color,
            "material": self.material,
            "category": self.category,
            "gender": self.gender,
            "price": self.price,
            "size": list(self.size),
            "rating": self.rating,
            "delivery": self.delivery,
            "image": self.image,
            "link": self.link,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=str(data["id"]),
            title=_text(data, "title"),
            brand=_text(data, "brand"),
            color=_text(data, "color"),
            material=_text(data, "material"),
            category=_text(data, "category"),
            gender=_text(data, "gender"),
            price=int(data.get("price") or 0),
            size=tuple(str(s) for s in data.get("size") or []),
            rating=float(data.get("rating") or 0.0),
            delivery=_text(data, "delivery"),
            image=_text(data, "image"),
            link=_text(data, "link"),
        )


def _text(data: Dict[str, Any], key: str) -> str:
    # JSON null reads as an empty field so substring matching never sees None.
    value = data.get(key)
    return "" if value is None else str(value)
