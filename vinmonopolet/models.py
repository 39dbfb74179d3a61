"""Data models for catalog records."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

__all__ = ["Category", "ProductSummary", "ProductDetail", "FilterSet"]

# filter id -> filter value, e.g. {25: "Rødvin"}
FilterSet = Mapping[int, str]


@dataclass(frozen=True)
class Category:
    """A product type from the catalog overview, with its item count."""

    title: str
    count: int
    filter_id: int

    def filters(self) -> Dict[int, str]:
        """Filter set that selects the products of this category."""
        return {self.filter_id: self.title}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductSummary:
    """One product card from a search result page."""

    title: str
    sku: int
    container_size: str
    price: float
    price_per_liter: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductDetail(ProductSummary):
    """Full attribute set from a product detail page.

    Descriptive attributes the page does not list are left as None.
    """

    product_type: Optional[str] = None
    product_selection: Optional[str] = None
    shop_category: Optional[str] = None
    color: Optional[str] = None
    aroma: Optional[str] = None
    taste: Optional[str] = None
    food_pairings: Optional[str] = None
    country_region: Optional[str] = None
    ingredients: Optional[str] = None
    alcohol: Optional[float] = None  # percent by volume
    sugar: Optional[str] = None
    acid: Optional[str] = None
    storable: Optional[str] = None
    manufacturer: Optional[str] = None
    wholesaler: Optional[str] = None
    distributor: Optional[str] = None
    container_type: Optional[str] = None
