"""Vinmonopolet catalog crawler package."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from vinmonopolet.config import (
    OVERVIEW_URL,
    PRODUCT_QUERY_PARAMS,
    PRODUCT_URL,
    SEARCH_URL,
)
from vinmonopolet.errors import (
    CrawlLimitExceeded,
    ExtractionError,
    IdentityMismatch,
    MalformedField,
    NoDataFound,
    TransportError,
    VinmonopoletError,
)
from vinmonopolet.models import Category, FilterSet, ProductDetail, ProductSummary
from vinmonopolet.scraper import (
    get_categories,
    get_product_details,
    get_products_by_category,
    get_products_by_filters,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "OVERVIEW_URL",
    "SEARCH_URL",
    "PRODUCT_URL",
    "PRODUCT_QUERY_PARAMS",
    # Models
    "Category",
    "FilterSet",
    "ProductSummary",
    "ProductDetail",
    # Errors
    "VinmonopoletError",
    "TransportError",
    "ExtractionError",
    "NoDataFound",
    "MalformedField",
    "CrawlLimitExceeded",
    "IdentityMismatch",
    # Core functions
    "get_categories",
    "get_products_by_filters",
    "get_products_by_category",
    "get_product_details",
]
