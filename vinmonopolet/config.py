"""Configuration and constants for the crawler."""

import os
from typing import Dict, FrozenSet, List
from urllib.parse import urlparse

from dotenv import load_dotenv

# A local .env file is read on first import; variables already set win
load_dotenv()

__all__ = [
    "BASE_URL",
    "OVERVIEW_URL",
    "SEARCH_URL",
    "PRODUCT_URL",
    "PRODUCT_QUERY_PARAMS",
    "SEARCH_QUERY",
    "SEARCH_SORT",
    "SEARCH_SORT_MODE",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "MAX_PAGES",
    "ALLOWED_DOMAINS",
    "SELECTORS",
    "SUMMARY_FIELD_LABELS",
    "DETAIL_FIELD_LABELS",
    "REQUIRED_FIELDS",
]

BASE_URL = os.getenv("VINMONOPOLET_BASE_URL", "http://www.vinmonopolet.no").rstrip("/")

# URL templates
OVERVIEW_URL = f"{BASE_URL}/vareutvalg/"
SEARCH_URL = f"{BASE_URL}/vareutvalg/sok"
PRODUCT_URL = f"{BASE_URL}/vareutvalg/varedetaljer/sku-"
PRODUCT_QUERY_PARAMS = "?ShowShopsWithProdInStock=true&fylke_id=*"

# Fixed search parameters (match-all query, sorted by name ascending)
SEARCH_QUERY = "*"
SEARCH_SORT = 2
SEARCH_SORT_MODE = 0

HEADERS = {
    "User-Agent": os.getenv(
        "VINMONOPOLET_USER_AGENT",
        "vinmonopolet catalog crawler (+https://www.vinmonopolet.no)",
    ),
    "Accept-Language": "nb-NO,nb;q=0.9,no;q=0.8",
}

# Request timeout (seconds)
REQUEST_TIMEOUT = float(os.getenv("VINMONOPOLET_TIMEOUT", "15"))

# Safety limit to avoid runaway pagination
MAX_PAGES = int(os.getenv("VINMONOPOLET_MAX_PAGES", "1000"))

_host = urlparse(BASE_URL).hostname or ""
ALLOWED_DOMAINS: FrozenSet[str] = frozenset(
    {_host, _host[4:] if _host.startswith("www.") else f"www.{_host}"}
)


# =============================================================================
# Markup Registry
# =============================================================================
# CSS selectors and field labels used by the page parsers.

SELECTORS: Dict[str, str] = {
    # Overview page: product type navigation
    "category_item": "#productCategories li",
    "category_link": "a[href]",
    "category_count": ".count",
    # Search result page
    "product_card": "#productList .product",
    "product_title": "h3",
    "pagination": "div.pagination, ul.pagination, nav.pagination",
    # Detail page
    "detail_panel": "#productDetails",
    "detail_title": "h1",
}

# Field -> list of possible labels (Norwegian first)
SUMMARY_FIELD_LABELS: Dict[str, List[str]] = {
    "sku": ["Varenummer", "Varenr."],
    "container_size": ["Volum", "Flaskestørrelse"],
    "price": ["Pris"],
    "price_per_liter": ["Literpris", "Pris per liter"],
}

DETAIL_FIELD_LABELS: Dict[str, List[str]] = {
    **SUMMARY_FIELD_LABELS,
    "product_type": ["Varetype"],
    "product_selection": ["Produktutvalg"],
    "shop_category": ["Butikkategori"],
    "color": ["Farge"],
    "aroma": ["Lukt"],
    "taste": ["Smak"],
    "food_pairings": ["Passer til"],
    "country_region": ["Land/region", "Land/distrikt"],
    "ingredients": ["Råstoff"],
    "alcohol": ["Alkohol"],
    "sugar": ["Sukker"],
    "acid": ["Syre"],
    "storable": ["Lagringsgrad"],
    "manufacturer": ["Produsent"],
    "wholesaler": ["Grossist"],
    "distributor": ["Distributør"],
    "container_type": ["Emballasjetype"],
}

# Fields a listing card or detail page must carry
REQUIRED_FIELDS = ("title", "sku", "container_size", "price", "price_per_liter")
