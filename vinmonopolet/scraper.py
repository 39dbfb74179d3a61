"""Crawl orchestration: build request URLs, fetch, parse, paginate."""

from typing import List, Optional
from urllib.parse import urlencode

import requests  # type: ignore[import-untyped]

from vinmonopolet.config import (
    MAX_PAGES,
    OVERVIEW_URL,
    PRODUCT_QUERY_PARAMS,
    PRODUCT_URL,
    SEARCH_QUERY,
    SEARCH_SORT,
    SEARCH_SORT_MODE,
    SEARCH_URL,
)
from vinmonopolet.errors import CrawlLimitExceeded, NoDataFound, VinmonopoletError
from vinmonopolet.fetcher import fetch_html
from vinmonopolet.logging_config import get_logger, log_crawl_event
from vinmonopolet.models import Category, FilterSet, ProductDetail, ProductSummary
from vinmonopolet.parsers import parse_categories, parse_listing_page, parse_product_detail

__all__ = [
    "build_search_url",
    "build_product_url",
    "get_categories",
    "get_products_by_filters",
    "get_products_by_category",
    "get_product_details",
]

logger = get_logger("scraper")


def build_search_url(filters: FilterSet, page: int = 1) -> str:
    """Build the search result URL for a filter set and page number.

    Filter ids and values are sent as parallel comma-separated lists,
    ordered by filter id.

    Raises:
        ValueError: If no filter is given or a value contains a comma
    """
    if not filters:
        raise ValueError("At least one filter is required")

    ordered = sorted(filters.items())
    for filter_id, value in ordered:
        if "," in value:
            raise ValueError(f"Filter {filter_id} value must not contain a comma: {value!r}")

    params = [
        ("query", SEARCH_QUERY),
        ("sort", SEARCH_SORT),
        ("sortMode", SEARCH_SORT_MODE),
        ("filterIds", ",".join(str(filter_id) for filter_id, _ in ordered)),
        ("filterValues", ",".join(value for _, value in ordered)),
        ("page", page),
    ]
    return f"{SEARCH_URL}?{urlencode(params, safe='*,')}"


def build_product_url(sku: int) -> str:
    """Build the detail page URL for a sku."""
    return f"{PRODUCT_URL}{int(sku)}{PRODUCT_QUERY_PARAMS}"


def get_categories(session: Optional[requests.Session] = None) -> List[Category]:
    """Fetch the catalog overview and return its product categories.

    Raises:
        TransportError: If the overview page cannot be fetched
        NoDataFound: If the page lists no categories ("No categories found")
    """
    logger.info(f"Fetching categories: {OVERVIEW_URL}")
    try:
        categories = parse_categories(fetch_html(OVERVIEW_URL, session=session))
    except VinmonopoletError as e:
        logger.error(f"Category retrieval failed: {e}")
        raise

    logger.info(f"Found {len(categories)} categories")
    return categories


def get_products_by_filters(
    filters: FilterSet,
    session: Optional[requests.Session] = None,
    max_pages: int = MAX_PAGES,
) -> List[ProductSummary]:
    """Collect every product matching a filter set, across all result pages.

    Pages are fetched one at a time, starting at page 1, until a page
    without a next-page link. Results keep page order, then card order.
    Any error aborts the crawl and no partial result is returned.

    Args:
        filters: Mapping of filter id to filter value, e.g. {25: "Rødvin"}
        session: Optional requests.Session for connection reuse
        max_pages: Safety limit on the number of pages requested

    Raises:
        TransportError: If any page cannot be fetched
        ExtractionError: If any page cannot be parsed
    """
    log_crawl_event("listing_start", {
        "message": f"Fetching products for filters {dict(filters)}",
        "filters": {str(k): v for k, v in filters.items()},
    }, logger_name="scraper")

    products: List[ProductSummary] = []
    page = 1

    try:
        while True:
            url = build_search_url(filters, page)
            logger.info(f"  Page {page}: {url}")

            listing = parse_listing_page(fetch_html(url, session=session))
            log_crawl_event("page_parsed", {
                "message": f"    Found {len(listing.products)} products on page {page}",
                "page": page,
                "products": len(listing.products),
                "has_next_page": listing.has_next_page,
            }, logger_name="scraper")

            if not listing.has_next_page:
                products.extend(listing.products)
                break

            if not listing.products:
                raise NoDataFound(f"No products found on page {page}, but a next page is linked")
            products.extend(listing.products)

            if page >= max_pages:
                raise CrawlLimitExceeded(max_pages)
            page += 1

    except VinmonopoletError as e:
        logger.error(f"Product listing failed on page {page}: {e}")
        raise

    log_crawl_event("listing_complete", {
        "message": f"Fetched {len(products)} products from {page} page(s)",
        "products": len(products),
        "pages": page,
    }, logger_name="scraper")
    return products


def get_products_by_category(
    category: Category,
    session: Optional[requests.Session] = None,
) -> List[ProductSummary]:
    """Collect every product of a category returned by get_categories()."""
    return get_products_by_filters(category.filters(), session=session)


def get_product_details(
    sku: int,
    session: Optional[requests.Session] = None,
) -> ProductDetail:
    """Fetch and parse the detail page of one product.

    Raises:
        TransportError: If the page cannot be fetched
        ExtractionError: If the page is missing required fields
        IdentityMismatch: If the page describes a different sku
    """
    url = build_product_url(sku)
    logger.info(f"Fetching product {sku}: {url}")
    try:
        return parse_product_detail(fetch_html(url, session=session), int(sku))
    except VinmonopoletError as e:
        logger.error(f"Product {sku} retrieval failed: {e}")
        raise
