"""Page parsers: overview, search result and product detail documents.

Each parser takes the raw HTML of one page and returns typed records, or
raises an ExtractionError when the page does not have the expected shape.
Parsers keep no state between calls.
"""

from typing import Dict, List, NamedTuple, Optional

from bs4 import BeautifulSoup, Tag

from vinmonopolet.config import (
    DETAIL_FIELD_LABELS,
    REQUIRED_FIELDS,
    SELECTORS,
    SUMMARY_FIELD_LABELS,
)
from vinmonopolet.errors import IdentityMismatch, MalformedField, NoDataFound
from vinmonopolet.html_utils import (
    extract_label_values,
    has_next_page,
    node_text,
    parse_decimal,
    parse_int,
    pick_label,
    query_param,
)
from vinmonopolet.logging_config import get_logger
from vinmonopolet.models import Category, ProductDetail, ProductSummary

__all__ = [
    "ListingPage",
    "parse_categories",
    "parse_listing_page",
    "parse_product_detail",
]

logger = get_logger("parsers")

# Required fields parsed as numbers; the rest are kept as text
SUMMARY_FIELD_PARSERS = {
    "sku": parse_int,
    "price": parse_decimal,
    "price_per_liter": parse_decimal,
}

# Detail attributes parsed as numbers rather than kept as text
NUMERIC_DETAIL_FIELDS = {"alcohol"}


class ListingPage(NamedTuple):
    """Products found on one search result page."""

    products: List[ProductSummary]
    has_next_page: bool


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _required(values: Dict[str, str], field: str, context: str) -> str:
    value = pick_label(values, SUMMARY_FIELD_LABELS[field])
    if value is None:
        raise NoDataFound(f"Missing required field '{field}' in {context}")
    return value


def _summary_fields(title: str, values: Dict[str, str], context: str) -> Dict[str, object]:
    """Parse the fields shared by listing cards and detail pages."""
    if not title:
        raise NoDataFound(f"Missing required field 'title' in {context}")

    fields: Dict[str, object] = {"title": title}
    for field in REQUIRED_FIELDS:
        if field in fields:
            continue
        value = _required(values, field, context)
        convert = SUMMARY_FIELD_PARSERS.get(field)
        fields[field] = convert(value, field) if convert else value
    return fields


# =============================================================================
# Overview
# =============================================================================

def parse_categories(html: str) -> List[Category]:
    """Extract the product type navigation from the overview page.

    Raises:
        NoDataFound: If the page has no category entries
        MalformedField: If an entry's count or filter id cannot be parsed
    """
    soup = _soup(html)
    categories: List[Category] = []

    for item in soup.select(SELECTORS["category_item"]):
        link = item.select_one(SELECTORS["category_link"])
        if link is None:
            continue

        title = node_text(link)
        href = str(link.get("href", ""))

        filter_id = query_param(href, "filterIds")
        if filter_id is None:
            raise MalformedField("filter_id", href, "link has no filterIds parameter")

        count_el = item.select_one(SELECTORS["category_count"])
        if count_el is None:
            raise NoDataFound(f"Category '{title}' has no item count")

        categories.append(Category(
            title=title,
            count=parse_int(node_text(count_el), "count"),
            filter_id=parse_int(filter_id, "filter_id"),
        ))

    if not categories:
        raise NoDataFound("No categories found")

    logger.debug(f"Parsed {len(categories)} categories")
    return categories


# =============================================================================
# Search results
# =============================================================================

def _parse_card(card: Tag, position: int) -> ProductSummary:
    title = node_text(card.select_one(SELECTORS["product_title"]))
    fields = _summary_fields(title, extract_label_values(card), f"product card #{position}")
    return ProductSummary(**fields)  # type: ignore[arg-type]


def parse_listing_page(html: str) -> ListingPage:
    """Extract all product cards and the next-page flag from a result page.

    A single broken card fails the whole page; cards are never skipped.

    Raises:
        NoDataFound: If a card lacks a required field
        MalformedField: If a card's numeric field cannot be parsed
    """
    soup = _soup(html)
    products = [
        _parse_card(card, position)
        for position, card in enumerate(soup.select(SELECTORS["product_card"]), start=1)
    ]
    return ListingPage(products=products, has_next_page=has_next_page(soup))


# =============================================================================
# Product detail
# =============================================================================

def parse_product_detail(html: str, expected_sku: int) -> ProductDetail:
    """Extract the full attribute set of a product page.

    Args:
        html: Detail page markup
        expected_sku: The sku that was requested

    Raises:
        NoDataFound: If the detail panel or a required field is missing
        MalformedField: If a numeric field cannot be parsed
        IdentityMismatch: If the page describes another sku
    """
    soup = _soup(html)
    panel = soup.select_one(SELECTORS["detail_panel"])
    if panel is None:
        raise NoDataFound("No product details found")

    title = node_text(panel.select_one(SELECTORS["detail_title"]))
    values = extract_label_values(panel)
    fields = _summary_fields(title, values, f"product {expected_sku}")

    if fields["sku"] != expected_sku:
        raise IdentityMismatch(expected_sku, fields["sku"])  # type: ignore[arg-type]

    for field, labels in DETAIL_FIELD_LABELS.items():
        if field in fields:
            continue
        value: Optional[str] = pick_label(values, labels)
        if value is not None and field in NUMERIC_DETAIL_FIELDS:
            fields[field] = parse_decimal(value, field)
        else:
            fields[field] = value

    return ProductDetail(**fields)  # type: ignore[arg-type]
