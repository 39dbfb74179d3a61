"""HTML parsing and extraction utilities.

Pure helpers shared by the page parsers: text cleanup, Norwegian number
parsing, dt/dd label lookup and pagination detection.
"""

import re
from typing import Dict, Iterable, Optional
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup, Tag

from vinmonopolet.config import SELECTORS
from vinmonopolet.errors import MalformedField

__all__ = [
    "clean_text",
    "node_text",
    "normalize_label",
    "parse_int",
    "parse_decimal",
    "extract_label_values",
    "pick_label",
    "has_next_page",
    "query_param",
]

WHITESPACE_RE = re.compile(r"\s+")

# Exactly one number, optionally wrapped in non-digit text such as
# "Kr. " / " pr. liter" / "(" ")" / " %". Thousands may be grouped in
# threes by space or dot (no-break spaces are folded by clean_text first);
# the decimal separator is a comma. A dot is never a decimal point.
GROUPED_DIGITS = r"(?:\d{1,3}(?:[ .]\d{3})+|\d+)"
INTEGER_RE = re.compile(rf"^[^\d-]*?(?P<number>{GROUPED_DIGITS})\D*$")
DECIMAL_RE = re.compile(rf"^[^\d-]*?(?P<number>{GROUPED_DIGITS}(?:,\d+)?)\D*$")
THOUSANDS_RE = re.compile(r"[ .]")


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs (incl. no-break spaces) and trim."""
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def node_text(node: Optional[Tag]) -> str:
    """Cleaned text content of a node, or '' when the node is missing."""
    if node is None:
        return ""
    return clean_text(node.get_text(" "))


def normalize_label(label: str) -> str:
    """Normalize a label for matching: cleaned, no trailing colon, casefolded."""
    return clean_text(label).rstrip(":").strip().casefold()


def _number_core(pattern: re.Pattern, text: str, field: str) -> str:
    value = clean_text(text)
    match = pattern.match(value)
    if not match:
        raise MalformedField(field, value)
    return THOUSANDS_RE.sub("", match.group("number"))


def parse_int(text: str, field: str = "value") -> int:
    """Parse a non-negative integer such as '6033' or '(6 033)'.

    Raises:
        MalformedField: If the text does not hold exactly one integer
    """
    return int(_number_core(INTEGER_RE, text, field))


def parse_decimal(text: str, field: str = "value") -> float:
    """Parse a non-negative decimal written with a decimal comma.

    'Kr. 1 159,90' -> 1159.9, '10,01 %' -> 10.01

    Raises:
        MalformedField: If the text does not hold exactly one number
    """
    return float(_number_core(DECIMAL_RE, text, field).replace(",", "."))


def extract_label_values(container: Optional[Tag]) -> Dict[str, str]:
    """Collect all dt/dd pairs inside a container.

    Keys are normalized labels, values are cleaned text. When a label is
    repeated the first occurrence wins.
    """
    values: Dict[str, str] = {}
    if container is None:
        return values

    for dt in container.find_all("dt"):
        dd = dt.find_next_sibling(["dd", "dt"])
        if dd is None or dd.name != "dd":
            continue
        key = normalize_label(dt.get_text(" "))
        if key and key not in values:
            values[key] = node_text(dd)
    return values


def pick_label(values: Dict[str, str], labels: Iterable[str]) -> Optional[str]:
    """Pick a value by trying a list of possible labels.

    Empty values count as missing.
    """
    for label in labels:
        value = values.get(normalize_label(label))
        if value:
            return value
    return None


# =============================================================================
# Pagination
# =============================================================================

def has_next_page(soup: BeautifulSoup) -> bool:
    """Whether a search result page offers a link to a following page.

    Looks for:
    1. <link rel="next" href="...">
    2. A rel=next or class=next link inside the pagination block
    """
    next_link = soup.find("link", rel="next")
    if next_link and next_link.get("href"):
        return True

    pagination = soup.select_one(SELECTORS["pagination"])
    if pagination:
        next_btn = pagination.select_one('a[rel="next"], a.next')
        if next_btn and next_btn.get("href"):
            return True

    return False


def query_param(href: str, name: str) -> Optional[str]:
    """First value of a query parameter in a link, or None."""
    params = parse_qs(urlparse(href).query)
    values = params.get(name)
    return values[0] if values else None
