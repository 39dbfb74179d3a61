"""Shared test fixtures and utilities for the crawler test suite."""

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pytest

from vinmonopolet.config import SEARCH_URL

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ALKOHOLFRITT_PAGE_1 = (
    SEARCH_URL + "?query=*&sort=2&sortMode=0&filterIds=25&filterValues=Alkoholfritt&page=1"
)
ALKOHOLFRITT_PAGE_2 = (
    SEARCH_URL + "?query=*&sort=2&sortMode=0&filterIds=25&filterValues=Alkoholfritt&page=2"
)

# (title, sku, container size, price text, price per liter text)
CardData = Tuple[str, int, str, str, str]

FIRST_PRODUCT: CardData = ("3 Horses Apple Malt Beverage", 109802, "33 cl", "19,90", "60,30")
LAST_PRODUCT: CardData = (
    "Weihenstephaner Hefeweissbier Alkoholfrei", 116502, "50 cl", "24,40", "48,80"
)

CARD_TEMPLATE = """
      <div class="product">
        <h3><a href="/vareutvalg/varedetaljer/sku-{sku}/">{title}</a></h3>
        <dl>
          <dt>Varenummer:</dt><dd>{sku}</dd>
          <dt>Volum:</dt><dd>{size}</dd>
          <dt>Pris:</dt><dd>Kr.&nbsp;{price}</dd>
          <dt>Literpris:</dt><dd>Kr.&nbsp;{per_liter} pr. liter</dd>
        </dl>
      </div>"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="no">
  <head><meta charset="utf-8"><title>Søk - Vinmonopolet</title></head>
  <body>
    <div id="productList">{cards}
    </div>
    <div class="pagination">{pagination}
    </div>
  </body>
</html>"""


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """requests.Session stand-in that replays canned responses.

    Unknown URLs answer 404. A response may be an exception instance,
    which is raised instead. Every requested URL is recorded in order.
    """

    def __init__(self, responses: Dict[str, Union[Tuple[int, str], Exception]]):
        self.responses = dict(responses)
        self.requested: List[str] = []
        self.closed = False

    def get(self, url: str, timeout: float = None) -> FakeResponse:
        self.requested.append(url)
        response = self.responses.get(url, (404, "Not Found"))
        if isinstance(response, Exception):
            raise response
        status_code, text = response
        return FakeResponse(status_code, text)

    def close(self) -> None:
        self.closed = True


def build_card(card: CardData) -> str:
    title, sku, size, price, per_liter = card
    return CARD_TEMPLATE.format(title=title, sku=sku, size=size, price=price, per_liter=per_liter)


def build_listing_page(cards: Sequence[CardData], page: int = 1, has_next: bool = False) -> str:
    """Render a search result page with the given cards."""
    pagination = f'\n      <span class="current">{page}</span>'
    if page > 1:
        pagination = f'\n      <a class="prev" href="?page={page - 1}">Forrige</a>' + pagination
    if has_next:
        pagination += f'\n      <a class="next" href="?page={page + 1}">Neste</a>'
    return PAGE_TEMPLATE.format(
        cards="".join(build_card(c) for c in cards),
        pagination=pagination,
    )


def alkoholfritt_cards() -> List[CardData]:
    """56 cards: the two known products with 54 generated ones in between."""
    generated = [
        (f"Alkoholfri drikk nr. {i}", 200000 + i, "50 cl", f"{20 + i},90", f"{41 + 2 * i},80")
        for i in range(1, 55)
    ]
    return [FIRST_PRODUCT] + generated + [LAST_PRODUCT]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def overview_html(fixtures_dir) -> str:
    return (fixtures_dir / "overview-response.html").read_text(encoding="utf-8")


@pytest.fixture
def product_html(fixtures_dir) -> str:
    return (fixtures_dir / "product-detail-response.html").read_text(encoding="utf-8")


@pytest.fixture
def search_pages() -> Tuple[str, str]:
    """Two result pages for the Alkoholfritt filter: 30 + 26 products."""
    cards = alkoholfritt_cards()
    return (
        build_listing_page(cards[:30], page=1, has_next=True),
        build_listing_page(cards[30:], page=2, has_next=False),
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging() between tests."""
    yield
    logger = logging.getLogger("vinmonopolet")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
