"""HTTP access to the catalog site.

A thin boundary around requests: one GET per call, no retries, and every
failure mapped to TransportError.
"""

import logging
from typing import NamedTuple, Optional

import requests  # type: ignore[import-untyped]

from vinmonopolet.config import HEADERS, REQUEST_TIMEOUT
from vinmonopolet.errors import TransportError
from vinmonopolet.logging_config import get_logger, log_crawl_event
from vinmonopolet.url_validation import URLValidationError, validate_url

__all__ = [
    "Document",
    "create_session",
    "fetch_document",
    "fetch_html",
]

logger = get_logger("fetcher")

# Module-level session for connection reuse
_session: Optional[requests.Session] = None


class Document(NamedTuple):
    """A fetched page: final URL, HTTP status and decoded body."""

    url: str
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def create_session() -> requests.Session:
    """Create a requests Session with connection pooling and proper headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


def _get_session() -> requests.Session:
    """Get or create the module-level session."""
    global _session
    if _session is None:
        _session = create_session()
    return _session


def fetch_document(url: str, session: Optional[requests.Session] = None) -> Document:
    """GET a URL and return whatever the server answered.

    Args:
        url: URL to fetch (must be on the catalog domain)
        session: Optional requests.Session; defaults to a shared one

    Returns:
        Document with the response status and body

    Raises:
        TransportError: If the URL is rejected or the request fails
    """
    try:
        url = validate_url(url)
    except URLValidationError as e:
        logger.error(f"URL validation failed: {e}")
        raise TransportError(f"Invalid URL: {e}", url) from e

    sess = session or _get_session()
    logger.debug(f"GET {url}")

    try:
        resp = sess.get(url, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout fetching {url}: {e}")
        raise TransportError(f"Timeout fetching {url}: {e}", url) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error fetching {url}: {e}")
        raise TransportError(f"Failed to fetch {url}: {e}", url) from e

    return Document(url=url, status_code=resp.status_code, body=str(resp.text))


def fetch_html(url: str, session: Optional[requests.Session] = None) -> str:
    """GET a URL and return its body, treating any non-2xx status as failure.

    Raises:
        TransportError: On request failure or non-2xx status
    """
    document = fetch_document(url, session=session)
    if not document.ok:
        log_crawl_event("fetch_error", {
            "message": f"HTTP {document.status_code} fetching {url}",
            "url": url,
            "status_code": document.status_code,
        }, level=logging.ERROR, logger_name="fetcher")
        raise TransportError(
            f"HTTP Error {document.status_code}: failed to fetch {url}",
            url,
            status_code=document.status_code,
        )
    return document.body
