"""Exception types raised by the crawler.

Transport problems (the page could not be retrieved) are kept apart from
extraction problems (the page was retrieved but did not look as expected).
"""

from typing import Optional

__all__ = [
    "VinmonopoletError",
    "TransportError",
    "ExtractionError",
    "NoDataFound",
    "MalformedField",
    "CrawlLimitExceeded",
    "IdentityMismatch",
]


class VinmonopoletError(Exception):
    """Base class for all crawler errors."""
    pass


class TransportError(VinmonopoletError):
    """Raised on network failure, a rejected URL or a non-2xx response."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ExtractionError(VinmonopoletError):
    """Raised when a fetched document cannot be turned into records."""
    pass


class NoDataFound(ExtractionError):
    """Expected structural markers are missing from the document."""
    pass


class MalformedField(ExtractionError):
    """A field is present but its value cannot be parsed."""

    def __init__(self, field: str, value: str, reason: str = "not a number"):
        super().__init__(f"Malformed value for '{field}': {value!r} ({reason})")
        self.field = field
        self.value = value


class CrawlLimitExceeded(ExtractionError):
    """The listing kept advertising a next page beyond the page limit."""

    def __init__(self, max_pages: int):
        super().__init__(f"Listing still has a next page after {max_pages} pages")
        self.max_pages = max_pages


class IdentityMismatch(VinmonopoletError):
    """The detail page describes a different product than requested."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Requested sku {expected} but page describes sku {actual}")
        self.expected = expected
        self.actual = actual
