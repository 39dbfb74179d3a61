"""URL validation and sanitization utilities.

Every URL handed to the fetcher passes through here first, so the crawler
only ever talks to the catalog site.
"""

import re
from typing import AbstractSet, Optional
from urllib.parse import urlparse

from vinmonopolet.config import ALLOWED_DOMAINS

__all__ = [
    "validate_url",
    "sanitize_url",
    "URLValidationError",
]


class URLValidationError(Exception):
    """Raised when URL validation fails."""
    pass


# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}

SUSPICIOUS_PATTERNS = [
    r"\.\./",            # Path traversal
    r"%2e%2e",           # Encoded path traversal
    r"<script",          # XSS attempt
    r"javascript:",      # JS injection
]


def sanitize_url(url: str) -> str:
    """Sanitize a URL by stripping whitespace and control characters.

    Args:
        url: Raw URL string

    Returns:
        Sanitized URL string
    """
    if not url:
        return ""

    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)
    return url.replace("%00", "")


def validate_url(
    url: str,
    allowed_domains: Optional[AbstractSet[str]] = None,
) -> str:
    """Validate a URL for safety.

    Args:
        url: URL to validate
        allowed_domains: Set of allowed host names (default: ALLOWED_DOMAINS)

    Returns:
        Sanitized URL

    Raises:
        URLValidationError: If URL is invalid or from an untrusted domain
    """
    if not url:
        raise URLValidationError("URL is empty")

    url = sanitize_url(url)

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise URLValidationError(f"Failed to parse URL: {e}") from e

    scheme = parsed.scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme: {scheme}")
    if scheme not in ("http", "https"):
        raise URLValidationError(f"Invalid URL scheme: {scheme}")

    host = (parsed.hostname or "").lower()
    if not host:
        raise URLValidationError("URL has no domain")

    domains_to_check = allowed_domains if allowed_domains is not None else ALLOWED_DOMAINS
    if domains_to_check and host not in domains_to_check:
        raise URLValidationError(
            f"URL domain '{host}' not in allowed domains: {sorted(domains_to_check)}"
        )

    url_lower = url.lower()
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, url_lower):
            raise URLValidationError(f"URL contains suspicious pattern: {pattern}")

    return url
