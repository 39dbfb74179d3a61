"""Tests for the HTTP fetcher and URL validation."""

import pytest
import requests

from conftest import FakeSession
from vinmonopolet.config import HEADERS, OVERVIEW_URL
from vinmonopolet.errors import TransportError
from vinmonopolet.fetcher import create_session, fetch_document, fetch_html
from vinmonopolet.url_validation import URLValidationError, sanitize_url, validate_url


class TestFetchDocument:

    def test_returns_status_and_body(self):
        session = FakeSession({OVERVIEW_URL: (503, "Service Unavailable")})

        document = fetch_document(OVERVIEW_URL, session=session)

        assert document.status_code == 503
        assert document.body == "Service Unavailable"
        assert document.ok is False

    def test_timeout_is_a_transport_error(self):
        session = FakeSession({OVERVIEW_URL: requests.exceptions.Timeout("read timed out")})
        with pytest.raises(TransportError) as exc_info:
            fetch_document(OVERVIEW_URL, session=session)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)

    def test_foreign_domain_is_rejected_before_request(self):
        session = FakeSession({})
        with pytest.raises(TransportError):
            fetch_document("https://example.com/vareutvalg/", session=session)
        assert session.requested == []


class TestFetchHtml:

    def test_success(self):
        session = FakeSession({OVERVIEW_URL: (200, "<html></html>")})
        assert fetch_html(OVERVIEW_URL, session=session) == "<html></html>"

    @pytest.mark.parametrize("status_code", [301, 404, 500])
    def test_non_2xx_is_a_transport_error(self, status_code):
        session = FakeSession({OVERVIEW_URL: (status_code, "")})
        with pytest.raises(TransportError) as exc_info:
            fetch_html(OVERVIEW_URL, session=session)
        assert exc_info.value.status_code == status_code
        assert session.requested == [OVERVIEW_URL]

    def test_no_retry(self):
        session = FakeSession({OVERVIEW_URL: (503, "")})
        with pytest.raises(TransportError):
            fetch_html(OVERVIEW_URL, session=session)
        assert len(session.requested) == 1


class TestSession:

    def test_session_headers(self):
        session = create_session()
        assert session.headers["User-Agent"] == HEADERS["User-Agent"]
        session.close()


class TestUrlValidation:

    def test_sanitize_strips_control_characters(self):
        assert sanitize_url("  http://www.vinmonopolet.no/\x00vareutvalg/\n") == (
            "http://www.vinmonopolet.no/vareutvalg/"
        )

    def test_allows_catalog_domain(self):
        assert validate_url(OVERVIEW_URL) == OVERVIEW_URL

    @pytest.mark.parametrize("url", [
        "",
        "javascript:alert(1)",
        "ftp://www.vinmonopolet.no/",
        "http://www.vinmonopolet.no.evil.com/",
        "http://www.vinmonopolet.no/../etc/passwd",
    ])
    def test_rejects_unsafe_urls(self, url):
        with pytest.raises(URLValidationError):
            validate_url(url)

    def test_custom_domains(self):
        assert validate_url("http://localhost:8000/", allowed_domains={"localhost"})
