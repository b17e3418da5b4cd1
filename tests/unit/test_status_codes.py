"""
Unit tests for the status catalog.
"""

import pytest

from httpemit.http.status_codes import (
    HTTPStatus,
    UNKNOWN_STATUS_PHRASE,
    reason_phrase_of,
    resolve_status,
    status_line,
)


class TestReasonPhrase:
    """Tests for reason_phrase_of()."""

    @pytest.mark.parametrize("status", list(HTTPStatus))
    def test_every_member_has_phrase(self, status):
        """Every catalog member resolves to a non-empty phrase."""
        phrase = reason_phrase_of(status)
        assert phrase
        assert phrase != UNKNOWN_STATUS_PHRASE

    def test_known_phrases(self):
        """Test a few canonical phrases."""
        assert reason_phrase_of(HTTPStatus.OK) == "OK"
        assert reason_phrase_of(404) == "Not Found"
        assert reason_phrase_of(HTTPStatus.INTERNAL_SERVER_ERROR) == "Internal Server Error"
        assert reason_phrase_of(418) == "I'm a teapot"

    @pytest.mark.parametrize("code", [0, 99, 299, 419, 599, 600, 999, -1])
    def test_unknown_integer_falls_back(self, code):
        """Integers outside the catalog get the fixed fallback."""
        assert reason_phrase_of(code) == "Unknown HTTP status code"

    @pytest.mark.parametrize("value", [None, "200", 200.0, True, object()])
    def test_non_integer_falls_back(self, value):
        """Non-integer input never raises."""
        assert reason_phrase_of(value) == UNKNOWN_STATUS_PHRASE

    def test_phrase_property(self):
        """HTTPStatus.phrase uses the catalog."""
        assert HTTPStatus.BAD_REQUEST.phrase == "Bad Request"
        assert HTTPStatus.NO_CONTENT.phrase == "No Content"


class TestResolveStatus:
    """Tests for resolve_status()."""

    def test_member_passes_through(self):
        """HTTPStatus members are returned unchanged."""
        assert resolve_status(HTTPStatus.CREATED) is HTTPStatus.CREATED

    def test_known_integer(self):
        """Raw integers resolve to the matching member."""
        assert resolve_status(404) is HTTPStatus.NOT_FOUND
        assert resolve_status(503, default=200) is HTTPStatus.SERVICE_UNAVAILABLE

    def test_digit_string(self):
        """Digit strings from untyped sources resolve too."""
        assert resolve_status("404") is HTTPStatus.NOT_FOUND
        assert resolve_status(" 201 ") is HTTPStatus.CREATED

    def test_unknown_uses_default(self):
        """Unknown values resolve to the caller's default."""
        assert resolve_status(999, default=500) is HTTPStatus.INTERNAL_SERVER_ERROR
        assert resolve_status(999, default=HTTPStatus.OK) is HTTPStatus.OK
        assert resolve_status("abc", default=HTTPStatus.BAD_REQUEST) is HTTPStatus.BAD_REQUEST
        assert resolve_status(None) is HTTPStatus.OK

    def test_default_is_ok(self):
        """Without a default, unknown values become 200 OK."""
        assert resolve_status(999) is HTTPStatus.OK

    def test_unknown_default_falls_back_to_ok(self):
        """A default outside the catalog cannot leak through."""
        assert resolve_status(999, default=799) is HTTPStatus.OK

    def test_bool_is_not_a_status(self):
        """True is an int subclass but not a status code."""
        assert resolve_status(True, default=500) is HTTPStatus.INTERNAL_SERVER_ERROR

    def test_fallback_is_logged(self, caplog):
        """Falling back emits a warning."""
        with caplog.at_level("WARNING", logger="httpemit.http.status_codes"):
            resolve_status(999, default=500)
        assert "999" in caplog.text


class TestStatusLine:
    """Tests for status line formatting."""

    def test_known(self):
        assert status_line(HTTPStatus.OK) == "HTTP/1.1 200 OK"
        assert status_line(404) == "HTTP/1.1 404 Not Found"

    def test_unknown(self):
        assert status_line(999) == "HTTP/1.1 999 Unknown HTTP status code"

    def test_version(self):
        assert status_line(HTTPStatus.OK, "HTTP/1.0") == "HTTP/1.0 200 OK"


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_all_values_in_range(self):
        """Every member is a 3-digit code in 100-599."""
        assert all(100 <= status <= 599 for status in HTTPStatus)

    def test_str_is_number(self):
        assert str(HTTPStatus.NOT_FOUND) == "404"

    def test_categories(self):
        """Test status category helpers."""
        assert HTTPStatus.CONTINUE.is_informational
        assert HTTPStatus.OK.is_success
        assert HTTPStatus.FOUND.is_redirect
        assert HTTPStatus.NOT_FOUND.is_client_error
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_server_error

        assert HTTPStatus.NOT_FOUND.is_error
        assert not HTTPStatus.OK.is_error
