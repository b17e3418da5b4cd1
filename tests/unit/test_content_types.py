"""
Unit tests for content negotiation.
"""

import pytest

from httpemit.http.content_types import (
    ContentTypeIntent,
    MediaType,
    mime_of,
    resolve_intent,
)


APPROVED_MIME_TYPES = {
    "application/json",
    "text/plain",
    "application/problem+json",
    "application/xml",
    "application/problem+xml",
    "text/html",
}


class TestMimeOf:
    """Tests for mime_of()."""

    def test_mapping(self):
        """Each intent maps to its MIME string."""
        assert mime_of(ContentTypeIntent.JSON) == "application/json"
        assert mime_of(ContentTypeIntent.TEXT) == "text/plain"
        assert mime_of(ContentTypeIntent.PROBLEM) == "application/problem+json"

    @pytest.mark.parametrize("intent", list(ContentTypeIntent))
    def test_result_is_approved(self, intent):
        """Every intent yields one of the approved MIME strings."""
        assert mime_of(intent) in APPROVED_MIME_TYPES

    def test_bijection(self):
        """No two intents share a MIME string."""
        mimes = [mime_of(intent) for intent in ContentTypeIntent]
        assert len(set(mimes)) == len(ContentTypeIntent) == 3

    def test_string_values(self):
        """String intents are accepted in any case."""
        assert mime_of("json") == "application/json"
        assert mime_of("PROBLEM") == "application/problem+json"
        assert mime_of(" text ") == "text/plain"

    @pytest.mark.parametrize("value", ["xml", "yaml", "", None, 42, object()])
    def test_unknown_falls_back_to_plain_text(self, value):
        """Unrecognized intents never raise."""
        assert mime_of(value) == "text/plain"


class TestResolveIntent:
    """Tests for resolve_intent()."""

    def test_member_passes_through(self):
        assert resolve_intent(ContentTypeIntent.PROBLEM) is ContentTypeIntent.PROBLEM

    def test_custom_default(self):
        assert resolve_intent("bogus", default=ContentTypeIntent.JSON) is ContentTypeIntent.JSON

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="httpemit.http.content_types"):
            resolve_intent("bogus")
        assert "bogus" in caplog.text


class TestIntentProperties:
    """Tests for ContentTypeIntent helpers."""

    def test_media_type(self):
        assert ContentTypeIntent.JSON.media_type is MediaType.JSON
        assert ContentTypeIntent.TEXT.media_type is MediaType.TEXT_PLAIN

    def test_is_json(self):
        assert ContentTypeIntent.JSON.is_json
        assert ContentTypeIntent.PROBLEM.is_json
        assert not ContentTypeIntent.TEXT.is_json

    def test_reserved_media_types_exist(self):
        """Reserved media types are declared even without an intent."""
        assert {media.value for media in MediaType} == APPROVED_MIME_TYPES
