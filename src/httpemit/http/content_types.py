"""
=============================================================================
CONTENT NEGOTIATION
=============================================================================

Maps an abstract content-type intent to a concrete MIME string.

=============================================================================
INTENTS VS MEDIA TYPES
=============================================================================

Handlers say WHAT they are sending; this module decides HOW it is labelled:

    ┌────────────────────────────────────────────────────────────────────┐
    │                      INTENT → MEDIA TYPE                           │
    ├──────────────┬───────────────────────────┬─────────────────────────┤
    │  Intent      │  Content-Type             │  Body encoding          │
    ├──────────────┼───────────────────────────┼─────────────────────────┤
    │  json        │  application/json         │  compact JSON           │
    │  text        │  text/plain               │  Python repr()          │
    │  problem     │  application/problem+json │  compact JSON           │
    └──────────────┴───────────────────────────┴─────────────────────────┘

    Reserved media types with no intent yet:
        text/html, application/xml, application/problem+xml

The intent → media type table is a bijection: no two intents may share
a media type. Adding an intent (say XML) means adding the enum member AND
its row in _INTENT_MEDIA_TYPES together; the import-time check below fails
otherwise.

=============================================================================
"""

import logging
from enum import Enum
from typing import Any, Union


logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    """MIME strings this package knows how to label a response with."""

    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"
    JSON = "application/json"
    JSON_PROBLEM = "application/problem+json"
    XML = "application/xml"
    XML_PROBLEM = "application/problem+xml"

    def __str__(self) -> str:
        return self.value


class ContentTypeIntent(str, Enum):
    """
    What kind of representation the caller wants to send.

        >>> ContentTypeIntent("json")
        <ContentTypeIntent.JSON: 'json'>
        >>> ContentTypeIntent.PROBLEM.media_type
        <MediaType.JSON_PROBLEM: 'application/problem+json'>
    """

    JSON = "json"
    TEXT = "text"
    PROBLEM = "problem"

    @property
    def media_type(self) -> MediaType:
        return _INTENT_MEDIA_TYPES[self]

    @property
    def is_json(self) -> bool:
        """True when the body is encoded as JSON (json and problem)."""
        return self in (ContentTypeIntent.JSON, ContentTypeIntent.PROBLEM)


_INTENT_MEDIA_TYPES = {
    ContentTypeIntent.JSON: MediaType.JSON,
    ContentTypeIntent.TEXT: MediaType.TEXT_PLAIN,
    ContentTypeIntent.PROBLEM: MediaType.JSON_PROBLEM,
}

if set(_INTENT_MEDIA_TYPES) != set(ContentTypeIntent):
    raise RuntimeError("every content-type intent needs a media type")
if len(set(_INTENT_MEDIA_TYPES.values())) != len(_INTENT_MEDIA_TYPES):
    raise RuntimeError("content-type intents must map to distinct media types")

DEFAULT_INTENT = ContentTypeIntent.TEXT


def resolve_intent(
    value: Any,
    default: ContentTypeIntent = DEFAULT_INTENT,
) -> ContentTypeIntent:
    """
    Coerce a value into a ContentTypeIntent.

    Accepts an intent member or its string value in any case
    (``"JSON"``, ``" json "``). Anything else resolves to ``default``.
    """
    if isinstance(value, ContentTypeIntent):
        return value
    if isinstance(value, str):
        try:
            return ContentTypeIntent(value.strip().lower())
        except ValueError:
            pass
    logger.warning(f"Unrecognized content-type intent {value!r}, using {default.value}")
    return default


def mime_of(intent: Union[ContentTypeIntent, str, None]) -> str:
    """
    Get the MIME string for an intent.

    Examples:
        >>> mime_of(ContentTypeIntent.JSON)
        'application/json'
        >>> mime_of("text")
        'text/plain'
        >>> mime_of("yaml")
        'text/plain'
    """
    return resolve_intent(intent).media_type.value
