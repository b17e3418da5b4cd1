"""
=============================================================================
HTTP BUILDING BLOCKS
=============================================================================

Static, side-effect-free pieces the emitter composes:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ STATUS CODES (status_codes.py)                                      │
    │   HTTPStatus, reason_phrase_of(), resolve_status(), status_line()   │
    ├─────────────────────────────────────────────────────────────────────┤
    │ CONTENT TYPES (content_types.py)                                    │
    │   ContentTypeIntent, MediaType, mime_of(), resolve_intent()         │
    ├─────────────────────────────────────────────────────────────────────┤
    │ SERIALIZATION (serialization.py)                                    │
    │   to_json(), to_native(), serialize()                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │ CACHE TAGS (cache_tags.py)                                          │
    │   compute_tag(), tag_of(), digest()                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RESPONSE (response.py)                                              │
    │   HTTPResponse, format_http_date()                                  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .status_codes import (
    HTTPStatus,
    UNKNOWN_STATUS_PHRASE,
    reason_phrase_of,
    resolve_status,
    status_line,
)
from .content_types import ContentTypeIntent, MediaType, mime_of, resolve_intent
from .serialization import serialize, to_json, to_native
from .cache_tags import compute_tag, digest, tag_of
from .response import HTTPResponse, format_http_date

__all__ = [
    # Status catalog
    "HTTPStatus",
    "UNKNOWN_STATUS_PHRASE",
    "reason_phrase_of",
    "resolve_status",
    "status_line",

    # Content negotiation
    "ContentTypeIntent",
    "MediaType",
    "mime_of",
    "resolve_intent",

    # Serialization
    "serialize",
    "to_json",
    "to_native",

    # Cache tags
    "compute_tag",
    "tag_of",
    "digest",

    # Response artifact
    "HTTPResponse",
    "format_http_date",
]
