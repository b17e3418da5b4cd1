"""
=============================================================================
HTTPEMIT - Single-Shot HTTP Response Emission
=============================================================================

Given a status code, a content-type intent and a payload, httpemit
produces the status line, the Content-Type and ETag headers and the
serialized body, then terminates the response. Exactly once.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpemit/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpemit)
    ├── config.py            # EmitterConfig dataclass
    ├── errors.py            # EmitError hierarchy
    ├── emitter.py           # ResponseEmitter
    ├── core/
    │   ├── state.py         # IDLE → HEADERS_SENT → BODY_WRITTEN → TERMINATED
    │   ├── sink.py          # ResponseSink, MemorySink, StreamSink
    │   └── emission_log.py  # Structured per-response log record
    └── http/
        ├── status_codes.py  # Status catalog and reason phrases
        ├── content_types.py # Intent → MIME negotiation
        ├── serialization.py # JSON and native encoders
        ├── cache_tags.py    # ETag computation
        └── response.py      # HTTPResponse and wire format

=============================================================================
QUICK START
=============================================================================

    from httpemit import ResponseEmitter, MemorySink, HTTPStatus

    sink = MemorySink()
    ResponseEmitter(sink).send_error("bad input", HTTPStatus.BAD_REQUEST)

    sink.status_line   # 'HTTP/1.1 400 Bad Request'
    sink.body          # b'{"result":"Bad Request","message":"bad input","code":400}'

=============================================================================
"""

__version__ = "1.0.0"

from .config import EmitterConfig
from .emitter import ResponseEmitter
from .errors import (
    EmitError,
    InvalidHeaderError,
    ResponseStateError,
    SerializationError,
    TransportError,
)
from .core import MemorySink, ResponseSink, ResponseState, StreamSink
from .http import ContentTypeIntent, HTTPResponse, HTTPStatus, MediaType

__all__ = [
    "ResponseEmitter",
    "EmitterConfig",
    "ResponseSink",
    "MemorySink",
    "StreamSink",
    "ResponseState",
    "HTTPStatus",
    "ContentTypeIntent",
    "MediaType",
    "HTTPResponse",
    "EmitError",
    "ResponseStateError",
    "InvalidHeaderError",
    "SerializationError",
    "TransportError",
    "__version__",
]
