"""
=============================================================================
EMITTER CONFIGURATION
=============================================================================

Centralized settings for ResponseEmitter.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                     │
    │   1. Command-line arguments                                         │
    │      └── python -m httpemit --default-status 500 ...                │
    │                                                                     │
    │   2. Environment variables                                          │
    │      └── HTTPEMIT_DEFAULT_STATUS=500 python -m httpemit ...         │
    │                                                                     │
    │   3. Default values (in this dataclass)                             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import hashlib
import os
from dataclasses import dataclass
from typing import Tuple

from .http.content_types import ContentTypeIntent, resolve_intent
from .http.status_codes import HTTPStatus, resolve_status


SUPPORTED_HTTP_VERSIONS = ("HTTP/1.0", "HTTP/1.1")


@dataclass
class EmitterConfig:
    """
    Configuration for ResponseEmitter.

    =========================================================================
    GROUPS
    =========================================================================

    STATUS FALLBACKS
    - default_status, default_error_status

    NEGOTIATION
    - default_intent

    CACHE TAGS
    - etag_algorithm

    HEADERS
    - strip_headers, http_version

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # STATUS FALLBACKS
    # ─────────────────────────────────────────────────────────────────────

    default_status: int = HTTPStatus.OK
    """
    Status used by send_status() when the given code is not in the catalog.
    """

    default_error_status: int = HTTPStatus.INTERNAL_SERVER_ERROR
    """
    Status used by send_error() when the given code is not in the catalog.
    """

    # ─────────────────────────────────────────────────────────────────────
    # NEGOTIATION
    # ─────────────────────────────────────────────────────────────────────

    default_intent: str = ContentTypeIntent.JSON.value
    """
    Intent used when a send_* call does not name one: json, text or problem.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CACHE TAGS
    # ─────────────────────────────────────────────────────────────────────

    etag_algorithm: str = "sha1"
    """
    hashlib algorithm for the default ETag digest.
    """

    # ─────────────────────────────────────────────────────────────────────
    # HEADERS
    # ─────────────────────────────────────────────────────────────────────

    strip_headers: Tuple[str, ...] = ("X-Powered-By",)
    """
    Implementation-identifying headers removed before the status is sent.
    """

    http_version: str = "HTTP/1.1"
    """
    Protocol version written in the status line: HTTP/1.0 or HTTP/1.1.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    log_format: str = "text"
    """
    Emission log format: 'text' or 'json'.
    """

    @property
    def intent(self) -> ContentTypeIntent:
        return resolve_intent(self.default_intent)

    @property
    def fallback_status(self) -> HTTPStatus:
        return resolve_status(self.default_status)

    @property
    def fallback_error_status(self) -> HTTPStatus:
        return resolve_status(self.default_error_status, default=HTTPStatus.INTERNAL_SERVER_ERROR)

    @classmethod
    def from_env(cls) -> "EmitterConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPEMIT_DEFAULT_STATUS        Fallback status (default: 200)
        HTTPEMIT_DEFAULT_ERROR_STATUS  Fallback error status (default: 500)
        HTTPEMIT_DEFAULT_INTENT        json | text | problem (default: json)
        HTTPEMIT_ETAG_ALGORITHM        hashlib name (default: sha1)
        HTTPEMIT_HTTP_VERSION          HTTP/1.0 | HTTP/1.1 (default: HTTP/1.1)
        HTTPEMIT_STRIP_HEADERS         Comma-separated header names
                                       (default: X-Powered-By)
        HTTPEMIT_LOG_LEVEL             Logging level (default: INFO)
        HTTPEMIT_LOG_FORMAT            text | json (default: text)

        =====================================================================
        """
        strip = os.getenv("HTTPEMIT_STRIP_HEADERS")
        return cls(
            default_status=int(os.getenv("HTTPEMIT_DEFAULT_STATUS", "200")),
            default_error_status=int(os.getenv("HTTPEMIT_DEFAULT_ERROR_STATUS", "500")),
            default_intent=os.getenv("HTTPEMIT_DEFAULT_INTENT", "json").strip().lower(),
            etag_algorithm=os.getenv("HTTPEMIT_ETAG_ALGORITHM", "sha1"),
            strip_headers=(
                tuple(h.strip() for h in strip.split(",") if h.strip())
                if strip is not None else ("X-Powered-By",)
            ),
            http_version=os.getenv("HTTPEMIT_HTTP_VERSION", "HTTP/1.1").strip().upper(),
            log_level=os.getenv("HTTPEMIT_LOG_LEVEL", "INFO"),
            log_format=os.getenv("HTTPEMIT_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting.
        """
        for name in ("default_status", "default_error_status"):
            value = getattr(self, name)
            if not 100 <= int(value) <= 599:
                raise ValueError(f"{name} must be in 100-599, got {value}")
            if int(value) not in {member.value for member in HTTPStatus}:
                raise ValueError(f"{name} {value} is not a known HTTP status")

        if self.default_intent not in {intent.value for intent in ContentTypeIntent}:
            raise ValueError(f"Unknown default_intent: {self.default_intent!r}")

        # shake_* digests need an explicit length and cannot produce a plain hexdigest()
        if (self.etag_algorithm not in hashlib.algorithms_available
                or self.etag_algorithm.startswith("shake_")):
            raise ValueError(f"Unsupported etag_algorithm: {self.etag_algorithm!r}")

        if self.log_format not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got {self.log_format!r}")

        if self.http_version not in SUPPORTED_HTTP_VERSIONS:
            raise ValueError(f"Unsupported http_version: {self.http_version!r}")
