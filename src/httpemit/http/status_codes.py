"""
=============================================================================
STATUS CATALOG
=============================================================================

Maps status-code identifiers to their numeric value and canonical reason
phrase, and turns raw integers from untyped sources into catalog members.

=============================================================================
LOOKUP PATHS
=============================================================================

    ┌────────────────────────────────────────────────────────────────────┐
    │                        STATUS RESOLUTION                           │
    ├────────────────────────────────────────────────────────────────────┤
    │                                                                    │
    │   HTTPStatus.NOT_FOUND ──► reason_phrase_of() ──► "Not Found"      │
    │   404                  ──► reason_phrase_of() ──► "Not Found"      │
    │   999                  ──► reason_phrase_of() ──► "Unknown HTTP    │
    │                                                   status code"     │
    │                                                                    │
    │   404  ──► resolve_status(404, default=500) ──► NOT_FOUND          │
    │   999  ──► resolve_status(999, default=500) ──► INTERNAL_SERVER_   │
    │                                                  ERROR             │
    │   "404"──► resolve_status("404")            ──► NOT_FOUND          │
    │                                                                    │
    └────────────────────────────────────────────────────────────────────┘

Neither function raises. A handler that receives a status code from a
database row, a query string or an upstream service can pass it straight
through and always get a well-formed status line back.

=============================================================================
THE CATALOG IS CLOSED
=============================================================================

The enum and the phrase table are built once at import time and never
mutated. New codes are added by editing this module, not at runtime.

=============================================================================
"""

import logging
from enum import IntEnum
from typing import Any, Union


logger = logging.getLogger(__name__)

UNKNOWN_STATUS_PHRASE = "Unknown HTTP status code"


class HTTPStatus(IntEnum):
    """
    Enumerated HTTP status codes.

    Members compare equal to their integer value:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.OK.phrase
        'OK'
        >>> str(HTTPStatus.NOT_FOUND)
        '404'
    """

    # 1xx Informational
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102
    EARLY_HINTS = 103

    # 2xx Success
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207
    ALREADY_REPORTED = 208
    IM_USED = 226

    # 3xx Redirection
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    SWITCH_PROXY = 306
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308

    # 4xx Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    TOO_EARLY = 425
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431
    UNAVAILABLE_FOR_LEGAL_REASONS = 451

    # 5xx Server Errors
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511

    def __str__(self) -> str:
        return str(self.value)

    @property
    def phrase(self) -> str:
        """Canonical reason phrase, e.g. ``"Not Found"`` for 404."""
        return reason_phrase_of(self)

    @property
    def is_informational(self) -> bool:
        return 100 <= self < 200

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        """True for 4xx and 5xx codes."""
        return self >= 400


# =============================================================================
# REASON PHRASES
# =============================================================================
#
# Keyed by the plain integer so that lookups work for both HTTPStatus
# members and raw ints coming from callers.
#
# =============================================================================

_STATUS_PHRASES = {
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    103: "Early Hints",

    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-Status",
    208: "Already Reported",
    226: "IM Used",

    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    306: "Switch Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",

    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Payload Too Large",
    414: "URI Too Long",
    415: "Unsupported Media Type",
    416: "Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",

    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}

# Every enum member must carry a phrase and every phrase must belong to a member.
if set(_STATUS_PHRASES) != {member.value for member in HTTPStatus}:
    raise RuntimeError("status phrase table is out of sync with HTTPStatus")


# =============================================================================
# PUBLIC FUNCTIONS
# =============================================================================

def reason_phrase_of(code: Any) -> str:
    """
    Get the reason phrase for a status code.

    Total over every input: catalog members and matching integers get their
    phrase, everything else gets ``UNKNOWN_STATUS_PHRASE``.

    Examples:
        >>> reason_phrase_of(HTTPStatus.BAD_REQUEST)
        'Bad Request'
        >>> reason_phrase_of(999)
        'Unknown HTTP status code'
    """
    # bool is an int subclass; True must not read as status 1
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN_STATUS_PHRASE
    return _STATUS_PHRASES.get(int(code), UNKNOWN_STATUS_PHRASE)


def resolve_status(
    raw: Union[HTTPStatus, int, str, None],
    default: Union[HTTPStatus, int] = HTTPStatus.OK,
) -> HTTPStatus:
    """
    Parse an arbitrary value into a catalog status.

    Args:
        raw: An HTTPStatus, an integer, or a string of digits.
        default: Status used when ``raw`` is not in the catalog. A default
                 that is itself unknown falls back to 200 OK.

    Returns:
        The matching HTTPStatus member, or the default.

    Examples:
        >>> resolve_status(404)
        <HTTPStatus.NOT_FOUND: 404>
        >>> resolve_status(999, default=500)
        <HTTPStatus.INTERNAL_SERVER_ERROR: 500>
    """
    if isinstance(raw, HTTPStatus):
        return raw

    value = raw
    if isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())

    if isinstance(value, int) and not isinstance(value, bool) and value in _STATUS_PHRASES:
        return HTTPStatus(value)

    fallback = default if isinstance(default, HTTPStatus) else _coerce_default(default)
    logger.warning(f"Unrecognized status code {raw!r}, falling back to {fallback.value}")
    return fallback


def status_line(code: Union[HTTPStatus, int], version: str = "HTTP/1.1") -> str:
    """
    Format a status line, e.g. ``"HTTP/1.1 404 Not Found"``.

    Unknown integers keep their number and get the fallback phrase.
    """
    return f"{version} {int(code)} {reason_phrase_of(code)}"


def _coerce_default(default: Any) -> HTTPStatus:
    if isinstance(default, int) and default in _STATUS_PHRASES:
        return HTTPStatus(default)
    return HTTPStatus.OK
