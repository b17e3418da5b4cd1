"""
=============================================================================
HTTP RESPONSE
=============================================================================

The terminal artifact of one emission: status line, headers and body,
plus the HTTP/1.1 wire serialization used by stream sinks.

=============================================================================
WIRE FORMAT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 200 OK\r\n                          ← status line         │
    │  ETag: 0beec7b5ea3f0fdbc95d0dd47f3c5bc275da8a33\r\n                 │
    │  Content-Type: application/json\r\n           ← negotiated          │
    │  Content-Length: 43\r\n                       ← added on output     │
    │  Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n      ← added on output     │
    │  \r\n                                         ← separator           │
    │  {"result":"ok","message":"done","code":200}  ← body                │
    └─────────────────────────────────────────────────────────────────────┘

No Server header is added: responses do not advertise the software that
produced them.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from ..errors import InvalidHeaderError
from .status_codes import HTTPStatus, status_line


_FORBIDDEN_HEADER_CHARS = ("\r", "\n", "\0")


def check_header(name: str, value: str) -> None:
    """
    Reject a header that would split or corrupt the message.

    Raises:
        InvalidHeaderError: Empty name, or CR, LF or NUL in name or value.
    """
    if not name or any(ch in name or ch in value for ch in _FORBIDDEN_HEADER_CHARS):
        raise InvalidHeaderError(f"Invalid header {name!r}: {value!r}", name=name)


@dataclass
class HTTPResponse:
    """
    A fully assembled response.

    Attributes:
        status: Resolved status code.
        headers: Header name → value, in emission order.
        body: Body bytes (empty for no-content completions).
        version: Protocol version for the status line.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """e.g. ``"HTTP/1.1 200 OK"``"""
        return status_line(self.status, self.version)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    @property
    def content_type(self) -> Optional[str]:
        return self.get_header("Content-Type")

    @property
    def etag(self) -> Optional[str]:
        return self.get_header("ETag")

    def to_bytes(self, date: Optional[datetime] = None) -> bytes:
        """
        Serialize to HTTP/1.1 bytes ready for ``socket.sendall()``.

        Content-Length and Date are filled in when absent.

        Args:
            date: Timestamp for the Date header (defaults to now, UTC).

        Raises:
            InvalidHeaderError: A header contains CR, LF or NUL.
        """
        for name, value in self.headers.items():
            check_header(name, value)
        headers = dict(self.headers)

        if self.get_header("Content-Length") is None:
            headers["Content-Length"] = str(len(self.body))

        if self.get_header("Date") is None:
            headers["Date"] = format_http_date(date or datetime.now(timezone.utc))

        lines = [self.status_line]
        lines.extend(f"{name}: {value}" for name, value in headers.items())
        lines.append("")

        head = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return head + self.body


_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an RFC 7231 HTTP-date.

    Aware datetimes are converted to UTC first.

        >>> format_http_date(datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc))
        'Thu, 15 Jan 2026 12:30:45 GMT'
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return (
        f"{_DAYS[dt.weekday()]}, "
        f"{dt.day:02d} {_MONTHS[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )
