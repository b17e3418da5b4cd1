"""
=============================================================================
RESPONSE SINKS
=============================================================================

A sink is the narrow boundary between the emitter and whatever actually
delivers bytes to the client. The emitter never touches a socket; it
talks to a sink.

=============================================================================
SINK IMPLEMENTATIONS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          ResponseSink (ABC)                         │
    │   set_status · set_header · remove_header · write · finish          │
    ├──────────────────────────────────┬──────────────────────────────────┤
    │  MemorySink                      │  StreamSink                      │
    │  ──────────────────────────────  │  ──────────────────────────────  │
    │  Keeps everything in memory and  │  Buffers the response and writes │
    │  records an ordered event log.   │  the full HTTP/1.1 message with  │
    │  Used by tests and by callers    │  one writer() call on finish().  │
    │  that hand the response to a     │  Works with socket.sendall,      │
    │  framework.                      │  sys.stdout.buffer.write, ...    │
    └──────────────────────────────────┴──────────────────────────────────┘

Header names are case-insensitive: setting "content-type" replaces an
existing "Content-Type" rather than adding a second one.

=============================================================================
"""

import logging
import socket
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import TransportError
from ..http.response import HTTPResponse, check_header
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

Writer = Callable[[bytes], Any]


class ResponseSink(ABC):
    """
    Abstract destination for one response.

    Subclasses implement the five primitives. Header storage is provided
    here so every sink treats header names the same way.
    """

    def __init__(self, headers: Optional[Dict[str, str]] = None):
        self.status: HTTPStatus = HTTPStatus.OK
        # lowercased name → (original name, value)
        self._headers: Dict[str, Tuple[str, str]] = {}
        for name, value in (headers or {}).items():
            self._store_header(name, value)

    @property
    def headers(self) -> Dict[str, str]:
        """Current headers with their original casing, in insertion order."""
        return {name: value for name, value in self._headers.values()}

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        entry = self._headers.get(name.lower())
        return entry[1] if entry else default

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    @abstractmethod
    def set_status(self, status: HTTPStatus) -> None:
        """Assert the response status."""

    @abstractmethod
    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing header with the same name."""

    @abstractmethod
    def remove_header(self, name: str) -> None:
        """Remove a header if present."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Append body bytes."""

    @abstractmethod
    def finish(self) -> None:
        """Complete the response. Nothing may be written afterwards."""

    def _store_header(self, name: str, value: str) -> None:
        check_header(name, value)
        # pop first so a replaced header moves to the end, like a fresh header() call
        self._headers.pop(name.lower(), None)
        self._headers[name.lower()] = (name, value)

    def _drop_header(self, name: str) -> bool:
        return self._headers.pop(name.lower(), None) is not None


class MemorySink(ResponseSink):
    """
    In-memory sink.

    Every primitive call is appended to ``events`` so tests can assert
    on ordering as well as on the final result:

        [("remove_header", "X-Powered-By"),
         ("status", 400),
         ("header", "ETag", "..."),
         ("header", "Content-Type", "application/json"),
         ("write", b'{"result":...}'),
         ("finish",)]
    """

    def __init__(self, headers: Optional[Dict[str, str]] = None):
        super().__init__(headers)
        self.body = b""
        self.finished = False
        self.events: List[tuple] = []

    def set_status(self, status: HTTPStatus) -> None:
        self.status = status
        self.events.append(("status", int(status)))

    def set_header(self, name: str, value: str) -> None:
        self._store_header(name, value)
        self.events.append(("header", name, value))

    def remove_header(self, name: str) -> None:
        self._drop_header(name)
        self.events.append(("remove_header", name))

    def write(self, data: bytes) -> None:
        self.body += data
        self.events.append(("write", data))

    def finish(self) -> None:
        self.finished = True
        self.events.append(("finish",))

    def to_response(self, version: str = "HTTP/1.1") -> HTTPResponse:
        """Snapshot the sink as an HTTPResponse."""
        return HTTPResponse(
            status=self.status,
            headers=self.headers,
            body=self.body,
            version=version,
        )

    @property
    def status_line(self) -> str:
        return self.to_response().status_line


class StreamSink(ResponseSink):
    """
    Sink that serializes the response onto a byte stream.

    Nothing reaches the writer until ``finish()``; then the complete
    message (status line, headers, Content-Length, Date, body) is written
    in a single call.

    Usage:
        sink = StreamSink.for_socket(client_socket)
        sink = StreamSink(sys.stdout.buffer.write)
    """

    def __init__(
        self,
        writer: Writer,
        version: str = "HTTP/1.1",
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(headers)
        self._writer = writer
        self._version = version
        self._body = bytearray()
        self.bytes_sent = 0

    @classmethod
    def for_socket(cls, sock: socket.socket, **kwargs) -> "StreamSink":
        """Create a sink that delivers through ``sock.sendall``."""
        return cls(sock.sendall, **kwargs)

    def set_status(self, status: HTTPStatus) -> None:
        self.status = status

    def set_header(self, name: str, value: str) -> None:
        self._store_header(name, value)

    def remove_header(self, name: str) -> None:
        self._drop_header(name)

    def write(self, data: bytes) -> None:
        self._body.extend(data)

    def finish(self) -> None:
        message = HTTPResponse(
            status=self.status,
            headers=self.headers,
            body=bytes(self._body),
            version=self._version,
        ).to_bytes()

        try:
            self._writer(message)
        except OSError as e:
            logger.error(f"Response write failed after {len(message)} bytes queued: {e}")
            raise TransportError(f"Failed to write response: {e}") from e

        self.bytes_sent = len(message)
