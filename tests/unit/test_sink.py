"""
Unit tests for response sinks and the HTTPResponse wire format.
"""

import socket
from datetime import datetime, timezone

import pytest

from httpemit import (
    HTTPResponse,
    HTTPStatus,
    InvalidHeaderError,
    MemorySink,
    ResponseEmitter,
    StreamSink,
    TransportError,
)
from httpemit.core.state import ResponseState, check_transition
from httpemit.errors import ResponseStateError
from httpemit.http.response import format_http_date


class TestMemorySink:
    """Tests for MemorySink."""

    def test_headers_case_insensitive(self):
        sink = MemorySink()
        sink.set_header("Content-Type", "text/html")
        sink.set_header("content-type", "application/json")

        assert sink.headers == {"content-type": "application/json"}
        assert sink.get_header("CONTENT-TYPE") == "application/json"

    def test_remove_missing_header(self):
        """Removing an absent header is a no-op."""
        sink = MemorySink()
        sink.remove_header("X-Powered-By")
        assert sink.headers == {}

    @pytest.mark.parametrize("name,value", [
        ("ETag", "x\r\nSet-Cookie: evil=1"),
        ("ETag", "x\nInjected: 1"),
        ("X-Bad\r\nName", "v"),
        ("", "v"),
    ])
    def test_rejects_header_breaking_characters(self, name, value):
        sink = MemorySink()
        with pytest.raises(InvalidHeaderError):
            sink.set_header(name, value)
        assert sink.headers == {}
        assert sink.events == []

    def test_rejects_bad_seeded_header(self):
        with pytest.raises(InvalidHeaderError):
            MemorySink(headers={"X-Powered-By": "a\r\nb: c"})

    def test_to_response(self):
        sink = MemorySink()
        sink.set_status(HTTPStatus.NOT_FOUND)
        sink.set_header("ETag", "abc")
        sink.write(b"gone")

        response = sink.to_response()
        assert response.status_line == "HTTP/1.1 404 Not Found"
        assert response.etag == "abc"
        assert response.body == b"gone"


class TestStreamSink:
    """Tests for StreamSink."""

    def test_writes_once_on_finish(self):
        chunks = []
        sink = StreamSink(chunks.append)

        ResponseEmitter(sink).send_error("bad input", 400)

        assert len(chunks) == 1
        message = chunks[0]
        head, body = message.split(b"\r\n\r\n", 1)
        lines = head.split(b"\r\n")

        assert lines[0] == b"HTTP/1.1 400 Bad Request"
        assert b"Content-Type: application/json" in lines
        assert b"Content-Length: %d" % len(body) in lines
        assert any(line.startswith(b"ETag: ") for line in lines)
        assert not any(line.lower().startswith(b"server:") for line in lines)
        assert body == b'{"result":"Bad Request","message":"bad input","code":400}'
        assert sink.bytes_sent == len(message)

    def test_nothing_written_before_finish(self):
        chunks = []
        sink = StreamSink(chunks.append)
        sink.set_status(HTTPStatus.OK)
        sink.write(b"partial")
        assert chunks == []

    def test_no_content_completion(self):
        chunks = []
        ResponseEmitter(StreamSink(chunks.append)).send_body(None)

        head, body = chunks[0].split(b"\r\n\r\n", 1)
        assert head.startswith(b"HTTP/1.1 200 OK\r\n")
        assert b"Content-Length: 0" in head
        assert b"Content-Type" not in head
        assert body == b""

    def test_strips_seeded_header(self):
        chunks = []
        sink = StreamSink(chunks.append, headers={"X-Powered-By": "CPython"})
        ResponseEmitter(sink).send_error("x", 400)
        assert b"X-Powered-By" not in chunks[0]

    def test_writer_failure(self):
        def broken(data):
            raise ConnectionResetError("reset by peer")

        with pytest.raises(TransportError):
            StreamSink(broken).finish()

    def test_for_socket(self):
        left, right = socket.socketpair()
        try:
            sink = StreamSink.for_socket(left)
            ResponseEmitter(sink).send_message("ok", 200, "done")
            left.shutdown(socket.SHUT_WR)

            received = b""
            while True:
                chunk = right.recv(4096)
                if not chunk:
                    break
                received += chunk
        finally:
            left.close()
            right.close()

        assert received.startswith(b"HTTP/1.1 200 OK\r\n")
        assert received.endswith(b'{"result":"ok","message":"done","code":200}')


class TestHTTPResponse:
    """Tests for HTTPResponse serialization."""

    def test_to_bytes(self):
        response = HTTPResponse(
            status=HTTPStatus.OK,
            headers={"Content-Type": "text/plain"},
            body=b"hello",
        )
        when = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

        assert response.to_bytes(date=when) == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 5\r\n"
            b"Date: Thu, 15 Jan 2026 12:30:45 GMT\r\n"
            b"\r\n"
            b"hello"
        )

    def test_explicit_content_length_kept(self):
        response = HTTPResponse(headers={"content-length": "99"}, body=b"x")
        assert b"Content-Length: 1" not in response.to_bytes()

    def test_to_bytes_rejects_line_breaks(self):
        response = HTTPResponse(headers={"ETag": "x\r\nSet-Cookie: evil=1"})
        with pytest.raises(InvalidHeaderError):
            response.to_bytes()

    def test_format_http_date(self):
        dt = datetime(2026, 10, 19, 8, 5, 3, tzinfo=timezone.utc)
        assert format_http_date(dt) == "Mon, 19 Oct 2026 08:05:03 GMT"


class TestResponseState:
    """Tests for the state transition table."""

    def test_forward_transitions(self):
        assert check_transition(ResponseState.IDLE, ResponseState.HEADERS_SENT) is ResponseState.HEADERS_SENT
        assert check_transition(ResponseState.HEADERS_SENT, ResponseState.BODY_WRITTEN)
        assert check_transition(ResponseState.BODY_WRITTEN, ResponseState.TERMINATED)
        assert check_transition(ResponseState.IDLE, ResponseState.TERMINATED)

    @pytest.mark.parametrize("current,target", [
        (ResponseState.IDLE, ResponseState.BODY_WRITTEN),
        (ResponseState.BODY_WRITTEN, ResponseState.HEADERS_SENT),
        (ResponseState.TERMINATED, ResponseState.HEADERS_SENT),
        (ResponseState.TERMINATED, ResponseState.TERMINATED),
    ])
    def test_rejected_transitions(self, current, target):
        with pytest.raises(ResponseStateError):
            check_transition(current, target)

    def test_accepts_headers(self):
        assert ResponseState.IDLE.accepts_headers
        assert ResponseState.HEADERS_SENT.accepts_headers
        assert not ResponseState.BODY_WRITTEN.accepts_headers
        assert not ResponseState.TERMINATED.accepts_headers
