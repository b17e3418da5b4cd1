"""
=============================================================================
RESPONSE EMITTER
=============================================================================

Turns (status, content-type intent, payload) into exactly one complete
response on a sink.

=============================================================================
PIPELINE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   send_error("bad input", 400)                                      │
    │      │                                                              │
    │      ├─► StatusCatalog      400 → HTTPStatus.BAD_REQUEST            │
    │      │                      "Bad Request"                           │
    │      ├─► send_status        strip X-Powered-By, assert 400          │
    │      │                                                              │
    │      └─► send_message       {"result": "Bad Request",               │
    │             │                "message": "bad input", "code": 400}   │
    │             └─► send_body                                           │
    │                   ├─► serialize        per intent                   │
    │                   ├─► CacheTagger      ETag: <sha1 of body bytes>   │
    │                   ├─► ContentNegotiator Content-Type: app/json      │
    │                   ├─► sink.write       body bytes                   │
    │                   └─► sink.finish      TERMINATED                   │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ONE RESPONSE PER EMITTER
=============================================================================

An emitter belongs to a single request. After send_body(), send_message()
or send_error() returns, the response is TERMINATED and every further
call raises ResponseStateError. Code that used to rely on "exit after
sending" instead returns right after the send call.

    def handle(request, sink):
        emitter = ResponseEmitter(sink)
        user = find_user(request)
        if user is None:
            emitter.send_error("no such user", HTTPStatus.NOT_FOUND)
            return
        emitter.send_body(user.to_dict())

Or as a context manager, which turns an escaping exception into a 500
envelope and finishes an untouched response as no-content:

    with ResponseEmitter(sink) as emitter:
        emitter.send_body(build_report())

=============================================================================
"""

import logging
import time
import uuid
from typing import Any, Optional, Union

from .config import EmitterConfig
from .core.emission_log import EmissionLog, log_emission
from .core.sink import ResponseSink
from .core.state import ResponseState, check_transition
from .errors import EmitError, ResponseStateError, TransportError
from .http.cache_tags import EtagOverride, compute_tag, tag_of
from .http.content_types import ContentTypeIntent, mime_of, resolve_intent
from .http.serialization import serialize
from .http.status_codes import HTTPStatus, resolve_status


logger = logging.getLogger(__name__)

StatusLike = Union[HTTPStatus, int]
IntentLike = Union[ContentTypeIntent, str, None]

UNHANDLED_ERROR_MESSAGE = "Unexpected error while building the response"


class ResponseEmitter:
    """
    Single-shot response writer.

    Args:
        sink: Where the response goes.
        config: Fallback statuses, default intent, ETag algorithm, and
                the headers to strip. Defaults to EmitterConfig().
    """

    def __init__(self, sink: ResponseSink, config: Optional[EmitterConfig] = None):
        self.sink = sink
        self.config = config or EmitterConfig()
        self._state = ResponseState.IDLE
        self._id = str(uuid.uuid4())[:8]
        self._started = time.perf_counter()
        self._content_length = 0

    def __repr__(self) -> str:
        return f"<ResponseEmitter {self._id} state={self._state.value}>"

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def state(self) -> ResponseState:
        return self._state

    @property
    def is_terminated(self) -> bool:
        return self._state is ResponseState.TERMINATED

    @property
    def status(self) -> HTTPStatus:
        """The status currently asserted on the sink."""
        return self.sink.status

    def _advance(self, target: ResponseState) -> None:
        previous = self._state
        self._state = check_transition(previous, target)
        if previous is not target:
            logger.debug(f"[{self._id}] {previous.value} -> {target.value}")

    def _require_headers_open(self, action: str) -> None:
        if not self._state.accepts_headers:
            raise ResponseStateError(
                f"Cannot {action}: response is already {self._state.value}",
                state=self._state,
            )

    # =========================================================================
    # HEADERS
    # =========================================================================

    def send_status(self, code: StatusLike, default: Optional[StatusLike] = None) -> HTTPStatus:
        """
        Assert the status line.

        Implementation-identifying headers listed in
        ``config.strip_headers`` are removed first.

        Args:
            code: Status to send. Unknown values resolve to ``default``.
            default: Fallback status; ``config.default_status`` when omitted.

        Returns:
            The status actually sent.
        """
        self._require_headers_open("send status")

        fallback = self.config.fallback_status if default is None else default
        status = resolve_status(code, default=fallback)

        for name in self.config.strip_headers:
            self.sink.remove_header(name)
        self.sink.set_status(status)

        self._advance(ResponseState.HEADERS_SENT)
        return status

    def emit_content_type_header(self, intent: IntentLike) -> str:
        """
        Replace the Content-Type header with the MIME for ``intent``.

        Safe to call repeatedly; the last call wins.
        """
        self._require_headers_open("set Content-Type")
        mime = mime_of(intent)
        self.sink.set_header("Content-Type", mime)
        self._advance(ResponseState.HEADERS_SENT)
        return mime

    def emit_cache_tag(
        self,
        payload: Any,
        override: Optional[EtagOverride] = None,
        intent: IntentLike = None,
    ) -> str:
        """
        Compute the ETag for ``payload`` and replace the ETag header.

        The digest covers the payload as serialized for ``intent``
        (``config.default_intent`` when None). Must happen before the
        body is written.

        Returns:
            The tag that was sent.
        """
        self._require_headers_open("set ETag")
        resolved = self.config.intent if intent is None else resolve_intent(intent)
        return self._set_cache_tag(
            compute_tag(payload, override, self.config.etag_algorithm, resolved)
        )

    def _set_cache_tag(self, tag: str) -> str:
        self._require_headers_open("set ETag")
        self.sink.set_header("ETag", tag)
        self._advance(ResponseState.HEADERS_SENT)
        return tag

    # =========================================================================
    # BODY
    # =========================================================================

    def send_body(
        self,
        payload: Any,
        intent: IntentLike = None,
        etag_override: Optional[EtagOverride] = None,
    ) -> None:
        """
        Send ``payload`` and terminate the response.

        A ``None`` payload terminates immediately: no ETag, no
        Content-Type, no body.

        Args:
            payload: dict, list, dataclass, object with to_dict(), or None.
            intent: json, text or problem. ``config.default_intent`` when None.
            etag_override: Zero-argument callable supplying the ETag.

        Raises:
            SerializationError: Payload cannot be encoded. Nothing has been
                                emitted and the response is still open.
            ResponseStateError: The response is already past its headers.
            InvalidHeaderError: The ETag override returned CR, LF or NUL.
            TransportError: The sink failed to deliver.
        """
        self._require_headers_open("send body")

        if payload is None:
            logger.debug(f"[{self._id}] Null payload, completing without content")
            for name in ("Content-Type", "ETag"):
                if self.sink.has_header(name):
                    self.sink.remove_header(name)
            self._finish()
            return

        resolved = self.config.intent if intent is None else resolve_intent(intent)

        # Serialize before touching the sink so a failure leaves no partial headers.
        body = serialize(payload, resolved)

        self._set_cache_tag(tag_of(body, etag_override, self.config.etag_algorithm))
        self.emit_content_type_header(resolved)

        self._deliver(self.sink.write, body)
        self._content_length = len(body)
        self._advance(ResponseState.BODY_WRITTEN)

        self._finish()

    def send_message(
        self,
        result: str,
        code: StatusLike = HTTPStatus.OK,
        message: Optional[str] = "",
        intent: IntentLike = None,
    ) -> None:
        """
        Send the fixed-shape envelope and terminate.

            {"result": result, "message": message, "code": <int>}

        The status line is not changed; an unknown ``code`` is reported
        as 200 in the envelope.
        """
        status = resolve_status(code, default=HTTPStatus.OK)
        payload = {
            "result": result,
            "message": message,
            "code": status.value,
        }
        self.send_body(payload, intent)

    def send_error(
        self,
        message: Optional[str],
        code: StatusLike = HTTPStatus.INTERNAL_SERVER_ERROR,
        intent: IntentLike = None,
    ) -> None:
        """
        Send an error envelope with a matching status line and terminate.

        The reason phrase becomes the envelope's ``result``:

            send_error("bad input", 400)
            → HTTP/1.1 400 Bad Request
            → {"result":"Bad Request","message":"bad input","code":400}

        Unknown codes fall back to ``config.default_error_status``.
        """
        status = resolve_status(code, default=self.config.fallback_error_status)
        self.send_status(status)
        self.send_message(status.phrase, status, message, intent)

    # =========================================================================
    # COMPLETION
    # =========================================================================

    def _deliver(self, primitive, *args) -> None:
        try:
            primitive(*args)
        except TransportError:
            self._abort()
            raise
        except OSError as e:
            self._abort()
            raise TransportError(f"Sink write failed: {e}") from e

    def _abort(self) -> None:
        logger.error(f"[{self._id}] Transport failure, response abandoned in {self._state.value}")
        self._state = ResponseState.TERMINATED

    def _finish(self) -> None:
        self._deliver(self.sink.finish)
        self._advance(ResponseState.TERMINATED)

        status = self.sink.status
        log_emission(
            EmissionLog(
                emission_id=self._id,
                status_code=int(status),
                reason=status.phrase,
                content_type=self.sink.get_header("Content-Type"),
                content_length=self._content_length,
                etag=self.sink.get_header("ETag"),
                duration_ms=(time.perf_counter() - self._started) * 1000,
            ),
            log_format=self.config.log_format,
            level=logging.WARNING if status.is_server_error else logging.INFO,
        )

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self) -> "ResponseEmitter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            if self._state.accepts_headers:
                self.send_body(None)
            return False

        if not self._state.accepts_headers:
            return False

        logger.error(f"[{self._id}] Unhandled {exc_type.__name__} while building response: {exc_val}")
        code = exc_val.status_code if isinstance(exc_val, EmitError) else HTTPStatus.INTERNAL_SERVER_ERROR
        try:
            self.send_error(UNHANDLED_ERROR_MESSAGE, code)
        except EmitError as e:
            logger.error(f"[{self._id}] Could not send error response: {e}")
        return False
