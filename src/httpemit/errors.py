"""
Exceptions raised while emitting a response.

Every error carries the HTTP status that best describes it, so a caller
that catches ``EmitError`` can still produce a meaningful status line.

    EmitError
    ├── ResponseStateError   write attempted after the phase closed
    ├── SerializationError   payload cannot be encoded for the intent
    ├── InvalidHeaderError   header name or value would break the message framing
    └── TransportError       the sink's writer failed
"""


class EmitError(Exception):
    """Base class for response emission failures."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ResponseStateError(EmitError):
    """
    Raised when a header or body write arrives in the wrong phase.

    HTTP headers cannot follow body data, and nothing at all may follow
    a terminated response.
    """

    def __init__(self, message: str, state=None):
        super().__init__(message)
        self.state = state


class SerializationError(EmitError):
    """Raised when a payload is not representable in the chosen wire format."""

    def __init__(self, message: str, intent=None):
        super().__init__(message)
        self.intent = intent


class InvalidHeaderError(EmitError):
    """Raised when a header name or value contains CR, LF or NUL."""

    def __init__(self, message: str, name=None):
        super().__init__(message)
        self.name = name


class TransportError(EmitError):
    """Raised when the underlying write primitive fails."""
