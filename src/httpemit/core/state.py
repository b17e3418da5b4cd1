"""
=============================================================================
RESPONSE STATE MACHINE
=============================================================================

One response moves through four phases, strictly forward:

    ┌──────┐  status / header  ┌──────────────┐  body  ┌──────────────┐
    │ IDLE │ ────────────────► │ HEADERS_SENT │ ─────► │ BODY_WRITTEN │
    └──────┘                   └──────────────┘        └──────────────┘
        │                             │                        │
        │ null payload                │ null payload           │ finish
        ▼                             ▼                        ▼
    ┌────────────────────────────────────────────────────────────────┐
    │                          TERMINATED                            │
    └────────────────────────────────────────────────────────────────┘

Headers may be written in IDLE and HEADERS_SENT only. Once the body is
written no header may follow, and nothing at all follows TERMINATED.

=============================================================================
"""

from enum import Enum

from ..errors import ResponseStateError


class ResponseState(Enum):
    """Lifecycle phases of a single response."""

    IDLE = "idle"                  # Nothing emitted yet
    HEADERS_SENT = "headers_sent"  # Status and/or headers asserted
    BODY_WRITTEN = "body_written"  # Body bytes handed to the sink
    TERMINATED = "terminated"      # Response complete, unit of work over

    @property
    def accepts_headers(self) -> bool:
        return self in (ResponseState.IDLE, ResponseState.HEADERS_SENT)


_TRANSITIONS = {
    ResponseState.IDLE: {ResponseState.HEADERS_SENT, ResponseState.TERMINATED},
    ResponseState.HEADERS_SENT: {
        ResponseState.HEADERS_SENT,
        ResponseState.BODY_WRITTEN,
        ResponseState.TERMINATED,
    },
    ResponseState.BODY_WRITTEN: {ResponseState.TERMINATED},
    ResponseState.TERMINATED: set(),
}


def check_transition(current: ResponseState, target: ResponseState) -> ResponseState:
    """
    Validate a state change and return the target state.

    Raises:
        ResponseStateError: If ``target`` is not reachable from ``current``.
    """
    if target not in _TRANSITIONS[current]:
        raise ResponseStateError(
            f"Cannot move response from {current.value} to {target.value}",
            state=current,
        )
    return target
