"""
Per-request machinery: the response state machine, the sinks responses
are written to, and the structured emission log.
"""

from .state import ResponseState, check_transition
from .sink import ResponseSink, MemorySink, StreamSink
from .emission_log import EmissionLog, log_emission

__all__ = [
    "ResponseState",
    "check_transition",
    "ResponseSink",
    "MemorySink",
    "StreamSink",
    "EmissionLog",
    "log_emission",
]
