"""
=============================================================================
EMISSION LOG
=============================================================================

One structured log record per terminated response.

    TEXT FORMAT:
    ┌─────────────────────────────────────────────────────────────────────┐
    │ [a1b2c3d4] 400 Bad Request application/json 52B etag=9f86d0.. 0.21ms│
    └─────────────────────────────────────────────────────────────────────┘

    JSON FORMAT (for log aggregators):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {"emission_id": "a1b2c3d4", "status_code": 400,                     │
    │  "reason": "Bad Request", "content_type": "application/json",       │
    │  "content_length": 52, "etag": "9f86d0...", "duration_ms": 0.21}    │
    └─────────────────────────────────────────────────────────────────────┘

Records go to the ``httpemit.emission`` logger so they can be routed
separately from diagnostic output:

    logging.getLogger("httpemit.emission").setLevel(logging.WARNING)

=============================================================================
"""

import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional


logger = logging.getLogger("httpemit.emission")


@dataclass
class EmissionLog:
    """Structured summary of one emitted response."""

    emission_id: str
    status_code: int
    reason: str
    content_type: Optional[str]
    content_length: int
    etag: Optional[str]
    duration_ms: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        etag = f"etag={self.etag[:12]}" if self.etag else "etag=-"
        return (
            f"[{self.emission_id}] {self.status_code} {self.reason} "
            f"{self.content_type or '-'} {self.content_length}B "
            f"{etag} {self.duration_ms:.2f}ms"
        )


def log_emission(entry: EmissionLog, log_format: str = "text", level: int = logging.INFO) -> None:
    """Emit ``entry`` on the emission logger in the configured format."""
    if log_format == "json":
        logger.log(level, json.dumps(entry.to_dict()))
    else:
        logger.log(level, entry.to_text())
