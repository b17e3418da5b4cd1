"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpemit import EmitterConfig, MemorySink, ResponseEmitter


@pytest.fixture
def config() -> EmitterConfig:
    """Default emitter configuration."""
    return EmitterConfig()


@pytest.fixture
def sink() -> MemorySink:
    """Empty in-memory sink."""
    return MemorySink()


@pytest.fixture
def leaky_sink() -> MemorySink:
    """Sink pre-seeded with headers an upstream runtime would have set."""
    return MemorySink(headers={
        "X-Powered-By": "CPython/3.12",
        "Content-Type": "text/html",
    })


@pytest.fixture
def emitter(sink: MemorySink, config: EmitterConfig) -> ResponseEmitter:
    """Emitter writing to the in-memory sink."""
    return ResponseEmitter(sink, config)
