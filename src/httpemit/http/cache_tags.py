"""
=============================================================================
CACHE TAGS (ETag)
=============================================================================

Computes the cache-validation tag sent in the ETag header.

=============================================================================
HOW THE TAG IS CHOSEN
=============================================================================

    ┌────────────────────────────────────────────────────────────────────┐
    │                                                                    │
    │   override given?                                                  │
    │     ├── yes ──► tag = override()            (used verbatim)        │
    │     └── no  ──► tag = hexdigest(serialize(payload, intent))        │
    │                                                                    │
    └────────────────────────────────────────────────────────────────────┘

The digest is taken over the body bytes, so the same body always has the
same tag. A client that sends it back in If-None-Match can be matched
by an upstream cache without this package keeping any state.

SHA-1 is the default algorithm. Any name accepted by hashlib.new() can
be configured instead.

=============================================================================
"""

import hashlib
from typing import Any, Callable, Optional

from .content_types import ContentTypeIntent
from .serialization import serialize


DEFAULT_ALGORITHM = "sha1"

EtagOverride = Callable[[], str]


def digest(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Hex digest of ``data``.

    Raises:
        ValueError: If hashlib does not know the algorithm.
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def tag_of(
    body: bytes,
    override: Optional[EtagOverride] = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Tag for an already-serialized body."""
    if override is not None:
        return str(override())
    return digest(body, algorithm)


def compute_tag(
    payload: Any,
    override: Optional[EtagOverride] = None,
    algorithm: str = DEFAULT_ALGORITHM,
    intent: ContentTypeIntent = ContentTypeIntent.TEXT,
) -> str:
    """
    Compute the ETag value for a payload.

    Args:
        payload: The response payload.
        override: Zero-argument callable whose return value is used as the
                  tag instead of the digest.
        algorithm: hashlib algorithm name for the default digest.
        intent: Wire format the digest is computed over.

    Returns:
        The tag string.

    Examples:
        >>> compute_tag({"a": 1}) == compute_tag({"a": 1})
        True
        >>> compute_tag({"a": 1}, override=lambda: "v42")
        'v42'
    """
    if override is not None:
        return str(override())
    return digest(serialize(payload, intent), algorithm)
