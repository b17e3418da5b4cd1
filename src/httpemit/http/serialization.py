"""
Payload serializers shared by the body writer and the cache tagger.

Two wire encodings exist:

    to_json(payload)    compact JSON text     {"a":1}
    to_native(payload)  Python repr() text    {'a': 1}

Both see the same payload shape: dataclasses and objects with a
``to_dict()`` method are flattened to dicts, and sets become lists sorted
by ``repr`` so their order does not depend on the hash seed. The default
ETag is a digest of the bytes ``serialize`` returns.
"""

import dataclasses
import json
from typing import Any

from ..errors import SerializationError
from .content_types import ContentTypeIntent


def _flatten(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, type):
        return to_dict()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return value


def _json_default(value: Any) -> Any:
    # Called by json.dumps for objects it cannot encode natively.
    flat = _flatten(value)
    if flat is value:
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return flat


def _normalize(value: Any) -> Any:
    value = _flatten(value)
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_normalize(item) for item in value]
    if type(value) is tuple:
        return tuple(_normalize(item) for item in value)
    return value


def to_json(payload: Any) -> str:
    """
    Encode a payload as compact JSON.

    Non-ASCII characters are kept as-is; NaN and Infinity are rejected
    because they are not valid JSON.

    Raises:
        SerializationError: If the payload cannot be encoded.
    """
    try:
        return json.dumps(
            payload,
            default=_json_default,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"Payload is not JSON serializable: {e}",
                                 intent=ContentTypeIntent.JSON) from e


def to_native(payload: Any) -> str:
    """
    Flatten a payload to its Python ``repr()`` text.

    Examples:
        >>> to_native({"tags": {"b", "a"}})
        "{'tags': ['a', 'b']}"
    """
    try:
        return repr(_normalize(payload))
    except RecursionError as e:
        raise SerializationError(f"Payload cannot be flattened: {e}",
                                 intent=ContentTypeIntent.TEXT) from e


def serialize(payload: Any, intent: ContentTypeIntent) -> bytes:
    """
    Serialize a payload for the given intent and return UTF-8 bytes.

    json and problem intents produce JSON; text produces the native form.
    """
    text = to_json(payload) if intent.is_json else to_native(payload)
    return text.encode("utf-8")
