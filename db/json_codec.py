"""
db/json_codec.py
----------------
Encoding and safe decoding of JSON-bearing columns
(interests, amenities, photos, contact_info, travel_dates).

Reads never fail: corrupt or missing values decode to an empty list or
empty dict, and the owning record is logged so the row can be fixed.
"""

import json
from typing import Any, Callable, Optional

from utils.errors import DecodeError
from utils.logger import get_logger

logger = get_logger(__name__)


def encode(value: Any) -> str:
    """
    Serialize a list/dict into the canonical column text.

    ``None`` is stored as an empty list, matching how the API treats
    missing list fields on write.
    """
    if value is None:
        value = []
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def decode(
    raw: Any,
    default: Callable[[], Any],
    *,
    field: str,
    record_id: Optional[Any] = None,
) -> Any:
    """
    Parse a JSON column value.

    Args:
        raw: Column value as returned by the driver (text, bytes, or an
             already-parsed structure).
        default: Factory for the typed empty value (``list`` or ``dict``).
        field: Column name, for the log line.
        record_id: Identifier of the owning row, for the log line.

    Returns:
        The parsed value, or ``default()`` when ``raw`` is empty, malformed,
        or of the wrong shape.
    """
    if raw is None or raw == "" or raw == b"":
        return default()

    expected = type(default())
    if isinstance(raw, expected):
        return raw

    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        _log_failure(DecodeError(field, record_id, raw), e)
        return default()

    if not isinstance(value, expected):
        _log_failure(DecodeError(field, record_id, raw), f"expected {expected.__name__}")
        return default()
    return value


def decode_list(raw: Any, *, field: str, record_id: Optional[Any] = None) -> list:
    return decode(raw, list, field=field, record_id=record_id)


def decode_object(raw: Any, *, field: str, record_id: Optional[Any] = None) -> dict:
    return decode(raw, dict, field=field, record_id=record_id)


def _log_failure(error: DecodeError, reason: Any) -> None:
    logger.warning(f"{error.message} ({reason}); using empty default")
