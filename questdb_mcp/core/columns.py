"""
Column typing for line-protocol inserts.

Every string becomes a SYMBOL column. QuestDB also has a free-text STRING
type, but choosing between the two would require reading the table schema
first, so inserts through this server only ever create symbols.
"""

import json
import math
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any

from questdb_mcp.core.errors import TimestampParseError

TIMESTAMP_KEY = "timestamp"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ColumnKind(str, Enum):
    SYMBOL = "SYMBOL"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    OTHER = "OTHER"


def classify(value: Any) -> ColumnKind:
    """Map a Python value to the column kind it is written as.

    Priority: str, integral number, other number, bool, anything else.
    ``bool`` is tested first here only because it subclasses ``int``.
    """
    if isinstance(value, str):
        return ColumnKind.SYMBOL
    if isinstance(value, bool):
        return ColumnKind.BOOLEAN
    if isinstance(value, int):
        return ColumnKind.LONG
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return ColumnKind.LONG
        return ColumnKind.DOUBLE
    return ColumnKind.OTHER


def stringify(value: Any) -> str:
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=str)
    return str(value)


def split_fields(record: dict[str, Any]) -> tuple[dict[str, str], dict[str, Any]]:
    """Split a record into ``(symbols, columns)`` for ``Sender.row``.

    The reserved timestamp key and ``None`` values are left out.
    """
    symbols: dict[str, str] = {}
    columns: dict[str, Any] = {}

    for name, value in record.items():
        if name == TIMESTAMP_KEY or value is None:
            continue

        kind = classify(value)
        if kind is ColumnKind.SYMBOL:
            symbols[name] = value
        elif kind is ColumnKind.LONG:
            columns[name] = int(value)
        elif kind is ColumnKind.DOUBLE:
            columns[name] = float(value)
        elif kind is ColumnKind.BOOLEAN:
            columns[name] = value
        else:
            symbols[name] = stringify(value)

    return symbols, columns


def _parse_date(text: str) -> datetime:
    candidate = text.strip()
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        # RFC 2822, e.g. "Sat, 04 Nov 2023 18:44:16 GMT"
        return parsedate_to_datetime(candidate)
    except (TypeError, ValueError, IndexError):
        raise TimestampParseError(f"Invalid timestamp: {text!r}") from None


def to_epoch_millis(value: Any) -> int:
    """Coerce a ``timestamp`` field to epoch milliseconds.

    Numbers are taken as milliseconds. Strings are parsed as ISO-8601 or
    RFC 2822 dates; dates without an offset are read as UTC.
    """
    if isinstance(value, bool):
        raise TimestampParseError(f"Invalid timestamp: {value!r}")

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise TimestampParseError(f"Invalid timestamp: {value!r}")
        return int(value)

    if isinstance(value, str):
        parsed = _parse_date(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return (parsed - _EPOCH) // timedelta(milliseconds=1)

    raise TimestampParseError(f"Invalid timestamp: {value!r}")
