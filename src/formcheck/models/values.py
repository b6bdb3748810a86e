"""Helpers for the scalar values carried by bounds and answers.

Bounds on questionnaire items and values returned by an expression
evaluator may arrive as Python objects or as JSON scalars. These helpers
normalize both into values that can be ordered against an answer.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import PlainValidator

_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}(:\d{2}(\.\d+)?)?$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_comparable(value: Any) -> int | Decimal | date | datetime | time | None:
    """Coerce a bound or computed value into an orderable scalar.

    Accepts ints, floats, Decimals, date/datetime/time objects and their
    ISO 8601 string forms. Booleans are rejected because ``True < 2`` is
    legal Python but meaningless as a bound. NaN and infinities are
    rejected because they cannot be ordered.

    Raises:
        ValueError: If *value* cannot be interpreted as an orderable scalar.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        msg = f"Boolean {value!r} cannot be used as an ordered value"
        raise ValueError(msg)
    if isinstance(value, Decimal):
        return _finite(value)
    if isinstance(value, (int, date, time)):
        return value
    if isinstance(value, float):
        return _finite(Decimal(str(value)))
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = Decimal(text)
        except InvalidOperation:
            pass
        else:
            return _finite(number)
        if _TIME_PATTERN.match(text):
            return time.fromisoformat(text)
        if _DATE_PATTERN.match(text):
            return date.fromisoformat(text)
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    msg = f"Cannot interpret {value!r} as an ordered value"
    raise ValueError(msg)


def _finite(number: Decimal) -> Decimal:
    if not number.is_finite():
        msg = f"Non-finite number {number} cannot be used as an ordered value"
        raise ValueError(msg)
    return number


ComparableValue = Annotated[
    int | Decimal | date | datetime | time,
    PlainValidator(parse_comparable),
]
"""Annotated type for literal min/max bounds declared on an item."""


def compare(left: Any, right: Any) -> int | None:
    """Three-way compare two scalars, or return None when they are unrelated.

    Integers and decimals compare numerically. Dates only compare with dates,
    datetimes with datetimes (naive vs aware is treated as unrelated), and
    times with times.
    """
    if _is_number(left) and _is_number(right):
        lhs, rhs = Decimal(left), Decimal(right)
    elif isinstance(left, datetime) or isinstance(right, datetime):
        if not (isinstance(left, datetime) and isinstance(right, datetime)):
            return None
        if (left.tzinfo is None) != (right.tzinfo is None):
            return None
        lhs, rhs = left, right
    elif isinstance(left, date) and isinstance(right, date):
        lhs, rhs = left, right
    elif isinstance(left, time) and isinstance(right, time):
        lhs, rhs = left, right
    else:
        return None
    if lhs < rhs:
        return -1
    if lhs > rhs:
        return 1
    return 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, Decimal)) and not isinstance(value, bool)
