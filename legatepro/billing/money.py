"""Integer-cents normalization for stored invoice and expense amounts.

Rows written before the cents migration stored dollar amounts in the legacy
`total_amount` / `total` / `subtotal` / `amount` fields; a later batch wrote
cents into the same fields. Nothing on the row says which, so the unit is
guessed from magnitude: anything above the threshold is taken to be cents
already, anything at or below it is taken to be dollars.

The guess is wrong for a legacy $12,000 invoice (read as $120.00) and for a
cents row of 9,999 (read as $9,999.00). The threshold is kept at 10,000 for
compatibility with existing data; new rows always carry `amount_cents`, which
bypasses the heuristic entirely.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

LEGACY_CENTS_THRESHOLD = 10_000
CENTS_FIELD = "amount_cents"
LEGACY_AMOUNT_FIELDS = ("total_amount", "total", "subtotal", "amount")


def read_field(source: Any, name: str) -> Any:
    """Read `name` from a mapping or an attribute-bearing object; None when absent."""
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def to_decimal(value: Any) -> Decimal | None:
    """Return a finite Decimal for numeric input, otherwise None.

    Strings and booleans are not amounts, even when they look numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        try:
            return Decimal(repr(value))
        except InvalidOperation:
            return None
    return None


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def legacy_amount_to_cents(raw: Any, threshold: int = LEGACY_CENTS_THRESHOLD) -> int:
    """Convert one legacy amount of unknown unit into cents."""
    value = to_decimal(raw)
    if value is None or value < 0:
        return 0
    if value > threshold:
        return round_half_up(value)
    return round_half_up(value * 100)


def normalize_amount(record: Any, threshold: int = LEGACY_CENTS_THRESHOLD) -> int:
    """Resolve a record's amount to integer cents.

    `amount_cents` wins when it holds a finite number. Otherwise the first
    legacy field holding a finite number is converted with the magnitude
    heuristic. Missing, non-numeric and negative amounts resolve to 0.
    """
    explicit = to_decimal(read_field(record, CENTS_FIELD))
    if explicit is not None:
        return max(round_half_up(explicit), 0)

    for field_name in LEGACY_AMOUNT_FIELDS:
        raw = read_field(record, field_name)
        if to_decimal(raw) is None:
            continue
        return legacy_amount_to_cents(raw, threshold=threshold)
    return 0


def percent(part: int, whole: int) -> int:
    """Whole-number percentage of `part` in `whole`; 0 when `whole` is not positive."""
    if whole <= 0:
        return 0
    return round_half_up(Decimal(part) * 100 / Decimal(whole))
