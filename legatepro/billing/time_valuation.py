"""Duration and billable value of tracked time."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from legatepro.billing.money import round_half_up, to_decimal
from legatepro.billing.records import TimeEntryRecord


@dataclass(frozen=True)
class TimeValuation:
    minutes: float
    rate_cents: int
    value_cents: int

    @property
    def hours(self) -> float:
        return self.minutes / 60

    @property
    def is_valued(self) -> bool:
        return self.minutes > 0 and self.rate_cents > 0


def resolve_minutes(entry: TimeEntryRecord) -> float:
    """Explicit positive duration, else stop minus start, else 0."""
    if entry.duration_minutes is not None and entry.duration_minutes > 0:
        return float(entry.duration_minutes)
    if entry.started_at is not None and entry.stopped_at is not None:
        elapsed = (entry.stopped_at - entry.started_at).total_seconds() / 60
        return elapsed if elapsed > 0 else 0.0
    return 0.0


def resolve_rate_cents(entry_rate_cents: int | None, default_rate_cents: int | None) -> int:
    for candidate in (entry_rate_cents, default_rate_cents):
        if candidate is not None and candidate > 0:
            return int(candidate)
    return 0


def value_cents(minutes: float, rate_cents: int) -> int:
    """round-half-up(minutes / 60 * rate)."""
    if minutes <= 0 or rate_cents <= 0:
        return 0
    exact = to_decimal(minutes) * Decimal(rate_cents) / Decimal(60)
    return round_half_up(exact)


def value_time_entry(entry: TimeEntryRecord, default_rate_cents: int | None = None) -> TimeValuation:
    minutes = resolve_minutes(entry)
    rate = resolve_rate_cents(entry.hourly_rate_cents, default_rate_cents)
    return TimeValuation(minutes=minutes, rate_cents=rate, value_cents=value_cents(minutes, rate))


@dataclass
class UnbilledTotals:
    minutes: float = 0.0
    value_cents: int = 0

    @property
    def hours(self) -> float:
        return self.minutes / 60


@dataclass
class UnbilledTimeSummary:
    """Unbilled time rolled up globally and per estate.

    `totals` and `by_estate` only include entries that have both a duration
    and a rate. Entries missing either are counted in `excluded_entries`;
    minutes on entries that have a duration but no rate are kept in
    `unvalued_minutes` so hours and value can be reported independently.
    """

    totals: UnbilledTotals = field(default_factory=UnbilledTotals)
    by_estate: dict[int, UnbilledTotals] = field(default_factory=dict)
    valued_entries: int = 0
    excluded_entries: int = 0
    unvalued_minutes: float = 0.0


def summarize_unbilled_time(
    entries: Iterable[TimeEntryRecord],
    default_rate_cents: int | None = None,
) -> UnbilledTimeSummary:
    summary = UnbilledTimeSummary()
    for entry in entries:
        valuation = value_time_entry(entry, default_rate_cents=default_rate_cents)
        if not valuation.is_valued:
            summary.excluded_entries += 1
            summary.unvalued_minutes += valuation.minutes
            continue

        summary.valued_entries += 1
        summary.totals.minutes += valuation.minutes
        summary.totals.value_cents += valuation.value_cents
        if entry.estate_id is None:
            continue
        estate_totals = summary.by_estate.setdefault(entry.estate_id, UnbilledTotals())
        estate_totals.minutes += valuation.minutes
        estate_totals.value_cents += valuation.value_cents
    return summary
