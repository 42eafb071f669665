from __future__ import annotations

from datetime import datetime, timedelta, timezone

from legatepro.billing.records import TimeEntryRecord, time_entry_record_from
from legatepro.billing.time_valuation import (
    resolve_minutes,
    summarize_unbilled_time,
    value_cents,
    value_time_entry,
)

START = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


def test_explicit_duration_is_valued_at_entry_rate():
    valuation = value_time_entry(TimeEntryRecord(entry_id=1, estate_id=1, duration_minutes=90, hourly_rate_cents=20000))
    assert valuation.minutes == 90
    assert valuation.hours == 1.5
    assert valuation.value_cents == 30000


def test_duration_falls_back_to_start_and_stop():
    entry = TimeEntryRecord(
        entry_id=1,
        estate_id=1,
        started_at=START,
        stopped_at=START + timedelta(minutes=45),
        hourly_rate_cents=10000,
    )
    assert resolve_minutes(entry) == 45
    assert value_time_entry(entry).value_cents == 7500


def test_stop_before_start_counts_as_zero_minutes():
    entry = TimeEntryRecord(entry_id=1, estate_id=1, started_at=START, stopped_at=START - timedelta(minutes=5))
    assert resolve_minutes(entry) == 0


def test_default_rate_applies_when_entry_has_none():
    entry = TimeEntryRecord(entry_id=1, estate_id=1, duration_minutes=30)
    assert value_time_entry(entry, default_rate_cents=12000).value_cents == 6000
    assert value_time_entry(entry).value_cents == 0


def test_zero_rate_keeps_minutes_without_value():
    valuation = value_time_entry(TimeEntryRecord(entry_id=1, estate_id=1, duration_minutes=15, hourly_rate_cents=0))
    assert valuation.minutes == 15
    assert valuation.value_cents == 0
    assert not valuation.is_valued


def test_value_rounds_half_up():
    assert value_cents(1, 30) == 1
    assert value_cents(1, 29) == 0


def test_summarize_unbilled_time_splits_valued_and_unvalued():
    entries = [
        TimeEntryRecord(entry_id=1, estate_id=1, duration_minutes=60, hourly_rate_cents=6000),
        TimeEntryRecord(entry_id=2, estate_id=2, duration_minutes=30, hourly_rate_cents=12000),
        TimeEntryRecord(entry_id=3, estate_id=2, duration_minutes=15),
        TimeEntryRecord(entry_id=4, estate_id=1),
    ]

    summary = summarize_unbilled_time(entries)

    assert summary.totals.minutes == 90
    assert summary.totals.value_cents == 12000
    assert summary.valued_entries == 2
    assert summary.excluded_entries == 2
    assert summary.unvalued_minutes == 15
    assert summary.by_estate[1].value_cents == 6000
    assert summary.by_estate[2].minutes == 30


def test_record_from_row_defaults_billable_and_naive_timestamps():
    record = time_entry_record_from({"id": 7, "estate_id": "3", "started_at": datetime(2026, 10, 1, 9, 0)})
    assert record.estate_id == 3
    assert record.billable is True
    assert record.started_at.tzinfo is timezone.utc
