from legatepro.billing.aging import AGING_BANDS, AgedInvoice, AgingBand, AgingBucket, age_invoices, build_aging
from legatepro.billing.formatting import format_money, minutes_to_hours
from legatepro.billing.money import LEGACY_CENTS_THRESHOLD, normalize_amount
from legatepro.billing.records import InvoiceRecord, TimeEntryRecord, invoice_record_from, time_entry_record_from
from legatepro.billing.rollup import InvoiceRollup, RollupTotals, rollup_invoices
from legatepro.billing.time_valuation import (
    TimeValuation,
    UnbilledTimeSummary,
    summarize_unbilled_time,
    value_time_entry,
)
from legatepro.billing.trend import MonthlyBucket, build_monthly_trend

__all__ = [
    "AGING_BANDS",
    "AgedInvoice",
    "AgingBand",
    "AgingBucket",
    "age_invoices",
    "build_aging",
    "format_money",
    "minutes_to_hours",
    "LEGACY_CENTS_THRESHOLD",
    "normalize_amount",
    "InvoiceRecord",
    "TimeEntryRecord",
    "invoice_record_from",
    "time_entry_record_from",
    "InvoiceRollup",
    "RollupTotals",
    "rollup_invoices",
    "TimeValuation",
    "UnbilledTimeSummary",
    "summarize_unbilled_time",
    "value_time_entry",
    "MonthlyBucket",
    "build_monthly_trend",
]
