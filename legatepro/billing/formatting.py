from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

DEFAULT_CURRENCY = "USD"
CURRENCY_SYMBOLS = {"USD": "$", "CAD": "$", "AUD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
# Amounts are stored in hundredths for every currency; these display whole units.
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})


def normalize_currency(currency: str | None, fallback: str = DEFAULT_CURRENCY) -> str:
    if isinstance(currency, str) and currency.strip():
        return currency.strip().upper()
    return fallback


def format_money(cents: int | None, currency: str | None = DEFAULT_CURRENCY) -> str:
    """Format integer cents with a currency symbol, e.g. "$1,234.56".

    Codes without a known symbol are prefixed with the code: "CHF 10.00".
    Zero-decimal currencies round half-up to whole units: "¥1,235".
    """
    amount = Decimal(int(cents or 0)) / 100
    sign = "-" if amount < 0 else ""
    code = normalize_currency(currency)
    symbol = CURRENCY_SYMBOLS.get(code)
    prefix = symbol if symbol is not None else f"{code} "
    if code in ZERO_DECIMAL_CURRENCIES:
        whole = abs(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"{sign if whole else ''}{prefix}{whole:,.0f}"
    return f"{sign}{prefix}{abs(amount):,.2f}"


def minutes_to_hours(minutes: float | int | None) -> float:
    if not minutes:
        return 0.0
    return round(float(minutes) / 60, 2)
