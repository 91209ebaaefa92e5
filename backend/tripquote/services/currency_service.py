"""Currency resolution and display formatting (no conversion)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from tripquote.core.errors import CURRENCY_UNKNOWN, DataIntegrityWarning
from tripquote.data.currencies import (
    COUNTRY_CURRENCIES,
    CURRENCY_SYMBOLS,
    ZERO_DECIMAL_CURRENCIES,
    country_code,
)
from tripquote.models.pricing import to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurrencyInfo:
    code: str
    symbol: str


def currency_symbol(code: str) -> str:
    """Return the display symbol for a currency, or the code itself."""
    normalized = code.strip().upper()
    return CURRENCY_SYMBOLS.get(normalized, normalized)


def resolve_currency(
    country: str,
    *,
    configured: str | None = None,
    default_code: str = "USD",
) -> tuple[CurrencyInfo, DataIntegrityWarning | None]:
    """Pick the quote currency.

    A configured trip currency is authoritative. Otherwise the currency of the
    destination country is used, falling back to ``default_code``.
    """

    if configured:
        code = configured.strip().upper()
        return CurrencyInfo(code=code, symbol=currency_symbol(code)), None

    iso = country_code(country or "")
    if iso is not None:
        code = COUNTRY_CURRENCIES[iso]
        return CurrencyInfo(code=code, symbol=currency_symbol(code)), None

    fallback = default_code.strip().upper()
    warning = DataIntegrityWarning(
        CURRENCY_UNKNOWN,
        f"No currency known for country {country!r}; using {fallback}",
    )
    logger.warning("%s", warning)
    return CurrencyInfo(code=fallback, symbol=currency_symbol(fallback)), warning


def format_money(amount: Decimal, code: str) -> str:
    """Render an amount for client documents, e.g. ``฿12,091.00``."""
    normalized = code.strip().upper()
    symbol = currency_symbol(normalized)
    if normalized in ZERO_DECIMAL_CURRENCIES:
        whole = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"{symbol}{whole:,f}"
    return f"{symbol}{to_money(amount):,.2f}"
