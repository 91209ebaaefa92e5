"""Tests for quote currency resolution and formatting."""

from __future__ import annotations

from decimal import Decimal

from tripquote.core.errors import CURRENCY_UNKNOWN
from tripquote.services import currency_service


def test_configured_currency_is_authoritative() -> None:
    info, warning = currency_service.resolve_currency("JP", configured="thb")
    assert info.code == "THB"
    assert info.symbol == "฿"
    assert warning is None


def test_currency_from_country_name() -> None:
    info, warning = currency_service.resolve_currency("Japan")
    assert info.code == "JPY"
    assert warning is None


def test_unknown_country_falls_back_with_warning() -> None:
    info, warning = currency_service.resolve_currency("Atlantis", default_code="eur")
    assert info.code == "EUR"
    assert info.symbol == "€"
    assert warning is not None
    assert warning.code == CURRENCY_UNKNOWN


def test_unknown_code_is_its_own_symbol() -> None:
    assert currency_service.currency_symbol("xyz") == "XYZ"


def test_format_money() -> None:
    assert currency_service.format_money(Decimal("12091"), "THB") == "฿12,091.00"
    assert currency_service.format_money(Decimal("150000.5"), "JPY") == "¥150,001"
