"""Markup engine: destination rules, flat percentage or amount-range slabs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from tripquote.core.errors import (
    MARKUP_SLAB_UNMATCHED,
    ConfigurationError,
    DataIntegrityWarning,
)
from tripquote.data.currencies import country_code
from tripquote.models.pricing import (
    CountryMarkupRule,
    MarkupSlab,
    MarkupTier,
    MarkupType,
    PricingSettings,
    ZERO,
    to_money,
)

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")

TIER_MULTIPLIERS: dict[MarkupTier, Decimal] = {
    MarkupTier.BUDGET: Decimal("0.8"),
    MarkupTier.STANDARD: Decimal("1"),
    MarkupTier.PREMIUM: Decimal("1.2"),
    MarkupTier.LUXURY: Decimal("1.5"),
}


@dataclass(frozen=True, slots=True)
class MarkupResult:
    """Markup amount with a human-readable account of how it was derived."""

    markup_amount: Decimal
    basis_description: str
    slab: MarkupSlab | None = None
    warning: DataIntegrityWarning | None = None


def select_slab(subtotal: Decimal, slabs: Iterable[MarkupSlab]) -> MarkupSlab | None:
    """Return the first active slab whose inclusive range holds ``subtotal``."""
    for slab in slabs:
        if slab.is_active and slab.contains(subtotal):
            return slab
    return None


def select_country_rule(
    country: str, rules: Iterable[CountryMarkupRule]
) -> CountryMarkupRule | None:
    """Return the first active rule for ``country`` (ISO code or name)."""
    wanted = _normalize_country(country)
    if wanted is None:
        return None
    for rule in rules:
        if rule.is_active and _normalize_country(rule.country) == wanted:
            return rule
    return None


def compute_markup(
    subtotal: Decimal,
    settings: PricingSettings | None,
    *,
    country: str | None = None,
    billable_pax: int = 0,
) -> MarkupResult:
    """Convert a subtotal into a markup amount.

    An active country rule for the destination wins over the flat
    percentage and the slabs.
    """

    if settings is None:
        raise ConfigurationError("Pricing settings are required to compute markup")

    if country and settings.country_rules:
        rule = select_country_rule(country, settings.country_rules)
        if rule is not None:
            return _country_markup(subtotal, rule, billable_pax)

    if not settings.use_slab_pricing:
        percent = Decimal(settings.default_markup_percentage)
        amount = subtotal * percent / _HUNDRED
        return MarkupResult(
            markup_amount=_non_negative(amount),
            basis_description=f"Default markup {_fmt(percent)}%",
        )

    slab = select_slab(subtotal, settings.markup_slabs)
    if slab is None:
        warning = DataIntegrityWarning(
            MARKUP_SLAB_UNMATCHED,
            f"No active markup slab covers {to_money(subtotal)}; markup set to zero",
        )
        logger.warning("%s", warning)
        return MarkupResult(
            markup_amount=ZERO,
            basis_description="No matching markup slab",
            warning=warning,
        )

    bracket = f"{to_money(slab.min_amount)}-{to_money(slab.max_amount)}"
    if slab.markup_type is MarkupType.FIXED:
        return MarkupResult(
            markup_amount=_non_negative(slab.markup_value),
            basis_description=f"Slab {bracket}: fixed {to_money(slab.markup_value)}",
            slab=slab,
        )
    amount = subtotal * slab.markup_value / _HUNDRED
    return MarkupResult(
        markup_amount=_non_negative(amount),
        basis_description=f"Slab {bracket}: {_fmt(slab.markup_value)}%",
        slab=slab,
    )


def _country_markup(
    subtotal: Decimal, rule: CountryMarkupRule, billable_pax: int
) -> MarkupResult:
    if rule.markup_type is MarkupType.FIXED:
        amount = Decimal(rule.default_markup) * max(billable_pax, 0)
        basis = f"{to_money(rule.default_markup)} per traveller"
    else:
        amount = subtotal * Decimal(rule.default_markup) / _HUNDRED
        basis = f"{_fmt(rule.default_markup)}%"
    amount *= TIER_MULTIPLIERS[rule.tier]
    if rule.seasonal_adjustment:
        amount *= 1 + Decimal(rule.seasonal_adjustment) / _HUNDRED
    return MarkupResult(
        markup_amount=_non_negative(amount),
        basis_description=(
            f"Country rule {_normalize_country(rule.country)} "
            f"({rule.tier.value}): {basis}"
        ),
    )


def _normalize_country(country: str) -> str | None:
    key = country.strip()
    if not key:
        return None
    return country_code(key) or key.upper()


def _non_negative(amount: Decimal) -> Decimal:
    return max(ZERO, to_money(amount))


def _fmt(value: Decimal) -> str:
    return format(Decimal(value).normalize(), "f")
