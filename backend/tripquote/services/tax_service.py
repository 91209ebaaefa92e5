"""Destination and service-type specific tax calculation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Mapping

from tripquote.core.errors import TAX_RULE_MISSING, DataIntegrityWarning
from tripquote.data.currencies import country_code
from tripquote.data.tax_rates import DEFAULT_TAX_NAME, TAX_NAMES, TAX_RATES
from tripquote.models.pricing import (
    ServiceCategory,
    TaxLine,
    TaxRule,
    TaxTable,
    TdsConfig,
    ZERO,
    to_money,
)

logger = logging.getLogger(__name__)

ALL_SERVICES = "all"
_HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class TaxResult:
    """Outcome of a tax computation."""

    tax_amount: Decimal
    total_amount: Decimal
    rate_applied: Decimal
    description: str
    lines: tuple[TaxLine, ...] = ()
    warning: DataIntegrityWarning | None = None
    tds_amount: Decimal = ZERO


@lru_cache(maxsize=1)
def default_tax_table() -> TaxTable:
    """Build the advisory table shipped with the service."""
    rules: list[TaxRule] = []
    for iso, rates in TAX_RATES.items():
        name = TAX_NAMES.get(iso, DEFAULT_TAX_NAME)
        for service_type, rate in rates.items():
            rules.append(
                TaxRule(
                    country=iso,
                    service_type=service_type,
                    rate=Decimal(rate),
                    description=f"{name} {rate}%",
                    is_default=service_type == ALL_SERVICES,
                )
            )
    return TaxTable(rules=tuple(rules))


def find_rule(
    table: TaxTable, country: str, service_type: str
) -> TaxRule | None:
    """Look up a rate for the exact service type, then the country default.

    Countries may be given by ISO code or by name.
    """

    candidates = _country_rules(table, country)
    wanted = service_type.strip().lower()
    for rule in candidates:
        if rule.service_type.strip().lower() == wanted:
            return rule
    for rule in candidates:
        if rule.is_default or rule.service_type.strip().lower() == ALL_SERVICES:
            return rule
    return None


def compute_tax(
    amount: Decimal,
    country: str,
    service_type: str = ALL_SERVICES,
    is_exempt: bool = False,
    *,
    table: TaxTable | None = None,
    inclusive: bool = False,
    tds: TdsConfig | None = None,
) -> TaxResult:
    """Compute tax on ``amount``.

    Unknown country/service combinations resolve to zero tax rather than an
    error. With ``inclusive`` the amount already contains the tax, which is
    extracted instead of added. TDS is reported separately and does not
    change the total.
    """

    base = max(ZERO, Decimal(amount))
    tds_amount = compute_tds(base, tds)
    if is_exempt:
        return TaxResult(
            tax_amount=ZERO,
            total_amount=to_money(base),
            rate_applied=ZERO,
            description="Tax exempt",
            tds_amount=tds_amount,
        )

    rule = find_rule(table or default_tax_table(), country, service_type)
    if rule is None:
        warning = DataIntegrityWarning(
            TAX_RULE_MISSING,
            f"No tax rule for {country!r}/{service_type!r}; tax set to zero",
        )
        logger.warning("%s", warning)
        return TaxResult(
            tax_amount=ZERO,
            total_amount=to_money(base),
            rate_applied=ZERO,
            description="No applicable tax",
            warning=warning,
            tds_amount=tds_amount,
        )

    rate = Decimal(rule.rate)
    description = rule.description or f"Tax {rate}%"
    if inclusive:
        net = base / (1 + rate / _HUNDRED)
        tax_amount = to_money(base - net)
        total = to_money(base)
    else:
        tax_amount = to_money(base * rate / _HUNDRED)
        total = to_money(base) + tax_amount
    return TaxResult(
        tax_amount=tax_amount,
        total_amount=max(ZERO, total),
        rate_applied=rate,
        description=description,
        lines=(TaxLine(description=description, rate=rate, amount=tax_amount),),
        tds_amount=tds_amount,
    )


def compute_service_taxes(
    amounts: Mapping[ServiceCategory, Decimal],
    country: str,
    *,
    table: TaxTable | None = None,
    inclusive: bool = False,
    tds: TdsConfig | None = None,
) -> TaxResult:
    """Apply each category's own rate and itemize one line per category."""

    lines: list[TaxLine] = []
    tax_total = ZERO
    base_total = ZERO
    warning: DataIntegrityWarning | None = None
    for category, amount in amounts.items():
        result = compute_tax(
            amount,
            country,
            category.value,
            table=table,
            inclusive=inclusive,
        )
        warning = warning or result.warning
        tax_total += result.tax_amount
        base_total += to_money(max(ZERO, Decimal(amount)))
        lines.append(
            TaxLine(
                description=f"{category.value}: {result.description}",
                rate=result.rate_applied,
                amount=result.tax_amount,
            )
        )

    effective_rate = ZERO
    net = base_total - tax_total if inclusive else base_total
    if net > 0:
        effective_rate = to_money(tax_total * _HUNDRED / net)
    total = base_total if inclusive else base_total + tax_total
    return TaxResult(
        tax_amount=tax_total,
        total_amount=total,
        rate_applied=effective_rate,
        description="Per-service tax",
        lines=tuple(lines),
        warning=warning,
        tds_amount=compute_tds(base_total, tds),
    )


def compute_tds(amount: Decimal, config: TdsConfig | None) -> Decimal:
    """Tax the client deducts at source once ``amount`` reaches the threshold."""
    if config is None or not config.is_applicable:
        return ZERO
    base = max(ZERO, Decimal(amount))
    if base < Decimal(config.threshold):
        return ZERO
    return to_money(base * Decimal(config.rate) / _HUNDRED)


def _country_rules(table: TaxTable, country: str) -> tuple[TaxRule, ...]:
    rules = table.for_country(country)
    if rules:
        return rules
    iso = country_code(country or "")
    if iso is None:
        return ()
    return table.for_country(iso)
