"""Pricing aggregator: turns a proposal selection into a quote breakdown."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal

from tripquote.core.errors import (
    ADVANCE_BOOKING_DATE_MISSING,
    CURRENCY_MISMATCH,
    STAFF_EDIT_NOT_ALLOWED,
    ConfigurationError,
    DataIntegrityWarning,
    InvalidInputError,
)
from tripquote.models.pricing import (
    DiscountLine,
    DynamicPricingFlags,
    LineItem,
    ManualAdjustment,
    MarkupType,
    PaxDetails,
    PricingBreakdown,
    PricingSettings,
    QuoteOptions,
    QuoteSnapshot,
    ServiceCategory,
    TaxTable,
    TripContext,
    ZERO,
    to_money,
)
from tripquote.services import (
    bundle_service,
    currency_service,
    dynamic_pricing_service,
    markup_service,
    pax_service,
    tax_service,
)

logger = logging.getLogger(__name__)

_CATEGORY_ORDER = {category: index for index, category in enumerate(ServiceCategory)}


def aggregate(
    line_items: Sequence[LineItem],
    trip: TripContext,
    pax: PaxDetails,
    settings: PricingSettings | None,
    flags: DynamicPricingFlags | None = None,
    *,
    options: QuoteOptions | None = None,
    tax_table: TaxTable | None = None,
) -> PricingBreakdown:
    """Produce a pricing breakdown for the given selection.

    Pure function of its arguments: no clock, no I/O, no shared state. Inputs
    are assumed to have passed :func:`validate_snapshot`.
    """

    if settings is None:
        raise ConfigurationError("Pricing settings unavailable")
    flags = flags or DynamicPricingFlags()
    options = options or QuoteOptions()
    warnings: list[DataIntegrityWarning] = []

    currency, currency_warning = currency_service.resolve_currency(
        trip.country,
        configured=trip.currency,
        default_code=options.default_currency,
    )
    if currency_warning is not None:
        warnings.append(currency_warning)
    for item in line_items:
        if item.currency.strip().upper() != currency.code:
            warnings.append(
                _warn(
                    CURRENCY_MISMATCH,
                    f"Line item {item.id} is priced in {item.currency}, "
                    f"quoted as {currency.code} without conversion",
                )
            )

    if flags.advance_booking and options.as_of is None:
        warnings.append(
            _warn(
                ADVANCE_BOOKING_DATE_MISSING,
                "Advance booking requested without a reference date; skipped",
            )
        )

    adjusted_prices: dict[str, Decimal] = {}
    category_subtotals: dict[ServiceCategory, Decimal] = {}
    for item in line_items:
        if flags.enabled:
            price = dynamic_pricing_service.apply_dynamic_pricing(
                item.base_price, trip, pax, flags, as_of=options.as_of
            )
        else:
            price = to_money(item.base_price)
        adjusted_prices[item.id] = price
        logger.debug(
            "Line item %s (%s, %s): %s -> %s",
            item.id,
            item.category.value,
            item.description or "no description",
            item.base_price,
            price,
        )
        category_subtotals[item.category] = (
            category_subtotals.get(item.category, ZERO) + price
        )
    category_subtotals = dict(
        sorted(category_subtotals.items(), key=lambda pair: _CATEGORY_ORDER[pair[0]])
    )
    subtotal = sum(adjusted_prices.values(), ZERO)

    markup = markup_service.compute_markup(
        subtotal, settings, country=trip.country, billable_pax=pax.billable_pax
    )
    if markup.warning is not None:
        warnings.append(markup.warning)

    discount_lines = [
        DiscountLine(
            description=discount.description,
            amount=bundle_service.discount_amount(discount, subtotal),
        )
        for discount in bundle_service.evaluate_bundles(category_subtotals)
    ]
    if options.manual_adjustment is not None:
        if settings.allow_staff_pricing_edit:
            discount_lines.append(
                _manual_discount(options.manual_adjustment, subtotal)
            )
        else:
            warnings.append(
                _warn(
                    STAFF_EDIT_NOT_ALLOWED,
                    "Manual adjustment ignored: staff pricing edits are disabled",
                )
            )
    discount_total = sum((line.amount for line in discount_lines), ZERO)

    pre_tax = max(ZERO, subtotal + markup.markup_amount - discount_total)

    if options.tax_by_service and not options.tax_exempt:
        tax = tax_service.compute_service_taxes(
            allocate(pre_tax, category_subtotals),
            trip.country,
            table=tax_table,
            inclusive=options.tax_inclusive,
            tds=options.tds,
        )
    else:
        tax = tax_service.compute_tax(
            pre_tax,
            trip.country,
            options.service_type,
            options.tax_exempt,
            table=tax_table,
            inclusive=options.tax_inclusive,
            tds=options.tds,
        )
    if tax.warning is not None:
        warnings.append(tax.warning)
    final_price = to_money(tax.total_amount)

    split = None
    grand_total = final_price
    if options.split_adult_child:
        split = pax_service.split_by_pax(
            final_price, pax, options.child_discount_percent
        )
        grand_total = final_price - split.child_discount

    breakdown = PricingBreakdown(
        base_price=to_money(subtotal),
        markup=markup.markup_amount,
        markup_basis=markup.basis_description,
        discounts=to_money(discount_total),
        discount_lines=tuple(discount_lines),
        taxes=to_money(tax.tax_amount),
        tax_rate=tax.rate_applied,
        tax_lines=tax.lines,
        final_price=final_price,
        currency=currency.code,
        currency_symbol=currency.symbol,
        per_person=pax_service.per_person(final_price, pax),
        grand_total=to_money(grand_total),
        per_category_totals=allocate(final_price, category_subtotals),
        adjusted_prices=adjusted_prices,
        pax_split=split,
        warnings=tuple(warnings),
        tds_amount=tax.tds_amount,
        amount_after_tds=to_money(final_price - tax.tds_amount),
    )
    logger.debug(
        "Quoted %d line item(s): subtotal=%s markup=%s discounts=%s tax=%s final=%s %s",
        len(line_items),
        breakdown.base_price,
        breakdown.markup,
        breakdown.discounts,
        breakdown.taxes,
        breakdown.final_price,
        breakdown.currency,
    )
    return breakdown


def aggregate_snapshot(snapshot: QuoteSnapshot) -> PricingBreakdown:
    """Recompute entry point for callers holding a consistent input snapshot."""
    return aggregate(
        snapshot.line_items,
        snapshot.trip,
        snapshot.pax,
        snapshot.settings,
        snapshot.flags,
        options=snapshot.options,
        tax_table=snapshot.tax_table,
    )


def validate_snapshot(snapshot: QuoteSnapshot) -> None:
    """Reject inputs the aggregator does not accept."""

    seen: set[str] = set()
    for item in snapshot.line_items:
        if not item.id:
            raise InvalidInputError("Line items require an id")
        if item.id in seen:
            raise InvalidInputError(f"Duplicate line item id {item.id!r}")
        seen.add(item.id)
        if Decimal(item.base_price) < 0:
            raise InvalidInputError(f"Line item {item.id!r} has a negative price")

    pax = snapshot.pax
    if min(pax.adults, pax.children, pax.infants) < 0:
        raise InvalidInputError("Traveller counts cannot be negative")

    trip = snapshot.trip
    if trip.travel_end < trip.travel_start:
        raise InvalidInputError("Travel end date precedes travel start date")
    if trip.trip_days < 1:
        raise InvalidInputError("Trip must last at least one day")

    options = snapshot.options
    if not ZERO <= Decimal(options.child_discount_percent) <= Decimal("100"):
        raise InvalidInputError("Child discount must be between 0 and 100 percent")
    adjustment = options.manual_adjustment
    if adjustment is not None and Decimal(adjustment.value) < 0:
        raise InvalidInputError("Manual adjustment cannot be negative")
    tds = options.tds
    if tds is not None and not ZERO <= Decimal(tds.rate) <= Decimal("100"):
        raise InvalidInputError("TDS rate must be between 0 and 100 percent")


def allocate(
    total: Decimal, weights: Mapping[ServiceCategory, Decimal]
) -> dict[ServiceCategory, Decimal]:
    """Spread ``total`` across categories in proportion to their weights.

    Shares are rounded to money; the rounding residual goes to the heaviest
    category (earliest in enum order on ties) so shares sum to ``total``.
    """

    weight_sum = sum(weights.values(), ZERO)
    if weight_sum <= 0:
        return {category: ZERO for category in weights}

    shares = {
        category: to_money(total * weight / weight_sum)
        for category, weight in weights.items()
    }
    residual = to_money(total) - sum(shares.values(), ZERO)
    if residual:
        heaviest = min(
            weights, key=lambda category: (-weights[category], _CATEGORY_ORDER[category])
        )
        shares[heaviest] += residual
    return shares


def _manual_discount(adjustment: ManualAdjustment, subtotal: Decimal) -> DiscountLine:
    if adjustment.type is MarkupType.PERCENTAGE:
        amount = to_money(subtotal * adjustment.value / Decimal("100"))
    else:
        amount = to_money(adjustment.value)
    label = "Staff adjustment"
    if adjustment.reason:
        label = f"{label}: {adjustment.reason}"
    return DiscountLine(description=label, amount=max(ZERO, amount))


def _warn(code: str, message: str) -> DataIntegrityWarning:
    warning = DataIntegrityWarning(code, message)
    logger.warning("%s", warning)
    return warning
