"""Seasonal, group-size and advance-booking adjustments for line items."""

from __future__ import annotations

import datetime
from decimal import Decimal

from tripquote.models.pricing import (
    DynamicPricingFlags,
    PaxDetails,
    TripContext,
    to_money,
)

ONE = Decimal("1")

# Zero-based month indices.
PEAK_MONTHS = frozenset({11, 0, 1})
LOW_MONTHS = frozenset({4, 5, 8, 9})

PEAK_MULTIPLIER = Decimal("1.20")
LOW_MULTIPLIER = Decimal("0.85")

# (minimum billable pax, multiplier), largest threshold first
GROUP_TIERS: tuple[tuple[int, Decimal], ...] = (
    (6, Decimal("0.90")),
    (4, Decimal("0.95")),
)

# (minimum days before travel, multiplier), largest threshold first
ADVANCE_TIERS: tuple[tuple[int, Decimal], ...] = (
    (60, Decimal("0.90")),
    (30, Decimal("0.95")),
)


def group_multiplier(pax: PaxDetails) -> Decimal:
    billable = pax.billable_pax
    for threshold, multiplier in GROUP_TIERS:
        if billable >= threshold:
            return multiplier
    return ONE


def seasonal_multiplier(trip: TripContext) -> Decimal:
    month = trip.travel_month
    if month in PEAK_MONTHS:
        return PEAK_MULTIPLIER
    if month in LOW_MONTHS:
        return LOW_MULTIPLIER
    return ONE


def advance_booking_multiplier(
    trip: TripContext, as_of: datetime.date
) -> Decimal:
    days_ahead = (trip.travel_start - as_of).days
    for threshold, multiplier in ADVANCE_TIERS:
        if days_ahead >= threshold:
            return multiplier
    return ONE


def demand_multiplier() -> Decimal:
    # No demand rules are defined; the flag passes prices through.
    return ONE


def apply_dynamic_pricing(
    price: Decimal,
    trip: TripContext,
    pax: PaxDetails,
    flags: DynamicPricingFlags,
    *,
    as_of: datetime.date | None,
) -> Decimal:
    """Adjust one line-item price.

    Multipliers apply to the running price in a fixed order: group size,
    season, then advance booking. Rounding happens once, at the end. The
    advance-booking step is skipped when ``as_of`` is not supplied.
    """

    running = Decimal(price)
    if flags.group_discount:
        running *= group_multiplier(pax)
    if flags.seasonal:
        running *= seasonal_multiplier(trip)
    if flags.advance_booking and as_of is not None:
        running *= advance_booking_multiplier(trip, as_of)
    if flags.demand:
        running *= demand_multiplier()
    return to_money(running)
