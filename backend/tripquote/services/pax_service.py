"""Adult/child allocation of a quoted total."""

from __future__ import annotations

from decimal import Decimal

from tripquote.models.pricing import PaxDetails, PaxSplit, ZERO, to_money


def split_by_pax(
    total: Decimal,
    pax: PaxDetails,
    child_discount_percent: Decimal = Decimal("0"),
) -> PaxSplit:
    """Split ``total`` between adults and children.

    Children pay the per-head price less their discount. The discount is not
    passed on to adults, so it lowers the amount actually collected.
    """

    billable = pax.billable_pax
    if billable <= 0:
        return PaxSplit(
            adult_share=ZERO, child_share=ZERO, per_adult=ZERO, per_child=ZERO
        )

    total = Decimal(total)
    per_head = total / billable
    child_base = per_head * pax.children
    child_discount = child_base * Decimal(child_discount_percent) / Decimal("100")
    child_share = child_base - child_discount
    adult_share = total - child_base

    per_adult = adult_share / pax.adults if pax.adults > 0 else ZERO
    per_child = child_share / pax.children if pax.children > 0 else ZERO

    return PaxSplit(
        adult_share=to_money(adult_share),
        child_share=to_money(child_share),
        per_adult=to_money(per_adult),
        per_child=to_money(per_child),
        child_discount=to_money(child_discount),
    )


def per_person(total: Decimal, pax: PaxDetails) -> Decimal:
    """Blended price per billable traveller; zero when nobody is billable."""
    if pax.billable_pax <= 0:
        return ZERO
    return to_money(Decimal(total) / pax.billable_pax)
