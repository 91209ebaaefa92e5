"""Bundle discounts unlocked by combinations of selected categories."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from tripquote.models.pricing import (
    BundleDiscount,
    MarkupType,
    ServiceCategory,
    ZERO,
    to_money,
)

# Every rule whose categories are all selected fires; rules stack.
BUNDLE_RULES: tuple[tuple[frozenset[ServiceCategory], BundleDiscount], ...] = (
    (
        frozenset({ServiceCategory.TRANSPORT, ServiceCategory.HOTEL}),
        BundleDiscount(
            type=MarkupType.PERCENTAGE,
            value=Decimal("5"),
            description="Transport + Accommodation Bundle",
        ),
    ),
    (
        frozenset(
            {
                ServiceCategory.TRANSPORT,
                ServiceCategory.HOTEL,
                ServiceCategory.SIGHTSEEING,
                ServiceCategory.RESTAURANT,
            }
        ),
        BundleDiscount(
            type=MarkupType.PERCENTAGE,
            value=Decimal("10"),
            description="Complete Package Bundle",
        ),
    ),
)


def evaluate_bundles(categories: Iterable[ServiceCategory]) -> list[BundleDiscount]:
    """Return the discounts qualified for by the selected categories."""
    selected = frozenset(categories)
    return [discount for required, discount in BUNDLE_RULES if required <= selected]


def discount_amount(
    discount: BundleDiscount, subtotal: Decimal
) -> Decimal:
    """Evaluate one discount against the pre-discount subtotal."""
    if discount.type is MarkupType.PERCENTAGE:
        return to_money(subtotal * discount.value / Decimal("100"))
    return max(ZERO, to_money(discount.value))
