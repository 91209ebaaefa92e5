"""Tests for bundle discount evaluation."""

from __future__ import annotations

from decimal import Decimal

from tripquote.models import BundleDiscount, MarkupType, ServiceCategory
from tripquote.services import bundle_service

TRANSPORT = ServiceCategory.TRANSPORT
HOTEL = ServiceCategory.HOTEL
SIGHTSEEING = ServiceCategory.SIGHTSEEING
RESTAURANT = ServiceCategory.RESTAURANT


def test_no_bundle_for_single_category() -> None:
    assert bundle_service.evaluate_bundles({HOTEL}) == []


def test_transport_and_hotel_bundle() -> None:
    discounts = bundle_service.evaluate_bundles({TRANSPORT, HOTEL})
    assert [(d.value, d.description) for d in discounts] == [
        (Decimal("5"), "Transport + Accommodation Bundle")
    ]


def test_complete_package_stacks_with_transport_hotel() -> None:
    discounts = bundle_service.evaluate_bundles(
        [TRANSPORT, HOTEL, SIGHTSEEING, RESTAURANT, ServiceCategory.INSURANCE]
    )
    assert [d.description for d in discounts] == [
        "Transport + Accommodation Bundle",
        "Complete Package Bundle",
    ]
    total = sum(
        bundle_service.discount_amount(d, Decimal("20000")) for d in discounts
    )
    assert total == Decimal("3000.00")


def test_three_of_four_does_not_unlock_complete_package() -> None:
    discounts = bundle_service.evaluate_bundles({TRANSPORT, HOTEL, SIGHTSEEING})
    assert len(discounts) == 1


def test_fixed_discount_amount() -> None:
    discount = BundleDiscount(
        type=MarkupType.FIXED, value=Decimal("250"), description="Loyalty"
    )
    assert bundle_service.discount_amount(discount, Decimal("99999")) == Decimal("250.00")
