"""Tests for the markup engine."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tripquote.core.errors import MARKUP_SLAB_UNMATCHED, ConfigurationError
from tripquote.models import (
    CountryMarkupRule,
    MarkupSlab,
    MarkupTier,
    MarkupType,
    PricingSettings,
)
from tripquote.services import markup_service


def test_flat_percentage_markup(flat_settings: PricingSettings) -> None:
    result = markup_service.compute_markup(Decimal("12500"), flat_settings)
    assert result.markup_amount == Decimal("1250.00")
    assert result.basis_description == "Default markup 10%"
    assert result.slab is None


def test_missing_settings_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        markup_service.compute_markup(Decimal("100"), None)


def test_slab_boundary_goes_to_first_slab(slab_settings: PricingSettings) -> None:
    result = markup_service.compute_markup(Decimal("10000"), slab_settings)
    assert result.slab is slab_settings.markup_slabs[0]
    assert result.markup_amount == Decimal("800.00")


def test_slab_above_boundary_uses_second_slab(slab_settings: PricingSettings) -> None:
    result = markup_service.compute_markup(Decimal("20000"), slab_settings)
    assert result.slab is slab_settings.markup_slabs[1]
    assert result.markup_amount == Decimal("1200.00")


def test_fixed_slab_markup() -> None:
    settings = PricingSettings(
        use_slab_pricing=True,
        markup_slabs=(
            MarkupSlab(
                min_amount=Decimal("0"),
                max_amount=Decimal("15000"),
                markup_type=MarkupType.FIXED,
                markup_value=Decimal("500"),
            ),
        ),
    )
    result = markup_service.compute_markup(Decimal("10800"), settings)
    assert result.markup_amount == Decimal("500.00")
    assert "fixed 500.00" in result.basis_description


def test_unmatched_subtotal_yields_zero_markup(slab_settings: PricingSettings) -> None:
    result = markup_service.compute_markup(Decimal("75000"), slab_settings)
    assert result.markup_amount == Decimal("0")
    assert result.warning is not None
    assert result.warning.code == MARKUP_SLAB_UNMATCHED


def test_inactive_slabs_are_skipped() -> None:
    slabs = (
        MarkupSlab(
            min_amount=Decimal("0"),
            max_amount=Decimal("5000"),
            markup_type=MarkupType.PERCENTAGE,
            markup_value=Decimal("20"),
            is_active=False,
        ),
        MarkupSlab(
            min_amount=Decimal("0"),
            max_amount=Decimal("5000"),
            markup_type=MarkupType.PERCENTAGE,
            markup_value=Decimal("5"),
        ),
    )
    assert markup_service.select_slab(Decimal("1000"), slabs) is slabs[1]


def test_markup_is_never_negative() -> None:
    settings = PricingSettings(default_markup_percentage=Decimal("-5"))
    result = markup_service.compute_markup(Decimal("1000"), settings)
    assert result.markup_amount == Decimal("0")


def _country_settings(*rules: CountryMarkupRule) -> PricingSettings:
    return PricingSettings(default_markup_percentage=Decimal("10"), country_rules=rules)


def test_country_rule_takes_precedence_with_tier() -> None:
    settings = _country_settings(
        CountryMarkupRule(
            country="TH",
            markup_type=MarkupType.PERCENTAGE,
            default_markup=Decimal("15"),
            tier=MarkupTier.PREMIUM,
        )
    )
    result = markup_service.compute_markup(
        Decimal("10000"), settings, country="Thailand", billable_pax=2
    )
    assert result.markup_amount == Decimal("1800.00")
    assert result.basis_description == "Country rule TH (premium): 15%"


def test_fixed_country_rule_is_charged_per_traveller() -> None:
    settings = _country_settings(
        CountryMarkupRule(
            country="in",
            markup_type=MarkupType.FIXED,
            default_markup=Decimal("500"),
            tier=MarkupTier.BUDGET,
            seasonal_adjustment=Decimal("10"),
        )
    )
    result = markup_service.compute_markup(
        Decimal("10000"), settings, country="IN", billable_pax=3
    )
    # 500 x 3 travellers x 0.8 budget x 1.10 season
    assert result.markup_amount == Decimal("1320.00")


@pytest.mark.parametrize(
    ("tier", "expected"),
    [
        (MarkupTier.BUDGET, "80.00"),
        (MarkupTier.STANDARD, "100.00"),
        (MarkupTier.PREMIUM, "120.00"),
        (MarkupTier.LUXURY, "150.00"),
    ],
)
def test_tier_multipliers(tier, expected) -> None:
    settings = _country_settings(
        CountryMarkupRule(
            country="AE",
            markup_type=MarkupType.PERCENTAGE,
            default_markup=Decimal("10"),
            tier=tier,
        )
    )
    result = markup_service.compute_markup(Decimal("1000"), settings, country="AE")
    assert result.markup_amount == Decimal(expected)


def test_inactive_or_other_country_rules_fall_back() -> None:
    settings = _country_settings(
        CountryMarkupRule(
            country="TH",
            markup_type=MarkupType.PERCENTAGE,
            default_markup=Decimal("30"),
            is_active=False,
        ),
        CountryMarkupRule(
            country="SG",
            markup_type=MarkupType.PERCENTAGE,
            default_markup=Decimal("30"),
        ),
    )
    result = markup_service.compute_markup(Decimal("1000"), settings, country="TH")
    assert result.markup_amount == Decimal("100.00")
    assert result.basis_description == "Default markup 10%"
