"""Pricing value types export."""

from tripquote.models.pricing import (
    BundleDiscount,
    CountryMarkupRule,
    DiscountLine,
    DynamicPricingFlags,
    LineItem,
    ManualAdjustment,
    MarkupSlab,
    MarkupTier,
    MarkupType,
    PaxDetails,
    PaxSplit,
    PricingBreakdown,
    PricingSettings,
    QuantityContext,
    QuoteOptions,
    QuoteSnapshot,
    ServiceCategory,
    TaxLine,
    TaxRule,
    TaxTable,
    TdsConfig,
    TripContext,
)

__all__ = [
    "BundleDiscount",
    "CountryMarkupRule",
    "DiscountLine",
    "DynamicPricingFlags",
    "LineItem",
    "ManualAdjustment",
    "MarkupSlab",
    "MarkupTier",
    "MarkupType",
    "PaxDetails",
    "PaxSplit",
    "PricingBreakdown",
    "PricingSettings",
    "QuantityContext",
    "QuoteOptions",
    "QuoteSnapshot",
    "ServiceCategory",
    "TaxLine",
    "TaxRule",
    "TaxTable",
    "TdsConfig",
    "TripContext",
]
