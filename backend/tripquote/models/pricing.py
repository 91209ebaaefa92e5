"""Value types flowing through the pricing core."""

from __future__ import annotations

import dataclasses
import datetime
import enum
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from tripquote.core.errors import DataIntegrityWarning

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize a value to two decimal places, rounding half-up."""
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def money_str(value: Decimal) -> str:
    return f"{to_money(value):.2f}"


class ServiceCategory(str, enum.Enum):
    """Kinds of bookable services a proposal can contain."""

    TRANSPORT = "transport"
    HOTEL = "hotel"
    SIGHTSEEING = "sightseeing"
    RESTAURANT = "restaurant"
    INSURANCE = "insurance"
    TECHNOLOGY = "technology"
    LUXURY = "luxury"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    AIRPORT = "airport"
    ADDITIONAL = "additional"


class MarkupType(str, enum.Enum):
    """How a slab, discount or adjustment value is interpreted."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class MarkupTier(str, enum.Enum):
    """Product tier of a destination, scaling its country markup."""

    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


@dataclass(frozen=True, slots=True)
class QuantityContext:
    pax: int | None = None
    nights: int | None = None
    days: int | None = None


@dataclass(frozen=True, slots=True)
class LineItem:
    """One selected service with its catalog-resolved base price."""

    id: str
    category: ServiceCategory
    base_price: Decimal
    currency: str
    quantity_context: QuantityContext | None = None
    description: str = ""

    def replace(self, **changes: Any) -> LineItem:
        """Return an edited copy; line items are never mutated in place."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True, slots=True)
class PaxDetails:
    """Traveller counts. Infants are carried but never billed."""

    adults: int = 0
    children: int = 0
    infants: int = 0

    @property
    def billable_pax(self) -> int:
        return self.adults + self.children


@dataclass(frozen=True, slots=True)
class TripContext:
    """Destination and dates derived from the trip request."""

    country: str
    travel_start: datetime.date
    travel_end: datetime.date
    trip_days: int = 1
    currency: str | None = None

    @property
    def travel_month(self) -> int:
        """Zero-based month index (0 = January) of the travel start date."""
        return self.travel_start.month - 1


@dataclass(frozen=True, slots=True)
class MarkupSlab:
    """Amount bracket mapped to a markup; both bounds are inclusive."""

    min_amount: Decimal
    max_amount: Decimal
    markup_type: MarkupType
    markup_value: Decimal
    is_active: bool = True

    def contains(self, amount: Decimal) -> bool:
        return self.min_amount <= amount <= self.max_amount


@dataclass(frozen=True, slots=True)
class CountryMarkupRule:
    """Destination-specific markup that takes precedence over slabs.

    Fixed values are charged per billable traveller. The tier multiplier and
    the optional seasonal adjustment (a percentage) scale the markup.
    """

    country: str
    markup_type: MarkupType
    default_markup: Decimal
    tier: MarkupTier = MarkupTier.STANDARD
    seasonal_adjustment: Decimal = Decimal("0")
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class PricingSettings:
    """Global markup configuration, read-only to the pricing core."""

    default_markup_percentage: Decimal = Decimal("0")
    use_slab_pricing: bool = False
    markup_slabs: tuple[MarkupSlab, ...] = ()
    allow_staff_pricing_edit: bool = False
    country_rules: tuple[CountryMarkupRule, ...] = ()


@dataclass(frozen=True, slots=True)
class DynamicPricingFlags:
    seasonal: bool = False
    group_discount: bool = False
    advance_booking: bool = False
    # Accepted for compatibility; no multiplier is defined yet.
    demand: bool = False

    @property
    def enabled(self) -> bool:
        return self.seasonal or self.group_discount or self.advance_booking or self.demand


@dataclass(frozen=True, slots=True)
class BundleDiscount:
    """Discount unlocked by a combination of selected categories."""

    type: MarkupType
    value: Decimal
    description: str


@dataclass(frozen=True, slots=True)
class ManualAdjustment:
    """Staff-entered discount, honoured only when staff edits are allowed."""

    type: MarkupType
    value: Decimal
    reason: str = ""


@dataclass(frozen=True, slots=True)
class TaxRule:
    """Advisory tax rate for a country and service type."""

    country: str
    service_type: str
    rate: Decimal
    description: str = ""
    is_default: bool = False


@dataclass(frozen=True, slots=True)
class TaxTable:
    """Ordered collection of tax rules supplied by the settings store."""

    rules: tuple[TaxRule, ...] = ()

    def for_country(self, country: str) -> tuple[TaxRule, ...]:
        key = country.strip().lower()
        return tuple(rule for rule in self.rules if rule.country.strip().lower() == key)


@dataclass(frozen=True, slots=True)
class TdsConfig:
    """Tax deducted at source by the client once the amount reaches a threshold."""

    rate: Decimal
    threshold: Decimal = Decimal("0")
    is_applicable: bool = True


@dataclass(frozen=True, slots=True)
class QuoteOptions:
    """Per-quote switches chosen by staff."""

    service_type: str = "all"
    default_currency: str = "USD"
    tax_exempt: bool = False
    tax_inclusive: bool = False
    tax_by_service: bool = False
    split_adult_child: bool = False
    child_discount_percent: Decimal = Decimal("0")
    as_of: datetime.date | None = None
    manual_adjustment: ManualAdjustment | None = None
    tds: TdsConfig | None = None


@dataclass(frozen=True, slots=True)
class DiscountLine:
    description: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class TaxLine:
    description: str
    rate: Decimal
    amount: Decimal


@dataclass(frozen=True, slots=True)
class PaxSplit:
    """Adult/child shares of a total."""

    adult_share: Decimal
    child_share: Decimal
    per_adult: Decimal
    per_child: Decimal
    child_discount: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class PricingBreakdown:
    """Itemized result of one pricing computation."""

    base_price: Decimal
    markup: Decimal
    markup_basis: str
    discounts: Decimal
    discount_lines: tuple[DiscountLine, ...]
    taxes: Decimal
    tax_rate: Decimal
    tax_lines: tuple[TaxLine, ...]
    final_price: Decimal
    currency: str
    currency_symbol: str
    per_person: Decimal
    grand_total: Decimal
    per_category_totals: dict[ServiceCategory, Decimal] = field(default_factory=dict)
    adjusted_prices: dict[str, Decimal] = field(default_factory=dict)
    pax_split: PaxSplit | None = None
    warnings: tuple[DataIntegrityWarning, ...] = ()
    tds_amount: Decimal = ZERO
    amount_after_tds: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        """Serialize the breakdown to plain types for collaborators."""

        split = None
        if self.pax_split is not None:
            split = {
                "adult_share": money_str(self.pax_split.adult_share),
                "child_share": money_str(self.pax_split.child_share),
                "per_adult": money_str(self.pax_split.per_adult),
                "per_child": money_str(self.pax_split.per_child),
                "child_discount": money_str(self.pax_split.child_discount),
            }
        return {
            "base_price": money_str(self.base_price),
            "markup": money_str(self.markup),
            "markup_basis": self.markup_basis,
            "discounts": money_str(self.discounts),
            "discount_lines": [
                {"description": line.description, "amount": money_str(line.amount)}
                for line in self.discount_lines
            ],
            "taxes": money_str(self.taxes),
            "tax_rate": str(self.tax_rate),
            "tax_lines": [
                {
                    "description": line.description,
                    "rate": str(line.rate),
                    "amount": money_str(line.amount),
                }
                for line in self.tax_lines
            ],
            "final_price": money_str(self.final_price),
            "currency": self.currency,
            "currency_symbol": self.currency_symbol,
            "per_person": money_str(self.per_person),
            "grand_total": money_str(self.grand_total),
            "per_category_totals": {
                category.value: money_str(amount)
                for category, amount in self.per_category_totals.items()
            },
            "adjusted_prices": {
                item_id: money_str(amount)
                for item_id, amount in self.adjusted_prices.items()
            },
            "pax_split": split,
            "warnings": [
                {"code": warning.code, "message": warning.message}
                for warning in self.warnings
            ],
            "tds_amount": money_str(self.tds_amount),
            "amount_after_tds": money_str(self.amount_after_tds),
        }

    def client_view(self) -> dict[str, Any]:
        """Client-facing subset: no markup, per-item costs or warnings."""

        payload = self.to_dict()
        for key in ("base_price", "markup", "markup_basis", "adjusted_prices", "warnings"):
            payload.pop(key)
        return payload


@dataclass(frozen=True, slots=True)
class QuoteSnapshot:
    """Consistent set of inputs for one computation pass."""

    line_items: tuple[LineItem, ...]
    trip: TripContext
    pax: PaxDetails
    settings: PricingSettings | None
    flags: DynamicPricingFlags = DynamicPricingFlags()
    options: QuoteOptions = QuoteOptions()
    tax_table: TaxTable | None = None


__all__ = [
    "BundleDiscount",
    "CountryMarkupRule",
    "DiscountLine",
    "DynamicPricingFlags",
    "LineItem",
    "MONEY_PLACES",
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
    "ZERO",
    "money_str",
    "to_money",
]
