"""Pricing schema definitions."""

from __future__ import annotations

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tripquote.core.errors import DataIntegrityWarning
from tripquote.models.pricing import (
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

_ZERO = Decimal("0")


class QuantityContextSchema(BaseModel):
    """Optional per-unit context of a line item."""

    pax: int | None = Field(default=None, ge=0)
    nights: int | None = Field(default=None, ge=0)
    days: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(from_attributes=True)


class LineItemSchema(BaseModel):
    """Selected service with a catalog-resolved base price."""

    id: str = Field(min_length=1)
    category: ServiceCategory
    base_price: Decimal = Field(ge=_ZERO)
    currency: str = Field(min_length=3, max_length=3)
    quantity_context: QuantityContextSchema | None = None
    description: str = ""

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> LineItem:
        context = None
        if self.quantity_context is not None:
            context = QuantityContext(**self.quantity_context.model_dump())
        return LineItem(
            id=self.id,
            category=self.category,
            base_price=self.base_price,
            currency=self.currency.upper(),
            quantity_context=context,
            description=self.description,
        )


class PaxDetailsSchema(BaseModel):
    adults: int = Field(default=0, ge=0)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)

    model_config = ConfigDict(from_attributes=True)


class TripContextSchema(BaseModel):
    """Destination and travel dates."""

    country: str
    travel_start: datetime.date
    travel_end: datetime.date
    trip_days: int = Field(default=1, ge=1)
    currency: str | None = Field(default=None, min_length=3, max_length=3)

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def _check_dates(self) -> TripContextSchema:
        if self.travel_end < self.travel_start:
            raise ValueError("travel_end must not precede travel_start")
        return self


class MarkupSlabSchema(BaseModel):
    min_amount: Decimal = Field(ge=_ZERO)
    max_amount: Decimal = Field(ge=_ZERO)
    markup_type: MarkupType
    markup_value: Decimal = Field(ge=_ZERO)
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> MarkupSlabSchema:
        if self.max_amount < self.min_amount:
            raise ValueError("max_amount must not be below min_amount")
        return self


class CountryMarkupRuleSchema(BaseModel):
    country: str = Field(min_length=2)
    markup_type: MarkupType
    default_markup: Decimal = Field(ge=_ZERO)
    tier: MarkupTier = MarkupTier.STANDARD
    seasonal_adjustment: Decimal = Field(default=_ZERO, ge=Decimal("-100"))
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class PricingSettingsSchema(BaseModel):
    """Markup configuration snapshot."""

    default_markup_percentage: Decimal = Field(default=_ZERO, ge=_ZERO)
    use_slab_pricing: bool = False
    markup_slabs: list[MarkupSlabSchema] = Field(default_factory=list)
    allow_staff_pricing_edit: bool = False
    country_rules: list[CountryMarkupRuleSchema] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> PricingSettings:
        return PricingSettings(
            default_markup_percentage=self.default_markup_percentage,
            use_slab_pricing=self.use_slab_pricing,
            markup_slabs=tuple(
                MarkupSlab(**slab.model_dump()) for slab in self.markup_slabs
            ),
            allow_staff_pricing_edit=self.allow_staff_pricing_edit,
            country_rules=tuple(
                CountryMarkupRule(**rule.model_dump()) for rule in self.country_rules
            ),
        )


class DynamicPricingFlagsSchema(BaseModel):
    seasonal: bool = False
    group_discount: bool = False
    advance_booking: bool = False
    demand: bool = False

    model_config = ConfigDict(from_attributes=True)


class ManualAdjustmentSchema(BaseModel):
    type: MarkupType
    value: Decimal = Field(ge=_ZERO)
    reason: str = ""

    model_config = ConfigDict(from_attributes=True)


class TdsConfigSchema(BaseModel):
    rate: Decimal = Field(ge=_ZERO, le=Decimal("100"))
    threshold: Decimal = Field(default=_ZERO, ge=_ZERO)
    is_applicable: bool = True

    model_config = ConfigDict(from_attributes=True)


class QuoteOptionsSchema(BaseModel):
    """Per-quote switches."""

    service_type: str = "all"
    default_currency: str = Field(default="USD", min_length=3, max_length=3)
    tax_exempt: bool = False
    tax_inclusive: bool = False
    tax_by_service: bool = False
    split_adult_child: bool = False
    child_discount_percent: Decimal = Field(default=_ZERO, ge=_ZERO, le=Decimal("100"))
    as_of: datetime.date | None = None
    manual_adjustment: ManualAdjustmentSchema | None = None
    tds: TdsConfigSchema | None = None

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> QuoteOptions:
        adjustment = None
        if self.manual_adjustment is not None:
            adjustment = ManualAdjustment(**self.manual_adjustment.model_dump())
        tds = None
        if self.tds is not None:
            tds = TdsConfig(**self.tds.model_dump())
        return QuoteOptions(
            service_type=self.service_type,
            default_currency=self.default_currency.upper(),
            tax_exempt=self.tax_exempt,
            tax_inclusive=self.tax_inclusive,
            tax_by_service=self.tax_by_service,
            split_adult_child=self.split_adult_child,
            child_discount_percent=self.child_discount_percent,
            as_of=self.as_of,
            manual_adjustment=adjustment,
            tds=tds,
        )


class TaxRuleSchema(BaseModel):
    country: str
    service_type: str = "all"
    rate: Decimal = Field(ge=_ZERO)
    description: str = ""
    is_default: bool = False

    model_config = ConfigDict(from_attributes=True)


class QuoteRequest(BaseModel):
    """Input payload for generating a quote: one consistent snapshot."""

    line_items: list[LineItemSchema] = Field(default_factory=list)
    trip: TripContextSchema
    pax: PaxDetailsSchema = Field(default_factory=PaxDetailsSchema)
    settings: PricingSettingsSchema | None = None
    flags: DynamicPricingFlagsSchema = Field(default_factory=DynamicPricingFlagsSchema)
    options: QuoteOptionsSchema = Field(default_factory=QuoteOptionsSchema)
    tax_rules: list[TaxRuleSchema] | None = None

    @model_validator(mode="after")
    def _unique_ids(self) -> QuoteRequest:
        ids = [item.id for item in self.line_items]
        if len(ids) != len(set(ids)):
            raise ValueError("line item ids must be unique")
        return self

    def to_snapshot(self) -> QuoteSnapshot:
        tax_table = None
        if self.tax_rules is not None:
            tax_table = TaxTable(
                rules=tuple(TaxRule(**rule.model_dump()) for rule in self.tax_rules)
            )
        return QuoteSnapshot(
            line_items=tuple(item.to_domain() for item in self.line_items),
            trip=TripContext(**self.trip.model_dump()),
            pax=PaxDetails(**self.pax.model_dump()),
            settings=self.settings.to_domain() if self.settings else None,
            flags=DynamicPricingFlags(**self.flags.model_dump()),
            options=self.options.to_domain(),
            tax_table=tax_table,
        )

    @classmethod
    def from_snapshot(cls, snapshot: QuoteSnapshot) -> QuoteRequest:
        tax_rules = None
        if snapshot.tax_table is not None:
            tax_rules = [
                TaxRuleSchema.model_validate(rule) for rule in snapshot.tax_table.rules
            ]
        return cls(
            line_items=[
                LineItemSchema.model_validate(item) for item in snapshot.line_items
            ],
            trip=TripContextSchema.model_validate(snapshot.trip),
            pax=PaxDetailsSchema.model_validate(snapshot.pax),
            settings=(
                PricingSettingsSchema.model_validate(snapshot.settings)
                if snapshot.settings is not None
                else None
            ),
            flags=DynamicPricingFlagsSchema.model_validate(snapshot.flags),
            options=QuoteOptionsSchema.model_validate(snapshot.options),
            tax_rules=tax_rules,
        )


class DiscountLineRead(BaseModel):
    description: str
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class TaxLineRead(BaseModel):
    description: str
    rate: Decimal
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class PaxSplitRead(BaseModel):
    adult_share: Decimal
    child_share: Decimal
    per_adult: Decimal
    per_child: Decimal
    child_discount: Decimal

    model_config = ConfigDict(from_attributes=True)


class PricingWarningRead(BaseModel):
    code: str
    message: str

    model_config = ConfigDict(from_attributes=True)


class PricingBreakdownRead(BaseModel):
    """Itemized pricing response."""

    base_price: Decimal
    markup: Decimal
    markup_basis: str
    discounts: Decimal
    discount_lines: list[DiscountLineRead]
    taxes: Decimal
    tax_rate: Decimal
    tax_lines: list[TaxLineRead]
    final_price: Decimal
    currency: str
    currency_symbol: str
    per_person: Decimal
    grand_total: Decimal
    per_category_totals: dict[ServiceCategory, Decimal]
    adjusted_prices: dict[str, Decimal]
    pax_split: PaxSplitRead | None = None
    warnings: list[PricingWarningRead] = Field(default_factory=list)
    tds_amount: Decimal = _ZERO
    amount_after_tds: Decimal = _ZERO

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> PricingBreakdown:
        return PricingBreakdown(
            base_price=self.base_price,
            markup=self.markup,
            markup_basis=self.markup_basis,
            discounts=self.discounts,
            discount_lines=tuple(
                DiscountLine(**line.model_dump()) for line in self.discount_lines
            ),
            taxes=self.taxes,
            tax_rate=self.tax_rate,
            tax_lines=tuple(TaxLine(**line.model_dump()) for line in self.tax_lines),
            final_price=self.final_price,
            currency=self.currency,
            currency_symbol=self.currency_symbol,
            per_person=self.per_person,
            grand_total=self.grand_total,
            per_category_totals=dict(self.per_category_totals),
            adjusted_prices=dict(self.adjusted_prices),
            pax_split=(
                PaxSplit(**self.pax_split.model_dump())
                if self.pax_split is not None
                else None
            ),
            warnings=tuple(
                DataIntegrityWarning(**warning.model_dump()) for warning in self.warnings
            ),
            tds_amount=self.tds_amount,
            amount_after_tds=self.amount_after_tds,
        )


class QuoteRecordPayload(BaseModel):
    """Durable pricing record: the input snapshot with the quoted result."""

    snapshot: QuoteRequest
    breakdown: PricingBreakdownRead


class QuoteVerificationRead(BaseModel):
    reproducible: bool
    final_price: Decimal
    recomputed_final_price: Decimal | None = None
