"""Schema exports."""

from tripquote.schemas.pricing import (
    LineItemSchema,
    PricingBreakdownRead,
    PricingSettingsSchema,
    QuoteRecordPayload,
    QuoteRequest,
    QuoteVerificationRead,
)

__all__ = [
    "LineItemSchema",
    "PricingBreakdownRead",
    "PricingSettingsSchema",
    "QuoteRecordPayload",
    "QuoteRequest",
    "QuoteVerificationRead",
]
