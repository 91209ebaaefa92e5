"""Error taxonomy for the pricing core."""

from __future__ import annotations

from dataclasses import dataclass


class PricingError(Exception):
    """Base exception for pricing core errors."""


class ConfigurationError(PricingError):
    """Raised when the pricing settings snapshot is absent."""


class InvalidInputError(PricingError, ValueError):
    """Raised at the boundary for negative prices, negative pax or bad ids."""


class QuoteMismatchError(PricingError):
    """Raised when a stored quote no longer reproduces from its snapshot."""


@dataclass(frozen=True, slots=True)
class DataIntegrityWarning:
    """Non-fatal record of a rule lookup that fell back to a default."""

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


MARKUP_SLAB_UNMATCHED = "markup_slab_unmatched"
TAX_RULE_MISSING = "tax_rule_missing"
CURRENCY_UNKNOWN = "currency_unknown"
CURRENCY_MISMATCH = "line_item_currency_mismatch"
ADVANCE_BOOKING_DATE_MISSING = "advance_booking_date_missing"
STAFF_EDIT_NOT_ALLOWED = "staff_edit_not_allowed"


__all__ = [
    "ADVANCE_BOOKING_DATE_MISSING",
    "CURRENCY_MISMATCH",
    "CURRENCY_UNKNOWN",
    "ConfigurationError",
    "DataIntegrityWarning",
    "InvalidInputError",
    "MARKUP_SLAB_UNMATCHED",
    "PricingError",
    "QuoteMismatchError",
    "STAFF_EDIT_NOT_ALLOWED",
    "TAX_RULE_MISSING",
]
