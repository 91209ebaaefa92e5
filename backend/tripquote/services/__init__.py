"""Service layer exports."""
from tripquote.services import (
    bundle_service,
    currency_service,
    dynamic_pricing_service,
    markup_service,
    pax_service,
    tax_service,
)
from tripquote.services import pricing_service
from tripquote.services import quote_record_service

__all__ = [
    "bundle_service",
    "currency_service",
    "dynamic_pricing_service",
    "markup_service",
    "pax_service",
    "pricing_service",
    "quote_record_service",
    "tax_service",
]
