"""Durable quote records and their reproducibility check."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from tripquote.core.errors import QuoteMismatchError
from tripquote.models.pricing import PricingBreakdown, QuoteSnapshot
from tripquote.schemas.pricing import (
    PricingBreakdownRead,
    QuoteRecordPayload,
    QuoteRequest,
)
from tripquote.services import pricing_service, tax_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuoteRecord:
    """Snapshot of the inputs together with the breakdown quoted from them."""

    snapshot: QuoteSnapshot
    breakdown: PricingBreakdown


def build_record(snapshot: QuoteSnapshot) -> QuoteRecord:
    """Validate a snapshot and price it.

    Records always carry their tax table; the built-in one is copied in when
    the snapshot has none.
    """
    pricing_service.validate_snapshot(snapshot)
    if snapshot.tax_table is None:
        snapshot = dataclasses.replace(
            snapshot, tax_table=tax_service.default_tax_table()
        )
    return QuoteRecord(
        snapshot=snapshot,
        breakdown=pricing_service.aggregate_snapshot(snapshot),
    )


def dump_record(record: QuoteRecord) -> dict[str, Any]:
    """Serialize a record to JSON-safe types for the persistence layer."""
    payload = QuoteRecordPayload(
        snapshot=QuoteRequest.from_snapshot(record.snapshot),
        breakdown=PricingBreakdownRead.model_validate(record.breakdown),
    )
    return payload.model_dump(mode="json")


def load_record(data: dict[str, Any]) -> QuoteRecord:
    """Rebuild a record from its stored form."""
    return record_from_payload(QuoteRecordPayload.model_validate(data))


def record_from_payload(payload: QuoteRecordPayload) -> QuoteRecord:
    return QuoteRecord(
        snapshot=payload.snapshot.to_snapshot(),
        breakdown=payload.breakdown.to_domain(),
    )


def verify_record(record: QuoteRecord) -> bool:
    """Return True when re-pricing the stored snapshot yields the stored breakdown."""
    return pricing_service.aggregate_snapshot(record.snapshot) == record.breakdown


def reproduce_record(record: QuoteRecord) -> PricingBreakdown:
    """Re-price a stored snapshot, failing loudly if the result drifted."""
    recomputed = pricing_service.aggregate_snapshot(record.snapshot)
    if recomputed != record.breakdown:
        logger.error(
            "Stored quote drifted: stored final=%s recomputed final=%s",
            record.breakdown.final_price,
            recomputed.final_price,
        )
        raise QuoteMismatchError(
            "Stored breakdown does not match a recomputation of its snapshot"
        )
    return recomputed
