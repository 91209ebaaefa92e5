"""Pricing-related API endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, status

from tripquote.core.config import get_settings
from tripquote.core.errors import ConfigurationError, InvalidInputError
from tripquote.schemas.pricing import (
    QuoteRecordPayload,
    QuoteRequest,
    QuoteVerificationRead,
)
from tripquote.services import pricing_service, quote_record_service
from tripquote.services.quote_record_service import QuoteRecord

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _with_service_defaults(payload: QuoteRequest) -> QuoteRequest:
    """Fill options the caller left out from service configuration.

    The reference date for advance booking is read here, at the boundary,
    so the pricing core itself never consults the clock.
    """

    settings = get_settings()
    options = payload.options
    updates: dict[str, Any] = {}
    if "service_type" not in options.model_fields_set:
        updates["service_type"] = settings.default_service_type
    if "default_currency" not in options.model_fields_set:
        updates["default_currency"] = settings.default_currency
    if "child_discount_percent" not in options.model_fields_set:
        updates["child_discount_percent"] = settings.default_child_discount_percent
    if options.as_of is None:
        updates["as_of"] = date.today()
    if not updates:
        return payload
    return payload.model_copy(update={"options": options.model_copy(update=updates)})


def _quote(payload: QuoteRequest) -> QuoteRecord:
    snapshot = _with_service_defaults(payload).to_snapshot()
    try:
        return quote_record_service.build_record(snapshot)
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pricing settings unavailable",
        ) from exc
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc


@router.post("/quote", response_model=QuoteRecordPayload, summary="Quote a proposal")
async def quote_proposal(payload: QuoteRequest) -> dict[str, Any]:
    """Price a proposal and return it with the exact inputs it was priced from.

    The returned snapshot has every service default filled in; storing it
    alongside the breakdown is what makes the quote verifiable later.
    """
    return quote_record_service.dump_record(_quote(payload))


@router.post("/quote/client-view", summary="Client-facing quote summary")
async def quote_client_view(payload: QuoteRequest) -> dict[str, Any]:
    return _quote(payload).breakdown.client_view()


@router.post(
    "/verify",
    response_model=QuoteVerificationRead,
    summary="Check a stored quote still reproduces",
)
async def verify_quote(payload: QuoteRecordPayload) -> QuoteVerificationRead:
    record = quote_record_service.record_from_payload(payload)
    try:
        recomputed = pricing_service.aggregate_snapshot(record.snapshot)
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pricing settings unavailable",
        ) from exc
    return QuoteVerificationRead(
        reproducible=recomputed == record.breakdown,
        final_price=record.breakdown.final_price,
        recomputed_final_price=recomputed.final_price,
    )
