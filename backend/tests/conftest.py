"""Test fixtures for the trip quote backend."""
from __future__ import annotations

import datetime
import os
from collections.abc import AsyncIterator, Callable
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("APP_ENV", "test")

from tripquote.core.config import get_settings
from tripquote.main import app
from tripquote.models import (
    LineItem,
    MarkupSlab,
    MarkupType,
    PaxDetails,
    PricingSettings,
    ServiceCategory,
    TripContext,
)

AS_OF = datetime.date(2025, 1, 1)


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    """Re-read configuration for every test."""
    get_settings.cache_clear()


@pytest.fixture()
def make_item() -> Callable[..., LineItem]:
    def _make(
        item_id: str,
        category: ServiceCategory,
        price: str | Decimal,
        currency: str = "THB",
        **extra: Any,
    ) -> LineItem:
        return LineItem(
            id=item_id,
            category=category,
            base_price=Decimal(price),
            currency=currency,
            **extra,
        )

    return _make


@pytest.fixture()
def bangkok_trip() -> TripContext:
    """A Thai trip departing in March (neither peak nor low season)."""
    return TripContext(
        country="TH",
        travel_start=datetime.date(2025, 3, 10),
        travel_end=datetime.date(2025, 3, 15),
        trip_days=6,
        currency="THB",
    )


@pytest.fixture()
def couple() -> PaxDetails:
    return PaxDetails(adults=2, children=0, infants=0)


@pytest.fixture()
def flat_settings() -> PricingSettings:
    return PricingSettings(default_markup_percentage=Decimal("10"))


@pytest.fixture()
def slab_settings() -> PricingSettings:
    return PricingSettings(
        use_slab_pricing=True,
        markup_slabs=(
            MarkupSlab(
                min_amount=Decimal("0"),
                max_amount=Decimal("10000"),
                markup_type=MarkupType.PERCENTAGE,
                markup_value=Decimal("8"),
            ),
            MarkupSlab(
                min_amount=Decimal("10000"),
                max_amount=Decimal("50000"),
                markup_type=MarkupType.PERCENTAGE,
                markup_value=Decimal("6"),
            ),
        ),
    )


@pytest.fixture()
def quote_payload() -> dict[str, Any]:
    """JSON body for the quote endpoint."""
    return {
        "line_items": [
            {
                "id": "flight-1",
                "category": "transport",
                "base_price": "4000.00",
                "currency": "THB",
            },
            {
                "id": "hotel-1",
                "category": "hotel",
                "base_price": "6000.00",
                "currency": "THB",
                "quantity_context": {"nights": 3},
            },
        ],
        "trip": {
            "country": "TH",
            "travel_start": "2025-03-10",
            "travel_end": "2025-03-13",
            "trip_days": 4,
            "currency": "THB",
        },
        "pax": {"adults": 2, "children": 0, "infants": 0},
        "settings": {"default_markup_percentage": "10"},
        "options": {"as_of": AS_OF.isoformat()},
    }


@pytest_asyncio.fixture()
async def client() -> AsyncIterator[AsyncClient]:
    """Yield an async client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
