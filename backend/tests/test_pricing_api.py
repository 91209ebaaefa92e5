"""API tests for pricing endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_quote_returns_itemized_breakdown(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 200, response.text
    body = response.json()["breakdown"]

    assert Decimal(body["base_price"]) == Decimal("10000.00")
    assert Decimal(body["markup"]) == Decimal("1000.00")
    assert Decimal(body["discounts"]) == Decimal("500.00")
    assert body["discount_lines"][0]["description"] == "Transport + Accommodation Bundle"
    assert Decimal(body["taxes"]) == Decimal("735.00")
    assert Decimal(body["final_price"]) == Decimal("11235.00")
    assert Decimal(body["per_person"]) == Decimal("5617.50")
    assert body["currency"] == "THB"
    assert set(body["per_category_totals"]) == {"transport", "hotel"}
    assert body["warnings"] == []


async def test_quote_returns_the_effective_inputs(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    del quote_payload["options"]["as_of"]
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 200, response.text
    snapshot = response.json()["snapshot"]

    options = snapshot["options"]
    assert options["as_of"] is not None
    assert options["service_type"] == "all"
    assert options["default_currency"] == "USD"
    assert Decimal(options["child_discount_percent"]) == Decimal("0")
    thai = [rule for rule in snapshot["tax_rules"] if rule["country"] == "TH"]
    assert [Decimal(rule["rate"]) for rule in thai] == [Decimal("7")]


async def test_quote_rejects_negative_prices(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    quote_payload["line_items"][0]["base_price"] = "-10"
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 422


async def test_quote_rejects_duplicate_line_items(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    quote_payload["line_items"][1]["id"] = "flight-1"
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 422


async def test_quote_without_settings_is_unavailable(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    quote_payload.pop("settings")
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 503
    assert response.json()["detail"] == "Pricing settings unavailable"


async def test_service_default_child_discount_applies(
    client: AsyncClient,
    quote_payload: dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DEFAULT_CHILD_DISCOUNT_PERCENT", "20")
    quote_payload["pax"] = {"adults": 2, "children": 2}
    quote_payload["options"]["split_adult_child"] = True

    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 200, response.text
    body = response.json()["breakdown"]

    final = Decimal(body["final_price"])
    assert Decimal(body["pax_split"]["child_discount"]) == final / 10
    assert Decimal(body["grand_total"]) == final - final / 10


async def test_tds_is_reported_without_changing_the_total(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    quote_payload["options"]["tds"] = {"rate": "2", "threshold": "10000"}
    response = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert response.status_code == 200, response.text
    body = response.json()["breakdown"]

    assert Decimal(body["final_price"]) == Decimal("11235.00")
    assert Decimal(body["tds_amount"]) == Decimal("210.00")
    assert Decimal(body["amount_after_tds"]) == Decimal("11025.00")


async def test_client_view_omits_internal_figures(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    response = await client.post("/api/v1/pricing/quote/client-view", json=quote_payload)
    assert response.status_code == 200
    body = response.json()
    assert "markup" not in body
    assert "adjusted_prices" not in body
    assert body["final_price"] == "11235.00"
    assert body["currency_symbol"] == "฿"


async def test_verify_detects_reproducible_and_drifted_quotes(
    client: AsyncClient, quote_payload: dict[str, Any]
) -> None:
    quoted = await client.post("/api/v1/pricing/quote", json=quote_payload)
    record = quoted.json()

    response = await client.post("/api/v1/pricing/verify", json=record)
    assert response.status_code == 200
    assert response.json()["reproducible"] is True

    record["breakdown"]["final_price"] = "1.00"
    response = await client.post("/api/v1/pricing/verify", json=record)
    payload = response.json()
    assert payload["reproducible"] is False
    assert Decimal(payload["recomputed_final_price"]) == Decimal("11235.00")


async def test_stored_quote_with_service_defaults_reproduces(
    client: AsyncClient,
    quote_payload: dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DEFAULT_CHILD_DISCOUNT_PERCENT", "20")
    del quote_payload["options"]["as_of"]
    quote_payload["options"]["split_adult_child"] = True
    quote_payload["pax"] = {"adults": 2, "children": 1}
    quote_payload["flags"] = {"advance_booking": True}
    quote_payload["trip"]["travel_start"] = "2099-03-10"
    quote_payload["trip"]["travel_end"] = "2099-03-13"

    quoted = await client.post("/api/v1/pricing/quote", json=quote_payload)
    assert quoted.status_code == 200, quoted.text
    record = quoted.json()
    assert record["breakdown"]["warnings"] == []
    assert Decimal(record["breakdown"]["pax_split"]["child_discount"]) > 0

    monkeypatch.setenv("DEFAULT_CHILD_DISCOUNT_PERCENT", "0")
    response = await client.post("/api/v1/pricing/verify", json=record)
    assert response.status_code == 200
    assert response.json()["reproducible"] is True
