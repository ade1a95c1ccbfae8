"""Tests for reallocation API endpoints."""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from fund_switch.main import app

PRICES = {"1": 2.44, "2": 0.6, "3": 2.0, "4": 1.1, "5": 1.5}

HOLDINGS = [
    {"fund": "1", "percentage": 30, "units": 1.45},
    {"fund": "2", "percentage": 20, "units": 2.50},
    {"fund": "3", "percentage": 50, "units": 6.15},
]

TARGETS = [{"fund": "2", "percentage": 50}, {"fund": "4", "percentage": 50}]


@pytest.mark.asyncio
async def test_health():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_create_reallocation():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/reallocations",
            json={"holdings": HOLDINGS, "targets": TARGETS, "prices": PRICES},
        )
        assert resp.status_code == 200
        data = resp.json()

        assert [s["state"] for s in data["switches"]] == [
            "completed",
            "created",
            "created",
            "created",
        ]
        assert data["completed"][0] == {
            "from_fund": "2",
            "to_fund": "2",
            "units": 2.5,
            "state": "completed",
        }
        assert [(s["from_fund"], s["to_fund"]) for s in data["created"]] == [
            ("1", "2"),
            ("3", "2"),
            ("3", "4"),
        ]
        assert data["remaining_holdings"] == []
        assert data["remaining_targets"] == []
        assert data["valuation_before"] == pytest.approx(17.338)
        assert data["valuation_after"] == 0


@pytest.mark.asyncio
async def test_create_reallocation_missing_price():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/reallocations",
            json={"holdings": HOLDINGS, "targets": TARGETS, "prices": {"1": 2.44}},
        )
        assert resp.status_code == 422
        assert "No unit price" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_reallocation_duplicate_fund():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        targets = [{"fund": "4", "percentage": 50}, {"fund": "4", "percentage": 50}]
        resp = await client.post(
            "/api/reallocations",
            json={"holdings": HOLDINGS, "targets": targets, "prices": PRICES},
        )
        assert resp.status_code == 422
        assert "more than once" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_reallocation_negative_price():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/reallocations",
            json={"holdings": HOLDINGS, "targets": TARGETS, "prices": {"1": -1.0}},
        )
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_reallocation_invalid_percentage():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/reallocations",
            json={
                "holdings": HOLDINGS,
                "targets": [{"fund": "4", "percentage": 0}],
                "prices": PRICES,
            },
        )
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_intersection():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/reallocations/intersection",
            json={
                "holdings": [
                    {"fund": 1, "percentage": 50, "units": 1.45},
                    {"fund": 2, "percentage": 50, "units": 2.50},
                ],
                "targets": [
                    {"fund": 3, "percentage": 70},
                    {"fund": 2, "percentage": 30},
                ],
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["switches"]) == 1
        assert data["switches"][0]["from_fund"] == "2"
        assert data["switches"][0]["units"] == pytest.approx(1.5)
        assert data["remaining_targets"] == [{"fund": "3", "percentage": 70.0}]
        assert data["remaining_holdings"][1]["percentage"] == pytest.approx(20)
        assert data["remaining_holdings"][1]["units"] == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_create_valuation():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/valuations", json={"holdings": HOLDINGS, "prices": PRICES}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == pytest.approx(17.338)
        assert [d["fund"] for d in data["details"]] == ["1", "2", "3"]
        assert data["details"][1]["amount"] == pytest.approx(1.5)


@pytest.mark.asyncio
async def test_create_valuation_missing_price():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/valuations", json={"holdings": HOLDINGS, "prices": {"1": 2.44}}
        )
        assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,payload",
    [
        (
            "/api/reallocations",
            {"holdings": HOLDINGS, "targets": TARGETS, "prices": {"1": 2.44}},
        ),
        (
            "/api/reallocations/intersection",
            {"holdings": HOLDINGS + HOLDINGS[:1], "targets": TARGETS},
        ),
        ("/api/valuations", {"holdings": HOLDINGS, "prices": {"1": 2.44}}),
        ("/api/valuations", {"holdings": HOLDINGS, "prices": {"1": -1.0}}),
    ],
)
async def test_rejected_requests_are_logged(path, payload, caplog):
    transport = ASGITransport(app=app)
    with caplog.at_level(logging.ERROR, logger="fund_switch.api.reallocation_routes"):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(path, json=payload)
    assert resp.status_code == 422
    assert any(
        r.name == "fund_switch.api.reallocation_routes" and r.levelno == logging.ERROR
        for r in caplog.records
    )
