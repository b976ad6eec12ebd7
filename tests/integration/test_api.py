"""Integration tests for the router API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from swave_router.api.endpoints import get_router
from swave_router.api.main import app
from swave_router.liquidity import StaticLiquiditySource
from swave_router.routing.router import SwapRouter
from tests.helpers import FIXED_NOW, UNIT, fixed_clock


@pytest.fixture
def client(chain_snapshot) -> Iterator[TestClient]:
    """Client whose router serves the chain snapshot."""
    router = SwapRouter(source=StaticLiquiditySource(chain_snapshot), clock=fixed_clock)
    app.dependency_overrides[get_router] = lambda: router
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRouteApi:
    def test_multihop_route(self, client):
        response = client.post(
            "/route", json={"from": "XLM", "to": "AQUA", "amount": str(1_000 * UNIT)}
        )

        assert response.status_code == 200
        data = response.json()
        assert "error" not in data
        route = data["route"]
        assert route["path"] == ["XLM", "USDC", "AQUA"]
        assert route["label"] == "optimal"
        assert [step["pool_id"] for step in route["steps"]] == ["xlm-usdc", "usdc-aqua"]
        assert route["steps"][1]["amount_in"] == route["steps"][0]["amount_out"]
        assert route["generated_at"].startswith(FIXED_NOW.date().isoformat())

    def test_unknown_token(self, client):
        response = client.post("/route", json={"from": "XLM", "to": "BTC", "amount": "100"})

        data = response.json()
        assert "route" not in data
        assert data["error"] == "invalid_request"
        assert "BTC" in data["errorDetail"]

    def test_inline_snapshot(self, client, multi_pool_snapshot):
        response = client.post(
            "/route",
            json={
                "from": "XLM",
                "to": "USDC",
                "amount": str(1_000 * UNIT),
                "snapshot": multi_pool_snapshot.model_dump(mode="json", by_alias=True),
            },
        )

        route = response.json()["route"]
        assert route["label"] == "direct"
        assert route["steps"][0]["pool_id"] == "xlm-usdc-deep"

    def test_inline_malformed_snapshot(self, client):
        snapshot = {
            "tokens": [{"symbol": "XLM"}],
            "pools": [
                {
                    "id": "xlm-usdc",
                    "tokenA": "XLM",
                    "tokenB": "USDC",
                    "reserveA": "1000",
                    "reserveB": "1000",
                    "fee": "0.003",
                }
            ],
        }
        response = client.post(
            "/route",
            json={"from": "XLM", "to": "USDC", "amount": "100", "snapshot": snapshot},
        )

        assert response.status_code == 200
        assert response.json()["error"] == "malformed_snapshot"


class TestRoutesApi:
    def test_alternative_routes(self, client, multi_pool_snapshot):
        response = client.post(
            "/routes",
            json={
                "from": "XLM",
                "to": "USDC",
                "amount": str(1_000 * UNIT),
                "maxRoutes": 3,
                "snapshot": multi_pool_snapshot.model_dump(mode="json", by_alias=True),
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["truncated"] is False
        assert [r["label"] for r in data["routes"]] == [
            "direct",
            "alternative_1",
            "alternative_2",
        ]

    def test_zero_amount_rejected(self, client):
        response = client.post("/routes", json={"from": "AQUA", "to": "XLM", "amount": "0"})
        # Zero amounts pass schema validation and are rejected by the router
        assert response.json()["error"] == "invalid_request"
        assert response.json()["routes"] == []
