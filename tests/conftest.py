"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from swave_router.liquidity import StaticLiquiditySource
from swave_router.models.snapshot import LiquiditySnapshot
from swave_router.routing.router import SwapRouter
from tests.helpers import AQUA, UNIT, USDC, XLM, fixed_clock, make_pool, make_snapshot


@pytest.fixture
def chain_snapshot() -> LiquiditySnapshot:
    """XLM-USDC and USDC-AQUA pools; XLM reaches AQUA only through USDC.

    Spot prices: 1 XLM = 0.1 USDC, 1 USDC = 100 AQUA.
    """
    return make_snapshot(
        make_pool("xlm-usdc", XLM, USDC, 1_000_000 * UNIT, 100_000 * UNIT),
        make_pool("usdc-aqua", USDC, AQUA, 100_000 * UNIT, 10_000_000 * UNIT),
    )


@pytest.fixture
def multi_pool_snapshot() -> LiquiditySnapshot:
    """Three pool-disjoint XLM to USDC routes, all at a 0.1 USDC spot price.

    - xlm-usdc-deep: direct, deepest
    - xlm-usdc-shallow: direct, half the depth
    - xlm-aqua + aqua-usdc: two hops
    """
    return make_snapshot(
        make_pool("xlm-usdc-deep", XLM, USDC, 1_000_000 * UNIT, 100_000 * UNIT),
        make_pool("xlm-usdc-shallow", XLM, USDC, 500_000 * UNIT, 50_000 * UNIT),
        make_pool("xlm-aqua", XLM, AQUA, 1_000_000 * UNIT, 10_000_000 * UNIT),
        make_pool("aqua-usdc", AQUA, USDC, 10_000_000 * UNIT, 100_000 * UNIT),
    )


@pytest.fixture
def router(chain_snapshot: LiquiditySnapshot) -> SwapRouter:
    """Router over the chain snapshot with a fixed clock."""
    return SwapRouter(source=StaticLiquiditySource(chain_snapshot), clock=fixed_clock)


@pytest.fixture
def snapshot_file(tmp_path: Path, chain_snapshot: LiquiditySnapshot) -> Path:
    """Chain snapshot written as a JSON document using the wire aliases."""
    path = tmp_path / "liquidity.json"
    with open(path, "w") as f:
        json.dump(chain_snapshot.model_dump(mode="json", by_alias=True), f)
    return path
