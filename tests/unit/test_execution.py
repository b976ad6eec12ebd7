"""Tests for execution request building and cost estimation."""

from datetime import timedelta
from decimal import Decimal

import pytest

from swave_router.config import RouterConfig
from swave_router.errors import ExecutionRequestError
from swave_router.execution import (
    build_execution_request,
    estimate_execution_cost,
    minimum_amount_out,
    to_bps,
)
from tests.helpers import FIXED_NOW, UNIT, USDC, XLM, make_route

HALF_PERCENT = Decimal("0.005")


@pytest.fixture
def direct_route(router):
    return router.find_optimal_route(XLM, USDC, 1_000 * UNIT).route


class TestBuildExecutionRequest:
    """Tests for build_execution_request."""

    def test_request_fields(self, direct_route):
        request = build_execution_request(direct_route, HALF_PERCENT, FIXED_NOW)

        assert request.steps == direct_route.steps
        assert request.pool_ids == ("xlm-usdc",)
        assert request.total_amount_in == direct_route.amount_in
        assert request.total_amount_out == direct_route.amount_out
        assert request.total_fees == direct_route.total_fees
        assert request.max_slippage_bps == 50
        assert request.expected_slippage_bps == to_bps(direct_route.price_impact)
        assert request.deadline == FIXED_NOW + timedelta(seconds=300)
        assert request.expires_at == request.deadline

    def test_min_amount_out_rounds_down(self, direct_route):
        request = build_execution_request(direct_route, HALF_PERCENT, FIXED_NOW)
        assert request.min_amount_out == direct_route.amount_out * 995 // 1000
        assert request.min_amount_out < request.total_amount_out

    def test_custom_deadline(self, direct_route):
        request = build_execution_request(
            direct_route, HALF_PERCENT, FIXED_NOW, deadline_seconds=60
        )
        assert request.deadline == FIXED_NOW + timedelta(seconds=60)

    def test_identity_route_rejected(self, router):
        route = router.find_optimal_route(XLM, XLM, 1_000 * UNIT).route
        with pytest.raises(ExecutionRequestError, match="no swap steps"):
            build_execution_request(route, HALF_PERCENT, FIXED_NOW)

    @pytest.mark.parametrize("tolerance", ["-0.001", "0.2"])
    def test_tolerance_out_of_range(self, direct_route, tolerance):
        with pytest.raises(ExecutionRequestError, match="slippage tolerance"):
            build_execution_request(direct_route, Decimal(tolerance), FIXED_NOW)

    def test_amount_below_minimum(self, router):
        route = router.find_optimal_route(XLM, USDC, 100_000).route
        with pytest.raises(ExecutionRequestError, match="minimum swap amount"):
            build_execution_request(route, HALF_PERCENT, FIXED_NOW)

    def test_stale_route(self, direct_route):
        later = FIXED_NOW + timedelta(seconds=31)
        with pytest.raises(ExecutionRequestError, match="expired"):
            build_execution_request(direct_route, HALF_PERCENT, later)

    def test_route_at_ttl_still_fresh(self, direct_route):
        later = FIXED_NOW + timedelta(seconds=30)
        assert build_execution_request(direct_route, HALF_PERCENT, later).deadline > later

    def test_impact_above_tolerance(self, direct_route):
        # 1,000 of 1,000,000 XLM moves the price by about 0.2%
        with pytest.raises(ExecutionRequestError, match="price impact"):
            build_execution_request(direct_route, Decimal("0.001"), FIXED_NOW)

    def test_config_limits(self, direct_route):
        config = RouterConfig(max_slippage=Decimal("0.002"))
        with pytest.raises(ExecutionRequestError):
            build_execution_request(direct_route, HALF_PERCENT, FIXED_NOW, config=config)


class TestHelpers:
    def test_minimum_amount_out(self):
        assert minimum_amount_out(1000, Decimal("0.005")) == 995
        assert minimum_amount_out(999, Decimal("0.005")) == 994

    def test_to_bps(self):
        assert to_bps(Decimal("0.005")) == 50
        assert to_bps(Decimal("0.00019")) == 1


class TestEstimateExecutionCost:
    """Network fee grows per step with a surcharge above two steps."""

    def test_single_hop(self):
        cost = estimate_execution_cost(make_route(hops=1))
        assert cost.network_fees == 100
        assert cost.total_steps == 1
        assert cost.estimated_time_seconds == 5
        assert cost.gas_limit == 100_000

    def test_two_hops_no_surcharge(self):
        assert estimate_execution_cost(make_route(hops=2)).network_fees == 200

    def test_three_hops_surcharge(self):
        cost = estimate_execution_cost(make_route(hops=3))
        assert cost.network_fees == 350
        assert cost.estimated_time_seconds == 15
        assert cost.gas_limit == 300_000
