"""Execution request building for the swap submitter.

The router does not sign or submit transactions. These helpers turn a
finalized Route into the request shape the on-chain swap contract checks
(minimum output, slippage tolerance in bps, expiry and deadline), and
estimate the network cost of executing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_FLOOR, Decimal

import structlog
from pydantic import BaseModel, Field

from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.errors import ExecutionRequestError
from swave_router.models.route import Route, RouteStep

logger = structlog.get_logger()


def to_bps(fraction: Decimal, config: RouterConfig = DEFAULT_ROUTER_CONFIG) -> int:
    """Convert a fraction to whole basis points, rounding down."""
    return int((fraction * config.bps_scale).to_integral_value(rounding=ROUND_FLOOR))


class ExecutionRequest(BaseModel):
    """Swap request handed to the execution submitter."""

    steps: tuple[RouteStep, ...]
    total_amount_in: int = Field(gt=0)
    total_amount_out: int = Field(gt=0)
    total_fees: int = Field(ge=0)
    expected_slippage_bps: int = Field(ge=0)
    max_slippage_bps: int = Field(ge=0)
    min_amount_out: int = Field(ge=0)
    expires_at: datetime
    deadline: datetime

    model_config = {"frozen": True}

    @property
    def pool_ids(self) -> tuple[str, ...]:
        return tuple(step.pool_id for step in self.steps)


@dataclass(frozen=True)
class ExecutionCost:
    """Estimated cost of executing a route on the network."""

    network_fees: int
    total_steps: int
    estimated_time_seconds: int
    gas_limit: int


def minimum_amount_out(amount_out: int, max_slippage: Decimal) -> int:
    """Smallest acceptable output for a slippage tolerance, rounded down."""
    value = Decimal(amount_out) * (Decimal(1) - max_slippage)
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def build_execution_request(
    route: Route,
    max_slippage: Decimal,
    now: datetime,
    deadline_seconds: int | None = None,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> ExecutionRequest:
    """Build the execution request for a route.

    Args:
        route: Route to execute
        max_slippage: Slippage tolerance as a fraction (0.005 for 0.5%)
        now: Current time, used for staleness and expiry
        deadline_seconds: Seconds until the request expires (default from config)
        config: Router configuration

    Returns:
        ExecutionRequest ready for submission

    Raises:
        ExecutionRequestError: If the route is empty or stale, the tolerance is
            out of range, the amount is below the minimum, or the route's
            price impact already exceeds the tolerance
    """
    if route.is_identity or not route.steps:
        raise ExecutionRequestError("route has no swap steps")

    if max_slippage < 0 or max_slippage > config.max_slippage:
        raise ExecutionRequestError(
            f"slippage tolerance {max_slippage} outside [0, {config.max_slippage}]"
        )

    if route.amount_in < config.min_swap_amount:
        raise ExecutionRequestError(
            f"amount {route.amount_in} below minimum swap amount {config.min_swap_amount}"
        )

    if route.is_stale(now, config.route_ttl_seconds):
        raise ExecutionRequestError(
            f"route expired ({route.age(now):.1f}s old), please refresh"
        )

    if route.price_impact > max_slippage:
        raise ExecutionRequestError(
            f"price impact {route.price_impact:.4%} exceeds maximum {max_slippage:.4%}"
        )

    if deadline_seconds is None:
        deadline_seconds = config.execution_deadline_seconds
    deadline = now + timedelta(seconds=deadline_seconds)

    request = ExecutionRequest(
        steps=route.steps,
        total_amount_in=route.amount_in,
        total_amount_out=route.amount_out,
        total_fees=route.total_fees,
        expected_slippage_bps=to_bps(route.price_impact, config),
        max_slippage_bps=to_bps(max_slippage, config),
        min_amount_out=minimum_amount_out(route.amount_out, max_slippage),
        expires_at=deadline,
        deadline=deadline,
    )
    logger.info(
        "execution_request_built",
        pools=list(request.pool_ids),
        amount_in=request.total_amount_in,
        min_amount_out=request.min_amount_out,
        max_slippage_bps=request.max_slippage_bps,
    )
    return request


def estimate_execution_cost(
    route: Route,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> ExecutionCost:
    """Estimate network fees, latency and resource limits for a route.

    Routes longer than two hops pay an extra half step fee for complexity.
    """
    steps = route.hop_count
    network_fees = config.network_fee_per_step * steps
    if steps > 2:
        network_fees += config.network_fee_per_step // 2

    return ExecutionCost(
        network_fees=network_fees,
        total_steps=steps,
        estimated_time_seconds=steps * config.seconds_per_hop,
        gas_limit=steps * config.gas_per_step,
    )


__all__ = [
    "ExecutionCost",
    "ExecutionRequest",
    "build_execution_request",
    "estimate_execution_cost",
    "minimum_amount_out",
    "to_bps",
]
