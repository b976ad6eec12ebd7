"""Route assembly from a discovered path.

Re-walks the hops of a path with the actual flowing amount, the output of
hop n becoming the input of hop n+1, and produces the Route entity with
per-step detail and aggregate totals.

Aggregate price impact is the linear sum of per-hop impacts. This is a
modeling simplification rather than a compounded impact; hops usually run
through disjoint pools.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

import structlog

from swave_router.amm.constant_product import constant_product
from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.errors import RouteError
from swave_router.models.route import Route, RouteStep
from swave_router.routing.graph import GraphEdge
from swave_router.routing.types import RouteResult

logger = structlog.get_logger()

_HUNDRED = Decimal(100)


def efficiency_score(amount_in: int, amount_out: int, reference_rate: Decimal) -> Decimal:
    """Execution rate as a percentage of a reference spot rate, clamped to [0, 100]."""
    if amount_in <= 0 or reference_rate <= 0:
        return Decimal(0)
    rate = Decimal(amount_out) / Decimal(amount_in)
    score = rate / reference_rate * _HUNDRED
    return min(_HUNDRED, max(Decimal(0), score))


def identity_route(token: str, amount: int, generated_at: datetime) -> Route:
    """Zero-cost route from a token to itself."""
    return Route(
        path=(token,),
        steps=(),
        amount_in=amount,
        amount_out=amount,
        total_fees=0,
        price_impact=Decimal(0),
        total_cost=0,
        spot_rate=Decimal(1),
        efficiency=_HUNDRED,
        label="identity",
        generated_at=generated_at,
    )


def assemble_route(
    edges: Sequence[GraphEdge],
    amount_in: int,
    generated_at: datetime,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    reference_rate: Decimal | None = None,
    label: str = "optimal",
) -> RouteResult:
    """Build a Route by chaining evaluate_hop along edges.

    Args:
        edges: Path edges from source to destination (at least one)
        amount_in: Amount entering the first hop
        generated_at: Timestamp stamped on the route
        config: Router configuration for hop costs
        reference_rate: Spot rate the efficiency score is measured against.
            Defaults to the route's own spot rate.
        label: Route label

    Returns:
        RouteResult with the Route, or INSUFFICIENT_LIQUIDITY if any hop
        produces no output for its input.
    """
    if not edges:
        return RouteResult.with_error(RouteError.NO_ROUTE_FOUND, "empty path")

    steps: list[RouteStep] = []
    current_amount = amount_in
    total_fees = 0
    total_cost = 0
    price_impact = Decimal(0)
    spot_rate = Decimal(1)

    for i, edge in enumerate(edges):
        quote = constant_product.evaluate_hop(edge, current_amount, config)
        if not quote.is_reachable:
            logger.info(
                "hop_output_collapsed",
                hop=i,
                pool_id=edge.pool_id,
                amount_in=current_amount,
            )
            return RouteResult.with_error(
                RouteError.INSUFFICIENT_LIQUIDITY,
                f"no liquidity for {current_amount} {edge.token_in} in pool {edge.pool_id} "
                f"at hop {i}",
            )

        steps.append(
            RouteStep(
                token_in=edge.token_in,
                token_out=edge.token_out,
                pool_id=edge.pool_id,
                amount_in=current_amount,
                amount_out=quote.amount_out,
                fee=quote.fee,
                price_impact=quote.price_impact,
                cost=int(quote.cost),
            )
        )
        total_fees += quote.fee
        total_cost += int(quote.cost)
        price_impact += quote.price_impact
        spot_rate *= edge.spot_price
        current_amount = quote.amount_out

    if reference_rate is None:
        reference_rate = spot_rate

    route = Route(
        path=tuple([edges[0].token_in] + [edge.token_out for edge in edges]),
        steps=tuple(steps),
        amount_in=amount_in,
        amount_out=current_amount,
        total_fees=total_fees,
        price_impact=price_impact,
        total_cost=total_cost,
        spot_rate=spot_rate,
        efficiency=efficiency_score(amount_in, current_amount, reference_rate),
        label=label,
        generated_at=generated_at,
    )
    return RouteResult.with_route(route)


__all__ = ["assemble_route", "efficiency_score", "identity_route"]
