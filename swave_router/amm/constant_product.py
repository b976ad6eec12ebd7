"""Constant product AMM math and hop cost model.

Pools price trades with x * y = k, charging the fee on the input amount:

    effective_in = amount_in * (1 - fee_rate)
    amount_out = effective_in * reserve_out / (reserve_in + effective_in)

All amount math is integer fixed point (fee rates scaled to 1e18) and
rounds toward zero, so a quoted output never exceeds what the pool pays.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import TYPE_CHECKING

import structlog

from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.constants import FEE_SCALE, INFINITE_COST
from swave_router.safe_int import S, SafeIntError

if TYPE_CHECKING:
    from swave_router.routing.graph import GraphEdge

logger = structlog.get_logger()


@dataclass(frozen=True)
class HopQuote:
    """Result of evaluating one hop for a given input amount.

    Attributes:
        amount_out: Output amount (0 when the hop cannot be traded)
        fee: Fee charged on the input amount
        price_impact: Relative move of the pool's marginal price (1 == 100%)
        cost: Path comparison cost in basis points, INFINITE_COST if unreachable
    """

    amount_out: int
    fee: int
    price_impact: Decimal
    cost: int | float

    @property
    def is_reachable(self) -> bool:
        """True if the hop produces output at a finite cost."""
        return self.amount_out > 0 and self.cost != INFINITE_COST

    @classmethod
    def unreachable(cls) -> HopQuote:
        """Quote for a hop that cannot price the trade."""
        return cls(amount_out=0, fee=0, price_impact=Decimal(1), cost=INFINITE_COST)


class ConstantProduct:
    """Constant product math with fee on input.

    Formula: amount_out = (in * mult * res_out) / (res_in * SCALE + in * mult)
    where mult = SCALE * (1 - fee_rate).
    """

    def fee_units(self, fee_rate: Decimal) -> int:
        """Fee rate in 1e18 fixed point, rounded up."""
        return int((fee_rate * FEE_SCALE).to_integral_value(rounding=ROUND_CEILING))

    def fee_multiplier(self, fee_rate: Decimal) -> int:
        """Fraction of the input that reaches the curve, in 1e18 fixed point.

        For 0.3% this returns 997 * 10**15.
        """
        return FEE_SCALE - self.fee_units(fee_rate)

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_rate: Decimal,
    ) -> int:
        """Calculate output amount using the constant product formula.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_rate: Pool fee as a fraction (0.003 for 0.3%)

        Returns:
            Output token amount, rounded down
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * S(self.fee_multiplier(fee_rate))
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_SCALE) + amount_in_with_fee

        return (numerator // denominator).value

    def get_fee(self, amount_in: int, fee_rate: Decimal) -> int:
        """Fee charged on amount_in, rounded down."""
        if amount_in <= 0:
            return 0
        return S(amount_in).mul_div(self.fee_units(fee_rate), FEE_SCALE).value

    def price_impact(
        self,
        amount_in: int,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
    ) -> Decimal:
        """Relative deviation of the post-trade marginal price from the pre-trade one.

        price_before = reserve_out / reserve_in
        price_after = (reserve_out - amount_out) / (reserve_in + amount_in)
        """
        if reserve_in <= 0 or reserve_out <= 0:
            return Decimal(1)

        price_before = Decimal(reserve_out) / Decimal(reserve_in)
        remaining_out = (S(reserve_out) - S(amount_out)).value
        price_after = Decimal(remaining_out) / Decimal(reserve_in + amount_in)
        return abs(price_after - price_before) / price_before

    def base_cost(
        self,
        fee_rate: Decimal,
        slippage_estimate: Decimal,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> int:
        """Amount-independent edge cost: fee plus slippage estimate, in bps."""
        bps = (fee_rate + slippage_estimate) * config.bps_scale
        return int(bps.to_integral_value(rounding=ROUND_FLOOR))

    def depth_penalty(
        self,
        amount_in: int,
        liquidity_depth: int,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> int:
        """Tiered penalty for trades large relative to pool depth, in bps."""
        if liquidity_depth <= 0:
            return config.high_impact_penalty_bps

        ratio = Decimal(amount_in) / Decimal(liquidity_depth)
        if ratio > config.high_impact_ratio:
            return config.high_impact_penalty_bps
        if ratio > config.medium_impact_ratio:
            return config.medium_impact_penalty_bps
        return 0

    def evaluate_hop(
        self,
        edge: GraphEdge,
        amount_in: int,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> HopQuote:
        """Quote a hop through an edge for a given input amount.

        Zero reserves or a zero input make the hop unreachable. A positive
        input that rounds to zero output is also unreachable, but keeps its
        fee and impact for diagnostics.
        """
        if edge.reserve_in <= 0 or edge.reserve_out <= 0 or amount_in <= 0:
            return HopQuote.unreachable()

        try:
            amount_out = self.get_amount_out(
                amount_in, edge.reserve_in, edge.reserve_out, edge.fee_rate
            )
            fee = self.get_fee(amount_in, edge.fee_rate)
            impact = self.price_impact(amount_in, amount_out, edge.reserve_in, edge.reserve_out)
        except SafeIntError as e:
            logger.debug(
                "hop_arithmetic_failed",
                pool_id=edge.pool_id,
                amount_in=amount_in,
                error=str(e),
            )
            return HopQuote.unreachable()

        if amount_out == 0:
            return HopQuote(amount_out=0, fee=fee, price_impact=impact, cost=INFINITE_COST)

        cost = edge.base_cost + self.depth_penalty(amount_in, edge.liquidity_depth, config)
        return HopQuote(amount_out=amount_out, fee=fee, price_impact=impact, cost=cost)


# Singleton instance
constant_product = ConstantProduct()


def evaluate_hop(
    edge: GraphEdge,
    amount_in: int,
    config: RouterConfig = DEFAULT_ROUTER_CONFIG,
) -> HopQuote:
    """Quote a hop with the constant product model."""
    return constant_product.evaluate_hop(edge, amount_in, config)


__all__ = ["ConstantProduct", "HopQuote", "constant_product", "evaluate_hop"]
