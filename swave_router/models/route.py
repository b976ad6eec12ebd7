"""Route models produced by the router.

A Route is the validated, costed sequence of hops handed to callers and,
through them, to whatever submits the swap on-chain. Every numeric field
is finite: unreachable hops never make it into a Route.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class RouteStep(BaseModel):
    """One hop of a route through a single pool."""

    token_in: str
    token_out: str
    pool_id: str
    amount_in: int = Field(ge=0)
    amount_out: int = Field(ge=0)
    fee: int = Field(ge=0)
    price_impact: Decimal = Field(ge=0, description="Fraction, 1 == 100%")
    cost: int = Field(ge=0, description="Hop cost in basis points")

    model_config = {"frozen": True}

    @property
    def rate(self) -> Decimal:
        """Executed exchange rate of this hop (output per input unit)."""
        if self.amount_in == 0:
            return Decimal(0)
        return Decimal(self.amount_out) / Decimal(self.amount_in)


class Route(BaseModel):
    """Costed path from a source token to a destination token.

    Attributes:
        path: Token symbols from source to destination
        steps: One step per adjacent pair in path
        amount_in: Total input amount
        amount_out: Output of the final hop
        total_fees: Sum of per-hop fees (each in its hop's input token)
        price_impact: Sum of per-hop price impacts (linear approximation)
        total_cost: Sum of per-hop costs, in basis points
        spot_rate: Product of pre-trade hop spot prices
        efficiency: Execution rate relative to a reference spot rate, in [0, 100]
        label: "optimal", "direct", "identity" or "alternative_N"
        generated_at: When the route was computed (UTC)
    """

    path: tuple[str, ...]
    steps: tuple[RouteStep, ...] = ()
    amount_in: int = Field(ge=0)
    amount_out: int = Field(ge=0)
    total_fees: int = Field(default=0, ge=0)
    price_impact: Decimal = Field(default=Decimal(0), ge=0)
    total_cost: int = Field(default=0, ge=0)
    spot_rate: Decimal = Field(default=Decimal(1), ge=0)
    efficiency: Decimal = Field(default=Decimal(100), ge=0, le=100)
    label: str = "optimal"
    generated_at: datetime

    model_config = {"frozen": True}

    @property
    def source(self) -> str:
        return self.path[0]

    @property
    def destination(self) -> str:
        return self.path[-1]

    @property
    def hop_count(self) -> int:
        return len(self.steps)

    @property
    def is_identity(self) -> bool:
        """True for the zero-cost route from a token to itself."""
        return len(self.path) == 1

    @property
    def is_multihop(self) -> bool:
        return len(self.steps) > 1

    @property
    def pool_ids(self) -> tuple[str, ...]:
        return tuple(step.pool_id for step in self.steps)

    @property
    def execution_rate(self) -> Decimal:
        """Output per unit of input across the whole route."""
        if self.amount_in == 0:
            return Decimal(0)
        return Decimal(self.amount_out) / Decimal(self.amount_in)

    def age(self, now: datetime) -> float:
        """Seconds elapsed since the route was generated."""
        return (now - self.generated_at).total_seconds()

    def is_stale(self, now: datetime, max_age_seconds: float) -> bool:
        """Check staleness for callers; the router itself never enforces it."""
        return self.age(now) > max_age_seconds


__all__ = ["Route", "RouteStep"]
