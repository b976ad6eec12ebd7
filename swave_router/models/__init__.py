"""Data models for liquidity snapshots and routes."""

from swave_router.models.route import Route, RouteStep
from swave_router.models.snapshot import LiquiditySnapshot, Pool, Token
from swave_router.models.types import Amount, Rate, Symbol, normalize_symbol

__all__ = [
    "Amount",
    "LiquiditySnapshot",
    "Pool",
    "Rate",
    "Route",
    "RouteStep",
    "Symbol",
    "Token",
    "normalize_symbol",
]
