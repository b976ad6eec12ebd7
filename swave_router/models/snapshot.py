"""Liquidity snapshot models.

A LiquiditySnapshot is the immutable view of tokens and pools a single
routing computation runs against. All models are frozen: deactivating a
pool produces a new snapshot instead of mutating the caller's records.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, Field

from swave_router.constants import BASE_FEE_RATE, DEFAULT_SLIPPAGE_ESTIMATE
from swave_router.models.types import Amount, Rate, Symbol, normalize_symbol


class Token(BaseModel):
    """Tradable asset reference data."""

    symbol: Symbol
    decimals: int = Field(default=7, ge=0, le=38)
    name: str | None = None

    model_config = {"frozen": True}


class Pool(BaseModel):
    """Constant-product pool between two tokens."""

    id: str = Field(min_length=1)
    token_a: Symbol = Field(alias="tokenA")
    token_b: Symbol = Field(alias="tokenB")
    reserve_a: Amount = Field(alias="reserveA")
    reserve_b: Amount = Field(alias="reserveB")
    fee_rate: Rate = Field(default=BASE_FEE_RATE, alias="fee")
    slippage_estimate: Rate = Field(default=DEFAULT_SLIPPAGE_ESTIMATE, alias="slippage")
    active: bool = True

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def is_routable(self) -> bool:
        """True if the pool can price trades in both directions."""
        return (
            self.active
            and self.token_a != self.token_b
            and self.reserve_a > 0
            and self.reserve_b > 0
        )

    def has_token(self, symbol: str) -> bool:
        symbol = normalize_symbol(symbol)
        return symbol in (self.token_a, self.token_b)

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in = normalize_symbol(token_in)
        if token_in == self.token_a:
            return self.reserve_a, self.reserve_b
        elif token_in == self.token_b:
            return self.reserve_b, self.reserve_a
        else:
            raise ValueError(f"Token {token_in} not in pool {self.id}")

    def spot_price(self, token_in: str) -> Decimal:
        """Pre-trade marginal price of token_in in units of the other token."""
        reserve_in, reserve_out = self.get_reserves(token_in)
        if reserve_in == 0:
            return Decimal(0)
        return Decimal(reserve_out) / Decimal(reserve_in)


class LiquiditySnapshot(BaseModel):
    """Tokens and pools supplied by a liquidity source for one computation."""

    tokens: tuple[Token, ...] = ()
    pools: tuple[Pool, ...] = ()

    model_config = {"frozen": True}

    @property
    def symbols(self) -> set[str]:
        return {token.symbol for token in self.tokens}

    def has_token(self, symbol: str) -> bool:
        return normalize_symbol(symbol) in self.symbols

    def token(self, symbol: str) -> Token | None:
        symbol = normalize_symbol(symbol)
        for token in self.tokens:
            if token.symbol == symbol:
                return token
        return None

    def pool(self, pool_id: str) -> Pool | None:
        for pool in self.pools:
            if pool.id == pool_id:
                return pool
        return None

    def integrity_errors(self) -> list[str]:
        """List referential integrity problems.

        Returns:
            Human-readable problems; empty if the snapshot is consistent.
        """
        problems: list[str] = []

        seen_symbols: set[str] = set()
        for token in self.tokens:
            if token.symbol in seen_symbols:
                problems.append(f"duplicate token symbol {token.symbol}")
            seen_symbols.add(token.symbol)

        seen_pools: set[str] = set()
        for pool in self.pools:
            if pool.id in seen_pools:
                problems.append(f"duplicate pool id {pool.id}")
            seen_pools.add(pool.id)
            for symbol in (pool.token_a, pool.token_b):
                if symbol not in seen_symbols:
                    problems.append(f"pool {pool.id} references unknown token {symbol}")

        return problems

    @property
    def is_consistent(self) -> bool:
        return not self.integrity_errors()

    def without_pools(self, pool_ids: Iterable[str]) -> LiquiditySnapshot:
        """Derive a snapshot with the given pools flagged inactive.

        The receiver and its pools are left untouched.
        """
        excluded = set(pool_ids)
        if not excluded:
            return self
        pools = tuple(
            pool.model_copy(update={"active": False}) if pool.id in excluded else pool
            for pool in self.pools
        )
        return self.model_copy(update={"pools": pools})


__all__ = ["LiquiditySnapshot", "Pool", "Token"]
