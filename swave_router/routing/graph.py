"""Token graph built from a liquidity snapshot.

Each routable pool contributes two directed edges, one per trading
direction, carrying that direction's reserves. The graph is a pure data
structure rebuilt for every computation; nothing is cached between
snapshots.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from decimal import Decimal

import structlog

from swave_router.amm.constant_product import constant_product
from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.errors import MalformedSnapshotError
from swave_router.models.snapshot import LiquiditySnapshot, Pool
from swave_router.models.types import normalize_symbol

logger = structlog.get_logger()


@dataclass(frozen=True)
class GraphEdge:
    """Directed, pool-backed edge from token_in to token_out."""

    pool_id: str
    token_in: str
    token_out: str
    reserve_in: int
    reserve_out: int
    fee_rate: Decimal
    slippage_estimate: Decimal
    # Usable depth for penalty tiers: the input-side reserve
    liquidity_depth: int
    # Fee + slippage estimate in bps, before any depth penalty
    base_cost: int

    @property
    def spot_price(self) -> Decimal:
        """Pre-trade marginal price (token_out per token_in)."""
        return Decimal(self.reserve_out) / Decimal(self.reserve_in)


class TokenGraph:
    """Adjacency list of tokens connected by directed pool edges.

    Edge order follows snapshot pool order, so iteration (and therefore
    tie-breaking during search) is reproducible for identical snapshots.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, list[GraphEdge]] = {}
        self._edge_count = 0

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LiquiditySnapshot,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> TokenGraph:
        """Build a TokenGraph from a liquidity snapshot.

        Args:
            snapshot: Tokens and pools for this computation
            config: Router configuration for edge base costs

        Returns:
            TokenGraph with two edges per routable pool

        Raises:
            MalformedSnapshotError: If a pool references an unknown token
        """
        graph = cls()
        graph._build_from_snapshot(snapshot, config)
        return graph

    def _build_from_snapshot(self, snapshot: LiquiditySnapshot, config: RouterConfig) -> None:
        known = snapshot.symbols
        unknown = [
            f"pool {pool.id} references unknown token {symbol}"
            for pool in snapshot.pools
            for symbol in (pool.token_a, pool.token_b)
            if symbol not in known
        ]
        if unknown:
            raise MalformedSnapshotError(unknown)

        for token in snapshot.tokens:
            self._adjacency.setdefault(token.symbol, [])

        skipped = 0
        for pool in snapshot.pools:
            if not pool.is_routable:
                # Absent liquidity, not malformed liquidity
                skipped += 1
                logger.debug(
                    "pool_skipped",
                    pool_id=pool.id,
                    active=pool.active,
                    reserve_a=pool.reserve_a,
                    reserve_b=pool.reserve_b,
                )
                continue
            self._add_pool(pool, config)

        logger.debug(
            "token_graph_built",
            tokens=self.token_count,
            edges=self._edge_count,
            skipped_pools=skipped,
        )

    def _add_pool(self, pool: Pool, config: RouterConfig) -> None:
        """Add the forward and reverse edges for a pool."""
        base_cost = constant_product.base_cost(pool.fee_rate, pool.slippage_estimate, config)
        for token_in, token_out in ((pool.token_a, pool.token_b), (pool.token_b, pool.token_a)):
            reserve_in, reserve_out = pool.get_reserves(token_in)
            edge = GraphEdge(
                pool_id=pool.id,
                token_in=token_in,
                token_out=token_out,
                reserve_in=reserve_in,
                reserve_out=reserve_out,
                fee_rate=pool.fee_rate,
                slippage_estimate=pool.slippage_estimate,
                liquidity_depth=reserve_in,
                base_cost=base_cost,
            )
            self._adjacency.setdefault(token_in, []).append(edge)
            self._edge_count += 1

    def edges_from(self, token: str) -> list[GraphEdge]:
        """Outgoing edges of a token (empty if unknown)."""
        return self._adjacency.get(normalize_symbol(token), [])

    def edges_between(self, token_in: str, token_out: str) -> list[GraphEdge]:
        """All edges from token_in to token_out, one per pool."""
        token_out = normalize_symbol(token_out)
        return [edge for edge in self.edges_from(token_in) if edge.token_out == token_out]

    def has_token(self, token: str) -> bool:
        return normalize_symbol(token) in self._adjacency

    def is_reachable(self, source: str, target: str) -> bool:
        """Check whether any sequence of edges connects source to target.

        Ignores amounts; used to tell missing liquidity from a graph that
        is simply disconnected.
        """
        source = normalize_symbol(source)
        target = normalize_symbol(target)
        if source == target:
            return True

        queue: deque[str] = deque([source])
        visited = {source}
        while queue:
            current = queue.popleft()
            for edge in self._adjacency.get(current, []):
                if edge.token_out == target:
                    return True
                if edge.token_out not in visited:
                    visited.add(edge.token_out)
                    queue.append(edge.token_out)
        return False

    @property
    def token_count(self) -> int:
        """Number of tokens in the graph."""
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        """Number of directed edges in the graph."""
        return self._edge_count


__all__ = ["GraphEdge", "TokenGraph"]
