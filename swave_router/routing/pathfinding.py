"""Minimum-cost path search over the token graph.

Dijkstra over tokens, where an edge's cost depends on the amount flowing
through it. The amount used to price an edge is the amount that would
arrive at the edge's origin along the current best path, not the original
input: fees shrink the flowing amount hop over hop, and pricing every hop
at the original amount would misprice multi-hop routes.

This breaks Dijkstra's static-weight assumption. Propagating the expected
amount at relaxation time is an accepted approximation; an exact answer
would need a search over (token, amount) states.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field

import structlog

from swave_router.amm.constant_product import constant_product
from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.models.types import normalize_symbol
from swave_router.routing.graph import GraphEdge, TokenGraph

logger = structlog.get_logger()


@dataclass
class PathResult:
    """Outcome of a path search.

    found=False is the explicit "no path" outcome. blocked is True when the
    target is connected to the source but every connecting edge collapsed
    the flowing amount to zero.
    """

    source: str
    target: str
    found: bool
    edges: list[GraphEdge] = field(default_factory=list)
    cost: int = 0
    blocked: bool = False

    @property
    def path(self) -> list[str]:
        """Token symbols from source to target."""
        if not self.found:
            return []
        return [self.source] + [edge.token_out for edge in self.edges]

    @property
    def pool_ids(self) -> list[str]:
        return [edge.pool_id for edge in self.edges]


class PathFinder:
    """Dijkstra search over a TokenGraph.

    Usage:
        finder = PathFinder(TokenGraph.from_snapshot(snapshot))
        result = finder.find("XLM", "AQUA", 1_000 * 10**7)
    """

    def __init__(self, graph: TokenGraph, config: RouterConfig = DEFAULT_ROUTER_CONFIG) -> None:
        self.graph = graph
        self.config = config

    def find(self, source: str, target: str, amount_in: int) -> PathResult:
        """Find the minimum-cost path from source to target for amount_in.

        Ties between equal distances are broken by the order in which the
        nodes were first queued, so identical inputs give identical paths.

        Args:
            source: Source token symbol
            target: Target token symbol
            amount_in: Amount entering at the source

        Returns:
            PathResult with the edges of the best path, or found=False
        """
        source = normalize_symbol(source)
        target = normalize_symbol(target)

        if source == target:
            return PathResult(source=source, target=target, found=True)

        if not self.graph.has_token(source) or not self.graph.has_token(target):
            return PathResult(source=source, target=target, found=False)

        distances: dict[str, int] = {source: 0}
        # Amount arriving at each token along its best known path
        arriving: dict[str, int] = {source: amount_in}
        previous: dict[str, GraphEdge] = {}
        settled: set[str] = set()
        blocked_edges = 0

        sequence = itertools.count()
        queue: list[tuple[int, int, str]] = [(0, next(sequence), source)]

        while queue:
            distance, _, current = heapq.heappop(queue)
            if current in settled or distance > distances[current]:
                continue
            settled.add(current)

            if current == target:
                break

            flowing = arriving[current]
            for edge in self.graph.edges_from(current):
                neighbor = edge.token_out
                if neighbor in settled:
                    continue

                quote = constant_product.evaluate_hop(edge, flowing, self.config)
                if not quote.is_reachable:
                    blocked_edges += 1
                    continue

                candidate = distance + int(quote.cost)
                if candidate < distances.get(neighbor, candidate + 1):
                    distances[neighbor] = candidate
                    arriving[neighbor] = quote.amount_out
                    previous[neighbor] = edge
                    heapq.heappush(queue, (candidate, next(sequence), neighbor))

        if target not in settled:
            blocked = blocked_edges > 0 and self.graph.is_reachable(source, target)
            logger.debug(
                "path_not_found",
                source=source,
                target=target,
                settled=len(settled),
                blocked=blocked,
            )
            return PathResult(source=source, target=target, found=False, blocked=blocked)

        edges = self._reconstruct(previous, source, target)
        return PathResult(
            source=source,
            target=target,
            found=True,
            edges=edges,
            cost=distances[target],
        )

    @staticmethod
    def _reconstruct(previous: dict[str, GraphEdge], source: str, target: str) -> list[GraphEdge]:
        """Walk predecessor edges back from target to source."""
        edges: list[GraphEdge] = []
        current = target
        while current != source:
            edge = previous[current]
            edges.append(edge)
            current = edge.token_in
        edges.reverse()
        return edges


__all__ = ["PathFinder", "PathResult"]
