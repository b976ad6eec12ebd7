"""Swap routing.

Module structure:
- graph.py: TokenGraph and GraphEdge built from a liquidity snapshot
- pathfinding.py: PathFinder (Dijkstra with amount-dependent edge costs)
- assembler.py: Route assembly and efficiency scoring
- router.py: SwapRouter facade and alternative route search
- types.py: RouteResult and RoutesResult
"""

from swave_router.routing.assembler import assemble_route, identity_route
from swave_router.routing.graph import GraphEdge, TokenGraph
from swave_router.routing.pathfinding import PathFinder, PathResult
from swave_router.routing.router import SwapRouter
from swave_router.routing.types import RouteResult, RoutesResult

__all__ = [
    "GraphEdge",
    "PathFinder",
    "PathResult",
    "RouteResult",
    "RoutesResult",
    "SwapRouter",
    "TokenGraph",
    "assemble_route",
    "identity_route",
]
