"""Swap routing facade.

SwapRouter ties the pieces together for one request:

    snapshot -> TokenGraph -> PathFinder -> assemble_route -> Route

and runs the alternative route search, which repeatedly deactivates the
pools used so far (in a derived snapshot, never the caller's) and searches
again. Every public operation returns a result value; errors never escape
as exceptions or as partial routes.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

import structlog

from swave_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from swave_router.errors import MalformedSnapshotError, RouteError
from swave_router.liquidity import LiquiditySource
from swave_router.models.route import Route
from swave_router.models.snapshot import LiquiditySnapshot
from swave_router.models.types import normalize_symbol
from swave_router.routing.assembler import assemble_route, efficiency_score, identity_route
from swave_router.routing.graph import TokenGraph
from swave_router.routing.pathfinding import PathFinder
from swave_router.routing.types import RouteResult, RoutesResult
from swave_router.safe_int import S

logger = structlog.get_logger()

_CENT = Decimal("0.01")


def utc_now() -> datetime:
    return datetime.now(UTC)


def _routes_error(result: RouteResult) -> RoutesResult:
    """Lift a failed single-route result into a RoutesResult."""
    error = result.error if result.error is not None else RouteError.NO_ROUTE_FOUND
    return RoutesResult.with_error(error, result.error_detail)


class SwapRouter:
    """Finds optimal and alternative swap routes through constant product pools.

    Args:
        source: Liquidity source used when a call does not pass a snapshot.
        config: Cost and execution configuration.
        clock: Returns the timestamp stamped on routes. Inject a fixed clock
               for reproducible output.
        monotonic: Timer for the alternative search's wall-clock budget.
    """

    def __init__(
        self,
        source: LiquiditySource | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        clock: Callable[[], datetime] = utc_now,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.config = config
        self._clock = clock
        self._monotonic = monotonic

    def find_optimal_route(
        self,
        source: str,
        destination: str,
        amount: int,
        snapshot: LiquiditySnapshot | None = None,
    ) -> RouteResult:
        """Find the minimum-cost route for swapping amount of source into destination.

        Args:
            source: Source token symbol
            destination: Destination token symbol
            amount: Input amount in the source token's smallest unit
            snapshot: Liquidity to route through. Defaults to the router's source.

        Returns:
            RouteResult with the route, or one of:
            - INVALID_REQUEST: bad amount or symbol, unknown token, or no liquidity available
            - MALFORMED_SNAPSHOT: pool referencing an unknown token
            - NO_ROUTE_FOUND: no active pools connect the tokens
            - INSUFFICIENT_LIQUIDITY: connected, but the amount collapses to zero
        """
        prepared = self._prepare(source, destination, amount, snapshot)
        if isinstance(prepared, RouteResult):
            return prepared
        resolved, source, destination = prepared
        generated_at = self._clock()

        if source == destination:
            return RouteResult.with_route(identity_route(source, amount, generated_at))

        result = self._route_once(resolved, source, destination, amount, generated_at)
        if result.is_valid:
            assert result.route is not None
            self._log_route("route_found", result.route)
        else:
            logger.warning(
                "route_not_found",
                source=source,
                destination=destination,
                amount=amount,
                error=result.error.value if result.error else None,
                detail=result.error_detail,
            )
        return result

    def find_routes(
        self,
        source: str,
        destination: str,
        amount: int,
        max_routes: int | None = None,
        snapshot: LiquiditySnapshot | None = None,
        time_budget: float | None = None,
    ) -> RoutesResult:
        """Find up to max_routes pool-disjoint routes, ranked by efficiency.

        The primary route comes from find_optimal_route's search. Each next
        alternative is searched in a derived snapshot where every pool used
        by an earlier route is inactive, so no two routes share a pool. This
        never finds split routes that spread one trade over several pools.

        Efficiency is re-scored against one shared reference, the best spot
        rate among the routes found, so scores are comparable across routes.

        Args:
            source: Source token symbol
            destination: Destination token symbol
            amount: Input amount
            max_routes: Maximum number of routes (default from config)
            snapshot: Liquidity to route through. Defaults to the router's source.
            time_budget: Optional wall-clock budget in seconds; checked between
                         iterations.

        Returns:
            RoutesResult ranked best first, or the primary route's error
        """
        if max_routes is None:
            max_routes = self.config.default_max_routes
        if isinstance(max_routes, bool) or not isinstance(max_routes, int) or max_routes < 1:
            return RoutesResult.with_error(
                RouteError.INVALID_REQUEST, f"max_routes must be a positive integer: {max_routes}"
            )

        prepared = self._prepare(source, destination, amount, snapshot)
        if isinstance(prepared, RouteResult):
            return _routes_error(prepared)
        resolved, source, destination = prepared
        generated_at = self._clock()

        if source == destination:
            return RoutesResult(routes=[identity_route(source, amount, generated_at)])

        primary = self._route_once(resolved, source, destination, amount, generated_at)
        if not primary.is_valid:
            logger.warning(
                "route_not_found",
                source=source,
                destination=destination,
                amount=amount,
                error=primary.error.value if primary.error else None,
                detail=primary.error_detail,
            )
            return _routes_error(primary)

        assert primary.route is not None
        routes: list[Route] = [primary.route]
        used_pools: set[str] = set(primary.route.pool_ids)
        started = self._monotonic()
        truncated = False

        for i in range(1, max_routes):
            if time_budget is not None and self._monotonic() - started >= time_budget:
                truncated = True
                logger.info(
                    "alternative_search_budget_exhausted",
                    source=source,
                    destination=destination,
                    routes_found=len(routes),
                    time_budget=time_budget,
                )
                break

            remaining = resolved.without_pools(used_pools)
            alternative = self._route_once(
                remaining,
                source,
                destination,
                amount,
                generated_at,
                label=f"alternative_{i}",
            )
            if not alternative.is_valid:
                logger.debug(
                    "alternative_search_exhausted",
                    iteration=i,
                    excluded_pools=sorted(used_pools),
                    error=alternative.error.value if alternative.error else None,
                )
                break

            assert alternative.route is not None
            routes.append(alternative.route)
            used_pools.update(alternative.route.pool_ids)

        ranked = self._rank(routes)
        logger.info(
            "routes_found",
            source=source,
            destination=destination,
            amount=amount,
            count=len(ranked),
            best_label=ranked[0].label,
            truncated=truncated,
        )
        return RoutesResult(routes=ranked, truncated=truncated)

    def _prepare(
        self,
        source: str,
        destination: str,
        amount: int,
        snapshot: LiquiditySnapshot | None,
    ) -> tuple[LiquiditySnapshot, str, str] | RouteResult:
        """Validate a request and resolve the snapshot it runs against.

        Returns:
            (snapshot, source, destination) with normalized symbols, or an
            error RouteResult
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            return RouteResult.with_error(
                RouteError.INVALID_REQUEST, f"amount must be an integer, got {type(amount).__name__}"
            )
        if amount <= 0:
            return RouteResult.with_error(RouteError.INVALID_REQUEST, "amount must be positive")
        if not S(amount).is_i128():
            return RouteResult.with_error(RouteError.INVALID_REQUEST, "amount exceeds i128 range")

        if snapshot is None:
            if self.source is None:
                return RouteResult.with_error(
                    RouteError.INVALID_REQUEST, "no liquidity snapshot or source configured"
                )
            # One snapshot for the whole computation
            snapshot = self.source.snapshot()

        problems = snapshot.integrity_errors()
        if problems:
            logger.warning("malformed_snapshot", problems=problems)
            return RouteResult.with_error(RouteError.MALFORMED_SNAPSHOT, "; ".join(problems))

        for symbol in (source, destination):
            if not isinstance(symbol, str):
                return RouteResult.with_error(
                    RouteError.INVALID_REQUEST,
                    f"token symbol must be a string, got {type(symbol).__name__}",
                )

        source = normalize_symbol(source)
        destination = normalize_symbol(destination)
        for symbol in (source, destination):
            if not snapshot.has_token(symbol):
                return RouteResult.with_error(RouteError.INVALID_REQUEST, f"unknown token {symbol}")

        return snapshot, source, destination

    def _route_once(
        self,
        snapshot: LiquiditySnapshot,
        source: str,
        destination: str,
        amount: int,
        generated_at: datetime,
        label: str | None = None,
    ) -> RouteResult:
        """Build the graph, search it and assemble the route."""
        try:
            graph = TokenGraph.from_snapshot(snapshot, self.config)
        except MalformedSnapshotError as e:
            return RouteResult.with_error(RouteError.MALFORMED_SNAPSHOT, str(e))

        path = PathFinder(graph, self.config).find(source, destination, amount)
        if not path.found:
            if path.blocked:
                return RouteResult.with_error(
                    RouteError.INSUFFICIENT_LIQUIDITY,
                    f"{amount} {source} cannot reach {destination} without output collapsing",
                )
            return RouteResult.with_error(
                RouteError.NO_ROUTE_FOUND, f"no active pools connect {source} to {destination}"
            )

        if label is None:
            label = "direct" if len(path.edges) == 1 else "optimal"

        return assemble_route(path.edges, amount, generated_at, self.config, label=label)

    @staticmethod
    def _rank(routes: list[Route]) -> list[Route]:
        """Re-score against the best spot rate and sort by efficiency, then output."""
        reference = max(route.spot_rate for route in routes)
        rescored = [
            route.model_copy(
                update={
                    "efficiency": efficiency_score(route.amount_in, route.amount_out, reference)
                }
            )
            for route in routes
        ]
        # sorted is stable: equal scores keep discovery order
        return sorted(rescored, key=lambda r: (-r.efficiency, -r.amount_out))

    @staticmethod
    def _log_route(event: str, route: Route) -> None:
        logger.info(
            event,
            path=list(route.path),
            hops=route.hop_count,
            amount_in=route.amount_in,
            amount_out=route.amount_out,
            total_fees=route.total_fees,
            total_cost=route.total_cost,
            efficiency=str(route.efficiency.quantize(_CENT)),
        )


__all__ = ["SwapRouter", "utc_now"]
