"""Result types for routing operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from swave_router.errors import RouteError
from swave_router.models.route import Route


@dataclass(frozen=True)
class RouteResult:
    """Result of a single-route computation.

    Failures are explicit values so callers can branch on error kind
    without inspecting numeric sentinels.

    Examples:
        result = router.find_optimal_route("XLM", "AQUA", 1_000 * 10**7)
        if result.is_valid:
            submit(result.route)
        elif result.error is RouteError.INSUFFICIENT_LIQUIDITY:
            retry_with_smaller_amount()
    """

    route: Route | None
    error: RouteError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if a route was produced."""
        return self.error is None and self.route is not None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def with_route(cls, route: Route) -> RouteResult:
        return cls(route=route)

    @classmethod
    def with_error(cls, error: RouteError, detail: str | None = None) -> RouteResult:
        return cls(route=None, error=error, error_detail=detail)


@dataclass(frozen=True)
class RoutesResult:
    """Result of an alternative route search.

    routes is ranked best first. When the primary route cannot be found the
    result carries that error and no routes.
    """

    routes: list[Route] = field(default_factory=list)
    error: RouteError | None = None
    error_detail: str | None = None
    # True when the search stopped early on its wall-clock budget
    truncated: bool = False

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def best(self) -> Route | None:
        return self.routes[0] if self.routes else None

    @classmethod
    def with_error(cls, error: RouteError, detail: str | None = None) -> RoutesResult:
        return cls(routes=[], error=error, error_detail=detail)


__all__ = ["RouteResult", "RoutesResult"]
