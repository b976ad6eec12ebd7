"""Router error types.

RouteError is the taxonomy returned to callers inside result values.
The exception classes are raised at internal seams and converted into
RouteError values by the router facade.
"""

from enum import Enum


class RouteError(str, Enum):
    """Kinds of routing failure."""

    NO_ROUTE_FOUND = "no_route_found"
    MALFORMED_SNAPSHOT = "malformed_snapshot"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    INVALID_REQUEST = "invalid_request"


class SwaveRouterError(Exception):
    """Base error for router operations."""

    pass


class MalformedSnapshotError(SwaveRouterError):
    """Snapshot violates referential integrity (e.g. pool with unknown token)."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems))


class ExecutionRequestError(SwaveRouterError):
    """Route cannot be turned into an execution request."""

    pass
