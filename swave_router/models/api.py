"""Pydantic models for the routing HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from swave_router.errors import RouteError
from swave_router.models.route import Route
from swave_router.models.snapshot import LiquiditySnapshot
from swave_router.models.types import Amount, Symbol
from swave_router.routing.types import RouteResult, RoutesResult


class RouteRequest(BaseModel):
    """Request for the single best route."""

    source: Symbol = Field(alias="from")
    destination: Symbol = Field(alias="to")
    amount: Amount
    snapshot: LiquiditySnapshot | None = Field(
        default=None,
        description="Liquidity to route through. Defaults to the service's liquidity source.",
    )

    model_config = {"populate_by_name": True}


class RoutesRequest(RouteRequest):
    """Request for ranked, pool-disjoint routes."""

    max_routes: int = Field(default=3, ge=1, le=10, alias="maxRoutes")


class RouteResponse(BaseModel):
    """Single route or an error kind.

    internal_error is set when the search did not complete (timeout or an
    unexpected exception). error is then absent: no liquidity verdict exists.
    """

    route: Route | None = None
    error: RouteError | None = None
    error_detail: str | None = Field(default=None, alias="errorDetail")
    internal_error: bool = Field(default=False, alias="internalError")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: RouteResult) -> RouteResponse:
        return cls(route=result.route, error=result.error, error_detail=result.error_detail)

    @classmethod
    def internal_failure(cls, detail: str) -> RouteResponse:
        return cls(error_detail=detail, internal_error=True)


class RoutesResponse(BaseModel):
    """Ranked routes or an error kind.

    internal_error has the same meaning as on RouteResponse.
    """

    routes: list[Route] = Field(default_factory=list)
    error: RouteError | None = None
    error_detail: str | None = Field(default=None, alias="errorDetail")
    truncated: bool = False
    internal_error: bool = Field(default=False, alias="internalError")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: RoutesResult) -> RoutesResponse:
        return cls(
            routes=result.routes,
            error=result.error,
            error_detail=result.error_detail,
            truncated=result.truncated,
        )

    @classmethod
    def internal_failure(cls, detail: str) -> RoutesResponse:
        return cls(error_detail=detail, internal_error=True)
