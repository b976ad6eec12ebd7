"""API endpoints for the swap router."""

import asyncio
import os
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends

from swave_router.liquidity import StaticLiquiditySource
from swave_router.models.api import RouteRequest, RouteResponse, RoutesRequest, RoutesResponse
from swave_router.routing.router import SwapRouter

logger = structlog.get_logger()

router = APIRouter()

# Snapshot document served when a request carries no snapshot
LIQUIDITY_FILE = os.environ.get("SWAVE_LIQUIDITY_FILE")

# Wall-clock budget for a single route search, in seconds
ROUTE_TIMEOUT = float(os.environ.get("SWAVE_ROUTE_TIMEOUT", "2.0"))

# Wall-clock budget for alternative route search, in seconds
ROUTES_TIMEOUT = float(os.environ.get("SWAVE_ROUTES_TIMEOUT", "2.0"))


@lru_cache(maxsize=1)
def get_default_router() -> SwapRouter:
    """Build the process-wide router from the configured liquidity file."""
    source = StaticLiquiditySource.from_json_file(LIQUIDITY_FILE) if LIQUIDITY_FILE else None
    return SwapRouter(source=source)


def get_router() -> SwapRouter:
    """Dependency provider for the router instance.

    Override this in tests to inject a router:
        app.dependency_overrides[get_router] = lambda: SwapRouter(source=source)
    """
    return get_default_router()


@router.post("/route", response_model_exclude_none=True)
async def route(
    request: RouteRequest,
    swap_router: SwapRouter = Depends(get_router),
) -> RouteResponse:
    """Find the best route for a swap.

    The search runs in the default executor so a large snapshot does not
    hold the event loop.

    Error Handling:
        - Invalid request schema: 422 (pydantic)
        - Routing failures: 200 with an error kind
        - Timeout or unexpected exception: logged, 200 with internalError set
    """
    logger.info(
        "received_route_request",
        source=request.source,
        destination=request.destination,
        amount=request.amount,
        inline_snapshot=request.snapshot is not None,
    )
    loop = asyncio.get_running_loop()
    try:
        result = await asyncio.wait_for(
            loop.run_in_executor(
                None,
                lambda: swap_router.find_optimal_route(
                    request.source,
                    request.destination,
                    request.amount,
                    snapshot=request.snapshot,
                ),
            ),
            timeout=ROUTE_TIMEOUT,
        )
    except TimeoutError:
        logger.warning(
            "route_timeout",
            source=request.source,
            destination=request.destination,
            timeout_seconds=ROUTE_TIMEOUT,
        )
        return RouteResponse.internal_failure("route search timed out")
    except Exception:
        logger.exception(
            "router_error",
            source=request.source,
            destination=request.destination,
        )
        return RouteResponse.internal_failure("internal routing error")

    return RouteResponse.from_result(result)


@router.post("/routes", response_model_exclude_none=True)
async def routes(
    request: RoutesRequest,
    swap_router: SwapRouter = Depends(get_router),
) -> RoutesResponse:
    """Find ranked, pool-disjoint alternative routes.

    The search runs in the default executor with the configured budget; the
    router also checks the budget between iterations so a slow search ends
    with the routes found so far.
    """
    logger.info(
        "received_routes_request",
        source=request.source,
        destination=request.destination,
        amount=request.amount,
        max_routes=request.max_routes,
    )
    loop = asyncio.get_running_loop()
    try:
        result = await asyncio.wait_for(
            loop.run_in_executor(
                None,
                lambda: swap_router.find_routes(
                    request.source,
                    request.destination,
                    request.amount,
                    max_routes=request.max_routes,
                    snapshot=request.snapshot,
                    time_budget=ROUTES_TIMEOUT,
                ),
            ),
            # Leave headroom over the in-search budget for the final iteration
            timeout=ROUTES_TIMEOUT * 2,
        )
    except TimeoutError:
        logger.warning(
            "routes_timeout",
            source=request.source,
            destination=request.destination,
            timeout_seconds=ROUTES_TIMEOUT * 2,
        )
        return RoutesResponse.internal_failure("route search timed out")
    except Exception:
        logger.exception(
            "router_error",
            source=request.source,
            destination=request.destination,
        )
        return RoutesResponse.internal_failure("internal routing error")

    logger.info(
        "returning_routes",
        count=len(result.routes),
        error=result.error.value if result.error else None,
    )
    return RoutesResponse.from_result(result)
