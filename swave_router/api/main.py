"""FastAPI application for the swap router."""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swave_router import __version__
from swave_router.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SWAVE_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAVE_PORT", "8000"))
DEBUG = os.environ.get("SWAVE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (2 MB); inline snapshots are the largest payloads
MAX_REQUEST_SIZE = 2 * 1024 * 1024

app = FastAPI(
    title="SWAVE Router",
    description="Optimal multi-hop swap routing through constant product pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the router API server.

    Configuration via environment variables:
    - SWAVE_HOST: Host to bind to (default: 0.0.0.0)
    - SWAVE_PORT: Port to bind to (default: 8000)
    - SWAVE_DEBUG: Enable debug/reload mode (default: false)
    - SWAVE_LIQUIDITY_FILE: JSON snapshot served when requests carry none
    - SWAVE_ROUTE_TIMEOUT: Single route search timeout in seconds (default: 2.0)
    - SWAVE_ROUTES_TIMEOUT: Alternative route search budget in seconds (default: 2.0)
    """
    uvicorn.run(
        "swave_router.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
