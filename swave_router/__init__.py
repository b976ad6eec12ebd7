"""SWAVE Router - optimal swap routing through constant product pools."""

from swave_router.routing.router import SwapRouter

__version__ = "0.1.0"
__all__ = ["SwapRouter", "__version__"]
