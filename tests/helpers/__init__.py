"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token symbols, units and the fixed clock
- factories: Pool, snapshot, edge and route factory functions
"""

from tests.helpers.constants import (
    AQUA,
    DUST,
    FIXED_NOW,
    UNIT,
    USDC,
    XLM,
    YXLM,
    fixed_clock,
)
from tests.helpers.factories import make_edge, make_pool, make_route, make_snapshot

__all__ = [
    # Constants
    "XLM",
    "USDC",
    "AQUA",
    "YXLM",
    "DUST",
    "UNIT",
    "FIXED_NOW",
    "fixed_clock",
    # Factories
    "make_pool",
    "make_snapshot",
    "make_edge",
    "make_route",
]
