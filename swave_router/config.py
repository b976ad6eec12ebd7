"""Router configuration."""

from dataclasses import dataclass
from decimal import Decimal

from swave_router.constants import (
    BPS_SCALE,
    GAS_PER_STEP,
    MAX_SLIPPAGE,
    MIN_SWAP_AMOUNT,
    NETWORK_FEE_PER_STEP,
    SECONDS_PER_HOP,
)


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for route costing and execution checks.

    Holding the tier thresholds and penalties in one place keeps the cost
    model, the path finder and the tests on the same numbers.

    Attributes:
        bps_scale: Basis points per unit (10,000)
        high_impact_ratio: amount_in / liquidity_depth above which the high
            penalty applies (default 0.10)
        high_impact_penalty_bps: Penalty added above high_impact_ratio (500 bps)
        medium_impact_ratio: Ratio above which the medium penalty applies (0.05)
        medium_impact_penalty_bps: Penalty added above medium_impact_ratio (200 bps)
        default_max_routes: Routes returned by find_routes when not specified
        route_ttl_seconds: Age after which a route is stale for execution
        max_slippage: Largest slippage tolerance an execution request may carry
        min_swap_amount: Smallest input amount accepted for execution
        execution_deadline_seconds: Default deadline for execution requests
        network_fee_per_step: Network fee per route step, in stroops
        seconds_per_hop: Estimated confirmation time per hop
        gas_per_step: Resource limit estimate per hop
    """

    bps_scale: int = BPS_SCALE

    # Liquidity-depth penalty tiers
    high_impact_ratio: Decimal = Decimal("0.10")
    high_impact_penalty_bps: int = 500
    medium_impact_ratio: Decimal = Decimal("0.05")
    medium_impact_penalty_bps: int = 200

    default_max_routes: int = 3

    # Execution checks
    route_ttl_seconds: float = 30.0
    max_slippage: Decimal = MAX_SLIPPAGE
    min_swap_amount: int = MIN_SWAP_AMOUNT
    execution_deadline_seconds: int = 300

    # Execution cost estimates
    network_fee_per_step: int = NETWORK_FEE_PER_STEP
    seconds_per_hop: int = SECONDS_PER_HOP
    gas_per_step: int = GAS_PER_STEP


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()
