"""Protocol constants for the SWAVE swap router.

Centralizes fixed-point scales and the Stellar network parameters the
execution estimates are based on.
"""

from decimal import Decimal

# Fee rates and slippage estimates are scaled to 1e18 for integer AMM math
FEE_SCALE = 10**18

# Basis points per unit (1 bp = 0.01%)
BPS_SCALE = 10_000

# Edge cost used for unreachable hops (zero reserve or zero input)
INFINITE_COST = float("inf")

# Default base slippage estimate when a pool does not carry one (0.1%)
DEFAULT_SLIPPAGE_ESTIMATE = Decimal("0.001")

# Base swap fee of the SWAVE swap contract (30 bps = 0.3%)
BASE_FEE_RATE = Decimal("0.003")

# Stellar base fee per operation, in stroops (0.00001 XLM)
NETWORK_FEE_PER_STEP = 100

# Soroban resource estimate per swap step
GAS_PER_STEP = 100_000

# Ledger close time used for latency estimates
SECONDS_PER_HOP = 5

# Maximum slippage tolerance accepted by the swap contract (1000 bps = 10%)
MAX_SLIPPAGE = Decimal("0.10")

# Minimum swap amount accepted by the swap contract (0.1 XLM in stroops)
MIN_SWAP_AMOUNT = 1_000_000
