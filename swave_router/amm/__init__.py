"""AMM (Automated Market Maker) math."""

from swave_router.amm.constant_product import (
    ConstantProduct,
    HopQuote,
    constant_product,
    evaluate_hop,
)

__all__ = [
    "ConstantProduct",
    "HopQuote",
    "constant_product",
    "evaluate_hop",
]
