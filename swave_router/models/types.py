"""Shared type definitions for router models.

These types are used across snapshot, route and API models.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from swave_router.safe_int import Int128Overflow, S


def validate_amount(value: Any) -> int:
    """Validate a token amount given as int or decimal integer string.

    Args:
        value: Value to validate

    Returns:
        The amount as int

    Raises:
        ValueError: If value is not a non-negative integer within i128 range
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    try:
        return S(int_value).to_i128()
    except Int128Overflow as err:
        raise ValueError(f"Amount outside 0..2^127-1: {value}") from err


def validate_rate(value: Any) -> Decimal:
    """Validate a fractional rate in [0, 1).

    Floats are converted through their string form so 0.003 stays 0.003.

    Raises:
        ValueError: If value is not a number in [0, 1)
    """
    if isinstance(value, bool):
        raise ValueError("Rate must be a number, got bool")
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as err:
        raise ValueError(f"Rate must be a number: '{value}'") from err

    if not rate.is_finite() or rate < 0 or rate >= 1:
        raise ValueError(f"Rate must be in [0, 1): {value}")
    return rate


def normalize_symbol(symbol: str) -> str:
    """Normalize a token symbol (identity is by upper-case symbol)."""
    return symbol.strip().upper()


# Token amount in smallest units (stroops for XLM)
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Token amount in smallest units"),
]

# Fraction in [0, 1) such as a fee rate or slippage estimate
Rate = Annotated[
    Decimal,
    BeforeValidator(validate_rate),
    Field(description="Fraction in [0, 1)"),
]

Symbol = Annotated[
    str,
    BeforeValidator(lambda v: normalize_symbol(v) if isinstance(v, str) else v),
    Field(min_length=1, max_length=12, pattern=r"^[A-Z0-9]+$"),
]
