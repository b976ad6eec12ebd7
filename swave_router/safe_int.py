"""Safe integer wrapper for fixed-point arithmetic on token amounts.

Amounts, reserves and fees are integers in each token's smallest unit
(stroops for XLM). SafeInt makes the arithmetic used by the cost model
fail loudly instead of producing invalid values:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Values outside the signed 128-bit range raise Int128Overflow on to_i128()

Division always rounds toward zero, so an output computed with these
helpers never exceeds the exact rational result.

Usage pattern:
    from swave_router.safe_int import S

    def amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        effective = S(amount_in)
        return (effective * S(reserve_out) // (S(reserve_in) + effective)).value
"""

from __future__ import annotations

# Soroban token amounts are i128
I128_MAX = 2**127 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative amount."""

    pass


class Int128Overflow(SafeIntError):
    """Value does not fit in a non-negative i128 amount."""

    pass


class SafeInt:
    """Non-negative integer amount with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division rounding toward zero.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def mul_div(self, numerator: SafeInt | int, denominator: SafeInt | int) -> SafeInt:
        """Compute self * numerator / denominator, rounding toward zero.

        Raises:
            DivisionByZero: If denominator is zero
        """
        return (self * numerator) // denominator

    def to_i128(self) -> int:
        """Convert to int, validating the non-negative i128 range.

        Raises:
            Int128Overflow: If value is negative or exceeds 2^127-1
        """
        if self._value < 0:
            raise Int128Overflow(f"Negative amount: {self._value}")
        if self._value > I128_MAX:
            raise Int128Overflow(f"Amount exceeds i128 max: {self._value}")
        return self._value

    def is_i128(self) -> bool:
        """Check if value is a valid non-negative i128 amount without raising."""
        return 0 <= self._value <= I128_MAX

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
