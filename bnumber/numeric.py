"""
Normalization and numeric type standardization for scaled numbers.

A scaled number is a (mantissa, scale) pair representing mantissa × 10^scale. This module
keeps such pairs canonical and converts stdlib and third-party numerics into them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_EVEN, localcontext
from fractions import Fraction
from typing import Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


# @formatter:off

class NumberConf:
    """
    Default configuration constants for scaled numbers.

    Attributes:
        PRECISION: Tolerance for every "effectively zero / integral / at least 10" decision.
        ROUND_DIGITS: Decimal places display values are rounded to before formatting.
        INT_PATTERN: Display pattern for integral display values.
        DECIMAL_PATTERN: Display pattern for fractional display values.
    """
    PRECISION = 1e-12
    ROUND_DIGITS = 12
    INT_PATTERN = "0"
    DECIMAL_PATTERN = "0.00"

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def normalize(mantissa: float, scale: int) -> tuple[float, int]:
    """
    Bring a (mantissa, scale) pair to canonical form.

    Either canonical zero (0.0, 0), or 1 <= |mantissa| < 10 within NumberConf.PRECISION
    with the scale adjusted to keep mantissa × 10^scale unchanged. The sign is preserved.

    Two pairs of the same value normalize to the same scale, with mantissas equal within
    NumberConf.PRECISION.

    Raises:
        TypeError: If scale is not an int.
        ValueError: If mantissa is NaN or infinite.

    Examples:
        >>> normalize(500.0, 3)
        (5.0, 5)
        >>> normalize(-0.5, 0)
        (-5.0, -1)
        >>> normalize(1e-13, 40)
        (0.0, 0)
    """
    if not isinstance(scale, int) or isinstance(scale, bool):
        raise TypeError(f"scale must be an int, got {fmt_type(scale)}")

    mantissa = float(mantissa)
    if not math.isfinite(mantissa):
        raise ValueError(f"mantissa must be finite, got {fmt_value(mantissa)}")

    eps = NumberConf.PRECISION
    if abs(mantissa) < eps:
        return 0.0, 0

    is_negative = mantissa < 0
    magnitude = abs(mantissa)

    while magnitude >= 10 - eps:
        magnitude /= 10
        scale += 1

    # Stop within eps of 1 so a carried 0.999… is not multiplied back to 9.999… at a lower scale
    while eps < magnitude < 1 - eps:
        magnitude *= 10
        scale -= 1

    if magnitude < eps:
        return 0.0, 0

    return (-magnitude if is_negative else magnitude), scale


def decimal_parts(value: Decimal | int) -> tuple[float, int]:
    """
    Split an exact decimal or int into a normalized (mantissa, scale) pair.

    Works beyond the float range since the exponent is taken from the decimal itself.

    Examples:
        >>> decimal_parts(Decimal("123.456"))
        (1.23456, 2)
        >>> decimal_parts(10**400)
        (1.0, 400)
    """
    d = Decimal(value)
    if not d.is_finite():
        raise ValueError(f"value must be finite, got {fmt_value(value)}")
    if d.is_zero():
        return 0.0, 0

    exponent = d.adjusted()
    return normalize(float(d.scaleb(-exponent)), exponent)


def shifted_decimal(mantissa: float, shift: int) -> Decimal:
    """
    Exact decimal of mantissa × 10^shift, built from the shortest repr of the mantissa.

    Never overflows, unlike mantissa * 10.0 ** shift for shifts past the float range.

    Examples:
        >>> shifted_decimal(1.23, 2)
        Decimal('123')
        >>> shifted_decimal(-4.5, -3)
        Decimal('-0.0045')
    """
    return Decimal(repr(float(mantissa))).scaleb(shift)


def quantize_decimal(value: Decimal, digits: int = 0, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """
    Round a decimal to the given number of decimal places.

    The working precision grows with the magnitude of value, so huge values are never rejected.

    Examples:
        >>> quantize_decimal(Decimal("123.456"), 2)
        Decimal('123.46')
        >>> quantize_decimal(Decimal("-123.456"), rounding=ROUND_FLOOR)
        Decimal('-124')
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + digits + 2)
        return value.quantize(Decimal(1).scaleb(-digits), rounding=rounding)


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
        allow_bool: bool = False
) -> int | float | Decimal | None:
    """
    Convert numeric types to int, float or Decimal, the inputs scaled numbers are built from.

    Python int, float and Decimal pass through, ints keep arbitrary precision. Fractions become
    int or Decimal, NumPy-like scalars (__index__, .item()) and other __float__ types become
    int or float.

    Parameters
    ----------
    value : various
        Numeric value to convert.

    on_error : {"raise", "none"}, default "raise"
        How to handle unsupported types: raise TypeError or return None.

    allow_bool : bool, default False
        If True, convert bool to int (True→1, False→0), otherwise treat bool as type error.

    Examples
    --------
    >>> std_numeric(42)
    42
    >>> std_numeric(Fraction(3, 2))
    Decimal('1.5')
    >>> std_numeric("1K", on_error="none")
    None
    """
    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        if on_error == "raise":
            raise TypeError(
                f"boolean values not supported, got {value}. "
                f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
            )
        return None

    # Fast path
    if isinstance(value, (int, float, Decimal)):
        return value

    if isinstance(value, Fraction):
        if value.denominator == 1:
            return value.numerator
        return Decimal(value.numerator) / Decimal(value.denominator)

    # NumPy integer types implement __index__
    if hasattr(value, '__index__'):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            if on_error == "raise":
                raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e
            return None

    # Array/tensor scalars
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (int, float)) and not isinstance(result, bool):
            return result

    if hasattr(value, '__float__') and not isinstance(value, (str, bytes)):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            if on_error == "raise":
                raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e
            return None

    if on_error == "raise":
        raise TypeError(
            f"unsupported numeric type: {fmt_type(value)}. "
            f"Expected int, float, Decimal, Fraction or types implementing __index__, .item() or __float__"
        )
    return None
