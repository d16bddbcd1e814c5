"""
Scaled-decimal big numbers with K/M/B/T and AA..ZZ unit suffixes.

A BNumber stores a normalized (mantissa, scale) pair representing mantissa × 10^scale, which
reaches far beyond the float range while keeping float arithmetic speed. It is meant for
quantities that grow by orders of magnitude, e.g. currencies in incremental games.

    >>> BNumber(1.23, 5)
    BNumber(mantissa=1.23, scale=5)
    >>> str(BNumber.parse("100K") * BNumber.parse("200K"))
    '20B'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN
from fractions import Fraction
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .display import DisplayPattern
from .numeric import NumberConf, decimal_parts, normalize, quantize_decimal, shifted_decimal, std_numeric
from .tools import fmt_type, fmt_value
from .units import suffix_table

_PARSE_RE = re.compile(r"(?P<number>-?[0-9]+(?:\.[0-9]+)?)(?P<unit>[A-Za-z]+)?")


# Exceptions -----------------------------------------------------------------------------------------------------------

class ArgumentError(ValueError):
    """Required input is missing, empty or whitespace-only."""


class FormatError(ValueError):
    """Text does not match the number grammar, or names an unknown unit."""


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class BNumber:
    """
    Immutable scaled number, value = mantissa × 10^scale.

    Every instance is normalized on construction: either canonical zero (0.0, 0), or
    1 <= |mantissa| < 10 within NumberConf.PRECISION. Arithmetic returns new instances.

    Prefer the factories over the raw constructor for user input:
    - BNumber.from_value() for int, float, Decimal and Fraction values
    - BNumber.parse() for text like "123.45K" or "-2.5AB"

    Plain numbers are accepted on either side of arithmetic and comparison operators.

    Equality tolerates NumberConf.PRECISION on the mantissa while the hash rounds it to
    NumberConf.ROUND_DIGITS places, so two equal values may hash differently. Avoid keying
    dicts and sets on results of arithmetic.

    Examples:
        >>> str(BNumber(-5.67, 3))
        '-5.67K'
        >>> BNumber.parse("100K") == BNumber.parse("0.1M")
        True
        >>> str(BNumber.parse("-123.456K").floor())
        '-124K'
    """

    mantissa: float = 0.0
    scale: int = 0

    def __post_init__(self):
        self._validate_fields()

        mantissa, scale = self.mantissa, self.scale
        if isinstance(mantissa, int):
            # Exact for ints beyond the float range
            mantissa, int_scale = decimal_parts(mantissa)
            scale += int_scale

        mantissa, scale = normalize(mantissa, scale)
        object.__setattr__(self, 'mantissa', mantissa)
        object.__setattr__(self, 'scale', scale)

    # ----- Factories -----

    @classmethod
    def from_value(cls, value: Any) -> Self:
        """
        Create from a plain number.

        Accepts int (any size), float, Decimal, Fraction and numeric scalars understood by
        std_numeric(). Magnitudes below NumberConf.PRECISION give canonical zero.

        Raises:
            TypeError: If value is not numeric, or is a bool.
            ValueError: If value is NaN or infinite.

        Examples:
            >>> str(BNumber.from_value(100000))
            '100K'
            >>> BNumber.from_value(10**400).scale
            400
        """
        number = std_numeric(value)

        if isinstance(number, float):
            if not math.isfinite(number):
                raise ValueError(f"value must be finite, got {fmt_value(value)}")
            if abs(number) < NumberConf.PRECISION:
                return cls()
            return cls(number, 0)

        if isinstance(number, Decimal) and not number.is_finite():
            raise ValueError(f"value must be finite, got {fmt_value(value)}")
        if abs(number) < Decimal(NumberConf.PRECISION):
            return cls()
        return cls(*decimal_parts(number))

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse text of the form [-]digits[.digits][unit], surrounding whitespace is ignored.

        The unit is looked up case-insensitively in the suffix table, "k" and "K" are the same unit.

        Raises:
            ArgumentError: If text is None, empty or whitespace-only.
            TypeError: If text is not a str.
            FormatError: If text does not match the grammar or the unit is unknown.

        Examples:
            >>> str(BNumber.parse("100.00K"))
            '100K'
            >>> BNumber.parse("1zz").scale
            2040
        """
        if text is None:
            raise ArgumentError("text to parse is required, got None")
        if not isinstance(text, str):
            raise TypeError(f"text to parse must be a str, got {fmt_type(text)}")
        if not text.strip():
            raise ArgumentError(f"text to parse must not be empty, got {fmt_value(text)}")

        match = _PARSE_RE.fullmatch(text.strip())
        if match is None:
            raise FormatError(f"invalid BNumber format: {fmt_value(text)}")

        try:
            number = Decimal(match.group("number"))
        except InvalidOperation as e:
            raise FormatError(f"invalid number in {fmt_value(text)}") from e

        unit = match.group("unit")
        exponent = 0
        if unit:
            exponent = suffix_table().exponent_for(unit)
            if exponent is None:
                raise FormatError(f"unknown unit: {fmt_value(unit)} in {fmt_value(text)}")

        # The numeral is the initial mantissa, below tolerance it is zero whatever the unit
        if abs(number) < Decimal(NumberConf.PRECISION):
            return cls()

        mantissa, scale = decimal_parts(number)
        return cls(mantissa, scale + exponent)

    # ----- Properties -----

    @property
    def is_zero(self) -> bool:
        return abs(self.mantissa) < NumberConf.PRECISION

    @property
    def display_exponent(self) -> int:
        """Exponent of the unit this number is displayed in, 0 for no unit."""
        return suffix_table().best_display_exponent(self.scale)

    @property
    def unit(self) -> str:
        """Unit suffix this number is displayed with, empty for zero and unit-less numbers."""
        if self.is_zero:
            return ""
        return suffix_table().symbol_for(self.display_exponent) or ""

    # ----- Formatting -----

    def format(self, pattern: str | int | DisplayPattern = NumberConf.DECIMAL_PATTERN) -> str:
        """
        Format with the given display pattern followed by the unit suffix.

        The display value is the number relative to its unit, rounded to NumberConf.ROUND_DIGITS
        places first. Integral display values are rendered without decimals if the pattern is
        an integer pattern. Zero is always "0".

        Examples:
            >>> BNumber.parse("123456789").format("0.0000")
            '123.4568M'
            >>> BNumber.parse("123456789").format("0")
            '123M'
        """
        display_pattern = DisplayPattern.parse(pattern)
        if self.is_zero:
            return "0"

        display = self._display_value()
        if display_pattern.is_integer and _is_integral(display):
            number = display.to_integral_value()
            text = f"{number:f}" if number else "0"
        else:
            text = display_pattern.render(display)

        return f"{text}{self.unit}"

    def to_decimal(self) -> Decimal:
        """Exact decimal of mantissa × 10^scale."""
        return shifted_decimal(self.mantissa, self.scale)

    def __str__(self) -> str:
        if self.is_zero:
            return "0"
        if _is_integral(self._display_value()):
            return self.format(NumberConf.INT_PATTERN)
        return self.format(NumberConf.DECIMAL_PATTERN)

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return self.format(format_spec)

    # ----- Arithmetic -----

    def __add__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._sum(other)

    def __radd__(self, other: Any) -> Self:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._sum(-other)

    def __rsub__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other._sum(-self)

    def __mul__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_zero or other.is_zero:
            return type(self)()
        return type(self)(self.mantissa * other.mantissa, self.scale + other.scale)

    def __rmul__(self, other: Any) -> Self:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._quotient(other)

    def __rtruediv__(self, other: Any) -> Self:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other._quotient(self)

    def __pow__(self, exponent: Any, modulo: None = None) -> Self:
        if modulo is not None or not isinstance(exponent, int) or isinstance(exponent, bool):
            return NotImplemented
        return self.pow(exponent)

    def pow(self, exponent: int) -> Self:
        """
        Raise to an integer power.

        x.pow(0) is 1 for every x including zero, zero to any other power is zero.

        Raises:
            TypeError: If exponent is not an int.

        Examples:
            >>> str(BNumber.parse("100K").pow(2))
            '10B'
            >>> str(BNumber(-2).pow(3))
            '-8'
        """
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            raise TypeError(f"exponent must be an int, got {fmt_type(exponent)}")

        if exponent == 0:
            return type(self)(1.0, 0)
        if self.is_zero:
            return type(self)()

        magnitude = abs(self.mantissa)
        scale = self.scale * exponent
        log_power = exponent * math.log10(magnitude)
        if abs(log_power) < 300:
            power = magnitude ** exponent
        else:
            # Past the float range, split the power into its decimal exponent and mantissa
            whole = math.floor(log_power)
            power = 10.0 ** (log_power - whole)
            scale += whole

        if self.mantissa < 0 and exponent % 2:
            power = -power
        return type(self)(power, scale)

    def __neg__(self) -> Self:
        return type(self)(-self.mantissa, self.scale)

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        return type(self)(abs(self.mantissa), self.scale)

    def __bool__(self) -> bool:
        return not self.is_zero

    def __float__(self) -> float:
        """Float value, ±inf beyond the float range."""
        return float(self.to_decimal())

    # ----- Rounding -----

    def round(self, decimals: int = 0) -> Self:
        """
        Round the display value to the given decimals, half to even.

        Rounding is relative to the display unit: 123.456K rounds to 123K, not to 123456.

        Examples:
            >>> str(BNumber.parse("123.456K").round(2))
            '123.46K'
        """
        if not isinstance(decimals, int) or isinstance(decimals, bool):
            raise TypeError(f"decimals must be an int, got {fmt_type(decimals)}")
        return self._round_display(decimals, ROUND_HALF_EVEN)

    def floor(self) -> Self:
        """Round the display value down to a whole number of display units."""
        return self._round_display(0, ROUND_FLOOR)

    def ceil(self) -> Self:
        """Round the display value up to a whole number of display units."""
        return self._round_display(0, ROUND_CEILING)

    def __round__(self, ndigits: int | None = None) -> Self:
        return self.round(ndigits or 0)

    def __floor__(self) -> Self:
        return self.floor()

    def __ceil__(self) -> Self:
        return self.ceil()

    # ----- Comparison -----

    def compare_to(self, other: Any) -> int:
        """
        Three-way comparison: -1 if self < other, 0 if equal, 1 if self > other.

        Zero-aware and sign-aware, scales are compared before mantissas.

        Raises:
            TypeError: If other is neither a BNumber nor a plain number.
        """
        other_number = _coerce(other)
        if other_number is NotImplemented:
            raise TypeError(f"cannot compare BNumber with {fmt_type(other)}")
        other = other_number

        # Zero is canonical (0.0, 0), its sign is 0
        if self.is_zero or other.is_zero:
            return _sign(self.mantissa) - _sign(other.mantissa)

        sign = _sign(self.mantissa)
        if sign != _sign(other.mantissa):
            return sign

        if self.scale != other.scale:
            return sign if self.scale > other.scale else -sign

        if abs(self.mantissa - other.mantissa) < NumberConf.PRECISION:
            return 0
        return sign if abs(self.mantissa) > abs(other.mantissa) else -sign

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, float) and not math.isfinite(other):
            return False
        if isinstance(other, Decimal) and not other.is_finite():
            return False
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return abs(self.mantissa - other.mantissa) < NumberConf.PRECISION and self.scale == other.scale

    def __hash__(self) -> int:
        return hash((round(self.mantissa, NumberConf.ROUND_DIGITS), self.scale))

    def __lt__(self, other: Any) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: Any) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: Any) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: Any) -> bool:
        if _coerce(other) is NotImplemented:
            return NotImplemented
        return self.compare_to(other) >= 0

    # ----- Private -----

    def _display_value(self) -> Decimal:
        """Value relative to the display unit, rounded to NumberConf.ROUND_DIGITS places."""
        display = shifted_decimal(self.mantissa, self.scale - self.display_exponent)
        return quantize_decimal(display, NumberConf.ROUND_DIGITS)

    def _round_display(self, decimals: int, rounding: str) -> Self:
        if self.is_zero:
            return type(self)()

        exponent = self.display_exponent
        rounded = quantize_decimal(self._display_value(), decimals, rounding=rounding)
        if rounded.is_zero():
            return type(self)()

        mantissa, scale = decimal_parts(rounded)
        return type(self)(mantissa, scale + exponent)

    def _sum(self, other: "BNumber") -> Self:
        if other.is_zero:
            return self
        if self.is_zero:
            return other

        max_scale = max(self.scale, other.scale)
        a = self.mantissa * 10.0 ** (self.scale - max_scale)
        b = other.mantissa * 10.0 ** (other.scale - max_scale)
        return type(self)(a + b, max_scale)

    def _quotient(self, other: "BNumber") -> Self:
        if other.is_zero:
            raise ZeroDivisionError(f"BNumber division by zero: {self} / {other}")
        if self.is_zero:
            return type(self)()
        return type(self)(self.mantissa / other.mantissa, self.scale - other.scale)

    def _validate_fields(self):
        """Validate raw constructor fields, no normalization involved"""
        if isinstance(self.mantissa, bool) or not isinstance(self.mantissa, (int, float)):
            raise TypeError(f"mantissa must be int | float, got {fmt_type(self.mantissa)}")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise TypeError(f"scale must be int, got {fmt_type(self.scale)}")


# Private Methods ------------------------------------------------------------------------------------------------------

def _coerce(value: Any) -> BNumber:
    """BNumber for BNumber and plain number operands, NotImplemented for anything else."""
    if isinstance(value, BNumber):
        return value
    if isinstance(value, (int, float, Decimal, Fraction)) and not isinstance(value, bool):
        return BNumber.from_value(value)
    return NotImplemented


def _is_integral(value: Decimal) -> bool:
    return abs(value - value.to_integral_value()) < Decimal(NumberConf.PRECISION)


def _sign(x: float) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0
