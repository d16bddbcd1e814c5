"""
Display patterns for scaled number formatting.

A pattern describes how many decimal places the display value gets in front of its unit suffix:

    "0"       integer, 123K
    "0.00"    fixed two decimals, 123.46K
    "0.0##"   one required and two optional decimals, trailing optional zeros trimmed, 123.5K

An int n is accepted as shorthand for n fixed decimals.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import quantize_decimal
from .tools import fmt_value

_PATTERN_RE = re.compile(r"^0(?:\.(?P<required>0*)(?P<optional>#*))?$")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class DisplayPattern:
    """
    Number of decimal places rendered for a display value.

    Attributes:
        min_decimals (int): Decimals always rendered, zero padded.
        max_decimals (int): Decimals rendered at most, the value is rounded half away from zero here.
    """

    min_decimals: int = 0
    max_decimals: int = 0

    def __post_init__(self):
        if self.min_decimals < 0:
            raise ValueError(f"min_decimals must be >= 0, got {self.min_decimals}")
        if self.max_decimals < self.min_decimals:
            raise ValueError(
                f"max_decimals must be >= min_decimals, got {self.max_decimals} < {self.min_decimals}"
            )

    @classmethod
    def parse(cls, pattern: "str | int | DisplayPattern") -> Self:
        """
        Build a pattern from its text form, a fixed decimals count or another pattern.

        Raises:
            TypeError: If pattern is not str, int or DisplayPattern.
            ValueError: If the text form is not understood.

        Examples:
            >>> DisplayPattern.parse("0.00")
            DisplayPattern(min_decimals=2, max_decimals=2)
            >>> DisplayPattern.parse("0.0##")
            DisplayPattern(min_decimals=1, max_decimals=3)
            >>> DisplayPattern.parse(4)
            DisplayPattern(min_decimals=4, max_decimals=4)
        """
        if isinstance(pattern, DisplayPattern):
            return pattern
        if isinstance(pattern, int) and not isinstance(pattern, bool):
            return cls(pattern, pattern)
        if isinstance(pattern, str):
            return _parse_pattern_str(pattern)
        raise TypeError(f"pattern must be str | int | DisplayPattern, got {fmt_value(pattern)}")

    @property
    def is_integer(self) -> bool:
        """True if the pattern renders no decimal places."""
        return self.max_decimals == 0

    def render(self, value: Decimal) -> str:
        """
        Render a display value with this pattern's decimal places.

        Examples:
            >>> DisplayPattern(2, 2).render(Decimal("2.5"))
            '2.50'
            >>> DisplayPattern(0, 2).render(Decimal("2.5"))
            '2.5'
        """
        rounded = quantize_decimal(value, self.max_decimals, rounding=ROUND_HALF_UP)
        text = f"{rounded:f}"

        if self.max_decimals > self.min_decimals:
            whole, _, fraction = text.partition(".")
            fraction = fraction.rstrip("0").ljust(self.min_decimals, "0")
            text = f"{whole}.{fraction}" if fraction else whole

        if text.startswith("-") and not rounded:
            text = text[1:]
        return text


# Private Methods ------------------------------------------------------------------------------------------------------

@lru_cache(maxsize=64)
def _parse_pattern_str(pattern: str) -> DisplayPattern:
    match = _PATTERN_RE.match(pattern.strip())
    if not match:
        raise ValueError(f"unsupported display pattern {fmt_value(pattern)}, expected e.g. '0', '0.00' or '0.0##'")

    required = len(match.group("required") or "")
    optional = len(match.group("optional") or "")
    return DisplayPattern(required, required + optional)
