#
# BNumber Units Suffix Table
#

# Standard library -----------------------------------------------------------------------------------------------------
import bisect
import logging
import string
import threading
from itertools import product

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import BiDirectionalMap
from .tools import fmt_type

logger = logging.getLogger(__name__)


# @formatter:off

class UnitsConf:
    """
    Default configuration of the units suffix table.

    Attributes:
        FIXED_UNITS: Named units added first, they take priority over generated ones.
        LETTERS: Alphabet of generated two-letter units, first letter major.
        FIRST_LETTER_EXPONENT: Exponent of the first generated unit "AA".
        EXPONENT_STEP: Exponent step between consecutive generated units.
    """
    FIXED_UNITS = {3: "K", 6: "M", 9: "B", 12: "T"}
    LETTERS = string.ascii_uppercase
    FIRST_LETTER_EXPONENT = 15
    EXPONENT_STEP = 3

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

class SuffixTable:
    """
    Exponent to unit symbol mapping and its case-insensitive inverse.

    The table is populated once on construction and exposes only read operations.
    Both passes are additive-only, the first entry for a given exponent or symbol wins:

        1. UnitsConf.FIXED_UNITS: 3→K, 6→M, 9→B, 12→T
        2. Two-letter codes AA..ZZ, index i (AA=0) → FIRST_LETTER_EXPONENT + EXPONENT_STEP * i

    With the defaults "AA" is 10^15 and "ZZ" is 10^2040.

    Examples:
        >>> table = SuffixTable()
        >>> table.symbol_for(12)
        'T'
        >>> table.exponent_for("zz")
        2040
        >>> table.best_display_exponent(16)
        15
    """

    def __init__(self,
                 fixed_units: dict[int, str] | None = None,
                 letters: str = UnitsConf.LETTERS,
                 first_exponent: int = UnitsConf.FIRST_LETTER_EXPONENT,
                 step: int = UnitsConf.EXPONENT_STEP):
        if step <= 0:
            raise ValueError(f"step must be > 0, got {step}")

        fixed_units = UnitsConf.FIXED_UNITS if fixed_units is None else fixed_units
        self._units: BiDirectionalMap[int, str] = BiDirectionalMap(value_fold=str.upper)

        for exponent, symbol in fixed_units.items():
            self._add_unit(exponent, symbol)

        for index, (first, second) in enumerate(product(letters, repeat=2)):
            self._add_unit(first_exponent + index * step, f"{first}{second}")

        self._sorted_exponents = tuple(sorted(self._units.keys()))
        self._max_exponent = self._sorted_exponents[-1] if self._sorted_exponents else 0

        logger.debug("suffix table built: %d units, max exponent %d", len(self._units), self._max_exponent)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self._units.has_value(symbol)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"SuffixTable(units={len(self)}, max_exponent={self._max_exponent})"

    @property
    def max_exponent(self) -> int:
        """The largest defined unit exponent, 2040 ("ZZ") by default."""
        return self._max_exponent

    @property
    def sorted_exponents(self) -> tuple[int, ...]:
        """All defined exponents in ascending order."""
        return self._sorted_exponents

    def symbol_for(self, exponent: int) -> str | None:
        """Unit symbol for the exponent, or None if no unit is defined there."""
        return self._units.get(exponent)

    def exponent_for(self, symbol: str) -> int | None:
        """Exponent of a unit symbol matched case-insensitively, or None if unknown."""
        if not isinstance(symbol, str):
            raise TypeError(f"unit symbol must be a str, got {fmt_type(symbol)}")
        return self._units.get_key(symbol)

    def best_display_exponent(self, scale: int) -> int:
        """
        Pick the unit exponent a value with the given scale is displayed in.

        - scale at or above max_exponent clamps to max_exponent;
        - otherwise the largest positive exponent not exceeding scale;
        - if there is none and scale is negative, the smallest exponent at or above scale;
        - 0 (no unit) in all other cases.

        Examples:
            >>> table = SuffixTable()
            >>> table.best_display_exponent(5), table.best_display_exponent(2)
            (3, 0)
            >>> table.best_display_exponent(-7), table.best_display_exponent(5000)
            (3, 2040)
        """
        if scale >= self._max_exponent:
            return self._max_exponent

        exponents = self._sorted_exponents
        pos = bisect.bisect_right(exponents, scale)
        if pos > 0 and exponents[pos - 1] > 0:
            return exponents[pos - 1]

        if scale < 0:
            pos = bisect.bisect_left(exponents, scale)
            if pos < len(exponents):
                return exponents[pos]

        return 0

    def _add_unit(self, exponent: int, symbol: str) -> None:
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            raise TypeError(f"unit exponent must be an int, got {fmt_type(exponent)}")
        if not symbol:
            raise ValueError(f"unit symbol must be a non-empty string, got {symbol!r}")
        self._units.add(exponent, symbol)


# Methods --------------------------------------------------------------------------------------------------------------

_table: SuffixTable | None = None
_table_lock = threading.Lock()


def suffix_table() -> SuffixTable:
    """
    The process-wide default SuffixTable, built once on first use.

    Subsequent calls return the same read-only instance without locking.
    """
    global _table
    if _table is None:
        with _table_lock:
            if _table is None:
                _table = SuffixTable()
    return _table
