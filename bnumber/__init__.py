"""
BNumber: scaled-decimal big numbers with K/M/B/T and AA..ZZ unit suffixes.
"""

from .number import ArgumentError, BNumber, FormatError
from .numeric import NumberConf, normalize
from .units import SuffixTable, UnitsConf, suffix_table

__all__ = [
    "ArgumentError",
    "BNumber",
    "FormatError",
    "NumberConf",
    "SuffixTable",
    "UnitsConf",
    "normalize",
    "suffix_table",
]
