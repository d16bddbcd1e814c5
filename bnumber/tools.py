#
# BNumber Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import Enum, unique
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FmtStyle(str, Enum):
    """
    Supported fmt_* formatter styles.

    Members are str subclasses and can be passed anywhere a plain style string is expected.
    """
    ASCII = "ascii"
    UNICODE_ANGLE = "unicode-angle"
    EQUAL = "equal"


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, style: str = "ascii", max_repr: int = 120) -> str:
    """Format type information for exception messages.

    Accepts both type objects and instances.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
        >>> fmt_type(None, style="equal")
        'type=NoneType'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", None) or str(target_type)
    type_name = _fmt_truncate(type_name, max_repr, ellipsis=_fmt_more_token(style))
    return _fmt_format_pair("type", type_name, style)


def fmt_value(x: Any, *, style: str = "ascii", max_repr: int = 120) -> str:
    """
    Format a single value as a type–value pair for exception messages.

    Broken __repr__ methods and very long reprs are handled gracefully, the value
    text is truncated to max_repr characters.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("12.3Q")
        "<str: '12.3Q'>"
        >>> fmt_value("12.3Q", style="unicode-angle")
        "⟨str: '12.3Q'⟩"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    if style == FmtStyle.ASCII:
        base_repr = base_repr.replace(">", "\\>")

    r = _fmt_truncate(base_repr, max_repr, ellipsis=_fmt_more_token(style))
    return _fmt_format_pair(t, r, style)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "…") -> str:
    """
    Truncate s to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes, the ellipsis goes outside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis


def _fmt_format_pair(type_name: str, value_repr: str, style: str) -> str:
    """Combine a type name and a repr into a single display token according to style."""
    if style == FmtStyle.UNICODE_ANGLE:
        return f"⟨{type_name}: {value_repr}⟩"
    if style == FmtStyle.EQUAL:
        return f"{type_name}={value_repr}"
    return f"<{type_name}: {value_repr}>"


def _fmt_more_token(style: str) -> str:
    return "..." if style == FmtStyle.ASCII else "…"
