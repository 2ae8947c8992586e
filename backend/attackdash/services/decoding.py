"""
Tolerant JSON decoding.

Upstream documents are loosely structured: fields go missing, numbers
arrive as strings, arrays contain nulls. Every access goes through dig()
and one of the as_*() converters, which return the caller's default
instead of raising.

Numeric strings are parsed locale-invariant: the period is the only
decimal separator, so "12,5" is a parse failure, not 125 or 12.5.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

NUMBER_RE = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?", re.ASCII)

# Magnitude and precision bounds for upstream numbers; anything outside
# is a parse failure.
MAX_EXPONENT = 30
MAX_DIGITS = 40


def dig(node: Any, *path, default: Any = None) -> Any:
    """
    Walk a decoded JSON document by dict keys and list indexes.

    Returns default when any step is missing, has the wrong container
    type, or ends in null.

    >>> dig({"data": {"result": [1, 2]}}, "data", "result", 1)
    2
    """
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or not -len(node) <= step < len(node):
                return default
        elif not isinstance(node, dict) or step not in node:
            return default
        node = node[step]
    return default if node is None else node


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_str(value: Any, default: Optional[str] = "") -> Optional[str]:
    if isinstance(value, str):
        return value
    return default


def as_decimal(value: Any, default: Optional[Decimal] = Decimal(0)) -> Optional[Decimal]:
    """
    Convert a JSON number or numeric string to a finite Decimal.

    Strings must be plain ASCII numerals; digit separators and non-ASCII
    digits are rejected. Values beyond MAX_EXPONENT or MAX_DIGITS yield
    default.
    """
    if isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_RE.fullmatch(text):
            return default
        try:
            result = Decimal(text)
        except InvalidOperation:
            return default
    else:
        return default

    if not result.is_finite():
        return default
    if abs(result.adjusted()) > MAX_EXPONENT:
        # zero keeps any exponent, e.g. 0E-40
        return Decimal(0) if not result else default
    if len(result.as_tuple().digits) > MAX_DIGITS:
        return default
    return result


def as_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    number = as_decimal(value, default=None)
    if number is None:
        return default
    result = float(number)
    return result if math.isfinite(result) else default


def as_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Convert to int, truncating toward zero.

    Integral strings such as "42" parse exactly, fractional ones are
    truncated like the numbers they encode.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = as_decimal(value, default=None)
    if number is None:
        return default
    return int(number)
