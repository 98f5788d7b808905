"""
Answer value helpers

Coercion rules shared by the visibility evaluator and the validation engine.
Answers arrive from the browser as JSON scalars or string lists, so the
rules follow how those values compare and print on the client.
"""

import json
import math
import re
from typing import Any

_NUMERIC_LITERAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def is_empty(value: Any) -> bool:
    """True for a missing answer: ``None``, an empty string, or an empty list."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def stringify(value: Any) -> str:
    """
    Render an answer as text.

    Booleans print as ``true``/``false``, integral floats drop their
    fractional part, and lists join their items with commas. ``None``
    becomes the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def to_number(value: Any) -> float:
    """
    Coerce an answer to a float.

    Returns NaN when the value has no numeric reading, which makes every
    ordering comparison against it false.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if _NUMERIC_LITERAL.match(text):
            return float(text)
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without cross-type coercion.

    ``"1"`` never equals ``1`` and ``True`` never equals ``1``; ints and
    floats compare numerically; lists compare item by item.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            strict_equals(a, b) for a, b in zip(left, right)
        )
    if type(left) is type(right):
        return left == right
    return False
