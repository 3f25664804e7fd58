"""Answer coercion helpers shared by every resolver.

Answer values are polymorphic by question type:

    - scalar str / int / float / bool for simple inputs
    - list[str] for multi-select and ranking
    - dict[str, number] for matrix ratings and constant-sum allocations
    - dict[str, str] for address-style composite inputs

The engine never interprets those shapes beyond what condition operators
need, so the coercions live here once: to a string for comparison, to a
number for comparison, to a string list for option membership.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

Answers = dict[str, Any]

# Numeric literal grammar accepted by answer_to_number: decimal with optional
# exponent, unsigned hex, or a signed Infinity.  No digit separators.
_NUMBER = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|0[xX][0-9a-fA-F]+|[+-]?Infinity"
)


def is_empty_answer(value: Any) -> bool:
    """True for an absent answer, an empty string, or an empty list."""
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def answer_to_string(value: Any) -> str:
    """Render an answer the way conditions compare it.

    Lists are joined with ``,`` (no spaces), booleans become
    ``"true"``/``"false"`` and integral floats drop their ``.0`` so that
    ``5.0`` equals the condition value ``"5"``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(answer_to_string(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def answer_to_number(value: Any) -> float:
    """Parse an answer (or condition value) as a number.

    Non-numbers are first rendered with :func:`answer_to_string`, so
    booleans (``"true"``) and dicts parse to NaN.  A blank or
    whitespace-only string is 0.  Returns NaN for anything else that does
    not parse; every comparison against NaN is false.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    text = answer_to_string(value).strip()
    if not text:
        return 0.0
    if _NUMBER.fullmatch(text) is None:
        return math.nan
    if text[:2] in ("0x", "0X"):
        return float(int(text, 16))
    return float(text.replace("Infinity", "inf"))


def answer_to_string_list(value: Any) -> list[str]:
    """Normalise a choice answer to a list of selected option labels.

    A bare string becomes a singleton list; non-string list items are
    dropped; any other shape is treated as no selection.
    """
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    if isinstance(value, str):
        return [value]
    return []
