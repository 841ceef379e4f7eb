"""Dependency expression parsing and evaluation.

A question's ``dependsOn`` holds a single comparison, either
``<path> = <literal>`` or ``<path> in [a, b, ...]``. Anything that does not
parse keeps the question active so broken metadata never hides a question.
"""

from __future__ import annotations

from typing import Any, List, Mapping
import json
import logging
import re

from prompt_factory.logic.deep_path import get_path
from prompt_factory.models.conditions import OP_EQ, OP_IN, AlwaysActive, Comparison

logger = logging.getLogger(__name__)

_EXPR_RE = re.compile(
    r"^\s*(?P<left>\S+?)\s*(?:(?P<eq>=)|\s(?P<in>in)\s)\s*(?P<right>.+?)\s*$",
    re.IGNORECASE,
)
_BOOL_RE = re.compile(r"^(true|false)$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")
_QUOTE_RE = re.compile(r"^[\"']|[\"']$")


def strip_quotes(token: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    return _QUOTE_RE.sub("", token)


def coerce_literal(token: str) -> Any:
    """Boolean, then number, then quote-stripped string."""
    token = token.strip()
    if _BOOL_RE.match(token):
        return token.lower() == "true"
    if _NUMBER_RE.match(token):
        return float(token) if "." in token else int(token)
    return strip_quotes(token)


def parse_list_literal(token: str) -> List[Any]:
    """Parse ``[a, 'b', "c"]`` into a list.

    JSON is tried first (single quotes normalised to double); a manual comma
    split is the fallback when that fails or does not yield a list.
    """
    try:
        parsed = json.loads(token.replace("'", '"'))
        if isinstance(parsed, list):
            return parsed
    except ValueError:
        pass
    items = (strip_quotes(part.strip()) for part in token[1:-1].split(","))
    return [item for item in items if item]


def parse_condition(expr: str | None) -> Comparison | AlwaysActive:
    if not expr or not str(expr).strip():
        return AlwaysActive()
    m = _EXPR_RE.match(str(expr))
    if not m:
        logger.debug("condition_unparsed expr=%r", expr)
        return AlwaysActive(source=str(expr))
    left = m.group("left")
    right_raw = m.group("right")
    if m.group("eq"):
        return Comparison(left=left, op=OP_EQ, right=coerce_literal(right_raw))
    if right_raw.startswith("[") and right_raw.endswith("]"):
        return Comparison(left=left, op=OP_IN, right=parse_list_literal(right_raw))
    return Comparison(left=left, op=OP_IN, right=[strip_quotes(right_raw)])


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without Python's bool/int and str/number crossovers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    numbers = (int, float)
    if isinstance(a, numbers) and isinstance(b, numbers):
        return a == b
    if isinstance(a, numbers) or isinstance(b, numbers):
        return False
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b
    # Composite values are compared by identity
    return a is b


def evaluate(node: Comparison | AlwaysActive, answers: Mapping[str, Any]) -> bool:
    if isinstance(node, AlwaysActive):
        return True
    left_value = get_path(answers, node.left)
    # An absent or null answer matches nothing, not even a null literal
    if left_value is None:
        return False
    if node.op == OP_EQ:
        return strict_equals(left_value, node.right)
    return any(strict_equals(left_value, item) for item in node.right)


def is_active(expr: str | None, answers: Mapping[str, Any]) -> bool:
    """Return True when a question governed by ``expr`` should be asked."""
    return evaluate(parse_condition(expr), answers)


__all__ = [
    "parse_condition",
    "parse_list_literal",
    "coerce_literal",
    "strict_equals",
    "evaluate",
    "is_active",
]
