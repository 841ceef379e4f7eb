"""Parsed form of a question's `dependsOn` expression."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


OP_EQ = "eq"
OP_IN = "in"


@dataclass(frozen=True)
class Comparison:
    left: str
    op: str
    right: Any


@dataclass(frozen=True)
class AlwaysActive:
    """Produced for absent or unparseable expressions."""

    source: str | None = None


__all__ = ["OP_EQ", "OP_IN", "Comparison", "AlwaysActive"]
