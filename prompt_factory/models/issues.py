"""Schema validation issues and the outcome of a repair run."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SchemaIssue(BaseModel):
    path: str = ""
    message: str
    missing_property: Optional[str] = None
    keyword: Optional[str] = None

    def describe(self) -> str:
        """Human line used in console output and logs."""
        location = self.path.lstrip("/").replace("/", ".") or "(root)"
        return f"{location} {self.message}"


class RepairStatus:
    DONE = "done"
    EXHAUSTED = "exhausted"


class RepairOutcome(BaseModel):
    status: str
    answers: Dict[str, Any]
    passes: int = 0
    issues: List[SchemaIssue] = Field(default_factory=list)
    unreconciled: List[SchemaIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == RepairStatus.DONE


__all__ = ["SchemaIssue", "RepairStatus", "RepairOutcome"]
