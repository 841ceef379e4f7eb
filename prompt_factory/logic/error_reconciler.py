"""Mapping of schema validation issues back to question ids.

Each issue's path is turned into dot notation and matched against question
ids in three steps: exact id, an id that is a dot-prefix of the path (errors
reported inside a composite value), then, only when nothing matched and the
issue names a missing property, the id formed by appending that property to
the path.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence
import logging

from prompt_factory.models.issues import SchemaIssue
from prompt_factory.models.question import Question

logger = logging.getLogger(__name__)


def normalize_issue_path(path: str | None) -> str:
    """``/project/name`` -> ``project.name``; the root is the empty string."""
    text = str(path or "")
    if text.startswith("/"):
        text = text[1:]
    return text.replace("/", ".")


def match_issue(issue: SchemaIssue, questions: Sequence[Question]) -> List[str]:
    """Return the ids responsible for one issue, in questionnaire order."""
    target = normalize_issue_path(issue.path)
    matched = [q.id for q in questions if q.id == target or target.startswith(q.id + ".")]
    if matched or not issue.missing_property:
        return matched
    guess = f"{target}.{issue.missing_property}" if target else issue.missing_property
    return [q.id for q in questions if q.id == guess][:1]


def reconcile(issues: Iterable[SchemaIssue], questions: Sequence[Question]) -> List[str]:
    """Return the failing question ids, unique, in first-seen order."""
    failing: dict[str, None] = {}
    for issue in issues:
        for qid in match_issue(issue, questions):
            failing.setdefault(qid, None)
    return list(failing)


def unreconciled(issues: Iterable[SchemaIssue], questions: Sequence[Question]) -> List[SchemaIssue]:
    """Issues that no question can repair; reported but never re-asked."""
    out = [issue for issue in issues if not match_issue(issue, questions)]
    for issue in out:
        logger.info("reconcile_unmatched path=%r message=%s", issue.path, issue.message)
    return out


__all__ = ["normalize_issue_path", "match_issue", "reconcile", "unreconciled"]
