"""JSON Schema validation of the complete answers mapping.

Wraps a compiled ``jsonschema`` validator (format checks on, every error
collected) and reports errors as SchemaIssue records whose ``path`` is the
instance location in ``/a/b/0`` form. ``required`` failures are reported
against the parent object with ``missing_property`` set, which is what the
reconciler relies on to find the question for an absent answer.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping
import logging

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, ValidationError

from prompt_factory.errors import QuestionnaireDefinitionError
from prompt_factory.models.issues import SchemaIssue

logger = logging.getLogger(__name__)


def _pointer(parts) -> str:
    if not parts:
        return ""
    escaped = (str(p).replace("~", "~0").replace("/", "~1") for p in parts)
    return "/" + "/".join(escaped)


def _missing_property(error: ValidationError) -> str | None:
    if error.validator != "required" or not isinstance(error.instance, dict):
        return None
    missing = [p for p in (error.validator_value or []) if p not in error.instance]
    for prop in missing:
        if error.message.startswith(repr(prop)):
            return prop
    return missing[0] if missing else None


def to_issue(error: ValidationError) -> SchemaIssue:
    return SchemaIssue(
        path=_pointer(list(error.absolute_path)),
        message=error.message,
        missing_property=_missing_property(error),
        keyword=str(error.validator) if error.validator else None,
    )


class SchemaValidator:
    """Callable validator: answers in, list of SchemaIssue out."""

    def __init__(self, schema: Mapping[str, Any]):
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as exc:
            raise QuestionnaireDefinitionError(f"invalid JSON schema: {exc.message}") from exc
        self._validator = Draft202012Validator(schema, format_checker=Draft202012Validator.FORMAT_CHECKER)

    def __call__(self, answers: Dict[str, Any]) -> List[SchemaIssue]:
        issues = [to_issue(err) for err in self._validator.iter_errors(answers)]
        issues.sort(key=lambda i: (i.path, i.message))
        if issues:
            logger.debug("schema_issues count=%s paths=%s", len(issues), [i.path for i in issues])
        return issues

    def is_valid(self, answers: Dict[str, Any]) -> bool:
        return self._validator.is_valid(answers)


__all__ = ["SchemaValidator", "to_issue"]
