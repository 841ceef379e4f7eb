"""Per-question acquisition with local retry.

Builds the prompt descriptor for a question, hands it to the input
collaborator, normalises the raw value into the shape stored in the answers
mapping and checks the question's own constraints (required, allowed
options, table row shape). A failed check is reported back to the
collaborator and the question is asked again until a valid value arrives.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol
import json
import logging

from prompt_factory.errors import IntrinsicValidationError
from prompt_factory.logic.deep_path import get_path, set_path
from prompt_factory.models.question import DescriptorKind, PromptDescriptor, Question, QuestionKind

logger = logging.getLogger(__name__)

TABLE_EXAMPLE = '[{"name":"Home","priority":1,"mustHave":true}]'


class InputCollaborator(Protocol):
    def ask(self, descriptor: PromptDescriptor) -> Any: ...

    def reject(self, descriptor: PromptDescriptor, message: str) -> None: ...


def _option_value(item: Any) -> str:
    if isinstance(item, dict) and "value" in item:
        return str(item["value"])
    if hasattr(item, "value") and not isinstance(item, (str, bytes)):
        return str(getattr(item, "value"))
    return str(item)


def build_descriptor(question: Question, answers: Dict[str, Any] | None = None) -> PromptDescriptor:
    """Return the type-specific descriptor for one attempt.

    A value already present in ``answers`` (a repair re-ask) is offered as the
    default in place of the question's configured default.
    """
    existing = get_path(answers or {}, question.id)
    default = existing if existing is not None else question.default
    options = list(question.options or [])
    base = {
        "name": question.id,
        "label": question.label,
        "required": question.required,
    }

    if question.type == QuestionKind.BOOLEAN:
        return PromptDescriptor(
            kind=DescriptorKind.CONFIRM,
            default=default if isinstance(default, bool) else False,
            **base,
        )
    if question.type == QuestionKind.SELECT:
        return PromptDescriptor(kind=DescriptorKind.SELECT, options=options, default=default, **base)
    if question.type == QuestionKind.MULTISELECT:
        selected = [str(v) for v in default] if isinstance(default, list) else []
        return PromptDescriptor(
            kind=DescriptorKind.CHECKBOX,
            options=options,
            default=[v for v in selected if v in options],
            page_size=max(5, min(12, len(options) or 5)),
            **base,
        )
    if question.type == QuestionKind.CHIPS:
        return PromptDescriptor(
            kind=DescriptorKind.TEXT,
            default=", ".join(str(v) for v in default) if isinstance(default, list) else default,
            suffix=" (comma-separated)",
            **base,
        )
    if question.type == QuestionKind.TABLE:
        return PromptDescriptor(
            kind=DescriptorKind.EDITOR,
            default=json.dumps(default if default is not None else [], indent=2),
            columns=list(question.columns or []) or None,
            **base,
        )
    return PromptDescriptor(kind=DescriptorKind.TEXT, default=default, **base)


def normalize_value(question: Question, raw: Any) -> Any:
    """Convert a raw captured value into its canonical stored shape.

    Raises IntrinsicValidationError when a table payload is not valid JSON or
    a boolean answer cannot be read as one.
    """
    kind = question.type
    if kind == QuestionKind.CHIPS:
        if isinstance(raw, list):
            items = [str(x).strip() for x in raw]
        elif raw:
            items = [part.strip() for part in str(raw).split(",")]
        else:
            items = []
        return [item for item in items if item]
    if kind == QuestionKind.TABLE:
        if isinstance(raw, list):
            return raw
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return []
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            raise IntrinsicValidationError(f"Invalid JSON. Example: {TABLE_EXAMPLE}")
    if kind == QuestionKind.MULTISELECT:
        if not isinstance(raw, list):
            return []
        return [_option_value(v) for v in raw]
    if kind == QuestionKind.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        token = str(raw).strip().lower()
        if token in {"true", "yes", "y", "1"}:
            return True
        if token in {"false", "no", "n", "0"}:
            return False
        raise IntrinsicValidationError("Please answer yes or no.")
    return raw


def is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, list) and len(value) == 0)


def check_value(question: Question, value: Any) -> None:
    """Raise IntrinsicValidationError when ``value`` breaks the question's own rules."""
    if question.required and is_empty(value):
        if question.type == QuestionKind.MULTISELECT:
            raise IntrinsicValidationError("Select at least one option.")
        raise IntrinsicValidationError("This field is required.")

    if question.type == QuestionKind.TABLE:
        if not isinstance(value, list):
            raise IntrinsicValidationError("Please provide a JSON array.")
        columns = question.columns or []
        if columns and value:
            for row in value:
                if not isinstance(row, dict) or any(c not in row for c in columns):
                    raise IntrinsicValidationError(f"Each row must contain keys: {', '.join(columns)}")

    options = question.options
    if question.type == QuestionKind.SELECT and options and not is_empty(value) and value not in options:
        raise IntrinsicValidationError(f"Pick one of: {', '.join(options)}")
    if question.type == QuestionKind.MULTISELECT and options:
        unknown = [v for v in value if v not in options]
        if unknown:
            raise IntrinsicValidationError(f"Unknown: {', '.join(unknown)}. Allowed: {', '.join(options)}")


class FieldAcquirer:
    """Asks one question until its value passes the local checks."""

    def __init__(self, collaborator: InputCollaborator):
        self.collaborator = collaborator

    def acquire(self, question: Question, answers: Dict[str, Any]) -> Any:
        attempt = 0
        while True:
            attempt += 1
            descriptor = build_descriptor(question, answers)
            raw = self.collaborator.ask(descriptor)
            try:
                value = normalize_value(question, raw)
                check_value(question, value)
            except IntrinsicValidationError as exc:
                logger.info("acquire_rejected id=%s attempt=%s reason=%s", question.id, attempt, exc)
                self.collaborator.reject(descriptor, str(exc))
                continue
            set_path(answers, question.id, value)
            logger.debug("acquire_ok id=%s attempt=%s", question.id, attempt)
            return value


__all__ = [
    "InputCollaborator",
    "FieldAcquirer",
    "build_descriptor",
    "normalize_value",
    "check_value",
    "is_empty",
]
