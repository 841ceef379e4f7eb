"""Loading of questionnaire and schema documents (JSON or YAML)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List
import json
import logging

import yaml
from pydantic import ValidationError as PydanticValidationError

from prompt_factory.errors import QuestionnaireDefinitionError
from prompt_factory.models.question import Question

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> Any:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise QuestionnaireDefinitionError(f"cannot read {path}: {e}") from e
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise QuestionnaireDefinitionError(f"cannot parse {path}: {e}") from e


def parse_questions(items: Any) -> List[Question]:
    """Validate raw question records; ids must be unique."""
    if not isinstance(items, list):
        raise QuestionnaireDefinitionError("questionnaire must be a list of questions")
    questions: List[Question] = []
    seen: set[str] = set()
    for index, item in enumerate(items):
        try:
            question = Question.model_validate(item)
        except PydanticValidationError as e:
            raise QuestionnaireDefinitionError(f"question #{index} is invalid: {e}") from e
        if question.id in seen:
            raise QuestionnaireDefinitionError(f"duplicate question id: {question.id}")
        seen.add(question.id)
        questions.append(question)
    return questions


def load_questions(path: Path | str) -> List[Question]:
    questions = parse_questions(_read_document(Path(path)))
    logger.info("questionnaire_loaded path=%s count=%s", path, len(questions))
    return questions


def load_schema(path: Path | str) -> dict:
    schema = _read_document(Path(path))
    if not isinstance(schema, dict):
        raise QuestionnaireDefinitionError(f"schema document must be an object: {path}")
    return schema


__all__ = ["parse_questions", "load_questions", "load_schema"]
