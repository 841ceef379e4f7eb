"""Functional tests for the jsonschema adapter and its fit with reconciliation."""

from __future__ import annotations

import pytest

from prompt_factory.config import DATA_DIR, DEFAULT_QUESTIONNAIRE, DEFAULT_SCHEMA
from prompt_factory.errors import QuestionnaireDefinitionError
from prompt_factory.logic.answers_io import read_json
from prompt_factory.logic.error_reconciler import reconcile
from prompt_factory.logic.questionnaire_loader import load_questions, load_schema
from prompt_factory.logic.schema_validation import SchemaValidator

EXAMPLE = DATA_DIR / "examples" / "vehicle-rental.json"

SMALL_SCHEMA = {
    "type": "object",
    "required": ["project"],
    "properties": {
        "project": {
            "type": "object",
            "required": ["name", "description"],
            "properties": {
                "name": {"type": "string", "minLength": 3},
                "description": {"type": "string"},
            },
        },
        "screens": {"type": "array", "items": {"type": "object", "required": ["name"]}},
    },
}


def test_valid_instance_has_no_issues() -> None:
    validator = SchemaValidator(SMALL_SCHEMA)
    answers = {"project": {"name": "Atlas", "description": "d"}}
    assert validator(answers) == []
    assert validator.is_valid(answers)


def test_required_errors_carry_parent_path_and_missing_property() -> None:
    validator = SchemaValidator(SMALL_SCHEMA)
    issues = validator({"project": {}})
    assert [(i.path, i.missing_property) for i in issues] == [
        ("/project", "description"),
        ("/project", "name"),
    ]
    assert all(i.keyword == "required" for i in issues)


def test_root_required_error_has_empty_path() -> None:
    issues = SchemaValidator(SMALL_SCHEMA)({})
    assert len(issues) == 1
    assert issues[0].path == ""
    assert issues[0].missing_property == "project"
    assert issues[0].describe().startswith("(root)")


def test_nested_array_error_path() -> None:
    issues = SchemaValidator(SMALL_SCHEMA)({"project": {"name": "Atlas", "description": "d"}, "screens": [{"name": "a"}, {}]})
    assert [(i.path, i.missing_property) for i in issues] == [("/screens/1", "name")]


def test_invalid_schema_is_a_definition_error() -> None:
    with pytest.raises(QuestionnaireDefinitionError):
        SchemaValidator({"type": 12})


def test_bundled_schema_issues_reconcile_to_bundled_questions() -> None:
    questions = load_questions(DEFAULT_QUESTIONNAIRE)
    validator = SchemaValidator(load_schema(DEFAULT_SCHEMA))
    answers = {
        "project": {"name": "", "description": "short"},
        "platform": {"targets": ["web"], "responsive": True},
        "screens": [{"priority": 1}],
        "output": {"format": "code-react"},
    }
    issues = validator(answers)
    failing = reconcile(issues, questions)
    assert set(failing) == {"project.name", "project.description", "screens"}


def test_bundled_schema_missing_answer_reconciles_by_property() -> None:
    questions = load_questions(DEFAULT_QUESTIONNAIRE)
    validator = SchemaValidator(load_schema(DEFAULT_SCHEMA))
    answers = {
        "project": {"name": "Atlas", "description": "A long enough description"},
        "platform": {"targets": ["web"], "responsive": True},
        "screens": [{"name": "Home"}],
        "output": {},
    }
    assert reconcile(validator(answers), questions) == ["output.format"]


def test_bundled_schema_checks_uri_format() -> None:
    validator = SchemaValidator(load_schema(DEFAULT_SCHEMA))
    answers = read_json(EXAMPLE)
    assert validator(answers) == []
    answers["style"]["brand"]["logoUrl"] = "not a uri at all"
    issues = validator(answers)
    assert [(i.path, i.keyword) for i in issues] == [("/style/brand/logoUrl", "format")]
    answers["style"]["brand"]["logoUrl"] = "https://example.com/logo.svg"
    assert validator(answers) == []
