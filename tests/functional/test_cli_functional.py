"""Functional tests for the command line surface.

Only the non-interactive commands are exercised through the CLI runner; the
interactive ``ask`` flow is covered through the engine with scripted input,
plus one run here with the terminal collaborator patched out.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import prompt_factory.cli as cli_module
from prompt_factory.cli import app
from prompt_factory.config import DATA_DIR
from prompt_factory.logic.prompt_builder import SYSTEM_PROMPT, TASK_RULES, build_prompt

EXAMPLE = DATA_DIR / "examples" / "vehicle-rental.json"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("PROMPT_FACTORY_QUESTIONNAIRE", "PROMPT_FACTORY_SCHEMA", "PROMPT_FACTORY_OUT_DIR"):
        monkeypatch.delenv(key, raising=False)


def test_build_prompt_layout() -> None:
    text = build_prompt({"project": {"name": "Atlas"}})
    parts = text.split("\n\n")
    assert parts[0] == "SYSTEM:\n" + SYSTEM_PROMPT
    assert parts[1].startswith("USER:\n")
    assert '<CONTEXT>\n{\n  "project": {\n    "name": "Atlas"\n  }\n}\n</CONTEXT>' in text
    assert text.endswith(TASK_RULES)


def test_validate_accepts_bundled_example() -> None:
    result = runner.invoke(app, ["validate", str(EXAMPLE)])
    assert result.exit_code == 0, result.output
    assert "Valid" in result.output


def test_validate_reports_issues_and_fails(tmp_path: Path) -> None:
    bad = tmp_path / "answers.json"
    bad.write_text(json.dumps({"project": {"name": "Atlas"}}), encoding="utf-8")
    result = runner.invoke(app, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "'description' is a required property" in result.output


def test_validate_missing_file_exits_with_usage_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
    assert result.exit_code == 2


def test_render_writes_prompt(tmp_path: Path) -> None:
    out = tmp_path / "prompt.txt"
    result = runner.invoke(app, ["render", str(EXAMPLE), "--out", str(out)])
    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert "RideShare Rentals" in text
    assert text.startswith("SYSTEM:\n")


class _ExampleCollaborator:
    """Answers every question from the bundled example answers file."""

    def __init__(self, *_args, **_kwargs):
        from prompt_factory.logic.deep_path import get_path

        self._get = get_path
        self._data = json.loads(EXAMPLE.read_text(encoding="utf-8"))

    def ask(self, descriptor):
        value = self._get(self._data, descriptor.name)
        if value is None:
            return descriptor.default if descriptor.default is not None else ""
        return value

    def reject(self, descriptor, message):
        raise AssertionError(f"unexpected rejection for {descriptor.name}: {message}")


def test_ask_writes_answers_and_prompt(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "TerminalCollaborator", _ExampleCollaborator)
    out_dir = tmp_path / "run"
    result = runner.invoke(app, ["ask", "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    answers = json.loads((out_dir / "answers.json").read_text(encoding="utf-8"))
    assert answers["project"]["name"] == "RideShare Rentals"
    assert answers["users"]["roles"] == ["customer", "fleet-manager", "admin"]
    assert "flutter" not in answers["output"]["tech"]
    assert "region" not in answers["localization"]
    assert (out_dir / "prompt.txt").exists()
