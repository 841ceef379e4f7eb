"""Command line entry point (``prompt-factory``).

``ask`` runs the interactive questionnaire and writes ``answers.json`` and
``prompt.txt``; ``validate`` checks a saved answers file against the schema;
``render`` builds the prompt text from an existing answers file.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import logging

import typer
from rich.console import Console

from prompt_factory.config import load_config
from prompt_factory.engine import run_questionnaire
from prompt_factory.errors import QuestionnaireDefinitionError
from prompt_factory.logging_setup import configure_logging
from prompt_factory.logic.answers_io import read_json, write_json, write_text
from prompt_factory.logic.prompt_builder import build_prompt
from prompt_factory.logic.questionnaire_loader import load_questions, load_schema
from prompt_factory.logic.schema_validation import SchemaValidator
from prompt_factory.models.issues import SchemaIssue
from prompt_factory.terminal import TerminalCollaborator

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def print_ok(msg: str) -> None:
    console.print(f"[green]✓[/green] {msg}")


def print_err(msg: str) -> None:
    err_console.print(f"[red]✗[/red] {msg}")


def print_warn(msg: str) -> None:
    console.print(f"[yellow]![/yellow] {msg}")


def _print_issues(issues: List[SchemaIssue]) -> None:
    for issue in issues:
        console.print(f" - {issue.describe()}", markup=False)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
):
    """Build a UI prompt from a conditional questionnaire."""
    cfg = load_config()
    level = "DEBUG" if verbose else ("ERROR" if quiet else cfg.log_level)
    configure_logging(level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@app.command(help="Answer the questionnaire and write answers.json and prompt.txt.")
def ask(
    ctx: typer.Context,
    questionnaire: Optional[Path] = typer.Option(None, "--questionnaire", help="Questionnaire JSON/YAML file"),
    schema: Optional[Path] = typer.Option(None, "--schema", help="JSON Schema for the answers"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
):
    cfg = ctx.obj["config"]
    try:
        questions = load_questions(questionnaire or cfg.sources.questionnaire_path)
        validator = SchemaValidator(load_schema(schema or cfg.sources.schema_path))
    except QuestionnaireDefinitionError as exc:
        print_err(str(exc))
        raise typer.Exit(code=2)

    console.print("\n[bright_cyan]▶ Prompt Factory: UI Builder[/bright_cyan]\n")

    def on_pass(number: int, total: int, issues: List[SchemaIssue]) -> None:
        console.print(f"\n[yellow]Some inputs need fixes (pass {number}/{total}):[/yellow]")
        _print_issues(issues)

    outcome = run_questionnaire(
        questions,
        validator,
        TerminalCollaborator(console),
        max_fix_passes=cfg.repair.max_fix_passes,
        on_pass=on_pass,
    )
    logger.info("ask_finished status=%s passes=%s", outcome.status, outcome.passes)
    if not outcome.ok:
        print_err("Could not validate after multiple passes. Please review the errors below.")
        _print_issues(outcome.issues)
        raise typer.Exit(code=1)

    out_dir = out or cfg.output.out_dir
    answers_path = write_json(out_dir / "answers.json", outcome.answers)
    prompt_path = write_text(out_dir / "prompt.txt", build_prompt(outcome.answers))
    print_ok(f"Answers saved to {answers_path}")
    print_ok(f"Prompt saved to {prompt_path}")
    print_warn("Next: paste the prompt into your assistant of choice, or send it via API.")


@app.command(help="Validate a saved answers file against the schema.")
def validate(
    ctx: typer.Context,
    answers: Path = typer.Argument(Path("out/answers.json"), help="Answers JSON file"),
    schema: Optional[Path] = typer.Option(None, "--schema", help="JSON Schema for the answers"),
):
    cfg = ctx.obj["config"]
    try:
        validator = SchemaValidator(load_schema(schema or cfg.sources.schema_path))
        data = read_json(answers)
    except (QuestionnaireDefinitionError, OSError, ValueError) as exc:
        print_err(str(exc))
        raise typer.Exit(code=2)
    issues = validator(data)
    if issues:
        print_err("Invalid")
        _print_issues(issues)
        raise typer.Exit(code=1)
    print_ok("Valid")


@app.command(help="Build the prompt text from an existing answers file.")
def render(
    answers: Path = typer.Argument(..., help="Answers JSON file"),
    out: Path = typer.Option(Path("out/prompt_from_answers.txt"), "--out", help="Prompt text file"),
):
    try:
        data = read_json(answers)
    except (OSError, ValueError) as exc:
        print_err(str(exc))
        raise typer.Exit(code=2)
    path = write_text(out, build_prompt(data))
    print_ok(f"Prompt written to {path}")


__all__ = ["app"]
