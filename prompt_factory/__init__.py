"""Prompt Factory: conditional questionnaire with targeted schema repair.

The package collects answers to a branching questionnaire, validates the
aggregate answers against a JSON Schema and re-asks only the questions whose
values fail validation. Terminal interaction lives in `prompt_factory.terminal`
and the command line in `prompt_factory.cli`; the engine itself lives in
`prompt_factory/logic/`.
"""

from __future__ import annotations

from prompt_factory.engine import run_questionnaire

__all__ = ["run_questionnaire"]
