"""Engine entry point: primary pass followed by bounded repair.

Questions, validator and input collaborator are passed in explicitly so the
engine can run against fakes in tests and against the terminal in the CLI.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence
import logging

from prompt_factory.config import MAX_FIX_PASSES
from prompt_factory.logic.field_acquirer import FieldAcquirer, InputCollaborator
from prompt_factory.logic.questionnaire_runner import run_primary_pass
from prompt_factory.logic.repair_loop import PassHook, RepairLoop, Validate
from prompt_factory.models.issues import RepairOutcome
from prompt_factory.models.question import Question

logger = logging.getLogger(__name__)


def run_questionnaire(
    questions: Sequence[Question],
    validate: Validate,
    collaborator: InputCollaborator,
    *,
    max_fix_passes: int = MAX_FIX_PASSES,
    on_pass: Optional[PassHook] = None,
    answers: Optional[Dict[str, Any]] = None,
) -> RepairOutcome:
    """Collect, validate and repair answers; never terminates the process.

    ``answers`` may be supplied to start from a partially filled mapping; a
    fresh empty mapping is used otherwise.
    """
    graph: Dict[str, Any] = answers if answers is not None else {}
    acquirer = FieldAcquirer(collaborator)
    logger.info("questionnaire_start questions=%s max_fix_passes=%s", len(questions), max_fix_passes)
    run_primary_pass(questions, graph, acquirer)
    loop = RepairLoop(questions, acquirer, validate, max_fix_passes=max_fix_passes, on_pass=on_pass)
    return loop.run(graph)


__all__ = ["run_questionnaire"]
