"""Primary pass over the ordered question list."""

from __future__ import annotations

from typing import Any, Dict, Sequence
import logging

from prompt_factory.logic.conditions import is_active
from prompt_factory.logic.field_acquirer import FieldAcquirer
from prompt_factory.models.question import Question

logger = logging.getLogger(__name__)


def run_primary_pass(questions: Sequence[Question], answers: Dict[str, Any], acquirer: FieldAcquirer) -> None:
    """Ask every active question once, in declaration order.

    Activation is decided against the answers written so far, so a question
    may only depend on questions declared before it. Inactive questions leave
    no trace in ``answers``.
    """
    asked = 0
    for question in questions:
        if not is_active(question.depends_on, answers):
            logger.debug("primary_skip id=%s depends_on=%r", question.id, question.depends_on)
            continue
        acquirer.acquire(question, answers)
        asked += 1
    logger.info("primary_pass_done total=%s asked=%s", len(questions), asked)


__all__ = ["run_primary_pass"]
