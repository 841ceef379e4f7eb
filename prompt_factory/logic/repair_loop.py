"""Bounded validate / reconcile / re-ask loop.

Each pass validates the whole answers mapping, maps the issues back to
question ids and re-asks only those questions. The loop ends as soon as the
answers validate, when no issue maps to a question that can be re-asked, or
after ``max_fix_passes`` re-ask passes.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from prompt_factory.config import MAX_FIX_PASSES
from prompt_factory.logic.conditions import is_active
from prompt_factory.logic.error_reconciler import reconcile, unreconciled
from prompt_factory.logic.field_acquirer import FieldAcquirer
from prompt_factory.models.issues import RepairOutcome, RepairStatus, SchemaIssue
from prompt_factory.models.question import Question

logger = logging.getLogger(__name__)

Validate = Callable[[Dict[str, Any]], List[SchemaIssue]]
PassHook = Callable[[int, int, List[SchemaIssue]], None]


class RepairLoop:
    def __init__(
        self,
        questions: Sequence[Question],
        acquirer: FieldAcquirer,
        validate: Validate,
        *,
        max_fix_passes: int = MAX_FIX_PASSES,
        on_pass: Optional[PassHook] = None,
    ):
        if max_fix_passes <= 0:
            raise ValueError("max_fix_passes must be greater than zero")
        self.questions = list(questions)
        self.by_id = {q.id: q for q in self.questions}
        self.acquirer = acquirer
        self.validate = validate
        self.max_fix_passes = max_fix_passes
        self.on_pass = on_pass

    def _finish(self, status: str, answers: Dict[str, Any], passes: int, issues: List[SchemaIssue]) -> RepairOutcome:
        outcome = RepairOutcome(
            status=status,
            answers=answers,
            passes=passes,
            issues=issues,
            unreconciled=unreconciled(issues, self.questions) if issues else [],
        )
        logger.info("repair_finished status=%s passes=%s remaining=%s", status, passes, len(issues))
        return outcome

    def reask(self, failing_ids: Sequence[str], answers: Dict[str, Any]) -> int:
        """Re-ask the given ids that are still active; return how many were asked."""
        asked = 0
        for qid in failing_ids:
            question = self.by_id.get(qid)
            if question is None:
                continue
            if not is_active(question.depends_on, answers):
                logger.info("repair_skip_inactive id=%s depends_on=%r", qid, question.depends_on)
                continue
            self.acquirer.acquire(question, answers)
            asked += 1
        return asked

    def run(self, answers: Dict[str, Any]) -> RepairOutcome:
        passes = 0
        while passes < self.max_fix_passes:
            issues = list(self.validate(answers))
            if not issues:
                return self._finish(RepairStatus.DONE, answers, passes, [])

            logger.info("repair_pass_start pass=%s max=%s issues=%s", passes + 1, self.max_fix_passes, len(issues))
            if self.on_pass is not None:
                self.on_pass(passes + 1, self.max_fix_passes, issues)

            failing_ids = reconcile(issues, self.questions)
            if not failing_ids:
                logger.warning("repair_nothing_actionable pass=%s issues=%s", passes + 1, len(issues))
                return self._finish(RepairStatus.EXHAUSTED, answers, passes, issues)

            asked = self.reask(failing_ids, answers)
            logger.info("repair_pass_done pass=%s failing=%s asked=%s", passes + 1, failing_ids, asked)
            passes += 1

        issues = list(self.validate(answers))
        if not issues:
            return self._finish(RepairStatus.DONE, answers, passes, [])
        logger.warning("repair_budget_exhausted passes=%s remaining=%s", passes, len(issues))
        return self._finish(RepairStatus.EXHAUSTED, answers, passes, issues)


__all__ = ["RepairLoop", "Validate", "PassHook"]
