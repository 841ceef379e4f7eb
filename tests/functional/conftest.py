"""Shared fakes for functional tests.

The engine takes its input collaborator and schema validator as parameters,
so these tests drive it with scripted answers and scripted validation
results instead of a terminal and a real schema.
"""

from __future__ import annotations

import copy
from collections import defaultdict, deque
from typing import Any, Callable, Dict, Iterable, List

import pytest

from prompt_factory.models.issues import SchemaIssue
from prompt_factory.models.question import PromptDescriptor, Question


class ScriptedCollaborator:
    """Returns queued raw values per question id; records every interaction.

    When a question's queue runs dry the last value handed out is repeated.
    """

    def __init__(self, script: Dict[str, Iterable[Any]] | None = None):
        self.queues: Dict[str, deque] = defaultdict(deque)
        self.last: Dict[str, Any] = {}
        self.asked: List[str] = []
        self.descriptors: List[PromptDescriptor] = []
        self.rejections: List[tuple[str, str]] = []
        for qid, values in (script or {}).items():
            self.queues[qid].extend(values)

    def ask(self, descriptor: PromptDescriptor) -> Any:
        self.asked.append(descriptor.name)
        self.descriptors.append(descriptor)
        queue = self.queues[descriptor.name]
        if queue:
            self.last[descriptor.name] = queue.popleft()
        if descriptor.name not in self.last:
            raise AssertionError(f"no scripted answer for {descriptor.name}")
        return self.last[descriptor.name]

    def reject(self, descriptor: PromptDescriptor, message: str) -> None:
        self.rejections.append((descriptor.name, message))


class SequenceValidator:
    """Returns the queued issue lists in order, then repeats the last one."""

    def __init__(self, results: List[List[SchemaIssue]]):
        self.results = list(results)
        self.calls = 0
        self.seen: List[Dict[str, Any]] = []

    def __call__(self, answers: Dict[str, Any]) -> List[SchemaIssue]:
        self.calls += 1
        self.seen.append(copy.deepcopy(answers))
        idx = min(self.calls - 1, len(self.results) - 1)
        return list(self.results[idx])


def make_question(qid: str, qtype: str = "text", **extra: Any) -> Question:
    payload = {"id": qid, "label": qid.replace(".", " "), "type": qtype}
    payload.update(extra)
    return Question.model_validate(payload)


@pytest.fixture
def question() -> Callable[..., Question]:
    return make_question


@pytest.fixture
def collaborator_factory() -> Callable[..., ScriptedCollaborator]:
    return ScriptedCollaborator


@pytest.fixture
def validator_factory() -> Callable[..., SequenceValidator]:
    return SequenceValidator


@pytest.fixture
def issue() -> Callable[..., SchemaIssue]:
    def _make(path: str = "", message: str = "is invalid", missing_property: str | None = None) -> SchemaIssue:
        return SchemaIssue(path=path, message=message, missing_property=missing_property)

    return _make
