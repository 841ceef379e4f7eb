"""Functional tests for mapping schema issues back to question ids."""

from __future__ import annotations

from prompt_factory.logic.error_reconciler import (
    match_issue,
    normalize_issue_path,
    reconcile,
    unreconciled,
)


def test_path_normalisation() -> None:
    assert normalize_issue_path("/project/name") == "project.name"
    assert normalize_issue_path("") == ""
    assert normalize_issue_path(None) == ""
    assert normalize_issue_path("/screens/0/name") == "screens.0.name"


def test_exact_match(question, issue) -> None:
    questions = [question("project.name")]
    assert reconcile([issue("/project/name")], questions) == ["project.name"]


def test_prefix_match_for_nested_error(question, issue) -> None:
    questions = [question("project.name"), question("screens", "table")]
    assert reconcile([issue("/project/name/extra")], questions) == ["project.name"]
    assert reconcile([issue("/screens/0/name")], questions) == ["screens"]


def test_prefix_requires_segment_boundary(question, issue) -> None:
    questions = [question("project.name")]
    assert reconcile([issue("/project/names")], questions) == []


def test_missing_property_heuristic(question, issue) -> None:
    questions = [question("project.name"), question("output.format", "select", options=["a"])]
    assert reconcile([issue("/project", missing_property="name")], questions) == ["project.name"]
    assert reconcile([issue("", missing_property="output")], questions) == []
    root_question = [question("fidelity", "select", options=["x"])]
    assert reconcile([issue("", missing_property="fidelity")], root_question) == ["fidelity"]


def test_missing_property_only_used_when_nothing_else_matched(question, issue) -> None:
    questions = [question("project"), question("project.name")]
    assert match_issue(issue("/project", missing_property="name"), questions) == ["project"]


def test_union_is_unique_and_first_seen_ordered(question, issue) -> None:
    questions = [question("a.one"), question("b.two"), question("c.three")]
    issues = [
        issue("/c/three"),
        issue("/a/one"),
        issue("/c/three/deep"),
        issue("/b", missing_property="two"),
    ]
    assert reconcile(issues, questions) == ["c.three", "a.one", "b.two"]


def test_root_issue_without_metadata_is_unreconciled(question, issue) -> None:
    questions = [question("project.name")]
    root = issue("", message="must NOT have additional properties")
    assert reconcile([root], questions) == []
    assert unreconciled([root, issue("/project/name")], questions) == [root]
