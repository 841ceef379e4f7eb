"""Exception types shared across the engine."""

from __future__ import annotations


class QuestionnaireError(Exception):
    pass


class QuestionnaireDefinitionError(QuestionnaireError):
    """Raised when a questionnaire or schema document cannot be used."""


class IntrinsicValidationError(ValueError):
    """A captured value failed the question's own constraints.

    Never escapes the acquisition loop; the message is shown to the person
    answering and the question is asked again.
    """


__all__ = [
    "QuestionnaireError",
    "QuestionnaireDefinitionError",
    "IntrinsicValidationError",
]
