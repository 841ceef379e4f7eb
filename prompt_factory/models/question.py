"""Question definitions and the prompt descriptor handed to the input side."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QuestionKind:
    TEXT = "text"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHIPS = "chips"
    TABLE = "table"

    ALL = (TEXT, TEXTAREA, BOOLEAN, SELECT, MULTISELECT, CHIPS, TABLE)


class DescriptorKind:
    TEXT = "text"
    CONFIRM = "confirm"
    SELECT = "select"
    CHECKBOX = "checkbox"
    EDITOR = "editor"


class Question(BaseModel):
    """One static questionnaire entry; immutable for the whole run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    label: str
    type: str
    options: Optional[List[str]] = None
    default: Any = None
    required: bool = False
    placeholder: Optional[str] = None
    columns: Optional[List[str]] = None
    depends_on: Optional[str] = Field(default=None, alias="dependsOn")

    @field_validator("id")
    @classmethod
    def id_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("question id must be a non-empty string")
        return v.strip()

    @field_validator("type")
    @classmethod
    def type_must_be_known(cls, v: str) -> str:
        if v not in QuestionKind.ALL:
            raise ValueError(f"question type must be one of {list(QuestionKind.ALL)}")
        return v

    @field_validator("options", mode="before")
    @classmethod
    def options_as_strings(cls, v: Optional[list]) -> Optional[List[str]]:
        if not isinstance(v, (list, tuple)):
            return v
        return [str(opt) for opt in v]

    @model_validator(mode="after")
    def columns_only_for_tables(self) -> "Question":
        if self.columns and self.type != QuestionKind.TABLE:
            raise ValueError(f"columns are only allowed on '{QuestionKind.TABLE}' questions (id={self.id})")
        return self


class PromptDescriptor(BaseModel):
    """Type-tagged request passed to the input collaborator for one attempt."""

    kind: str
    name: str
    label: str
    options: Optional[List[str]] = None
    default: Any = None
    required: bool = False
    columns: Optional[List[str]] = None
    suffix: Optional[str] = None
    page_size: Optional[int] = None


__all__ = ["QuestionKind", "DescriptorKind", "Question", "PromptDescriptor"]
