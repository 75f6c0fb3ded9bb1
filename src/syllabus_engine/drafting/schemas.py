"""
Drafting reply schemas - the contract with the text-generation service.

Every drafting request expects exactly one JSON object back. These models
define what each task's object must contain:
- RevisionReply: consolidated revision ({"editedText", "changes"})
- RecommendationsReply: analysis and challenge extraction ({"recommendations"})
- QuestionReply: opening challenge question ({"question"})
- AnswerReply: challenge and comment replies ({"answer"})

Optional lists default to empty; required text fields must be non-blank.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# ---------------------------------------------------------------------------
# REVISION
# ---------------------------------------------------------------------------


class ChangeDescriptor(BaseModel):
    """One change the collaborator reports having made."""

    recommendation: str = ""
    location: str = ""
    action: str = ""
    preview: str = ""

    @field_validator("recommendation", "location", "action", "preview", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class RevisionReply(BaseModel):
    """Reply to a consolidated revision request."""

    model_config = ConfigDict(populate_by_name=True)

    edited_text: str = Field(alias="editedText", description="Full revised document text")
    changes: list[ChangeDescriptor] = Field(default_factory=list)

    @field_validator("edited_text")
    @classmethod
    def _edited_text_present(cls, value: str) -> str:
        return _non_blank(value)

    @field_validator("changes", mode="before")
    @classmethod
    def _changes_default(cls, value: Any) -> Any:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# RECOMMENDATIONS
# ---------------------------------------------------------------------------


class RecommendationDraft(BaseModel):
    """
    A recommendation as drafted by the collaborator.

    Category and priority are kept as free text here; coercion to the known
    vocabularies happens in recommendations.lifecycle.normalize_recommendations.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: str = ""
    title: str = ""
    description: str = ""
    suggested_text: str | None = Field(default=None, alias="suggestedText")
    priority: str = ""

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_strings(cls, value: Any) -> Any:
        # A bare string item is treated as the description
        if isinstance(value, str):
            return {"description": value}
        return value

    @field_validator("category", "title", "description", "priority", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class RecommendationsReply(BaseModel):
    """Reply carrying a list of drafted recommendations."""

    recommendations: list[RecommendationDraft]


# ---------------------------------------------------------------------------
# CHALLENGE / COMMENTS
# ---------------------------------------------------------------------------


class QuestionReply(BaseModel):
    """Opening question of a challenge dialogue."""

    question: str

    @field_validator("question")
    @classmethod
    def _question_present(cls, value: str) -> str:
        return _non_blank(value)


class AnswerReply(BaseModel):
    """Free-text answer (challenge rounds and comment follow-ups)."""

    answer: str

    @field_validator("answer")
    @classmethod
    def _answer_present(cls, value: str) -> str:
        return _non_blank(value)
