"""
Document model and its owned sub-structures.

Single responsibility: define the shapes that flow between the engine's
components and the document store. These are plain dataclasses - no I/O,
no collaborator calls. State machines elsewhere return NEW values built with
dataclasses.replace; nothing here is mutated in place by the engine.

Serialization helpers (to_dict) emit the camelCase keys expected by the
artifact renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Literal

import numpy as np

from syllabus_engine.core.errors import InvalidInput, InvalidTransition


DocumentStatus = Literal["processing", "analyzed", "reviewed", "approved", "error"]
EditingStatus = Literal["idle", "processing", "ready", "error"]
RiskLevel = Literal["none", "low", "medium", "high"]
RecommendationStatus = Literal["pending", "accepted", "rejected", "commented"]
Priority = Literal["low", "medium", "high", "critical"]
ChallengeStatus = Literal["pending", "in-progress", "completed"]

DOCUMENT_STATUSES: tuple[str, ...] = ("processing", "analyzed", "reviewed", "approved", "error")
EDITING_STATUSES: tuple[str, ...] = ("idle", "processing", "ready", "error")
RECOMMENDATION_STATUSES: tuple[str, ...] = ("pending", "accepted", "rejected", "commented")
PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "critical")
CATEGORIES: tuple[str, ...] = (
    "structure",
    "content",
    "objectives",
    "assessment",
    "cases",
    "methods",
    "plagiarism",
    "practicality",
)

# Statuses that only an explicit re-analysis request may move back to processing
SETTLED_STATUSES = frozenset({"analyzed", "reviewed", "approved"})


def utcnow() -> datetime:
    """Timezone-aware now, used for every engine timestamp."""
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# SIMILARITY
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Excerpt:
    """Verbatim evidence: a slice of the other document's raw text."""
    text: str
    position: int


@dataclass(frozen=True)
class SimilarityMatch:
    """
    One corpus document that overlaps with the target.

    Produced by the similarity engine; superseded, never mutated, when the
    target is analyzed again.
    """
    other_document_id: str
    score: int  # 0-100
    excerpts: tuple[Excerpt, ...] = ()

    def to_dict(self) -> dict:
        return {
            "otherDocumentId": self.other_document_id,
            "score": self.score,
            "excerpts": [{"text": e.text, "position": e.position} for e in self.excerpts],
        }


# ---------------------------------------------------------------------------
# RECOMMENDATIONS
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Recommendation:
    """A single proposed change with its own accept/reject/comment lifecycle."""
    id: str
    category: str
    title: str
    description: str
    priority: str = "medium"
    status: str = "pending"
    suggested_text: str | None = None
    instructor_comment: str | None = None
    ai_response: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    responded_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "suggestedText": self.suggested_text,
            "priority": self.priority,
            "status": self.status,
            "instructorComment": self.instructor_comment,
            "aiResponse": self.ai_response,
            "createdAt": _iso(self.created_at),
            "respondedAt": _iso(self.responded_at),
        }


# ---------------------------------------------------------------------------
# CHALLENGE DIALOGUE
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiscussionRound:
    """One instructor response and the collaborator's reply to it."""
    instructor_response: str
    ai_response: str
    responded_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ChallengeState:
    """
    The bounded question/answer exchange attached to a document.

    Rounds are only ever appended. `suggestions` holds the compact summaries
    written when the dialogue is finalized.
    """
    initial_question: str
    status: str = "pending"
    discussion: tuple[DiscussionRound, ...] = ()
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "initialQuestion": self.initial_question,
            "status": self.status,
            "discussion": [
                {
                    "instructorResponse": r.instructor_response,
                    "aiResponse": r.ai_response,
                    "respondedAt": _iso(r.responded_at),
                }
                for r in self.discussion
            ],
            "suggestions": list(self.suggestions),
        }


# ---------------------------------------------------------------------------
# DOCUMENT
# ---------------------------------------------------------------------------


@dataclass
class Document:
    """
    A syllabus and everything the engine has derived from it.

    Owned by the document store. Services read a copy, compute new field
    values, and write them back through the store.
    """
    id: str
    text: str
    title: str = ""
    status: str = "processing"
    fingerprint: np.ndarray | None = None
    similarity_findings: list[SimilarityMatch] = field(default_factory=list)
    risk_level: str = "none"
    recommendations: list[Recommendation] = field(default_factory=list)
    challenge: ChallengeState | None = None
    # Revision bookkeeping - editing_status doubles as the per-document mutex
    editing_status: str = "idle"
    editing_error: str | None = None
    revised_text: str | None = None
    change_log: list[Any] = field(default_factory=list)
    error_reason: str | None = None
    version: int = 1

    def find_recommendation(self, recommendation_id: str) -> Recommendation | None:
        """Look up one of this document's recommendations by id."""
        for recommendation in self.recommendations:
            if recommendation.id == recommendation_id:
                return recommendation
        return None

    @property
    def accepted_recommendations(self) -> list[Recommendation]:
        return [r for r in self.recommendations if r.status == "accepted"]


def check_status_change(current: str, new_status: str) -> str:
    """
    Validate a document status change and return the new status.

    A settled document (analyzed/reviewed/approved) may not drop back to
    processing here; that is only done by request_reanalysis().
    """
    if new_status not in DOCUMENT_STATUSES:
        raise InvalidInput(f"Unknown document status: {new_status!r}")
    if new_status == "processing" and current in SETTLED_STATUSES:
        raise InvalidTransition(
            f"Document status cannot go from {current!r} to 'processing' "
            "without an explicit re-analysis request"
        )
    return new_status


def request_reanalysis(document: Document) -> Document:
    """Explicitly send a document back to processing for a fresh analysis."""
    return replace(document, status="processing", error_reason=None)
