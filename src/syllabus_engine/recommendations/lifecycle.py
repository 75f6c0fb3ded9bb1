"""
Recommendation lifecycle - the per-recommendation state machine.

    pending ──► accepted | rejected | commented
                    │
                    └──► (any of the three again; last decision wins)

Every function here returns a NEW Recommendation built with
dataclasses.replace; inputs are never mutated. Persistence is the caller's
job (see recommendations.service).

INTERVIEW TALKING POINT:
------------------------
"transition() is pure, so the whole state machine is tested with plain
values and an injected clock. The only collaborator call, the reply to an
instructor comment, is a separate function with a courtesy fallback,
because that reply never feeds into the revised text."
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Iterable
from uuid import uuid4

from syllabus_engine.core.errors import ExternalServiceError, InvalidInput, InvalidTransition
from syllabus_engine.documents.models import CATEGORIES, PRIORITIES, Recommendation, utcnow
from syllabus_engine.drafting.parsing import parse_reply
from syllabus_engine.drafting.schemas import AnswerReply, RecommendationDraft
from syllabus_engine.recommendations.prompts import (
    COMMENT_FALLBACK_REPLY,
    COMMENT_REPLY_SYSTEM_PROMPT,
    format_comment_reply_prompt,
)

if TYPE_CHECKING:
    from syllabus_engine.core.protocols import DraftingClient
    from syllabus_engine.similarity.engine import SimilarityReport

logger = logging.getLogger(__name__)

# Statuses an instructor decision may move a recommendation to
DECISION_STATUSES = frozenset({"accepted", "rejected", "commented"})

DEFAULT_CATEGORY = "content"
DEFAULT_PRIORITY = "medium"


def new_recommendation_id(prefix: str = "rec", ordinal: int | None = None) -> str:
    """Unique recommendation id, e.g. rec_3_9f2c41ab."""
    suffix = uuid4().hex[:8]
    return f"{prefix}_{ordinal}_{suffix}" if ordinal is not None else f"{prefix}_{suffix}"


def new_recommendation(
    category: str,
    title: str,
    description: str,
    priority: str = DEFAULT_PRIORITY,
    suggested_text: str | None = None,
    id_prefix: str = "rec",
    now: datetime | None = None,
) -> Recommendation:
    """Create a pending recommendation with a fresh id."""
    if category not in CATEGORIES:
        raise InvalidInput(f"Unknown recommendation category: {category!r}")
    if priority not in PRIORITIES:
        raise InvalidInput(f"Unknown priority: {priority!r}")
    return Recommendation(
        id=new_recommendation_id(id_prefix),
        category=category,
        title=title,
        description=description,
        priority=priority,
        suggested_text=suggested_text,
        created_at=now or utcnow(),
    )


# ---------------------------------------------------------------------------
# STATE MACHINE
# ---------------------------------------------------------------------------


def transition(
    recommendation: Recommendation,
    new_status: str,
    comment: str | None = None,
    now: datetime | None = None,
) -> Recommendation:
    """
    Apply an instructor decision.

    Args:
        recommendation: Current value (left untouched)
        new_status: accepted, rejected or commented
        comment: Required for commented; stored when given with the others
        now: Clock override for tests

    Raises:
        InvalidTransition: new_status is not a decision status
        InvalidInput: commented without a non-blank comment
    """
    if new_status not in DECISION_STATUSES:
        raise InvalidTransition(
            f"Recommendation {recommendation.id} cannot move to {new_status!r}"
        )

    has_comment = comment is not None and comment.strip() != ""
    if new_status == "commented" and not has_comment:
        raise InvalidInput("A comment is required to mark a recommendation as commented")

    changes: dict = {"status": new_status, "responded_at": now or utcnow()}
    if has_comment:
        changes["instructor_comment"] = comment

    return replace(recommendation, **changes)


def attach_ai_response(recommendation: Recommendation, text: str) -> Recommendation:
    """Record the collaborator's follow-up without touching status."""
    return replace(recommendation, ai_response=text)


def request_comment_reply(recommendation: Recommendation, client: DraftingClient) -> str:
    """
    Ask the collaborator to answer the instructor's comment.

    Failures fall back to a fixed courtesy reply.
    """
    try:
        raw = client.complete(
            COMMENT_REPLY_SYSTEM_PROMPT,
            format_comment_reply_prompt(recommendation),
        )
        return parse_reply(raw, AnswerReply).answer.strip()
    except ExternalServiceError as e:
        logger.warning(f"Comment reply for {recommendation.id} failed, using fallback: {e}")
        return COMMENT_FALLBACK_REPLY


# ---------------------------------------------------------------------------
# NORMALIZATION / SEEDING
# ---------------------------------------------------------------------------


def normalize_recommendations(
    drafts: Iterable[RecommendationDraft],
    id_prefix: str = "rec",
    now: datetime | None = None,
) -> list[Recommendation]:
    """
    Turn collaborator drafts into pending Recommendation values.

    Unknown categories become "content", unknown priorities "medium", and a
    missing title becomes "Recommendation <n>".
    """
    created_at = now or utcnow()
    recommendations = []
    for index, draft in enumerate(drafts, start=1):
        category = draft.category.strip().lower()
        priority = draft.priority.strip().lower()
        recommendations.append(
            Recommendation(
                id=new_recommendation_id(id_prefix, index),
                category=category if category in CATEGORIES else DEFAULT_CATEGORY,
                title=draft.title.strip() or f"Recommendation {index}",
                description=draft.description.strip(),
                priority=priority if priority in PRIORITIES else DEFAULT_PRIORITY,
                suggested_text=draft.suggested_text or None,
                created_at=created_at,
            )
        )
    return recommendations


def plagiarism_recommendations(
    report: SimilarityReport,
    now: datetime | None = None,
) -> list[Recommendation]:
    """One plagiarism recommendation per match when risk is medium or high."""
    if report.risk_level not in ("medium", "high"):
        return []

    priority = "high" if report.risk_level == "high" else "medium"
    created_at = now or utcnow()
    return [
        Recommendation(
            id=new_recommendation_id("plag", index),
            category="plagiarism",
            title=f"Overlap with document {match.other_document_id} ({match.score}%)",
            description=(
                f"This syllabus shares {match.score}% of its key terms with document "
                f"{match.other_document_id}. Rework the overlapping sections in your own words "
                "or cite the source."
            ),
            priority=priority,
            suggested_text=match.excerpts[0].text if match.excerpts else None,
            created_at=created_at,
        )
        for index, match in enumerate(report.matches, start=1)
    ]
