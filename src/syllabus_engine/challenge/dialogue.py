"""
Challenge dialogue - bounded question/answer exchange about practicality.

    pending ──respond──► in-progress ──respond──► in-progress
       │                      │
       └──────finalize────────┴──────────────────► completed (terminal)

The functions take a ChallengeState and return a new one; the caller
persists it. From the second round on, every reply is mined for up to three
supplementary recommendations. Extraction is best-effort: if it fails the
round still counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Iterable

from syllabus_engine.core.errors import ExternalServiceError, InvalidInput, InvalidTransition
from syllabus_engine.documents.models import (
    ChallengeState,
    DiscussionRound,
    Recommendation,
    utcnow,
)
from syllabus_engine.drafting.parsing import parse_reply
from syllabus_engine.drafting.schemas import AnswerReply, QuestionReply, RecommendationsReply
from syllabus_engine.challenge.prompts import (
    EXTRACTION_SYSTEM_PROMPT,
    QUESTION_SYSTEM_PROMPT,
    REPLY_SYSTEM_PROMPT,
    format_extraction_prompt,
    format_question_prompt,
    format_reply_prompt,
)
from syllabus_engine.recommendations.lifecycle import new_recommendation_id
from syllabus_engine.observability import SYLLABUS_CHALLENGE_ROUND, get_tracer

if TYPE_CHECKING:
    from syllabus_engine.core.protocols import DraftingClient

logger = logging.getLogger(__name__)

MAX_EXTRACTED_RECOMMENDATIONS = 3
MAX_TITLE_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 300

SUMMARIZED_REPLIES = 3
MAX_SUGGESTION_LENGTH = 300
MAX_SUGGESTIONS = 6

CHALLENGE_CATEGORY = "practicality"


@dataclass
class ChallengeTurn:
    """Outcome of one dialogue step."""
    state: ChallengeState
    ai_response: str | None = None
    new_recommendations: list[Recommendation] = field(default_factory=list)


def start_challenge(document_text: str, client: DraftingClient) -> ChallengeState:
    """Ask the collaborator for the opening question."""
    if not document_text or not document_text.strip():
        raise InvalidInput("Cannot start a challenge for an empty document")

    raw = client.complete(QUESTION_SYSTEM_PROMPT, format_question_prompt(document_text))
    question = parse_reply(raw, QuestionReply).question.strip()
    return ChallengeState(initial_question=question, status="pending")


def _extract_recommendations(
    discussion: tuple[DiscussionRound, ...],
    client: DraftingClient,
) -> list[Recommendation]:
    raw = client.complete(EXTRACTION_SYSTEM_PROMPT, format_extraction_prompt(discussion))
    drafts = parse_reply(raw, RecommendationsReply).recommendations[:MAX_EXTRACTED_RECOMMENDATIONS]

    created_at = utcnow()
    return [
        Recommendation(
            id=new_recommendation_id("chlg", index),
            category=CHALLENGE_CATEGORY,
            title=(draft.title.strip() or f"Challenge recommendation {index}")[:MAX_TITLE_LENGTH],
            description=draft.description.strip()[:MAX_DESCRIPTION_LENGTH],
            priority="medium",
            created_at=created_at,
        )
        for index, draft in enumerate(drafts, start=1)
    ]


def respond(
    state: ChallengeState,
    instructor_response: str,
    client: DraftingClient,
) -> ChallengeTurn:
    """
    Record one instructor response and the collaborator's reply.

    Raises:
        InvalidTransition: Dialogue already completed
        InvalidInput: Blank instructor response
        ExternalServiceError: Reply request failed (state unchanged)
    """
    if state.status == "completed":
        raise InvalidTransition("Challenge dialogue is already completed")
    if not instructor_response or not instructor_response.strip():
        raise InvalidInput("Instructor response must not be empty")

    round_number = len(state.discussion) + 1
    tracer = get_tracer()
    with tracer.start_span(
        "challenge.respond",
        attributes={SYLLABUS_CHALLENGE_ROUND: round_number},
    ):
        raw = client.complete(
            REPLY_SYSTEM_PROMPT,
            format_reply_prompt(state.initial_question, state.discussion, instructor_response),
        )
        ai_response = parse_reply(raw, AnswerReply).answer.strip()

        new_state = replace(
            state,
            status="in-progress",
            discussion=(
                *state.discussion,
                DiscussionRound(instructor_response=instructor_response, ai_response=ai_response),
            ),
        )

        new_recommendations: list[Recommendation] = []
        if state.discussion:
            try:
                new_recommendations = _extract_recommendations(new_state.discussion, client)
            except ExternalServiceError as e:
                logger.warning(f"Recommendation extraction failed in round {round_number}: {e}")

    logger.info(
        f"Challenge round {round_number} recorded, "
        f"{len(new_recommendations)} recommendation(s) extracted"
    )
    return ChallengeTurn(state=new_state, ai_response=ai_response, new_recommendations=new_recommendations)


def finalize(
    state: ChallengeState,
    existing_recommendations: Iterable[Recommendation] = (),
) -> ChallengeTurn:
    """
    Close the dialogue and compact the latest replies into suggestions.

    The last three replies (300 characters each) are appended to the stored
    suggestions, six at most. If the document has no practicality
    recommendations yet, the suggestions are also returned as pending ones.
    Finalizing a completed dialogue changes nothing.
    """
    if state.status == "completed":
        return ChallengeTurn(state=state)

    latest = [r.ai_response for r in state.discussion if r.ai_response][-SUMMARIZED_REPLIES:]
    suggestions = (
        *state.suggestions,
        *(reply[:MAX_SUGGESTION_LENGTH] for reply in latest),
    )[:MAX_SUGGESTIONS]

    new_state = replace(state, status="completed", suggestions=suggestions)

    has_practicality = any(r.category == CHALLENGE_CATEGORY for r in existing_recommendations)
    new_recommendations: list[Recommendation] = []
    if not has_practicality:
        created_at = utcnow()
        new_recommendations = [
            Recommendation(
                id=new_recommendation_id("chlg", index),
                category=CHALLENGE_CATEGORY,
                title=f"Challenge suggestion {index}",
                description=suggestion,
                priority="medium",
                created_at=created_at,
            )
            for index, suggestion in enumerate(suggestions, start=1)
        ]

    logger.info(f"Challenge finalized with {len(suggestions)} suggestion(s)")
    return ChallengeTurn(state=new_state, new_recommendations=new_recommendations)
