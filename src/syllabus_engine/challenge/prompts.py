"""
Challenge dialogue prompts - externalized for review and testing.

Three requests make up the dialogue:
1. Opening question about the practical relevance of the course
2. Reply to each instructor response, with the discussion so far
3. Extraction of short, actionable recommendations from a reply
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from syllabus_engine.documents.models import DiscussionRound

# Only the head of a long syllabus is sent with the opening question
QUESTION_CONTEXT_CHARS = 4000


# ---------------------------------------------------------------------------
# OPENING QUESTION
# ---------------------------------------------------------------------------

QUESTION_SYSTEM_PROMPT = """You are an expert academic advisor for an MBA program.
Your task is to challenge instructors to improve the practical relevance of their courses.

Respond with a single JSON object: {"question": "<the question>"}.
No code fences, no text outside the object."""


def format_question_prompt(document_text: str) -> str:
    """Build the user prompt for the opening question."""
    return f"""Based on the following syllabus, ask the instructor one thought-provoking,
open-ended question about the practical application of a key topic in the course.
Consider a class mixing IT, finance, military and management backgrounds.

Syllabus text:
{document_text[:QUESTION_CONTEXT_CHARS]}

Ask only the question, without any introduction."""


# ---------------------------------------------------------------------------
# ROUND REPLY
# ---------------------------------------------------------------------------

REPLY_SYSTEM_PROMPT = """You are an expert academic advisor for an MBA program.
Your task is to give helpful, actionable feedback to instructors.

Respond with a single JSON object: {"answer": "<your reply>"}.
No code fences, no text outside the object."""


def format_discussion_history(discussion: Sequence[DiscussionRound]) -> str:
    if not discussion:
        return "(none yet)"
    return "\n\n".join(
        f"Instructor: {r.instructor_response}\nAI: {r.ai_response}" for r in discussion
    )


def format_reply_prompt(
    initial_question: str,
    discussion: Sequence[DiscussionRound],
    instructor_response: str,
) -> str:
    """Build the user prompt for one dialogue round."""
    return f"""An instructor is responding to your challenge question.

Initial question: {initial_question}

Discussion history:
{format_discussion_history(discussion)}

Instructor's latest response: "{instructor_response}"

Reply concisely and professionally with:
1. An acknowledgment of the instructor's idea.
2. Two or three concrete suggestions for practical exercises, case studies or interactive methods.
3. A follow-up question that encourages deeper thinking."""


# ---------------------------------------------------------------------------
# RECOMMENDATION EXTRACTION
# ---------------------------------------------------------------------------

EXTRACTION_SYSTEM_PROMPT = """You extract short, actionable syllabus improvements.

Respond with a single JSON object:
{"recommendations": [{"title": "<short title>", "description": "<at most 160 characters>"}]}
Return 1 to 3 items. No code fences, no text outside the object."""


def format_extraction_prompt(discussion: Sequence[DiscussionRound]) -> str:
    """Build the user prompt that mines the discussion for recommendations."""
    return f"""Pick the 1-3 most useful concrete syllabus improvements from this discussion.
Favour ideas from the latest advisor reply that the earlier rounds have not already covered.

{format_discussion_history(discussion)}"""
