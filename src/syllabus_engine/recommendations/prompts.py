"""
Comment follow-up prompts.

When an instructor comments on a recommendation, the collaborator answers
the comment: acknowledge the point of view and offer alternatives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from syllabus_engine.documents.models import Recommendation


COMMENT_REPLY_SYSTEM_PROMPT = """You are a teaching assistant for an MBA program.
Reply to instructor comments on syllabus recommendations constructively and professionally.

Respond with a single JSON object: {"answer": "<your reply>"}.
No code fences, no text outside the object."""


# Courtesy reply stored when the follow-up request fails
COMMENT_FALLBACK_REPLY = (
    "Thank you for your comment. We will take it into account when refining "
    "the recommendations."
)


def format_comment_reply_prompt(recommendation: Recommendation) -> str:
    """Build the user prompt for a comment follow-up."""
    parts = [
        f"Recommendation ({recommendation.category}): {recommendation.title}",
        f"Details: {recommendation.description}",
    ]
    if recommendation.suggested_text:
        parts.append(f"Suggested text: {recommendation.suggested_text}")
    parts.append(f'The instructor left this comment: "{recommendation.instructor_comment}"')
    parts.append(
        "Write a professional reply that shows you understand their point of view "
        "and proposes alternatives where appropriate."
    )
    return "\n".join(parts)
