"""
Revision prompts - one consolidated request per revision.

All accepted recommendations go out in a single request, so the
collaborator sees every requested change at once and returns one coherent
text instead of a chain of partial edits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from syllabus_engine.documents.models import Recommendation


REVISION_SYSTEM_PROMPT = """You are an editor of MBA course syllabi.
Apply the requested changes to the syllabus and keep everything else as it is:
same structure, same language, same formatting.

Respond with a single JSON object:
{
  "editedText": "<the full revised syllabus>",
  "changes": [
    {"recommendation": "<title>", "location": "<section>", "action": "<what changed>", "preview": "<short excerpt>"}
  ]
}
No code fences, no text outside the object."""


def format_recommendation(index: int, recommendation: Recommendation) -> str:
    lines = [
        f"{index}. [{recommendation.category}] {recommendation.title}",
        f"   {recommendation.description}",
    ]
    if recommendation.suggested_text:
        lines.append(f"   Suggested text: {recommendation.suggested_text}")
    return "\n".join(lines)


def format_revision_prompt(original: str, accepted: Sequence[Recommendation]) -> str:
    """Build the consolidated revision request."""
    changes = "\n".join(
        format_recommendation(index, rec) for index, rec in enumerate(accepted, start=1)
    )
    return f"""ORIGINAL SYLLABUS:
{original}

ACCEPTED CHANGES ({len(accepted)}):
{changes}

Return the full revised syllabus with all of these changes applied."""
