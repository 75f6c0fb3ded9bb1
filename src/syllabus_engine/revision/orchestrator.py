"""
Revision orchestrator - apply accepted recommendations in one drafting call.

The orchestrator is stateless: original text and accepted recommendations
in, revised text and change log out. No retries; a bad reply is a hard
failure the caller records on the document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from syllabus_engine.core.errors import NoAcceptedRecommendations, RevisionFailed
from syllabus_engine.drafting.parsing import parse_reply
from syllabus_engine.drafting.schemas import ChangeDescriptor, RevisionReply
from syllabus_engine.revision.prompts import REVISION_SYSTEM_PROMPT, format_revision_prompt

if TYPE_CHECKING:
    from syllabus_engine.core.protocols import DraftingClient
    from syllabus_engine.documents.models import Recommendation

logger = logging.getLogger(__name__)


@dataclass
class RevisionResult:
    """Revised text plus what the collaborator says it changed."""
    revised_text: str
    change_log: list[ChangeDescriptor] = field(default_factory=list)


def apply_recommendations(
    original: str,
    accepted: Sequence[Recommendation],
    client: DraftingClient,
) -> RevisionResult:
    """
    Produce a revision incorporating every accepted recommendation.

    Args:
        original: Current document text
        accepted: Recommendations with status accepted
        client: Drafting collaborator (called exactly once)

    Raises:
        NoAcceptedRecommendations: Nothing to apply
        SerializationError: Reply is not a JSON object
        RevisionFailed: Reply lacks a non-blank editedText
        ExternalServiceError: Transport failure
    """
    accepted = list(accepted)
    if not accepted:
        raise NoAcceptedRecommendations("No accepted recommendations to apply")

    raw = client.complete(REVISION_SYSTEM_PROMPT, format_revision_prompt(original, accepted))
    reply = parse_reply(raw, RevisionReply, failure=RevisionFailed)

    logger.info(
        f"Revision drafted: {len(accepted)} recommendation(s), "
        f"{len(reply.changes)} reported change(s)"
    )
    return RevisionResult(revised_text=reply.edited_text, change_log=list(reply.changes))
