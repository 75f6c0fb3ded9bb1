"""
Store-backed recommendation decisions.
"""

from __future__ import annotations

import logging

from syllabus_engine.core.errors import RecommendationNotFound
from syllabus_engine.core.protocols import DocumentStore, DraftingClient
from syllabus_engine.documents.models import Recommendation
from syllabus_engine.recommendations.lifecycle import (
    attach_ai_response,
    request_comment_reply,
    transition,
)

logger = logging.getLogger(__name__)


class RecommendationService:
    """Applies instructor decisions to stored recommendations."""

    def __init__(self, store: DocumentStore, client: DraftingClient):
        self._store = store
        self._client = client

    def update(
        self,
        document_id: str,
        recommendation_id: str,
        status: str,
        comment: str | None = None,
    ) -> Recommendation:
        """
        Transition one recommendation and persist it.

        A commented recommendation also gets the collaborator's reply to the
        comment stored in ai_response.

        Raises:
            DocumentNotFound / RecommendationNotFound: Unknown ids
            InvalidTransition / InvalidInput: Rejected by the state machine
        """
        document = self._store.get(document_id)
        current = document.find_recommendation(recommendation_id)
        if current is None:
            raise RecommendationNotFound(
                f"Recommendation {recommendation_id} not found on document {document_id}"
            )

        updated = transition(current, status, comment)
        if updated.status == "commented":
            updated = attach_ai_response(updated, request_comment_reply(updated, self._client))

        self._store.update_recommendation(document_id, updated)
        logger.info(f"Recommendation {recommendation_id} on {document_id}: {current.status} -> {updated.status}")
        return updated
