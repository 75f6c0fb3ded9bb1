"""
Store-backed challenge dialogue.
"""

from __future__ import annotations

import logging

from syllabus_engine.core.errors import InvalidTransition
from syllabus_engine.core.protocols import DocumentStore, DraftingClient
from syllabus_engine.documents.models import ChallengeState
from syllabus_engine.challenge.dialogue import ChallengeTurn, finalize, respond, start_challenge

logger = logging.getLogger(__name__)


class ChallengeService:
    """Runs the dialogue for stored documents and appends what it yields."""

    def __init__(self, store: DocumentStore, client: DraftingClient):
        self._store = store
        self._client = client

    def start(self, document_id: str) -> ChallengeState:
        """
        Open the dialogue with a fresh question.

        A document gets one challenge; once started it can only be
        answered or finalized.
        """
        document = self._store.get(document_id)
        if document.challenge is not None:
            raise InvalidTransition(
                f"Challenge for document {document_id} already exists "
                f"(status {document.challenge.status})"
            )

        state = start_challenge(document.text, self._client)
        self._store.update(document_id, challenge=state)
        logger.info(f"Challenge started for {document_id}")
        return state

    def respond(self, document_id: str, instructor_response: str) -> ChallengeTurn:
        document = self._store.get(document_id)
        if document.challenge is None:
            raise InvalidTransition(f"No challenge has been started for document {document_id}")

        turn = respond(document.challenge, instructor_response, self._client)
        self._persist(document_id, turn)
        return turn

    def finalize(self, document_id: str) -> ChallengeTurn:
        document = self._store.get(document_id)
        if document.challenge is None:
            raise InvalidTransition(f"No challenge has been started for document {document_id}")

        turn = finalize(document.challenge, document.recommendations)
        self._persist(document_id, turn)
        return turn

    def _persist(self, document_id: str, turn: ChallengeTurn) -> None:
        self._store.update(document_id, challenge=turn.state)
        if turn.new_recommendations:
            self._store.append_recommendations(document_id, turn.new_recommendations)
