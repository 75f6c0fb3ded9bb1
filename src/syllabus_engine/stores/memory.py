"""
In-memory document store for development and testing.

Implements the DocumentStore protocol with a dict guarded by a single
threading.Lock. Every read returns a deep copy, so callers (and corpus
snapshots handed to the similarity engine) never share mutable state with
the store.

INTERVIEW TALKING POINT:
------------------------
"The editing flag is the only cross-request coordination the engine needs,
and it lives in the store as a compare-and-set. Whatever backs the store in
production has to offer the same atomic primitive - a conditional UPDATE in
SQL, findOneAndUpdate in a document DB. The in-memory version just holds a
lock for the check and the write, which is enough to test the
exactly-one-AlreadyInProgress property with real threads."
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import fields, replace
from typing import Any, Collection

from syllabus_engine.core.errors import DocumentNotFound, InvalidInput, RecommendationNotFound
from syllabus_engine.documents.models import EDITING_STATUSES, Document, Recommendation

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "version"})
_DOCUMENT_FIELDS = frozenset(f.name for f in fields(Document))


class InMemoryDocumentStore:
    """Dict-backed DocumentStore."""

    def __init__(self, documents: list[Document] | None = None):
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()
        for document in documents or []:
            self.add(document)

    def __len__(self) -> int:
        return len(self._documents)

    def _require(self, document_id: str) -> Document:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFound(f"Document not found: {document_id}") from None

    def add(self, document: Document) -> Document:
        if not document.id:
            raise InvalidInput("Document id is required")
        with self._lock:
            if document.id in self._documents:
                raise InvalidInput(f"Document already exists: {document.id}")
            self._documents[document.id] = copy.deepcopy(document)
        logger.debug(f"Stored document {document.id}")
        return copy.deepcopy(document)

    def get(self, document_id: str) -> Document:
        with self._lock:
            return copy.deepcopy(self._require(document_id))

    def list_documents(self) -> list[Document]:
        with self._lock:
            return [copy.deepcopy(d) for d in self._documents.values()]

    def update(self, document_id: str, **changes: Any) -> Document:
        unknown = set(changes) - _DOCUMENT_FIELDS
        if unknown:
            raise InvalidInput(f"Unknown document field(s): {', '.join(sorted(unknown))}")
        frozen = set(changes) & _IMMUTABLE_FIELDS
        if frozen:
            raise InvalidInput(f"Field(s) cannot be updated: {', '.join(sorted(frozen))}")

        with self._lock:
            current = self._require(document_id)
            updated = replace(current, **copy.deepcopy(changes), version=current.version + 1)
            self._documents[document_id] = updated
            return copy.deepcopy(updated)

    def append_recommendations(
        self,
        document_id: str,
        recommendations: list[Recommendation],
    ) -> Document:
        with self._lock:
            current = self._require(document_id)
            existing_ids = {r.id for r in current.recommendations}
            for recommendation in recommendations:
                if recommendation.id in existing_ids:
                    raise InvalidInput(f"Duplicate recommendation id: {recommendation.id}")
                existing_ids.add(recommendation.id)

            updated = replace(
                current,
                recommendations=[*current.recommendations, *recommendations],
                version=current.version + 1,
            )
            self._documents[document_id] = updated
            return copy.deepcopy(updated)

    def update_recommendation(
        self,
        document_id: str,
        recommendation: Recommendation,
    ) -> Document:
        with self._lock:
            current = self._require(document_id)
            if current.find_recommendation(recommendation.id) is None:
                raise RecommendationNotFound(
                    f"Recommendation {recommendation.id} not found on document {document_id}"
                )
            updated = replace(
                current,
                recommendations=[
                    recommendation if r.id == recommendation.id else r
                    for r in current.recommendations
                ],
                version=current.version + 1,
            )
            self._documents[document_id] = updated
            return copy.deepcopy(updated)

    def compare_and_set_editing_status(
        self,
        document_id: str,
        expected: Collection[str],
        new_status: str,
    ) -> bool:
        if new_status not in EDITING_STATUSES:
            raise InvalidInput(f"Unknown editing status: {new_status!r}")

        with self._lock:
            current = self._require(document_id)
            if current.editing_status not in expected:
                return False
            self._documents[document_id] = replace(
                current,
                editing_status=new_status,
                version=current.version + 1,
            )
            return True
