"""
Revision service - the store-backed revision workflow.

    idle/ready/error ──CAS──► processing ──► ready   (revised text stored)
                                   │
                                   └───────► error   (reason stored, retry allowed)

The editing flag is claimed with an atomic compare-and-set, so a second
revise() for the same document while one is running fails immediately with
AlreadyInProgress instead of queueing. Different documents never contend.
"""

from __future__ import annotations

import logging

from syllabus_engine.config import EngineConfig, get_config
from syllabus_engine.core.errors import AlreadyInProgress, NoAcceptedRecommendations, truncate_reason
from syllabus_engine.core.protocols import DocumentStore, DraftingClient
from syllabus_engine.diffing.engine import diff
from syllabus_engine.observability import SYLLABUS_DOCUMENT_ID, get_tracer, revision_attributes
from syllabus_engine.observability.attributes import SYLLABUS_CHARS_ADDED, SYLLABUS_CHARS_REMOVED
from syllabus_engine.revision.audit import AuditReport
from syllabus_engine.revision.orchestrator import apply_recommendations

logger = logging.getLogger(__name__)

# Editing statuses from which a new revision may start
REVISABLE_STATES = ("idle", "ready", "error")


class RevisionService:
    """Runs revisions for stored documents under the editing flag."""

    def __init__(
        self,
        store: DocumentStore,
        client: DraftingClient,
        config: EngineConfig | None = None,
    ):
        self._store = store
        self._client = client
        self._config = config or get_config()

    def revise(self, document_id: str) -> AuditReport:
        """
        Revise a document with its accepted recommendations.

        Raises:
            DocumentNotFound: Unknown id
            AlreadyInProgress: Another revision holds the editing flag
            NoAcceptedRecommendations: Nothing accepted (flag released to idle)
            ExternalServiceError: Drafting failed (flag set to error)
        """
        if not self._store.compare_and_set_editing_status(document_id, REVISABLE_STATES, "processing"):
            raise AlreadyInProgress(f"A revision is already in progress for document {document_id}")

        try:
            document = self._store.get(document_id)
            accepted = document.accepted_recommendations
            if not accepted:
                self._store.update(document_id, editing_status="idle")
                raise NoAcceptedRecommendations(
                    f"Document {document_id} has no accepted recommendations"
                )

            tracer = get_tracer()
            with tracer.start_span("revision.revise", attributes=revision_attributes(len(accepted))) as span:
                span.set_attribute(SYLLABUS_DOCUMENT_ID, document_id)

                result = apply_recommendations(document.text, accepted, self._client)
                changes = diff(document.text, result.revised_text)

                span.set_attribute(SYLLABUS_CHARS_ADDED, changes.stats.added)
                span.set_attribute(SYLLABUS_CHARS_REMOVED, changes.stats.removed)

            status = "reviewed" if document.status == "analyzed" else document.status
            self._store.update(
                document_id,
                revised_text=result.revised_text,
                change_log=result.change_log,
                editing_status="ready",
                editing_error=None,
                status=status,
            )
        except NoAcceptedRecommendations:
            raise
        except Exception as e:
            reason = truncate_reason(e, self._config.max_error_length)
            logger.error(f"Revision of {document_id} failed: {reason}")
            self._store.update(document_id, editing_status="error", editing_error=reason)
            raise

        logger.info(
            f"Revised {document_id}: +{changes.stats.added}/-{changes.stats.removed} chars "
            f"from {len(accepted)} recommendation(s)"
        )
        return AuditReport(diff=changes, recommendations=accepted, change_log=result.change_log)
