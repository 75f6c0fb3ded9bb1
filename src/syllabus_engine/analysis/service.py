"""
Analysis service - fingerprint, similarity and initial recommendations.

Runs once per upload and again only after an explicit re-analysis request:

    ingest() ──► processing ──analyze()──► analyzed
                     ▲                        │
                     └──request_reanalysis()──┘
                     (failures land in "error" with a bounded reason)

INTERVIEW TALKING POINT:
------------------------
"analyze() pulls a snapshot of the corpus from the store, then does all the
pure work - vectorize, score, classify - before a single collaborator call
for the written recommendations. Only after everything succeeds does it
write back, so a failed analysis never leaves half-updated findings; it
just flips the status to error with a truncated reason."
"""

from __future__ import annotations

import logging
from dataclasses import replace

from syllabus_engine.analysis.prompts import ANALYSIS_SYSTEM_PROMPT, format_analysis_prompt
from syllabus_engine.config import EngineConfig, get_config
from syllabus_engine.core.errors import InvalidInput, InvalidTransition, truncate_reason
from syllabus_engine.core.protocols import DocumentStore, DraftingClient
from syllabus_engine.documents.models import Document, check_status_change, request_reanalysis
from syllabus_engine.drafting.parsing import parse_reply
from syllabus_engine.drafting.schemas import RecommendationsReply
from syllabus_engine.fingerprint.vectorizer import vectorize
from syllabus_engine.recommendations.lifecycle import (
    normalize_recommendations,
    plagiarism_recommendations,
)
from syllabus_engine.similarity.engine import find_similar

logger = logging.getLogger(__name__)


class AnalysisService:
    """Seeds a document's findings and recommendations."""

    def __init__(
        self,
        store: DocumentStore,
        client: DraftingClient,
        config: EngineConfig | None = None,
    ):
        self._store = store
        self._client = client
        self._config = config or get_config()

    def ingest(self, document_id: str, text: str, title: str = "") -> Document:
        """Store a new document, ready for analysis."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidInput("Document text must be a non-empty string")
        document = self._store.add(Document(id=document_id, text=text, title=title))
        logger.info(f"Ingested document {document_id} ({len(text)} chars)")
        return document

    def request_reanalysis(self, document_id: str) -> Document:
        """Explicitly send a document back to processing."""
        document = request_reanalysis(self._store.get(document_id))
        return self._store.update(document_id, status=document.status, error_reason=document.error_reason)

    def analyze(self, document_id: str) -> Document:
        """
        Analyze a document that is in processing.

        Raises:
            DocumentNotFound: Unknown id
            InvalidTransition: Document is not in processing
            InvalidInput / ExternalServiceError: Analysis failed (status set to error)
        """
        document = self._store.get(document_id)
        if document.status != "processing":
            raise InvalidTransition(
                f"Document {document_id} is {document.status!r}; request a re-analysis first"
            )

        try:
            fingerprint = vectorize(document.text)
            report = find_similar(replace(document, fingerprint=fingerprint), self._store.list_documents())

            raw = self._client.complete(
                ANALYSIS_SYSTEM_PROMPT,
                format_analysis_prompt(document.title, document.text),
            )
            drafts = parse_reply(raw, RecommendationsReply).recommendations
            recommendations = normalize_recommendations(drafts) + plagiarism_recommendations(report)
        except Exception as e:
            reason = truncate_reason(e, self._config.max_error_length)
            logger.error(f"Analysis of {document_id} failed: {reason}")
            self._store.update(document_id, status="error", error_reason=reason)
            raise

        self._store.update(
            document_id,
            fingerprint=fingerprint,
            similarity_findings=report.matches,
            risk_level=report.risk_level,
            status=check_status_change(document.status, "analyzed"),
            error_reason=None,
        )
        updated = self._store.append_recommendations(document_id, recommendations)

        logger.info(
            f"Analyzed {document_id}: risk={report.risk_level}, "
            f"{len(recommendations)} recommendation(s)"
        )
        return updated
