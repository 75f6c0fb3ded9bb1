"""
Unit Tests for Revision

Covers the orchestrator (one consolidated call, strict reply handling), the
store-backed service (editing flag, failure bookkeeping, concurrency) and
the audit report.
"""

import json
import threading
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import MagicMock

from syllabus_engine.config import EngineConfig
from syllabus_engine.core.errors import (
    AlreadyInProgress,
    DocumentNotFound,
    ExternalServiceError,
    NoAcceptedRecommendations,
    RevisionFailed,
    SerializationError,
)
from syllabus_engine.documents.models import (
    ChallengeState,
    DiscussionRound,
    Document,
    Recommendation,
)
from syllabus_engine.revision.audit import AuditReport, build_timeline
from syllabus_engine.revision.orchestrator import apply_recommendations
from syllabus_engine.revision.service import RevisionService
from syllabus_engine.stores.memory import InMemoryDocumentStore

ORIGINAL = "Course X has no schedule."
REVISED = "Course X has a weekly schedule."


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


def revision_reply(text=REVISED, changes=None):
    payload = {"editedText": text}
    if changes is not None:
        payload["changes"] = changes
    return json.dumps(payload)


@pytest.fixture
def accepted():
    return Recommendation(
        id="rec_1",
        category="structure",
        title="Add a schedule",
        description="List topics per week.",
        suggested_text="Week 1: Introduction",
        status="accepted",
    )


@pytest.fixture
def client():
    client = MagicMock()
    client.complete.return_value = revision_reply(
        changes=[{"recommendation": "Add a schedule", "location": "Overview", "action": "added"}]
    )
    return client


@pytest.fixture
def config():
    return EngineConfig(max_error_length=60)


@pytest.fixture
def store(accepted):
    rejected = Recommendation(id="rec_2", category="content", title="Drop unit 3", description="d", status="rejected")
    document = Document(id="doc-1", text=ORIGINAL, status="analyzed", recommendations=[accepted, rejected])
    return InMemoryDocumentStore([document])


# ---------------------------------------------------------------------------
# ORCHESTRATOR
# ---------------------------------------------------------------------------


class TestApplyRecommendations:
    """Test the single consolidated drafting call."""

    def test_success(self, accepted, client):
        result = apply_recommendations(ORIGINAL, [accepted], client)

        assert result.revised_text == REVISED
        assert result.change_log[0].location == "Overview"
        assert client.complete.call_count == 1

    def test_prompt_carries_everything(self, accepted, client):
        apply_recommendations(ORIGINAL, [accepted], client)

        _, user_prompt = client.complete.call_args.args
        assert ORIGINAL in user_prompt
        assert "[structure] Add a schedule" in user_prompt
        assert "List topics per week." in user_prompt
        assert "Week 1: Introduction" in user_prompt

    def test_nothing_accepted(self, client):
        with pytest.raises(NoAcceptedRecommendations):
            apply_recommendations(ORIGINAL, [], client)
        client.complete.assert_not_called()

    def test_missing_changes_is_empty(self, accepted, client):
        client.complete.return_value = revision_reply()
        assert apply_recommendations(ORIGINAL, [accepted], client).change_log == []

    def test_invalid_json(self, accepted, client):
        client.complete.return_value = "Here is your revised syllabus: ..."
        with pytest.raises(SerializationError):
            apply_recommendations(ORIGINAL, [accepted], client)

    @pytest.mark.parametrize("reply", ['{"changes": []}', '{"editedText": ""}', '{"editedText": null}'])
    def test_missing_text(self, accepted, client, reply):
        client.complete.return_value = reply
        with pytest.raises(RevisionFailed):
            apply_recommendations(ORIGINAL, [accepted], client)

    def test_transport_error_propagates(self, accepted, client):
        client.complete.side_effect = ExternalServiceError("connection reset")
        with pytest.raises(ExternalServiceError):
            apply_recommendations(ORIGINAL, [accepted], client)


# ---------------------------------------------------------------------------
# SERVICE
# ---------------------------------------------------------------------------


class TestRevisionService:
    """Test the store-backed workflow."""

    def test_success(self, store, client, config):
        report = RevisionService(store, client, config).revise("doc-1")

        document = store.get("doc-1")
        assert document.revised_text == REVISED
        assert document.editing_status == "ready"
        assert document.editing_error is None
        assert document.status == "reviewed"
        assert document.text == ORIGINAL
        assert len(document.change_log) == 1

        assert isinstance(report, AuditReport)
        assert report.stats.added == 8
        assert [r.id for r in report.recommendations] == ["rec_1"]

    def test_report_payload(self, store, client, config):
        payload = RevisionService(store, client, config).revise("doc-1").to_dict()

        assert set(payload) == {"segments", "stats", "recommendations", "changeLog"}
        assert payload["changeLog"][0]["recommendation"] == "Add a schedule"
        assert payload["recommendations"][0]["status"] == "accepted"

    def test_unknown_document(self, client, config):
        with pytest.raises(DocumentNotFound):
            RevisionService(InMemoryDocumentStore(), client, config).revise("ghost")

    def test_nothing_accepted_releases_flag(self, client, config):
        store = InMemoryDocumentStore([Document(id="doc-1", text=ORIGINAL, status="analyzed")])

        with pytest.raises(NoAcceptedRecommendations):
            RevisionService(store, client, config).revise("doc-1")

        assert store.get("doc-1").editing_status == "idle"
        client.complete.assert_not_called()

    def test_failure_is_recorded_and_retry_allowed(self, store, client, config):
        client.complete.side_effect = [
            ExternalServiceError("upstream exploded " + "x" * 200),
            revision_reply(),
        ]
        service = RevisionService(store, client, config)

        with pytest.raises(ExternalServiceError):
            service.revise("doc-1")

        failed = store.get("doc-1")
        assert failed.editing_status == "error"
        assert failed.editing_error.startswith("ExternalServiceError: upstream exploded")
        assert len(failed.editing_error) <= 60
        assert failed.revised_text is None

        service.revise("doc-1")
        assert store.get("doc-1").editing_status == "ready"

    def test_status_not_promoted_from_approved(self, accepted, client, config):
        store = InMemoryDocumentStore(
            [Document(id="doc-1", text=ORIGINAL, status="approved", recommendations=[accepted])]
        )
        RevisionService(store, client, config).revise("doc-1")
        assert store.get("doc-1").status == "approved"

    def test_concurrent_revision_fails_fast(self, store, config):
        entered = threading.Event()
        release = threading.Event()
        loser_done = threading.Event()

        def blocking_complete(system_prompt, user_prompt):
            entered.set()
            release.wait(timeout=5)
            return revision_reply()

        client = MagicMock()
        client.complete.side_effect = blocking_complete
        service = RevisionService(store, client, config)

        barrier = threading.Barrier(2)
        reports, errors = [], []

        def worker():
            barrier.wait()
            try:
                reports.append(service.revise("doc-1"))
            except AlreadyInProgress as e:
                errors.append(e)
                loser_done.set()

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()

        assert entered.wait(timeout=5)
        assert loser_done.wait(timeout=5)
        release.set()
        for t in threads:
            t.join(timeout=5)

        assert len(errors) == 1
        assert len(reports) == 1
        assert client.complete.call_count == 1
        assert store.get("doc-1").editing_status == "ready"


# ---------------------------------------------------------------------------
# TIMELINE
# ---------------------------------------------------------------------------


class TestTimeline:
    """Test timestamp ordering of the review history."""

    def test_sorted_regardless_of_insertion(self):
        t0 = datetime(2024, 5, 1, tzinfo=timezone.utc)
        recs = [
            Recommendation("r2", "content", "Late", "d", status="accepted", responded_at=t0 + timedelta(hours=3)),
            Recommendation("r1", "content", "Early", "d", status="rejected", responded_at=t0),
            Recommendation("r3", "content", "Undecided", "d"),
        ]
        challenge = ChallengeState(
            "Q?",
            "in-progress",
            (DiscussionRound("middle", "reply", responded_at=t0 + timedelta(hours=1)),),
        )

        timeline = build_timeline(recs, challenge)

        assert [e.reference for e in timeline] == ["r1", "round-1", "r2"]
        assert [e.kind for e in timeline] == ["recommendation", "challenge", "recommendation"]

    def test_empty(self):
        assert build_timeline([]) == []
