"""
Audit report - everything a renderer needs to show a revision.

The report bundles the diff between the original and revised text, its
change statistics, the recommendations that drove the revision, and the
collaborator's change log. Rendering (PDF, spreadsheet, HTML) is out of
scope; to_dict() is the hand-off format.

The timeline orders every recorded decision and dialogue round by
timestamp, regardless of the order they were stored in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from syllabus_engine.diffing.engine import DiffResult, DiffSegment, DiffStats
from syllabus_engine.documents.models import ChallengeState, Recommendation
from syllabus_engine.drafting.schemas import ChangeDescriptor


@dataclass
class AuditReport:
    """Renderer input for one revision."""
    diff: DiffResult
    recommendations: list[Recommendation] = field(default_factory=list)
    change_log: list[ChangeDescriptor] = field(default_factory=list)

    @property
    def segments(self) -> list[DiffSegment]:
        return self.diff.segments

    @property
    def stats(self) -> DiffStats:
        return self.diff.stats

    def to_dict(self) -> dict:
        diff = self.diff.to_dict()
        return {
            "segments": diff["segments"],
            "stats": diff["stats"],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "changeLog": [c.model_dump() for c in self.change_log],
        }


# ---------------------------------------------------------------------------
# TIMELINE
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimelineEvent:
    """One timestamped entry in a document's review history."""
    timestamp: datetime
    kind: str  # "recommendation" | "challenge"
    summary: str
    reference: str | None = None


def build_timeline(
    recommendations: Iterable[Recommendation],
    challenge: ChallengeState | None = None,
) -> list[TimelineEvent]:
    """Decisions and dialogue rounds, oldest first."""
    events = [
        TimelineEvent(
            timestamp=r.responded_at,
            kind="recommendation",
            summary=f"{r.status}: {r.title}",
            reference=r.id,
        )
        for r in recommendations
        if r.responded_at is not None
    ]
    if challenge is not None:
        events.extend(
            TimelineEvent(
                timestamp=round_.responded_at,
                kind="challenge",
                summary=round_.instructor_response,
                reference=f"round-{number}",
            )
            for number, round_ in enumerate(challenge.discussion, start=1)
        )

    # stable: equal timestamps keep insertion order
    return sorted(events, key=lambda event: event.timestamp)
