"""
Revision module - apply accepted recommendations and audit the result.

USAGE:
------
from syllabus_engine.revision import RevisionService

report = RevisionService(store, client).revise(document_id)
payload = report.to_dict()  # {segments, stats, recommendations, changeLog}
"""

from syllabus_engine.revision.orchestrator import RevisionResult, apply_recommendations
from syllabus_engine.revision.audit import AuditReport, TimelineEvent, build_timeline
from syllabus_engine.revision.service import RevisionService

__all__ = [
    "RevisionResult",
    "apply_recommendations",
    "AuditReport",
    "TimelineEvent",
    "build_timeline",
    "RevisionService",
]
