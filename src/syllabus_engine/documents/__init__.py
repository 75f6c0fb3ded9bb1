"""
Documents module - the data model shared by every component.
"""

from syllabus_engine.documents.models import (
    Document,
    Recommendation,
    SimilarityMatch,
    Excerpt,
    ChallengeState,
    DiscussionRound,
    DOCUMENT_STATUSES,
    EDITING_STATUSES,
    RECOMMENDATION_STATUSES,
    PRIORITIES,
    CATEGORIES,
    check_status_change,
    request_reanalysis,
    utcnow,
)

__all__ = [
    "Document",
    "Recommendation",
    "SimilarityMatch",
    "Excerpt",
    "ChallengeState",
    "DiscussionRound",
    "DOCUMENT_STATUSES",
    "EDITING_STATUSES",
    "RECOMMENDATION_STATUSES",
    "PRIORITIES",
    "CATEGORIES",
    "check_status_change",
    "request_reanalysis",
    "utcnow",
]
