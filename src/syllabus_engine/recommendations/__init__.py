"""
Recommendations module - lifecycle state machine and store-backed decisions.
"""

from syllabus_engine.recommendations.lifecycle import (
    DECISION_STATUSES,
    new_recommendation,
    new_recommendation_id,
    transition,
    attach_ai_response,
    request_comment_reply,
    normalize_recommendations,
    plagiarism_recommendations,
)
from syllabus_engine.recommendations.service import RecommendationService

__all__ = [
    # State machine
    "DECISION_STATUSES",
    "new_recommendation",
    "new_recommendation_id",
    "transition",
    "attach_ai_response",
    "request_comment_reply",
    "normalize_recommendations",
    "plagiarism_recommendations",
    # Service
    "RecommendationService",
]
