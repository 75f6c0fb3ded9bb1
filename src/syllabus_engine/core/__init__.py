"""
Core module - shared protocols and errors for the entire engine.

USAGE:
------
from syllabus_engine.core import DraftingClient, DocumentStore, InvalidInput
"""

from syllabus_engine.core.errors import (
    SyllabusEngineError,
    InvalidInput,
    InvalidTransition,
    NoAcceptedRecommendations,
    AlreadyInProgress,
    NotFoundError,
    DocumentNotFound,
    RecommendationNotFound,
    ExternalServiceError,
    RevisionFailed,
    SerializationError,
    truncate_reason,
)
from syllabus_engine.core.protocols import (
    DraftingClient,
    DocumentStore,
)

__all__ = [
    # Protocols
    "DraftingClient",
    "DocumentStore",
    # Errors
    "SyllabusEngineError",
    "InvalidInput",
    "InvalidTransition",
    "NoAcceptedRecommendations",
    "AlreadyInProgress",
    "NotFoundError",
    "DocumentNotFound",
    "RecommendationNotFound",
    "ExternalServiceError",
    "RevisionFailed",
    "SerializationError",
    "truncate_reason",
]
