"""
Similarity module - cosine originality detection over fingerprints.
"""

from syllabus_engine.similarity.engine import (
    SIMILARITY_THRESHOLD,
    HIGH_RISK_SCORE,
    MEDIUM_RISK_SCORE,
    SimilarityReport,
    cosine_similarity,
    to_percentage,
    classify_risk,
    extract_excerpts,
    find_similar,
)

__all__ = [
    "SIMILARITY_THRESHOLD",
    "HIGH_RISK_SCORE",
    "MEDIUM_RISK_SCORE",
    "SimilarityReport",
    "cosine_similarity",
    "to_percentage",
    "classify_risk",
    "extract_excerpts",
    "find_similar",
]
