"""
Fingerprint module - deterministic term-frequency vectors.
"""

from syllabus_engine.fingerprint.vectorizer import (
    VECTOR_SIZE,
    MIN_TERM_LENGTH,
    token_offsets,
    tokenize,
    stem_tokens,
    top_terms,
    vectorize,
)

__all__ = [
    "VECTOR_SIZE",
    "MIN_TERM_LENGTH",
    "token_offsets",
    "tokenize",
    "stem_tokens",
    "top_terms",
    "vectorize",
]
