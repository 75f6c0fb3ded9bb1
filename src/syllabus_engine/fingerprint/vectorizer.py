"""
Vectorizer - Single Responsibility: turn document text into a fingerprint.

A fingerprint is a fixed-length, L2-normalized vector of the document's
most frequent stemmed terms. It is deliberately simple and inspectable: no
embedding model, no IDF weighting, and the same text always produces the
same vector.

PIPELINE:
---------
1. Lower-case, strip punctuation, split on whitespace
2. Drop tokens of length <= 2
3. Porter-stem the rest (NLTK)
4. Count, keep the top K stems (ties -> first occurrence wins)
5. Raw counts -> zero-padded vector of length K -> divide by L2 norm

Vector positions are frequency RANKS, not vocabulary slots: position 0 is
"count of the most frequent stem", whichever stem that is.
"""

from __future__ import annotations

import re
from collections import Counter
from functools import lru_cache

import numpy as np
from nltk.stem.porter import PorterStemmer

from syllabus_engine.core.errors import InvalidInput

VECTOR_SIZE = 50
MIN_TERM_LENGTH = 3

_NON_WORD_RE = re.compile(r"[^\w\s]")
_CHUNK_RE = re.compile(r"\S+")
_stemmer = PorterStemmer()


@lru_cache(maxsize=50_000)
def _stem(token: str) -> str:
    return _stemmer.stem(token)


def token_offsets(text: str) -> list[tuple[str, int]]:
    """
    Tokens paired with the character offset where each starts in `text`.

    Offsets index the raw text, so a token sequence found in the stream
    maps straight back to a slice of the original document.
    """
    spans = []
    for chunk in _CHUNK_RE.finditer(text):
        token = _NON_WORD_RE.sub("", chunk.group().lower())
        if token:
            spans.append((token, chunk.start()))
    return spans


def tokenize(text: str) -> list[str]:
    """
    Lower-case, strip punctuation and split on whitespace.

    Short tokens are kept here - excerpt matching needs the full word
    sequence. Term extraction filters them.
    """
    return [token for token, _ in token_offsets(text)]


def stem_tokens(tokens: list[str]) -> list[str]:
    """Stem every token longer than two characters, in order."""
    return [_stem(token) for token in tokens if len(token) >= MIN_TERM_LENGTH]


def top_terms(text: str, k: int = VECTOR_SIZE) -> list[tuple[str, int]]:
    """
    The (stem, count) pairs behind a fingerprint, most frequent first.

    Counter keeps first-occurrence order and sorted() is stable, so equal
    counts stay in the order the stems first appeared.
    """
    counts = Counter(stem_tokens(tokenize(text)))
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:k]


def vectorize(text: str | None, size: int = VECTOR_SIZE) -> np.ndarray:
    """
    Build the fixed-length fingerprint for a document.

    Args:
        text: Raw document text
        size: Vector length K (default 50)

    Returns:
        float64 vector of length `size`, unit length unless the document
        has no usable terms, in which case the zero vector.

    Raises:
        InvalidInput: text is None, not a string, or blank
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("Cannot vectorize empty document text")

    counts = [count for _, count in top_terms(text, size)]
    vector = np.zeros(size, dtype=np.float64)
    vector[: len(counts)] = counts

    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm
