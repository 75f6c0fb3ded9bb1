"""
Similarity Engine - originality scoring against the stored corpus.

Compares a target document's fingerprint with every analyzed document in a
read-only corpus snapshot, keeps the strongest overlaps, classifies the
originality risk, and pulls verbatim evidence excerpts for each match.

INTERVIEW TALKING POINT:
------------------------
"The scorer is pure: a target and a list of documents in, a report out.
The corpus is a snapshot the caller hands over, so concurrent analyses of
different documents can share it without locking. Cosine, risk
classification and excerpt extraction are separate functions, so each
boundary (59/60, 79/80) is a one-line test."
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from syllabus_engine.documents.models import Document, Excerpt, SimilarityMatch
from syllabus_engine.fingerprint.vectorizer import token_offsets, tokenize, vectorize
from syllabus_engine.observability import get_tracer, similarity_attributes
from syllabus_engine.observability.attributes import SYLLABUS_MATCH_COUNT, SYLLABUS_RISK_LEVEL

logger = logging.getLogger(__name__)

# Candidates must be strictly above this cosine to count as a match
SIMILARITY_THRESHOLD = 0.5
MAX_MATCHES = 5

HIGH_RISK_SCORE = 80
MEDIUM_RISK_SCORE = 60

EXCERPT_WINDOW_TOKENS = 10
MAX_EXCERPT_WINDOWS = 100
EXCERPT_LENGTH = 200
MAX_EXCERPTS_PER_MATCH = 5


@dataclass
class SimilarityReport:
    """Outcome of one similarity pass for a target document."""
    risk_level: str
    matches: list[SimilarityMatch] = field(default_factory=list)
    overall_similarity: int = 0

    @property
    def uniqueness_score(self) -> int:
        return max(0, 100 - self.overall_similarity)

    def to_dict(self) -> dict:
        return {
            "riskLevel": self.risk_level,
            "matches": [m.to_dict() for m in self.matches],
            "overallSimilarity": self.overall_similarity,
            "uniquenessScore": self.uniqueness_score,
        }


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when the vectors have different lengths (fingerprints from
    an incompatible vocabulary size) or when either has zero norm.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def to_percentage(similarity: float) -> int:
    """Cosine -> integer percentage, rounding halves up, clamped to 0-100."""
    return max(0, min(100, math.floor(similarity * 100 + 0.5)))


def classify_risk(max_score: int | None) -> str:
    """
    Risk level from the highest match score.

    None (no candidates) -> "none"; >= 80 -> "high"; 60-79 -> "medium";
    anything else -> "low".
    """
    if max_score is None:
        return "none"
    if max_score >= HIGH_RISK_SCORE:
        return "high"
    if max_score >= MEDIUM_RISK_SCORE:
        return "medium"
    return "low"


def extract_excerpts(
    target_text: str,
    other_text: str,
    max_excerpts: int = MAX_EXCERPTS_PER_MATCH,
) -> list[Excerpt]:
    """
    Find verbatim phrases of the target inside another document.

    Slides a 10-token window over the target's tokens (first 100 windows
    only) and looks each window up among the other document's token
    windows. Both sides go through the same tokenizer, so case,
    punctuation and line breaks never block a match. A hit yields the 200
    characters of the other document's raw text starting at the first
    token of the phrase.
    """
    tokens = tokenize(target_text)
    window_count = min(max(len(tokens) - EXCERPT_WINDOW_TOKENS + 1, 0), MAX_EXCERPT_WINDOWS)
    if window_count == 0:
        return []

    other_spans = token_offsets(other_text)
    other_tokens = [token for token, _ in other_spans]
    # earliest raw offset of every window in the other document
    other_windows: dict[tuple[str, ...], int] = {}
    for start in range(len(other_tokens) - EXCERPT_WINDOW_TOKENS + 1):
        window = tuple(other_tokens[start : start + EXCERPT_WINDOW_TOKENS])
        other_windows.setdefault(window, other_spans[start][1])

    excerpts: list[Excerpt] = []
    seen_positions: set[int] = set()
    for start in range(window_count):
        offset = other_windows.get(tuple(tokens[start : start + EXCERPT_WINDOW_TOKENS]))
        if offset is None or offset in seen_positions:
            continue

        seen_positions.add(offset)
        excerpts.append(
            Excerpt(text=other_text[offset : offset + EXCERPT_LENGTH], position=offset)
        )
        if len(excerpts) >= max_excerpts:
            break

    return excerpts


def _is_comparable(document: Document) -> bool:
    return (
        document.status == "analyzed"
        and document.fingerprint is not None
        and len(document.fingerprint) > 0
    )


def find_similar(target: Document, corpus: Iterable[Document]) -> SimilarityReport:
    """
    Score a target document against a corpus snapshot.

    Only corpus documents that are analyzed and fingerprinted take part;
    the target itself is skipped. The target's fingerprint is computed from
    its text when it has none yet.

    Args:
        target: Document being checked
        corpus: Read-only snapshot of stored documents

    Returns:
        SimilarityReport with up to 5 matches, highest score first
    """
    corpus = list(corpus)
    target_vector = target.fingerprint if target.fingerprint is not None else vectorize(target.text)

    tracer = get_tracer()
    with tracer.start_span(
        "similarity.find_similar",
        attributes=similarity_attributes(target.id, corpus_size=len(corpus)),
    ) as span:
        candidates: list[tuple[Document, int]] = []
        for other in corpus:
            if other.id == target.id:
                continue
            if not _is_comparable(other):
                logger.debug(f"Skipping {other.id}: status={other.status}, no usable fingerprint")
                continue

            similarity = cosine_similarity(target_vector, other.fingerprint)
            if similarity > SIMILARITY_THRESHOLD:
                candidates.append((other, to_percentage(similarity)))

        candidates.sort(key=lambda candidate: candidate[1], reverse=True)

        matches = [
            SimilarityMatch(
                other_document_id=other.id,
                score=score,
                excerpts=tuple(extract_excerpts(target.text, other.text)),
            )
            for other, score in candidates[:MAX_MATCHES]
        ]

        max_score = matches[0].score if matches else None
        report = SimilarityReport(
            risk_level=classify_risk(max_score),
            matches=matches,
            overall_similarity=max_score or 0,
        )

        span.set_attribute(SYLLABUS_MATCH_COUNT, len(matches))
        span.set_attribute(SYLLABUS_RISK_LEVEL, report.risk_level)

    logger.info(
        f"Similarity for {target.id}: {len(matches)} match(es), "
        f"risk={report.risk_level}, max={report.overall_similarity}"
    )
    return report
