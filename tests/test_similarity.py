"""
Unit Tests for the Similarity Engine

Covers cosine scoring, risk boundaries, excerpt extraction and an
end-to-end pass over two documents built from a shared vocabulary.
"""

import numpy as np
import pytest

from syllabus_engine.documents.models import Document
from syllabus_engine.fingerprint.vectorizer import vectorize
from syllabus_engine.similarity.engine import (
    MAX_EXCERPTS_PER_MATCH,
    classify_risk,
    cosine_similarity,
    extract_excerpts,
    find_similar,
    to_percentage,
)


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

# Porter leaves these consonant-only words untouched
_LETTERS = "bdfgkmnprt"
VOCABULARY = [f"zq{a}{b}" for a in _LETTERS for b in _LETTERS]


def _repeated_text(words: list[str]) -> str:
    """Word i of the list repeated (60 - i) times, in blocks."""
    return " ".join(" ".join([word] * (60 - i)) for i, word in enumerate(words))


@pytest.fixture
def shared_vocabulary_pair():
    """Two documents sharing their 45 most frequent words."""
    words_a = VOCABULARY[:50]
    words_b = VOCABULARY[:45] + VOCABULARY[50:55]
    return _repeated_text(words_a), _repeated_text(words_b)


MANAGERIAL_ACCOUNTING = """Managerial Accounting (ACC 210) - Spring Term
Instructor: Dr. Elena Ruiz; office hours: Tuesday, 2-4 pm.

Week 1: Introduction, cost behaviour, and the role of the management accountant.
Week 2: Cost-volume-profit analysis; break-even charts, margin of safety.
Week 3: Job-order costing: materials, labour, and overhead allocation.
Week 4: Process costing (weighted-average method), with a bakery case.
Week 5: Activity-based costing - cost pools, drivers, and service firms.
Week 6: Budgeting: the master budget, cash budgets, and flexible budgets.
Week 7: Standard costs and variance analysis (price, quantity, efficiency).
Week 8: Midterm exam.
Week 9: Relevant costs for decisions: make-or-buy, special orders, and closures.
Week 10: Capital budgeting: NPV, IRR, and payback, with a hospital expansion case.
Week 11: Performance measurement; the balanced scorecard, ROI, and residual income.
Week 12: Transfer pricing between divisions, and a group presentation.
Assessment: quizzes 20%, midterm 30%, final project 50%.
"""


@pytest.fixture
def punctuated_copy_pair():
    """A syllabus and a reflowed, re-cased copy of it."""
    reflowed = " ".join(MANAGERIAL_ACCOUNTING.upper().split())
    return reflowed, MANAGERIAL_ACCOUNTING


def _analyzed(doc_id: str, text: str) -> Document:
    return Document(id=doc_id, text=text, status="analyzed", fingerprint=vectorize(text))


# ---------------------------------------------------------------------------
# COSINE
# ---------------------------------------------------------------------------


class TestCosineSimilarity:
    """Test cosine scoring."""

    def test_self_similarity_is_one(self):
        v = vectorize("operations research linear programming simplex method")
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_symmetric(self):
        a = vectorize("marketing strategy brand positioning brand equity")
        b = vectorize("brand management marketing channels pricing strategy")
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_zero_norm_is_zero(self):
        assert cosine_similarity(np.zeros(3), np.array([1.0, 0.0, 0.0])) == 0.0

    def test_length_mismatch_is_zero(self):
        assert cosine_similarity(np.ones(3), np.ones(4)) == 0.0

    def test_orthogonal_is_zero(self):
        assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == 0.0


# ---------------------------------------------------------------------------
# SCORES AND RISK
# ---------------------------------------------------------------------------


class TestScoring:
    """Test percentage conversion and risk classification."""

    @pytest.mark.parametrize(
        "similarity,expected",
        [(1.0, 100), (0.5, 50), (0.804, 80), (0.123, 12), (1.2, 100), (-0.1, 0)],
    )
    def test_to_percentage(self, similarity, expected):
        assert to_percentage(similarity) == expected

    @pytest.mark.parametrize(
        "score,expected",
        [(None, "none"), (0, "low"), (59, "low"), (60, "medium"), (79, "medium"), (80, "high"), (100, "high")],
    )
    def test_risk_boundaries(self, score, expected):
        assert classify_risk(score) == expected


# ---------------------------------------------------------------------------
# EXCERPTS
# ---------------------------------------------------------------------------


class TestExtractExcerpts:
    """Test verbatim evidence extraction."""

    def test_finds_shared_phrase(self):
        phrase = "students will analyze real business cases from regional companies every week"
        target = f"Course overview. {phrase}. Grading is by exam."
        other = f"Intro text here. {phrase.capitalize()} and more."

        excerpts = extract_excerpts(target, other)

        assert excerpts
        first = excerpts[0]
        assert other[first.position:].lower().startswith("students will analyze")
        assert first.text == other[first.position:first.position + 200]

    def test_no_shared_phrase(self):
        target = "one two three four five six seven eight nine ten eleven"
        other = "completely different words that share nothing with the target at all"
        assert extract_excerpts(target, other) == []

    def test_short_target_has_no_windows(self):
        assert extract_excerpts("too short", "too short") == []

    def test_capped_per_pair(self):
        words = [f"word{chr(97 + i % 26)}{i}" for i in range(80)]
        text = " ".join(words)
        assert len(extract_excerpts(text, text)) == MAX_EXCERPTS_PER_MATCH

    def test_punctuation_and_line_breaks_do_not_block_matches(self):
        target = "Week 3: Job-order costing: materials, labour, and overhead allocation. Week 4 follows."
        other = (
            "Outline\n"
            "WEEK 3 - job-order costing;\n"
            "materials (labour) and overhead allocation!\n"
            "Week 4 follows."
        )

        excerpts = extract_excerpts(target, other)

        assert excerpts
        assert excerpts[0].position == other.index("WEEK 3")
        assert excerpts[0].text == other[excerpts[0].position:]

    def test_position_indexes_raw_text(self):
        """Lower-casing that changes string length does not shift offsets."""
        phrase = "students will analyze real business cases from regional companies every week"
        other = f"İstanbul İİİ campus notes. {phrase}."

        excerpt = extract_excerpts(phrase, other)[0]

        assert excerpt.position == other.index("students")
        assert excerpt.text.startswith("students will analyze")


# ---------------------------------------------------------------------------
# FIND_SIMILAR
# ---------------------------------------------------------------------------


class TestFindSimilar:
    """Test a full similarity pass."""

    def test_empty_corpus(self):
        target = Document(id="t", text="cost accounting managerial decisions")
        report = find_similar(target, [])

        assert report.risk_level == "none"
        assert report.matches == []
        assert report.overall_similarity == 0

    def test_skips_self_and_unanalyzed(self):
        text = "cost accounting managerial decisions budgeting variance analysis"
        target = _analyzed("t", text)
        pending = Document(id="p", text=text, status="processing", fingerprint=vectorize(text))

        report = find_similar(target, [target, pending])

        assert report.matches == []

    def test_threshold_is_strict(self):
        target = Document(id="t", text="x", fingerprint=np.array([1.0, 1.0, 0.0, 0.0]))
        other = Document(id="o", text="y", status="analyzed", fingerprint=np.array([1.0, 0.0, 1.0, 0.0]))

        assert find_similar(target, [other]).matches == []

    def test_medium_risk(self):
        target = Document(id="t", text="x", fingerprint=np.array([1.0, 0.0]))
        other = Document(id="o", text="y", status="analyzed", fingerprint=np.array([0.6, 0.8]))

        report = find_similar(target, [other])

        assert [m.score for m in report.matches] == [60]
        assert report.risk_level == "medium"

    def test_sorted_and_capped(self):
        target = Document(id="t", text="x", fingerprint=np.array([1.0, 0.0]))
        corpus = [
            Document(id=f"o{i}", text="y", status="analyzed", fingerprint=np.array([1.0, 0.1 * i]))
            for i in range(8)
        ]

        report = find_similar(target, corpus)

        scores = [m.score for m in report.matches]
        assert len(scores) == 5
        assert scores == sorted(scores, reverse=True)
        assert report.overall_similarity == scores[0]

    def test_shared_vocabulary_end_to_end(self, shared_vocabulary_pair):
        text_a, text_b = shared_vocabulary_pair
        target = Document(id="a", text=text_a)

        report = find_similar(target, [_analyzed("b", text_b)])

        assert len(report.matches) == 1
        match = report.matches[0]
        assert match.other_document_id == "b"
        assert match.score >= 80
        assert report.risk_level == "high"
        assert match.excerpts
        assert match.excerpts[0].position == 0
        assert match.excerpts[0].text.startswith("zqbb zqbb")

    def test_verbatim_copy_of_real_syllabus(self):
        target = Document(id="new", text=MANAGERIAL_ACCOUNTING)

        report = find_similar(target, [_analyzed("old", MANAGERIAL_ACCOUNTING)])

        [match] = report.matches
        assert match.score == 100
        assert report.risk_level == "high"
        assert len(match.excerpts) == MAX_EXCERPTS_PER_MATCH
        assert match.excerpts[0].position == 0
        assert match.excerpts[0].text == MANAGERIAL_ACCOUNTING[:200]

    def test_reflowed_copy_end_to_end(self, punctuated_copy_pair):
        target_text, stored_text = punctuated_copy_pair

        report = find_similar(Document(id="new", text=target_text), [_analyzed("old", stored_text)])

        [match] = report.matches
        assert report.risk_level == "high"
        assert match.excerpts
        for excerpt in match.excerpts:
            assert excerpt.text == stored_text[excerpt.position:excerpt.position + 200]

    def test_report_to_dict(self, shared_vocabulary_pair):
        text_a, text_b = shared_vocabulary_pair
        payload = find_similar(Document(id="a", text=text_a), [_analyzed("b", text_b)]).to_dict()

        assert payload["riskLevel"] == "high"
        assert payload["matches"][0]["otherDocumentId"] == "b"
        assert "excerpts" in payload["matches"][0]
        assert payload["uniquenessScore"] == 100 - payload["overallSimilarity"]

    def test_uniqueness_without_matches(self):
        report = find_similar(Document(id="t", text="cost accounting budgeting"), [])
        assert report.uniqueness_score == 100
