"""
Diff Engine - structured edit scripts between two text versions.

Used to audit and render machine-proposed revisions. The alignment is a
minimal character-level diff (Myers, via diff-match-patch with its timeout
disabled). A cleanup pass then folds short common runs that sit between two
edits into the edit, so "a weekly" replacing "no" reads as one block instead
of a confetti of one-letter keeps.

RECONSTRUCTION LAW:
-------------------
    "".join(s.text for s in segments if s.operation in ("equal", "delete")) == original
    "".join(s.text for s in segments if s.operation in ("equal", "insert")) == revised

Every transformation below preserves both joins, and segment order always
follows document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from diff_match_patch import diff_match_patch

Operation = Literal["equal", "insert", "delete"]

# Common runs shorter than this, sandwiched between edits, are folded into the edit
MERGE_THRESHOLD = 4

_OPERATIONS: dict[int, str] = {
    diff_match_patch.DIFF_EQUAL: "equal",
    diff_match_patch.DIFF_INSERT: "insert",
    diff_match_patch.DIFF_DELETE: "delete",
}


@dataclass(frozen=True)
class DiffSegment:
    """One unit of the edit script."""
    operation: Operation
    text: str


@dataclass(frozen=True)
class DiffStats:
    """Character totals per operation."""
    added: int = 0
    removed: int = 0
    unchanged: int = 0


@dataclass
class DiffResult:
    """Ordered segments plus aggregate change statistics."""
    segments: list[DiffSegment] = field(default_factory=list)
    stats: DiffStats = field(default_factory=DiffStats)

    def original_text(self) -> str:
        return "".join(s.text for s in self.segments if s.operation != "insert")

    def revised_text(self) -> str:
        return "".join(s.text for s in self.segments if s.operation != "delete")

    def to_dict(self) -> dict:
        return {
            "segments": [{"operation": s.operation, "text": s.text} for s in self.segments],
            "stats": {
                "added": self.stats.added,
                "removed": self.stats.removed,
                "unchanged": self.stats.unchanged,
            },
        }


def _align(original: str, revised: str) -> list[DiffSegment]:
    """Minimal character alignment."""
    dmp = diff_match_patch()
    dmp.Diff_Timeout = 0  # no deadline -> exact minimal diff
    return [
        DiffSegment(_OPERATIONS[op], text)
        for op, text in dmp.diff_main(original, revised, False)
        if text
    ]


def _fold_short_equalities(
    segments: list[DiffSegment],
    threshold: int = MERGE_THRESHOLD,
) -> list[DiffSegment]:
    """
    Merge edits separated by short common runs into one edit block.

    A folded equal run is emitted on both sides (deleted and re-inserted),
    and each block is written as one delete followed by one insert.
    """
    result: list[DiffSegment] = []
    deleted: list[str] = []
    inserted: list[str] = []

    def flush() -> None:
        if deleted:
            result.append(DiffSegment("delete", "".join(deleted)))
        if inserted:
            result.append(DiffSegment("insert", "".join(inserted)))
        deleted.clear()
        inserted.clear()

    for index, segment in enumerate(segments):
        if segment.operation == "delete":
            deleted.append(segment.text)
        elif segment.operation == "insert":
            inserted.append(segment.text)
        else:
            in_edit = bool(deleted or inserted)
            edit_follows = index + 1 < len(segments) and segments[index + 1].operation != "equal"
            if in_edit and edit_follows and len(segment.text) < threshold:
                deleted.append(segment.text)
                inserted.append(segment.text)
                continue
            flush()
            result.append(segment)

    flush()
    return result


def _coalesce(segments: list[DiffSegment]) -> list[DiffSegment]:
    """Join neighbouring segments that share an operation."""
    merged: list[DiffSegment] = []
    for segment in segments:
        if merged and merged[-1].operation == segment.operation:
            merged[-1] = DiffSegment(segment.operation, merged[-1].text + segment.text)
        else:
            merged.append(segment)
    return merged


def compute_stats(segments: list[DiffSegment]) -> DiffStats:
    """Sum character lengths per operation."""
    totals = {"insert": 0, "delete": 0, "equal": 0}
    for segment in segments:
        totals[segment.operation] += len(segment.text)
    return DiffStats(added=totals["insert"], removed=totals["delete"], unchanged=totals["equal"])


def diff(original: str, revised: str, merge_threshold: int = MERGE_THRESHOLD) -> DiffResult:
    """
    Compute the edit script from `original` to `revised`.

    Empty inputs are valid: two empty strings give no segments, and one
    empty side gives a single insert or delete.

    Args:
        original: Text before revision
        revised: Text after revision
        merge_threshold: Fold common runs shorter than this between edits

    Returns:
        DiffResult whose segments reconstruct both inputs exactly
    """
    original = original or ""
    revised = revised or ""

    segments = _coalesce(_fold_short_equalities(_align(original, revised), merge_threshold))
    return DiffResult(segments=segments, stats=compute_stats(segments))
