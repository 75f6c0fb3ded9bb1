"""
Diffing module - edit scripts and change statistics for revisions.
"""

from syllabus_engine.diffing.engine import (
    MERGE_THRESHOLD,
    DiffSegment,
    DiffStats,
    DiffResult,
    compute_stats,
    diff,
)

__all__ = [
    "MERGE_THRESHOLD",
    "DiffSegment",
    "DiffStats",
    "DiffResult",
    "compute_stats",
    "diff",
]
