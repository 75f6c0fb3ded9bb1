"""
Analysis module - seeds findings and recommendations for uploaded documents.
"""

from syllabus_engine.analysis.service import AnalysisService

__all__ = ["AnalysisService"]
