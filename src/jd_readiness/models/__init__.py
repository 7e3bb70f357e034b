"""Data models for analysis records and history loading."""

from jd_readiness.models.history import HistoryLoadResult
from jd_readiness.models.record import AnalysisRecord, ConfidenceLevel, ValidationResult

__all__ = [
    "AnalysisRecord",
    "ConfidenceLevel",
    "HistoryLoadResult",
    "ValidationResult",
]
