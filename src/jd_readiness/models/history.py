"""Pydantic model for the result of loading stored history."""

from __future__ import annotations

from pydantic import BaseModel

from jd_readiness.models.record import AnalysisRecord


class HistoryLoadResult(BaseModel):
    """Surviving records plus the counts needed to detect dropped entries."""

    records: list[AnalysisRecord] = []
    raw_count: int = 0
    valid_count: int = 0

    @property
    def dropped_count(self) -> int:
        return self.raw_count - self.valid_count

    @property
    def has_data_loss(self) -> bool:
        return self.valid_count < self.raw_count
