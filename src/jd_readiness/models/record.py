"""Pydantic models for analysis records and validation results."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ConfidenceLevel = Literal["know", "practice", "unset"]


class ValidationResult(BaseModel):
    """Outcome of checking one record against the schema."""

    is_valid: bool = Field(alias="isValid")
    errors: list[str] = []

    model_config = {"populate_by_name": True}

    def __bool__(self) -> bool:
        return self.is_valid


class AnalysisRecord(BaseModel):
    """Typed view of a record document that already passed validation.

    Validity rules live in ``jd_readiness.schema.registry``; this model only
    gives callers attribute access and converts back to the stored shape.
    Unknown top-level keys are carried through so that exporting a record
    written by a newer version keeps them.
    """

    id: str
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")
    company: str = ""
    role: str = ""
    jd_text: str = Field(alias="jdText")
    extracted_skills: dict[str, list[str]] = Field(alias="extractedSkills")
    base_score: int = Field(alias="baseScore")
    final_score: int = Field(alias="finalScore")
    skill_confidence_map: dict[str, ConfidenceLevel] = Field(
        default_factory=dict, alias="skillConfidenceMap"
    )
    round_mapping: list[dict[str, Any]] = Field(default_factory=list, alias="roundMapping")
    checklist: list[dict[str, Any] | str] = []
    plan_7_days: list[dict[str, Any] | str] = Field(default_factory=list, alias="plan7Days")
    questions: list[str] = []
    company_intel: dict[str, Any] = Field(default_factory=dict, alias="companyIntel")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> AnalysisRecord:
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Dump to the camelCase document that is persisted."""
        return self.model_dump(by_alias=True)

    def skill_count(self) -> int:
        return sum(len(skills) for skills in self.extracted_skills.values())
