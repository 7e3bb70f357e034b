"""Assemble new analysis records from freshly generated content."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from jd_readiness.schema.registry import JD_MIN_LENGTH
from jd_readiness.utils.timestamps import now_ms
from jd_readiness.validation.normalizer import normalize

# Keys copied from the generator's output onto the record as-is.
CONTENT_FIELDS: tuple[str, ...] = (
    "extractedSkills",
    "roundMapping",
    "checklist",
    "plan7Days",
    "questions",
    "baseScore",
)


class JobDescriptionTooShortError(ValueError):
    """Raised before any record is built for a missing or too-short job description."""

    def __init__(self, length: int, min_length: int):
        self.length = length
        self.min_length = min_length
        super().__init__(
            f"Job description must be at least {min_length} characters (got {length})"
        )


def check_jd_text(jd_text: str | None, min_length: int = JD_MIN_LENGTH) -> str:
    """Reject job descriptions that are too short to analyse."""
    text = (jd_text or "").strip()
    if len(text) < min_length:
        raise JobDescriptionTooShortError(len(text), min_length)
    return jd_text


def build_analysis_entry(
    analysis_content: Mapping[str, Any] | None,
    company: str = "",
    role: str = "",
    jd_text: str = "",
    company_intel: Mapping[str, Any] | None = None,
    *,
    now: int | None = None,
) -> dict[str, Any]:
    """Build a canonical record for a fresh analysis.

    The base score is copied verbatim from ``analysis_content`` and becomes
    the record's fixed ``baseScore``; ``finalScore`` starts equal to it with
    an empty confidence map. The draft goes through ``normalize`` so partial
    content still yields every field.
    """
    content = analysis_content or {}
    stamp = now_ms() if now is None else now

    draft: dict[str, Any] = {
        "id": uuid.uuid4().hex,
        "createdAt": stamp,
        "updatedAt": stamp,
        "company": company or "",
        "role": role or "",
        "jdText": jd_text,
    }
    for key in CONTENT_FIELDS:
        if key in content:
            draft[key] = content[key]
    if "baseScore" in draft:
        draft["finalScore"] = draft["baseScore"]
    draft["skillConfidenceMap"] = {}
    draft["companyIntel"] = dict(company_intel) if company_intel else {}

    return normalize(draft, now=stamp)
