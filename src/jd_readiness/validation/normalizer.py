"""Fill defaults and coerce nested collections into the canonical record shape."""

from __future__ import annotations

import copy
import math
from typing import Any

from jd_readiness.schema.registry import (
    ANALYSIS_SCHEMA,
    CONFIDENCE_LEVELS,
    DEFAULT_CONFIDENCE,
    FALLBACK_CATEGORY,
    SKILL_CATEGORIES,
    FieldSpec,
    empty_skills,
)
from jd_readiness.scoring.score_engine import calculate_final_score
from jd_readiness.utils.timestamps import now_ms
from jd_readiness.validation.kinds import is_int, matches_kind


def normalize(partial_record: Any, *, now: int | None = None) -> dict[str, Any]:
    """Return a copy of ``partial_record`` with every schema field present.

    Absent or wrongly typed fields get the registry default. Fields that are
    present with the right type are kept even when they break a range or
    length constraint; reporting those is the validator's job. ``jdText`` has
    no default, so a record without one stays invalid after normalization.
    ``finalScore`` is recomputed from ``baseScore`` and the confidence marks.

    ``normalize(normalize(x)) == normalize(x)`` for every input.
    """
    record: dict[str, Any] = copy.deepcopy(partial_record) if isinstance(partial_record, dict) else {}
    stamp = now_ms() if now is None else now

    for spec in ANALYSIS_SCHEMA:
        if spec.name == "finalScore":
            continue  # derived below once baseScore and the marks are settled
        if spec.name in record:
            record[spec.name] = _coerce(spec, record[spec.name])
        if spec.name in record and _is_usable(spec, record[spec.name]):
            continue
        if spec.timestamp:
            record[spec.name] = _default_timestamp(spec.name, record, stamp)
        elif spec.default is not None:
            record[spec.name] = spec.default()

    record["finalScore"] = calculate_final_score(
        record["baseScore"], record["skillConfidenceMap"]
    )
    return record


def _is_usable(spec: FieldSpec, value: Any) -> bool:
    if not matches_kind(spec, value):
        return False
    if spec.name == "id":
        return bool(value)
    return True


def _coerce(spec: FieldSpec, value: Any) -> Any:
    if spec.kind == "int":
        return _coerce_int(value)
    if spec.kind == "skills":
        return normalize_skills(value)
    if spec.kind == "confidence":
        return normalize_confidence(value)
    return value


def _coerce_int(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value):
        return int(round(value))
    return value


def _default_timestamp(name: str, record: dict[str, Any], stamp: int) -> int:
    if name == "updatedAt" and is_int(record.get("createdAt")):
        return max(stamp, record["createdAt"])
    if name == "createdAt":
        updated = _coerce_int(record.get("updatedAt"))
        if is_int(updated):
            return min(stamp, updated)
    return stamp


def normalize_skills(value: Any) -> dict[str, list[str]]:
    """Coerce any skills value into the 7-category mapping.

    A flat list (the legacy shape) lands entirely in ``other``; this layer
    does not categorise by keyword. Entries under unknown category names are
    appended to ``other`` as well.
    """
    skills = empty_skills()
    if isinstance(value, (list, str)):
        skills[FALLBACK_CATEGORY] = _skill_names(value)
        return skills
    if not isinstance(value, dict):
        return skills

    for category in SKILL_CATEGORIES:
        skills[category] = _skill_names(value.get(category))
    for key, names in value.items():
        if key not in SKILL_CATEGORIES:
            skills[FALLBACK_CATEGORY].extend(_skill_names(names))
    return skills


def _skill_names(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [name for name in value if isinstance(name, str)]
    return []


def normalize_confidence(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        skill: level if level in CONFIDENCE_LEVELS else DEFAULT_CONFIDENCE
        for skill, level in value.items()
        if isinstance(skill, str)
    }
