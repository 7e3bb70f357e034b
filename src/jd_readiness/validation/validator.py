"""Check arbitrary values against the analysis record schema."""

from __future__ import annotations

import dataclasses
from typing import Any

from jd_readiness.models.record import ValidationResult
from jd_readiness.schema.registry import (
    ANALYSIS_SCHEMA,
    CONFIDENCE_LEVELS,
    SKILL_CATEGORIES,
    FieldSpec,
)
from jd_readiness.validation.kinds import (
    is_str_list,
    kind_label,
    matches_item,
    matches_kind,
    type_name,
)


def validate(record: Any, *, jd_min_length: int | None = None) -> ValidationResult:
    """Validate a record document.

    Produces one message per violation, ordered by schema field order. The
    input is never modified and malformed input never raises: a value that is
    not an object at all yields a single top-level error.

    Extra top-level keys and extra skill categories are tolerated so that
    documents written by newer versions still load.

    ``jd_min_length`` replaces the registry's minimum job description length,
    for stores configured with a different bound.
    """
    if not isinstance(record, dict):
        return ValidationResult(
            is_valid=False,
            errors=[f"record: expected an object, got {type_name(record)}"],
        )

    errors: list[str] = []
    for spec in ANALYSIS_SCHEMA:
        if spec.name == "jdText" and jd_min_length is not None:
            spec = dataclasses.replace(spec, min_length=jd_min_length)
        if spec.name not in record:
            if spec.required:
                errors.append(f"{spec.name}: required field is missing")
            continue

        value = record[spec.name]
        if not matches_kind(spec, value):
            errors.append(
                f"{spec.name}: expected {kind_label(spec.kind)}, got {type_name(value)}"
            )
            continue

        errors.extend(_check_constraints(spec, value))

    return ValidationResult(is_valid=not errors, errors=errors)


def _check_constraints(spec: FieldSpec, value: Any) -> list[str]:
    if spec.kind == "int":
        return _check_range(spec, value)
    if spec.kind == "str":
        return _check_text(spec, value)
    if spec.kind == "skills":
        return _check_skills(spec.name, value)
    if spec.kind == "confidence":
        return _check_confidence(spec.name, value)
    if spec.kind == "list":
        return _check_sequence(spec, value)
    return []


def _check_range(spec: FieldSpec, value: int) -> list[str]:
    low, high = spec.minimum, spec.maximum
    if (low is not None and value < low) or (high is not None and value > high):
        if high is None:
            return [f"{spec.name}: expected value >= {low}, got {value}"]
        return [f"{spec.name}: expected value in [{low}, {high}], got {value}"]
    return []


def _check_text(spec: FieldSpec, value: str) -> list[str]:
    if spec.min_length is not None and len(value) < spec.min_length:
        if spec.min_length == 1:
            return [f"{spec.name}: must not be empty"]
        return [
            f"{spec.name}: expected at least {spec.min_length} characters, "
            f"got {len(value)}"
        ]
    if spec.max_length is not None and len(value) > spec.max_length:
        return [
            f"{spec.name}: expected at most {spec.max_length} characters, "
            f"got {len(value)}"
        ]
    return []


def _check_skills(name: str, skills: dict) -> list[str]:
    errors = []
    for category in SKILL_CATEGORIES:
        if category not in skills:
            errors.append(f"{name}.{category}: required skill category is missing")
        elif not is_str_list(skills[category]):
            errors.append(f"{name}.{category}: expected array of strings")
    return errors


def _check_confidence(name: str, marks: dict) -> list[str]:
    errors = []
    allowed = ", ".join(CONFIDENCE_LEVELS)
    for skill, level in marks.items():
        if not isinstance(skill, str):
            errors.append(f"{name}: skill names must be strings, got {type_name(skill)}")
        elif level not in CONFIDENCE_LEVELS:
            errors.append(f"{name}.{skill}: expected one of {allowed}, got {level!r}")
    return errors


def _check_sequence(spec: FieldSpec, items: list) -> list[str]:
    errors = []
    count = len(items)
    if spec.length is not None and count not in (0, spec.length):
        errors.append(f"{spec.name}: expected 0 or {spec.length} items, got {count}")
    if spec.max_items is not None and count > spec.max_items:
        errors.append(f"{spec.name}: expected at most {spec.max_items} items, got {count}")

    if spec.item_kind is not None:
        for index, item in enumerate(items):
            if not matches_item(spec.item_kind, item):
                errors.append(
                    f"{spec.name}[{index}]: expected {kind_label(spec.item_kind)}, "
                    f"got {type_name(item)}"
                )
    return errors


def is_valid(record: Any, *, jd_min_length: int | None = None) -> bool:
    return validate(record, jd_min_length=jd_min_length).is_valid
