"""Declarative schema for persisted analysis records.

This module is the single definition of what a valid analysis record looks
like. The validator and the normalizer both read it; neither keeps its own
list of fields.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

SKILL_CATEGORIES: tuple[str, ...] = (
    "Core_CS",
    "Languages",
    "Web",
    "Data",
    "Cloud_DevOps",
    "Testing",
    "other",
)
FALLBACK_CATEGORY = "other"

CONFIDENCE_LEVELS: tuple[str, ...] = ("know", "practice", "unset")
CONFIDENCE_ADJUSTMENTS = MappingProxyType({"know": 2, "practice": -2, "unset": 0})
DEFAULT_CONFIDENCE = "unset"

SCORE_MIN = 0
SCORE_MAX = 100
JD_MIN_LENGTH = 50
TEXT_MAX_LENGTH = 200

ROUND_COUNT = 4
PLAN_DAYS = 5  # historical field name says 7
MAX_QUESTIONS = 10


def _new_id() -> str:
    return uuid.uuid4().hex


def empty_skills() -> dict[str, list[str]]:
    """Return the 7-category skill mapping with every category empty."""
    return {category: [] for category in SKILL_CATEGORIES}


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one top-level record field.

    ``kind`` is one of ``str``, ``int``, ``skills``, ``confidence``, ``list``
    or ``dict``. ``default`` builds the value the normalizer substitutes when
    the field is absent or has the wrong type; ``None`` means the field cannot
    be repaired and must come from the caller.
    """

    name: str
    kind: str
    required: bool = True
    minimum: int | None = None
    maximum: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    length: int | None = None  # exact length when non-empty
    max_items: int | None = None
    item_kind: str | None = None
    default: Callable[[], Any] | None = None
    timestamp: bool = False

    @property
    def repairable(self) -> bool:
        return self.default is not None or self.timestamp


ANALYSIS_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("id", "str", min_length=1, default=_new_id),
    FieldSpec("createdAt", "int", minimum=0, timestamp=True),
    FieldSpec("updatedAt", "int", minimum=0, timestamp=True),
    FieldSpec("company", "str", required=False, max_length=TEXT_MAX_LENGTH, default=str),
    FieldSpec("role", "str", required=False, max_length=TEXT_MAX_LENGTH, default=str),
    FieldSpec("jdText", "str", min_length=JD_MIN_LENGTH),
    FieldSpec("extractedSkills", "skills", default=empty_skills),
    FieldSpec("baseScore", "int", minimum=SCORE_MIN, maximum=SCORE_MAX, default=int),
    FieldSpec("finalScore", "int", minimum=SCORE_MIN, maximum=SCORE_MAX, default=int),
    FieldSpec("skillConfidenceMap", "confidence", default=dict),
    FieldSpec("roundMapping", "list", length=ROUND_COUNT, item_kind="dict", default=list),
    # older plans and checklists stored plain strings per day or round
    FieldSpec("checklist", "list", length=ROUND_COUNT, item_kind="entry", default=list),
    FieldSpec("plan7Days", "list", length=PLAN_DAYS, item_kind="entry", default=list),
    FieldSpec("questions", "list", max_items=MAX_QUESTIONS, item_kind="str", default=list),
    FieldSpec("companyIntel", "dict", required=False, default=dict),
)

_FIELDS_BY_NAME = MappingProxyType({spec.name: spec for spec in ANALYSIS_SCHEMA})

FIELD_NAMES: tuple[str, ...] = tuple(spec.name for spec in ANALYSIS_SCHEMA)


def field_spec(name: str) -> FieldSpec:
    """Look up a field declaration by its record key."""
    try:
        return _FIELDS_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown analysis field: {name}") from None


def required_fields() -> tuple[str, ...]:
    return tuple(spec.name for spec in ANALYSIS_SCHEMA if spec.required)


@dataclass(frozen=True)
class LegacyShape:
    """A retired record layout, recognised by the presence of its field names.

    ``renames`` maps each retired key to the current key(s) it feeds.
    """

    name: str
    renames: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def retired_fields(self) -> tuple[str, ...]:
        return tuple(old for old, _ in self.renames)


# Oldest first. When one raw record carries fields of several generations the
# oldest generation is applied first and later ones only fill what is left.
LEGACY_GENERATIONS: tuple[LegacyShape, ...] = (
    LegacyShape(
        name="single-score",
        renames=(
            ("readinessScore", ("baseScore", "finalScore")),
            ("plan", ("plan7Days",)),
            ("skills", ("extractedSkills",)),
        ),
    ),
)
