"""Final score derivation and the confidence-mark update path.

The final score is always recomputed from the immutable base score and the
whole confidence map; it is never patched incrementally.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from jd_readiness.schema.registry import (
    CONFIDENCE_ADJUSTMENTS,
    CONFIDENCE_LEVELS,
    SCORE_MAX,
    SCORE_MIN,
)
from jd_readiness.utils.timestamps import bump_timestamp


def clamp_score(value: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def calculate_final_score(base_score: int, skill_confidence_map: Mapping[str, Any] | None) -> int:
    """Compute the display score.

    ``know`` adds 2, ``practice`` subtracts 2, anything else adds nothing.
    The sum is added to ``base_score`` and clamped to [0, 100].

    >>> calculate_final_score(75, {"Java": "know", "React": "practice", "Docker": "practice"})
    73
    """
    adjustment = 0
    if isinstance(skill_confidence_map, Mapping):
        for level in skill_confidence_map.values():
            if isinstance(level, str):
                adjustment += CONFIDENCE_ADJUSTMENTS.get(level, 0)
    return clamp_score(base_score + adjustment)


def apply_confidence(
    record: dict[str, Any],
    skill: str,
    level: str,
    *,
    now: int | None = None,
) -> dict[str, Any]:
    """Set one skill's confidence mark and return the updated record.

    The input record is left untouched. ``baseScore`` is carried over as-is.
    """
    if level not in CONFIDENCE_LEVELS:
        raise ValueError(
            f"Unknown confidence level {level!r}; expected one of {', '.join(CONFIDENCE_LEVELS)}"
        )
    if not isinstance(skill, str) or not skill:
        raise ValueError("Skill name must be a non-empty string")

    marks = dict(record.get("skillConfidenceMap") or {})
    marks[skill] = level
    return _with_marks(record, marks, now)


def replace_confidence_map(
    record: dict[str, Any],
    skill_confidence_map: Mapping[str, str],
    *,
    now: int | None = None,
) -> dict[str, Any]:
    """Replace the whole confidence map and recompute the final score."""
    for skill, level in skill_confidence_map.items():
        if level not in CONFIDENCE_LEVELS:
            raise ValueError(f"Unknown confidence level {level!r} for skill {skill!r}")
    return _with_marks(record, dict(skill_confidence_map), now)


def _with_marks(record: dict[str, Any], marks: dict[str, str], now: int | None) -> dict[str, Any]:
    updated = copy.deepcopy(record)
    updated["skillConfidenceMap"] = marks
    updated["finalScore"] = calculate_final_score(record["baseScore"], marks)
    updated["updatedAt"] = bump_timestamp(record.get("updatedAt"), now)
    return updated
