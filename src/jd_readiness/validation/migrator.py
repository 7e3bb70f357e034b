"""Upgrade records written under retired shapes to the current schema."""

from __future__ import annotations

import json
import logging
from typing import Any

from jd_readiness.schema.registry import LEGACY_GENERATIONS, LegacyShape
from jd_readiness.validation.normalizer import normalize
from jd_readiness.validation.validator import validate

logger = logging.getLogger(__name__)


def detect_legacy_generations(raw: Any) -> list[LegacyShape]:
    """Return the legacy shapes whose retired fields appear in ``raw``, oldest first."""
    if not isinstance(raw, dict):
        return []
    return [
        shape
        for shape in LEGACY_GENERATIONS
        if any(name in raw for name in shape.retired_fields)
    ]


def migrate_old_entry(
    raw: Any,
    *,
    now: int | None = None,
    jd_min_length: int | None = None,
) -> dict[str, Any] | None:
    """Bring one stored entry up to the current shape.

    ``raw`` may be a record dict or its JSON text. Legacy fields are moved onto
    their current names, then the result is normalized and validated. Returns
    ``None`` for anything that still fails validation; never raises.

    A migrated legacy score becomes the base score; normalization then derives
    the final score from it and any existing marks.
    """
    try:
        document = _load(raw)
        if document is None:
            return None

        for shape in detect_legacy_generations(document):
            document = _rewrite(document, shape)

        record = normalize(document, now=now)
        result = validate(record, jd_min_length=jd_min_length)
    except Exception:
        logger.exception("Unexpected failure while migrating history entry")
        return None

    if not result.is_valid:
        logger.debug(
            "Dropping unrecoverable entry %r: %s",
            record.get("id"),
            "; ".join(result.errors),
        )
        return None
    return record


def _load(raw: Any) -> dict[str, Any] | None:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Entry is not valid JSON; dropping it")
            return None
    if not isinstance(raw, dict):
        return None
    return raw


def _rewrite(document: dict[str, Any], shape: LegacyShape) -> dict[str, Any]:
    """Move retired fields onto current names without overwriting current data."""
    rewritten = dict(document)
    filled: set[str] = set()
    for old_name, targets in shape.renames:
        if old_name not in rewritten:
            continue
        value = rewritten.pop(old_name)
        for target in targets:
            if target not in rewritten:
                rewritten[target] = value
                filled.add(target)
    if filled:
        logger.debug("Migrated %s fields onto %s", shape.name, ", ".join(sorted(filled)))
    return rewritten
