"""Read and write history documents (exports and legacy dumps)."""

from __future__ import annotations

import json
from typing import Any

# Keys older exports used to wrap the record list in.
COLLECTION_KEYS = ("history", "entries", "records")


def parse_history_text(text: str) -> list[Any]:
    """Parse a history dump into a list of raw entries.

    Tries in order:
    1. A JSON array of records
    2. A JSON object wrapping the array under ``history``/``entries``/``records``
    3. A single JSON record object
    4. JSON Lines, one record per line

    Entries are returned as found; nothing here checks their shape.
    """
    text = text.strip()
    if not text:
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        return _as_entries(data)

    result = _parse_json_lines(text)
    if result is not None:
        return result

    raise ValueError(f"Could not parse history document: {text[:200]}...")


def _as_entries(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in COLLECTION_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
        return [data]
    raise ValueError(f"Expected a JSON array or object, got {type(data).__name__}")


def _parse_json_lines(text: str) -> list[Any] | None:
    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            return None
    return entries


def dump_history_text(documents: list[dict[str, Any]]) -> str:
    return json.dumps(documents, ensure_ascii=False, indent=2)
