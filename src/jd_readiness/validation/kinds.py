"""Type predicates shared by the validator and the normalizer."""

from __future__ import annotations

from typing import Any

from jd_readiness.schema.registry import FieldSpec

_KIND_LABELS = {
    "str": "string",
    "int": "integer",
    "skills": "object of skill categories",
    "confidence": "object of skill confidence marks",
    "list": "array",
    "dict": "object",
    "entry": "object or string",
}


def is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid score or timestamp
    return isinstance(value, int) and not isinstance(value, bool)


def is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def matches_kind(spec: FieldSpec, value: Any) -> bool:
    """Check only the top-level type of a field, not its constraints."""
    if spec.kind == "str":
        return isinstance(value, str)
    if spec.kind == "int":
        return is_int(value)
    if spec.kind == "list":
        return isinstance(value, list)
    # skills, confidence and dict are all JSON objects
    return isinstance(value, dict)


def matches_item(item_kind: str, item: Any) -> bool:
    """Check one sequence item against a declared item kind."""
    if item_kind == "str":
        return isinstance(item, str)
    if item_kind == "entry":
        return isinstance(item, (dict, str))
    return isinstance(item, dict)


def kind_label(kind: str) -> str:
    return _KIND_LABELS.get(kind, kind)


def type_name(value: Any) -> str:
    """JSON-flavoured name of a value's type, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
