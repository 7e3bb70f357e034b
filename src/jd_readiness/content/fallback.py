"""Fallback analysis content for job descriptions with no recognised skills.

The content generator hands this to the record builder instead of omitting
fields, so every fresh record still has a score, a checklist, a plan and
questions. The defaults are frozen; callers get mutable copies.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from jd_readiness.schema.registry import SKILL_CATEGORIES

FALLBACK_BASE_SCORE = 35


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


DEFAULT_CONTENT: Mapping[str, Any] = _freeze({
    "baseScore": FALLBACK_BASE_SCORE,
    "extractedSkills": {category: [] for category in SKILL_CATEGORIES},
    "roundMapping": [
        {
            "round": 1,
            "title": "Online Assessment",
            "focusAreas": ["Core_CS", "other"],
            "why": "Screens fundamentals: aptitude, basic coding and problem solving.",
        },
        {
            "round": 2,
            "title": "Technical Interview",
            "focusAreas": ["Core_CS", "Languages"],
            "why": "Checks data structures, algorithms and the language you code in.",
        },
        {
            "round": 3,
            "title": "Project Discussion",
            "focusAreas": ["other"],
            "why": "Walks through your projects and the decisions behind them.",
        },
        {
            "round": 4,
            "title": "HR / Managerial",
            "focusAreas": [],
            "why": "Assesses communication, motivation and culture fit.",
        },
    ],
    "checklist": [
        {
            "round": "Round 1: Aptitude / Basics",
            "items": [
                "Practice quantitative aptitude and logical reasoning",
                "Revise basic programming constructs",
                "Time yourself on short coding problems",
            ],
        },
        {
            "round": "Round 2: DSA + Core CS",
            "items": [
                "Revise arrays, strings, hashing and recursion",
                "Review OOP concepts with examples",
                "Brush up on DBMS and operating system basics",
            ],
        },
        {
            "round": "Round 3: Tech interview (projects + stack)",
            "items": [
                "Prepare a two-minute walkthrough of each project",
                "Be ready to explain trade-offs you made",
                "List the tools you used and why",
            ],
        },
        {
            "round": "Round 4: Managerial / HR",
            "items": [
                "Prepare a short introduction",
                "Research the company and the role",
                "Prepare examples of teamwork and handling conflict",
            ],
        },
    ],
    "plan7Days": [
        {"day": "Day 1-2", "focus": "Basics + core CS", "tasks": ["Revise OOP, DBMS and OS fundamentals"]},
        {"day": "Day 3", "focus": "DSA + coding practice", "tasks": ["Solve easy and medium array and string problems"]},
        {"day": "Day 4", "focus": "More DSA", "tasks": ["Practice recursion, sorting and searching"]},
        {"day": "Day 5", "focus": "Project + resume alignment", "tasks": ["Align resume bullets with the job description"]},
        {"day": "Day 6-7", "focus": "Mock interview + revision", "tasks": ["Run a timed mock interview and revise weak areas"]},
    ],
    "questions": [
        "Tell me about yourself.",
        "Walk me through a project you are proud of.",
        "What is the difference between a process and a thread?",
        "Explain the four pillars of object-oriented programming.",
        "How would you find a duplicate in an array?",
        "What happens when you type a URL into a browser?",
        "Explain normalization in databases.",
        "Describe a time you solved a difficult problem.",
        "Why do you want to join this company?",
        "Where do you see yourself in three years?",
    ],
})


def fallback_content() -> dict[str, Any]:
    """Return a mutable copy of the default analysis content."""
    return _thaw(DEFAULT_CONTENT)


def complete_content(
    content: Mapping[str, Any] | None,
    defaults: Mapping[str, Any] = DEFAULT_CONTENT,
) -> dict[str, Any]:
    """Fill keys the generator left out from ``defaults``.

    Keys already present in ``content`` are kept as they are.
    """
    completed = _thaw(defaults)
    if content:
        completed.update(dict(content))
    return completed
