"""Shared test fixtures."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from jd_readiness.builder import build_analysis_entry
from jd_readiness.content.fallback import fallback_content
from jd_readiness.storage.history_store import HistoryStore

NOW = 1_700_000_000_000


@pytest.fixture
def now() -> int:
    return NOW


@pytest.fixture
def sample_jd_text() -> str:
    return """Software Development Engineer (Fresher)

Responsibilities:
- Build and maintain REST APIs in Java and Spring Boot
- Write unit tests with JUnit and keep CI green
- Deploy services with Docker on AWS

Requirements:
- Strong fundamentals in data structures, OOP and DBMS
- Familiarity with React for internal tools
"""


@pytest.fixture
def sample_content() -> dict:
    content = fallback_content()
    content["baseScore"] = 75
    content["extractedSkills"].update({
        "Core_CS": ["DSA", "OOP", "DBMS"],
        "Languages": ["Java"],
        "Web": ["React", "REST"],
        "Cloud_DevOps": ["Docker", "AWS"],
        "Testing": ["JUnit"],
    })
    return content


@pytest.fixture
def valid_record(sample_content, sample_jd_text, now) -> dict:
    return build_analysis_entry(
        sample_content,
        company="Acme",
        role="SDE",
        jd_text=sample_jd_text,
        company_intel={"name": "Acme", "sizeCategory": "startup"},
        now=now,
    )


@pytest.fixture
def legacy_record(sample_jd_text) -> dict:
    """A record as the single-score version of the app saved it."""
    return {
        "id": "legacy-1",
        "createdAt": NOW - 86_400_000,
        "company": "Globex",
        "role": "Backend Intern",
        "jdText": sample_jd_text,
        "readinessScore": 65,
        "extractedSkills": ["Java", "React"],
    }


@pytest.fixture
def make_record(valid_record):
    """Return a copy of the valid record with the given fields replaced."""

    def _make(**changes) -> dict:
        record = copy.deepcopy(valid_record)
        record.update(changes)
        return record

    return _make


@pytest.fixture
def store(tmp_path: Path) -> HistoryStore:
    return HistoryStore(db_path=tmp_path / "test_history.db")
