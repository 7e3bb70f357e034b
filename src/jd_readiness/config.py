"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.jd-readiness/history.db"

    def __post_init__(self) -> None:
        if not self.db_path:
            raise ValueError("storage.db_path must not be empty")

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class ValidationConfig:
    jd_min_length: int = 50

    def __post_init__(self) -> None:
        if not 1 <= self.jd_min_length <= 10_000:
            raise ValueError(
                f"validation.jd_min_length must be between 1 and 10000, got {self.jd_min_length}"
            )


@dataclass(frozen=True)
class CliConfig:
    history_limit: int = 20

    def __post_init__(self) -> None:
        if not 1 <= self.history_limit <= 1000:
            raise ValueError(
                f"cli.history_limit must be between 1 and 1000, got {self.history_limit}"
            )


@dataclass(frozen=True)
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    cli: CliConfig = field(default_factory=CliConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        storage=StorageConfig(**raw.get("storage", {})),
        validation=ValidationConfig(**raw.get("validation", {})),
        cli=CliConfig(**raw.get("cli", {})),
    )
