"""Validator, normalizer and migrator for analysis records."""

from jd_readiness.validation.migrator import migrate_old_entry
from jd_readiness.validation.normalizer import normalize
from jd_readiness.validation.validator import validate

__all__ = ["migrate_old_entry", "normalize", "validate"]
