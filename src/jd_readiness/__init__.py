"""Validation, normalization and migration of job-readiness analysis records."""

__version__ = "0.1.0"
