"""Determinism verification for generated sources."""

from verify.verify import DeterminismResult, verify_generated

__all__ = ["DeterminismResult", "verify_generated"]
