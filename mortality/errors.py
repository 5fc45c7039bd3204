"""
Pipeline exceptions — one class per stage that can stop a run.
"""
from __future__ import annotations

from typing import Any, Optional


class MortalityError(Exception):
    """Base class; carries the failing stage and the offending record, if any."""

    stage = "pipeline"

    def __init__(
        self,
        message: str,
        record: Optional[dict[str, Any]] = None,
        stage: Optional[str] = None,
    ) -> None:
        self.record = record
        if stage is not None:
            self.stage = stage
        if record is not None:
            message = f"{message} (record: {record})"
        super().__init__(f"[{self.stage}] {message}")


class LoadError(MortalityError):
    """Input file missing, unreadable, or header does not match the schema."""
    stage = "load"


class DataIntegrityError(MortalityError):
    """A record failed a sanity check (negative count/rate, conflicting duplicate)."""
    stage = "normalize"


class ValidationError(MortalityError):
    """An aggregation precondition was violated (missing column or grouping key)."""
    stage = "aggregate"
