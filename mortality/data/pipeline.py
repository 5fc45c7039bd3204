"""
Loader → Normalizer → Aggregator, as explicit named tables.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from mortality.analytics.causes import by_cause_year
from mortality.analytics.states import leading_cause_by_state
from mortality.data.loader import load_raw
from mortality.data.normalize import normalize_records
from mortality.data.schemas import IntegrityPolicy, NationalPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MortalityTables:
    """The three output tables of one run.

    Built once per run and never mutated; accessors hand out copies.
    """
    normalized: pd.DataFrame
    by_cause: pd.DataFrame
    leading_by_state: pd.DataFrame
    national_policy: NationalPolicy = NationalPolicy.NATIONAL_ROW

    def as_dict(self) -> dict[str, pd.DataFrame]:
        return {
            "normalized": self.normalized.copy(),
            "by_cause": self.by_cause.copy(),
            "leading_by_state": self.leading_by_state.copy(),
        }


def build_tables(
    raw: pd.DataFrame,
    integrity: IntegrityPolicy = IntegrityPolicy.ABORT,
    national: NationalPolicy = NationalPolicy.NATIONAL_ROW,
    strict: bool = False,
) -> MortalityTables:
    """Normalize raw records and derive both aggregate tables."""
    normalized = normalize_records(raw, policy=IntegrityPolicy(integrity), strict=strict)
    by_cause = by_cause_year(normalized, NationalPolicy(national))
    leading = leading_cause_by_state(normalized)
    logger.info(
        f"Built tables: {len(normalized):,} normalized, {len(by_cause):,} cause-year, "
        f"{len(leading):,} leading-cause rows"
    )
    return MortalityTables(normalized, by_cause, leading, NationalPolicy(national))


def run_pipeline(
    filepath: str | Path,
    integrity: IntegrityPolicy = IntegrityPolicy.ABORT,
    national: NationalPolicy = NationalPolicy.NATIONAL_ROW,
    strict: bool = False,
) -> MortalityTables:
    """Load the CSV at filepath and build every output table."""
    return build_tables(load_raw(filepath), integrity=integrity, national=national, strict=strict)
