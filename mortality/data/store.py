"""
MortalityStore — in-memory tables backed by pandas.

Loaded once, queried by the CLI. Every accessor returns a copy so the
underlying tables stay as the pipeline built them.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from mortality.config import DATA_FILE
from mortality.data.pipeline import MortalityTables, run_pipeline
from mortality.data.schemas import IntegrityPolicy, NationalPolicy, YearFilter

logger = logging.getLogger(__name__)


class MortalityStore:
    """Pipeline output with year-filtered accessors."""

    def __init__(self) -> None:
        self._tables: Optional[MortalityTables] = None
        self.source: Optional[Path] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        filepath: str | Path = DATA_FILE,
        integrity: IntegrityPolicy = IntegrityPolicy.ABORT,
        national: NationalPolicy = NationalPolicy.NATIONAL_ROW,
        strict: bool = False,
    ) -> "MortalityStore":
        """Run the full pipeline over filepath."""
        self.source = Path(filepath)
        self._tables = run_pipeline(self.source, integrity=integrity, national=national, strict=strict)
        return self

    @property
    def is_loaded(self) -> bool:
        return self._tables is not None

    @property
    def tables(self) -> MortalityTables:
        if not self.is_loaded:
            raise RuntimeError("MortalityStore.load() has not been called")
        return self._tables

    # ------------------------------------------------------------------
    # Table accessors
    # ------------------------------------------------------------------

    @staticmethod
    def _filter(df: pd.DataFrame, years: YearFilter | None) -> pd.DataFrame:
        if years is not None:
            df = years.apply(df)
        return df.reset_index(drop=True).copy()

    def get_normalized(self, years: YearFilter | None = None) -> pd.DataFrame:
        return self._filter(self.tables.normalized, years)

    def get_by_cause(self, years: YearFilter | None = None) -> pd.DataFrame:
        return self._filter(self.tables.by_cause, years)

    def get_leading(self, years: YearFilter | None = None) -> pd.DataFrame:
        return self._filter(self.tables.leading_by_state, years)

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def years(self) -> list[int]:
        return sorted(int(y) for y in self.tables.normalized["year"].dropna().unique())

    def causes(self) -> list[str]:
        """Causes sorted by total deaths in the by-cause table, largest first."""
        by_cause = self.tables.by_cause
        if by_cause.empty:
            return []
        totals = by_cause.groupby("cause")["deaths"].sum()
        totals = totals.sort_index().sort_values(ascending=False, kind="mergesort")
        return totals.index.tolist()

    def states(self) -> list[str]:
        """State names, excluding the national aggregate row."""
        return sorted(self.tables.leading_by_state["state"].unique().tolist())

    def year_span(self) -> str:
        years = self.years()
        if not years:
            return "N/A"
        return f"{years[0]} to {years[-1]}"

    def row_count(self) -> int:
        return len(self.tables.normalized)
