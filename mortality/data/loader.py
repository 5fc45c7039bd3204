"""
CSV loading and header normalization.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

import pandas as pd

from mortality.config import COLUMN_MAP, COUNT_COLS, FLOAT_COLS, INT_COLS, REQUIRED_COLUMNS
from mortality.errors import LoadError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Column name normalisation
# ---------------------------------------------------------------------------

_NON_WORD_RE = re.compile(r"[^0-9a-z]+")


def normalize_column_name(name: str) -> str:
    """'Age-adjusted Death Rate' -> 'age_adjusted_death_rate'."""
    return _NON_WORD_RE.sub("_", str(name).strip().lower()).strip("_")


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename columns to canonical snake_case; reject headers that collide."""
    renamed = [normalize_column_name(c) for c in df.columns]
    dupes = sorted({c for c in renamed if renamed.count(c) > 1})
    if dupes:
        raise LoadError(f"Header has columns that collide after normalization: {dupes}")
    df = df.copy()
    df.columns = renamed
    return df.rename(columns=COLUMN_MAP)


def check_schema(df: pd.DataFrame) -> None:
    """Raise LoadError when a required column is absent."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise LoadError(
            f"Header does not match the expected schema; missing {missing}, "
            f"found {df.columns.tolist()}"
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """Numeric columns → nullable numbers, text columns → stripped strings.

    Unparseable numbers become missing; aggregation validation reports them.
    Counts are left as floats: the normalizer checks sign and wholeness.
    """
    for col in INT_COLS + COUNT_COLS:
        if not pd.api.types.is_numeric_dtype(df[col]):
            df[col] = df[col].astype(str).str.replace(",", "", regex=False)
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    for col in INT_COLS:
        # a fractional year is not a year
        df[col] = df[col].where(df[col] % 1 == 0).astype("Int64")
    for col in FLOAT_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    for col in ["cause_name", "state"]:
        df[col] = df[col].astype("string").str.strip()
    return df


def load_raw(filepath: str | Path) -> pd.DataFrame:
    """Load the leading-causes CSV into a table of raw records."""
    filepath = Path(filepath)
    if not filepath.is_file():
        raise LoadError(f"Input file not found: {filepath}")

    try:
        df = pd.read_csv(filepath)
    except pd.errors.EmptyDataError as exc:
        raise LoadError(f"Input file is empty: {filepath}") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise LoadError(f"Could not read {filepath}: {exc}") from exc

    df = normalize_columns(df)
    check_schema(df)

    keep = REQUIRED_COLUMNS + [c for c in COLUMN_MAP.values() if c in df.columns]
    df = _coerce_types(df[keep].copy())

    logger.info(f"Loaded {len(df):,} raw records from {filepath.name}")
    return df
