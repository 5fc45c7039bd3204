"""
Projection, cause recoding, rate derivation, and integrity checks.
"""
from __future__ import annotations

import logging

import pandas as pd

from mortality.config import ALL_CAUSES_LABEL, CAUSE_NORMALIZATION, RATE_SCALE, REQUIRED_COLUMNS
from mortality.data.schemas import Cause, IntegrityPolicy
from mortality.errors import DataIntegrityError, ValidationError

logger = logging.getLogger(__name__)

KNOWN_CAUSES = frozenset(c.value for c in Cause)

NORMALIZED_COLUMNS = ["year", "state", "cause", "deaths", "rate", "cause_known"]
_KEY = ["year", "state", "cause"]


def _first_record(df: pd.DataFrame, mask: pd.Series) -> dict:
    row = df[mask].iloc[0]
    return {k: (None if pd.isna(v) else v) for k, v in row.items()}


# ---------------------------------------------------------------------------
# Cause recoding
# ---------------------------------------------------------------------------

def recode_causes(causes: pd.Series) -> pd.Series:
    """Map raw cause labels to canonical names by whole-value equality.

    Labels missing from CAUSE_NORMALIZATION pass through unchanged.
    """
    return causes.replace(CAUSE_NORMALIZATION)


def unknown_causes(df: pd.DataFrame) -> list[str]:
    """Cause labels in a normalized table that are not canonical."""
    flagged = df.loc[~df["cause_known"], "cause"].dropna()
    return sorted(flagged.unique().tolist())


# ---------------------------------------------------------------------------
# Integrity checks
# ---------------------------------------------------------------------------

def _handle_invalid(
    df: pd.DataFrame,
    mask: pd.Series,
    reason: str,
    policy: IntegrityPolicy,
) -> pd.DataFrame:
    """Abort on the first flagged row, or drop every flagged row with a warning."""
    count = int(mask.sum())
    if count == 0:
        return df
    if policy == IntegrityPolicy.ABORT:
        raise DataIntegrityError(f"{count:,} record(s) with {reason}", _first_record(df, mask))
    logger.warning(f"Dropping {count:,} record(s) with {reason}; first: {_first_record(df, mask)}")
    return df[~mask]


def _check_non_negative(df: pd.DataFrame, policy: IntegrityPolicy) -> pd.DataFrame:
    negative = (df["deaths"].lt(0).fillna(False) | df["rate"].lt(0).fillna(False)).astype(bool)
    return _handle_invalid(df, negative, "negative deaths or rate", policy)


def _check_whole_deaths(df: pd.DataFrame, policy: IntegrityPolicy) -> pd.DataFrame:
    """Death counts must be whole numbers; missing counts are left for validation."""
    fractional = ((df["deaths"] % 1).ne(0).fillna(False) & df["deaths"].notna()).astype(bool)
    df = _handle_invalid(df, fractional, "fractional death count", policy).copy()
    df["deaths"] = df["deaths"].astype("Int64")
    return df


def _check_unique_keys(df: pd.DataFrame, policy: IntegrityPolicy) -> pd.DataFrame:
    """Collapse exact duplicates; conflicting rows for one key are invalid."""
    exact = df.duplicated(subset=_KEY + ["deaths", "rate"], keep="first")
    if exact.any():
        logger.warning(f"Collapsing {int(exact.sum()):,} exact duplicate record(s)")
        df = df[~exact]

    conflicting = df.duplicated(subset=_KEY, keep=False)
    return _handle_invalid(df, conflicting, "conflicting values for the same (year, state, cause)", policy)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_records(
    raw: pd.DataFrame,
    policy: IntegrityPolicy = IntegrityPolicy.ABORT,
    strict: bool = False,
) -> pd.DataFrame:
    """Turn raw records into normalized records.

    - projects to the five source fields
    - rate = age_adjusted_death_rate / 100
    - recodes abbreviations ("CLRD") to canonical cause names
    - removes the "All causes" aggregate rows
    - rejects negative rates and negative or fractional death counts
    - flags non-canonical causes in ``cause_known`` (raises when ``strict``)

    The input frame is not modified.
    """
    policy = IntegrityPolicy(policy)
    missing = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise ValidationError(f"Raw table is missing columns {missing}", stage="normalize")

    df = raw[REQUIRED_COLUMNS].copy()
    df["rate"] = df["age_adjusted_death_rate"] / RATE_SCALE
    df["cause"] = recode_causes(df["cause_name"])

    is_total = df["cause"].eq(ALL_CAUSES_LABEL).fillna(False).astype(bool)
    df = df[~is_total].copy()

    df = _check_non_negative(df, policy).copy()
    df = _check_whole_deaths(df, policy)

    df["cause_known"] = df["cause"].isin(KNOWN_CAUSES).astype(bool)
    unknown = unknown_causes(df)
    if unknown:
        if strict:
            raise DataIntegrityError(
                f"Unknown cause label(s) {unknown}",
                _first_record(df, df["cause"].isin(unknown)),
            )
        logger.warning(f"Passing through {len(unknown)} unknown cause label(s): {unknown}")

    df = _check_unique_keys(df, policy)

    df = df[NORMALIZED_COLUMNS].sort_values(_KEY).reset_index(drop=True)
    logger.info(f"Normalized {len(raw):,} raw records into {len(df):,} rows")
    return df
