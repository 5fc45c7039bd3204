"""
Shared helpers for the aggregate modules: validation, national policy, percent change, JSON output.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd

from mortality.config import NATIONAL_STATE
from mortality.data.schemas import NationalPolicy
from mortality.errors import ValidationError


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

def validate_input(df: pd.DataFrame, columns: list[str], operation: str) -> None:
    """Every column must exist and hold no missing values.

    Raises ValidationError naming the operation and the first bad record.
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValidationError(f"{operation}: input is missing columns {missing}")

    nulls = df[columns].isna().any(axis=1)
    if nulls.any():
        row = df[nulls].iloc[0]
        record = {k: (None if pd.isna(v) else v) for k, v in row.items()}
        bad = [c for c in columns if pd.isna(row[c])]
        raise ValidationError(f"{operation}: record is missing required field(s) {bad}", record)


# ---------------------------------------------------------------------------
# State-inclusion policy
# ---------------------------------------------------------------------------

def exclude_national(df: pd.DataFrame) -> pd.DataFrame:
    """Drop the 'United States' aggregate rows."""
    return df[df["state"] != NATIONAL_STATE]


def apply_national_policy(df: pd.DataFrame, policy: NationalPolicy) -> pd.DataFrame:
    """Rows that make up the national total under policy."""
    policy = NationalPolicy(policy)
    if policy == NationalPolicy.NATIONAL_ROW:
        return df[df["state"] == NATIONAL_STATE]
    return exclude_national(df)


# ---------------------------------------------------------------------------
# Percent change
# ---------------------------------------------------------------------------


def pct_change(current: float, previous: float) -> float | None:
    """Percentage change from previous to current. Returns None if previous is 0."""
    if previous == 0 or pd.isna(previous):
        return None
    return (current - previous) / abs(previous) * 100


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
