"""
State analytics — leading cause per state, leader counts, choropleth tables.
"""
from __future__ import annotations

import pandas as pd

from mortality.analytics.common import exclude_national, validate_input
from mortality.config import STATE_CODES

LEADING_COLUMNS = ["year", "state", "state_code", "cause", "deaths", "rate"]


def _state_codes(states: pd.Series) -> pd.Series:
    """USPS code per state name; None where the name is not a state."""
    return pd.Series([STATE_CODES.get(s) for s in states], index=states.index, dtype=object)


def leading_cause_by_state(normalized: pd.DataFrame) -> pd.DataFrame:
    """The cause with the most deaths for every (year, state).

    'United States' is excluded. When causes tie on deaths, the one whose
    canonical name sorts first alphabetically wins.
    """
    validate_input(normalized, ["year", "state", "cause", "deaths", "rate"], "leading_cause_by_state")
    df = exclude_national(normalized)
    if df.empty:
        return pd.DataFrame(columns=LEADING_COLUMNS)

    df = df.sort_values(
        ["year", "state", "deaths", "cause"],
        ascending=[True, True, False, True],
        kind="mergesort",
    )
    leading = df.drop_duplicates(subset=["year", "state"], keep="first").copy()
    leading["year"] = leading["year"].astype("int64")
    leading["deaths"] = leading["deaths"].astype("int64")
    leading["state_code"] = _state_codes(leading["state"])
    return leading[LEADING_COLUMNS].reset_index(drop=True)


def leading_cause_counts(leading: pd.DataFrame) -> pd.DataFrame:
    """How many states each cause leads, per year."""
    validate_input(leading, ["year", "state", "cause"], "leading_cause_counts")
    counts = leading.groupby(["year", "cause"]).size().reset_index(name="states")
    return counts.sort_values(
        ["year", "states", "cause"], ascending=[True, False, True], kind="mergesort",
    ).reset_index(drop=True)


def state_rate_map(normalized: pd.DataFrame, cause: str, year: int) -> pd.DataFrame:
    """Per-state deaths and rate for one cause and year, keyed by state code."""
    validate_input(normalized, ["year", "state", "cause", "deaths", "rate"], "state_rate_map")
    cause = getattr(cause, "value", cause)
    df = exclude_national(normalized)
    df = df[(df["cause"] == cause) & (df["year"] == year)].copy()
    df["state_code"] = _state_codes(df["state"])
    return df[["state", "state_code", "deaths", "rate"]].sort_values("state").reset_index(drop=True)
