"""
Cause analytics — yearly totals by cause, ranks, trajectories, change over time.
"""
from __future__ import annotations

import logging

import pandas as pd

from mortality.analytics.common import apply_national_policy, pct_change, validate_input
from mortality.config import NATIONAL_STATE
from mortality.data.schemas import NationalPolicy
from mortality.errors import ValidationError

logger = logging.getLogger(__name__)

BY_CAUSE_COLUMNS = ["year", "cause", "deaths", "rank"]


def by_cause_year(
    normalized: pd.DataFrame,
    policy: NationalPolicy = NationalPolicy.NATIONAL_ROW,
) -> pd.DataFrame:
    """Total deaths per (year, cause) with a dense rank inside each year.

    Rows are ordered year ascending, deaths descending, then cause name, so
    ties in deaths share a rank and are listed alphabetically.
    """
    validate_input(normalized, ["year", "state", "cause", "deaths"], "by_cause_year")
    rows = apply_national_policy(normalized, policy)
    if rows.empty:
        logger.warning(f"No rows left for by_cause_year under policy '{NationalPolicy(policy).value}'")
        return pd.DataFrame(columns=BY_CAUSE_COLUMNS)

    grouped = rows.groupby(["year", "cause"], as_index=False, observed=True)["deaths"].sum()
    grouped["year"] = grouped["year"].astype("int64")
    grouped["deaths"] = grouped["deaths"].astype("int64")
    grouped = grouped.sort_values(
        ["year", "deaths", "cause"], ascending=[True, False, True], kind="mergesort",
    )
    grouped["rank"] = (
        grouped.groupby("year")["deaths"].rank(method="dense", ascending=False).astype("int64")
    )
    return grouped[BY_CAUSE_COLUMNS].reset_index(drop=True)


def national_totals(
    normalized: pd.DataFrame,
    policy: NationalPolicy = NationalPolicy.NATIONAL_ROW,
) -> pd.DataFrame:
    """Deaths per year across all causes, under the same policy as by_cause_year."""
    validate_input(normalized, ["year", "state", "deaths"], "national_totals")
    rows = apply_national_policy(normalized, policy)
    totals = rows.groupby("year", as_index=False)["deaths"].sum()
    totals["year"] = totals["year"].astype("int64")
    totals["deaths"] = totals["deaths"].astype("int64")
    return totals.sort_values("year").reset_index(drop=True)


def top_causes(by_cause: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """The rank <= n rows of each year."""
    if n < 1:
        raise ValidationError(f"top_causes: n must be positive, got {n}")
    validate_input(by_cause, BY_CAUSE_COLUMNS, "top_causes")
    return by_cause[by_cause["rank"] <= n].reset_index(drop=True)


def rank_trajectories(by_cause: pd.DataFrame) -> pd.DataFrame:
    """Wide cause x year table of ranks, ordered by rank in the latest year."""
    validate_input(by_cause, BY_CAUSE_COLUMNS, "rank_trajectories")
    if by_cause.empty:
        return pd.DataFrame()
    wide = by_cause.pivot(index="cause", columns="year", values="rank")
    latest = wide.columns.max()
    wide = wide.sort_values([latest], na_position="last", kind="mergesort")
    wide.columns.name = "year"
    return wide


def cause_change(
    normalized: pd.DataFrame,
    start_year: int,
    end_year: int,
    policy: NationalPolicy = NationalPolicy.NATIONAL_ROW,
) -> pd.DataFrame:
    """Per-cause deaths and rate at two years, with absolute and percent change.

    Deaths follow ``policy``. Rates are age-adjusted, so they are only taken
    from the national rows; causes without a national row get NaN rates.
    """
    by_cause = by_cause_year(normalized, policy)
    years = set(by_cause["year"].tolist())
    for y in (start_year, end_year):
        if y not in years:
            raise ValidationError(f"cause_change: year {y} has no data")

    deaths = by_cause.pivot(index="cause", columns="year", values="deaths")
    national = normalized[normalized["state"] == NATIONAL_STATE]
    rates = national.pivot(index="cause", columns="year", values="rate")

    results = []
    for cause in deaths.index:
        d0 = deaths.at[cause, start_year]
        d1 = deaths.at[cause, end_year]
        r0 = rates.at[cause, start_year] if (cause in rates.index and start_year in rates.columns) else float("nan")
        r1 = rates.at[cause, end_year] if (cause in rates.index and end_year in rates.columns) else float("nan")
        has_deaths = pd.notna(d0) and pd.notna(d1)
        results.append({
            "cause": cause,
            "deaths_start": None if pd.isna(d0) else int(d0),
            "deaths_end": None if pd.isna(d1) else int(d1),
            "deaths_change": int(d1 - d0) if has_deaths else None,
            "deaths_pct_change": pct_change(d1, d0) if has_deaths else None,
            "rate_start": float(r0),
            "rate_end": float(r1),
            "rate_pct_change": pct_change(r1, r0) if pd.notna(r0) and pd.notna(r1) else None,
        })

    df = pd.DataFrame(results, columns=[
        "cause", "deaths_start", "deaths_end", "deaths_change", "deaths_pct_change",
        "rate_start", "rate_end", "rate_pct_change",
    ])
    return df.sort_values(
        ["deaths_pct_change", "cause"], ascending=[False, True], na_position="last", kind="mergesort",
    ).reset_index(drop=True)
