from __future__ import annotations

import pandas as pd
import pytest

SOURCE_HEADER = ["Year", "113 Cause Name", "Cause Name", "State", "Deaths", "Age-adjusted Death Rate"]

ICD_LABELS = {
    "Heart disease": "Diseases of heart (I00-I09,I11,I13,I20-I51)",
    "Cancer": "Malignant neoplasms (C00-C97)",
    "CLRD": "Chronic lower respiratory diseases (J40-J47)",
    "Stroke": "Cerebrovascular diseases (I60-I69)",
    "All causes": "All causes",
}

# (year, state, cause_name, deaths, age-adjusted rate)
SAMPLE_ROWS = [
    (2015, "United States", "Heart disease", 633842, 168.5),
    (2015, "United States", "Cancer", 595930, 158.5),
    (2015, "United States", "CLRD", 155041, 41.6),
    (2015, "United States", "Stroke", 140323, 37.6),
    (2015, "United States", "All causes", 2712630, 733.1),
    (2015, "Oregon", "Heart disease", 7000, 140.1),
    (2015, "Oregon", "Cancer", 8000, 155.0),
    (2015, "Oregon", "CLRD", 2000, 40.2),
    (2015, "Oregon", "Stroke", 2100, 35.0),
    (2015, "Oregon", "All causes", 35000, 700.0),
    (2015, "Texas", "Heart disease", 45000, 170.0),
    (2015, "Texas", "Cancer", 40000, 150.0),
    (2015, "Texas", "CLRD", 10000, 40.0),
    (2015, "Texas", "Stroke", 9500, 41.0),
    (2015, "Texas", "All causes", 190000, 720.0),
    (2016, "United States", "Heart disease", 635260, 165.5),
    (2016, "United States", "Cancer", 598038, 155.8),
    (2016, "United States", "CLRD", 154596, 40.6),
    (2016, "United States", "Stroke", 142142, 37.3),
    (2016, "United States", "All causes", 2744248, 728.8),
    (2016, "Oregon", "Heart disease", 7100, 138.0),
    (2016, "Oregon", "Cancer", 8100, 152.0),
    (2016, "Oregon", "CLRD", 2050, 39.0),
    (2016, "Oregon", "Stroke", 2200, 36.0),
    (2016, "Oregon", "All causes", 36000, 710.0),
    (2016, "Texas", "Heart disease", 46000, 168.0),
    (2016, "Texas", "Cancer", 41000, 148.0),
    (2016, "Texas", "CLRD", 10100, 39.5),
    (2016, "Texas", "Stroke", 9700, 40.0),
    (2016, "Texas", "All causes", 195000, 715.0),
]


def _raw_frame(rows) -> pd.DataFrame:
    return pd.DataFrame(
        rows, columns=["year", "state", "cause_name", "deaths", "age_adjusted_death_rate"],
    )


@pytest.fixture
def make_raw():
    """Factory: list of (year, state, cause_name, deaths, rate) → raw table."""
    return _raw_frame


@pytest.fixture
def make_normalized():
    """Factory: list of (year, state, cause, deaths, rate) → normalized table."""
    def _make(rows):
        df = pd.DataFrame(rows, columns=["year", "state", "cause", "deaths", "rate"])
        df["cause_known"] = True
        return df
    return _make


@pytest.fixture
def raw_df():
    return _raw_frame(SAMPLE_ROWS)


@pytest.fixture
def write_csv(tmp_path):
    """Factory: write rows under the source header and return the path."""
    def _write(rows, name="leading_causes.csv", header=None):
        header = header or SOURCE_HEADER
        records = [
            (year, ICD_LABELS.get(cause, cause), cause, state, deaths, rate)
            for year, state, cause, deaths, rate in rows
        ]
        path = tmp_path / name
        pd.DataFrame(records, columns=SOURCE_HEADER).set_axis(header, axis=1).to_csv(path, index=False)
        return path
    return _write


@pytest.fixture
def csv_path(write_csv):
    return write_csv(SAMPLE_ROWS)
