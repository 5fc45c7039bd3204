import pandas as pd
import pytest

from mortality.config import REQUIRED_COLUMNS
from mortality.data.loader import load_raw, normalize_column_name
from mortality.errors import LoadError


@pytest.mark.parametrize("raw, expected", [
    ("Year", "year"),
    ("Cause Name", "cause_name"),
    ("Age-adjusted Death Rate", "age_adjusted_death_rate"),
    ("  DEATHS ", "deaths"),
    ("113 Cause Name", "113_cause_name"),
    ("State/Territory", "state_territory"),
])
def test_normalize_column_name(raw, expected):
    assert normalize_column_name(raw) == expected


def test_load_raw_returns_canonical_columns(csv_path):
    df = load_raw(csv_path)
    assert list(df.columns[:5]) == REQUIRED_COLUMNS
    assert "icd_cause_name" in df.columns
    assert len(df) == 30
    assert df["year"].tolist().count(2015) == 15
    assert pd.api.types.is_integer_dtype(df["year"])
    assert pd.api.types.is_float_dtype(df["deaths"])
    assert pd.api.types.is_float_dtype(df["age_adjusted_death_rate"])


def test_load_raw_header_is_case_and_spacing_insensitive(write_csv):
    header = ["YEAR", "113 cause name", " cause  name ", "STATE", "deaths", "Age adjusted death-rate"]
    path = write_csv([(2010, "Oregon", "Cancer", 250, 150.0)], header=header)
    df = load_raw(path)
    assert df.loc[0, "cause_name"] == "Cancer"
    assert df.loc[0, "deaths"] == 250


def test_load_raw_missing_file(tmp_path):
    with pytest.raises(LoadError, match="not found"):
        load_raw(tmp_path / "nope.csv")


def test_load_raw_schema_mismatch(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("Year,Cause Name,State,Count\n2010,Cancer,Oregon,250\n")
    with pytest.raises(LoadError) as exc_info:
        load_raw(path)
    assert "deaths" in str(exc_info.value)
    assert exc_info.value.stage == "load"


def test_load_raw_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(LoadError, match="empty"):
        load_raw(path)


def test_load_raw_parses_thousands_separators(tmp_path):
    path = tmp_path / "commas.csv"
    path.write_text(
        'Year,Cause Name,State,Deaths,Age-adjusted Death Rate\n'
        '2016,Heart disease,United States,"635,260",165.5\n'
    )
    df = load_raw(path)
    assert df.loc[0, "deaths"] == 635260


def test_load_raw_unparseable_number_becomes_missing(tmp_path):
    path = tmp_path / "garbled.csv"
    path.write_text(
        "Year,Cause Name,State,Deaths,Age-adjusted Death Rate\n"
        "2016,Heart disease,Oregon,n/a,165.5\n"
    )
    df = load_raw(path)
    assert pd.isna(df.loc[0, "deaths"])


def test_load_raw_keeps_fractional_and_negative_counts(tmp_path):
    path = tmp_path / "fractions.csv"
    path.write_text(
        "Year,Cause Name,State,Deaths,Age-adjusted Death Rate\n"
        "2010,Cancer,Oregon,-0.4,150.0\n"
        "2010,Stroke,Oregon,3.7,30.0\n"
    )
    df = load_raw(path)
    assert df["deaths"].tolist() == [-0.4, 3.7]


def test_load_raw_fractional_year_becomes_missing(tmp_path):
    path = tmp_path / "year.csv"
    path.write_text(
        "Year,Cause Name,State,Deaths,Age-adjusted Death Rate\n"
        "2010.5,Cancer,Oregon,250,150.0\n"
    )
    assert pd.isna(load_raw(path).loc[0, "year"])
