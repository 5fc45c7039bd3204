"""
Enumerations, year filters, and row schemas for the output tables.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd
from pydantic import BaseModel, Field


class Cause(str, Enum):
    """Canonical causes of death in the NCHS leading-causes table."""
    ALZHEIMERS = "Alzheimer's disease"
    CANCER = "Cancer"
    CLRD = "Chronic lower respiratory diseases"
    DIABETES = "Diabetes"
    HEART_DISEASE = "Heart disease"
    INFLUENZA_PNEUMONIA = "Influenza and pneumonia"
    KIDNEY_DISEASE = "Kidney disease"
    STROKE = "Stroke"
    SUICIDE = "Suicide"
    UNINTENTIONAL_INJURIES = "Unintentional injuries"


class IntegrityPolicy(str, Enum):
    """What the normalizer does with a record that fails a sanity check."""
    ABORT = "abort"
    DROP = "drop"


class NationalPolicy(str, Enum):
    """How national yearly totals are computed. The two are never mixed."""
    NATIONAL_ROW = "national"   # use the "United States" rows as the total
    STATE_SUM = "states"        # drop "United States", sum the per-state rows


class YearType(str, Enum):
    YEAR = "year"
    RANGE = "range"
    ALL = "all"


@dataclass(frozen=True)
class YearFilter:
    """Selects the years a store accessor returns."""
    year_type: YearType = YearType.ALL
    year: Optional[int] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None

    def resolve(self) -> tuple[Optional[int], Optional[int]]:
        """Return inclusive (start, end) years; None means unbounded."""
        if self.year_type == YearType.YEAR and self.year is not None:
            return self.year, self.year
        if self.year_type == YearType.RANGE:
            return self.start_year, self.end_year
        return None, None

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        start, end = self.resolve()
        if start is not None:
            df = df[df["year"] >= start]
        if end is not None:
            df = df[df["year"] <= end]
        return df

    @property
    def label(self) -> str:
        """Human-readable label for the selection."""
        if self.year_type == YearType.YEAR and self.year is not None:
            return str(self.year)
        if self.year_type == YearType.RANGE:
            s = self.start_year if self.start_year is not None else "?"
            e = self.end_year if self.end_year is not None else "?"
            return f"{s} to {e}"
        return "All Years"


# ---------------------------------------------------------------------------
# Output table row models
# ---------------------------------------------------------------------------

class NormalizedRecord(BaseModel):
    year: int = Field(description="Calendar year")
    state: str = Field(description="State name, or 'United States' for the national row")
    cause: str = Field(description="Canonical cause of death")
    deaths: int = Field(ge=0, description="Death count")
    rate: float = Field(ge=0, description="Age-adjusted death rate / 100")
    cause_known: bool = Field(description="False when the cause is not a canonical label")


class CauseYearRecord(BaseModel):
    year: int = Field(description="Calendar year")
    cause: str = Field(description="Canonical cause of death")
    deaths: int = Field(ge=0, description="Total deaths under the national policy")
    rank: int = Field(ge=1, description="Dense rank within the year, 1 = most deaths")


class LeadingCauseRecord(BaseModel):
    year: int = Field(description="Calendar year")
    state: str = Field(description="State name")
    state_code: Optional[str] = Field(description="USPS state code")
    cause: str = Field(description="Cause with the most deaths in the state that year")
    deaths: int = Field(ge=0, description="Deaths from the leading cause")
    rate: float = Field(ge=0, description="Age-adjusted death rate / 100 of the leading cause")


TABLE_MODELS: dict[str, type[BaseModel]] = {
    "normalized": NormalizedRecord,
    "by_cause": CauseYearRecord,
    "leading_by_state": LeadingCauseRecord,
}

_JSON_TYPES = {
    "integer": "int",
    "number": "float",
    "string": "str",
    "boolean": "bool",
}


def table_schema(model: type[BaseModel]) -> dict[str, str]:
    """Column name → semantic type for a row model."""
    props = model.model_json_schema()["properties"]
    schema = {}
    for name, prop in props.items():
        if "type" in prop:
            schema[name] = _JSON_TYPES.get(prop["type"], prop["type"])
        else:
            # Optional[...] renders as anyOf
            types = [_JSON_TYPES.get(p.get("type"), p.get("type")) for p in prop.get("anyOf", [])]
            schema[name] = " | ".join(t if t != "null" else "None" for t in types)
    return schema


def to_records(df: pd.DataFrame, model: type[BaseModel]) -> list[dict]:
    """Validate every row of df against model and return plain dicts."""
    cols = list(model.model_fields)
    return [model(**row).model_dump() for row in df[cols].to_dict("records")]
