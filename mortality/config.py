"""
Mortality Analytics — Configuration: paths, column names, category maps.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with MORTALITY_DATA_FILE env var
# ---------------------------------------------------------------------------
DATA_FILE = Path(os.environ.get(
    "MORTALITY_DATA_FILE",
    str(Path.cwd() / "data" / "NCHS_-_Leading_Causes_of_Death__United_States.csv"),
))

# ---------------------------------------------------------------------------
# Column mapping from normalized CSV header → internal names
# ---------------------------------------------------------------------------
REQUIRED_COLUMNS = [
    "year",
    "cause_name",
    "state",
    "deaths",
    "age_adjusted_death_rate",
]

# Optional columns kept when present
COLUMN_MAP = {
    "113_cause_name": "icd_cause_name",
}

INT_COLS = ["year"]
# Counts stay float in the raw table so the normalizer sees fractions and signs
COUNT_COLS = ["deaths"]
FLOAT_COLS = ["age_adjusted_death_rate"]

# ---------------------------------------------------------------------------
# Dataset constants
# ---------------------------------------------------------------------------
ALL_CAUSES_LABEL = "All causes"
NATIONAL_STATE = "United States"

# Source rates are per 100,000; dividing by 100 gives the rate used downstream
RATE_SCALE = 100

# ---------------------------------------------------------------------------
# Cause normalization map (exact raw label → canonical name)
# ---------------------------------------------------------------------------
CAUSE_NORMALIZATION = {
    "CLRD": "Chronic lower respiratory diseases",
    "Chronic lower respiratory diseases": "Chronic lower respiratory diseases",
    "Alzheimer's disease": "Alzheimer's disease",
    "Cancer": "Cancer",
    "Diabetes": "Diabetes",
    "Heart disease": "Heart disease",
    "Influenza and pneumonia": "Influenza and pneumonia",
    "Kidney disease": "Kidney disease",
    "Stroke": "Stroke",
    "Suicide": "Suicide",
    "Unintentional injuries": "Unintentional injuries",
    "All causes": "All causes",
}

# ---------------------------------------------------------------------------
# USPS codes for choropleth lookups
# ---------------------------------------------------------------------------
STATE_CODES = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "District of Columbia": "DC", "Florida": "FL", "Georgia": "GA", "Hawaii": "HI",
    "Idaho": "ID", "Illinois": "IL", "Indiana": "IN", "Iowa": "IA",
    "Kansas": "KS", "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME",
    "Maryland": "MD", "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN",
    "Mississippi": "MS", "Missouri": "MO", "Montana": "MT", "Nebraska": "NE",
    "Nevada": "NV", "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM",
    "New York": "NY", "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH",
    "Oklahoma": "OK", "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI",
    "South Carolina": "SC", "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX",
    "Utah": "UT", "Vermont": "VT", "Virginia": "VA", "Washington": "WA",
    "West Virginia": "WV", "Wisconsin": "WI", "Wyoming": "WY",
}
