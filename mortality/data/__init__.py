"""Data loading, normalization, and table schemas."""
from .loader import load_raw, normalize_column_name
from .normalize import normalize_records, recode_causes, unknown_causes
from .schemas import Cause, IntegrityPolicy, NationalPolicy, YearFilter, YearType
