from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from csvlens.schemas.base import CamelModel, validate_as
from csvlens.schemas.dataset import CsvUpload


class ProfilingOptions(CamelModel):
    """Which analyses to run. Defaults match the upload screen's initial state."""
    row_count: bool = True
    column_count: bool = True
    data_size: bool = True
    delimiter: bool = True
    date_columns: bool = False
    date_range: bool = False
    null_values: bool = True
    duplicates: bool = True
    distinct_values: bool = False
    unique_key: bool = False
    selected_columns: List[str] = Field(default_factory=list)


class ProfilingRequest(CamelModel):
    csv_data: CsvUpload
    options: ProfilingOptions = Field(default_factory=ProfilingOptions)


class NullStatus(str, Enum):
    CLEAN = "Clean"
    NEEDS_ATTENTION = "Needs Attention"
    CRITICAL = "Critical"


class NullAnalysis(CamelModel):
    column: str
    null_count: int
    percentage: float
    status: NullStatus


class DateAnalysis(CamelModel):
    column: str
    min_date: Optional[str] = None
    max_date: Optional[str] = None
    date_range: Optional[int] = None


class DuplicateRow(CamelModel):
    row_indices: List[int]
    data: Dict[str, Any]
    count: int


class DistinctValueCount(CamelModel):
    value: str
    count: int


class DistinctValues(CamelModel):
    column: str
    values: List[DistinctValueCount]


class UniqueKeyAnalysis(CamelModel):
    column: str
    unique_count: int
    total_count: int
    percentage: float
    is_unique_key: bool


class ProfilingResult(CamelModel):
    """
    Profiling report. Only the analyses that were requested are set;
    generated_at is always present.
    """
    row_count: Optional[int] = None
    column_count: Optional[int] = None
    data_size: Optional[str] = None
    delimiter: Optional[str] = None
    date_columns: Optional[List[str]] = None
    date_analysis: Optional[List[DateAnalysis]] = None
    null_analysis: Optional[List[NullAnalysis]] = None
    duplicate_rows: Optional[List[DuplicateRow]] = None
    distinct_values: Optional[List[DistinctValues]] = None
    unique_key_analysis: Optional[List[UniqueKeyAnalysis]] = None
    generated_at: str


def coerce_options(value: Any) -> ProfilingOptions:
    if value is None:
        return ProfilingOptions()
    return validate_as(ProfilingOptions, value, "profiling options")
