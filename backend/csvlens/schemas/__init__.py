from csvlens.schemas.dataset import Dataset, CsvUpload, coerce_dataset
from csvlens.schemas.profiling import (
    ProfilingOptions,
    ProfilingRequest,
    ProfilingResult,
    NullAnalysis,
    NullStatus,
    DateAnalysis,
    DuplicateRow,
    DistinctValueCount,
    DistinctValues,
    UniqueKeyAnalysis,
    coerce_options,
)
from csvlens.schemas.cleaning import (
    TransformationType,
    TransformationRule,
    DataCleaningRequest,
    DataCleaningResult,
    coerce_rules,
)

__all__ = [
    "Dataset",
    "CsvUpload",
    "coerce_dataset",
    "ProfilingOptions",
    "ProfilingRequest",
    "ProfilingResult",
    "NullAnalysis",
    "NullStatus",
    "DateAnalysis",
    "DuplicateRow",
    "DistinctValueCount",
    "DistinctValues",
    "UniqueKeyAnalysis",
    "coerce_options",
    "TransformationType",
    "TransformationRule",
    "DataCleaningRequest",
    "DataCleaningResult",
    "coerce_rules",
]
