"""
Dataset profiling engine - computes data-quality metrics over an uploaded table.

Every analysis is independent and only runs when its option is enabled.
The profiler never mutates the dataset it is given.
"""
import logging
import math
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from csvlens.core.dates import is_date_like, parse_date_like
from csvlens.core.formatting import canonical_row, format_bytes, payload_size, round_half_up
from csvlens.core.values import (
    ValueKind,
    classify,
    get_cell,
    is_blank,
    is_falsy,
    is_null_like,
    to_display_string,
)
from csvlens.schemas.dataset import CsvUpload, Dataset, coerce_dataset
from csvlens.schemas.profiling import (
    DateAnalysis,
    DistinctValueCount,
    DistinctValues,
    DuplicateRow,
    NullAnalysis,
    NullStatus,
    ProfilingResult,
    UniqueKeyAnalysis,
    coerce_options,
)

logger = logging.getLogger(__name__)

# Date detection only looks at the first rows of each column
DATE_SAMPLE_SIZE = 10
# Share of sampled values that must look like dates
DATE_LIKE_THRESHOLD = 0.5
# Column names containing these are identifier-like and never date columns
NON_DATE_NAME_FRAGMENTS = ("id", "code", "number", "count")

DEFAULT_DELIMITER = ","

# Null percentage at or above which a column is Critical
CRITICAL_NULL_PERCENTAGE = 10.0

SECONDS_PER_DAY = 24 * 60 * 60


def _timestamp_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DatasetProfiler:
    """Profiles one dataset. Holds no state beyond the dataset itself."""

    def __init__(self, dataset: Any):
        self.dataset: Dataset = coerce_dataset(dataset)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self.dataset.records

    @property
    def headers(self) -> List[str]:
        return self.dataset.headers

    def profile(self, options: Optional[Any] = None) -> ProfilingResult:
        """
        Run the enabled analyses and assemble the report.

        Args:
            options: ProfilingOptions (or its raw mapping form); None uses defaults

        Returns:
            ProfilingResult with one field set per enabled analysis
        """
        options = coerce_options(options)
        result = ProfilingResult(generated_at=_timestamp_now())

        if options.row_count:
            result.row_count = self.dataset.row_count

        if options.column_count:
            result.column_count = self.dataset.column_count

        if options.data_size:
            result.data_size = self.estimate_size()

        if options.delimiter:
            result.delimiter = self.detect_delimiter()

        if options.date_columns:
            result.date_columns = self.detect_date_columns()

        if options.date_range:
            date_columns = result.date_columns
            if date_columns is None:
                date_columns = self.detect_date_columns()
            result.date_analysis = self.analyze_date_columns(date_columns)

        if options.null_values:
            result.null_analysis = self.analyze_null_values()

        if options.duplicates:
            result.duplicate_rows = self.find_duplicate_rows()

        if options.distinct_values and options.selected_columns:
            result.distinct_values = self.analyze_distinct_values(options.selected_columns)

        if options.unique_key:
            result.unique_key_analysis = self.analyze_unique_keys()

        logger.info(
            "Profiled %s rows x %s columns",
            self.dataset.row_count,
            self.dataset.column_count,
        )
        return result

    def estimate_size(self) -> str:
        """Size of the records' compact JSON form, in human-readable units."""
        return format_bytes(payload_size(self.records))

    def detect_delimiter(self) -> str:
        """
        Delimiter of the source file.

        The core only sees parsed rows, so this is whatever the CSV reader
        recorded at upload time, or a comma.
        """
        if isinstance(self.dataset, CsvUpload) and self.dataset.delimiter:
            return self.dataset.delimiter
        return DEFAULT_DELIMITER

    def detect_date_columns(self) -> List[str]:
        """
        Flag columns whose sampled values mostly look like dates.

        Identifier-like column names are skipped, and a column with no
        sampled rows never qualifies.
        """
        date_columns = []
        sample = self.records[:DATE_SAMPLE_SIZE]
        if not sample:
            return date_columns

        for header in self.headers:
            header_lower = header.lower()
            if any(fragment in header_lower for fragment in NON_DATE_NAME_FRAGMENTS):
                continue

            date_count = 0
            for row in sample:
                value = get_cell(row, header)
                if not is_falsy(value) and is_date_like(to_display_string(value)):
                    date_count += 1

            if date_count / len(sample) > DATE_LIKE_THRESHOLD:
                date_columns.append(header)

        logger.debug("Detected date columns: %s", date_columns)
        return date_columns

    def analyze_date_columns(self, columns: List[str]) -> List[DateAnalysis]:
        """Min date, max date and day span for each column."""
        analyses = []

        for column in columns:
            dates = []
            for row in self.records:
                value = get_cell(row, column)
                if classify(value) != ValueKind.STRING:
                    continue
                parsed = parse_date_like(value)
                if parsed is not None:
                    dates.append(parsed)

            if not dates:
                analyses.append(DateAnalysis(column=column, min_date=None, max_date=None, date_range=None))
                continue

            dates.sort()
            min_date, max_date = dates[0], dates[-1]
            span = math.ceil((max_date - min_date).total_seconds() / SECONDS_PER_DAY)

            analyses.append(DateAnalysis(
                column=column,
                min_date=min_date.date().isoformat(),
                max_date=max_date.date().isoformat(),
                date_range=span,
            ))

        return analyses

    def analyze_null_values(self) -> List[NullAnalysis]:
        """Count null-like cells per column and grade the column."""
        total = self.dataset.row_count
        analyses = []

        for column in self.headers:
            null_count = sum(1 for row in self.records if is_null_like(get_cell(row, column)))
            percentage = (null_count / total) * 100 if total > 0 else 0.0

            if percentage == 0:
                status = NullStatus.CLEAN
            elif percentage < CRITICAL_NULL_PERCENTAGE:
                status = NullStatus.NEEDS_ATTENTION
            else:
                status = NullStatus.CRITICAL

            analyses.append(NullAnalysis(
                column=column,
                null_count=null_count,
                percentage=round_half_up(percentage, 2),
                status=status,
            ))

        return analyses

    def find_duplicate_rows(self) -> List[DuplicateRow]:
        """Group identical rows; report every group with more than one member."""
        groups: Dict[str, List[int]] = defaultdict(list)
        for index, row in enumerate(self.records):
            groups[canonical_row(row)].append(index)

        duplicates = []
        for indices in groups.values():
            if len(indices) > 1:
                duplicates.append(DuplicateRow(
                    row_indices=indices,
                    data=dict(self.records[indices[0]]),
                    count=len(indices),
                ))

        logger.debug("Found %s duplicate row groups", len(duplicates))
        return duplicates

    def analyze_distinct_values(self, columns: List[str]) -> List[DistinctValues]:
        """
        Frequency of each value in the selected columns, most frequent first.

        Blank cells are counted under 'NULL'; ties keep first-seen order.
        """
        analyses = []

        for column in columns:
            counts: Dict[str, int] = {}
            for row in self.records:
                value = get_cell(row, column)
                key = "NULL" if is_blank(value) else to_display_string(value)
                counts[key] = counts.get(key, 0) + 1

            ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
            analyses.append(DistinctValues(
                column=column,
                values=[DistinctValueCount(value=value, count=count) for value, count in ordered],
            ))

        return analyses

    def analyze_unique_keys(self) -> List[UniqueKeyAnalysis]:
        """A column is a unique key only when every row holds a distinct non-blank value."""
        total = self.dataset.row_count
        analyses = []

        for column in self.headers:
            unique_values = {
                to_display_string(value)
                for value in (get_cell(row, column) for row in self.records)
                if not is_blank(value)
            }
            unique_count = len(unique_values)
            percentage = (unique_count / total) * 100 if total > 0 else 0.0

            analyses.append(UniqueKeyAnalysis(
                column=column,
                unique_count=unique_count,
                total_count=total,
                percentage=round_half_up(percentage, 2),
                is_unique_key=total > 0 and unique_count == total,
            ))

        return analyses


def profile(dataset: Any, options: Optional[Any] = None) -> ProfilingResult:
    """Profile a dataset with the given options."""
    return DatasetProfiler(dataset).profile(options)
