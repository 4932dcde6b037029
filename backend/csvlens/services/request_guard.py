"""
Size limits applied to incoming datasets before they reach the core.

The profiler and cleaner hold the whole table in memory and copy it per
rule, so oversized requests are rejected up front.
"""
from typing import Optional

from csvlens.core.config import settings
from csvlens.schemas.dataset import Dataset


class DatasetTooLargeError(Exception):
    """Raised when a dataset exceeds the configured limits."""

    def __init__(self, message: str, limit: str, actual: int, maximum: int):
        super().__init__(message)
        self.message = message
        self.limit = limit
        self.actual = actual
        self.maximum = maximum

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "limit": self.limit,
            "actual": self.actual,
            "maximum": self.maximum,
        }


def check_upload_size(size: int, maximum: Optional[int] = None) -> None:
    maximum = settings.MAX_UPLOAD_BYTES if maximum is None else maximum
    if size > maximum:
        raise DatasetTooLargeError(
            f"Upload is {size} bytes; the limit is {maximum}",
            limit="bytes",
            actual=size,
            maximum=maximum,
        )


def enforce_limits(
    dataset: Dataset,
    max_rows: Optional[int] = None,
    max_columns: Optional[int] = None,
) -> None:
    """
    Reject datasets with too many rows or columns.

    Raises:
        DatasetTooLargeError: If a limit is exceeded
    """
    max_rows = settings.MAX_ROWS if max_rows is None else max_rows
    max_columns = settings.MAX_COLUMNS if max_columns is None else max_columns

    if dataset.row_count > max_rows:
        raise DatasetTooLargeError(
            f"Dataset has {dataset.row_count} rows; the limit is {max_rows}",
            limit="rows",
            actual=dataset.row_count,
            maximum=max_rows,
        )
    if dataset.column_count > max_columns:
        raise DatasetTooLargeError(
            f"Dataset has {dataset.column_count} columns; the limit is {max_columns}",
            limit="columns",
            actual=dataset.column_count,
            maximum=max_columns,
        )
