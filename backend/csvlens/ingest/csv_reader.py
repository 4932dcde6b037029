"""
CSV upload reader - turns raw CSV bytes into a CsvUpload.

Every cell is read as text; typing is left to the profiler and cleaning
rules. The detected delimiter is recorded on the upload so profiling can
report it.
"""
import csv
import io
import logging
from typing import Union

import polars as pl

from csvlens.core.exceptions import InvalidInputError
from csvlens.schemas.dataset import CsvUpload

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = ",;|\t"
SNIFF_SAMPLE_CHARS = 64 * 1024


def sniff_delimiter(text: str) -> str:
    """
    Guess the delimiter from the start of the file.

    Falls back to whichever candidate appears most often in the header line,
    and to a comma when none does.
    """
    sample = text[:SNIFF_SAMPLE_CHARS]
    try:
        return csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        pass

    first_line = sample.splitlines()[0] if sample else ""
    counts = {d: first_line.count(d) for d in CANDIDATE_DELIMITERS}
    best = max(counts, key=counts.get)
    return best if counts[best] > 0 else ","


def read_csv_upload(content: Union[bytes, str], filename: str = "upload.csv") -> CsvUpload:
    """
    Parse CSV content into a CsvUpload.

    Args:
        content: Raw file bytes (UTF-8, BOM tolerated) or decoded text
        filename: Original file name

    Returns:
        CsvUpload with headers, string-valued rows and the detected delimiter

    Raises:
        InvalidInputError: If the content is empty or cannot be parsed
    """
    if isinstance(content, bytes):
        text = content.decode("utf-8-sig", errors="replace")
    else:
        text = content.lstrip("\ufeff")

    if not text.strip():
        raise InvalidInputError(f"File '{filename}' is empty")

    delimiter = sniff_delimiter(text)

    try:
        df = pl.read_csv(
            io.BytesIO(text.encode("utf-8")),
            separator=delimiter,
            infer_schema_length=0,  # keep every column as text
            missing_utf8_is_empty_string=True,
            truncate_ragged_lines=True,
        )
    except (pl.exceptions.NoDataError, pl.exceptions.ComputeError) as e:
        raise InvalidInputError(f"Could not parse '{filename}' as CSV: {e}") from e

    logger.info(
        "Loaded %s rows x %s columns from '%s' (delimiter %r)",
        df.height,
        df.width,
        filename,
        delimiter,
    )

    return CsvUpload(
        filename=filename,
        headers=df.columns,
        data=df.to_dicts(),
        delimiter=delimiter,
    )
