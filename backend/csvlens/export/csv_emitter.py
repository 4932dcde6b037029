"""
CSV emitter - writes cleaned data as delimited text.

Polars-based implementation:
- header line is the result's header list, in order
- every cell cast to Utf8; absent, null and empty cells written as empty fields
- necessary quoting, LF line endings
"""
from typing import Any, Dict, List, Optional

import polars as pl

from csvlens.core.exceptions import InvalidInputError
from csvlens.core.values import get_cell, is_blank, to_display_string
from csvlens.schemas.cleaning import DataCleaningResult

SUPPORTED_DELIMITERS = (",", ";", "|", "\t")

# Spellings clients use for a tab
TAB_ALIASES = ("\\t", "tab", "TAB")


def normalize_delimiter(delimiter: str) -> str:
    """
    Resolve a requested output delimiter.

    Raises:
        InvalidInputError: If the delimiter is not supported
    """
    if delimiter in TAB_ALIASES:
        return "\t"
    if delimiter not in SUPPORTED_DELIMITERS:
        raise InvalidInputError(f"Unsupported output delimiter: {delimiter!r}")
    return delimiter


def _cell_text(value: Any) -> Optional[str]:
    # Blank cells become nulls, which polars writes as empty fields
    return None if is_blank(value) else to_display_string(value)


def emit_csv(result: DataCleaningResult, delimiter: str = ",") -> str:
    """
    Render a cleaning result as CSV text.

    Args:
        result: Cleaning result to export
        delimiter: Output delimiter (',', ';', '|' or tab)

    Returns:
        CSV text including the header line
    """
    separator = normalize_delimiter(delimiter)
    headers: List[str] = list(dict.fromkeys(result.headers))

    columns: Dict[str, List[Optional[str]]] = {
        header: [_cell_text(get_cell(row, header)) for row in result.cleaned_data]
        for header in headers
    }
    df = pl.DataFrame(columns, schema={header: pl.Utf8 for header in headers})

    return df.write_csv(
        include_header=True,
        separator=separator,
        quote_style="necessary",
        null_value="",
        line_terminator="\n",
    )
