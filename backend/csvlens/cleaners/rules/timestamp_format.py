"""
Timestamp reformatting rule.

Accepts Unix epochs (seconds or milliseconds), DD-MM-YYYY HH:mm[:ss] and
free-form date-time text, and renders them in one of the named formats.
"""
import logging
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep, param_str
from csvlens.core.dates import DEFAULT_TIMESTAMP_FORMAT, format_timestamp, parse_timestamp
from csvlens.core.values import get_cell, is_falsy
from csvlens.schemas.cleaning import TransformationType

logger = logging.getLogger(__name__)


class TimestampFormatStep(TransformationStep):
    """Rewrite timestamps in a column using a named target format."""

    transformation_type = TransformationType.TIMESTAMP_FORMAT

    @property
    def name(self) -> str:
        return "Timestamp Format"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        target_format = param_str(self.parameters, "targetFormat") or DEFAULT_TIMESTAMP_FORMAT
        transformed_count = 0

        for row in records:
            value = get_cell(row, self.column)
            if is_falsy(value):
                continue

            parsed = parse_timestamp(value)
            if parsed is None:
                continue

            row[self.column] = format_timestamp(parsed, target_format)
            transformed_count += 1

        logger.debug("Reformatted %s timestamps in column '%s'", transformed_count, self.column)

        return StepResult(
            records=records,
            headers=headers,
            description=(
                f"Transformed {transformed_count} timestamps in column '{self.column}' "
                f"to format '{target_format}'"
            ),
            summary={"transformedCount": transformed_count, "targetFormat": target_format},
        )
