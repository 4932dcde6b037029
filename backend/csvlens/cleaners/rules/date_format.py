"""
Date reformatting rule.

Reads day-first dates (DD-MM-YYYY or DD/MM/YYYY) and rewrites them through
a YYYY/MM/DD token template. Cells that do not parse are left as they are.
"""
import logging
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep, param_str
from csvlens.core.dates import DEFAULT_DATE_FORMAT, format_date, parse_day_first_date
from csvlens.core.values import get_cell, is_non_empty_string
from csvlens.schemas.cleaning import TransformationType

logger = logging.getLogger(__name__)


class DateFormatStep(TransformationStep):
    """Rewrite day-first dates in a column using a target template."""

    transformation_type = TransformationType.DATE_FORMAT

    @property
    def name(self) -> str:
        return "Date Format"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        target_format = param_str(self.parameters, "targetFormat") or DEFAULT_DATE_FORMAT
        transformed_count = 0

        for row in records:
            value = get_cell(row, self.column)
            if not is_non_empty_string(value) or not value.strip():
                continue

            parsed = parse_day_first_date(value)
            if parsed is None:
                continue

            row[self.column] = format_date(parsed, target_format)
            transformed_count += 1

        logger.debug("Reformatted %s dates in column '%s'", transformed_count, self.column)

        return StepResult(
            records=records,
            headers=headers,
            description=(
                f"Transformed {transformed_count} dates in column '{self.column}' "
                f"to format '{target_format}'"
            ),
            summary={"transformedCount": transformed_count, "targetFormat": target_format},
        )
