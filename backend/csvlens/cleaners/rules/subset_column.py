"""
Substring extraction rule.
"""
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep, param_int
from csvlens.core.values import get_cell, is_non_empty_string
from csvlens.schemas.cleaning import TransformationType


class SubsetColumnStep(TransformationStep):
    """
    Keep `length` characters of each text cell starting at `startIndex`.

    A missing or non-positive length keeps everything to the end.
    """

    transformation_type = TransformationType.SUBSET_COLUMN

    @property
    def name(self) -> str:
        return "Subset Column"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        start_index = param_int(self.parameters, "startIndex", 0)
        length = param_int(self.parameters, "length")
        start = max(start_index, 0)
        end = start + length if length and length > 0 else None
        transformed_count = 0

        for row in records:
            value = get_cell(row, self.column)
            if not is_non_empty_string(value):
                continue
            row[self.column] = value[start:end]
            transformed_count += 1

        return StepResult(
            records=records,
            headers=headers,
            description=f"Extracted substring from {transformed_count} values in column '{self.column}'",
            summary={"transformedCount": transformed_count, "startIndex": start_index, "length": length},
        )
