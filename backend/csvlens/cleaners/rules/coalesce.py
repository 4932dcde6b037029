"""
Coalesce rule: fill empty cells from fallback columns, then from a default.
"""
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep, param_list, param_str
from csvlens.core.values import get_cell, is_falsy
from csvlens.schemas.cleaning import TransformationType


class CoalesceStep(TransformationStep):
    """
    For each row whose target cell is empty, copy the first non-empty value
    found in `fallbackColumns` (in order). If none has one and `defaultValue`
    is non-empty, use the default.
    """

    transformation_type = TransformationType.COALESCE

    @property
    def name(self) -> str:
        return "Coalesce"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        fallback_columns = param_list(self.parameters, "fallbackColumns")
        default_value = param_str(self.parameters, "defaultValue", "")
        coalesced_count = 0

        for row in records:
            if not is_falsy(get_cell(row, self.column)):
                continue

            for fallback in fallback_columns:
                candidate = get_cell(row, fallback)
                if not is_falsy(candidate):
                    row[self.column] = candidate
                    coalesced_count += 1
                    break
            else:
                if default_value != "":
                    row[self.column] = default_value
                    coalesced_count += 1

        description = f"Coalesced {coalesced_count} values in column '{self.column}' using fallback columns"
        if default_value:
            description += f" and default value '{default_value}'"

        return StepResult(
            records=records,
            headers=headers,
            description=description,
            summary={
                "coalescedCount": coalesced_count,
                "fallbackColumns": fallback_columns,
                "defaultValue": default_value,
            },
        )
