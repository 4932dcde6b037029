"""
Null replacement rule.
"""
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep, param_str
from csvlens.core.values import ValueKind, classify, get_cell, is_blank
from csvlens.schemas.cleaning import TransformationType


def _is_replaceable(value: Any) -> bool:
    # Only the lowercase literal; 'NULL' is left for the user to target explicitly
    return is_blank(value) or (classify(value) == ValueKind.STRING and value == "null")


class ReplaceNullsStep(TransformationStep):
    """Fill blank and 'null' cells with a replacement value."""

    transformation_type = TransformationType.REPLACE_NULLS

    @property
    def name(self) -> str:
        return "Replace NULLs"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        replacement_value = param_str(self.parameters, "replacementValue", "")
        replaced_count = 0

        for row in records:
            if _is_replaceable(get_cell(row, self.column)):
                row[self.column] = replacement_value
                replaced_count += 1

        return StepResult(
            records=records,
            headers=headers,
            description=(
                f"Replaced {replaced_count} null values in column '{self.column}' "
                f"with '{replacement_value}'"
            ),
            summary={"replacedCount": replaced_count, "replacementValue": replacement_value},
        )
