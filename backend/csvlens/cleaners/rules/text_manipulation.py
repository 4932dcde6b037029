"""
Text manipulation rule: add, remove or replace literal text.

Search text is always matched literally; regex metacharacters have no
special meaning.
"""
from typing import Any, Dict, List, Optional

from csvlens.cleaners.base import StepResult, TransformationStep, param_str
from csvlens.core.values import get_cell, is_non_empty_string
from csvlens.schemas.cleaning import TransformationType

TEXT_OPERATIONS = ("add", "remove", "replace")
TEXT_POSITIONS = ("start", "end")


class TextManipulationStep(TransformationStep):
    """Edit text cells; only cells whose value actually changes are counted."""

    transformation_type = TransformationType.TEXT_MANIPULATION

    @property
    def name(self) -> str:
        return "Text Manipulation"

    def _manipulate(self, value: str, operation: str, text: str, position: str, search_text: str) -> Optional[str]:
        if operation == "add":
            return text + value if position == "start" else value + text
        if operation == "remove":
            return value.replace(text, "") if text else value
        if operation == "replace":
            return value.replace(search_text, text) if search_text else value
        return None

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        operation = param_str(self.parameters, "operation") or "add"
        text = param_str(self.parameters, "text", "")
        position = param_str(self.parameters, "position") or "end"
        search_text = param_str(self.parameters, "searchText", "")
        transformed_count = 0

        for row in records:
            original = get_cell(row, self.column)
            if not is_non_empty_string(original):
                continue

            updated = self._manipulate(original, operation, text, position, search_text)
            if updated is not None and updated != original:
                row[self.column] = updated
                transformed_count += 1

        description = f"Applied text {operation} to {transformed_count} values in column '{self.column}'"
        if operation == "replace":
            description += f' (replaced "{search_text}" with "{text}")'

        return StepResult(
            records=records,
            headers=headers,
            description=description,
            summary={
                "transformedCount": transformed_count,
                "operation": operation,
                "text": text,
                "position": position,
                "searchText": search_text,
            },
        )
