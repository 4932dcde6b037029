"""
Number formatting rule: integer rounding, ceiling, floor or fixed decimals.
"""
import logging
import math
from typing import Any, Callable, Dict, List, Optional

from csvlens.cleaners.base import StepResult, TransformationStep, param_int, param_str
from csvlens.core.formatting import round_half_up
from csvlens.core.values import Number, get_cell, parse_number
from csvlens.schemas.cleaning import TransformationType

logger = logging.getLogger(__name__)

DEFAULT_OPERATION = "integer"
DEFAULT_DECIMAL_PLACES = 2
# Quantizing beyond this precision is meaningless for doubles
MAX_DECIMAL_PLACES = 15

NUMBER_OPERATIONS = ("integer", "ceiling", "floor", "decimal")


class NumberFormatStep(TransformationStep):
    """Apply a numeric operation to every numeric-coercible cell in a column."""

    transformation_type = TransformationType.NUMBER_FORMAT

    @property
    def name(self) -> str:
        return "Number Format"

    def _operation(self, operation: str) -> Optional[Callable[[Number], Number]]:
        if operation == "integer":
            return lambda n: int(math.floor(n + 0.5))
        if operation == "ceiling":
            return lambda n: int(math.ceil(n))
        if operation == "floor":
            return lambda n: int(math.floor(n))
        if operation == "decimal":
            places = param_int(self.parameters, "decimalPlaces", DEFAULT_DECIMAL_PLACES)
            if places is None or places < 0:
                places = DEFAULT_DECIMAL_PLACES
            places = min(places, MAX_DECIMAL_PLACES)
            return lambda n: round_half_up(n, places)
        return None

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        operation = param_str(self.parameters, "operation") or DEFAULT_OPERATION
        convert = self._operation(operation)
        transformed_count = 0

        if convert is None:
            logger.debug("Unknown number operation '%s' for column '%s'", operation, self.column)
        else:
            for row in records:
                number = parse_number(get_cell(row, self.column))
                if number is None:
                    continue
                row[self.column] = convert(number)
                transformed_count += 1

        return StepResult(
            records=records,
            headers=headers,
            description=(
                f"Applied {operation} operation to {transformed_count} values "
                f"in column '{self.column}'"
            ),
            summary={"transformedCount": transformed_count, "operation": operation},
        )
