from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep


class UnknownTransformationStep(TransformationStep):
    """Stand-in for rule types the cleaner does not recognise. Changes nothing."""

    @property
    def name(self) -> str:
        return f"Unknown ({self.rule.type})"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        return StepResult(
            records=records,
            headers=headers,
            description=f"Unknown transformation type: {self.rule.type}",
            summary={},
        )
