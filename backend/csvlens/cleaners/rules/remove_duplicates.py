"""
Duplicate row removal. The first occurrence of each row is kept.
"""
import logging
from typing import Any, Dict, List

from csvlens.cleaners.base import StepResult, TransformationStep
from csvlens.core.formatting import canonical_row
from csvlens.schemas.cleaning import TransformationType

logger = logging.getLogger(__name__)


class RemoveDuplicatesStep(TransformationStep):
    """Drop every row identical to an earlier row. The column is ignored."""

    transformation_type = TransformationType.REMOVE_DUPLICATES

    @property
    def name(self) -> str:
        return "Remove Duplicates"

    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        seen = set()
        unique_rows = []
        duplicate_count = 0

        for row in records:
            key = canonical_row(row)
            if key in seen:
                duplicate_count += 1
                continue
            seen.add(key)
            unique_rows.append(row)

        if duplicate_count:
            logger.info("Removed %s duplicate rows", duplicate_count)

        return StepResult(
            records=unique_rows,
            headers=headers,
            rows_removed=duplicate_count,
            description=f"Removed {duplicate_count} duplicate rows",
            summary={"duplicateCount": duplicate_count, "uniqueRows": len(unique_rows)},
        )
