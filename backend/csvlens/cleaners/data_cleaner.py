"""
Transformation pipeline orchestrator.

Applies an ordered list of rules to a private copy of the dataset and
collects the audit trail: one description per rule, a summary per rule id
and the running count of removed rows.
"""
import copy
import logging
from typing import Any, Iterable, Optional

from csvlens.cleaners.rules import build_step
from csvlens.schemas.cleaning import DataCleaningResult, coerce_rules
from csvlens.schemas.dataset import coerce_dataset

logger = logging.getLogger(__name__)


class DataCleaner:
    """
    Applies transformation rules strictly in list order.

    Later rules see the output of earlier ones. There is no rollback: the
    result of the last rule is the result of the pipeline.
    """

    def __init__(self, output_delimiter: str = ","):
        """
        Args:
            output_delimiter: Delimiter for serializing the cleaned data later.
                Carried for the caller; it does not affect any rule.
        """
        self.output_delimiter = output_delimiter

    def clean(self, dataset: Any, rules: Optional[Iterable[Any]]) -> DataCleaningResult:
        """
        Clean a dataset.

        Args:
            dataset: Dataset (or raw mapping with headers and data)
            rules: TransformationRule objects or their raw mappings

        Returns:
            DataCleaningResult with the cleaned rows and audit trail

        Raises:
            InvalidInputError: If the dataset or a rule is malformed
        """
        dataset = coerce_dataset(dataset)
        rules = coerce_rules(rules)

        # Never touch the caller's rows
        records = copy.deepcopy(dataset.records)
        headers = list(dataset.headers)

        applied_transformations = []
        transformation_summary = {}
        rows_removed = 0

        logger.info("Starting data cleaning with %s rules on %s rows", len(rules), len(records))

        for rule in rules:
            step = build_step(rule)
            logger.debug("Running rule %s: %r", rule.id, step)

            result = step.apply(records, headers)

            records = result.records
            headers = result.headers
            rows_removed += result.rows_removed
            applied_transformations.append(result.description)
            transformation_summary[rule.id] = result.summary

            logger.info("Rule '%s' completed: %s", step.name, result.description)

        logger.info("Cleaning completed: %s rows kept, %s removed", len(records), rows_removed)

        return DataCleaningResult(
            cleaned_data=records,
            headers=headers,
            applied_transformations=applied_transformations,
            rows_removed=rows_removed,
            transformation_summary=transformation_summary,
        )

    def __repr__(self) -> str:
        return f"<DataCleaner: output_delimiter={self.output_delimiter!r}>"


def clean(dataset: Any, rules: Optional[Iterable[Any]], output_delimiter: str = ",") -> DataCleaningResult:
    """Apply rules to a dataset in order."""
    return DataCleaner(output_delimiter).clean(dataset, rules)
