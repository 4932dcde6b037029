from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import Field, field_validator

from csvlens.core.config import settings
from csvlens.schemas.base import CamelModel, validate_as
from csvlens.schemas.dataset import CsvUpload


class TransformationType(str, Enum):
    """Rule types the cleaner knows how to apply."""
    DATE_FORMAT = "date_format"
    TIMESTAMP_FORMAT = "timestamp_format"
    NUMBER_FORMAT = "number_format"
    REMOVE_DUPLICATES = "remove_duplicates"
    SUBSET_COLUMN = "subset_column"
    REPLACE_NULLS = "replace_nulls"
    COALESCE = "coalesce"
    TEXT_MANIPULATION = "text_manipulation"

    @classmethod
    def resolve(cls, value: str) -> Optional["TransformationType"]:
        """Look up a rule type by its wire name; None for unknown names."""
        try:
            return cls(value)
        except ValueError:
            return None


class TransformationRule(CamelModel):
    """
    One cleaning step.

    type is kept as a plain string so unknown types reach the cleaner
    (and are recorded as no-ops) instead of failing validation.
    """
    id: str
    column: str
    type: str
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def default_missing_parameters(cls, v: Any) -> Any:
        # null parameters mean "use every default"
        return {} if v is None else v

    @property
    def transformation_type(self) -> Optional[TransformationType]:
        return TransformationType.resolve(self.type)


class DataCleaningRequest(CamelModel):
    csv_data: CsvUpload
    transformation_rules: List[TransformationRule] = Field(default_factory=list)
    output_delimiter: str = Field(default_factory=lambda: settings.DEFAULT_OUTPUT_DELIMITER)


class DataCleaningResult(CamelModel):
    cleaned_data: List[Dict[str, Any]]
    headers: List[str]
    applied_transformations: List[str]
    rows_removed: int
    transformation_summary: Dict[str, Dict[str, Any]]


def coerce_rules(value: Optional[Iterable[Any]]) -> List[TransformationRule]:
    if value is None:
        return []
    return [validate_as(TransformationRule, rule, "transformation rule") for rule in value]
