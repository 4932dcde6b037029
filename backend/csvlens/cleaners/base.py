"""
Base classes and helpers for transformation steps.

Each rule type is implemented by a TransformationStep subclass that applies
itself to the working copy of the records and returns a StepResult with the
audit description and a structured summary.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from csvlens.core.values import to_display_string
from csvlens.schemas.cleaning import TransformationRule, TransformationType


@dataclass
class StepResult:
    """
    Result of applying one rule.

    Contains the records and headers after the step plus the audit trail entry.
    """
    records: List[Dict[str, Any]]
    headers: List[str]
    description: str
    summary: Dict[str, Any] = field(default_factory=dict)
    rows_removed: int = 0


class TransformationStep(ABC):
    """
    Abstract base class for all rule implementations.

    Steps may modify the rows they are given in place; the cleaner hands them
    a private copy of the dataset.
    """

    transformation_type: Optional[TransformationType] = None

    def __init__(self, rule: TransformationRule):
        self.rule = rule
        self.column = rule.column
        self.parameters: Mapping[str, Any] = rule.parameters

    @abstractmethod
    def apply(self, records: List[Dict[str, Any]], headers: List[str]) -> StepResult:
        """
        Apply this rule to the records.

        Args:
            records: Working copy of the rows
            headers: Current header list

        Returns:
            StepResult with the transformed rows and audit entry
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this rule type."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name} column={self.column!r}>"


# ---------------------------------------------------------------- parameters
#
# Parameters come straight from client JSON, so every reader tolerates
# missing keys, nulls and wrong types by falling back to the default.


def param_str(params: Mapping[str, Any], key: str, default: str = "") -> str:
    value = params.get(key)
    if isinstance(value, (str, int, float)):
        return to_display_string(value)
    return default


def param_int(params: Mapping[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = params.get(key)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def param_list(params: Mapping[str, Any], key: str) -> List[str]:
    """Read a list of column names; a comma-separated string is split."""
    value = params.get(key)
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []
