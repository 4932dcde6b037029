"""
Rule implementations, one module per transformation type.
"""
from typing import Dict, Type

from csvlens.cleaners.base import TransformationStep
from csvlens.cleaners.rules.coalesce import CoalesceStep
from csvlens.cleaners.rules.date_format import DateFormatStep
from csvlens.cleaners.rules.number_format import NumberFormatStep
from csvlens.cleaners.rules.remove_duplicates import RemoveDuplicatesStep
from csvlens.cleaners.rules.replace_nulls import ReplaceNullsStep
from csvlens.cleaners.rules.subset_column import SubsetColumnStep
from csvlens.cleaners.rules.text_manipulation import TextManipulationStep
from csvlens.cleaners.rules.timestamp_format import TimestampFormatStep
from csvlens.cleaners.rules.unknown import UnknownTransformationStep
from csvlens.schemas.cleaning import TransformationRule, TransformationType

RULE_REGISTRY: Dict[TransformationType, Type[TransformationStep]] = {
    step.transformation_type: step
    for step in (
        DateFormatStep,
        TimestampFormatStep,
        NumberFormatStep,
        RemoveDuplicatesStep,
        SubsetColumnStep,
        ReplaceNullsStep,
        CoalesceStep,
        TextManipulationStep,
    )
}

_unregistered = set(TransformationType) - set(RULE_REGISTRY)
if _unregistered:
    raise RuntimeError(f"No step registered for transformation types: {sorted(t.value for t in _unregistered)}")


def build_step(rule: TransformationRule) -> TransformationStep:
    """Instantiate the step for a rule; unknown types get a no-op step."""
    rule_type = rule.transformation_type
    if rule_type is None:
        return UnknownTransformationStep(rule)
    return RULE_REGISTRY[rule_type](rule)


__all__ = [
    "RULE_REGISTRY",
    "build_step",
    "CoalesceStep",
    "DateFormatStep",
    "NumberFormatStep",
    "RemoveDuplicatesStep",
    "ReplaceNullsStep",
    "SubsetColumnStep",
    "TextManipulationStep",
    "TimestampFormatStep",
    "UnknownTransformationStep",
]
