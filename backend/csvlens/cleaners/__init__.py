"""
Rule-based data cleaning for uploaded datasets.

Applies user-defined transformation rules in order and records an audit trail.
"""
from .data_cleaner import DataCleaner, clean
from .base import TransformationStep, StepResult
from .rules import RULE_REGISTRY, build_step

__all__ = [
    "DataCleaner",
    "clean",
    "TransformationStep",
    "StepResult",
    "RULE_REGISTRY",
    "build_step",
]
