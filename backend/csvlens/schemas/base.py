"""
Shared pydantic configuration for request/response schemas.

Wire names are camelCase (csvData, selectedColumns, rowIndices, ...);
Python code uses snake_case attribute names and either form is accepted
on input.
"""
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from csvlens.core.exceptions import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Wire form: camelCase keys, fields that were never set left out."""
        return self.model_dump(by_alias=True, exclude_unset=True)


def validate_as(model: Type[ModelT], value: Any, what: str) -> ModelT:
    """
    Validate a raw value into a schema model.

    Raises:
        InvalidInputError: If the value does not have the model's shape
    """
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid {what}: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False, include_context=False),
        ) from e
