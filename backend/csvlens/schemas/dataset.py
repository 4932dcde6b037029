from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from csvlens.schemas.base import CamelModel, validate_as

SCALAR_TYPES = (str, int, float, bool)


class Dataset(CamelModel):
    """
    Parsed tabular data: ordered column names plus ordered rows.

    Rows may omit columns listed in headers; a missing column reads as absent.
    """
    headers: List[str]
    records: List[Dict[str, Any]] = Field(alias="data")

    @field_validator("records")
    @classmethod
    def check_scalar_cells(cls, v: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        for index, row in enumerate(v):
            for column, value in row.items():
                if value is not None and not isinstance(value, SCALAR_TYPES):
                    raise ValueError(
                        f"row {index}, column '{column}': unsupported cell type {type(value).__name__}"
                    )
        return v

    @property
    def row_count(self) -> int:
        return len(self.records)

    @property
    def column_count(self) -> int:
        return len(self.headers)


class CsvUpload(Dataset):
    """A dataset as uploaded by a client, with its file name."""
    filename: str
    # Delimiter detected when the file was parsed server side, if it was
    delimiter: Optional[str] = None


def coerce_dataset(value: Any) -> Dataset:
    """Accept a Dataset (or subclass) or a raw mapping with headers and data."""
    if isinstance(value, Dataset):
        return value
    return validate_as(Dataset, value, "dataset")
