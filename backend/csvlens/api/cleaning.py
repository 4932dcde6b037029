import logging
from pathlib import Path

from fastapi import APIRouter, Response

from csvlens.cleaners.catalog import get_available_transformations
from csvlens.cleaners.data_cleaner import clean
from csvlens.export.csv_emitter import emit_csv, normalize_delimiter
from csvlens.schemas.cleaning import DataCleaningRequest, DataCleaningResult
from csvlens.services.request_guard import enforce_limits

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/transformations/available")
async def get_available_transforms():
    """Get the transformation types with their parameter metadata."""
    return get_available_transformations()


@router.post("/clean", response_model=DataCleaningResult)
def clean_dataset(request: DataCleaningRequest):
    """Apply the transformation rules in order and return the cleaned data."""
    enforce_limits(request.csv_data)
    logger.info(
        "Cleaning '%s' with %s rules",
        request.csv_data.filename,
        len(request.transformation_rules),
    )
    return clean(request.csv_data, request.transformation_rules, request.output_delimiter)


@router.post("/clean/export")
def export_cleaned_dataset(request: DataCleaningRequest):
    """Apply the rules and download the cleaned data as delimited text."""
    enforce_limits(request.csv_data)
    delimiter = normalize_delimiter(request.output_delimiter)

    result = clean(request.csv_data, request.transformation_rules, delimiter)
    content = emit_csv(result, delimiter)

    filename = f"{Path(request.csv_data.filename).stem}_cleaned.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
