import logging

from fastapi import APIRouter

from csvlens.core.profiler import profile
from csvlens.schemas.profiling import ProfilingRequest, ProfilingResult
from csvlens.services.request_guard import enforce_limits

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/profile", response_model=ProfilingResult, response_model_exclude_unset=True)
def profile_dataset(request: ProfilingRequest):
    """
    Profile an uploaded dataset.

    Only the analyses enabled in the options appear in the response.
    """
    enforce_limits(request.csv_data)
    logger.info(
        "Profiling '%s' (%s rows)",
        request.csv_data.filename,
        request.csv_data.row_count,
    )
    return profile(request.csv_data, request.options)
