import logging

from fastapi import APIRouter, File, UploadFile

from csvlens.ingest.csv_reader import read_csv_upload
from csvlens.schemas.dataset import CsvUpload
from csvlens.services.request_guard import check_upload_size, enforce_limits

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/upload", response_model=CsvUpload)
async def upload_csv(file: UploadFile = File(...)):
    """Parse an uploaded CSV file into headers and rows."""
    content = await file.read()
    check_upload_size(len(content))

    upload = read_csv_upload(content, filename=file.filename or "upload.csv")
    enforce_limits(upload)

    logger.info("Parsed upload '%s': %s rows", upload.filename, upload.row_count)
    return upload
