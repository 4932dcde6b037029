from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from csvlens.core.config import settings
from csvlens.core.exceptions import InvalidInputError
from csvlens.core.logging_config import configure_logging
from csvlens.services.request_guard import DatasetTooLargeError
from csvlens.api import health, uploads, profiling, cleaning

logger = configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix=settings.API_V1_PREFIX, tags=["health"])
app.include_router(uploads.router, prefix=settings.API_V1_PREFIX, tags=["uploads"])
app.include_router(profiling.router, prefix=settings.API_V1_PREFIX, tags=["profiling"])
app.include_router(cleaning.router, prefix=settings.API_V1_PREFIX, tags=["cleaning"])


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning("Invalid input on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=400, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request data on %s", request.url.path)
    # ctx may hold exception instances
    errors = [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"message": "Invalid request data", "errors": errors}),
    )


@app.exception_handler(DatasetTooLargeError)
async def too_large_handler(request: Request, exc: DatasetTooLargeError):
    logger.warning("Rejected oversized dataset on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=413, content=exc.to_dict())


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }
