import logging
import uuid
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from speakcheck import __version__
from speakcheck.api.routes.health import router as health_router
from speakcheck.api.routes.analysis import router as analysis_router
from speakcheck.core.lifespan import lifespan
from speakcheck.core.config import settings
from speakcheck.core.logging_config import setup_logging, request_id_var
from speakcheck.core.exceptions import (
    SpeakCheckException,
    RateLimitExceededError,
    TranscriptionError,
)
from speakcheck.models.analysis import ErrorResponse

setup_logging(
    log_level=settings.log_level,
    log_file=settings.log_file,
    max_file_size=settings.log_max_size_mb * 1024 * 1024,
    backup_count=settings.log_backup_count,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SpeakCheck API",
    description="Сервис оценки качества речи по аудиозаписи",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


def error_response(status_code: int, error: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


# Exception handlers - specific handlers before general ones

@app.exception_handler(RateLimitExceededError)
async def rate_limit_handler(request: Request, exc: RateLimitExceededError):
    return error_response(
        exc.status_code,
        exc.detail,
        headers={"Retry-After": str(exc.retry_after)},
    )


@app.exception_handler(TranscriptionError)
async def transcription_error_handler(request: Request, exc: TranscriptionError):
    logger.error(f"Transcription error: {exc.detail}")
    return error_response(exc.status_code, exc.detail, exc.details)


@app.exception_handler(SpeakCheckException)
async def speakcheck_exception_handler(request: Request, exc: SpeakCheckException):
    logger.warning(f"{exc.__class__.__name__}: {exc.detail}")
    return error_response(exc.status_code, exc.detail, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error: {exc.errors()}")
    return error_response(
        422,
        "Invalid request",
        str(exc.errors()),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Server analysis failed",
        str(exc),
    )

# CORS: фронтенд в режиме разработки (Vite) и сам сервер
allow_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    f"http://localhost:{settings.port}",
    f"http://127.0.0.1:{settings.port}",
]
if settings.log_level.upper() == "DEBUG":
    allow_origins.append("*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id_middleware(request: Request, call_next):
    """Добавляет уникальный Request ID для каждого запроса"""
    request_id = str(uuid.uuid4())
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(health_router)
app.include_router(analysis_router)

# Собранный фронтенд (опционально); монтируется последним, после API
if settings.static_dir:
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static files from {static_dir}")
    else:
        logger.warning(f"STATIC_DIR {static_dir} does not exist, static files disabled")
