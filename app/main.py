"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.middleware import RequestIdMiddleware, get_request_id
from app.core.logging import logger
from app.core.exceptions import AppException
from app.schemas.error import ErrorResponse, ErrorDetail, ErrorCode, ERROR_CODE_TO_HTTP_STATUS
from app.db.database import init_db, close_db

from app.api import health, reviews, chat, auth


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Biashara Reviews API")

    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        # Keep serving; requests touching the database will fail with 503
        logger.error(f"Failed to initialize database: {str(e)}", exc_info=True)

    yield

    logger.info("Shutting down Biashara Reviews API")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Business reviews, moderation and owner chat for the Biashara mobile app",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, request_id: str, detail: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(request_id=request_id, error=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom application exceptions.

    Returns standardized error response with proper HTTP status code.
    """
    request_id = get_request_id()

    logger.warning(
        f"Application exception: {exc.error_code.value}",
        extra={
            "request_id": request_id,
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": exc.details,
        },
    )

    return _error_response(
        ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        request_id,
        ErrorDetail(code=exc.error_code, message=exc.message, details=exc.details or None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request schema validation errors as INVALID_ARGUMENT (422).
    """
    request_id = get_request_id()

    error_details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
    }

    logger.warning(
        "Validation error",
        extra={"request_id": request_id, "errors": error_details},
    )

    return _error_response(
        ERROR_CODE_TO_HTTP_STATUS[ErrorCode.INVALID_ARGUMENT],
        request_id,
        ErrorDetail(
            code=ErrorCode.INVALID_ARGUMENT,
            message="Request validation failed",
            details=error_details,
        ),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle all uncaught exceptions as INTERNAL (500).
    """
    request_id = get_request_id()

    logger.error(
        f"Uncaught exception: {str(exc)}",
        extra={"request_id": request_id, "exception_type": type(exc).__name__},
        exc_info=True,
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id,
        ErrorDetail(
            code=ErrorCode.INTERNAL,
            message="Internal server error",
            details={"error": str(exc)} if settings.DEBUG else None,
        ),
    )


app.include_router(health.router)
app.include_router(reviews.router)
app.include_router(chat.router)
app.include_router(auth.router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
