from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.api import router as api_router
from app.core.db import SessionLocal, check_connection, create_tables
from app.core.errors import (
    BookingError,
    StorageError,
    ValidationError,
    MSG_BOOKING_NOT_FOUND,
    MSG_INTERNAL_ERROR,
    MSG_ROUTE_NOT_FOUND,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    STATUS_NOT_FOUND,
)
from app.core.seed import seed_menu
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Messages shown for request fields that fail validation
FIELD_MESSAGES = {
    "name": "Name is required",
    "phone": "Phone is required",
    "date": "Valid date is required",
    "slot_date": "Valid date is required",
    "time": "Valid time is required",
    "people": "Number of people must be between 1 and 20",
    "message": "Special requests must be at most 2000 characters",
    "status": "Invalid status",
}

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Table bookings, menu and slot availability for the cafe",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL] if settings.FRONTEND_URL else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Starting %s", settings.APP_NAME)
    check_connection()
    # In production, use Alembic migrations instead of create_tables
    if settings.ENVIRONMENT == "development":
        create_tables()
    if settings.ENVIRONMENT == "development" or settings.SEED_MENU_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_menu(db)
        finally:
            db.close()


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = loc[-1] if loc else "body"
        errors.append(
            {
                "field": field,
                "message": FIELD_MESSAGES.get(field, err.get("msg", "Invalid value")),
            }
        )
    return errors


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # an id that is not a number can match no booking
    if errors and all(tuple(e.get("loc", ())) == ("path", "booking_id") for e in errors):
        return JSONResponse(
            status_code=STATUS_NOT_FOUND, content={"error": MSG_BOOKING_NOT_FOUND}
        )
    return JSONResponse(
        status_code=STATUS_BAD_REQUEST, content={"errors": _field_errors(exc)}
    )


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    headers = None
    if isinstance(exc, StorageError):
        logger.error(
            "Error during %s %s (%s)",
            request.method,
            request.url.path,
            exc.action,
            exc_info=exc.__cause__ or exc,
        )
        if exc.retryable:
            headers = {"Retry-After": "1"}

    content = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.field_errors:
        content["errors"] = exc.field_errors
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=STATUS_NOT_FOUND, content={"error": MSG_ROUTE_NOT_FOUND}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=STATUS_INTERNAL_ERROR, content={"error": MSG_INTERNAL_ERROR}
    )


# Include API routes
app.include_router(api_router, prefix="/api")
