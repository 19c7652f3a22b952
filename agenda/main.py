"""FastAPI application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agenda.api import appointments, availability, blocks, closures, dashboard, time_slots
from agenda.config import settings
from agenda.database import close_db, get_storage, init_db
from agenda.errors import (
    BookingError,
    DateClosed,
    DuplicateSlot,
    NotFound,
    SlotBlocked,
    SlotInPast,
    SlotTaken,
    StoreUnavailable,
    ValidationError,
)
from agenda.services import catalog_service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    SlotTaken: status.HTTP_409_CONFLICT,
    SlotBlocked: status.HTTP_409_CONFLICT,
    SlotInPast: status.HTTP_409_CONFLICT,
    DateClosed: status.HTTP_409_CONFLICT,
    DuplicateSlot: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the default catalog on startup."""
    if settings.STORAGE_BACKEND != "memory":
        await init_db()
        logger.info("Database initialized")
    if settings.SEED_DEFAULT_TIME_SLOTS:
        await catalog_service.seed_default_slots(get_storage(), settings.DEFAULT_TIME_SLOTS)

    yield

    await close_db()
    logger.info("Shutting down")


app = FastAPI(title="Agenda API", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same shape as field validation errors."""
    logger.warning(f"Validation error: {exc.errors()}")
    fields = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields[".".join(loc) or "body"] = error.get("msg", "Invalid value")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationError(fields).to_dict(),
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error(f"❌ Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    """Business rejections and bad input, reported back to the caller."""
    status_code = STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} rejected: {exc.__class__.__name__}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Routers
app.include_router(appointments.router)
app.include_router(availability.router)
app.include_router(closures.router)
app.include_router(blocks.router)
app.include_router(time_slots.router)
app.include_router(dashboard.router)


@app.get("/api/health")
async def health_check():
    """API health check"""
    return JSONResponse({"status": "ok"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
