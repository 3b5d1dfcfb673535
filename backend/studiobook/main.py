import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis import Redis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import settings
from .database import engine, get_db
from .models import Base
from .redis_client import get_redis
from .routers import availability, bookings
from .schemas.common import ErrorResponse
from .services.errors import BookingError
from .services.reminder_checker import reminder_checker_loop

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.create_tables:
        Base.metadata.create_all(bind=engine)

    reminder_task = None
    if settings.reminders_enabled:
        reminder_task = asyncio.create_task(reminder_checker_loop())

    yield

    if reminder_task:
        reminder_task.cancel()
        try:
            await reminder_task
        except asyncio.CancelledError:
            pass


app = FastAPI(title="Studio Booking API", lifespan=lifespan)


# ===== Error mapping =====

@app.exception_handler(BookingError)
async def booking_error_handler(_request: Request, exc: BookingError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    details = [
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    missing = any(err["type"] == "missing" for err in exc.errors())
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Please provide all required fields" if missing else "Invalid request data",
            details=details,
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(exclude_none=True),
    )


# ===== Routers =====

app.include_router(availability.router, prefix=settings.api_prefix)
app.include_router(bookings.router, prefix=settings.api_prefix)


@app.get("/health")
def health(db: Session = Depends(get_db), redis: Redis = Depends(get_redis)):
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        db_ok = False

    try:
        redis_ok = bool(redis.ping())
    except RedisError:
        logger.warning("Redis health check failed")
        redis_ok = False

    return {"database": db_ok, "redis": redis_ok}
