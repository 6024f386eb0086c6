# backend/cuebook/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis import RedisError
from sqlalchemy import text

from .config import settings
from .database import SessionLocal
from .redis_client import redis_client
from .routers import (
    billiard_tables,
    closed_dates,
    durations,
    operating_schedules,
    reservations,
    slots,
)
from .services.slots import InvalidInput, UpstreamFetchFailure

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Billiard Booking API")

app.include_router(slots.router)
app.include_router(reservations.router)
app.include_router(operating_schedules.router)
app.include_router(closed_dates.router)
app.include_router(billiard_tables.router)
app.include_router(durations.router)


# ── Engine errors → HTTP ─────────────────────────────────────────────────


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(UpstreamFetchFailure)
async def upstream_failure_handler(request: Request, exc: UpstreamFetchFailure):
    # Fail closed: never answer "available" when the snapshot is unknown
    logger.error(f"Upstream fetch failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Availability data is temporarily unavailable"},
    )


@app.exception_handler(RedisError)
async def redis_error_handler(request: Request, exc: RedisError):
    logger.error(f"Redis error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Cache is temporarily unavailable"},
    )


@app.get("/health")
def health():
    db = SessionLocal()
    try:
        db_ok = db.execute(text("SELECT 1")).scalar() == 1
    finally:
        db.close()

    redis_ok = None
    if redis_client is not None:
        try:
            redis_ok = bool(redis_client.ping())
        except RedisError:
            redis_ok = False

    return {"database": db_ok, "redis": redis_ok}
