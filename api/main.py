from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, db
from core.logging_config import setup_logging
from tracking import router as tracking_router
from tracking.repository import TrackingStore

logger = logging.getLogger(__name__)


async def probe_database() -> bool:
    """
    Best-effort startup check. Failures are logged, never raised.
    """
    try:
        await db.init_pool()
        store = TrackingStore()
        await store.ping()
        logger.info("Database connected successfully")
        count = await store.count()
        logger.info("Found %s tracking records in database", count)
    except Exception:
        logger.exception("Database connection or query error")
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.log_level())
    app.state.shutdown_failed = False
    # Runs beside the server: a stalled database must not hold up startup.
    app.state.probe_task = asyncio.create_task(probe_database())
    try:
        yield
    finally:
        app.state.probe_task.cancel()
        with suppress(asyncio.CancelledError):
            await app.state.probe_task
        try:
            await db.close_pool()
            logger.info("Database pool has ended")
        except Exception:
            logger.exception("Error ending database pool")
            app.state.shutdown_failed = True


app = FastAPI(title="Transcend Logistics Tracking API", lifespan=lifespan)


# Registered before CORSMiddleware so CORS headers also reach these 500s.
@app.middleware("http")
async def catch_all_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("unhandled_error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Something went wrong!", "message": str(exc)},
        )


# Only the known tracking widget frontends may call this API from a browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(tracking_router.router, tags=["tracking"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request errors=%s", exc.errors())
    return JSONResponse(status_code=400, content={"found": False, "message": "Invalid request body"})


def utc_timestamp() -> str:
    """
    UTC time as 2024-01-05T10:30:00.123Z (millisecond precision).
    """
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@app.get("/")
def root() -> dict:
    # Static status: this route must answer even when the database is down.
    return {
        "message": "Transcend Logistics Backend is running!",
        "timestamp": utc_timestamp(),
        "databaseStatus": "Connected",
    }


def serve() -> None:
    setup_logging(config.log_level())
    logger.info("Server running on port %s", config.port())
    try:
        uvicorn.run(app, host=config.host(), port=config.port())
    except KeyboardInterrupt:
        # Newer uvicorn re-raises SIGINT once the lifespan shutdown has run.
        pass
    sys.exit(1 if getattr(app.state, "shutdown_failed", False) else 0)


if __name__ == "__main__":
    serve()
