"""
Tracking API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from core.db import StoreError

from . import dependencies, schemas, service
from .repository import TrackingStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/track", response_model=None)
async def track(
    payload: schemas.TrackRequest | None = Body(default=None),
    store: TrackingStore = Depends(dependencies.get_store),
) -> dict | JSONResponse:
    track_id = payload.trackId if payload is not None else None
    logger.info("Received tracking request for: %s", track_id)

    try:
        return await service.track(track_id, store=store)
    except service.ClientInputError as exc:
        return JSONResponse(status_code=400, content={"found": False, "message": str(exc)})
    except service.TrackingLookupError as exc:
        logger.exception("tracking_lookup_failed tracking_number=%s", track_id)
        return JSONResponse(
            status_code=500,
            content={
                "found": False,
                "message": "Error retrieving tracking information",
                "error": str(exc),
            },
        )


@router.get("/tracking", response_model=None)
async def list_tracking(
    store: TrackingStore = Depends(dependencies.get_store),
) -> list[dict] | JSONResponse:
    try:
        return await service.list_records(store=store)
    except StoreError as exc:
        logger.exception("tracking_list_failed")
        return JSONResponse(status_code=500, content={"error": str(exc)})
