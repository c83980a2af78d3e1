"""
Tracking lookup business logic.

Maps a raw `tracking_orders` row to the response shape the tracking widget
renders:
- `status` falls back to "Processing"
- dates are rendered as en-US short dates (M/D/YYYY)
- sender/receiver/shipment metadata is grouped under `additional_info`
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Protocol

from core.db import StoreError

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Processing"
MISSING_ID_MESSAGE = "Missing tracking ID"
NOT_FOUND_MESSAGE = "Tracking number not found."

ADDITIONAL_INFO_FIELDS = (
    "sender_name",
    "sender_address",
    "receiver_name",
    "receiver_address",
    "weight",
    "shipment_mode",
    "carrier",
    "dispatch_date",
    "package_desc",
    "payment_mode",
    "quantity",
    "carrier_ref_no",
)


class ClientInputError(ValueError):
    pass


class TrackingLookupError(RuntimeError):
    pass


class Store(Protocol):
    async def find_by_tracking_number(self, tracking_number: str) -> dict[str, Any] | None: ...

    async def list_all(self) -> list[dict[str, Any]]: ...


def format_date(value: Any) -> str | None:
    """
    Render a date-like value as M/D/YYYY (no zero padding), or None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return value
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)


def build_tracking_response(record: dict[str, Any]) -> dict[str, Any]:
    additional_info = {name: record.get(name) for name in ADDITIONAL_INFO_FIELDS}
    additional_info["dispatch_date"] = format_date(record.get("dispatch_date"))

    return {
        "found": True,
        "tracking_number": record.get("tracking_number"),
        "status": record.get("status") or DEFAULT_STATUS,
        "origin": record.get("dispatch_location") or None,
        "destination": record.get("destination") or None,
        "estimated_delivery": format_date(record.get("delivery_date")),
        "additional_info": additional_info,
    }


async def track(tracking_id: str | None, *, store: Store) -> dict[str, Any]:
    tracking_id = (tracking_id or "").strip()
    if not tracking_id:
        raise ClientInputError(MISSING_ID_MESSAGE)

    try:
        record = await store.find_by_tracking_number(tracking_id)
    except StoreError as exc:
        raise TrackingLookupError(str(exc)) from exc

    logger.info("tracking_lookup tracking_number=%s found=%s", tracking_id, record is not None)
    if record is None:
        return {"found": False, "message": NOT_FOUND_MESSAGE}
    return build_tracking_response(record)


async def list_records(*, store: Store) -> list[dict[str, Any]]:
    return await store.list_all()
