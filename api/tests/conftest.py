"""Shared test fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from core.db import StoreError
from main import app
from tracking.dependencies import get_store


class FakeStore:
    """In-memory stand-in for TrackingStore."""

    def __init__(self, rows=None, error=None):
        self.rows = list(rows or [])
        self.error = error
        self.lookups = []

    async def find_by_tracking_number(self, tracking_number):
        self.lookups.append(tracking_number)
        if self.error is not None:
            raise self.error
        for row in self.rows:
            if row["tracking_number"] == tracking_number:
                return row
        return None

    async def list_all(self):
        if self.error is not None:
            raise self.error
        return list(self.rows)


@pytest.fixture
def sample_record():
    return {
        "tracking_number": "TRK123",
        "status": None,
        "dispatch_location": "Lagos",
        "destination": "Accra",
        "dispatch_date": date(2024, 1, 5),
        "delivery_date": None,
        "sender_name": "Ada Obi",
        "sender_address": "12 Marina Rd",
        "receiver_name": "Kofi Mensah",
        "receiver_address": "4 Ring Rd",
        "weight": 2.5,
        "quantity": 1,
        "shipment_mode": "Air",
        "carrier": "DHL",
        "package_desc": "Documents",
        "payment_mode": "Prepaid",
        "carrier_ref_no": None,
    }


@pytest.fixture
def store(sample_record):
    return FakeStore(rows=[sample_record])


@pytest.fixture
def failing_store():
    return FakeStore(error=StoreError("connection refused"))


@pytest.fixture
def client_for():
    """Build a TestClient whose routes see the given store."""

    def _build(fake_store):
        app.dependency_overrides[get_store] = lambda: fake_store
        return TestClient(app, raise_server_exceptions=False)

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_for, store):
    return client_for(store)
