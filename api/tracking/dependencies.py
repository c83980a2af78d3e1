"""
Tracking dependencies for FastAPI routes.
"""

from __future__ import annotations

from .repository import TrackingStore


def get_store() -> TrackingStore:
    return TrackingStore()
