"""
Pydantic schemas for tracking endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class TrackRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    trackId: str | None = None

    @field_validator("trackId", mode="before")
    @classmethod
    def _falsy_is_missing(cls, value: Any) -> Any:
        # 0, false and "" count as no tracking ID at all.
        return value if value else None
