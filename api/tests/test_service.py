"""Unit tests for tracking/service.py."""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

import pytest

from core.db import StoreError
from tracking import service


class TestFormatDate:
    def test_none_and_empty(self):
        assert service.format_date(None) is None
        assert service.format_date("") is None

    def test_date_without_zero_padding(self):
        assert service.format_date(date(2024, 1, 5)) == "1/5/2024"

    def test_datetime_uses_its_calendar_date(self):
        assert service.format_date(datetime(2023, 12, 31, 23, 59)) == "12/31/2023"
        assert service.format_date(datetime(2024, 11, 20, 8, 0, tzinfo=timezone.utc)) == "11/20/2024"

    def test_iso_strings(self):
        assert service.format_date("2024-01-05") == "1/5/2024"
        assert service.format_date("2024-03-15T10:30:00") == "3/15/2024"

    def test_unparseable_string_passes_through(self):
        assert service.format_date("next week") == "next week"


class TestBuildTrackingResponse:
    def test_scenario_trk123(self, sample_record):
        result = service.build_tracking_response(sample_record)
        assert result["found"] is True
        assert result["tracking_number"] == "TRK123"
        assert result["status"] == "Processing"
        assert result["estimated_delivery"] is None
        assert result["additional_info"]["dispatch_date"] == "1/5/2024"

    def test_top_level_mapping(self, sample_record):
        sample_record["delivery_date"] = date(2024, 2, 10)
        result = service.build_tracking_response(sample_record)
        assert result["origin"] == "Lagos"
        assert result["destination"] == "Accra"
        assert result["estimated_delivery"] == "2/10/2024"

    def test_status_passes_through(self, sample_record):
        sample_record["status"] = "In Transit"
        assert service.build_tracking_response(sample_record)["status"] == "In Transit"

    def test_empty_status_defaults(self, sample_record):
        sample_record["status"] = ""
        assert service.build_tracking_response(sample_record)["status"] == "Processing"

    def test_missing_fields_are_null(self):
        result = service.build_tracking_response({"tracking_number": "X1"})
        assert result["origin"] is None
        assert result["destination"] is None
        assert set(result["additional_info"]) == set(service.ADDITIONAL_INFO_FIELDS)
        assert all(value is None for value in result["additional_info"].values())

    def test_additional_info_passes_values_unchanged(self, sample_record):
        info = service.build_tracking_response(sample_record)["additional_info"]
        assert info["weight"] == 2.5
        assert info["quantity"] == 1
        assert info["carrier"] == "DHL"
        assert info["carrier_ref_no"] is None


class TestTrack:
    @pytest.mark.asyncio
    async def test_found(self, store):
        result = await service.track("TRK123", store=store)
        assert result["found"] is True
        assert result["tracking_number"] == "TRK123"

    @pytest.mark.asyncio
    async def test_strips_whitespace(self, store):
        result = await service.track("  TRK123 ", store=store)
        assert result["found"] is True
        assert store.lookups == ["TRK123"]

    @pytest.mark.asyncio
    async def test_not_found(self, store):
        result = await service.track("NOPE", store=store)
        assert result == {"found": False, "message": "Tracking number not found."}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tracking_id", [None, "", "   "])
    async def test_missing_id_never_queries(self, tracking_id):
        store = AsyncMock()
        with pytest.raises(service.ClientInputError, match="Missing tracking ID"):
            await service.track(tracking_id, store=store)
        store.find_by_tracking_number.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_error_is_not_masked(self, failing_store):
        with pytest.raises(service.TrackingLookupError, match="connection refused") as excinfo:
            await service.track("TRK123", store=failing_store)
        assert isinstance(excinfo.value.__cause__, StoreError)


class TestListRecords:
    @pytest.mark.asyncio
    async def test_returns_rows(self, store, sample_record):
        assert await service.list_records(store=store) == [sample_record]

    @pytest.mark.asyncio
    async def test_store_error_propagates(self, failing_store):
        with pytest.raises(StoreError):
            await service.list_records(store=failing_store)
