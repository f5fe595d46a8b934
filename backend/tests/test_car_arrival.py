"""
PaddyHub Backend: Car Arrival Tests
===================================

What we test:
    ✅ Empty board before the first save
    ✅ Save then read back
    ✅ Two saves leave exactly one row holding the second payload
    ✅ Non-array history/logs rejected with 400, board unchanged
    ✅ Store failures surface as 500 with the route's message
"""

import pytest
from sqlalchemy import func, select

from paddyhub.exceptions import StoreError
from paddyhub.models.car_arrival import CarArrival
from paddyhub.services.car_arrival_service import CarArrivalService


class TestCarArrivalRoutes:

    @pytest.mark.asyncio
    async def test_get_before_any_save_returns_empty_defaults(self, test_client):
        response = await test_client.get("/carArrival")
        assert response.status_code == 200
        assert response.json() == {"history": [], "logs": []}

    @pytest.mark.asyncio
    async def test_save_then_read(self, test_client):
        payload = {"history": [{"car": "KA-01", "at": "08:10"}], "logs": ["gate open"]}
        response = await test_client.post("/carArrival", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        board = (await test_client.get("/carArrival")).json()
        assert board["history"] == payload["history"]
        assert board["logs"] == payload["logs"]
        assert "timestamp" in board

    @pytest.mark.asyncio
    async def test_second_save_overwrites(self, test_client, sqlite_stores):
        await test_client.post("/carArrival", json={"history": [1], "logs": ["a"]})
        await test_client.post("/carArrival", json={"history": [2, 3], "logs": []})

        async with sqlite_stores.car.transaction() as session:
            count = (await session.execute(select(func.count()).select_from(CarArrival))).scalar()
        assert count == 1

        board = (await test_client.get("/carArrival")).json()
        assert board["history"] == [2, 3]
        assert board["logs"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"history": {}, "logs": []},
            {"history": [], "logs": "nope"},
            {"history": []},
            {},
        ],
    )
    async def test_non_array_fields_rejected(self, test_client, payload):
        await test_client.post("/carArrival", json={"history": ["kept"], "logs": ["kept"]})

        response = await test_client.post("/carArrival", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "history and logs must be arrays"

        board = (await test_client.get("/carArrival")).json()
        assert board["history"] == ["kept"]
        assert board["logs"] == ["kept"]

    @pytest.mark.asyncio
    async def test_form_encoded_arrays_accepted(self, test_client):
        response = await test_client.post(
            "/carArrival",
            content="history[]=KA-01&history[]=KA-02&logs[]=opened",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200
        board = (await test_client.get("/carArrival")).json()
        assert board["history"] == ["KA-01", "KA-02"]
        assert board["logs"] == ["opened"]


class TestCarArrivalServiceErrors:

    def setup_method(self):
        self.service = CarArrivalService()

    @pytest.mark.asyncio
    async def test_fetch_failure_raises_store_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(StoreError) as excinfo:
            await self.service.get_current(mock_db_session)

        assert excinfo.value.message == "Failed to fetch data"
        assert excinfo.value.status_code == 500
        assert excinfo.value.passthrough is False

    @pytest.mark.asyncio
    async def test_save_failure_raises_store_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("disk full")

        with pytest.raises(StoreError) as excinfo:
            await self.service.save(mock_db_session, history=[], logs=[])

        assert excinfo.value.message == "Failed to save data"

    @pytest.mark.asyncio
    async def test_unsupported_dialect_is_a_store_error(self, mock_db_session):
        mock_db_session.get_bind.return_value.dialect.name = "mssql"

        with pytest.raises(StoreError) as excinfo:
            await self.service.save(mock_db_session, history=[], logs=[])

        assert excinfo.value.message == "Failed to save data"
        assert excinfo.value.reason == "No atomic upsert for dialect 'mssql'"
        assert excinfo.value.context == {}
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_reaches_client_as_500(self, test_client, sqlite_stores):
        await sqlite_stores.car.drop_all()

        response = await test_client.get("/carArrival")
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Failed to fetch data"
        assert "details" not in body
