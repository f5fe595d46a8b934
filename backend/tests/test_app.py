"""
PaddyHub Backend: Application Wiring Tests
==========================================

What we test:
    ✅ Liveness banner and health report
    ✅ Request ID generated / echoed
    ✅ Oversized bodies rejected with 413, declared or chunked
    ✅ CORS allows only the dashboard origin, with credentials
    ✅ Startup table creation tolerates a store that is down
    ✅ Unexpected errors still report the request ID
"""

import json

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from paddyhub.config import settings
from paddyhub.database import create_collections
from paddyhub.main import create_app, register_exception_handlers
from paddyhub.middleware.body_limit import BodySizeLimitMiddleware
from paddyhub.routes.payload import read_payload
from paddyhub.routes.root import BANNER


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == BANNER

    @pytest.mark.asyncio
    async def test_health_all_connected(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["databases"] == {"car": "connected", "qr": "connected", "stock": "connected"}

    @pytest.mark.asyncio
    async def test_health_degraded_when_one_store_down(self, test_client, sqlite_stores, monkeypatch):
        async def unreachable():
            return False

        monkeypatch.setattr(sqlite_stores.qr, "ping", unreachable)

        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["databases"]["qr"] == "disconnected"

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_all_down(self, test_client, sqlite_stores, monkeypatch):
        async def unreachable():
            return False

        for store in sqlite_stores:
            monkeypatch.setattr(store, "ping", unreachable)

        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/scans")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_errors(self, test_client):
        response = await test_client.post(
            "/api/scans", json={}, headers={"X-Request-ID": "gate-42"}
        )
        assert response.headers["X-Request-ID"] == "gate-42"
        assert response.json()["request_id"] == "gate-42"

    @pytest.mark.asyncio
    async def test_oversized_body_rejected(self, test_client):
        response = await test_client.post(
            "/api/scans",
            content=b"{}",
            headers={
                "Content-Type": "application/json",
                "Content-Length": str(settings.max_body_size + 1),
            },
        )
        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"

    @pytest.mark.asyncio
    async def test_cors_allows_dashboard_origin(self, test_client):
        origin = settings.cors_origins_list[0]
        response = await test_client.options(
            "/api/stocks",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_cors_rejects_other_origin(self, test_client):
        response = await test_client.options(
            "/api/stocks",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers


class TestCreateCollections:

    @pytest.mark.asyncio
    async def test_recreates_missing_tables(self, test_client, sqlite_stores):
        await sqlite_stores.stock.drop_all()
        await create_collections()

        response = await test_client.get("/api/stocks/all")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_one_failing_store_does_not_block_the_others(self, sqlite_stores, monkeypatch):
        async def broken():
            raise ConnectionRefusedError("car database down")

        monkeypatch.setattr(sqlite_stores.car, "create_all", broken)
        await sqlite_stores.qr.drop_all()

        await create_collections()

        async with sqlite_stores.qr.transaction() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM scans"))
            assert result.scalar() == 0


def _limited_app(limit: int) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=limit)

    @app.post("/echo")
    async def echo(payload=Depends(read_payload)):
        return {"keys": sorted(payload)}

    return app


async def _chunks(body: bytes, size: int = 256):
    for start in range(0, len(body), size):
        yield body[start:start + size]


class TestBodySizeLimit:

    @pytest.mark.asyncio
    async def test_chunked_body_over_limit_rejected(self):
        body = json.dumps({"code": "x" * 10_000}).encode()
        transport = ASGITransport(app=_limited_app(1024))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/echo",
                content=_chunks(body),
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"
        assert response.json()["details"]["limit"] == 1024

    @pytest.mark.asyncio
    async def test_chunked_form_over_limit_rejected(self):
        body = ("code=" + "x" * 10_000).encode()
        transport = ASGITransport(app=_limited_app(1024))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/echo",
                content=_chunks(body),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_chunked_body_under_limit_passes(self):
        body = json.dumps({"code": "QR-1", "lot": "A"}).encode()
        transport = ASGITransport(app=_limited_app(1024))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/echo",
                content=_chunks(body, size=8),
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 200
        assert response.json() == {"keys": ["code", "lot"]}

    @pytest.mark.asyncio
    async def test_chunked_scan_stored(self, test_client):
        response = await test_client.post(
            "/api/scans",
            content=_chunks(b'{"code": "QR-9"}', size=4),
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 201
        assert response.json()["data"]["code"] == "QR-9"


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_request_id_reported_by_catch_all_handler(self, sqlite_stores):
        app = create_app()

        @app.get("/explode")
        async def explode():
            raise RuntimeError("unexpected")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode", headers={"X-Request-ID": "rid-500"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "rid-500"
