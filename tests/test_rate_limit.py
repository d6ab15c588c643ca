"""Tests for the per-IP limit on the login and signup endpoints."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from noteful.middleware.rate_limit import RateLimitMiddleware


def make_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60)

    @app.post("/api/login")
    async def login():
        return {"ok": True}

    @app.get("/api/notes")
    async def notes():
        return []

    return app


@pytest.mark.asyncio
async def test_blocks_after_limit():
    transport = ASGITransport(app=make_app(max_requests=2))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        statuses = [(await client.post("/api/login")).status_code for _ in range(3)]
        blocked = await client.post("/api/login")

    assert statuses == [200, 200, 429]
    assert blocked.json()["error"] == "rate_limit_exceeded"
    assert 0 < int(blocked.headers["Retry-After"]) <= 61


@pytest.mark.asyncio
async def test_other_routes_not_limited():
    transport = ASGITransport(app=make_app(max_requests=1))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        statuses = [(await client.get("/api/notes")).status_code for _ in range(5)]

    assert statuses == [200] * 5
