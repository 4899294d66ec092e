"""
Shared pytest fixtures for the events API tests.

No database is needed: the asyncpg pool is replaced with an in-memory fake
that records acquire/release calls and returns canned rows.
"""

from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core import db
from events import router as events_router


class FakeConnection:
    def __init__(self, rows=None, value=None, error=None):
        self.rows = rows or []
        self.value = value
        self.error = error
        self.calls = []

    async def fetch(self, sql, *args):
        self.calls.append(("fetch", sql, args))
        if self.error is not None:
            raise self.error
        return self.rows

    async def fetchval(self, sql, *args):
        self.calls.append(("fetchval", sql, args))
        if self.error is not None:
            raise self.error
        return self.value


class _Acquire:
    def __init__(self, pool):
        self.pool = pool

    async def __aenter__(self):
        self.pool.acquired += 1
        return self.pool.conn

    async def __aexit__(self, exc_type, exc, tb):
        self.pool.released += 1
        return False


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.acquired = 0
        self.released = 0

    def acquire(self):
        return _Acquire(self)


@pytest.fixture
def fake_pool(monkeypatch):
    """
    Install a FakePool as the module-level pool. Tests set conn.rows / conn.error.
    """
    pool = FakePool(FakeConnection())
    monkeypatch.setattr(db, "_pool", pool)
    return pool


@pytest.fixture
def sample_rows():
    return [
        {
            "title": "Jazz in the Park",
            "date_time": datetime(2024, 6, 7, 19, 30),
            "venue": "Riverside Park",
            "link": "https://example.com/jazz",
            "tags": "Music, Outdoor ,free",
            "last_updated": datetime(2024, 6, 1, 8, 0),
        },
        {
            "title": "Pottery Workshop",
            "date_time": datetime(2024, 6, 8, 10, 0),
            "venue": "Community Center",
            "link": "https://example.com/pottery",
            "tags": "arts,workshop,MUSIC",
            "last_updated": datetime(2024, 6, 2, 9, 15),
        },
    ]


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(events_router.router)
    return TestClient(app)
