"""
Events persistence (raw SQL, read-only).

Storage failures are logged here and re-raised as `EventsFetchError` with a
generic per-operation message. Filter validation errors propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

import asyncpg

from core import db

from .query import EventFilters, build_events_query, split_tags

logger = logging.getLogger(__name__)


class EventsFetchError(RuntimeError):
    pass


@contextmanager
def _fetch_errors(message: str) -> Iterator[None]:
    try:
        yield
    except (
        asyncpg.PostgresError,
        asyncpg.InterfaceError,
        asyncio.TimeoutError,
        OSError,
        RuntimeError,
    ) as exc:
        logger.exception("events_query_failed operation=%r", message)
        raise EventsFetchError(message) from exc


async def list_events(filters: EventFilters) -> list[dict[str, Any]]:
    sql, args = build_events_query(filters)
    with _fetch_errors("Failed to fetch events"):
        rows = await db.fetch_all(sql, *args)
    logger.debug("events_query_ok rows=%s args=%s", len(rows), len(args))
    return rows


async def list_unique_tags() -> list[str]:
    """
    Every distinct tag across all events, lower-cased, in first-seen order.
    """
    with _fetch_errors("Failed to fetch unique tags"):
        rows = await db.fetch_all("SELECT tags FROM events")

    seen: dict[str, None] = {}
    for row in rows:
        for tag in split_tags(row.get("tags")):
            seen.setdefault(tag, None)
    return list(seen)


async def list_distinct_venues() -> list[dict[str, Any]]:
    with _fetch_errors("Failed to fetch distinct venues"):
        rows = await db.fetch_all("SELECT DISTINCT venue FROM events")
    return [{"venue": row.get("venue")} for row in rows]


async def get_last_updated() -> datetime | None:
    with _fetch_errors("Failed to fetch last_updated"):
        return await db.fetch_value("SELECT max(last_updated) AS last_updated FROM events")
