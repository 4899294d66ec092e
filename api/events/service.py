"""
Events service.

Shapes repository rows into API projections and turns domain errors into
HTTP errors:
- bad filter values (sort field, weekday) -> 400
- storage failures -> 500 with a generic message
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from fastapi import HTTPException, status

from . import repository
from .query import EVENT_COLUMNS, EventFilters, EventQueryValidationError


def _iso(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def _event_projection(row: dict[str, Any]) -> dict[str, Any]:
    return {column: _iso(row.get(column)) for column in EVENT_COLUMNS}


async def search_events(filters: EventFilters) -> list[dict[str, Any]]:
    try:
        rows = await repository.list_events(filters)
    except EventQueryValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except repository.EventsFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [_event_projection(row) for row in rows]


async def unique_tags() -> list[str]:
    try:
        return await repository.list_unique_tags()
    except repository.EventsFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


async def distinct_venues() -> list[dict[str, Any]]:
    try:
        return await repository.list_distinct_venues()
    except repository.EventsFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


async def last_updated() -> str | None:
    try:
        value = await repository.get_last_updated()
    except repository.EventsFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return _iso(value)
