"""
Events API endpoints (read-only).
"""

from __future__ import annotations

from datetime import date, time

from fastapi import APIRouter, Query

from . import schemas, service
from .query import EventFilters

router = APIRouter()

# Postgres LIMIT/OFFSET take a bigint.
MAX_PAGE_VALUE = 2**63 - 1


def _tag_params(tags: list[str] | None) -> tuple[str, ...]:
    # ?tags=a&tags=b and ?tags=a,b are both accepted.
    if not tags:
        return ()
    return tuple(part for value in tags for part in value.split(","))


@router.get("/events", response_model=schemas.EventListResponse)
async def list_events(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    day_of_week: str | None = Query(default=None, alias="dayOfWeek", max_length=20),
    time_before: time | None = Query(default=None, alias="timeBefore"),
    time_after: time | None = Query(default=None, alias="timeAfter"),
    time_of_day_before: time | None = Query(default=None, alias="timeOfDayBefore", include_in_schema=False),
    time_of_day_after: time | None = Query(default=None, alias="timeOfDayAfter", include_in_schema=False),
    tags: list[str] | None = Query(default=None),
    title_contains: str | None = Query(default=None, alias="titleContains", max_length=500),
    venue_contains: str | None = Query(default=None, alias="venueContains", max_length=500),
    sort_field: str | None = Query(default=None, alias="sortField", max_length=100),
    sort_order: str | None = Query(default=None, alias="sortOrder", max_length=10),
    limit: int | None = Query(default=None, le=MAX_PAGE_VALUE),
    offset: int | None = Query(default=None, le=MAX_PAGE_VALUE),
) -> dict:
    """
    List events matching every given filter. Non-positive limit/offset are ignored.
    """
    filters = EventFilters(
        start_date=start_date,
        end_date=end_date,
        day_of_week=day_of_week,
        time_before=time_before if time_before is not None else time_of_day_before,
        time_after=time_after if time_after is not None else time_of_day_after,
        tags=_tag_params(tags),
        title_contains=title_contains,
        venue_contains=venue_contains,
        sort_field=sort_field,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )
    events = await service.search_events(filters)
    return {
        "events": events,
        "count": len(events),
        "limit": limit if limit and limit > 0 else None,
        "offset": offset if offset and offset > 0 else None,
    }


@router.get("/events/tags", response_model=schemas.TagListResponse)
async def unique_tags() -> dict:
    tags = await service.unique_tags()
    return {"tags": tags, "count": len(tags)}


@router.get("/events/venues", response_model=schemas.VenueListResponse)
async def distinct_venues() -> dict:
    venues = await service.distinct_venues()
    return {"venues": venues, "count": len(venues)}


@router.get("/events/last-updated", response_model=schemas.LastUpdatedResponse)
async def last_updated() -> dict:
    return {"last_updated": await service.last_updated()}
