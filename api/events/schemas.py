"""
Pydantic schemas for the events endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class EventResponse(BaseModel):
    title: str | None = None
    date_time: str | None = None
    venue: str | None = None
    link: str | None = None
    tags: str | None = None
    last_updated: str | None = None


class EventListResponse(BaseModel):
    events: list[EventResponse]
    count: int
    limit: int | None = None
    offset: int | None = None


class TagListResponse(BaseModel):
    tags: list[str]
    count: int


class VenueResponse(BaseModel):
    venue: str | None = None


class VenueListResponse(BaseModel):
    venues: list[VenueResponse]
    count: int


class LastUpdatedResponse(BaseModel):
    last_updated: str | None = None
