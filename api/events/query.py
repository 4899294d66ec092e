"""
Dynamic SQL for the events listing.

`build_events_query` turns an `EventFilters` value into a parameterized
statement. Every present filter appends exactly one predicate to
`WHERE 1=1`, so filters always combine with AND. Values only ever travel as
positional arguments ($1, $2, ...); the only identifier interpolated into the
SQL text is the sort column, and that comes from `SORTABLE_FIELDS`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Iterable

EVENT_COLUMNS = ("title", "date_time", "venue", "link", "tags", "last_updated")

SORTABLE_FIELDS = ("date_time",)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

TAG_DELIMITER = ","


class EventQueryValidationError(ValueError):
    """Raised when a filter value can never produce a valid query."""


class InvalidSortFieldError(EventQueryValidationError):
    def __init__(self, sort_field: str) -> None:
        super().__init__(
            f"Invalid sort field: {sort_field!r}. Allowed: {', '.join(SORTABLE_FIELDS)}."
        )
        self.sort_field = sort_field


class InvalidFilterError(EventQueryValidationError):
    pass


@dataclass(frozen=True)
class EventFilters:
    start_date: date | None = None
    end_date: date | None = None
    day_of_week: str | None = None
    time_before: time | None = None
    time_after: time | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    title_contains: str | None = None
    venue_contains: str | None = None
    sort_field: str | None = None
    sort_order: str | None = None
    limit: int | None = None
    offset: int | None = None


def escape_like(text: str) -> str:
    """
    Escape LIKE wildcards so the text matches literally (used with ESCAPE '\\').
    """
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def normalize_day_of_week(day: str) -> str:
    wanted = (day or "").strip().lower()
    for name in WEEKDAYS:
        if name.lower() == wanted:
            return name
    raise InvalidFilterError(f"Invalid day of week: {day!r}. Allowed: {', '.join(WEEKDAYS)}.")


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    seen: dict[str, None] = {}
    for tag in tags or ():
        cleaned = (tag or "").strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def split_tags(raw: str | None) -> list[str]:
    """
    Split a stored tag string ("Music, Outdoor,free") into clean tags.
    """
    if not raw:
        return []
    return [t for t in (part.strip().lower() for part in raw.split(TAG_DELIMITER)) if t]


def _sort_clause(sort_field: str | None, sort_order: str | None) -> str:
    if not sort_field:
        return ""
    if sort_field not in SORTABLE_FIELDS:
        raise InvalidSortFieldError(sort_field)
    direction = "DESC" if (sort_order or "").strip().upper() == "DESC" else "ASC"
    # Safe: sort_field is one of SORTABLE_FIELDS.
    return f' ORDER BY "{sort_field}" {direction}'


class _QueryParts:
    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.args: list[Any] = []

    def arg(self, value: Any) -> str:
        self.args.append(value)
        return f"${len(self.args)}"

    def where(self, template: str, value: Any) -> None:
        self.conditions.append(template.format(p=self.arg(value)))


def build_events_query(filters: EventFilters) -> tuple[str, list[Any]]:
    """
    Build `SELECT ... FROM events` for the given filters.

    Returns (sql, args) ready for `db.fetch_all(sql, *args)`.
    Raises `EventQueryValidationError` before any SQL is produced if the
    sort field or weekday is not recognized.
    """
    order_by = _sort_clause(filters.sort_field, filters.sort_order)
    parts = _QueryParts()

    title = (filters.title_contains or "").strip()
    if title:
        parts.where("title ILIKE {p} ESCAPE '\\'", f"%{escape_like(title)}%")

    if filters.start_date is not None:
        parts.where("date_time::date >= {p}", filters.start_date)

    if filters.end_date is not None:
        parts.where("date_time::date <= {p}", filters.end_date)

    if filters.day_of_week and filters.day_of_week.strip():
        parts.where("to_char(date_time, 'FMDay') = {p}", normalize_day_of_week(filters.day_of_week))

    if filters.time_before is not None:
        parts.where("date_time::time <= {p}", filters.time_before)

    if filters.time_after is not None:
        parts.where("date_time::time >= {p}", filters.time_after)

    venue = (filters.venue_contains or "").strip()
    if venue:
        parts.where("venue ILIKE {p} ESCAPE '\\'", f"%{escape_like(venue)}%")

    tags = normalize_tags(filters.tags)
    if tags:
        parts.where(
            "EXISTS ("
            "SELECT 1 FROM unnest(string_to_array(lower(tags), ',')) AS t(tag) "
            "WHERE btrim(t.tag) = ANY({p}::text[])"
            ")",
            tags,
        )

    sql = f"SELECT {', '.join(EVENT_COLUMNS)} FROM events WHERE 1=1"
    for condition in parts.conditions:
        sql += f" AND {condition}"
    sql += order_by

    if isinstance(filters.limit, int) and filters.limit > 0:
        sql += f" LIMIT {parts.arg(filters.limit)}"

    if isinstance(filters.offset, int) and filters.offset > 0:
        sql += f" OFFSET {parts.arg(filters.offset)}"

    return sql, parts.args
