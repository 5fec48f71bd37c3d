"""Domain models for logged activities."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class Activity:
    """A logged exercise event."""

    id: UUID
    user_id: UUID
    activity_date: date
    activity_type: str
    duration_minutes: int
    intensity: str | None
    calories_burned: int
    notes: str | None = None
    created_at: datetime | None = None
