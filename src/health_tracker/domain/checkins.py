"""Domain models for daily wellness check-ins."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

COMMON_SYMPTOMS = (
    "Headache",
    "Fatigue",
    "Fever",
    "Nausea",
    "Back pain",
    "Muscle ache",
    "Sore throat",
    "Congestion",
    "Dizziness",
    "Insomnia",
)


@dataclass(frozen=True)
class CheckinValues:
    """Submitted check-in levels (1-5 scales) and symptoms."""

    energy_level: int = 3
    sleep_quality: int = 3
    stress_level: int = 2
    symptoms: list[str] = field(default_factory=list)
    notes: str | None = None


@dataclass(frozen=True)
class HealthCheckin:
    """At most one per user per calendar date."""

    id: UUID
    user_id: UUID
    checkin_date: date
    energy_level: int | None
    sleep_quality: int | None
    stress_level: int | None
    symptoms: list[str]
    notes: str | None = None
