"""Domain models for the daily dashboard."""

from dataclasses import dataclass
from datetime import date

from health_tracker.domain.checkins import HealthCheckin


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated figures for a single day."""

    day: date
    calories_burned: int
    calories_consumed: int
    activity_minutes: int
    calorie_goal: int
    calorie_progress: int
    activity_goal_minutes: int
    activity_progress: int
    checkin: HealthCheckin | None
