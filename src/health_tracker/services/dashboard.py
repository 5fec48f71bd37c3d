"""Daily dashboard aggregation."""

from dataclasses import dataclass
from datetime import date

from health_tracker.domain.dashboard import DashboardSummary
from health_tracker.domain.sessions import UserSession
from health_tracker.services.activities import ActivityRepository
from health_tracker.services.checkins import CheckinRepository
from health_tracker.services.energy import (
    ACTIVITY_GOAL_MINUTES,
    calculate_daily_calorie_goal,
    calculate_progress,
)
from health_tracker.services.meals import MealRepository
from health_tracker.services.profiles import ProfileRepository


@dataclass
class DashboardService:
    """Computes a user's totals and goals for one day."""

    profiles: ProfileRepository
    activities: ActivityRepository
    meals: MealRepository
    checkins: CheckinRepository

    def get_summary(self, session: UserSession, day: date) -> DashboardSummary:
        """Return burned/consumed totals, goals and progress for a day."""
        user_id = session.user_id
        profile = self.profiles.get_profile(user_id)
        activities = self.activities.list_activities(user_id, day)
        meals = self.meals.list_meals(user_id, day)

        burned = sum(activity.calories_burned or 0 for activity in activities)
        consumed = sum(meal.calories or 0 for meal in meals)
        minutes = sum(activity.duration_minutes or 0 for activity in activities)
        calorie_goal = calculate_daily_calorie_goal(profile)

        return DashboardSummary(
            day=day,
            calories_burned=burned,
            calories_consumed=consumed,
            activity_minutes=minutes,
            calorie_goal=calorie_goal,
            calorie_progress=calculate_progress(consumed, calorie_goal),
            activity_goal_minutes=ACTIVITY_GOAL_MINUTES,
            activity_progress=calculate_progress(minutes, ACTIVITY_GOAL_MINUTES),
            checkin=self.checkins.get_checkin(user_id, day),
        )
