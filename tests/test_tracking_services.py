"""Tests for profile, activity, meal, check-in and dashboard services."""

from datetime import date

import pytest

from health_tracker.domain.checkins import CheckinValues
from health_tracker.domain.meals import MealEntry
from health_tracker.domain.profiles import Profile
from health_tracker.services.activities import (
    ActivityService,
    ProfileIncompleteError,
    UnknownActivityTypeError,
)
from health_tracker.services.checkins import CheckinService
from health_tracker.services.dashboard import DashboardService
from health_tracker.services.foods import FoodService
from health_tracker.services.meals import MealService, UnknownMealTypeError
from health_tracker.services.profiles import ProfileNotFoundError, ProfileService
from tests.conftest import (
    InMemoryActivityRepository,
    InMemoryCheckinRepository,
    InMemoryMealRepository,
    InMemoryProfileRepository,
)

TODAY = date(2026, 3, 14)


def _with_weight(
    repository: InMemoryProfileRepository, session, weight_kg: float = 70
) -> None:
    repository.profiles[session.user_id] = Profile(
        user_id=session.user_id, weight_kg=weight_kg
    )


def test_ensure_profile_is_idempotent(
    profile_repository: InMemoryProfileRepository, session
) -> None:
    service = ProfileService(profile_repository)

    first = service.ensure_profile(session, full_name="Asha")
    second = service.ensure_profile(session, full_name="Someone Else")

    assert first == second
    assert second.full_name == "Asha"


def test_update_profile_applies_partial_changes(
    profile_repository: InMemoryProfileRepository, session
) -> None:
    service = ProfileService(profile_repository)
    service.ensure_profile(session, full_name="Asha")

    updated = service.update_profile(session, {"weight_kg": 64.5, "age": 31})

    assert updated.full_name == "Asha"
    assert updated.weight_kg == 64.5
    assert updated.age == 31


def test_update_profile_rejects_missing_profile(
    profile_repository: InMemoryProfileRepository, session
) -> None:
    with pytest.raises(ProfileNotFoundError):
        ProfileService(profile_repository).update_profile(
            session, {"height_cm": 170.0}
        )

    assert session.user_id not in profile_repository.profiles


def test_log_activity_computes_calories(
    activity_repository: InMemoryActivityRepository,
    profile_repository: InMemoryProfileRepository,
    session,
) -> None:
    _with_weight(profile_repository, session)
    service = ActivityService(activity_repository, profile_repository)

    activity = service.log_activity(
        session,
        activity_type="running",
        duration_minutes=30,
        intensity="moderate",
        activity_date=TODAY,
        notes="",
    )

    assert activity.calories_burned == 360
    assert activity.notes is None
    assert service.list_activities(session, TODAY) == [activity]


def test_log_activity_requires_weight(
    activity_repository: InMemoryActivityRepository,
    profile_repository: InMemoryProfileRepository,
    session,
) -> None:
    service = ActivityService(activity_repository, profile_repository)

    with pytest.raises(ProfileIncompleteError):
        service.log_activity(session, "yoga", 45, "low", TODAY)

    assert activity_repository.activities == []
    assert service.estimate(session, "yoga", 45, "low") == 0


def test_log_activity_rejects_unknown_type(
    activity_repository: InMemoryActivityRepository,
    profile_repository: InMemoryProfileRepository,
    session,
) -> None:
    _with_weight(profile_repository, session)
    service = ActivityService(activity_repository, profile_repository)

    with pytest.raises(UnknownActivityTypeError):
        service.log_activity(session, "chess", 45, "moderate", TODAY)
    with pytest.raises(UnknownActivityTypeError):
        service.log_activity(session, "yoga", 45, "extreme", TODAY)


def test_delete_activity_only_removes_own(
    activity_repository: InMemoryActivityRepository,
    profile_repository: InMemoryProfileRepository,
    session,
) -> None:
    _with_weight(profile_repository, session)
    service = ActivityService(activity_repository, profile_repository)
    activity = service.log_activity(session, "walking", 20, "moderate", TODAY)

    service.delete_activity(session, activity.id)

    assert service.list_activities(session, TODAY) == []


def test_log_food_portion_scales_and_names_meal(
    meal_repository: InMemoryMealRepository, food_service: FoodService, session
) -> None:
    service = MealService(meal_repository, food_service)

    meal = service.log_food_portion(
        session,
        food_id="rice-white",
        weight_grams="200",
        meal_type="lunch",
        meal_date=TODAY,
    )

    assert meal is not None
    assert meal.food_name == "White Rice (Cooked) (200g)"
    assert meal.calories == 260
    assert meal.carbs_g == 56.0


def test_log_food_portion_unknown_food(
    meal_repository: InMemoryMealRepository, food_service: FoodService, session
) -> None:
    service = MealService(meal_repository, food_service)

    assert service.log_food_portion(session, "nope", 100, "lunch", TODAY) is None
    assert meal_repository.meals == []


def test_log_meal_rejects_unknown_meal_type(
    meal_repository: InMemoryMealRepository, food_service: FoodService, session
) -> None:
    service = MealService(meal_repository, food_service)
    entry = MealEntry(meal_type="brunch", food_name="Toast", calories=120)

    with pytest.raises(UnknownMealTypeError):
        service.log_meal(session, entry, TODAY)


def test_submit_checkin_upserts_by_date(
    checkin_repository: InMemoryCheckinRepository, session
) -> None:
    service = CheckinService(checkin_repository)

    first = service.submit_checkin(session, TODAY, CheckinValues(energy_level=2))
    second = service.submit_checkin(
        session, TODAY, CheckinValues(energy_level=5, symptoms=["Headache"])
    )

    assert len(checkin_repository.checkins) == 1
    assert second.id == first.id
    assert second.energy_level == 5
    assert second.symptoms == ["Headache"]
    assert service.get_checkin(session, TODAY) == second


def test_dashboard_with_no_data(  # noqa: PLR0913
    profile_repository: InMemoryProfileRepository,
    activity_repository: InMemoryActivityRepository,
    meal_repository: InMemoryMealRepository,
    checkin_repository: InMemoryCheckinRepository,
    session,
) -> None:
    service = DashboardService(
        profile_repository, activity_repository, meal_repository, checkin_repository
    )

    summary = service.get_summary(session, TODAY)

    assert summary.calories_burned == 0
    assert summary.calories_consumed == 0
    assert summary.activity_minutes == 0
    assert summary.calorie_goal == 2000
    assert summary.calorie_progress == 0
    assert summary.activity_progress == 0
    assert summary.checkin is None


def test_dashboard_totals_for_day(  # noqa: PLR0913
    profile_repository: InMemoryProfileRepository,
    activity_repository: InMemoryActivityRepository,
    meal_repository: InMemoryMealRepository,
    checkin_repository: InMemoryCheckinRepository,
    food_service: FoodService,
    session,
) -> None:
    _with_weight(profile_repository, session)
    activities = ActivityService(activity_repository, profile_repository)
    meals = MealService(meal_repository, food_service)
    activities.log_activity(session, "running", 30, "moderate", TODAY)
    activities.log_activity(session, "walking", 15, "moderate", date(2026, 3, 13))
    meals.log_meal(
        session, MealEntry(meal_type="breakfast", food_name="Oats", calories=500), TODAY
    )
    service = DashboardService(
        profile_repository, activity_repository, meal_repository, checkin_repository
    )

    summary = service.get_summary(session, TODAY)

    assert summary.calories_burned == 360
    assert summary.calories_consumed == 500
    assert summary.activity_minutes == 30
    assert summary.calorie_progress == 25
    assert summary.activity_progress == 100
