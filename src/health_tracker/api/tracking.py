"""Profile, activity, meal, check-in and dashboard endpoints."""

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from health_tracker.api.auth import require_session
from health_tracker.api.schemas import (
    ActivityCreate,
    ActivityType,
    CheckinSubmit,
    Intensity,
    MealCreate,
    MealFromFood,
    ProfileCreate,
    ProfileUpdate,
)
from health_tracker.domain.checkins import CheckinValues
from health_tracker.domain.meals import MealEntry
from health_tracker.domain.sessions import UserSession
from health_tracker.services.activities import (
    ProfileIncompleteError,
    UnknownActivityTypeError,
)
from health_tracker.services.energy import (
    bmi_category,
    calculate_bmi,
    calculate_daily_calorie_goal,
)
from health_tracker.services.meals import UnknownMealTypeError
from health_tracker.services.profiles import ProfileNotFoundError

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracking"])

_UNPROCESSABLE = 422


def _container(request: Request) -> "AppContainer":
    return request.app.state.container


@router.get("/profile")
async def get_profile(
    request: Request, session: UserSession = Depends(require_session)
) -> dict[str, object]:
    """Return the caller's profile with derived BMI and calorie goal."""
    profile = _container(request).profile_service.get_profile(session)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    bmi = calculate_bmi(profile.height_cm, profile.weight_kg)
    return {
        "profile": profile,
        "bmi": bmi,
        "bmi_category": bmi_category(bmi) if bmi is not None else None,
        "calorie_goal": calculate_daily_calorie_goal(profile),
    }


@router.post("/profile", status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: ProfileCreate,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Create the caller's profile if it does not exist yet."""
    profile = _container(request).profile_service.ensure_profile(
        session, full_name=body.full_name
    )
    return {"profile": profile}


@router.patch("/profile")
async def update_profile(
    body: ProfileUpdate,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Apply the fields present in the request body."""
    changes = body.model_dump(exclude_unset=True)
    try:
        profile = _container(request).profile_service.update_profile(
            session, changes
        )
    except ProfileNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    _logger.info("Profile updated: fields=%s", sorted(changes))
    return {"profile": profile}


@router.get("/activities")
async def list_activities(
    request: Request,
    day: date | None = None,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """List the caller's activities for a day, newest first."""
    activities = _container(request).activity_service.list_activities(
        session, day or date.today()
    )
    return {"activities": activities}


@router.get("/activities/estimate")
async def estimate_activity(
    request: Request,
    activity_type: ActivityType,
    duration_minutes: int,
    intensity: Intensity = "moderate",
    session: UserSession = Depends(require_session),
) -> dict[str, int]:
    """Preview calories burned before logging."""
    calories = _container(request).activity_service.estimate(
        session, activity_type, duration_minutes, intensity
    )
    return {"calories_burned": calories}


@router.post("/activities", status_code=status.HTTP_201_CREATED)
async def log_activity(
    body: ActivityCreate,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Log an activity with its estimated calories burned."""
    try:
        activity = _container(request).activity_service.log_activity(
            session,
            activity_type=body.activity_type,
            duration_minutes=body.duration_minutes,
            intensity=body.intensity,
            activity_date=body.activity_date or date.today(),
            notes=body.notes,
        )
    except (UnknownActivityTypeError, ProfileIncompleteError) as exc:
        raise HTTPException(
            status_code=_UNPROCESSABLE, detail=str(exc)
        ) from exc
    return {"activity": activity}


@router.delete("/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: UUID,
    request: Request,
    session: UserSession = Depends(require_session),
) -> Response:
    """Delete one of the caller's activities."""
    _container(request).activity_service.delete_activity(session, activity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/meals")
async def list_meals(
    request: Request,
    day: date | None = None,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """List the caller's meals for a day, newest first."""
    meals = _container(request).meal_service.list_meals(session, day or date.today())
    return {"meals": meals}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    body: MealCreate,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Log a meal with explicit macros."""
    entry = MealEntry(
        meal_type=body.meal_type,
        food_name=body.food_name.strip(),
        calories=body.calories,
        protein_g=body.protein_g,
        carbs_g=body.carbs_g,
        fats_g=body.fats_g,
        fiber_g=body.fiber_g,
    )
    try:
        meal = _container(request).meal_service.log_meal(
            session, entry, body.meal_date or date.today()
        )
    except UnknownMealTypeError as exc:
        raise HTTPException(
            status_code=_UNPROCESSABLE, detail=str(exc)
        ) from exc
    return {"meal": meal}


@router.post("/meals/from-food", status_code=status.HTTP_201_CREATED)
async def log_meal_from_food(
    body: MealFromFood,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Log a catalog food scaled to the given weight."""
    meal = _container(request).meal_service.log_food_portion(
        session,
        food_id=body.food_id,
        weight_grams=body.weight_grams,
        meal_type=body.meal_type,
        meal_date=body.meal_date or date.today(),
    )
    if meal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Unknown food"
        )
    return {"meal": meal}


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: UUID,
    request: Request,
    session: UserSession = Depends(require_session),
) -> Response:
    """Delete one of the caller's meals."""
    _container(request).meal_service.delete_meal(session, meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/checkins")
async def list_checkins(
    request: Request,
    start: date | None = None,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """List check-ins since ``start`` (default: the last 7 days)."""
    since = start or date.today() - timedelta(days=7)
    checkins = _container(request).checkin_service.list_checkins(session, since)
    return {"checkins": checkins}


@router.get("/checkins/{checkin_date}")
async def get_checkin(
    checkin_date: date,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Return the caller's check-in for a date, or null."""
    checkin = _container(request).checkin_service.get_checkin(session, checkin_date)
    return {"checkin": checkin}


@router.put("/checkins/{checkin_date}")
async def submit_checkin(
    checkin_date: date,
    body: CheckinSubmit,
    request: Request,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Create or replace the caller's check-in for a date."""
    values = CheckinValues(
        energy_level=body.energy_level,
        sleep_quality=body.sleep_quality,
        stress_level=body.stress_level,
        symptoms=body.symptoms,
        notes=body.notes,
    )
    checkin = _container(request).checkin_service.submit_checkin(
        session, checkin_date, values
    )
    return {"checkin": checkin}


@router.get("/dashboard")
async def dashboard(
    request: Request,
    day: date | None = None,
    session: UserSession = Depends(require_session),
) -> dict[str, object]:
    """Return today's totals, goals and check-in."""
    summary = _container(request).dashboard_service.get_summary(
        session, day or date.today()
    )
    return {"summary": summary}
