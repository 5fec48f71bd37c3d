"""Health assistant proxy: builds the user's health context and streams
completions from the AI gateway."""

import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Protocol

from health_tracker.domain.activities import Activity
from health_tracker.domain.chat import ChatTurn
from health_tracker.domain.checkins import HealthCheckin
from health_tracker.domain.meals import Meal
from health_tracker.domain.profiles import Profile
from health_tracker.domain.sessions import UserSession
from health_tracker.services.activities import ActivityRepository
from health_tracker.services.chat_stream import ChatRequestError
from health_tracker.services.checkins import CheckinRepository
from health_tracker.services.meals import MealRepository
from health_tracker.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)

_NOT_SET = "Not set"

_GUIDELINES = """GUIDELINES:
- Provide personalized advice based on the user's profile, goals, and recent data
- Give specific dietary recommendations considering their dietary preference
- Suggest improvements based on their activity level and fitness goals
- Be encouraging and supportive
- If asked for a health report summary, analyze their recent data comprehensively
- Always remind users to consult healthcare professionals for medical advice
- Keep responses concise but informative
- Use metric units (kg, cm, kcal) consistently
- If data is missing, acknowledge it and suggest the user log more data"""

_STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please try again later.",
    402: "Usage limit reached. Please add credits.",
}


class GatewayStatusError(RuntimeError):
    """The AI gateway answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"AI gateway error {status_code}")
        self.status_code = status_code
        self.body = body


class AssistantError(ChatRequestError):
    """User-facing assistant failure with the HTTP status to report."""


class ChatGateway(Protocol):
    """Interface for the streaming chat completions endpoint."""

    def stream_chat_completion(
        self, *, model: str, messages: list[dict[str, str]]
    ) -> AbstractAsyncContextManager[AsyncIterator[bytes]]:
        """Open a streamed completion; raise GatewayStatusError on failure."""


@dataclass(frozen=True)
class HealthSnapshot:
    """The user's profile and recent logs used as assistant context."""

    profile: Profile | None
    meals: list[Meal] = field(default_factory=list)
    activities: list[Activity] = field(default_factory=list)
    checkins: list[HealthCheckin] = field(default_factory=list)


@dataclass
class HealthAssistantService:
    """Streams assistant replies grounded in the user's logged data."""

    gateway: ChatGateway
    profiles: ProfileRepository
    meals: MealRepository
    activities: ActivityRepository
    checkins: CheckinRepository
    model: str
    lookback_days: int = 7

    def load_snapshot(
        self, session: UserSession, today: date | None = None
    ) -> HealthSnapshot:
        """Load the profile and the last ``lookback_days`` of logs."""
        start = (today or date.today()) - timedelta(days=self.lookback_days)
        user_id = session.user_id
        return HealthSnapshot(
            profile=self.profiles.get_profile(user_id),
            meals=self.meals.list_meals_since(user_id, start),
            activities=self.activities.list_activities_since(user_id, start),
            checkins=self.checkins.list_checkins_since(user_id, start),
        )

    @asynccontextmanager
    async def stream(
        self, session: UserSession, messages: list[ChatTurn]
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        """Forward the conversation with a health-context system prompt."""
        try:
            system_prompt = build_system_prompt(self.load_snapshot(session))
        except Exception as exc:
            _logger.exception("Failed to load health context")
            raise AssistantError(str(exc) or "Unknown error", status_code=500) from exc

        payload = [
            {"role": "system", "content": system_prompt},
            *(turn.as_payload() for turn in messages),
        ]
        try:
            async with self.gateway.stream_chat_completion(
                model=self.model, messages=payload
            ) as body:
                yield body
        except GatewayStatusError as exc:
            message = _STATUS_MESSAGES.get(exc.status_code)
            if message:
                raise AssistantError(message, status_code=exc.status_code) from exc
            _logger.error("AI gateway error: %s %s", exc.status_code, exc.body)
            raise AssistantError("AI service error", status_code=500) from exc


def build_system_prompt(snapshot: HealthSnapshot) -> str:
    """Render the assistant system prompt from a health snapshot."""
    return (
        "You are a helpful AI health and nutrition assistant. You have access "
        "to the user's health data and can provide personalized advice.\n\n"
        f"{build_health_context(snapshot)}\n"
        f"{_GUIDELINES}"
    )


def build_health_context(snapshot: HealthSnapshot) -> str:
    """Summarise the profile, 7-day totals and recent entries."""
    profile = snapshot.profile
    meals = snapshot.meals
    activities = snapshot.activities
    checkins = snapshot.checkins

    consumed = sum(meal.calories or 0 for meal in meals)
    burned = sum(activity.calories_burned or 0 for activity in activities)
    protein = sum(meal.protein_g or 0 for meal in meals)
    carbs = sum(meal.carbs_g or 0 for meal in meals)
    fats = sum(meal.fats_g or 0 for meal in meals)
    avg_energy = _average([checkin.energy_level for checkin in checkins])
    avg_sleep = _average([checkin.sleep_quality for checkin in checkins])
    avg_stress = _average([checkin.stress_level for checkin in checkins])

    lines = [
        "USER PROFILE:",
        f"- Name: {_value(profile and profile.full_name)}",
        f"- Age: {_value(profile and profile.age)}",
        f"- Gender: {_value(profile and profile.gender)}",
        f"- Weight: {_value(profile and profile.weight_kg, ' kg')}",
        f"- Height: {_value(profile and profile.height_cm, ' cm')}",
        f"- Activity Level: {_value(profile and profile.activity_level)}",
        f"- Fitness Goal: {_value(profile and profile.fitness_goal)}",
        f"- Dietary Preference: {_value(profile and profile.dietary_preference)}",
        "",
        "LAST 7 DAYS SUMMARY:",
        f"- Total Calories Consumed: {_number(consumed)} kcal",
        f"- Total Calories Burned: {_number(burned)} kcal",
        f"- Net Calories: {_number(consumed - burned)} kcal",
        f"- Total Protein: {_number(protein)}g",
        f"- Total Carbs: {_number(carbs)}g",
        f"- Total Fats: {_number(fats)}g",
        f"- Average Energy Level: {avg_energy:.1f}/5",
        f"- Average Sleep Quality: {avg_sleep:.1f}/5",
        f"- Average Stress Level: {avg_stress:.1f}/5",
        f"- Number of Meals Logged: {len(meals)}",
        f"- Number of Activities Logged: {len(activities)}",
        f"- Number of Health Check-ins: {len(checkins)}",
        "",
        "RECENT MEALS (last 7 days):",
        *(_format_meal(meal) for meal in meals[:10]),
        *([] if meals else ["No meals logged"]),
        "",
        "RECENT ACTIVITIES (last 7 days):",
        *(_format_activity(activity) for activity in activities[:10]),
        *([] if activities else ["No activities logged"]),
        "",
        "RECENT HEALTH CHECK-INS (last 7 days):",
        *(_format_checkin(checkin) for checkin in checkins[:7]),
        *([] if checkins else ["No check-ins logged"]),
    ]
    return "\n".join(lines) + "\n"


def _value(value: object, suffix: str = "") -> str:
    if value is None or value == "" or value == 0:
        return _NOT_SET
    return f"{_number(value)}{suffix}"


def _number(value: object) -> str:
    """Format numbers without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _average(values: list[int | None]) -> float:
    if not values:
        return 0.0
    return sum(value or 0 for value in values) / len(values)


def _format_meal(meal: Meal) -> str:
    return (
        f"- {meal.meal_date}: {meal.food_name} ({meal.meal_type}) - "
        f"{_number(meal.calories)} kcal, P:{_number(meal.protein_g)}g "
        f"C:{_number(meal.carbs_g)}g F:{_number(meal.fats_g)}g"
    )


def _format_activity(activity: Activity) -> str:
    return (
        f"- {activity.activity_date}: {activity.activity_type} for "
        f"{activity.duration_minutes} min - {activity.calories_burned} kcal burned "
        f"({activity.intensity} intensity)"
    )


def _format_checkin(checkin: HealthCheckin) -> str:
    symptoms = (
        f", Symptoms: {', '.join(checkin.symptoms)}" if checkin.symptoms else ""
    )
    return (
        f"- {checkin.checkin_date}: Energy {checkin.energy_level}/5, "
        f"Sleep {checkin.sleep_quality}/5, Stress {checkin.stress_level}/5"
        f"{symptoms}"
    )
