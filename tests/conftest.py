"""Shared test fixtures."""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from health_tracker.adapters.supabase_session_resolver import SessionResolver
from health_tracker.config import Settings
from health_tracker.containers import AppContainer
from health_tracker.domain.activities import Activity
from health_tracker.domain.chat import ChatMessage, ChatTurn
from health_tracker.domain.checkins import HealthCheckin
from health_tracker.domain.foods import FoodReferenceItem
from health_tracker.domain.meals import Meal
from health_tracker.domain.profiles import Profile
from health_tracker.domain.sessions import UserSession
from health_tracker.services.activities import ActivityRepository, ActivityService
from health_tracker.services.assistant import ChatGateway, HealthAssistantService
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.chat import (
    ChatMessageRepository,
    ChatService,
    ChatStreamSource,
)
from health_tracker.services.checkins import CheckinRepository, CheckinService
from health_tracker.services.dashboard import DashboardService
from health_tracker.services.foods import (
    FoodAnalysisClient,
    FoodCatalogRepository,
    FoodService,
)
from health_tracker.services.meals import MealRepository, MealService
from health_tracker.services.profiles import ProfileRepository, ProfileService

TEST_TOKEN = "valid-token"
TEST_USER_ID = UUID("11111111-1111-1111-1111-111111111111")


async def iter_chunks(chunks: list[bytes]) -> AsyncIterator[bytes]:
    """Yield byte chunks the way an HTTP response body would."""
    for chunk in chunks:
        yield chunk


def sse_chunks(*deltas: str, done: bool = True) -> list[bytes]:
    """Encode content deltas as SSE completion chunks."""
    lines = [
        f"data: {json.dumps(_completion_chunk(delta), ensure_ascii=False)}\n\n"
        for delta in deltas
    ]
    if done:
        lines.append("data: [DONE]\n\n")
    return [line.encode() for line in lines]


def _completion_chunk(delta: str) -> dict[str, object]:
    return {"choices": [{"delta": {"content": delta}}]}


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        profile = Profile(user_id=user_id, **payload)
        self.profiles[user_id] = profile
        return profile

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        profile = replace(self.profiles[user_id], **payload)
        self.profiles[user_id] = profile
        return profile


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity repository for tests."""

    activities: list[Activity] = field(default_factory=list)

    def create_activity(self, user_id: UUID, payload: dict[str, object]) -> Activity:
        activity = Activity(
            id=uuid4(),
            user_id=user_id,
            activity_date=date.fromisoformat(str(payload["activity_date"])),
            activity_type=str(payload["activity_type"]),
            duration_minutes=int(payload["duration_minutes"]),
            intensity=payload.get("intensity"),
            calories_burned=int(payload["calories_burned"]),
            notes=payload.get("notes"),
        )
        self.activities.append(activity)
        return activity

    def list_activities(self, user_id: UUID, activity_date: date) -> list[Activity]:
        return [
            activity
            for activity in reversed(self.activities)
            if activity.user_id == user_id and activity.activity_date == activity_date
        ]

    def list_activities_since(self, user_id: UUID, start: date) -> list[Activity]:
        return [
            activity
            for activity in reversed(self.activities)
            if activity.user_id == user_id and activity.activity_date >= start
        ]

    def delete_activity(self, user_id: UUID, activity_id: UUID) -> None:
        self.activities = [
            activity
            for activity in self.activities
            if not (activity.id == activity_id and activity.user_id == user_id)
        ]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[Meal] = field(default_factory=list)

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> Meal:
        meal = Meal(
            id=uuid4(),
            user_id=user_id,
            meal_date=date.fromisoformat(str(payload["meal_date"])),
            meal_type=str(payload["meal_type"]),
            food_name=str(payload["food_name"]),
            calories=int(payload["calories"]),
            protein_g=float(payload["protein_g"]),
            carbs_g=float(payload["carbs_g"]),
            fats_g=float(payload["fats_g"]),
            fiber_g=float(payload["fiber_g"]),
        )
        self.meals.append(meal)
        return meal

    def list_meals(self, user_id: UUID, meal_date: date) -> list[Meal]:
        return [
            meal
            for meal in reversed(self.meals)
            if meal.user_id == user_id and meal.meal_date == meal_date
        ]

    def list_meals_since(self, user_id: UUID, start: date) -> list[Meal]:
        return [
            meal
            for meal in reversed(self.meals)
            if meal.user_id == user_id and meal.meal_date >= start
        ]

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        self.meals = [
            meal
            for meal in self.meals
            if not (meal.id == meal_id and meal.user_id == user_id)
        ]


@dataclass
class InMemoryCheckinRepository(CheckinRepository):
    """In-memory check-in repository for tests."""

    checkins: dict[UUID, HealthCheckin] = field(default_factory=dict)

    def get_checkin(self, user_id: UUID, checkin_date: date) -> HealthCheckin | None:
        for checkin in self.checkins.values():
            if checkin.user_id == user_id and checkin.checkin_date == checkin_date:
                return checkin
        return None

    def create_checkin(
        self, user_id: UUID, checkin_date: date, payload: dict[str, object]
    ) -> HealthCheckin:
        checkin = HealthCheckin(
            id=uuid4(), user_id=user_id, checkin_date=checkin_date, **payload
        )
        self.checkins[checkin.id] = checkin
        return checkin

    def update_checkin(
        self, checkin_id: UUID, payload: dict[str, object]
    ) -> HealthCheckin:
        checkin = replace(self.checkins[checkin_id], **payload)
        self.checkins[checkin_id] = checkin
        return checkin

    def list_checkins_since(self, user_id: UUID, start: date) -> list[HealthCheckin]:
        rows = [
            checkin
            for checkin in self.checkins.values()
            if checkin.user_id == user_id and checkin.checkin_date >= start
        ]
        return sorted(rows, key=lambda checkin: checkin.checkin_date, reverse=True)


@dataclass
class InMemoryChatRepository(ChatMessageRepository):
    """In-memory chat history for tests."""

    messages: list[ChatMessage] = field(default_factory=list)

    def list_messages(self, user_id: UUID, limit: int) -> list[ChatMessage]:
        owned = [message for message in self.messages if message.user_id == user_id]
        return owned[-limit:]

    def create_message(self, user_id: UUID, role: str, content: str) -> ChatMessage:
        message = ChatMessage(id=uuid4(), user_id=user_id, role=role, content=content)
        self.messages.append(message)
        return message

    def delete_messages(self, user_id: UUID) -> None:
        self.messages = [
            message for message in self.messages if message.user_id != user_id
        ]


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory shared food catalog keyed by unique name."""

    foods: dict[str, FoodReferenceItem] = field(default_factory=dict)

    def search_foods(
        self, query: str | None, category: str | None, limit: int
    ) -> list[FoodReferenceItem]:
        results = list(self.foods.values())
        if query:
            results = [food for food in results if query.lower() in food.name.lower()]
        if category:
            results = [food for food in results if food.category == category]
        return results[:limit]

    def get_food(self, food_id: str) -> FoodReferenceItem | None:
        for food in self.foods.values():
            if food.id == food_id:
                return food
        return None

    def upsert_food(
        self, payload: dict[str, object], created_by: UUID
    ) -> FoodReferenceItem:
        name = str(payload["name"])
        if name not in self.foods:
            self.foods[name] = FoodReferenceItem(
                id=str(uuid4()),
                name=name,
                category=str(payload["category"]),
                calories=float(payload["calories_per_100g"]),
                protein_g=float(payload["protein_per_100g"]),
                carbs_g=float(payload["carbs_per_100g"]),
                fats_g=float(payload["fats_per_100g"]),
                fiber_g=float(payload["fiber_per_100g"]),
                created_by=created_by,
            )
        return self.foods[name]


@dataclass
class FakeFoodAnalysisClient(FoodAnalysisClient):
    """Fake completion client returning a fixed answer."""

    content: str = (
        '{"calories": 130.4, "protein_g": 2.74, "carbs_g": 28.2, '
        '"fats_g": 0.3, "fiber_g": 0.4, "confidence": "high", "notes": null}'
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        return self.content


@dataclass
class FakeChatStreamSource(ChatStreamSource):
    """Fake chat endpoint replaying fixed SSE chunks."""

    chunks: list[bytes] | None = field(
        default_factory=lambda: sse_chunks("Hello", " there")
    )
    error: Exception | None = None
    calls: list[list[ChatTurn]] = field(default_factory=list)

    @asynccontextmanager
    async def stream(
        self, session: UserSession, messages: list[ChatTurn]
    ) -> AsyncIterator[AsyncIterator[bytes] | None]:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        yield None if self.chunks is None else iter_chunks(self.chunks)


@dataclass
class FakeChatGateway(ChatGateway):
    """Fake AI gateway recording the forwarded conversation."""

    chunks: list[bytes] = field(default_factory=lambda: sse_chunks("Eat greens."))
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    @asynccontextmanager
    async def stream_chat_completion(
        self, *, model: str, messages: list[dict[str, str]]
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        self.calls.append({"model": model, "messages": messages})
        if self.error is not None:
            raise self.error
        yield iter_chunks(self.chunks)


@dataclass
class FakeSessionResolver(SessionResolver):
    """Accepts a fixed set of tokens."""

    sessions: dict[str, UserSession] = field(default_factory=dict)

    def resolve(self, access_token: str) -> UserSession | None:
        return self.sessions.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        ai_gateway_api_key="gateway-key",
    )


@pytest.fixture
def session() -> UserSession:
    return UserSession(user_id=TEST_USER_ID, access_token=TEST_TOKEN)


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def checkin_repository() -> InMemoryCheckinRepository:
    return InMemoryCheckinRepository()


@pytest.fixture
def chat_repository() -> InMemoryChatRepository:
    return InMemoryChatRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository()


@pytest.fixture
def food_analysis_client() -> FakeFoodAnalysisClient:
    return FakeFoodAnalysisClient()


@pytest.fixture
def chat_stream_source() -> FakeChatStreamSource:
    return FakeChatStreamSource()


@pytest.fixture
def chat_gateway() -> FakeChatGateway:
    return FakeChatGateway()


@pytest.fixture
def food_service(
    settings: Settings,
    food_repository: InMemoryFoodCatalogRepository,
    food_analysis_client: FakeFoodAnalysisClient,
) -> FoodService:
    return FoodService(
        repository=food_repository,
        analysis_client=food_analysis_client,
        cache=InMemoryCache(),
        model=settings.food_analysis_model,
    )


@pytest.fixture
def assistant_service(  # noqa: PLR0913
    settings: Settings,
    chat_gateway: FakeChatGateway,
    profile_repository: InMemoryProfileRepository,
    meal_repository: InMemoryMealRepository,
    activity_repository: InMemoryActivityRepository,
    checkin_repository: InMemoryCheckinRepository,
) -> HealthAssistantService:
    return HealthAssistantService(
        gateway=chat_gateway,
        profiles=profile_repository,
        meals=meal_repository,
        activities=activity_repository,
        checkins=checkin_repository,
        model=settings.chat_model,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    session: UserSession,
    profile_repository: InMemoryProfileRepository,
    activity_repository: InMemoryActivityRepository,
    meal_repository: InMemoryMealRepository,
    checkin_repository: InMemoryCheckinRepository,
    chat_repository: InMemoryChatRepository,
    chat_stream_source: FakeChatStreamSource,
    food_service: FoodService,
    assistant_service: HealthAssistantService,
) -> AppContainer:
    closed: list[bool] = []

    async def close_resources() -> None:
        closed.append(True)

    return AppContainer(
        settings=settings,
        session_resolver=FakeSessionResolver({TEST_TOKEN: session}),
        profile_service=ProfileService(profile_repository),
        activity_service=ActivityService(activity_repository, profile_repository),
        meal_service=MealService(meal_repository, food_service),
        checkin_service=CheckinService(checkin_repository),
        food_service=food_service,
        chat_service=ChatService(chat_repository, chat_stream_source),
        assistant_service=assistant_service,
        dashboard_service=DashboardService(
            profile_repository, activity_repository, meal_repository, checkin_repository
        ),
        close_resources=close_resources,
    )
