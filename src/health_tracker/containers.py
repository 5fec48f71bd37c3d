"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_tracker.adapters.ai_gateway_client import HttpxAiGatewayClient
from health_tracker.adapters.health_chat_client import HttpxHealthChatClient
from health_tracker.adapters.openai_food_analysis_client import (
    OpenAIFoodAnalysisClient,
)
from health_tracker.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from health_tracker.adapters.supabase_chat_repository import SupabaseChatRepository
from health_tracker.adapters.supabase_checkin_repository import (
    SupabaseCheckinRepository,
)
from health_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from health_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from health_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_tracker.adapters.supabase_session_resolver import (
    SessionResolver,
    SupabaseSessionResolver,
)
from health_tracker.config import Settings
from health_tracker.services.activities import ActivityService
from health_tracker.services.assistant import HealthAssistantService
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.chat import ChatService, ChatStreamSource
from health_tracker.services.checkins import CheckinService
from health_tracker.services.dashboard import DashboardService
from health_tracker.services.foods import FoodService
from health_tracker.services.meals import MealService
from health_tracker.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_resolver: SessionResolver
    profile_service: ProfileService
    activity_service: ActivityService
    meal_service: MealService
    checkin_service: CheckinService
    food_service: FoodService
    chat_service: ChatService
    assistant_service: HealthAssistantService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    activity_repository = SupabaseActivityRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    checkin_repository = SupabaseCheckinRepository(supabase_client)
    chat_repository = SupabaseChatRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)

    gateway_client = HttpxAiGatewayClient.create(
        api_key=resolved_settings.ai_gateway_api_key,
        base_url=resolved_settings.ai_gateway_url,
    )
    food_analysis_client = OpenAIFoodAnalysisClient.create(
        api_key=resolved_settings.ai_gateway_api_key,
        base_url=resolved_settings.ai_gateway_url,
    )

    profile_service = ProfileService(profile_repository)
    food_service = FoodService(
        repository=food_repository,
        analysis_client=food_analysis_client,
        cache=InMemoryCache(),
        model=resolved_settings.food_analysis_model,
    )
    assistant_service = HealthAssistantService(
        gateway=gateway_client,
        profiles=profile_repository,
        meals=meal_repository,
        activities=activity_repository,
        checkins=checkin_repository,
        model=resolved_settings.chat_model,
    )
    health_chat_client: HttpxHealthChatClient | None = None
    stream_source: ChatStreamSource = assistant_service
    if resolved_settings.health_chat_url:
        health_chat_client = HttpxHealthChatClient.create(
            url=resolved_settings.health_chat_url,
            public_key=resolved_settings.health_chat_public_key,
        )
        stream_source = health_chat_client

    async def close_resources() -> None:
        await gateway_client.close()
        await food_analysis_client.close()
        if health_chat_client is not None:
            await health_chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_resolver=SupabaseSessionResolver(supabase_client),
        profile_service=profile_service,
        activity_service=ActivityService(activity_repository, profile_repository),
        meal_service=MealService(meal_repository, food_service),
        checkin_service=CheckinService(checkin_repository),
        food_service=food_service,
        chat_service=ChatService(chat_repository, stream_source),
        assistant_service=assistant_service,
        dashboard_service=DashboardService(
            profile_repository, activity_repository, meal_repository, checkin_repository
        ),
        close_resources=close_resources,
    )
