"""Food lookup, shared catalog and AI nutrition estimates."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError

from health_tracker.domain.food_analysis import FoodAnalysis
from health_tracker.domain.foods import FoodReferenceItem
from health_tracker.domain.sessions import UserSession
from health_tracker.food_database import FOOD_DATABASE
from health_tracker.services.cache import Cache
from health_tracker.services.nutrition import coerce_weight, round_half_up

ALL_CATEGORIES = "All"
DEFAULT_ANALYSIS_WEIGHT_G = 100.0

FOOD_ANALYSIS_PROMPT = """You are a nutrition expert AI. Analyze foods and provide \
accurate nutritional information.

IMPORTANT: Always respond with ONLY valid JSON in this exact format, no other text:
{
  "calories": number,
  "protein_g": number,
  "carbs_g": number,
  "fats_g": number,
  "fiber_g": number,
  "confidence": "high" | "medium" | "low",
  "notes": "optional brief note about the food"
}

All values should be for the specified weight. Round to 1 decimal place.
If you're uncertain about a food, use your best estimate and set confidence to \
"low" or "medium"."""

_CODE_FENCE = re.compile(r"```(?:json)?\n?")

_logger = logging.getLogger(__name__)


class FoodAnalysisError(RuntimeError):
    """AI food analysis could not produce an estimate."""


class FoodCatalogRepository(Protocol):
    """Persistence interface for the shared food catalog."""

    def search_foods(
        self, query: str | None, category: str | None, limit: int
    ) -> list[FoodReferenceItem]:
        """Search catalog foods by name and category."""

    def get_food(self, food_id: str) -> FoodReferenceItem | None:
        """Return a catalog food by id, if present."""

    def upsert_food(
        self, payload: dict[str, object], created_by: UUID
    ) -> FoodReferenceItem:
        """Insert a food unless its name exists; return the stored row."""


class FoodAnalysisClient(Protocol):
    """Interface for the LLM completion used to estimate nutrition."""

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the assistant message text for a chat completion."""


@dataclass
class FoodService:
    """Searches bundled and shared foods and runs AI estimates."""

    repository: FoodCatalogRepository
    analysis_client: FoodAnalysisClient
    cache: Cache
    model: str
    analysis_ttl_seconds: int = 86400
    catalog_limit: int = 50

    def search(
        self, query: str | None = None, category: str | None = None
    ) -> list[FoodReferenceItem]:
        """Filter by category, then case-insensitive name substring."""
        results = search_static_foods(query, category)
        seen = {food.name.lower() for food in results}
        category_filter = None if category in {None, "", ALL_CATEGORIES} else category
        for food in self.repository.search_foods(
            query or None, category_filter, self.catalog_limit
        ):
            if food.name.lower() in seen:
                continue
            seen.add(food.name.lower())
            results.append(food)
        return results

    def get_food(self, food_id: str) -> FoodReferenceItem | None:
        """Return a bundled or catalog food by id."""
        for food in FOOD_DATABASE:
            if food.id == food_id:
                return food
        return self.repository.get_food(food_id)

    def contribute(
        self, session: UserSession, analysis: FoodAnalysis, category: str = "Custom"
    ) -> FoodReferenceItem:
        """Save an AI estimate to the shared catalog, normalised to 100 g."""
        factor = 100 / analysis.weight_grams
        payload: dict[str, object] = {
            "name": analysis.food_name.strip(),
            "category": category,
            "calories_per_100g": round_half_up(analysis.calories * factor, 1),
            "protein_per_100g": round_half_up(analysis.protein_g * factor, 1),
            "carbs_per_100g": round_half_up(analysis.carbs_g * factor, 1),
            "fats_per_100g": round_half_up(analysis.fats_g * factor, 1),
            "fiber_per_100g": round_half_up(analysis.fiber_g * factor, 1),
        }
        return self.repository.upsert_food(payload, created_by=session.user_id)

    async def analyze(
        self, food_name: str, weight_grams: object = None
    ) -> FoodAnalysis:
        """Estimate nutrition for a named food at a weight (default 100 g)."""
        name = (food_name or "").strip()
        if not name:
            raise ValueError("Food name is required")
        weight = coerce_weight(weight_grams) or DEFAULT_ANALYSIS_WEIGHT_G

        cache_key = f"food:analysis:{name.lower()}:{weight:g}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodAnalysis):
            return cached

        content = await self.analysis_client.complete(
            model=self.model,
            messages=[
                {"role": "system", "content": FOOD_ANALYSIS_PROMPT},
                {
                    "role": "user",
                    "content": (
                        f'Analyze the nutritional content of "{name}" for '
                        f"{weight:g} grams. Provide calories, protein, carbs, "
                        "fats, and fiber."
                    ),
                },
            ],
            temperature=0.3,
            max_tokens=500,
        )
        analysis = parse_food_analysis(content, name, weight)
        self.cache.set(cache_key, analysis, ttl_seconds=self.analysis_ttl_seconds)
        return analysis


def search_static_foods(
    query: str | None = None, category: str | None = None
) -> list[FoodReferenceItem]:
    """Search the bundled food table."""
    results = list(FOOD_DATABASE)
    if category and category != ALL_CATEGORIES:
        results = [food for food in results if food.category == category]
    if query:
        lowered = query.lower()
        results = [food for food in results if lowered in food.name.lower()]
    return results


def parse_food_analysis(content: str, food_name: str, weight: float) -> FoodAnalysis:
    """Parse the model's JSON answer, tolerating Markdown code fences."""
    cleaned = _CODE_FENCE.sub("", content).strip()
    try:
        raw = json.loads(cleaned)
        return FoodAnalysis(
            food_name=food_name,
            weight_grams=weight,
            calories=int(round_half_up(float(raw["calories"]))),
            protein_g=round_half_up(float(raw["protein_g"]), 1),
            carbs_g=round_half_up(float(raw["carbs_g"]), 1),
            fats_g=round_half_up(float(raw["fats_g"]), 1),
            fiber_g=round_half_up(float(raw["fiber_g"]), 1),
            confidence=raw.get("confidence") or "medium",
            notes=raw.get("notes") or None,
        )
    except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
        _logger.warning("Failed to parse AI food analysis: %s", content)
        raise FoodAnalysisError("Failed to parse nutrition data") from exc
