"""Food reference and nutrition domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class FoodReferenceItem:
    """Catalog entry with macro values per 100 g."""

    id: str
    name: str
    category: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    fiber_g: float
    serving_size_g: float | None = None
    created_by: UUID | None = None


@dataclass(frozen=True)
class ScaledNutrition:
    """Macros scaled to a serving weight."""

    calories: int
    protein_g: float
    carbs_g: float
    fats_g: float
    fiber_g: float
