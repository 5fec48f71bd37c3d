"""Models for AI food analysis results."""

from typing import Literal

from pydantic import BaseModel, Field


class FoodAnalysis(BaseModel):
    """Nutrition estimate for a named food at a given weight."""

    food_name: str
    weight_grams: float = Field(gt=0.0)
    calories: int = Field(ge=0)
    protein_g: float = Field(ge=0.0)
    carbs_g: float = Field(ge=0.0)
    fats_g: float = Field(ge=0.0)
    fiber_g: float = Field(ge=0.0)
    confidence: Literal["high", "medium", "low"] = "medium"
    notes: str | None = None
