"""Nutrition scaling from a per-100 g basis."""

import math

from health_tracker.domain.foods import FoodReferenceItem, ScaledNutrition


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, matching JavaScript's ``Math.round``."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def coerce_weight(raw: object) -> float:
    """Return a non-negative gram weight; anything unparseable becomes 0."""
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return value


def scale_nutrition(food: FoodReferenceItem, weight_grams: object) -> ScaledNutrition:
    """Scale a food's per-100 g macros to the given weight."""
    multiplier = coerce_weight(weight_grams) / 100
    return ScaledNutrition(
        calories=int(round_half_up(food.calories * multiplier)),
        protein_g=round_half_up(food.protein_g * multiplier, 1),
        carbs_g=round_half_up(food.carbs_g * multiplier, 1),
        fats_g=round_half_up(food.fats_g * multiplier, 1),
        fiber_g=round_half_up(food.fiber_g * multiplier, 1),
    )
