"""Energy estimates: daily calorie goal, calories burned and BMI."""

from health_tracker.domain.profiles import Profile
from health_tracker.services.nutrition import round_half_up

FALLBACK_CALORIE_GOAL = 2000
DEFAULT_ACTIVITY_MULTIPLIER = 1.55
ACTIVITY_GOAL_MINUTES = 30

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_ADJUSTMENTS = {
    "weight_loss": -500,
    "muscle_gain": 300,
}

ACTIVITY_METS = {
    "walking": 3.5,
    "running": 9.8,
    "cycling": 7.5,
    "gym": 6.0,
    "yoga": 3.0,
    "swimming": 8.0,
    "hiit": 12.0,
    "stretching": 2.5,
}

INTENSITY_MULTIPLIERS = {
    "low": 0.8,
    "moderate": 1.0,
    "high": 1.2,
}

_BMI_UNDERWEIGHT = 18.5
_BMI_NORMAL = 25.0
_BMI_OVERWEIGHT = 30.0


def calculate_daily_calorie_goal(profile: Profile | None) -> int:
    """Estimate a daily calorie target using Mifflin-St Jeor.

    Returns the fallback goal unless weight, height and age are all set.
    """
    if (
        profile is None
        or not profile.weight_kg
        or not profile.height_cm
        or not profile.age
    ):
        return FALLBACK_CALORIE_GOAL

    bmr = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    bmr += 5 if profile.gender == "male" else -161

    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.activity_level or "", DEFAULT_ACTIVITY_MULTIPLIER
    )
    tdee = bmr * multiplier + GOAL_ADJUSTMENTS.get(profile.fitness_goal or "", 0)
    return int(round_half_up(tdee))


def calculate_progress(value: float, goal: float) -> int:
    """Return value/goal as a percentage capped at 100."""
    if goal <= 0:
        return 0
    return min(int(round_half_up(value / goal * 100)), 100)


def estimate_calories_burned(
    activity_type: str,
    duration_minutes: float,
    intensity: str,
    weight_kg: float | None,
) -> int:
    """Estimate calories burned from MET values.

    Yields 0 for an unknown activity type or a missing body weight.
    """
    base_met = ACTIVITY_METS.get(activity_type)
    if base_met is None or not weight_kg:
        return 0
    met = base_met * INTENSITY_MULTIPLIERS.get(intensity, 1.0)
    calories_per_minute = met * 3.5 * weight_kg / 200
    return int(round_half_up(calories_per_minute * duration_minutes))


def calculate_bmi(height_cm: float | None, weight_kg: float | None) -> float | None:
    """Return BMI to one decimal, or None without both measurements."""
    if not height_cm or not weight_kg:
        return None
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float) -> str:
    if bmi < _BMI_UNDERWEIGHT:
        return "Underweight"
    if bmi < _BMI_NORMAL:
        return "Normal"
    if bmi < _BMI_OVERWEIGHT:
        return "Overweight"
    return "Obese"
