"""Energy and macro arithmetic for plan targets."""

import math
from collections.abc import Iterable
from datetime import date

from dosha_diet.domain.foods import FoodItem
from dosha_diet.domain.plans import MacroTargets, PortionMacros
from dosha_diet.domain.profiles import Profile

DEFAULT_HEIGHT_CM = 170.0
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_AGE_YEARS = 25.0
FALLBACK_TARGET_CALORIES = 2000
_DAYS_PER_YEAR = 365.25
_MALE = {"m", "male"}

_ACTIVITY_FACTORS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
_DEFAULT_ACTIVITY_FACTOR = 1.55

_GOAL_ALIASES = {
    "weight_loss": frozenset({"weight_loss", "Weight Loss"}),
    "weight_gain": frozenset({"weight_gain", "Weight Gain"}),
    "muscle_gain": frozenset({"muscle_gain", "Muscle Gain"}),
}

# (goal, calorie multiplier) in priority order.
_CALORIE_ADJUSTMENTS = (
    ("weight_loss", 0.8),
    ("weight_gain", 1.15),
    ("muscle_gain", 1.1),
)

_GOAL_MACROS = (
    ("weight_loss", MacroTargets(protein=30, carbs=40, fats=30)),
    ("muscle_gain", MacroTargets(protein=25, carbs=50, fats=25)),
)
_DOSHA_MACROS = (
    ("Vata", MacroTargets(protein=20, carbs=50, fats=30)),
    ("Pitta", MacroTargets(protein=20, carbs=55, fats=25)),
    ("Kapha", MacroTargets(protein=25, carbs=45, fats=30)),
)
_DEFAULT_MACROS = MacroTargets(protein=20, carbs=55, fats=25)

_MEAL_SPLITS = {
    3: (0.30, 0.40, 0.30),
    4: (0.25, 0.35, 0.10, 0.30),
    5: (0.20, 0.30, 0.10, 0.30, 0.10),
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves always going up rather than to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def has_goal(goals: Iterable[str], goal: str) -> bool:
    """Return True when any spelling of ``goal`` is present."""
    aliases = _GOAL_ALIASES.get(goal, frozenset({goal}))
    return any(item in aliases for item in goals)


def resolve_age(profile: Profile, today: date | None = None) -> float:
    """Return the profile age, derived from the birth date when needed."""
    if profile.age_years is not None:
        return float(profile.age_years)
    if profile.birth_date is not None:
        current = today or date.today()
        return float(math.floor((current - profile.birth_date).days / _DAYS_PER_YEAR))
    return DEFAULT_AGE_YEARS


def basal_metabolic_rate(profile: Profile, today: date | None = None) -> float:
    """Mifflin-St Jeor BMR with silent defaults for missing fields."""
    weight = profile.weight_kg if profile.weight_kg is not None else DEFAULT_WEIGHT_KG
    height = profile.height_cm if profile.height_cm is not None else DEFAULT_HEIGHT_CM
    age = resolve_age(profile, today)
    sex = (profile.sex or "M").strip().lower()
    sex_constant = 5 if sex in _MALE else -161
    return 10 * weight + 6.25 * height - 5 * age + sex_constant


def total_daily_energy_expenditure(profile: Profile, today: date | None = None) -> int:
    """BMR scaled by the activity factor."""
    factor = _ACTIVITY_FACTORS.get(
        str(profile.activity_level or ""), _DEFAULT_ACTIVITY_FACTOR
    )
    return int(round_half_up(basal_metabolic_rate(profile, today) * factor))


def target_calories(profile: Profile, today: date | None = None) -> int:
    """Daily calorie target adjusted by the highest-priority goal."""
    tdee = total_daily_energy_expenditure(profile, today)
    target = tdee
    for goal, multiplier in _CALORIE_ADJUSTMENTS:
        if has_goal(profile.health_goals, goal):
            target = int(round_half_up(tdee * multiplier))
            break
    if target <= 0:
        return FALLBACK_TARGET_CALORIES
    return target


def macro_targets(profile: Profile) -> MacroTargets:
    """Macro split: goal overrides win over the dosha default."""
    for goal, targets in _GOAL_MACROS:
        if has_goal(profile.health_goals, goal):
            return targets
    dosha = profile.dosha or "Vata"
    for name, targets in _DOSHA_MACROS:
        if name in dosha:
            return targets
    return _DEFAULT_MACROS


def food_macros(food: FoodItem, grams: float) -> PortionMacros:
    """Scale a food's per-100g macros to a portion."""
    scale = grams / 100
    return PortionMacros(
        calories=int(round_half_up(food.macros.calories * scale)),
        protein=round_half_up(food.macros.protein_g * scale, 1),
        carbs=round_half_up(food.macros.carbs_g * scale, 1),
        fats=round_half_up(food.macros.fat_g * scale, 1),
    )


def split_meal_calories(total_calories: float, meal_count: int) -> list[int]:
    """Split a daily calorie target across meals using fixed percentages."""
    shares = _MEAL_SPLITS.get(meal_count, _MEAL_SPLITS[3])
    return [int(round_half_up(total_calories * share)) for share in shares]
