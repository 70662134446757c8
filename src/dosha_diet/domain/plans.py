"""Domain models for generated diet plans."""

from dataclasses import dataclass
from enum import StrEnum

from dosha_diet.domain.foods import FoodItem, Season


class MealType(StrEnum):
    """Meal slot labels."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"


class PlanType(StrEnum):
    """Requested plan horizon."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class MacroTargets:
    """Macro split in percent of daily calories."""

    protein: int
    carbs: int
    fats: int


@dataclass(frozen=True)
class PortionMacros:
    """Macros for a concrete portion of a food."""

    calories: int
    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class ScoredFood:
    """A candidate food with its suitability score for one plan request."""

    food: FoodItem
    score: float
    rationale: str


@dataclass(frozen=True)
class PlanItem:
    """A food chosen for a meal slot."""

    food_id: str | None
    name: str
    grams: int
    portion: str
    macros: PortionMacros
    why: str


@dataclass(frozen=True)
class MealSlot:
    """One meal of the plan with its calorie sub-target and chosen items."""

    meal_type: MealType
    target_calories: int
    items: tuple[PlanItem, ...]
    total_calories: int
    explanations: tuple[str, ...]


@dataclass(frozen=True)
class Plan:
    """A generated plan; built once per request and never mutated."""

    dosha_target: str
    season: Season
    plan_type: str
    target_calories: int
    total_calories: int
    macro_targets: MacroTargets
    meals: tuple[MealSlot, ...]
