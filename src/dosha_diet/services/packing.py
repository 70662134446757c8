"""Greedy meal packing against a per-slot calorie target."""

from collections.abc import Sequence
from dataclasses import dataclass

from dosha_diet.domain.foods import FoodCategory
from dosha_diet.domain.plans import MealType, PlanItem, ScoredFood
from dosha_diet.services.nutrition import food_macros, round_half_up
from dosha_diet.services.scoring import explain_choice

MEAL_PREFERENCES: dict[str, frozenset[FoodCategory]] = {
    MealType.BREAKFAST: frozenset(
        {FoodCategory.GRAIN, FoodCategory.FRUIT, FoodCategory.DAIRY, FoodCategory.NUT}
    ),
    MealType.LUNCH: frozenset(
        {
            FoodCategory.GRAIN,
            FoodCategory.LEGUME,
            FoodCategory.VEGETABLE,
            FoodCategory.PROTEIN,
        }
    ),
    MealType.SNACK: frozenset(
        {FoodCategory.FRUIT, FoodCategory.NUT, FoodCategory.DAIRY}
    ),
    MealType.DINNER: frozenset(
        {
            FoodCategory.GRAIN,
            FoodCategory.LEGUME,
            FoodCategory.VEGETABLE,
            FoodCategory.PROTEIN,
        }
    ),
}

BASE_PORTIONS_G: dict[str, int] = {
    MealType.BREAKFAST: 120,
    MealType.LUNCH: 150,
    MealType.SNACK: 80,
    MealType.DINNER: 130,
}
_DEFAULT_BASE_PORTION_G = 120
MIN_PORTION_G = 50

ACCEPT_CEILING = 1.15
FILL_CEILING = 1.1
TOP_UP_THRESHOLD = 0.7
TOP_UP_STOP = 0.9


@dataclass(frozen=True)
class PackedMeal:
    """Items chosen for one slot and their calorie sum."""

    items: list[PlanItem]
    calories: int


def max_items(meal_type: str) -> int:
    """Snacks hold two items, full meals three."""
    return 2 if meal_type == MealType.SNACK else 3


def portion_size(
    calories_per_100g: float, remaining_calories: float, meal_type: str
) -> int:
    """Grams that would use up the remaining budget, bounded to a sane serving."""
    base = BASE_PORTIONS_G.get(meal_type, _DEFAULT_BASE_PORTION_G)
    if calories_per_100g <= 0:
        return MIN_PORTION_G
    calculated = round_half_up(remaining_calories / calories_per_100g * 100)
    upper = round_half_up(base * 1.5)
    return int(max(MIN_PORTION_G, min(calculated, upper)))


class _MealBuilder:
    def __init__(self, target_calories: float, meal_type: str, dosha: str) -> None:
        self.target = target_calories
        self.meal_type = meal_type
        self.dosha = dosha
        self.limit = max_items(meal_type)
        self.items: list[PlanItem] = []
        self.calories = 0
        self.used: set[str] = set()

    def full(self) -> bool:
        return (
            len(self.items) >= self.limit
            or self.calories >= self.target * FILL_CEILING
        )

    def candidate(self, scored: ScoredFood) -> PlanItem:
        food = scored.food
        grams = portion_size(
            food.macros.calories, self.target - self.calories, self.meal_type
        )
        return PlanItem(
            food_id=food.id,
            name=food.name,
            grams=grams,
            portion=f"{grams}g",
            macros=food_macros(food, grams),
            why=explain_choice(food, self.dosha, scored.score),
        )

    def add(self, scored: ScoredFood, item: PlanItem) -> None:
        self.items.append(item)
        self.calories += item.macros.calories
        self.used.add(scored.food.key)


def pack_meal(
    ranked: Sequence[ScoredFood], target_calories: float, meal_type: str, dosha: str
) -> PackedMeal:
    """Pick up to two or three foods for a slot, best score first.

    The first pass only considers the meal's preferred food categories and refuses
    items that would overshoot the target by more than 15%. If that leaves the slot
    empty or under 70% of target, a second pass tops it up from any category.
    """
    builder = _MealBuilder(target_calories, meal_type, dosha)
    preferred = MEAL_PREFERENCES.get(meal_type, frozenset())

    for scored in ranked:
        if builder.full():
            break
        food = scored.food
        if food.key in builder.used:
            continue
        if preferred and food.category not in preferred:
            continue
        item = builder.candidate(scored)
        if builder.calories + item.macros.calories <= target_calories * ACCEPT_CEILING:
            builder.add(scored, item)

    if not builder.items or builder.calories < target_calories * TOP_UP_THRESHOLD:
        for scored in ranked:
            if builder.full():
                break
            if scored.food.key in builder.used:
                continue
            builder.add(scored, builder.candidate(scored))
            if builder.calories >= target_calories * TOP_UP_STOP:
                break

    return PackedMeal(items=builder.items, calories=builder.calories)
