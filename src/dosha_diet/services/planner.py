"""Plan assembly: targets, ranking and per-slot packing."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date

from dosha_diet.domain.foods import FoodItem, Season
from dosha_diet.domain.plans import MealSlot, MealType, Plan, PlanType
from dosha_diet.domain.profiles import Profile
from dosha_diet.services import nutrition
from dosha_diet.services.catalog import CatalogService
from dosha_diet.services.packing import pack_meal
from dosha_diet.services.scoring import DEFAULT_DOSHA, filter_candidates, rank_foods

DAILY_MEALS = (MealType.BREAKFAST, MealType.LUNCH, MealType.SNACK, MealType.DINNER)
MAIN_MEALS = (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER)

_logger = logging.getLogger(__name__)


def season_for_month(month: int) -> Season:
    """Quarterly season mapping used by the engine."""
    if 3 <= month <= 5:  # noqa: PLR2004
        return Season.SPRING
    if 6 <= month <= 8:  # noqa: PLR2004
        return Season.MONSOON
    if 9 <= month <= 11:  # noqa: PLR2004
        return Season.AUTUMN
    return Season.WINTER


def meal_types_for(plan_type: str) -> tuple[MealType, ...]:
    """Daily plans get a snack slot; every other plan type gets three meals."""
    if plan_type == PlanType.DAILY:
        return DAILY_MEALS
    return MAIN_MEALS


def _resolve_target(
    profile: Profile, explicit: float | None, today: date | None
) -> int:
    if explicit is None or not math.isfinite(explicit) or explicit <= 0:
        return nutrition.target_calories(profile, today)
    return int(nutrition.round_half_up(explicit))


def generate_plan(  # noqa: PLR0913
    profile: Profile,
    foods: Sequence[FoodItem],
    plan_type: str = PlanType.DAILY,
    target_calories: float | None = None,
    *,
    today: date | None = None,
    default_dosha: str = DEFAULT_DOSHA,
) -> Plan:
    """Build a plan for one profile from a read-only food catalog.

    An empty catalog, or one emptied by allergy and contraindication filtering,
    yields a plan whose slots are all empty and whose total is zero.
    """
    current = today or date.today()
    dosha = profile.dosha or default_dosha
    season = season_for_month(current.month)
    target = _resolve_target(profile, target_calories, current)

    candidates = filter_candidates(profile, foods)
    _logger.debug(
        "Plan candidates: %s of %s foods after filtering", len(candidates), len(foods)
    )
    ranked = rank_foods(profile, candidates, season, dosha)

    meal_types = meal_types_for(plan_type)
    slot_targets = nutrition.split_meal_calories(target, len(meal_types))

    meals = []
    for meal_type, slot_target in zip(meal_types, slot_targets, strict=True):
        packed = pack_meal(ranked, slot_target, meal_type, dosha)
        meals.append(
            MealSlot(
                meal_type=meal_type,
                target_calories=slot_target,
                items=tuple(packed.items),
                total_calories=packed.calories,
                explanations=tuple(item.why for item in packed.items if item.why),
            )
        )

    return Plan(
        dosha_target=dosha,
        season=season,
        plan_type=str(plan_type),
        target_calories=target,
        total_calories=sum(meal.total_calories for meal in meals),
        macro_targets=nutrition.macro_targets(replace(profile, dosha=dosha)),
        meals=tuple(meals),
    )


@dataclass
class PlanService:
    """Application service generating plans from the configured catalog."""

    catalog: CatalogService
    default_dosha: str = DEFAULT_DOSHA
    debug: bool = False

    def generate(
        self,
        profile: Profile,
        plan_type: str = PlanType.DAILY,
        target_calories: float | None = None,
        today: date | None = None,
    ) -> Plan:
        """Generate a plan against the current catalog snapshot."""
        foods = self.catalog.list_foods()
        plan = generate_plan(
            profile,
            foods,
            plan_type,
            target_calories,
            today=today,
            default_dosha=self.default_dosha,
        )
        if not foods:
            _logger.warning("Food catalog is empty; generated plan has no items")
        if self.debug:
            _logger.info(
                "Plan generated: dosha=%s season=%s target=%s total=%s",
                plan.dosha_target,
                plan.season,
                plan.target_calories,
                plan.total_calories,
            )
        return plan
