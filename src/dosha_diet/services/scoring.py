"""Ayurvedic suitability scoring for catalog foods.

A food's score is the weighted sum of three buckets:

* dosha: impact tags, rasa (taste), guna (quality) and virya (energy) rules for
  the user's primary dosha, weighted x3;
* season: a small bonus for foods in season;
* nutrition: protein and calorie-density bonuses driven by health goals;

minus a fixed penalty when the food is on the user's disliked list. Allergies and
medical contraindications never reach the scorer; they are filtered out first.
"""

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType

from dosha_diet.domain.foods import DoshaTag, Energy, FoodItem, Quality, Season, Taste
from dosha_diet.domain.plans import ScoredFood
from dosha_diet.domain.profiles import Profile
from dosha_diet.services.nutrition import has_goal

DEFAULT_DOSHA = "Vata"

DOSHA_WEIGHT = 3.0
SEASON_WEIGHT = 1.0
NUTRITION_WEIGHT = 1.0
DISLIKED_PENALTY = 2.0

_PRIMARY_DOSHAS = (DoshaTag.VATA, DoshaTag.PITTA, DoshaTag.KAPHA)

_TASTE_RULES = MappingProxyType(
    {
        DoshaTag.PITTA: MappingProxyType(
            {
                Taste.PUNGENT: -1.0,
                Taste.SOUR: -1.0,
                Taste.SALTY: -1.0,
                Taste.SWEET: 1.0,
                Taste.BITTER: 1.0,
                Taste.ASTRINGENT: 1.0,
            }
        ),
        DoshaTag.KAPHA: MappingProxyType(
            {
                Taste.SWEET: -1.0,
                Taste.SOUR: -1.0,
                Taste.SALTY: -1.0,
                Taste.PUNGENT: 1.0,
                Taste.BITTER: 1.0,
                Taste.ASTRINGENT: 1.0,
            }
        ),
        DoshaTag.VATA: MappingProxyType(
            {
                Taste.SWEET: 1.0,
                Taste.SOUR: 1.0,
                Taste.SALTY: 1.0,
                Taste.PUNGENT: -1.0,
                Taste.BITTER: -1.0,
                Taste.ASTRINGENT: -1.0,
            }
        ),
    }
)

# Pitta has no guna rules.
_QUALITY_RULES = MappingProxyType(
    {
        DoshaTag.VATA: MappingProxyType(
            {
                Quality.DRY: -1.0,
                Quality.LIGHT: -1.0,
                Quality.HEAVY: 1.0,
                Quality.UNCTUOUS: 1.0,
            }
        ),
        DoshaTag.KAPHA: MappingProxyType(
            {
                Quality.HEAVY: -1.0,
                Quality.UNCTUOUS: -1.0,
                Quality.LIGHT: 1.0,
                Quality.DRY: 1.0,
            }
        ),
    }
)

_ENERGY_RULES = MappingProxyType(
    {
        (DoshaTag.PITTA, Energy.HEATING): -1.0,
        (DoshaTag.PITTA, Energy.COOLING): 1.0,
        (DoshaTag.VATA, Energy.COOLING): -0.5,
        (DoshaTag.KAPHA, Energy.COOLING): -0.5,
    }
)

_logger = logging.getLogger(__name__)


def primary_dosha(dosha: str | None) -> DoshaTag | None:
    """Return the first dosha of a label such as ``"Vata-Pitta"``."""
    if not dosha:
        return None
    head = dosha.replace("_", "-").split("-")[0].strip().capitalize()
    for tag in _PRIMARY_DOSHAS:
        if tag.value == head:
            return tag
    return None


def _normalised(names: Iterable[str]) -> set[str]:
    return {name.strip().lower() for name in names if name and name.strip()}


def is_contraindicated(profile: Profile, food: FoodItem) -> bool:
    """Return True when a medical condition rules the food out."""
    conditions = _normalised(profile.medical_conditions)
    if "diabetes" in conditions and food.is_sweetener:
        return True
    return "hypertension" in conditions and Taste.SALTY in food.tastes


def filter_candidates(profile: Profile, foods: Iterable[FoodItem]) -> list[FoodItem]:
    """Drop allergens and contraindicated foods, keeping catalog order.

    Disliked foods stay in the candidate list; they are penalised by the scorer.
    """
    allergies = _normalised(profile.allergies)
    return [
        food
        for food in foods
        if food.name.strip().lower() not in allergies
        and not is_contraindicated(profile, food)
    ]


def dosha_score(dosha: DoshaTag | None, food: FoodItem) -> float:
    """Impact, rasa, guna and virya terms for the user's primary dosha."""
    score = 0.0
    if DoshaTag.BALANCING in food.dosha_tags:
        score += 1
    if dosha is None:
        return score
    if dosha in food.dosha_tags:
        score -= 0.5

    taste_rules = _TASTE_RULES[dosha]
    for taste in food.tastes:
        score += taste_rules.get(taste, 0.0)

    quality_rules = _QUALITY_RULES.get(dosha, {})
    for quality in food.qualities:
        score += quality_rules.get(quality, 0.0)

    if food.energy is not None:
        score += _ENERGY_RULES.get((dosha, food.energy), 0.0)
    return score


def season_score(season: Season, food: FoodItem) -> float:
    """Bonus for year-round foods and foods tagged with the current season."""
    if not food.seasons:
        return 0.0
    if Season.ALL in food.seasons or season in food.seasons:
        return 0.5
    return 0.0


def nutrition_score(goals: Iterable[str], food: FoodItem) -> float:
    """Goal-driven protein and calorie-density bonuses."""
    goals = tuple(goals)
    protein = food.macros.protein_g
    calories = food.macros.calories
    score = 0.0
    if has_goal(goals, "weight_loss"):
        if protein >= 10:
            score += 1
        if calories < 150:
            score += 0.5
    if has_goal(goals, "muscle_gain") or has_goal(goals, "weight_gain"):
        if protein >= 15:
            score += 1.5
        if calories > 200:
            score += 0.5
    if protein >= 8:
        score += 0.5
    return score


def is_disliked(profile: Profile, food: FoodItem) -> bool:
    """Case-insensitive match of the food name against the disliked list."""
    return food.name.strip().lower() in _normalised(profile.disliked)


def _weighted_score(
    profile: Profile, food: FoodItem, season: Season, dosha: DoshaTag | None
) -> tuple[float, str]:
    s_dosha = dosha_score(dosha, food)
    s_season = season_score(season, food)
    s_nutrition = nutrition_score(profile.health_goals, food)
    penalty = DISLIKED_PENALTY if is_disliked(profile, food) else 0.0
    score = (
        s_dosha * DOSHA_WEIGHT
        + s_season * SEASON_WEIGHT
        + s_nutrition * NUTRITION_WEIGHT
        - penalty
    )
    breakdown = (
        f"dosha={s_dosha:g} season={s_season:g} "
        f"nutrition={s_nutrition:g} penalty={penalty:g}"
    )
    return score, breakdown


def score_food(
    profile: Profile, food: FoodItem, season: Season, dosha: str | None = None
) -> float:
    """Weighted suitability score; higher is better."""
    tag = primary_dosha(dosha or profile.dosha or DEFAULT_DOSHA)
    score, _ = _weighted_score(profile, food, season, tag)
    return score


def rank_foods(
    profile: Profile, foods: Sequence[FoodItem], season: Season, dosha: str
) -> list[ScoredFood]:
    """Score foods and sort best first; ties keep catalog order."""
    tag = primary_dosha(dosha)
    scored = []
    for food in foods:
        score, breakdown = _weighted_score(profile, food, season, tag)
        scored.append(ScoredFood(food=food, score=score, rationale=breakdown))
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    if ranked:
        _logger.debug(
            "Top food for %s in %s: %s (%s)",
            dosha,
            season,
            ranked[0].food.name,
            ranked[0].rationale,
        )
    return ranked


def explain_choice(food: FoodItem, dosha: str, score: float | None = None) -> str:
    """Human-readable reason a food was picked."""
    parts = []
    tag = primary_dosha(dosha)
    if DoshaTag.BALANCING in food.dosha_tags:
        parts.append("Tridoshic")
    elif tag is not None and tag in food.dosha_tags:
        parts.append(f"May aggravate {dosha}")
    else:
        parts.append(f"Balances {dosha}")

    if food.tastes:
        parts.append("Tastes: " + ", ".join(taste.value for taste in food.tastes))
    if food.energy is not None:
        parts.append(f"{food.energy.value.capitalize()} energy")
    if score is not None:
        parts.append(f"Score: {score:.1f}")
    return " • ".join(parts)
