"""Prakriti quiz scoring."""

from collections.abc import Sequence

from dosha_diet.domain.quiz import QuizAnswer, QuizResult
from dosha_diet.services.nutrition import round_half_up

_DOSHAS = ("vata", "pitta", "kapha")
SECONDARY_RATIO = 0.7
MAX_RECOMMENDATIONS = 5

_RECOMMENDATIONS = {
    "vata": (
        "Eat warm, cooked, and grounding foods",
        "Maintain regular meal times and sleep schedule",
        "Practice calming activities like yoga and meditation",
        "Stay warm and avoid excessive cold exposure",
    ),
    "pitta": (
        "Choose cooling foods and avoid spicy, fried items",
        "Practice patience and avoid overworking",
        "Engage in moderate exercise, avoid extreme heat",
        "Include sweet, bitter, and astringent tastes",
    ),
    "kapha": (
        "Favor light, warm, and stimulating foods",
        "Stay active with regular vigorous exercise",
        "Reduce heavy, oily, and sweet foods",
        "Wake early and avoid daytime naps",
    ),
}


class QuizError(ValueError):
    """Raised for quiz submissions that cannot be scored."""


def _balance(dominant_pct: float, has_secondary: bool) -> str:
    if dominant_pct > 60:  # noqa: PLR2004
        return "strongly_dominant"
    if dominant_pct > 45:  # noqa: PLR2004
        return "dominant"
    if dominant_pct < 40 and has_secondary:  # noqa: PLR2004
        return "dual_constitution"
    return "balanced"


def recommendations_for(primary: str, secondary: str | None) -> list[str]:
    """Lifestyle tips for the dominant dosha, topped up from the secondary."""
    tips = list(_RECOMMENDATIONS[primary.lower()])
    if secondary:
        tips.extend(_RECOMMENDATIONS[secondary.lower()][:2])
    return tips[:MAX_RECOMMENDATIONS]


def score_quiz(answers: Sequence[QuizAnswer]) -> QuizResult:
    """Weight and total the answers, then name the constitution."""
    if not answers:
        raise QuizError("answers[] required")
    invalid = [
        answer
        for answer in answers
        if answer.vata is None and answer.pitta is None and answer.kapha is None
    ]
    if invalid:
        raise QuizError(
            f"{len(invalid)} answer(s) carry no vata, pitta or kapha score"
        )

    scores = dict.fromkeys(_DOSHAS, 0.0)
    total_weight = 0.0
    for answer in answers:
        weight = answer.weight or 1.0
        total_weight += weight
        scores["vata"] += (answer.vata or 0) * weight
        scores["pitta"] += (answer.pitta or 0) * weight
        scores["kapha"] += (answer.kapha or 0) * weight

    total = sum(scores.values())
    percentages = {
        dosha: round_half_up(scores[dosha] / total * 100, 1) if total > 0 else 0.0
        for dosha in _DOSHAS
    }

    ordered = sorted(_DOSHAS, key=lambda dosha: scores[dosha], reverse=True)
    dominant, runner_up = ordered[0], ordered[1]
    secondary = (
        runner_up if scores[runner_up] > scores[dominant] * SECONDARY_RATIO else None
    )

    constitution = dominant.capitalize()
    if secondary:
        constitution = f"{constitution}-{secondary.capitalize()}"

    return QuizResult(
        dosha_result=constitution,
        primary_dosha=dominant.capitalize(),
        secondary_dosha=secondary.capitalize() if secondary else None,
        scores=scores,
        percentages=percentages,
        balance=_balance(percentages[dominant], secondary is not None),
        total_questions=len(answers),
        weighted_total=total_weight,
        recommendations=recommendations_for(dominant, secondary),
    )
