"""Domain models for the prakriti quiz."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QuizAnswer:
    """Dosha points awarded by one quiz answer."""

    vata: float | None = None
    pitta: float | None = None
    kapha: float | None = None
    weight: float = 1.0
    question_id: str | None = None


@dataclass(frozen=True)
class QuizResult:
    """Constitution derived from quiz answers."""

    dosha_result: str
    primary_dosha: str
    secondary_dosha: str | None
    scores: dict[str, float]
    percentages: dict[str, float]
    balance: str
    total_questions: int
    weighted_total: float
    recommendations: list[str]
