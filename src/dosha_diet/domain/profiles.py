"""User profile domain models."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class Profile:
    """Caller-supplied profile; every field is optional."""

    dosha: str | None = None
    age_years: float | None = None
    birth_date: date | None = None
    sex: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: str | None = None
    health_goals: frozenset[str] = field(default_factory=frozenset)
    disliked: frozenset[str] = field(default_factory=frozenset)
    allergies: frozenset[str] = field(default_factory=frozenset)
    medical_conditions: frozenset[str] = field(default_factory=frozenset)
