"""Pydantic models for API request payloads."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from dosha_diet.domain.profiles import ActivityLevel, Profile
from dosha_diet.domain.quiz import QuizAnswer


class PreferencesPayload(BaseModel):
    """Food likes and dislikes."""

    liked: list[str] = Field(default_factory=list)
    disliked: list[str] = Field(default_factory=list)


class ProfilePayload(BaseModel):
    """User profile as submitted by clients."""

    dosha_result: (
        Literal["Vata", "Pitta", "Kapha", "Vata-Pitta", "Pitta-Kapha", "Vata-Kapha"]
        | None
    ) = None
    age_years: float | None = Field(default=None, ge=1, le=120)
    dob: date | None = None
    sex: Literal["M", "F", "O"] | None = None
    height_cm: float | None = Field(default=None, ge=50, le=300)
    weight_kg: float | None = Field(default=None, ge=20, le=300)
    activity_level: ActivityLevel | None = None
    health_goals: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    preferences: PreferencesPayload = Field(default_factory=PreferencesPayload)
    medical_conditions: list[str] = Field(default_factory=list)

    def to_profile(self) -> Profile:
        """Convert the payload into the engine's profile model."""
        return Profile(
            dosha=self.dosha_result,
            age_years=self.age_years,
            birth_date=self.dob,
            sex=self.sex,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            health_goals=frozenset(self.health_goals),
            disliked=frozenset(self.preferences.disliked),
            allergies=frozenset(self.allergies),
            medical_conditions=frozenset(self.medical_conditions),
        )


class PlanRequest(BaseModel):
    """Diet plan generation request."""

    user_id: str | None = None
    profile: ProfilePayload
    plan_type: Literal["daily", "weekly", "monthly"] = "daily"
    target_calories: float | None = Field(default=None, ge=800, le=5000)


class QuizAnswerPayload(BaseModel):
    """One answered quiz question."""

    q_id: str | None = Field(default=None, alias="qId")
    vata: float | None = Field(default=None, ge=0, le=5)
    pitta: float | None = Field(default=None, ge=0, le=5)
    kapha: float | None = Field(default=None, ge=0, le=5)
    weight: float = Field(default=1.0, gt=0)

    model_config = ConfigDict(populate_by_name=True)

    def to_answer(self) -> QuizAnswer:
        """Convert the payload into a domain answer."""
        return QuizAnswer(
            vata=self.vata,
            pitta=self.pitta,
            kapha=self.kapha,
            weight=self.weight,
            question_id=self.q_id,
        )


class QuizRequest(BaseModel):
    """Prakriti quiz submission."""

    answers: list[QuizAnswerPayload] = Field(default_factory=list)
