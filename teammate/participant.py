"""Participant records consumed by the formation engine.

Participants are immutable once built; loaders and surveys construct them and
validation happens at construction time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from teammate.personality_types import (
    PERSONALITY_BANDS,
    ROLE_DISPLAY_NAMES,
    PersonalityType,
    Role,
    classify_personality,
)


_HIGH_SKILL_THRESHOLD = 8
_SURVEY_QUESTIONS = 5
_SURVEY_MULTIPLIER = 4


class Identity(BaseModel):
    """Id + display name shared by participants and teams."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class Participant(BaseModel):
    """A single club member with game, role and personality attributes."""

    model_config = ConfigDict(frozen=True)

    identity: Identity
    email: str
    preferred_game: str = Field(..., min_length=1)
    skill_level: int = Field(..., ge=1, le=10)
    preferred_role: Role
    personality_score: int

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email format")
        return v

    @field_validator("personality_score")
    @classmethod
    def validate_personality_score(cls, v: int) -> int:
        classify_personality(v)
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def personality_type(self) -> PersonalityType:
        return classify_personality(self.personality_score)

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        email: str,
        preferred_game: str,
        skill_level: int,
        preferred_role: str,
        personality_score: int,
    ) -> Participant:
        """Build a participant from flat loader fields."""
        return cls(
            identity=Identity(id=id, name=name),
            email=email,
            preferred_game=preferred_game,
            skill_level=skill_level,
            preferred_role=preferred_role,
            personality_score=personality_score,
        )

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def is_high_skill(self) -> bool:
        return self.skill_level >= _HIGH_SKILL_THRESHOLD

    @property
    def has_leadership_potential(self) -> bool:
        return self.personality_type == "LEADER"

    def display_info(self) -> str:
        band = PERSONALITY_BANDS[self.personality_type]
        return (
            f"{self.id}: {self.name} | {self.preferred_game} | "
            f"{ROLE_DISPLAY_NAMES[self.preferred_role]} | Skill: {self.skill_level} | {band.display_name}"
        )


class SurveyResponse(BaseModel):
    """Answers to the five-question personality survey (1–5 each).

    The total (sum × 4) lands in 20–100 and is used as a personality score.
    """

    model_config = ConfigDict(frozen=True)

    participant_id: str = Field(..., min_length=1)
    answers: tuple[int, ...] = Field(..., min_length=_SURVEY_QUESTIONS, max_length=_SURVEY_QUESTIONS)

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if any(a < 1 or a > 5 for a in v):
            raise ValueError("Answers must be between 1 and 5")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_score(self) -> int:
        return sum(self.answers) * _SURVEY_MULTIPLIER
