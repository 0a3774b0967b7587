"""Personality bands and player roles for team formation.

A participant's raw personality score (survey total, 50–100) maps onto one of
three disjoint bands: LEADER / BALANCED / THINKER.  Roles are a fixed closed set.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Closed sets
# ---------------------------------------------------------------------------
PersonalityType = Literal["LEADER", "BALANCED", "THINKER"]
Role = Literal["STRATEGIST", "ATTACKER", "DEFENDER", "SUPPORTER", "COORDINATOR"]

ROLES: tuple[str, ...] = get_args(Role)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class PersonalityBand(BaseModel):
    """Inclusive score range mapped to a single personality type."""

    model_config = ConfigDict(frozen=True)

    id: PersonalityType
    display_name: str = Field(..., min_length=1)
    min_score: int
    max_score: int

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score


# ---------------------------------------------------------------------------
# Pre-defined bands (disjoint, highest first)
# ---------------------------------------------------------------------------
PERSONALITY_BANDS: dict[str, PersonalityBand] = {
    "LEADER": PersonalityBand(id="LEADER", display_name="Leader", min_score=90, max_score=100),
    "BALANCED": PersonalityBand(id="BALANCED", display_name="Balanced", min_score=70, max_score=89),
    "THINKER": PersonalityBand(id="THINKER", display_name="Thinker", min_score=50, max_score=69),
}

ROLE_DISPLAY_NAMES: dict[str, str] = {
    "STRATEGIST": "Strategist",
    "ATTACKER": "Attacker",
    "DEFENDER": "Defender",
    "SUPPORTER": "Supporter",
    "COORDINATOR": "Coordinator",
}

# Lower value = assigned earlier by the team generator.
_PRIORITY: dict[str, int] = {"LEADER": 0, "THINKER": 1}
_DEFAULT_PRIORITY = 2


def classify_personality(score: int) -> PersonalityType:
    """Map a raw personality score onto its band.

    Raises:
        ValueError: If *score* falls outside every band.
    """
    for band in PERSONALITY_BANDS.values():
        if band.contains(score):
            return band.id
    raise ValueError(f"Invalid personality score: {score}")


def personality_priority(personality_type: str) -> int:
    """Sort key used to seed LEADERs, then THINKERs, across teams."""
    return _PRIORITY.get(personality_type, _DEFAULT_PRIORITY)


def parse_role(text: str) -> Role:
    """Parse a role name case-insensitively (e.g. ``" attacker "``)."""
    if text is None or not text.strip():
        raise ValueError("Role cannot be empty")
    key = text.strip().upper()
    if key not in ROLES:
        raise ValueError(f"Invalid role: {text}")
    return key  # type: ignore[return-value]


def get_band(personality_type: str) -> PersonalityBand | None:
    """Look up a band by personality type."""
    return PERSONALITY_BANDS.get(personality_type)
