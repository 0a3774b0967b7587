"""Team balance scoring — game variety, role diversity and personality mix.

All functions are *pure* and depend only on the multiset of member attributes,
never on insertion order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from teammate.team import Team


# ---------------------------------------------------------------------------
# Scoring weights
# ---------------------------------------------------------------------------
GAME_VARIETY_POINTS = 25.0
ROLE_DIVERSITY_POINTS = 25.0
PERSONALITY_MIX_POINTS = 50.0
PERSONALITY_PARTIAL_POINTS = 25.0

_MAX_PER_GAME = 2
_MIN_DISTINCT_ROLES = 3
_MAX_THINKERS = 2


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
class TeamBalance(BaseModel):
    """Per-criterion breakdown of a team's balance score."""

    game_variety: bool
    role_diversity: bool
    personality_mix: bool
    score: float = Field(ge=0.0, le=100.0)
    issues: list[str]


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------
def has_game_variety(games: Mapping[str, int]) -> bool:
    return all(count <= _MAX_PER_GAME for count in games.values())


def has_role_diversity(roles: Mapping[str, int], size: int) -> bool:
    distinct = sum(1 for count in roles.values() if count > 0)
    return distinct >= min(_MIN_DISTINCT_ROLES, size)


def has_personality_mix(personalities: Mapping[str, int]) -> bool:
    leaders = personalities.get("LEADER", 0)
    thinkers = personalities.get("THINKER", 0)
    return leaders >= 1 and 1 <= thinkers <= _MAX_THINKERS


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def score_counts(
    games: Mapping[str, int],
    roles: Mapping[str, int],
    personalities: Mapping[str, int],
    size: int,
) -> float:
    """Balance score ∈ [0, 100] from per-dimension member counts."""
    score = 0.0
    if has_game_variety(games):
        score += GAME_VARIETY_POINTS
    if has_role_diversity(roles, size):
        score += ROLE_DIVERSITY_POINTS
    if has_personality_mix(personalities):
        score += PERSONALITY_MIX_POINTS
    else:
        score += PERSONALITY_PARTIAL_POINTS
    return score


def score_team(team: Team) -> float:
    """Balance score of a (finalized) team."""
    return team.balance_score


def aggregate_score(teams: Sequence[Team]) -> float:
    """Unweighted mean of per-team scores; 0.0 for an empty partition."""
    if not teams:
        return 0.0
    return sum(score_team(t) for t in teams) / len(teams)


def balance_issues(
    games: Mapping[str, int],
    roles: Mapping[str, int],
    personalities: Mapping[str, int],
    size: int,
) -> list[str]:
    """Human-readable list of the criteria a team misses."""
    issues: list[str] = []
    if not has_game_variety(games):
        issues.append(f"Too many players from same game: {dict(games)}")
    if not has_role_diversity(roles, size):
        issues.append(f"Insufficient role diversity: {dict(roles)}")
    if not has_personality_mix(personalities):
        issues.append(f"Poor personality mix: {dict(personalities)}")
    return issues


def calculate_team_balance(team: Team) -> TeamBalance:
    """Full criterion breakdown for *team*."""
    games = team.game_distribution
    roles = team.role_distribution
    personalities = team.personality_distribution
    return TeamBalance(
        game_variety=has_game_variety(games),
        role_diversity=has_role_diversity(roles, team.size),
        personality_mix=has_personality_mix(personalities),
        score=score_counts(games, roles, personalities, team.size),
        issues=balance_issues(games, roles, personalities, team.size),
    )
