"""Balanced team formation for gaming clubs."""

from .participant import Identity, Participant, SurveyResponse
from .strategies import BalancedTeamStrategy, FormationStrategy
from .team import Team, TeamSummary
from .team_builder import TeamBuilder

__all__ = [
    "BalancedTeamStrategy",
    "FormationStrategy",
    "Identity",
    "Participant",
    "SurveyResponse",
    "Team",
    "TeamBuilder",
    "TeamSummary",
]
