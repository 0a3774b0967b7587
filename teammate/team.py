"""Team accumulator used while forming partitions."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field

from teammate.engine.team_balance import balance_issues, score_counts
from teammate.participant import Identity, Participant


_BALANCED_THRESHOLD = 80.0


class TeamSummary(BaseModel):
    """Immutable snapshot of a finished team, handed to output collaborators."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    team_name: str
    member_ids: tuple[str, ...]
    size: int = Field(ge=0)
    average_skill: float = Field(ge=0.0, le=10.0)
    balance_score: float = Field(ge=0.0, le=100.0)
    is_balanced: bool
    game_distribution: dict[str, int]
    role_distribution: dict[str, int]
    personality_distribution: dict[str, int]
    issues: tuple[str, ...] = ()


class Team:
    """Ordered set of distinct participants plus per-dimension counters.

    Counters are updated as members are added; the balance score is always
    recomputed from them.
    """

    def __init__(self, team_id: str, name: str | None = None) -> None:
        self.identity = Identity(id=team_id, name=name or f"Team-{team_id}")
        self._members: list[Participant] = []
        self._member_keys: set[int] = set()
        self._games: Counter[str] = Counter()
        self._roles: Counter[str] = Counter()
        self._personalities: Counter[str] = Counter()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_member(self, participant: Participant) -> bool:
        """Append *participant*. Returns ``False`` if this object is already a member.

        Membership is by object identity: distinct records sharing an id are
        both seated.
        """
        if id(participant) in self._member_keys:
            return False
        self._members.append(participant)
        self._member_keys.add(id(participant))
        self._games[participant.preferred_game] += 1
        self._roles[participant.preferred_role] += 1
        self._personalities[participant.personality_type] += 1
        return True

    def relabel(self, team_id: str) -> None:
        """Give the team a new id (and matching default name)."""
        self.identity = Identity(id=team_id, name=f"Team-{team_id}")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def members(self) -> list[Participant]:
        return list(self._members)

    @property
    def size(self) -> int:
        return len(self._members)

    @property
    def game_distribution(self) -> dict[str, int]:
        return dict(self._games)

    @property
    def role_distribution(self) -> dict[str, int]:
        return dict(self._roles)

    @property
    def personality_distribution(self) -> dict[str, int]:
        return dict(self._personalities)

    @property
    def average_skill(self) -> float:
        if not self._members:
            return 0.0
        return sum(p.skill_level for p in self._members) / len(self._members)

    @property
    def balance_score(self) -> float:
        return score_counts(self._games, self._roles, self._personalities, self.size)

    @property
    def is_balanced(self) -> bool:
        return self.balance_score >= _BALANCED_THRESHOLD

    def balance_issues(self) -> list[str]:
        return balance_issues(self._games, self._roles, self._personalities, self.size)

    def __contains__(self, participant: object) -> bool:
        return id(participant) in self._member_keys

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, size={self.size})"

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def display_info(self) -> str:
        return (
            f"Team {self.id}: {self.size} members, Avg Skill: {self.average_skill:.1f}, "
            f"Balance: {self.balance_score:.1f}%"
        )

    def detailed_info(self) -> str:
        lines = [
            f"Team {self.id}:",
            f"  Members: {self.size}",
            f"  Average Skill: {self.average_skill:.2f}",
            f"  Balance Score: {self.balance_score:.1f}",
            f"  Games: {self.game_distribution}",
            f"  Roles: {self.role_distribution}",
            f"  Personalities: {self.personality_distribution}",
        ]
        issues = self.balance_issues()
        if issues:
            lines.append("  Issues:")
            lines.extend(f"    - {issue}" for issue in issues)
        return "\n".join(lines)

    def to_summary(self) -> TeamSummary:
        return TeamSummary(
            team_id=self.id,
            team_name=self.name,
            member_ids=tuple(p.id for p in self._members),
            size=self.size,
            average_skill=round(self.average_skill, 2),
            balance_score=self.balance_score,
            is_balanced=self.is_balanced,
            game_distribution=self.game_distribution,
            role_distribution=self.role_distribution,
            personality_distribution=self.personality_distribution,
            issues=tuple(self.balance_issues()),
        )
