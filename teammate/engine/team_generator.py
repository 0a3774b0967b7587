"""Single-attempt partition generator.

Shuffles the pool, stable-sorts it so LEADERs then THINKERs come first, and
deals participants round-robin across ceil(N / team_size) teams.  The shuffle
keeps each attempt random while the sort spreads key personality types evenly.
"""

from __future__ import annotations

from collections.abc import Sequence
import math
import random

from teammate.exceptions import validate_request
from teammate.participant import Participant
from teammate.personality_types import personality_priority
from teammate.team import Team


def team_count(n_participants: int, team_size: int) -> int:
    """Number of teams needed to seat *n_participants*."""
    return math.ceil(n_participants / team_size)


def team_capacities(n_participants: int, team_size: int) -> list[int]:
    """Seats per team: full teams, with the last one taking the remainder."""
    count = team_count(n_participants, team_size)
    capacities = [team_size] * count
    remainder = n_participants - team_size * (count - 1)
    if count:
        capacities[-1] = remainder
    return capacities


def prioritize(participants: Sequence[Participant]) -> list[Participant]:
    """Stable sort: LEADER first, THINKER second, everyone else last."""
    return sorted(participants, key=lambda p: personality_priority(p.personality_type))


def generate_attempt(
    participants: Sequence[Participant],
    team_size: int,
    rng: random.Random | None = None,
) -> list[Team]:
    """Form one candidate partition.

    Args:
        participants: Input pool (not modified; a private copy is shuffled).
        team_size: Target members per team, > 0.
        rng: Random source owned by this attempt. A fresh one is created
            when omitted.

    Returns:
        Teams covering every participant exactly once.

    Raises:
        InvalidFormationRequest: If team_size ≤ 0 or the pool is empty.
    """
    validate_request(participants, team_size)
    rng = rng or random.Random()

    pool = list(participants)
    rng.shuffle(pool)

    capacities = team_capacities(len(pool), team_size)
    teams = [Team(f"T{i + 1}") for i in range(len(capacities))]

    # Cyclic deal; a team drops out of the cycle once it reaches capacity,
    # so only the last team can end up short.
    index = 0
    for participant in prioritize(pool):
        while teams[index].size >= capacities[index]:
            index = (index + 1) % len(teams)
        teams[index].add_member(participant)
        index = (index + 1) % len(teams)

    return teams
