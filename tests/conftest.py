"""Shared participant fixtures."""

import pytest

from teammate.participant import Participant
from teammate.personality_types import ROLES


GAMES = ["Valorant", "CS2", "Dota 2", "FIFA", "Chess"]
SCORES = [95, 60, 75, 82, 55, 92, 70]


def _make_participant(
    idx: int,
    game: str | None = None,
    role: str | None = None,
    score: int | None = None,
    skill: int | None = None,
) -> Participant:
    return Participant.create(
        id=f"P{idx:03d}",
        name=f"Player {idx}",
        email=f"player{idx}@club.example",
        preferred_game=game or GAMES[idx % len(GAMES)],
        skill_level=skill or (idx % 10) + 1,
        preferred_role=role or ROLES[idx % len(ROLES)],
        personality_score=score if score is not None else SCORES[idx % len(SCORES)],
    )


def _make_pool(n: int) -> list[Participant]:
    return [_make_participant(i) for i in range(n)]


@pytest.fixture
def pool12():
    return _make_pool(12)


@pytest.fixture
def pool10():
    return _make_pool(10)


@pytest.fixture
def participant_factory():
    """Build a participant by index, overriding any attribute."""
    return _make_participant


@pytest.fixture
def pool_factory():
    """Build a mixed pool of *n* participants."""
    return _make_pool
