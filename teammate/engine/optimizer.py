"""Random-restart search over generated partitions.

Scoring is cheap and the assignment space is exponential, so the optimizer
simply runs many independent attempts and keeps the best-scoring one.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
import random

from teammate.engine.team_balance import aggregate_score
from teammate.engine.team_generator import generate_attempt
from teammate.exceptions import validate_request
from teammate.participant import Participant
from teammate.team import Team


logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 100


@dataclass(frozen=True)
class FormationResult:
    """One scored partition and the attempt that produced it."""

    teams: list[Team]
    score: float
    attempt: int


def attempt_seeds(attempts: int, seed: int | None = None) -> list[int]:
    """Independent per-attempt seeds drawn from one master generator."""
    master = random.Random(seed)
    return [master.getrandbits(64) for _ in range(attempts)]


def run_attempt(
    participants: Sequence[Participant],
    team_size: int,
    attempt: int,
    seed: int,
) -> FormationResult:
    """Generate and score a single attempt with its own random source."""
    teams = generate_attempt(participants, team_size, rng=random.Random(seed))
    return FormationResult(teams=teams, score=aggregate_score(teams), attempt=attempt)


def select_best(results: Iterable[FormationResult]) -> FormationResult | None:
    """Strictly greatest score wins; ties keep the earliest result."""
    best: FormationResult | None = None
    for result in results:
        if best is None or result.score > best.score:
            best = result
    return best


def optimize(
    participants: Sequence[Participant],
    team_size: int,
    attempts: int = DEFAULT_ATTEMPTS,
    seed: int | None = None,
) -> FormationResult:
    """Best of *attempts* independent partitions.

    Never returns nothing: if no attempt ran, one fresh attempt is returned.
    """
    validate_request(participants, team_size)
    snapshot = tuple(participants)

    best: FormationResult | None = None
    for attempt, attempt_seed in enumerate(attempt_seeds(attempts, seed)):
        result = run_attempt(snapshot, team_size, attempt, attempt_seed)
        if best is None or result.score > best.score:
            logger.debug("Attempt %d improved score to %.2f", attempt, result.score)
            best = result

    if best is None:
        logger.warning("No attempt produced a partition; falling back to a single attempt")
        teams = generate_attempt(snapshot, team_size, rng=random.Random(seed))
        return FormationResult(teams=teams, score=aggregate_score(teams), attempt=0)

    logger.info(
        "Formed %d teams from %d participants (score %.2f, attempt %d of %d)",
        len(best.teams), len(snapshot), best.score, best.attempt + 1, attempts,
    )
    return best
