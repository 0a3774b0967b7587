"""Team formation strategies.

``FormationStrategy`` is the substitution point for alternative policies;
``BalancedTeamStrategy`` is the random-restart policy that balances games,
roles and personality types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
import logging
import random

from teammate.engine.dispatch import gather_results
from teammate.engine.optimizer import (
    DEFAULT_ATTEMPTS,
    attempt_seeds,
    optimize,
    run_attempt,
    select_best,
)
from teammate.engine.team_generator import generate_attempt
from teammate.exceptions import validate_request
from teammate.participant import Participant
from teammate.team import Team


logger = logging.getLogger(__name__)


class FormationStrategy(ABC):
    """A policy that turns a participant pool into a partition."""

    @abstractmethod
    def form_teams(self, participants: Sequence[Participant], team_size: int) -> list[Team]:
        """Form teams sequentially."""

    def form_teams_parallel(
        self,
        participants: Sequence[Participant],
        team_size: int,
        executor: Executor | None = None,
        timeout: float | None = None,
    ) -> list[Team]:
        """Form teams using *executor*; defaults to the sequential form."""
        return self.form_teams(participants, team_size)

    def form_batch(
        self,
        batch: Sequence[Participant],
        team_size: int,
        seed: int | None = None,
    ) -> list[Team]:
        """Form one contiguous batch of a large pool; defaults to ``form_teams``."""
        return self.form_teams(batch, team_size)

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...


class BalancedTeamStrategy(FormationStrategy):
    """Best of N randomized round-robin partitions."""

    def __init__(self, attempts: int = DEFAULT_ATTEMPTS, seed: int | None = None) -> None:
        if attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {attempts}")
        self.attempts = attempts
        self.seed = seed

    @property
    def name(self) -> str:
        return "Balanced Team Strategy"

    @property
    def description(self) -> str:
        return "Forms teams with balanced distribution of games, roles, and personality types"

    def form_teams(self, participants: Sequence[Participant], team_size: int) -> list[Team]:
        return optimize(participants, team_size, attempts=self.attempts, seed=self.seed).teams

    def form_teams_parallel(
        self,
        participants: Sequence[Participant],
        team_size: int,
        executor: Executor | None = None,
        timeout: float | None = None,
    ) -> list[Team]:
        """Run all attempts concurrently and keep the best one.

        Uses the same per-attempt seeds as ``form_teams``, so a seeded
        strategy yields the same partition either way.
        """
        validate_request(participants, team_size)
        snapshot = tuple(participants)

        if executor is not None:
            return self._search(executor, snapshot, team_size, timeout)

        own_executor = ThreadPoolExecutor(thread_name_prefix="balanced-search")
        try:
            return self._search(own_executor, snapshot, team_size, timeout)
        finally:
            # Running attempts are abandoned, not awaited.
            own_executor.shutdown(wait=False, cancel_futures=True)

    def form_batch(
        self,
        batch: Sequence[Participant],
        team_size: int,
        seed: int | None = None,
    ) -> list[Team]:
        """Single generator pass over *batch*; no search."""
        return generate_attempt(batch, team_size, rng=random.Random(seed))

    def _search(
        self,
        executor: Executor,
        snapshot: tuple[Participant, ...],
        team_size: int,
        timeout: float | None,
    ) -> list[Team]:
        futures = [
            executor.submit(run_attempt, snapshot, team_size, attempt, attempt_seed)
            for attempt, attempt_seed in enumerate(attempt_seeds(self.attempts, self.seed))
        ]
        best = select_best(gather_results(futures, timeout=timeout))

        if best is None:
            logger.warning("No parallel attempt produced a partition; falling back to a single attempt")
            return generate_attempt(snapshot, team_size)

        logger.info(
            "Parallel search over %d attempts picked attempt %d (score %.2f)",
            self.attempts, best.attempt + 1, best.score,
        )
        return best.teams


def describe(strategy: FormationStrategy) -> str:
    return f"{strategy.name}: {strategy.description}"

