"""Concurrent orchestration of team formation.

``TeamBuilder`` owns a fixed-size worker pool and picks one of two modes:

- small pools (≤ ``parallel_threshold``): the strategy fans its attempts out
  over the pool and reduces them to the best partition;
- large pools: the input is cut into contiguous batches, each formed with a
  single pass of the strategy's ``form_batch``, and the batch results are
  concatenated in order and renumbered.

Any failing unit aborts the whole call; partial results are never returned.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
import logging
import threading

from teammate.config import FormationConfig
from teammate.engine.dispatch import gather_results
from teammate.engine.optimizer import attempt_seeds
from teammate.exceptions import FormationError, validate_request
from teammate.participant import Participant
from teammate.strategies import BalancedTeamStrategy, FormationStrategy, describe
from teammate.team import Team


logger = logging.getLogger(__name__)


def plan_batches(n_participants: int, workers: int, min_batch_size: int) -> list[tuple[int, int]]:
    """Contiguous ``(start, end)`` slices, at most one per worker.

    Batch size is ``max(min_batch_size, n // workers)``; the last batch runs
    to the end of the list so no participant is left out.
    """
    batch_size = max(min_batch_size, n_participants // workers)
    starts = list(range(0, n_participants, batch_size))[:workers]
    ends = starts[1:] + [n_participants]
    return list(zip(starts, ends))


class TeamBuilder:
    """Runs a formation strategy, sequentially or over a worker pool."""

    def __init__(
        self,
        strategy: FormationStrategy | None = None,
        config: FormationConfig | None = None,
    ) -> None:
        self.config = config or FormationConfig()
        self._strategy = strategy or BalancedTeamStrategy(
            attempts=self.config.max_attempts,
            seed=self.config.seed,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.worker_count,
            thread_name_prefix="team-builder",
        )
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def create_default_builder(cls) -> TeamBuilder:
        """Builder using the balanced strategy and env-derived config."""
        return cls(config=FormationConfig.from_env())

    # ------------------------------------------------------------------
    # Strategy
    # ------------------------------------------------------------------
    @property
    def strategy(self) -> FormationStrategy:
        return self._strategy

    def set_strategy(self, strategy: FormationStrategy) -> None:
        self._strategy = strategy

    def current_strategy_info(self) -> str:
        return describe(self._strategy)

    # ------------------------------------------------------------------
    # Formation
    # ------------------------------------------------------------------
    def form_teams(self, participants: Sequence[Participant], team_size: int) -> list[Team]:
        """Sequential formation with the current strategy."""
        validate_request(participants, team_size)
        self._ensure_open()
        logger.info("Using strategy: %s", self._strategy.name)
        return self._strategy.form_teams(tuple(participants), team_size)

    def form_teams_parallel(
        self,
        participants: Sequence[Participant],
        team_size: int,
        timeout: float | None = None,
    ) -> list[Team]:
        """Concurrent formation; mode chosen by pool size.

        Args:
            participants: Read-only snapshot of validated participants.
            team_size: Target members per team, > 0.
            timeout: Seconds to wait for concurrent work; defaults to
                ``config.timeout_seconds``.

        Raises:
            InvalidFormationRequest: Bad team size or empty pool.
            ParallelFormationError: A unit failed or was cancelled.
            FormationTimeoutError: Work was still running after *timeout*.
        """
        validate_request(participants, team_size)
        self._ensure_open()
        snapshot = tuple(participants)
        timeout = timeout if timeout is not None else self.config.timeout_seconds

        if len(snapshot) > self.config.parallel_threshold:
            logger.info("Using batch formation for large pool (%d participants)", len(snapshot))
            return self._form_in_batches(snapshot, team_size, timeout)

        logger.info("Using parallel search (%d participants)", len(snapshot))
        with self._rejecting_after_shutdown():
            return self._strategy.form_teams_parallel(
                snapshot, team_size, executor=self._executor, timeout=timeout
            )

    def _form_in_batches(
        self,
        snapshot: tuple[Participant, ...],
        team_size: int,
        timeout: float | None,
    ) -> list[Team]:
        # TODO: per-batch search (or a cross-batch pass) would recover the
        # quality lost versus small-pool mode; pending a product decision.
        batches = plan_batches(len(snapshot), self.config.worker_count, self.config.min_batch_size)
        seeds = attempt_seeds(len(batches), self.config.seed)

        with self._rejecting_after_shutdown():
            futures = [
                self._executor.submit(self._strategy.form_batch, snapshot[start:end], team_size, seed)
                for (start, end), seed in zip(batches, seeds)
            ]

        results = gather_results(futures, timeout=timeout)
        teams = [team for batch_teams in results for team in batch_teams]
        for number, team in enumerate(teams, start=1):
            team.relabel(f"T{number}")
        logger.info("Formed %d teams across %d batches", len(teams), len(batches))
        return teams

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _ensure_open(self) -> None:
        with self._lock:
            if self._closed:
                raise FormationError("TeamBuilder has been shut down")

    @contextmanager
    def _rejecting_after_shutdown(self) -> Iterator[None]:
        """Map the pool's submit-after-shutdown error onto ``FormationError``."""
        try:
            yield
        except RuntimeError as exc:
            if self.is_shutdown:
                raise FormationError("TeamBuilder has been shut down") from exc
            raise

    @property
    def is_shutdown(self) -> bool:
        with self._lock:
            return self._closed

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop accepting work and release the worker pool.

        Args:
            wait: Block until in-flight units finish.
            cancel_pending: Cancel units that have not started yet.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.info("Shutting down team builder (wait=%s, cancel_pending=%s)", wait, cancel_pending)
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def __enter__(self) -> TeamBuilder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_pending=exc_type is not None)
