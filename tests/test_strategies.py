"""Tests for teammate/strategies.py."""

from concurrent.futures import ThreadPoolExecutor
import threading
import time

import pytest

from teammate.exceptions import (
    FormationTimeoutError,
    InvalidFormationRequest,
    ParallelFormationError,
)
from teammate import strategies
from teammate.strategies import BalancedTeamStrategy, FormationStrategy, describe
from teammate.team import Team


def _member_ids(teams):
    return [[m.id for m in t.members] for t in teams]


class SingleTeamStrategy(FormationStrategy):
    """Everyone in one team; only implements the sequential form."""

    def form_teams(self, participants, team_size):
        team = Team("T1")
        for p in participants:
            team.add_member(p)
        return [team]

    @property
    def name(self):
        return "Single Team"

    @property
    def description(self):
        return "Puts everyone together"


class TestBalancedTeamStrategy:
    def test_metadata(self):
        strategy = BalancedTeamStrategy()
        assert strategy.name == "Balanced Team Strategy"
        assert "balanced distribution" in strategy.description
        assert describe(strategy).startswith("Balanced Team Strategy: ")

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            BalancedTeamStrategy(attempts=0)

    def test_form_teams(self, pool12):
        teams = BalancedTeamStrategy(attempts=10).form_teams(pool12, 4)
        assert [t.size for t in teams] == [4, 4, 4]

    def test_parallel_matches_sequential_when_seeded(self, pool_factory):
        pool = pool_factory(24)
        strategy = BalancedTeamStrategy(attempts=30, seed=5)
        with ThreadPoolExecutor(max_workers=4) as ex:
            parallel = strategy.form_teams_parallel(pool, 4, executor=ex, timeout=10)
        sequential = strategy.form_teams(pool, 4)
        assert _member_ids(parallel) == _member_ids(sequential)

    def test_parallel_without_executor(self, pool10):
        teams = BalancedTeamStrategy(attempts=8).form_teams_parallel(pool10, 3)
        assert [t.size for t in teams] == [3, 3, 3, 1]

    def test_parallel_rejects_bad_input(self, pool10):
        strategy = BalancedTeamStrategy(attempts=4)
        with pytest.raises(InvalidFormationRequest):
            strategy.form_teams_parallel(pool10, 0)
        with pytest.raises(InvalidFormationRequest):
            strategy.form_teams_parallel([], 3)

    def test_worker_failure_aborts(self, pool10, monkeypatch):
        def _fail(*args):
            raise RuntimeError("bad attempt")

        monkeypatch.setattr("teammate.strategies.run_attempt", _fail)
        with pytest.raises(ParallelFormationError):
            BalancedTeamStrategy(attempts=4).form_teams_parallel(pool10, 3)

    def test_timeout_without_executor_returns_promptly(self, pool10, monkeypatch):
        gate = threading.Event()

        def _blocked(*args):
            gate.wait()

        monkeypatch.setattr("teammate.strategies.run_attempt", _blocked)
        started = time.monotonic()
        try:
            with pytest.raises(FormationTimeoutError):
                BalancedTeamStrategy(attempts=4).form_teams_parallel(pool10, 3, timeout=0.05)
            assert time.monotonic() - started < 1.0
        finally:
            gate.set()

    def test_form_batch_is_single_seeded_pass(self, pool12, monkeypatch):
        calls = []
        real = strategies.generate_attempt

        def _counting(*args, **kwargs):
            calls.append(1)
            return real(*args, **kwargs)

        monkeypatch.setattr(strategies, "generate_attempt", _counting)
        strategy = BalancedTeamStrategy(attempts=50)
        first = strategy.form_batch(pool12, 4, seed=3)
        second = strategy.form_batch(pool12, 4, seed=3)
        assert [t.size for t in first] == [4, 4, 4]
        assert _member_ids(first) == _member_ids(second)
        assert len(calls) == 2


class TestFormationStrategyDefaults:
    def test_parallel_defaults_to_sequential(self, pool10):
        teams = SingleTeamStrategy().form_teams_parallel(pool10, 3)
        assert len(teams) == 1
        assert teams[0].size == 10

    def test_batch_defaults_to_sequential(self, pool10):
        teams = SingleTeamStrategy().form_batch(pool10, 3, seed=1)
        assert len(teams) == 1
        assert teams[0].size == 10

    def test_abstract_base_not_instantiable(self):
        with pytest.raises(TypeError):
            FormationStrategy()
