"""Tests for teammate/config.py."""

import os

from pydantic import ValidationError
import pytest

from teammate.config import FormationConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TEAMMATE_"):
            monkeypatch.delenv(key)


class TestFormationConfig:
    def test_defaults(self):
        config = FormationConfig()
        assert config.max_attempts == 100
        assert config.parallel_threshold == 50
        assert config.min_batch_size == 10
        assert config.timeout_seconds is None
        assert config.worker_count >= 1

    def test_explicit_workers(self):
        assert FormationConfig(max_workers=3).worker_count == 3

    @pytest.mark.parametrize("overrides", [
        {"max_attempts": 0},
        {"min_batch_size": 0},
        {"max_workers": 0},
        {"timeout_seconds": 0},
        {"parallel_threshold": -1},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            FormationConfig(**overrides)


class TestFromEnv:
    def test_no_env_gives_defaults(self):
        assert FormationConfig.from_env() == FormationConfig()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TEAMMATE_MAX_ATTEMPTS", "250")
        monkeypatch.setenv("TEAMMATE_PARALLEL_THRESHOLD", "80")
        monkeypatch.setenv("TEAMMATE_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("TEAMMATE_SEED", "42")
        config = FormationConfig.from_env()
        assert config.max_attempts == 250
        assert config.parallel_threshold == 80
        assert config.timeout_seconds == 2.5
        assert config.seed == 42

    def test_blank_values_ignored(self, monkeypatch):
        monkeypatch.setenv("TEAMMATE_MAX_WORKERS", "  ")
        assert FormationConfig.from_env().max_workers is None

    def test_invalid_env_raises_value_error(self, monkeypatch):
        monkeypatch.setenv("TEAMMATE_MAX_ATTEMPTS", "lots")
        with pytest.raises(ValueError, match="Invalid formation config"):
            FormationConfig.from_env()
