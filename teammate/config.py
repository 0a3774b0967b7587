"""Formation engine configuration.

Defaults can be overridden from ``TEAMMATE_*`` environment variables.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError


logger = logging.getLogger(__name__)

_ENV_PREFIX = "TEAMMATE_"


class FormationConfig(BaseModel):
    """Tunables for the optimizer and the concurrent orchestrator."""

    max_attempts: int = Field(default=100, ge=1)
    parallel_threshold: int = Field(default=50, ge=0)
    min_batch_size: int = Field(default=10, ge=1)
    max_workers: int | None = Field(default=None, ge=1)
    timeout_seconds: float | None = Field(default=None, gt=0)
    seed: int | None = None

    @property
    def worker_count(self) -> int:
        """Pool size: configured value or hardware parallelism."""
        return self.max_workers or os.cpu_count() or 1

    @classmethod
    def from_env(cls) -> FormationConfig:
        """Build a config from ``TEAMMATE_*`` variables, falling back to defaults.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        overrides: dict[str, str] = {}
        for field_name in cls.model_fields:
            raw = os.getenv(f"{_ENV_PREFIX}{field_name.upper()}", "")
            if raw.strip():
                overrides[field_name] = raw.strip()

        try:
            config = cls(**overrides)
        except ValidationError as exc:
            raise ValueError(f"Invalid formation config in environment: {exc}") from exc

        if overrides:
            logger.info("Formation config overrides from env: %s", sorted(overrides))
        return config
