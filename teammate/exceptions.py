"""Errors raised by the formation engine."""

from __future__ import annotations


class FormationError(Exception):
    """Base class for team-formation failures."""


class InvalidFormationRequest(FormationError, ValueError):
    """Team size ≤ 0 or an empty participant list."""


class ParallelFormationError(FormationError):
    """A concurrent unit failed; the whole orchestration was aborted."""


class FormationTimeoutError(ParallelFormationError, TimeoutError):
    """Concurrent work did not finish within the allowed time."""


def validate_request(participants, team_size: int) -> None:
    """Reject unusable input before any formation work starts."""
    if team_size <= 0:
        raise InvalidFormationRequest(f"Team size must be positive, got {team_size}")
    if not participants:
        raise InvalidFormationRequest("Participant list is empty")
