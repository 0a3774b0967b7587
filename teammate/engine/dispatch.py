"""Collecting results from concurrent formation units.

Every unit either succeeds or the whole batch of work is aborted: the first
failure (or a timeout) cancels whatever is still queued and surfaces as one
``ParallelFormationError``.  Results come back in submission order so the
caller can reduce them single-threaded.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import FIRST_EXCEPTION, CancelledError, Future, wait
import logging
from typing import TypeVar

from teammate.exceptions import FormationTimeoutError, ParallelFormationError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def cancel_all(futures: Sequence[Future]) -> int:
    """Cancel every not-yet-running future. Returns how many were cancelled."""
    return sum(1 for f in futures if f.cancel())


def gather_results(futures: Sequence[Future[T]], timeout: float | None = None) -> list[T]:
    """Wait for *futures* and return their results in submission order.

    Raises:
        FormationTimeoutError: If work is still outstanding after *timeout*.
        ParallelFormationError: If any unit raised or was cancelled.
    """
    done, not_done = wait(futures, timeout=timeout, return_when=FIRST_EXCEPTION)

    failed = next((f for f in futures if f in done and (f.cancelled() or f.exception() is not None)), None)
    if failed is not None:
        cancelled = cancel_all(futures)
        logger.warning("Aborting formation: unit failed, %d queued units cancelled", cancelled)
        if failed.cancelled():
            raise ParallelFormationError("Parallel team formation was cancelled")
        raise ParallelFormationError("Parallel team formation failed") from failed.exception()

    if not_done:
        cancelled = cancel_all(futures)
        logger.warning(
            "Formation timed out after %ss: %d units outstanding, %d cancelled",
            timeout, len(not_done), cancelled,
        )
        raise FormationTimeoutError(f"Parallel team formation timed out after {timeout}s")

    try:
        return [f.result() for f in futures]
    except CancelledError as exc:
        raise ParallelFormationError("Parallel team formation was cancelled") from exc
