"""Retry policy wrapped around a gateway save."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from .gateway import OutcomeKind, SaveOutcome, SaveRequest, ScheduleGateway

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Fixed delay by default; ``backoff_factor > 1`` grows it geometrically."""

    max_attempts: int = 3
    delay_seconds: float = 1.0
    backoff_factor: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    def delay_for(self, attempt: int) -> float:
        """Delay after the given 1-based failed attempt."""
        return self.delay_seconds * (self.backoff_factor ** (attempt - 1))

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "RetryPolicy":
        return cls(
            max_attempts=int(config.get("save_max_attempts", 3)),
            delay_seconds=float(config.get("save_retry_delay_seconds", 1.0)),
            backoff_factor=float(config.get("save_backoff_factor", 1.0)),
        )


@dataclass(slots=True)
class SaveAttempts:
    """Final outcome of a retried save plus every intermediate outcome."""

    outcome: SaveOutcome
    history: list[SaveOutcome] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        return len(self.history)


async def save_with_retry(
    gateway: ScheduleGateway,
    request: SaveRequest,
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
) -> SaveAttempts:
    """Save with retries.

    Auth failures stop immediately. Every other failure is retried until
    ``policy.max_attempts`` is reached; the delay only separates attempts.
    """
    history: list[SaveOutcome] = []
    for attempt in range(1, policy.max_attempts + 1):
        outcome = await gateway.save_schedule(request)
        history.append(outcome)
        if outcome.ok:
            return SaveAttempts(outcome=outcome, history=history)
        if outcome.kind is OutcomeKind.AUTH:
            logger.warning("Save for %s rejected: credentials expired", request.subject)
            return SaveAttempts(outcome=outcome, history=history)

        logger.warning(
            "Attempt %d/%d failed for %s (%s): %s",
            attempt,
            policy.max_attempts,
            request.subject,
            outcome.kind.value,
            outcome.error,
        )
        if attempt < policy.max_attempts:
            await sleep(policy.delay_for(attempt))

    return SaveAttempts(outcome=history[-1], history=history)
