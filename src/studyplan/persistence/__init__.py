"""Schedule persistence gateways and save retries."""

from .gateway import GatewayError, OutcomeKind, SaveOutcome, SaveRequest, ScheduleGateway
from .http import HttpScheduleGateway
from .retry import RetryPolicy, SaveAttempts, save_with_retry
from .store import InMemoryScheduleStore, JsonScheduleStore

__all__ = [
    "GatewayError",
    "HttpScheduleGateway",
    "InMemoryScheduleStore",
    "JsonScheduleStore",
    "OutcomeKind",
    "RetryPolicy",
    "SaveAttempts",
    "SaveOutcome",
    "SaveRequest",
    "ScheduleGateway",
    "save_with_retry",
]
