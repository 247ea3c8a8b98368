"""Orchestrator state models."""

from dataclasses import dataclass
from enum import StrEnum


class FetchState(StrEnum):
    EMPTY = "empty"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Selection:
    weekday: str
    start_hour: int
    end_hour: int


@dataclass(frozen=True)
class OrchestratorStatus:
    state: FetchState
    error_message: str
    location: str  # as typed by the user, trimmed
