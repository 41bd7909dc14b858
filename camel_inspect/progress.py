"""Run state and phase timing for an inspect run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class InspectState(str, Enum):
    IDLE = "idle"
    SCANNING_SOURCES = "scanning_sources"
    TOP_LEVEL_ONLY = "top_level_only"
    RESOLVING_TRANSITIVE = "resolving_transitive"
    HARVESTING_ARTIFACTS = "harvesting_artifacts"
    DONE = "done"
    ERROR = "error"

    @property
    def terminal(self) -> bool:
        return self in (InspectState.DONE, InspectState.ERROR)


_TRANSITIONS: dict[InspectState, frozenset[InspectState]] = {
    InspectState.IDLE: frozenset({InspectState.SCANNING_SOURCES}),
    InspectState.SCANNING_SOURCES: frozenset(
        {InspectState.TOP_LEVEL_ONLY, InspectState.RESOLVING_TRANSITIVE}
    ),
    InspectState.TOP_LEVEL_ONLY: frozenset({InspectState.DONE}),
    InspectState.RESOLVING_TRANSITIVE: frozenset({InspectState.HARVESTING_ARTIFACTS}),
    InspectState.HARVESTING_ARTIFACTS: frozenset({InspectState.DONE}),
    InspectState.DONE: frozenset(),
    InspectState.ERROR: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    def __init__(self, current: InspectState, target: InspectState) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid state transition {current.value} -> {target.value}")


@dataclass
class PhaseProgress:
    phase: str
    status: str = "pending"  # "pending" | "running" | "completed" | "failed" | "skipped"
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 3)
        return None


class ProgressTracker:
    """Track the run state and the timing of each phase.

    Several phases may run inside one state. ``transition`` moves the state
    machine forward; any non-terminal state may move to ERROR.
    """

    def __init__(self) -> None:
        self.state = InspectState.IDLE
        self.phases: list[PhaseProgress] = []
        self._by_name: dict[str, PhaseProgress] = {}
        self.callbacks: list[Callable[[PhaseProgress], None]] = []

    def transition(self, target: InspectState) -> None:
        allowed = _TRANSITIONS[self.state]
        if target is InspectState.ERROR and not self.state.terminal:
            allowed = allowed | {InspectState.ERROR}
        if target not in allowed:
            raise InvalidTransitionError(self.state, target)
        logger.debug("State %s -> %s", self.state.value, target.value)
        self.state = target

    def start_phase(self, phase: str) -> None:
        p = PhaseProgress(phase=phase, status="running", start_time=time.monotonic())
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    def complete_phase(self, phase: str, detail: str = "") -> None:
        p = self._by_name.get(phase)
        if p:
            p.status = "completed"
            p.end_time = time.monotonic()
            p.detail = detail
            self._notify(p)

    def fail_phase(self, phase: str, error: str) -> None:
        p = self._by_name.get(phase)
        if p:
            p.status = "failed"
            p.end_time = time.monotonic()
            p.error = error
            self._notify(p)

    def skip_phase(self, phase: str, reason: str) -> None:
        p = PhaseProgress(phase=phase, status="skipped", detail=reason)
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    def get_summary(self) -> dict[str, Any]:
        total_duration = sum(p.duration or 0 for p in self.phases)
        return {
            "state": self.state.value,
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases
            ],
            "total_duration": round(total_duration, 3),
        }

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                logger.debug("Progress callback error for phase %s", p.phase, exc_info=True)
