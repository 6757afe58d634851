"""Runtime state for one generation pipeline run.

A ``GenerationRequest`` fans out into one ``GenerationTask`` per variation.
Each task settles into exactly one slot of the ``GenerationResult``, which
keeps request order regardless of completion order and is sealed once every
slot is filled.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any


class TaskStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FALLBACK_SUCCEEDED = "fallback_succeeded"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset(
    {TaskStatus.SUCCEEDED, TaskStatus.FALLBACK_SUCCEEDED, TaskStatus.FAILED}
)


class OverallStatus(str, Enum):
    ALL_SUCCEEDED = "all_succeeded"
    PARTIAL_SUCCESS = "partial_success"
    ALL_FAILED = "all_failed"


@dataclass(frozen=True)
class GenerationRequest:
    """Input to a pipeline run.

    Attributes:
        media: Source media shared read-only by every task (opaque here).
        params: Caller-validated parameters such as language or platform.
        variations: Requested variation names; non-empty and unique.
    """

    media: Any
    params: Mapping[str, Any] = field(default_factory=dict)
    variations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        variations = tuple(self.variations)
        if not variations:
            raise ValueError("A generation request needs at least one variation")
        duplicates = sorted({v for v in variations if variations.count(v) > 1})
        if duplicates:
            raise ValueError(f"Duplicate variation names: {', '.join(duplicates)}")
        object.__setattr__(self, "variations", variations)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


@dataclass
class GenerationTask:
    """One unit of work bound to a single variation."""

    name: str
    primary_prompt: str
    fallback_prompt: str | None = None
    status: TaskStatus = TaskStatus.PENDING


@dataclass(frozen=True)
class TaskOutcome:
    """Terminal state of one task: payload on success, error on failure."""

    name: str
    status: TaskStatus
    payload: Any = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.status in (TaskStatus.SUCCEEDED, TaskStatus.FALLBACK_SUCCEEDED)


def aggregate_status(statuses: list[TaskStatus]) -> OverallStatus:
    """Derive the overall status from non-empty terminal task statuses."""
    if not statuses:
        raise ValueError("Cannot aggregate an empty status list")
    if all(s == TaskStatus.FAILED for s in statuses):
        return OverallStatus.ALL_FAILED
    if all(s in (TaskStatus.SUCCEEDED, TaskStatus.FALLBACK_SUCCEEDED) for s in statuses):
        return OverallStatus.ALL_SUCCEEDED
    return OverallStatus.PARTIAL_SUCCESS


class GenerationResult:
    """Order-preserving aggregate of task outcomes.

    Slots are pre-sized from the variation list; each task writes its own slot
    once. ``seal()`` refuses further writes and requires every slot filled.
    """

    def __init__(self, variations: tuple[str, ...]) -> None:
        self._index = {name: i for i, name in enumerate(variations)}
        self._slots: list[TaskOutcome | None] = [None] * len(variations)
        self._sealed = False

    def record(self, outcome: TaskOutcome) -> None:
        if self._sealed:
            raise RuntimeError("GenerationResult is sealed")
        if outcome.status not in TERMINAL_STATUSES:
            raise ValueError(f"Outcome for {outcome.name!r} is not terminal: {outcome.status.value}")
        i = self._index[outcome.name]
        if self._slots[i] is not None:
            raise RuntimeError(f"Outcome for {outcome.name!r} already recorded")
        self._slots[i] = outcome

    def seal(self) -> GenerationResult:
        missing = [name for name, i in self._index.items() if self._slots[i] is None]
        if missing:
            raise RuntimeError(f"Cannot seal with unsettled tasks: {', '.join(missing)}")
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def outcomes(self) -> tuple[TaskOutcome, ...]:
        return tuple(o for o in self._slots if o is not None)

    @property
    def overall_status(self) -> OverallStatus:
        return aggregate_status([o.status for o in self.outcomes])

    @property
    def errors(self) -> dict[str, Exception]:
        return {o.name: o.error for o in self.outcomes if o.error is not None}

    def get(self, name: str) -> TaskOutcome:
        outcome = self._slots[self._index[name]]
        if outcome is None:
            raise KeyError(name)
        return outcome


@dataclass
class LongRunningOperation:
    """An in-flight asynchronous provider job, resolved by polling."""

    operation_handle: str
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    done: bool = False
    response: Any = None
    error: Any = None
