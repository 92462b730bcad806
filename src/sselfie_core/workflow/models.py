"""Pydantic models for workflow step tables and progress snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sselfie_core.parsing import parse_float, parse_text


class _StrictModel(BaseModel):
    """Shared strict, immutable settings for workflow contracts."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class WorkflowStep(_StrictModel):
    id: str
    duration_seconds: float = Field(gt=0, allow_inf_nan=False)
    message: str = ""

    @field_validator("id")
    @classmethod
    def normalize_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("step id must not be empty")
        return cleaned

    @field_validator("message")
    @classmethod
    def normalize_message(cls, value: str) -> str:
        return value.strip()


class WorkflowDefinition(_StrictModel):
    """A fixed, ordered table of named steps with estimated durations.

    Order is significant: every step before the current one counts as
    fully complete when progress is computed.
    """

    id: str
    display_name: str = ""
    steps: tuple[WorkflowStep, ...]

    @field_validator("id", "display_name")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, steps: tuple[WorkflowStep, ...]) -> tuple[WorkflowStep, ...]:
        if not steps:
            raise ValueError("workflow must define at least one step")
        seen: set[str] = set()
        for step in steps:
            if step.id in seen:
                raise ValueError(f"duplicate step id: {step.id!r}")
            seen.add(step.id)
        return steps

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.steps)

    @property
    def total_duration(self) -> float:
        return sum(s.duration_seconds for s in self.steps)

    def index_of(self, step_id: str) -> int | None:
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        return None

    def get_step(self, step_id: str) -> WorkflowStep | None:
        idx = self.index_of(step_id)
        return None if idx is None else self.steps[idx]


class ProgressSnapshot(_StrictModel):
    """What the background job last stored: the active step and how far into it."""

    current_step: str
    step_progress: float = 0.0

    @classmethod
    def from_cache(cls, raw: Mapping[str, Any]) -> ProgressSnapshot:
        """Build a snapshot from a cached mapping whose values may be strings or bytes.

        Accepts ``current_step``/``currentStep`` and ``step_progress``/``stepProgress``.
        Raises ``ValueError`` when no step is present.
        """
        step = parse_text(raw.get("current_step", raw.get("currentStep")))
        if step is None:
            raise ValueError("cached progress snapshot has no current step")
        pct = parse_float(raw.get("step_progress", raw.get("stepProgress")))
        return cls(current_step=step, step_progress=pct if pct is not None else 0.0)


class ProgressSummary(_StrictModel):
    current_step: str
    progress: int = Field(ge=0, le=100)
    message: str
    estimated_time_remaining: int = Field(ge=0)

    def to_payload(self) -> dict[str, Any]:
        """JSON body returned to the polling client."""
        return {
            "currentStep": self.current_step,
            "progress": self.progress,
            "message": self.message,
            "estimatedTimeRemaining": self.estimated_time_remaining,
        }
