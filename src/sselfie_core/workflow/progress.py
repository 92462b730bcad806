"""Workflow progress timer -- overall percent and time remaining from a step snapshot.

Steps are a static ordered table, not a state machine.  Any step may be
reported at any time; a regressing snapshot simply yields a lower
percentage.
"""

from __future__ import annotations

import logging
import math

from sselfie_core.workflow.models import (
    ProgressSnapshot,
    ProgressSummary,
    WorkflowDefinition,
    WorkflowStep,
)

logger = logging.getLogger(__name__)

FEED_PLANNER_WORKFLOW = WorkflowDefinition(
    id="feed_planner",
    display_name="Feed Planner",
    steps=(
        WorkflowStep(
            id="content_research",
            duration_seconds=150,
            message="Researching trending content in your niche...",
        ),
        WorkflowStep(
            id="brand_strategy",
            duration_seconds=60,
            message="Building your brand strategy...",
        ),
        WorkflowStep(
            id="feed_layout",
            duration_seconds=60,
            message="Designing your feed layout...",
        ),
        WorkflowStep(
            id="caption_writing",
            duration_seconds=120,
            message="Writing captions for your posts...",
        ),
        WorkflowStep(
            id="image_generation",
            duration_seconds=240,
            message="Generating your branded images...",
        ),
    ),
)


class UnknownWorkflowStepError(KeyError):
    def __init__(self, workflow_id: str, step_id: str, known: tuple[str, ...]) -> None:
        self.workflow_id = workflow_id
        self.step_id = step_id
        self.known = known
        super().__init__(
            f"Unknown step {step_id!r} for workflow {workflow_id!r}; "
            f"expected one of: {', '.join(known)}"
        )


def _clamp_step_progress(value: float) -> float:
    if math.isnan(value):
        logger.debug("Step progress is NaN, treating as 0")
        return 0.0
    clamped = max(0.0, min(100.0, float(value)))
    if clamped != value:
        logger.debug("Step progress %s out of range, clamped to %s", value, clamped)
    return clamped


def compute_progress(
    current_step: str,
    step_progress: float,
    workflow: WorkflowDefinition | None = None,
) -> ProgressSummary:
    """Overall completion for *current_step* at *step_progress* percent.

    Every step before *current_step* counts in full, the current one counts
    pro rata.  *step_progress* is clamped to ``[0, 100]``.

    Raises :class:`UnknownWorkflowStepError` if *current_step* is not in the table.
    """
    wf = workflow or FEED_PLANNER_WORKFLOW
    idx = wf.index_of(current_step)
    if idx is None:
        raise UnknownWorkflowStepError(wf.id, current_step, wf.step_ids)

    step = wf.steps[idx]
    total = wf.total_duration
    completed = sum(s.duration_seconds for s in wf.steps[:idx])
    completed += _clamp_step_progress(step_progress) / 100 * step.duration_seconds

    return ProgressSummary(
        current_step=step.id,
        progress=round(completed / total * 100),
        message=step.message,
        estimated_time_remaining=round(total - completed),
    )


def progress_from_snapshot(
    snapshot: ProgressSnapshot,
    workflow: WorkflowDefinition | None = None,
) -> ProgressSummary:
    return compute_progress(snapshot.current_step, snapshot.step_progress, workflow)
