"""Workflow progress -- step tables, snapshots, and the progress timer."""

from sselfie_core.workflow.loader import load_workflow_directory, load_workflow_file
from sselfie_core.workflow.models import (
    ProgressSnapshot,
    ProgressSummary,
    WorkflowDefinition,
    WorkflowStep,
)
from sselfie_core.workflow.progress import (
    FEED_PLANNER_WORKFLOW,
    UnknownWorkflowStepError,
    compute_progress,
    progress_from_snapshot,
)
from sselfie_core.workflow.registry import UnknownWorkflowError, WorkflowRegistry

__all__ = [
    "FEED_PLANNER_WORKFLOW",
    "ProgressSnapshot",
    "ProgressSummary",
    "UnknownWorkflowError",
    "UnknownWorkflowStepError",
    "WorkflowDefinition",
    "WorkflowRegistry",
    "WorkflowStep",
    "compute_progress",
    "load_workflow_directory",
    "load_workflow_file",
    "progress_from_snapshot",
]
