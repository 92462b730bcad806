"""Workflow registry -- in-memory index of workflow definitions by ID."""

from __future__ import annotations

import logging

from sselfie_core.workflow.models import WorkflowDefinition

logger = logging.getLogger(__name__)


class UnknownWorkflowError(KeyError):
    pass


class WorkflowRegistry:
    def __init__(self) -> None:
        self._workflows: dict[str, WorkflowDefinition] = {}

    def register(self, workflow: WorkflowDefinition) -> None:
        """Add a workflow definition.

        Raises ValueError if a workflow with the same ID is already registered.
        """
        if workflow.id in self._workflows:
            raise ValueError(f"Duplicate workflow id registered: {workflow.id!r}")
        self._workflows[workflow.id] = workflow
        logger.debug("Registered workflow %s (%d steps)", workflow.id, len(workflow.steps))

    def get(self, workflow_id: str) -> WorkflowDefinition | None:
        return self._workflows.get(workflow_id)

    def require(self, workflow_id: str) -> WorkflowDefinition:
        workflow = self._workflows.get(workflow_id)
        if workflow is None:
            raise UnknownWorkflowError(f"Unknown workflow: {workflow_id!r}")
        return workflow

    def all(self) -> list[WorkflowDefinition]:
        return list(self._workflows.values())

    def __contains__(self, workflow_id: object) -> bool:
        return workflow_id in self._workflows

    def __len__(self) -> int:
        return len(self._workflows)
