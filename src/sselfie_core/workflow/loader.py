"""YAML workflow loading. Files starting with underscore are skipped.

Expected shape::

    id: feed_planner
    display_name: Feed Planner
    steps:
      - id: content_research
        duration_seconds: 150
        message: Researching trending content in your niche...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from sselfie_core.workflow.models import WorkflowDefinition, WorkflowStep
from sselfie_core.workflow.registry import WorkflowRegistry

logger = logging.getLogger(__name__)


def load_workflow_file(path: str | Path) -> WorkflowDefinition:
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)
    if raw_data is None:
        raise ValueError(f"Empty workflow YAML: {path}")
    if not isinstance(raw_data, dict):
        raise ValueError(f"Workflow YAML root must be a mapping: {path}")

    data: dict[str, Any] = raw_data
    steps = [
        WorkflowStep(
            id=s.get("id", ""),
            duration_seconds=s.get("duration_seconds", s.get("duration", 0)),
            message=s.get("message", ""),
        )
        for s in data.get("steps") or []
    ]
    return WorkflowDefinition(
        id=data["id"],
        display_name=data.get("display_name", ""),
        steps=tuple(steps),
    )


def load_workflow_directory(directory: str | Path, registry: WorkflowRegistry) -> int:
    """Load all YAML workflows from a directory recursively. Returns count loaded."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Workflow directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        try:
            registry.register(load_workflow_file(path))
            count += 1
        except (yaml.YAMLError, KeyError, ValueError, TypeError, AttributeError) as exc:
            logger.exception("Failed to load workflow from %s: %s", path, exc)
    return count
