"""Test fixtures for sselfie-core tests."""

from __future__ import annotations

import sqlite3

import pytest

from sselfie_core.nurture.store import TransitionStore
from sselfie_core.workflow.models import WorkflowDefinition, WorkflowStep


@pytest.fixture
def memory_conn():
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def transition_store(memory_conn):
    return TransitionStore(memory_conn)


def make_test_workflow(
    workflow_id: str = "test_workflow",
    steps: list[tuple[str, float]] | None = None,
) -> WorkflowDefinition:
    """Create a small workflow; *steps* are ``(id, seconds)`` pairs."""
    pairs = steps or [("first", 10), ("second", 30), ("third", 60)]
    return WorkflowDefinition(
        id=workflow_id,
        display_name=f"Test: {workflow_id}",
        steps=tuple(
            WorkflowStep(id=sid, duration_seconds=secs, message=f"Running {sid}...")
            for sid, secs in pairs
        ),
    )


WORKFLOW_YAML = """\
id: onboarding
display_name: Onboarding
steps:
  - id: upload_selfies
    duration_seconds: 30
    message: Uploading your selfies...
  - id: train_model
    duration_seconds: 90
    message: Training your personal model...
"""
