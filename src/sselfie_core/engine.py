"""NurtureEngine facade -- single entry point for request handlers.

Wires scoring, transition detection, optional transition storage, the
workflow registry, and telemetry.  Handlers own transport and persistence
of the score itself; they call in with what they have stored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sselfie_core.nurture.scoring import (
    NurtureStage,
    points_for_event,
    score_events,
    stage_for_score,
)
from sselfie_core.nurture.store import TransitionStore
from sselfie_core.nurture.transitions import (
    NurtureAction,
    TransitionConfig,
    TransitionDetector,
    action_for_stage,
)
from sselfie_core.telemetry import NoOpTelemetrySink, TelemetryEvent, TelemetrySink
from sselfie_core.workflow.loader import load_workflow_directory
from sselfie_core.workflow.models import ProgressSnapshot, ProgressSummary
from sselfie_core.workflow.progress import FEED_PLANNER_WORKFLOW, compute_progress
from sselfie_core.workflow.registry import WorkflowRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventOutcome:
    subscriber_id: str
    event: str
    points: int
    score: int
    stage: NurtureStage
    intent_score: int
    action: NurtureAction
    transition: dict[str, Any] | None = None
    transition_saved: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "subscriber_id": self.subscriber_id,
            "event": self.event,
            "points": self.points,
            "score": self.score,
            "stage": self.stage.value,
            "intent_score": self.intent_score,
            "action": self.action.value,
            "transition": self.transition,
            "transition_saved": self.transition_saved,
        }


class NurtureEngine:
    def __init__(
        self,
        registry: WorkflowRegistry | None = None,
        *,
        transition_config: TransitionConfig | None = None,
        store: TransitionStore | None = None,
        telemetry_sink: TelemetrySink | None = None,
        default_workflow_id: str = FEED_PLANNER_WORKFLOW.id,
    ) -> None:
        self.registry = registry if registry is not None else WorkflowRegistry()
        if FEED_PLANNER_WORKFLOW.id not in self.registry:
            self.registry.register(FEED_PLANNER_WORKFLOW)
        self.default_workflow_id = default_workflow_id
        self.store = store
        self.telemetry = telemetry_sink or NoOpTelemetrySink()
        self.detector = TransitionDetector(transition_config, telemetry_sink=self.telemetry)

    @classmethod
    def from_directory(
        cls,
        workflow_dir: str | Path,
        *,
        transition_config: TransitionConfig | None = None,
        store: TransitionStore | None = None,
        telemetry_sink: TelemetrySink | None = None,
        default_workflow_id: str = FEED_PLANNER_WORKFLOW.id,
    ) -> NurtureEngine:
        """Build an engine whose registry holds every workflow YAML in *workflow_dir*."""
        registry = WorkflowRegistry()
        loaded = load_workflow_directory(workflow_dir, registry)
        logger.info("Loaded %d workflow(s) from %s", loaded, workflow_dir)
        return cls(
            registry,
            transition_config=transition_config,
            store=store,
            telemetry_sink=telemetry_sink,
            default_workflow_id=default_workflow_id,
        )

    def record_event(
        self,
        subscriber_id: str,
        event: str,
        *,
        current_score: int = 0,
        previous_stage: NurtureStage | str | None = None,
        funnel_stage: str | None = None,
        email: str = "",
    ) -> EventOutcome:
        """Apply *event* to a subscriber's stored score and report what changed.

        *previous_stage* defaults to the stage implied by *current_score*.
        A transition is saved only when a store is configured and the
        subscriber has no unprocessed transition of the same type.
        """
        points = points_for_event(event)
        if points == 0:
            logger.debug("Event %r carries no points", event)

        result = score_events([event], funnel_stage, base=current_score)
        old_stage = previous_stage if previous_stage is not None else stage_for_score(current_score)

        transition = self.detector.check(
            subscriber_id=subscriber_id,
            old_stage=old_stage,
            new_stage=result.stage,
            score=result.behavior_score,
            email=email,
            event=event,
        )

        saved = False
        if transition is not None and self.store is not None:
            saved = self.store.save_if_absent(transition)
            if not saved:
                logger.debug(
                    "Subscriber %s already has a pending %s transition",
                    subscriber_id,
                    transition["transition_type"],
                )

        self.telemetry.emit(TelemetryEvent(
            name="nurture.event_scored",
            attributes={
                "subscriber_id": subscriber_id,
                "event": event,
                "points": points,
                "score": result.behavior_score,
                "stage": result.stage.value,
                "intent_score": result.intent_score,
            },
        ))

        return EventOutcome(
            subscriber_id=subscriber_id,
            event=event,
            points=points,
            score=result.behavior_score,
            stage=result.stage,
            intent_score=result.intent_score,
            action=action_for_stage(result.stage),
            transition=transition,
            transition_saved=saved,
        )

    def progress(
        self,
        current_step: str,
        step_progress: float,
        *,
        workflow_id: str | None = None,
    ) -> ProgressSummary:
        """Compute progress against a registered workflow (default: feed planner)."""
        workflow = self.registry.require(workflow_id or self.default_workflow_id)
        summary = compute_progress(current_step, step_progress, workflow)
        self.telemetry.emit(TelemetryEvent(
            name="workflow.progress",
            attributes={
                "workflow_id": workflow.id,
                "current_step": summary.current_step,
                "progress": summary.progress,
                "estimated_time_remaining": summary.estimated_time_remaining,
            },
        ))
        return summary

    def progress_from_cache(
        self,
        raw: Mapping[str, Any],
        *,
        workflow_id: str | None = None,
    ) -> ProgressSummary:
        snapshot = ProgressSnapshot.from_cache(raw)
        return self.progress(
            snapshot.current_step, snapshot.step_progress, workflow_id=workflow_id,
        )
