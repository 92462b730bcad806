"""Nurture utilities -- event scoring, stage transitions, and transition storage."""

from sselfie_core.nurture.offers import (
    run_apa_workflow,
    select_offer,
    should_trigger_apa,
    workflow_type_for_offer,
)
from sselfie_core.nurture.scoring import (
    FUNNEL_STAGE_ADJUSTMENTS,
    HOT_THRESHOLD,
    SCORING_MAP,
    WARM_THRESHOLD,
    NurtureScore,
    NurtureStage,
    adjustment_for_funnel_stage,
    clamp_adjusted_score,
    compute_behavior_score,
    points_for_event,
    score_events,
    stage_for_score,
)
from sselfie_core.nurture.store import TransitionStore
from sselfie_core.nurture.transitions import (
    DEFAULT_TRANSITIONS,
    NurtureAction,
    TransitionCallback,
    TransitionConfig,
    TransitionDetector,
    action_for_stage,
    check_stage_transition,
)

__all__ = [
    "DEFAULT_TRANSITIONS",
    "FUNNEL_STAGE_ADJUSTMENTS",
    "HOT_THRESHOLD",
    "NurtureAction",
    "NurtureScore",
    "NurtureStage",
    "SCORING_MAP",
    "TransitionCallback",
    "TransitionConfig",
    "TransitionDetector",
    "TransitionStore",
    "WARM_THRESHOLD",
    "action_for_stage",
    "adjustment_for_funnel_stage",
    "check_stage_transition",
    "clamp_adjusted_score",
    "compute_behavior_score",
    "points_for_event",
    "run_apa_workflow",
    "score_events",
    "select_offer",
    "should_trigger_apa",
    "stage_for_score",
    "workflow_type_for_offer",
]
