"""Nurture scoring -- event points, stage buckets, and the bounded intent scale.

All functions are pure (no I/O) and never raise on unexpected input.
Accumulating a subscriber's score over time is the caller's job; this
module supplies the point lookup and the classification/clamp steps.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

WARM_THRESHOLD = 15
HOT_THRESHOLD = 40

INTENT_MIN = 0
INTENT_MAX = 100


class NurtureStage(str, Enum):
    COLD = "cold"
    WARM = "warm"
    HOT = "hot"


SCORING_MAP: MappingProxyType[str, int] = MappingProxyType({
    "blueprint_started": 5,
    "blueprint_completed": 15,
    "grid_generated": 10,
    "email_opened": 2,
    "email_clicked": 5,
    "email_replied": 10,
    "pricing_viewed": 8,
    "studio_page_viewed": 5,
    "checkout_started": 15,
    "feed_planner_used": 10,
})

# Secondary signal folded into the intent scale, keyed by funnel stage.
FUNNEL_STAGE_ADJUSTMENTS: MappingProxyType[str, int] = MappingProxyType({
    "freebie": 0,
    "blueprint": 10,
    "paid_blueprint": 20,
    "studio_trial": 25,
    "studio_member": 30,
})


class NurtureScore(NamedTuple):
    """Result of scoring a batch of events."""

    behavior_score: int
    stage: NurtureStage
    intent_score: int


def points_for_event(event_tag: Any) -> int:
    """Return the point value for *event_tag*, or ``0`` if it is not in the vocabulary."""
    if not isinstance(event_tag, str):
        return 0
    return SCORING_MAP.get(event_tag, 0)


def stage_for_score(score: int) -> NurtureStage:
    """Bucket an accumulated score: ``>= 40`` hot, ``>= 15`` warm, anything else cold."""
    if score >= HOT_THRESHOLD:
        return NurtureStage.HOT
    if score >= WARM_THRESHOLD:
        return NurtureStage.WARM
    return NurtureStage.COLD


def clamp_adjusted_score(base: int, adjustment: int) -> int:
    """Combine *base* with *adjustment* and clamp the result to ``[0, 100]``."""
    return max(INTENT_MIN, min(INTENT_MAX, base + adjustment))


def adjustment_for_funnel_stage(funnel_stage: str | None) -> int:
    if not funnel_stage:
        return 0
    return FUNNEL_STAGE_ADJUSTMENTS.get(funnel_stage, 0)


def compute_behavior_score(events: Iterable[str]) -> int:
    """Sum the points of every event, floored at zero."""
    return max(0, sum(points_for_event(ev) for ev in events))


def score_events(
    events: Iterable[str],
    funnel_stage: str | None = None,
    *,
    base: int = 0,
) -> NurtureScore:
    """Score *events* on top of an existing *base* score.

    Parameters
    ----------
    events:
        Behavioral event tags, in any order.  Unknown tags contribute nothing.
    funnel_stage:
        Where the subscriber sits in the funnel; feeds the intent adjustment.
    base:
        Score already accumulated (and persisted) by the caller.
    """
    behavior_score = max(0, base + compute_behavior_score(events))
    return NurtureScore(
        behavior_score=behavior_score,
        stage=stage_for_score(behavior_score),
        intent_score=clamp_adjusted_score(
            behavior_score, adjustment_for_funnel_stage(funnel_stage),
        ),
    )
