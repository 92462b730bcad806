"""Tests for sselfie_core.nurture.scoring."""

from __future__ import annotations

import pytest

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


class TestPointsForEvent:
    def test_known_events(self):
        assert points_for_event("blueprint_completed") == 15
        assert points_for_event("email_clicked") == 5
        assert points_for_event("email_opened") == 2

    @pytest.mark.parametrize(
        "tag",
        ["", "unknown_event", "EMAIL_CLICKED", " email_clicked", None, 42, ["email_clicked"]],
    )
    def test_unknown_returns_zero(self, tag):
        assert points_for_event(tag) == 0

    def test_every_mapped_event_is_positive(self):
        assert all(points > 0 for points in SCORING_MAP.values())

    def test_scoring_map_is_read_only(self):
        with pytest.raises(TypeError):
            SCORING_MAP["new_event"] = 100  # type: ignore[index]


class TestStageForScore:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (40, NurtureStage.HOT),
            (39, NurtureStage.WARM),
            (15, NurtureStage.WARM),
            (14, NurtureStage.COLD),
            (0, NurtureStage.COLD),
            (-5, NurtureStage.COLD),
            (-(10**12), NurtureStage.COLD),
            (10**12, NurtureStage.HOT),
        ],
    )
    def test_boundaries(self, score, expected):
        assert stage_for_score(score) is expected

    def test_thresholds(self):
        assert WARM_THRESHOLD == 15
        assert HOT_THRESHOLD == 40

    def test_stage_is_string_valued(self):
        assert stage_for_score(50) == "hot"
        assert stage_for_score(20).value == "warm"

    def test_always_one_of_three(self):
        for score in range(-50, 150):
            assert stage_for_score(score) in set(NurtureStage)


class TestClampAdjustedScore:
    def test_extremes(self):
        assert clamp_adjusted_score(1000, 1000) == 100
        assert clamp_adjusted_score(-1000, -1000) == 0

    def test_within_range_passes_through(self):
        assert clamp_adjusted_score(30, 10) == 40
        assert clamp_adjusted_score(50, -20) == 30

    def test_edges(self):
        assert clamp_adjusted_score(100, 0) == 100
        assert clamp_adjusted_score(0, 0) == 0
        assert clamp_adjusted_score(90, 11) == 100
        assert clamp_adjusted_score(5, -6) == 0

    def test_bounded_over_grid(self):
        values = [-(10**9), -101, -1, 0, 1, 50, 99, 100, 101, 10**9]
        for base in values:
            for adj in values:
                assert 0 <= clamp_adjusted_score(base, adj) <= 100


class TestFunnelAdjustment:
    def test_known_stage(self):
        assert adjustment_for_funnel_stage("studio_member") == 30
        assert adjustment_for_funnel_stage("freebie") == 0

    @pytest.mark.parametrize("stage", [None, "", "enterprise"])
    def test_unknown_stage_is_zero(self, stage):
        assert adjustment_for_funnel_stage(stage) == 0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FUNNEL_STAGE_ADJUSTMENTS["vip"] = 50  # type: ignore[index]


class TestComputeBehaviorScore:
    def test_empty(self):
        assert compute_behavior_score([]) == 0

    def test_sums_known_and_ignores_unknown(self):
        events = ["blueprint_completed", "email_clicked", "mystery", "email_opened"]
        assert compute_behavior_score(events) == 15 + 5 + 2

    def test_accepts_generator(self):
        assert compute_behavior_score(e for e in ["grid_generated", "grid_generated"]) == 20


class TestScoreEvents:
    def test_cold_subscriber(self):
        result = score_events(["email_opened"])
        assert result == NurtureScore(behavior_score=2, stage=NurtureStage.COLD, intent_score=2)

    def test_reaches_hot(self):
        events = ["blueprint_completed", "checkout_started", "pricing_viewed", "email_replied"]
        result = score_events(events)
        assert result.behavior_score == 48
        assert result.stage is NurtureStage.HOT

    def test_base_is_added(self):
        result = score_events(["email_clicked"], base=12)
        assert result.behavior_score == 17
        assert result.stage is NurtureStage.WARM

    def test_funnel_stage_only_moves_intent(self):
        result = score_events(["blueprint_completed"], "paid_blueprint")
        assert result.behavior_score == 15
        assert result.stage is NurtureStage.WARM
        assert result.intent_score == 35

    def test_intent_clamped(self):
        result = score_events([], "studio_member", base=95)
        assert result.intent_score == 100

    def test_negative_base_floors_at_zero(self):
        result = score_events(["email_opened"], base=-50)
        assert result.behavior_score == 0
        assert result.stage is NurtureStage.COLD

    def test_idempotent(self):
        events = ["blueprint_started", "email_clicked"]
        assert score_events(events, "blueprint") == score_events(events, "blueprint")
