"""Tests for the sselfie CLI."""

from __future__ import annotations

import json

import pytest
from conftest import WORKFLOW_YAML

from sselfie_core.__main__ import main


class TestScoreCommand:
    def test_json_output(self, capsys):
        main(["score", "blueprint_completed", "email_clicked", "--funnel-stage", "blueprint", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["behavior_score"] == 20
        assert payload["stage"] == "warm"
        assert payload["intent_score"] == 30
        assert payload["action"] == "warm_sequence"
        assert payload["events"][0] == {"event": "blueprint_completed", "points": 15}

    def test_text_output_with_base(self, capsys):
        main(["score", "checkout_started", "--base", "30"])
        out = capsys.readouterr().out
        assert "score: 45 | stage: hot" in out
        assert "action: hot_email" in out

    def test_unknown_event_warns(self, capsys):
        main(["score", "mystery"])
        captured = capsys.readouterr()
        assert "'mystery' is not a scored event" in captured.err
        assert "stage: cold" in captured.out


class TestProgressCommand:
    def test_json_output(self, capsys):
        main(["progress", "brand_strategy", "50", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "currentStep": "brand_strategy",
            "progress": 29,
            "message": "Building your brand strategy...",
            "estimatedTimeRemaining": 450,
        }

    def test_text_output(self, capsys):
        main(["progress", "content_research", "0"])
        assert "content_research: 0% | ~630s remaining" in capsys.readouterr().out

    def test_unknown_step_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["progress", "video_editing", "10"])
        assert exc_info.value.code == 1
        assert "Unknown step 'video_editing'" in capsys.readouterr().err

    def test_workflow_dir(self, tmp_path, capsys):
        (tmp_path / "onboarding.yaml").write_text(WORKFLOW_YAML)
        main([
            "progress", "train_model", "100",
            "--workflow-dir", str(tmp_path), "--workflow", "onboarding", "--json",
        ])
        payload = json.loads(capsys.readouterr().out)
        assert payload["progress"] == 100
        assert payload["estimatedTimeRemaining"] == 0

    def test_unknown_workflow_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["progress", "brand_strategy", "10", "--workflow", "missing"])
        assert exc_info.value.code == 1
        assert "Unknown workflow" in capsys.readouterr().err

    def test_missing_workflow_dir_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["progress", "brand_strategy", "10", "--workflow-dir", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().err


class TestWorkflowsCommand:
    def test_lists_builtin(self, capsys):
        main(["workflows"])
        out = capsys.readouterr().out
        assert "feed_planner (Feed Planner) - 630s total" in out
        assert "image_generation" in out

    def test_json(self, tmp_path, capsys):
        (tmp_path / "onboarding.yaml").write_text(WORKFLOW_YAML)
        main(["workflows", "--workflow-dir", str(tmp_path), "--json"])
        payload = json.loads(capsys.readouterr().out)
        ids = [wf["id"] for wf in payload]
        assert ids == ["onboarding", "feed_planner"]
        assert payload[1]["steps"][0]["duration_seconds"] == 150


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "usage" in capsys.readouterr().out
