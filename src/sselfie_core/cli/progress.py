"""CLI handlers for ``sselfie progress`` and ``sselfie workflows``."""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from sselfie_core.engine import NurtureEngine
from sselfie_core.workflow.progress import UnknownWorkflowStepError
from sselfie_core.workflow.registry import UnknownWorkflowError


def _build_engine(workflow_dir: str) -> NurtureEngine:
    if not workflow_dir:
        return NurtureEngine()
    if not Path(workflow_dir).is_dir():
        print(f"Error: workflow directory does not exist: {workflow_dir}", file=sys.stderr)
        sys.exit(1)
    return NurtureEngine.from_directory(workflow_dir)


def run_progress(args: Namespace) -> None:
    engine = _build_engine(args.workflow_dir)
    try:
        summary = engine.progress(args.step, args.percent, workflow_id=args.workflow or None)
    except (UnknownWorkflowStepError, UnknownWorkflowError) as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(summary.to_payload(), indent=2))
    else:
        print(
            f"{summary.current_step}: {summary.progress}%"
            f" | ~{summary.estimated_time_remaining}s remaining"
            f" | {summary.message}"
        )


def run_workflows(args: Namespace) -> None:
    engine = _build_engine(args.workflow_dir)
    workflows = engine.registry.all()

    if args.json:
        print(json.dumps(
            [wf.model_dump() for wf in workflows],
            indent=2,
        ))
        return

    for wf in workflows:
        print(f"{wf.id} ({wf.display_name or wf.id}) - {wf.total_duration:g}s total")
        for step in wf.steps:
            print(f"  {step.id.ljust(24)} {step.duration_seconds:>6g}s  {step.message}")
