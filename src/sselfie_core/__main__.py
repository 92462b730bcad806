"""CLI entry point: python -m sselfie_core <command>."""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sselfie",
        description="SSELFIE nurture scoring and workflow progress",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    sc = sub.add_parser("score", help="Score a list of behavioral events")
    sc.add_argument("events", nargs="*", help="Event tags, e.g. blueprint_completed email_clicked")
    sc.add_argument("--base", type=int, default=0, help="Score already accumulated")
    sc.add_argument("--funnel-stage", default="", help="Funnel stage for the intent adjustment")
    sc.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    pr = sub.add_parser("progress", help="Compute workflow progress from a step snapshot")
    pr.add_argument("step", help="Current step id")
    pr.add_argument("percent", type=float, help="Progress within the current step (0-100)")
    pr.add_argument("--workflow-dir", default="", help="Directory of workflow YAML files")
    pr.add_argument("--workflow", default="", help="Workflow id (default: feed_planner)")
    pr.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    wf = sub.add_parser("workflows", help="List known workflows and their steps")
    wf.add_argument("--workflow-dir", default="", help="Directory of workflow YAML files")
    wf.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.command == "score":
        from sselfie_core.cli.score import run_score
        run_score(args)
    elif args.command == "progress":
        from sselfie_core.cli.progress import run_progress
        run_progress(args)
    elif args.command == "workflows":
        from sselfie_core.cli.progress import run_workflows
        run_workflows(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
