"""CLI handler for ``sselfie score``."""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from sselfie_core.nurture.scoring import points_for_event, score_events
from sselfie_core.nurture.transitions import action_for_stage


def run_score(args: Namespace) -> None:
    unknown = [ev for ev in args.events if points_for_event(ev) == 0]
    for ev in unknown:
        print(f"Warning: {ev!r} is not a scored event", file=sys.stderr)

    result = score_events(args.events, args.funnel_stage or None, base=args.base)
    action = action_for_stage(result.stage)

    if args.json:
        print(json.dumps({
            "events": [{"event": ev, "points": points_for_event(ev)} for ev in args.events],
            "behavior_score": result.behavior_score,
            "stage": result.stage.value,
            "intent_score": result.intent_score,
            "action": action.value,
        }, indent=2))
        return

    for ev in args.events:
        print(f"  {ev.ljust(24)} +{points_for_event(ev)}")
    print(
        f"score: {result.behavior_score} | stage: {result.stage.value}"
        f" | intent: {result.intent_score} | action: {action.value}"
    )
