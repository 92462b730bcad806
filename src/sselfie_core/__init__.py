"""sselfie-core -- nurture scoring and workflow progress for the SSELFIE app.

Both halves are pure functions over small in-memory inputs; request
handlers own persistence and transport.

Public API::

    from sselfie_core import NurtureEngine
    from sselfie_core.nurture import points_for_event, stage_for_score, clamp_adjusted_score
    from sselfie_core.workflow import compute_progress, FEED_PLANNER_WORKFLOW
"""

from sselfie_core.engine import EventOutcome, NurtureEngine

__all__ = ["EventOutcome", "NurtureEngine"]
__version__ = "0.1.0"
