"""Offer pathway mapping and the placeholder purchase-accelerator hooks.

The accelerator (APA) never had decision rules behind it; its entry points
report ``not_implemented`` so callers can detect that and skip.
"""

from __future__ import annotations

from typing import Any

NOT_IMPLEMENTED_STATUS = "not_implemented"

_OFFER_WORKFLOWS = {
    "membership": "offer_membership",
    "credits": "offer_credits",
    "studio": "offer_studio",
    "trial": "offer_trial",
}


def workflow_type_for_offer(recommendation: str | None) -> str | None:
    """Queue workflow type for an offer recommendation, or ``None`` if unknown."""
    if not recommendation:
        return None
    return _OFFER_WORKFLOWS.get(recommendation)


def _not_implemented() -> dict[str, Any]:
    return {"status": NOT_IMPLEMENTED_STATUS}


def run_apa_workflow(*args: Any, **kwargs: Any) -> dict[str, Any]:
    return _not_implemented()


def should_trigger_apa(*args: Any, **kwargs: Any) -> dict[str, Any]:
    return _not_implemented()


def select_offer(*args: Any, **kwargs: Any) -> dict[str, Any]:
    return _not_implemented()
