"""Nurture stage transitions -- pure detection, no DB or I/O.

A transition record is produced when a subscriber's recomputed stage
differs from the stored one and the move is mapped in
:class:`TransitionConfig`.  Sending the follow-up is the caller's job;
:func:`action_for_stage` only names it.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from sselfie_core.nurture.scoring import NurtureStage
from sselfie_core.telemetry import NoOpTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[dict[str, Any]], None]

DEFAULT_TRANSITIONS: dict[tuple[str, str], str] = {
    (NurtureStage.COLD.value, NurtureStage.WARM.value): "cold_to_warm",
    (NurtureStage.COLD.value, NurtureStage.HOT.value): "cold_to_hot",
    (NurtureStage.WARM.value, NurtureStage.HOT.value): "warm_to_hot",
}


class NurtureAction(str, Enum):
    NO_ACTION_LOW_INTENT = "no_action_low_intent"
    WARM_SEQUENCE = "warm_sequence"
    HOT_EMAIL = "hot_email"


_STAGE_ACTIONS = {
    NurtureStage.COLD: NurtureAction.NO_ACTION_LOW_INTENT,
    NurtureStage.WARM: NurtureAction.WARM_SEQUENCE,
    NurtureStage.HOT: NurtureAction.HOT_EMAIL,
}


def action_for_stage(stage: NurtureStage | str) -> NurtureAction:
    """Follow-up for a subscriber who just entered *stage*.  Cold gets nothing."""
    return _STAGE_ACTIONS[NurtureStage(stage)]


@dataclass(frozen=True)
class TransitionConfig:
    """Which stage moves produce a transition record.

    Parameters
    ----------
    transitions:
        ``{(old_stage, new_stage): transition_type}`` map.  Downward moves
        are absent from the default, so they pass silently.
    """

    transitions: dict[tuple[str, str], str] = field(
        default_factory=lambda: dict(DEFAULT_TRANSITIONS),
    )


def _stage_value(stage: NurtureStage | str) -> str:
    return stage.value if isinstance(stage, NurtureStage) else stage


def check_stage_transition(
    *,
    config: TransitionConfig,
    subscriber_id: str,
    old_stage: NurtureStage | str,
    new_stage: NurtureStage | str,
    score: int,
    email: str = "",
    event: str = "",
    callbacks: list[TransitionCallback] | None = None,
) -> dict[str, Any] | None:
    """Return a transition record if the stage move warrants one, else ``None``.

    Does NOT persist -- the caller is responsible for dedup and storage.
    """
    old_value = _stage_value(old_stage)
    new_value = _stage_value(new_stage)
    if old_value == new_value:
        return None

    transition_type = config.transitions.get((old_value, new_value))
    if transition_type is None:
        return None

    record: dict[str, Any] = {
        "id": f"ntr-{uuid.uuid4().hex[:12]}",
        "subscriber_id": subscriber_id,
        "transition_type": transition_type,
        "old_stage": old_value,
        "new_stage": new_value,
        "score": score,
        "email": email,
        "triggering_event": event,
        "action": action_for_stage(new_value).value,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    if callbacks:
        for cb in callbacks:
            try:
                cb(record)
            except Exception:
                logger.exception("Transition callback failed")

    return record


class TransitionDetector:
    """Stateful wrapper around :func:`check_stage_transition` with a callback registry."""

    def __init__(
        self,
        config: TransitionConfig | None = None,
        telemetry_sink: TelemetrySink | None = None,
    ) -> None:
        self._config = config or TransitionConfig()
        self._lock = threading.RLock()
        self._callbacks: list[TransitionCallback] = []
        self.telemetry = telemetry_sink or NoOpTelemetrySink()

    @property
    def config(self) -> TransitionConfig:
        return self._config

    def register_callback(self, cb: TransitionCallback) -> None:
        with self._lock:
            self._callbacks.append(cb)

    def clear_callbacks(self) -> None:
        with self._lock:
            self._callbacks.clear()

    def check(self, **kwargs: Any) -> dict[str, Any] | None:
        """Delegate to :func:`check_stage_transition` with this detector's config and callbacks."""
        with self._lock:
            cbs = list(self._callbacks)
        record = check_stage_transition(config=self._config, callbacks=cbs, **kwargs)
        if record is not None:
            logger.info(
                "Subscriber %s moved %s -> %s (score %s)",
                record["subscriber_id"],
                record["old_stage"],
                record["new_stage"],
                record["score"],
            )
            self.telemetry.emit(TelemetryEvent(
                name="nurture.stage_transition",
                attributes={
                    "subscriber_id": record["subscriber_id"],
                    "transition_type": record["transition_type"],
                    "score": record["score"],
                },
            ))
        return record
