from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Any

from .config import DebounceConfig
from .gestures import SWIPE_GESTURES, Gestures
from .rules import GestureCandidate

logger = logging.getLogger("handsfree_gestures.debouncer")


class DebounceStatus(enum.Enum):
    IDLE = "idle"  # No pending candidate
    ACCUMULATING = "accumulating"  # Counting consecutive identical candidates
    CONFIRMED = "confirmed"  # A gesture was just emitted
    COOLDOWN = "cooldown"  # Emissions suppressed after a confirmed gesture


@dataclass
class DebounceState:
    last_confirmed_label: Gestures | None = None
    last_confirmed_at_ms: float | None = None
    pending_label: Gestures | None = None
    pending_count: int = 0
    status: DebounceStatus = DebounceStatus.IDLE

    def clear_pending(self) -> None:
        self.pending_label = None
        self.pending_count = 0

    def copy(self) -> DebounceState:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_confirmed_label": self.last_confirmed_label.value if self.last_confirmed_label else None,
            "last_confirmed_at_ms": self.last_confirmed_at_ms,
            "pending_label": self.pending_label.value if self.pending_label else None,
            "pending_count": self.pending_count,
            "status": self.status.value,
        }


class TemporalDebouncer:
    """Confirm a gesture only once its candidate is stable, and not too soon after the previous one.

    A candidate must be seen on `consecutive_detections_required` consecutive frames to be
    confirmed. After a confirmation, nothing is confirmed for `cooldown_ms`, and candidates
    seen meanwhile do not accumulate. The exception is a swipe following a swipe by less than
    twice the cooldown: it is confirmed at once, to allow fast repeated swipes.

    All timing comes from the `now_ms` passed to `update`, there is no clock here.
    """

    def __init__(self, config: DebounceConfig, confidence_threshold: float) -> None:
        self.config = config
        self.confidence_threshold = confidence_threshold
        self.state = DebounceState()

    def reset(self) -> None:
        """Forget everything, cooldown included."""
        self.state = DebounceState()

    def clear_pending(self) -> None:
        """Forget the accumulation but keep the cooldown running, for tracking gaps."""
        self.state.clear_pending()
        if self.state.status == DebounceStatus.ACCUMULATING:
            self.state.status = DebounceStatus.IDLE

    def elapsed_since_confirmation(self, now_ms: float) -> float | None:
        if self.state.last_confirmed_at_ms is None:
            return None
        return now_ms - self.state.last_confirmed_at_ms

    def in_cooldown(self, now_ms: float) -> bool:
        elapsed = self.elapsed_since_confirmation(now_ms)
        return elapsed is not None and elapsed < self.config.cooldown_ms

    def _continues_swipe(self, candidate: GestureCandidate, now_ms: float) -> bool:
        if candidate.label not in SWIPE_GESTURES or self.state.last_confirmed_label not in SWIPE_GESTURES:
            return False
        elapsed = self.elapsed_since_confirmation(now_ms)
        return elapsed is not None and elapsed < self.config.cooldown_ms * 2

    def _confirm(self, label: Gestures, now_ms: float) -> Gestures:
        state = self.state
        state.last_confirmed_label = label
        state.last_confirmed_at_ms = now_ms
        state.clear_pending()
        state.status = DebounceStatus.CONFIRMED
        logger.debug("Gesture %s confirmed at %.0fms", label.value, now_ms)
        return label

    def update(self, candidate: GestureCandidate, now_ms: float) -> Gestures | None:
        """Feed the candidate of a frame, and get the gesture confirmed on this frame, if any."""
        state = self.state
        confident = candidate.confidence >= self.confidence_threshold

        if confident and self._continues_swipe(candidate, now_ms):
            return self._confirm(candidate.label, now_ms)

        if self.in_cooldown(now_ms):
            state.clear_pending()
            state.status = DebounceStatus.COOLDOWN
            return None

        if candidate.is_none:
            state.clear_pending()
            state.status = DebounceStatus.IDLE
            return None

        if candidate.label == state.pending_label:
            state.pending_count += 1
        else:
            state.pending_label = candidate.label
            state.pending_count = 1
        state.status = DebounceStatus.ACCUMULATING

        if state.pending_count >= self.config.consecutive_detections_required and confident:
            return self._confirm(candidate.label, now_ms)

        return None
