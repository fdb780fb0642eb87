from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias

from .config import EngineConfig
from .debouncer import DebounceState, DebounceStatus, TemporalDebouncer
from .gestures import SWIPE_GESTURES, Gestures
from .models.fingers import FingerStateClassifier
from .models.landmarks import HandFrame
from .models.palm import PalmMotionTracker
from .rules import GestureRuleEngine

logger = logging.getLogger("handsfree_gestures.engine")


@dataclass(frozen=True)
class GestureEvent:
    """Result of the engine for one frame, `Gestures.NONE` when nothing is confirmed."""

    label: Gestures
    confidence: float

    def __bool__(self) -> bool:
        """Check if a gesture was confirmed."""
        return self.label is not Gestures.NONE

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label.value, "confidence": self.confidence}


TimedFrame: TypeAlias = tuple[HandFrame | None, float]


class GestureEngine:
    """Turn a stream of hand frames into a stream of stable gesture events.

    One engine tracks one hand in one session: it owns all the state kept between frames
    (motion history, pending and last confirmed gestures). Use one instance per hand.
    Calls must come from a single stream, with increasing timestamps.

    Usage:
        engine = GestureEngine(EngineConfig())
        for frame, now_ms in pose_source:
            if event := engine.classify(frame, now_ms):
                dispatcher.dispatch(event)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config if config is not None else EngineConfig()
        self.fingers_classifier = FingerStateClassifier(self.config.fingers)
        self.motion_tracker = PalmMotionTracker(self.config.swipe)
        self.rule_engine = GestureRuleEngine(self.config)
        self.debouncer = TemporalDebouncer(self.config.debounce, self.config.confidence_threshold)

    @property
    def debounce_state(self) -> DebounceState:
        """A copy of the current debounce state."""
        return self.debouncer.state.copy()

    @property
    def state(self) -> DebounceStatus:
        return self.debouncer.state.status

    def reset(self) -> None:
        """Clear all state kept between frames, to be called at session start/stop."""
        self.motion_tracker.clear()
        self.debouncer.reset()
        logger.debug("Engine reset")

    def _tracking_lost(self) -> None:
        # The cooldown is kept so a reacquired hand cannot fire again at once
        if len(self.motion_tracker) or self.debouncer.state.pending_label is not None:
            logger.debug("Hand tracking lost, motion and pending gesture cleared")
        self.motion_tracker.clear()
        self.debouncer.clear_pending()

    def classify(self, frame: HandFrame | None, now_ms: float) -> GestureEvent:
        """Process the frame of the current detection cycle (None if no hand) and get its event.

        Never raises for a missing, malformed or low confidence frame: it is handled as a loss
        of tracking, and the event is `Gestures.NONE`.
        """
        if frame is None or not frame.is_valid:
            self._tracking_lost()
            return GestureEvent(Gestures.NONE, 0.0)

        if frame.hand_score < self.config.confidence_threshold:
            self._tracking_lost()
            return GestureEvent(Gestures.NONE, frame.hand_score)

        fingers = self.fingers_classifier.classify(frame)
        motion = self.motion_tracker.update(frame, now_ms, fingers)
        candidate = self.rule_engine.evaluate(fingers, motion, frame)
        label = self.debouncer.update(candidate, now_ms)

        if label is None:
            return GestureEvent(Gestures.NONE, frame.hand_score)

        if label in SWIPE_GESTURES:
            # The next swipe must start from a new anchor
            self.motion_tracker.clear_anchor()

        return GestureEvent(label, candidate.confidence)

    def process(self, frames: Iterable[TimedFrame]) -> Iterator[tuple[float, GestureEvent]]:
        """Classify each `(frame, now_ms)` pair of the stream, yielding `(now_ms, event)`."""
        for frame, now_ms in frames:
            yield now_ms, self.classify(frame, now_ms)
