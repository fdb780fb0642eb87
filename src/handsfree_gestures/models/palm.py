from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from ..config import SwipeConfig
from .fingers import FingerExtensionState
from .geometry import centroid
from .landmarks import HandFrame, LandmarkGroups

logger = logging.getLogger("handsfree_gestures.palm")


@dataclass(frozen=True)
class MotionSample:
    """Palm centroid position at a given time."""

    x: float
    y: float
    timestamp_ms: float


@dataclass(frozen=True)
class MotionState:
    displacement_x: float = 0.0  # Since the swipe anchor if any, else since the oldest sample
    displacement_y: float = 0.0
    velocity: float = 0.0  # Horizontal speed between the two most recent samples, in units per second
    is_open_hand_moving: bool = False  # Open hand with an armed swipe anchor


def palm_centroid(frame: HandFrame) -> tuple[float, float]:
    """Palm center: mean of the wrist, index MCP and pinky MCP landmarks."""
    return centroid(frame[landmark] for landmark in LandmarkGroups.PALM_ANCHORS)


class PalmMotionTracker:
    """Keep a short history of palm positions to measure the hand movement.

    Swipes are tracked in two phases: an anchor is armed on the previous position as soon
    as the palm of an open hand moves by more than the noise floor between two samples,
    then the displacement is measured from this anchor until the swipe is confirmed or
    the hand is not fully open anymore.
    """

    def __init__(self, config: SwipeConfig) -> None:
        self.config = config
        self.history: deque[MotionSample] = deque(maxlen=config.history_size)
        self.swipe_anchor: MotionSample | None = None

    def __len__(self) -> int:
        return len(self.history)

    def clear(self) -> None:
        """Forget all motion, to be called when the hand is not tracked anymore."""
        self.history.clear()
        self.swipe_anchor = None

    def clear_anchor(self) -> None:
        """Forget the swipe anchor, to be called when a swipe is confirmed."""
        if self.swipe_anchor is not None:
            logger.debug("Swipe anchor cleared")
        self.swipe_anchor = None

    @property
    def velocity(self) -> float:
        """Horizontal speed, in units per second, between the two most recent samples."""
        if len(self.history) < 2:
            return 0.0
        previous, current = self.history[-2], self.history[-1]
        elapsed_ms = current.timestamp_ms - previous.timestamp_ms
        if elapsed_ms <= 0:
            return 0.0
        return abs(current.x - previous.x) / (elapsed_ms / 1000)

    def update(self, frame: HandFrame, now_ms: float, fingers: FingerExtensionState) -> MotionState:
        """Add the palm position of the frame to the history and compute the motion."""
        x, y = palm_centroid(frame)
        previous = self.history[-1] if self.history else None
        current = MotionSample(x=x, y=y, timestamp_ms=now_ms)
        self.history.append(current)

        if not fingers.is_open_hand:
            self.clear_anchor()
        elif self.swipe_anchor is None and previous is not None and abs(x - previous.x) > self.config.noise_floor:
            self.swipe_anchor = previous
            logger.debug("Swipe anchor armed at x=%.3f", previous.x)

        reference = self.swipe_anchor if self.swipe_anchor is not None else self.history[0]

        return MotionState(
            displacement_x=x - reference.x,
            displacement_y=y - reference.y,
            velocity=self.velocity,
            is_open_hand_moving=self.swipe_anchor is not None,
        )
