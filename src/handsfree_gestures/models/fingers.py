from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from ..config import FingersConfig
from .geometry import angle
from .landmarks import FINGERS_JOINTS, HandFrame


class FingerIndex(IntEnum):
    """Finger index constants for easier reference."""

    THUMB = 0
    INDEX = 1
    MIDDLE = 2
    RING = 3
    PINKY = 4


class FingerPose(str, Enum):
    EXTENDED = "extended"
    CURVED = "curved"
    AMBIGUOUS = "ambiguous"  # Between both thresholds, or undefined angle


@dataclass(frozen=True)
class FingerExtensionState:
    thumb: bool = False
    index: bool = False
    middle: bool = False
    ring: bool = False
    pinky: bool = False

    def __getitem__(self, finger: FingerIndex) -> bool:
        return bool(getattr(self, finger.name.lower()))

    @property
    def is_open_hand(self) -> bool:
        """Check if the four fingers (except thumb) are extended."""
        return self.index and self.middle and self.ring and self.pinky

    @property
    def is_fist(self) -> bool:
        """Check if no finger, thumb included, is extended."""
        return not (self.thumb or self.index or self.middle or self.ring or self.pinky)

    @property
    def extended_fingers(self) -> list[FingerIndex]:
        return [finger for finger in FingerIndex if self[finger]]

    def to_dict(self) -> dict[str, Any]:
        return {finger.name.lower(): self[finger] for finger in FingerIndex}


class FingerStateClassifier:
    """Tell which fingers are extended, from the fold angle at their middle joint."""

    def __init__(self, config: FingersConfig) -> None:
        self.config = config

    def fold_angle(self, frame: HandFrame, finger: FingerIndex) -> float | None:
        """Angle in degrees at the middle joint of the finger. 180 = straight, None = undefined."""
        base, vertex, tip = FINGERS_JOINTS[finger]
        return angle(frame[base], frame[vertex], frame[tip])

    def pose(self, frame: HandFrame, finger: FingerIndex) -> FingerPose:
        fold_angle = self.fold_angle(frame, finger)
        if fold_angle is None:
            return FingerPose.AMBIGUOUS

        extended_threshold = (
            self.config.thumb_extended_threshold_degrees
            if finger == FingerIndex.THUMB
            else self.config.extended_threshold_degrees
        )
        if fold_angle > extended_threshold:
            return FingerPose.EXTENDED
        if fold_angle < self.config.curved_threshold_degrees:
            return FingerPose.CURVED
        return FingerPose.AMBIGUOUS

    def poses(self, frame: HandFrame) -> dict[FingerIndex, FingerPose]:
        return {finger: self.pose(frame, finger) for finger in FingerIndex}

    def classify(self, frame: HandFrame) -> FingerExtensionState:
        """Get the extension state of the five fingers. Ambiguous fingers are not extended."""
        poses = self.poses(frame)
        return FingerExtensionState(
            **{finger.name.lower(): pose == FingerPose.EXTENDED for finger, pose in poses.items()}
        )
