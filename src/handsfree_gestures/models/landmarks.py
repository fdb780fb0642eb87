from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import IntEnum
from math import isfinite, nan
from numbers import Real
from typing import Any, ClassVar, NamedTuple, TypeAlias

NB_HAND_LANDMARKS = 21


class HandLandmark(IntEnum):
    """Standard 21-point hand landmark indices."""

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


LandmarkGroup: TypeAlias = tuple[HandLandmark, ...]


class LandmarkGroups:
    # Joints used to measure the fold of each finger: (base, vertex, tip)
    THUMB_JOINTS: ClassVar[LandmarkGroup] = (
        HandLandmark.THUMB_CMC,
        HandLandmark.THUMB_MCP,
        HandLandmark.THUMB_TIP,
    )
    INDEX_JOINTS: ClassVar[LandmarkGroup] = (
        HandLandmark.INDEX_FINGER_MCP,
        HandLandmark.INDEX_FINGER_PIP,
        HandLandmark.INDEX_FINGER_TIP,
    )
    MIDDLE_JOINTS: ClassVar[LandmarkGroup] = (
        HandLandmark.MIDDLE_FINGER_MCP,
        HandLandmark.MIDDLE_FINGER_PIP,
        HandLandmark.MIDDLE_FINGER_TIP,
    )
    RING_JOINTS: ClassVar[LandmarkGroup] = (
        HandLandmark.RING_FINGER_MCP,
        HandLandmark.RING_FINGER_PIP,
        HandLandmark.RING_FINGER_TIP,
    )
    PINKY_JOINTS: ClassVar[LandmarkGroup] = (
        HandLandmark.PINKY_MCP,
        HandLandmark.PINKY_PIP,
        HandLandmark.PINKY_TIP,
    )
    # Anatomical anchors of the palm, fingertips excluded
    PALM_ANCHORS: ClassVar[LandmarkGroup] = (
        HandLandmark.WRIST,
        HandLandmark.INDEX_FINGER_MCP,
        HandLandmark.PINKY_MCP,
    )


FINGERS_JOINTS = (
    LandmarkGroups.THUMB_JOINTS,
    LandmarkGroups.INDEX_JOINTS,
    LandmarkGroups.MIDDLE_JOINTS,
    LandmarkGroups.RING_JOINTS,
    LandmarkGroups.PINKY_JOINTS,
)


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and isfinite(value)


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return nan


class Landmark(NamedTuple):
    """A hand landmark in camera-frame coordinates.

    Attributes:
        x: X coordinate (normalized 0..1 or pixels, consistent within a session) => also `landmark[0]`
        y: Y coordinate, growing toward the bottom of the frame => also `landmark[1]`
        z: Optional depth
        score: Optional per-landmark detection confidence
    """

    x: float
    y: float
    z: float | None = None
    score: float | None = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any] | Sequence[Any]) -> Landmark:
        """Build a landmark from a `{"x", "y", "z", "score"}` mapping or a `[x, y, z]` sequence.

        Missing or non numeric coordinates become NaN so the owning frame is seen as malformed.
        """
        if isinstance(data, Mapping):
            z = data.get("z")
            score = data.get("score")
            return cls(
                x=_to_float(data.get("x")),
                y=_to_float(data.get("y")),
                z=None if z is None else _to_float(z),
                score=None if score is None else _to_float(score),
            )
        values = list(data) if isinstance(data, Sequence) and not isinstance(data, str) else []
        return cls(
            x=_to_float(values[0]) if len(values) > 0 else nan,
            y=_to_float(values[1]) if len(values) > 1 else nan,
            z=_to_float(values[2]) if len(values) > 2 else None,
        )

    @property
    def xy(self) -> tuple[float, float]:
        """Get the (x, y) coordinates as a tuple."""
        return self.x, self.y

    @property
    def is_finite(self) -> bool:
        return _is_finite_number(self.x) and _is_finite_number(self.y)

    def to_dict(self) -> dict[str, Any]:
        """Export landmark data as a dictionary."""
        result: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.z is not None:
            result["z"] = self.z
        if self.score is not None:
            result["score"] = self.score
        return result


@dataclass(frozen=True)
class HandFrame:
    """One observation of one hand, as produced by the pose source for a detection cycle."""

    keypoints: tuple[Landmark, ...]
    hand_score: float

    def __post_init__(self) -> None:
        # Accept any sequence but keep the frame immutable
        if not isinstance(self.keypoints, tuple):
            object.__setattr__(self, "keypoints", tuple(self.keypoints))

    @property
    def is_valid(self) -> bool:
        """Check the frame has the full hand topology with usable coordinates."""
        if len(self.keypoints) < NB_HAND_LANDMARKS:
            return False
        if not _is_finite_number(self.hand_score):
            return False
        return all(
            isinstance(landmark, Landmark) and landmark.is_finite
            for landmark in self.keypoints[:NB_HAND_LANDMARKS]
        )

    def __getitem__(self, index: HandLandmark | int) -> Landmark:
        return self.keypoints[index]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HandFrame:
        """Build a frame from its recorded form: `{"hand_score": float, "keypoints": [...]}`."""
        keypoints = data.get("keypoints")
        if not isinstance(keypoints, (list, tuple)):
            keypoints = []
        return cls(
            keypoints=tuple(Landmark.from_data(keypoint) for keypoint in keypoints),
            hand_score=_to_float(data.get("hand_score", data.get("score"))),
        )

    @classmethod
    def from_mediapipe(cls, normalized_landmarks: Sequence[Any], hand_score: float, mirroring: bool = False) -> HandFrame:
        """Create a frame from MediaPipe-like landmarks (objects exposing `x`, `y` and `z`).

        Args:
            normalized_landmarks: The 21 landmarks of one hand, normalized coordinates (0 to 1)
            hand_score: The handedness/presence score of the hand
            mirroring: Whether to mirror the X coordinate (for a mirrored preview)
        """
        return cls(
            keypoints=tuple(
                Landmark(
                    x=(landmark.x if not mirroring else 1 - landmark.x),
                    y=landmark.y,
                    z=getattr(landmark, "z", None),
                    score=getattr(landmark, "visibility", None),
                )
                for landmark in normalized_landmarks
            ),
            hand_score=hand_score,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export frame data as a dictionary (same shape as accepted by `from_dict`)."""
        return {
            "hand_score": self.hand_score,
            "keypoints": [landmark.to_dict() for landmark in self.keypoints],
        }
