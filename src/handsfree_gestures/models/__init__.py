from .fingers import FingerExtensionState, FingerIndex, FingerPose, FingerStateClassifier
from .geometry import angle, centroid, magnitude
from .landmarks import HandFrame, HandLandmark, Landmark, LandmarkGroups
from .palm import MotionSample, MotionState, PalmMotionTracker, palm_centroid

__all__ = [
    "FingerExtensionState",
    "FingerIndex",
    "FingerPose",
    "FingerStateClassifier",
    "HandFrame",
    "HandLandmark",
    "Landmark",
    "LandmarkGroups",
    "MotionSample",
    "MotionState",
    "PalmMotionTracker",
    "angle",
    "centroid",
    "magnitude",
    "palm_centroid",
]
