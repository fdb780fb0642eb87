"""Hands-free gesture recognition: turns hand landmark frames into stable gesture events."""

from .config import Config, EngineConfig
from .engine import GestureEngine, GestureEvent
from .gestures import Gestures
from .models import HandFrame, HandLandmark, Landmark

__all__ = [
    # Core classes
    "GestureEngine",
    "GestureEvent",
    # Models
    "HandFrame",
    "HandLandmark",
    "Landmark",
    # Gesture labels
    "Gestures",
    # Configuration
    "Config",
    "EngineConfig",
]
