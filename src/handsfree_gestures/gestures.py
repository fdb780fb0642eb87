from __future__ import annotations

from enum import Enum


class Gestures(str, Enum):
    # Static hand shapes
    TAP = "tap"  # Index finger alone
    FOLLOW_CURSOR = "follow_cursor"  # Index and middle fingers
    CLOSE_CURSOR = "close_cursor"  # Index, middle and ring fingers
    RETURN = "return"  # Thumb alone
    VOLUME_UP = "volume_up"  # Index extended, thumb tip above index tip
    VOLUME_DOWN = "volume_down"  # Index extended, thumb tip below index tip
    SCROLL_UP = "scroll_up"  # Closed fist
    SCROLL_DOWN = "scroll_down"  # Open hand with fingers pointing down
    # Motion gestures
    SWIPE_LEFT = "swipe_left"
    SWIPE_RIGHT = "swipe_right"
    # No confirmed gesture
    NONE = "none"

    def __str__(self) -> str:
        return self.value


SWIPE_GESTURES: set[Gestures] = {Gestures.SWIPE_LEFT, Gestures.SWIPE_RIGHT}

ACTIONABLE_GESTURES: set[Gestures] = {gesture for gesture in Gestures if gesture is not Gestures.NONE}
