from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .config import EngineConfig
from .gestures import ACTIONABLE_GESTURES, Gestures
from .models.fingers import FingerExtensionState
from .models.landmarks import HandFrame, HandLandmark, LandmarkGroups
from .models.palm import MotionState


@dataclass(frozen=True)
class GestureCandidate:
    """Gesture recognized on the current frame only, not yet confirmed."""

    label: Gestures
    confidence: float

    @property
    def is_none(self) -> bool:
        return self.label is Gestures.NONE


class GestureRule:
    """A predicate over the features of a frame, yielding one of its `gestures` or None.

    Final subclasses are registered automatically, and evaluated by increasing `priority`:
    the first one matching wins.
    """

    # To be defined for each final subclass
    gestures: ClassVar[set[Gestures]]
    priority: ClassVar[int]

    # Automatically filled with final subclasses, sorted by priority
    registry: ClassVar[list[type[GestureRule]]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if "priority" not in cls.__dict__:
            return

        for registered in GestureRule.registry:
            if registered.priority == cls.priority:
                raise ValueError(f"Priority {cls.priority} of {cls.__name__} is already used by {registered.__name__}")
            if registered.gestures & cls.gestures:
                raise ValueError(
                    f"Gestures {registered.gestures & cls.gestures} of {cls.__name__} "
                    f"already have a rule in {registered.__name__}"
                )

        GestureRule.registry.append(cls)
        GestureRule.registry.sort(key=lambda rule: rule.priority)

    @classmethod
    def _ensure_all_rules_registered(cls) -> None:
        registered = set().union(*(rule.gestures for rule in cls.registry))
        if registered != ACTIONABLE_GESTURES:
            raise ValueError(f"Not all gestures have rules registered. Missing: {ACTIONABLE_GESTURES - registered}")

    def __init__(self, config: EngineConfig) -> None:
        self.config = config

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        raise NotImplementedError("This method should be implemented in subclasses.")


class SwipeRule(GestureRule):
    gestures = {Gestures.SWIPE_LEFT, Gestures.SWIPE_RIGHT}
    priority = 10

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if not fingers.is_open_hand or not motion.is_open_hand_moving:
            return None

        swipe = self.config.swipe
        distance = abs(motion.displacement_x)
        if distance <= swipe.displacement_threshold:
            return None
        if distance <= abs(motion.displacement_y) * swipe.horizontal_ratio:
            return None
        if motion.velocity < swipe.velocity_min:
            return None

        return Gestures.SWIPE_LEFT if motion.displacement_x < 0 else Gestures.SWIPE_RIGHT


class ScrollDownRule(GestureRule):
    gestures = {Gestures.SCROLL_DOWN}
    priority = 20

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if not fingers.is_open_hand:
            return None
        # Each fingertip lower in the frame than its MCP (y grows downward)
        fingers_down = all(
            frame[tip].y > frame[base].y
            for base, _, tip in (
                LandmarkGroups.INDEX_JOINTS,
                LandmarkGroups.MIDDLE_JOINTS,
                LandmarkGroups.RING_JOINTS,
                LandmarkGroups.PINKY_JOINTS,
            )
        )
        return Gestures.SCROLL_DOWN if fingers_down else None


class ScrollUpRule(GestureRule):
    gestures = {Gestures.SCROLL_UP}
    priority = 30

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        return Gestures.SCROLL_UP if fingers.is_fist else None


class ReturnRule(GestureRule):
    gestures = {Gestures.RETURN}
    priority = 40

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if fingers.thumb and not (fingers.index or fingers.middle or fingers.ring or fingers.pinky):
            return Gestures.RETURN
        return None


class TapRule(GestureRule):
    gestures = {Gestures.TAP}
    priority = 50

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if fingers.index and not (fingers.thumb or fingers.middle or fingers.ring or fingers.pinky):
            return Gestures.TAP
        return None


class FollowCursorRule(GestureRule):
    gestures = {Gestures.FOLLOW_CURSOR}
    priority = 60

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if fingers.index and fingers.middle and not fingers.ring and not fingers.pinky:
            return Gestures.FOLLOW_CURSOR
        return None


class CloseCursorRule(GestureRule):
    gestures = {Gestures.CLOSE_CURSOR}
    priority = 70

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if fingers.index and fingers.middle and fingers.ring and not fingers.pinky:
            return Gestures.CLOSE_CURSOR
        return None


class VolumeRule(GestureRule):
    """Fallback for any hand with the index extended: the thumb tip position decides."""

    gestures = {Gestures.VOLUME_UP, Gestures.VOLUME_DOWN}
    priority = 80

    def matches(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> Gestures | None:
        if not fingers.index:
            return None
        thumb_tip_y = frame[HandLandmark.THUMB_TIP].y
        index_tip_y = frame[HandLandmark.INDEX_FINGER_TIP].y
        if thumb_tip_y < index_tip_y:
            return Gestures.VOLUME_UP
        if thumb_tip_y > index_tip_y:
            return Gestures.VOLUME_DOWN
        return None


GestureRule._ensure_all_rules_registered()


class GestureRuleEngine:
    """Turn the features of a frame into a single gesture candidate."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.rules: list[GestureRule] = [rule_class(config) for rule_class in GestureRule.registry]

    def evaluate(self, fingers: FingerExtensionState, motion: MotionState, frame: HandFrame) -> GestureCandidate:
        # Confidence gate, before any rule
        if frame.hand_score < self.config.confidence_threshold:
            return GestureCandidate(Gestures.NONE, 0.0)

        for rule in self.rules:
            if (gesture := rule.matches(fingers, motion, frame)) is not None:
                return GestureCandidate(gesture, frame.hand_score)

        return GestureCandidate(Gestures.NONE, frame.hand_score)
