import unittest

from handsfree_gestures.config import EngineConfig
from handsfree_gestures.gestures import ACTIONABLE_GESTURES, Gestures
from handsfree_gestures.models import FingerStateClassifier, MotionState
from handsfree_gestures.rules import GestureRule, GestureRuleEngine

from .helpers import OPEN_HAND, make_frame

STILL = MotionState()


class TestGestureRuleEngine(unittest.TestCase):
    def setUp(self):
        self.config = EngineConfig()
        self.engine = GestureRuleEngine(self.config)
        self.classifier = FingerStateClassifier(self.config.fingers)

    def evaluate(self, frame, motion=STILL):
        return self.engine.evaluate(self.classifier.classify(frame), motion, frame)

    def assertLabel(self, frame, label, motion=STILL):
        self.assertEqual(self.evaluate(frame, motion).label, label)

    def test_rules_registered_by_priority(self):
        priorities = [rule.priority for rule in GestureRule.registry]
        self.assertEqual(priorities, sorted(priorities))
        self.assertEqual(set().union(*(rule.gestures for rule in GestureRule.registry)), ACTIONABLE_GESTURES)

    def test_confidence_gate(self):
        moving = MotionState(displacement_x=0.3, velocity=2.0, is_open_hand_moving=True)
        for extended in ((), ("index",), OPEN_HAND):
            with self.subTest(extended=extended):
                candidate = self.evaluate(make_frame(extended=extended, score=0.79), moving)
                self.assertEqual(candidate.label, Gestures.NONE)
                self.assertEqual(candidate.confidence, 0.0)

    def test_confidence_is_hand_score(self):
        candidate = self.evaluate(make_frame(extended=("index",), score=0.93))
        self.assertEqual(candidate.label, Gestures.TAP)
        self.assertEqual(candidate.confidence, 0.93)

    def test_swipes(self):
        frame = make_frame(extended=OPEN_HAND)
        right = MotionState(displacement_x=0.15, velocity=1.0, is_open_hand_moving=True)
        left = MotionState(displacement_x=-0.15, velocity=1.0, is_open_hand_moving=True)
        self.assertLabel(frame, Gestures.SWIPE_RIGHT, right)
        self.assertLabel(frame, Gestures.SWIPE_LEFT, left)

    def test_swipe_needs_open_hand(self):
        moving = MotionState(displacement_x=0.15, velocity=1.0, is_open_hand_moving=True)
        self.assertLabel(make_frame(extended=("index", "middle")), Gestures.FOLLOW_CURSOR, moving)

    def test_swipe_needs_anchor(self):
        not_armed = MotionState(displacement_x=0.15, velocity=1.0, is_open_hand_moving=False)
        self.assertNotIn(self.evaluate(make_frame(extended=OPEN_HAND), not_armed).label, {Gestures.SWIPE_RIGHT})

    def test_swipe_needs_displacement(self):
        short = MotionState(displacement_x=0.05, velocity=1.0, is_open_hand_moving=True)
        self.assertLabel(make_frame(extended=OPEN_HAND), Gestures.VOLUME_DOWN, short)

    def test_swipe_needs_velocity(self):
        slow = MotionState(displacement_x=0.15, velocity=0.2, is_open_hand_moving=True)
        self.assertLabel(make_frame(extended=OPEN_HAND), Gestures.VOLUME_DOWN, slow)

    def test_swipe_needs_horizontal_movement(self):
        diagonal = MotionState(displacement_x=0.15, displacement_y=0.12, velocity=1.0, is_open_hand_moving=True)
        self.assertLabel(make_frame(extended=OPEN_HAND), Gestures.VOLUME_DOWN, diagonal)

    def test_swipe_before_scroll_down(self):
        moving = MotionState(displacement_x=-0.15, velocity=1.0, is_open_hand_moving=True)
        self.assertLabel(make_frame(extended=OPEN_HAND, fingers_pose="down"), Gestures.SWIPE_LEFT, moving)

    def test_scroll_down(self):
        self.assertLabel(make_frame(extended=OPEN_HAND, fingers_pose="down"), Gestures.SCROLL_DOWN)

    def test_scroll_up(self):
        self.assertLabel(make_frame(), Gestures.SCROLL_UP)

    def test_fist_with_thumb_is_return(self):
        self.assertLabel(make_frame(extended=("thumb",)), Gestures.RETURN)
        self.assertLabel(make_frame(extended=("thumb",), thumb="up"), Gestures.RETURN)

    def test_tap(self):
        self.assertLabel(make_frame(extended=("index",)), Gestures.TAP)

    def test_follow_cursor(self):
        self.assertLabel(make_frame(extended=("index", "middle")), Gestures.FOLLOW_CURSOR)
        self.assertLabel(make_frame(extended=("thumb", "index", "middle")), Gestures.FOLLOW_CURSOR)

    def test_close_cursor(self):
        self.assertLabel(make_frame(extended=("index", "middle", "ring")), Gestures.CLOSE_CURSOR)

    def test_index_only_variants(self):
        # The thumb decides between tap and volume: folded thumb is a tap, whatever its height
        self.assertLabel(make_frame(extended=("index",), thumb="folded"), Gestures.TAP)
        self.assertLabel(make_frame(extended=("index",), thumb="up"), Gestures.VOLUME_UP)
        self.assertLabel(make_frame(extended=("index",), thumb="side"), Gestures.VOLUME_DOWN)

    def test_volume_fallback_with_other_fingers(self):
        self.assertLabel(make_frame(extended=("index", "pinky"), thumb="up"), Gestures.VOLUME_UP)
        self.assertLabel(make_frame(extended=("index", "ring")), Gestures.VOLUME_DOWN)

    def test_volume_with_thumb_tip_level_with_index_tip(self):
        frame = make_frame(extended=("index",), thumb="up")
        keypoints = list(frame.keypoints)
        keypoints[4] = keypoints[4]._replace(y=keypoints[8].y)
        frame = type(frame)(keypoints=keypoints, hand_score=0.9)
        self.assertLabel(frame, Gestures.NONE)

    def test_no_rule_matches(self):
        self.assertLabel(make_frame(extended=("middle",)), Gestures.NONE)
        self.assertLabel(make_frame(extended=("pinky",)), Gestures.NONE)
        candidate = self.evaluate(make_frame(extended=("middle",), score=0.85))
        self.assertEqual(candidate.confidence, 0.85)


if __name__ == "__main__":
    unittest.main()
