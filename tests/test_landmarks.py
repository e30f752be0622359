"""
Test cases for hand pose classification with synthetic landmarks.
"""
import unittest
from types import SimpleNamespace

from tree_gestures.landmarks import (
    classify,
    distance,
    fingers_open,
    is_pinching,
    label_gesture,
    to_frame,
)
from tree_gestures.types import GestureLabel, HandFeatures, Joint

from hand_fixtures import fingers, fist, make_hand, open_palm, pinch


class TestToFrame(unittest.TestCase):
    """Test normalization of raw detector output."""

    def test_tuples_become_joints(self):
        frame = to_frame(open_palm())
        self.assertEqual(len(frame), 21)
        self.assertIsInstance(frame[0], Joint)
        self.assertEqual(frame[0], Joint(0.5, 0.8, 0.0))

    def test_accepts_xyz_tuples_and_attribute_objects(self):
        raw = [SimpleNamespace(x=0.1 * (i % 10), y=0.5, z=-0.02) for i in range(21)]
        frame = to_frame(raw)
        self.assertIsNotNone(frame)
        self.assertAlmostEqual(frame[3].x, 0.3)
        self.assertEqual(frame[3].z, -0.02)

        frame = to_frame([(0.5, 0.5, 0.1)] * 21)
        self.assertEqual(frame[20], Joint(0.5, 0.5, 0.1))

    def test_absent_frame(self):
        self.assertIsNone(to_frame(None))

    def test_partial_frame_is_dropped(self):
        self.assertIsNone(to_frame(open_palm()[:20]))
        self.assertIsNone(to_frame([]))

    def test_invalid_points_are_dropped(self):
        hand = open_palm()
        hand[8] = None
        self.assertIsNone(to_frame(hand))

        hand = open_palm()
        hand[12] = (float("nan"), 0.5)
        self.assertIsNone(to_frame(hand))

        hand = open_palm()
        hand[4] = ("a", "b")
        self.assertIsNone(to_frame(hand))

        hand = open_palm()
        hand[0] = (0.1, 0.2, 0.3, 0.4)
        self.assertIsNone(to_frame(hand))

    def test_extra_points_are_ignored(self):
        frame = to_frame(open_palm() + [(0.0, 0.0)])
        self.assertEqual(len(frame), 21)


class TestClassifier(unittest.TestCase):
    """Test open finger counting and pinch detection."""

    def test_distance(self):
        self.assertAlmostEqual(distance(Joint(0.0, 0.0), Joint(0.3, 0.4)), 0.5)

    def test_finger_counts(self):
        for count in range(5):
            with self.subTest(count=count):
                self.assertEqual(fingers_open(to_frame(fingers(count))), count)

    def test_scale_invariance(self):
        """Shrinking the hand around the wrist keeps the same count."""
        hand = open_palm()
        wx, wy = hand[0]
        small = [(wx + (x - wx) * 0.3, wy + (y - wy) * 0.3) for x, y in hand]
        self.assertEqual(fingers_open(to_frame(small)), 4)

    def test_ratio_threshold(self):
        hand = fist()
        hand[5] = (0.5, 0.7)    # knuckle 0.1 above wrist
        hand[8] = (0.5, 0.685)  # tip 0.115 above wrist
        frame = to_frame(hand)
        self.assertEqual(fingers_open(frame, ratio=1.2), 0)
        self.assertEqual(fingers_open(frame, ratio=1.1), 1)

    def test_thumb_is_not_counted(self):
        hand = fist()
        hand[4] = (0.0, 0.0)  # thumb far from everything
        self.assertEqual(fingers_open(to_frame(hand)), 0)

    def test_pinch(self):
        self.assertTrue(is_pinching(to_frame(pinch())))
        self.assertFalse(is_pinching(to_frame(fist())))
        self.assertFalse(is_pinching(to_frame(open_palm())))

    def test_pinch_threshold(self):
        hand = fist()
        hand[8] = (0.4, 0.4)
        hand[4] = (0.4, 0.46)
        frame = to_frame(hand)
        self.assertFalse(is_pinching(frame, threshold=0.05))
        self.assertTrue(is_pinching(frame, threshold=0.07))

    def test_classify_ignores_depth(self):
        flat = classify(to_frame(open_palm()))
        deep = classify(to_frame([(x, y, 5.0) for x, y in open_palm()]))
        self.assertEqual(flat, deep)

    def test_classify(self):
        self.assertEqual(classify(to_frame(open_palm())), HandFeatures(4, False))
        self.assertEqual(classify(to_frame(fist())), HandFeatures(0, False))
        self.assertEqual(classify(to_frame(pinch())), HandFeatures(0, True))
        self.assertEqual(classify(to_frame(make_hand((True, True, False, False)))), HandFeatures(2, False))


class TestLabelGesture(unittest.TestCase):
    """Test gesture labels derived from features."""

    def test_labels(self):
        self.assertEqual(label_gesture(HandFeatures(4, False)), GestureLabel.OPEN_PALM)
        self.assertEqual(label_gesture(HandFeatures(0, False)), GestureLabel.FIST)
        self.assertEqual(label_gesture(HandFeatures(0, True)), GestureLabel.PINCH)
        self.assertEqual(label_gesture(HandFeatures(4, True)), GestureLabel.PINCH)
        for count in (1, 2, 3):
            self.assertEqual(label_gesture(HandFeatures(count, False)), GestureLabel.NONE)


if __name__ == '__main__':
    unittest.main()
