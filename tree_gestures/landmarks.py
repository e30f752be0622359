"""
Hand pose classification from MediaPipe hand landmarks.
"""
import logging
import math
from typing import Any, Optional, Sequence

from .types import (
    FINGER_KNUCKLES,
    FINGER_TIPS,
    INDEX_TIP,
    NUM_LANDMARKS,
    THUMB_TIP,
    WRIST,
    GestureLabel,
    HandFeatures,
    Joint,
    LandmarkFrame,
)

logger = logging.getLogger(__name__)

OPEN_FINGER_RATIO = 1.2
PINCH_DISTANCE = 0.05


def _to_joint(point: Any) -> Optional[Joint]:
    if isinstance(point, Joint):
        return point
    if hasattr(point, 'x') and hasattr(point, 'y'):
        coords = (point.x, point.y, getattr(point, 'z', 0.0))
    else:
        try:
            coords = tuple(point)
        except TypeError:
            return None
        if len(coords) == 2:
            coords = (coords[0], coords[1], 0.0)
        elif len(coords) != 3:
            return None

    try:
        x, y, z = (float(c) for c in coords)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return Joint(x, y, z if math.isfinite(z) else 0.0)


def to_frame(landmarks: Optional[Sequence[Any]]) -> Optional[LandmarkFrame]:
    """
    Normalize raw detector output into a landmark frame.

    Accepts Joint objects, (x, y) or (x, y, z) tuples, or anything with
    x/y attributes (e.g. MediaPipe NormalizedLandmark).

    Args:
        landmarks: Raw landmarks, or None if no hand detected

    Returns:
        Tuple of 21 joints, or None if the input is absent or malformed
    """
    if landmarks is None:
        return None

    try:
        points = list(landmarks)
    except TypeError:
        logger.debug("Dropping non-iterable landmark input: %r", type(landmarks))
        return None

    if len(points) < NUM_LANDMARKS:
        logger.debug("Dropping partial frame with %d landmarks", len(points))
        return None

    joints = []
    for i, point in enumerate(points[:NUM_LANDMARKS]):
        joint = _to_joint(point)
        if joint is None:
            logger.debug("Dropping frame with invalid landmark %d: %r", i, point)
            return None
        joints.append(joint)

    return tuple(joints)


def distance(a: Joint, b: Joint) -> float:
    """Planar Euclidean distance between two joints."""
    return math.hypot(a.x - b.x, a.y - b.y)


def fingers_open(frame: LandmarkFrame, ratio: float = OPEN_FINGER_RATIO) -> int:
    """
    Count the extended non-thumb fingers.

    A finger is open when its tip is more than `ratio` times as far from the
    wrist as its knuckle. Both distances share the wrist as reference, so the
    test does not depend on hand size or distance from the camera.

    Args:
        frame: 21 hand landmarks
        ratio: Tip/knuckle distance ratio above which a finger counts as open

    Returns:
        Number of open fingers (0-4)
    """
    wrist = frame[WRIST]
    count = 0
    for tip_idx, knuckle_idx in zip(FINGER_TIPS, FINGER_KNUCKLES):
        dist_tip = distance(wrist, frame[tip_idx])
        dist_knuckle = distance(wrist, frame[knuckle_idx])
        if dist_tip > dist_knuckle * ratio:
            count += 1
    return count


def is_pinching(frame: LandmarkFrame, threshold: float = PINCH_DISTANCE) -> bool:
    """Check whether the thumb tip touches the index fingertip."""
    return distance(frame[THUMB_TIP], frame[INDEX_TIP]) < threshold


def classify(frame: LandmarkFrame, open_ratio: float = OPEN_FINGER_RATIO,
             pinch_threshold: float = PINCH_DISTANCE) -> HandFeatures:
    """
    Extract pose features from a complete landmark frame.

    Args:
        frame: 21 hand landmarks
        open_ratio: Open-finger ratio threshold
        pinch_threshold: Maximum thumb-index distance for a pinch

    Returns:
        HandFeatures with open finger count and pinch flag
    """
    return HandFeatures(
        fingers_open=fingers_open(frame, open_ratio),
        is_pinching=is_pinching(frame, pinch_threshold)
    )


def label_gesture(features: HandFeatures) -> GestureLabel:
    """Map features to a display label. Pinch wins over finger count."""
    if features.is_pinching:
        return GestureLabel.PINCH
    if features.fingers_open >= 4:
        return GestureLabel.OPEN_PALM
    if features.fingers_open == 0:
        return GestureLabel.FIST
    return GestureLabel.NONE
