"""
Hand landmark source backed by MediaPipe Hands.
"""
import logging
from typing import Optional

import cv2
import mediapipe as mp
import numpy as np

from .landmarks import to_frame
from .types import SourceUnavailableError, LandmarkFrame, TreeState

logger = logging.getLogger(__name__)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 1,
                 min_detection_conf: float = 0.7, min_tracking_conf: float = 0.7):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe landmark model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking

        Raises:
            SourceUnavailableError: If MediaPipe Hands cannot be initialized
        """
        try:
            self.mp_hands = mp.solutions.hands
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=max_num_hands,
                model_complexity=model_complexity,
                min_detection_confidence=min_detection_conf,
                min_tracking_confidence=min_tracking_conf
            )
        except (AttributeError, RuntimeError, ValueError, OSError) as e:
            raise SourceUnavailableError(f"MediaPipe Hands failed to initialize: {e}") from e

    def process(self, frame_bgr: np.ndarray) -> Optional[LandmarkFrame]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            Tuple of 21 joints in [0..1] range, or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # First detected hand only
            return to_frame(results.multi_hand_landmarks[0].landmark)

        return None

    def close(self) -> None:
        """Release the MediaPipe graph."""
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: LandmarkFrame) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: 21 joints in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, joint in enumerate(landmarks):
        px = int(joint.x * width)
        py = int(joint.y * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame


STATE_COLORS = {
    TreeState.TREE_SHAPE: (80, 200, 120),
    TreeState.SCATTERED: (0, 200, 255),
    TreeState.PHOTO_VIEW: (255, 160, 0),
}


def draw_state(frame: np.ndarray, state: TreeState, status: str) -> np.ndarray:
    """Draw the current tree state and gesture status in the top-left corner."""
    cv2.putText(frame, f"State: {state.value}", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7,
                STATE_COLORS[state], 2)
    cv2.putText(frame, status, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
    return frame
