"""
Mock scene sink for running gesture control without a renderer.
"""
import logging
from typing import Optional, Tuple

from .types import TreeState

logger = logging.getLogger(__name__)


class MockSink:
    """Mock sink that logs scene events instead of rendering them."""

    def __init__(self):
        """Initialize the mock sink."""
        self.state_change_count = 0
        self.camera_move_count = 0
        self.photo_grab_count = 0
        self.last_state: Optional[TreeState] = None
        self.last_camera_move: Optional[Tuple[float, float]] = None
        self.last_photo_grab: Optional[bool] = None

    async def on_state_change(self, state: TreeState) -> None:
        """Log a committed state change."""
        self.state_change_count += 1
        self.last_state = state
        logger.info("[MockSink] State: %s (change #%d)", state.value, self.state_change_count)

    async def on_camera_move(self, dx: float, dy: float) -> None:
        """Log a camera pan."""
        self.camera_move_count += 1
        self.last_camera_move = (dx, dy)
        logger.debug("[MockSink] Camera move: dx=%.3f dy=%.3f", dx, dy)

    async def on_photo_grab(self, is_grabbing: bool) -> None:
        """Log a photo grab or release."""
        self.photo_grab_count += 1
        self.last_photo_grab = is_grabbing
        logger.debug("[MockSink] Photo grab: %s", is_grabbing)

    def reset_counters(self) -> None:
        """Reset event counters for testing."""
        self.state_change_count = 0
        self.camera_move_count = 0
        self.photo_grab_count = 0
        self.last_state = None
        self.last_camera_move = None
        self.last_photo_grab = None
