"""
Type definitions for the gesture-driven tree scene controller.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable


# MediaPipe hand landmark indices
WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
FINGER_TIPS = (8, 12, 16, 20)  # index, middle, ring, pinky
FINGER_KNUCKLES = (5, 9, 13, 17)  # matching MCP joints
NUM_LANDMARKS = 21


class TreeState(str, Enum):
    """Visual mode of the tree scene."""
    TREE_SHAPE = "TREE_SHAPE"
    SCATTERED = "SCATTERED"
    PHOTO_VIEW = "PHOTO_VIEW"


class GestureLabel(str, Enum):
    """Discrete hand pose for a single frame."""
    OPEN_PALM = "OPEN_PALM"
    FIST = "FIST"
    PINCH = "PINCH"
    NONE = "NONE"


@dataclass(frozen=True)
class Joint:
    """A single hand landmark in normalized image coordinates (origin top-left)."""
    x: float
    y: float
    z: float = 0.0  # depth, unused by the classifier


# Exactly NUM_LANDMARKS joints, in MediaPipe order
LandmarkFrame = Tuple[Joint, ...]


@dataclass(frozen=True)
class HandFeatures:
    """Features extracted from one landmark frame."""
    fingers_open: int  # 0..4, thumb excluded
    is_pinching: bool


@dataclass(frozen=True)
class CameraDelta:
    """Camera pan signal derived from wrist position."""
    dx: float
    dy: float


@dataclass
class StateUpdate:
    """Result of feeding one frame's features into the state machine."""
    new_state: Optional[TreeState] = None  # set only on a committed transition
    photo_grab: Optional[bool] = None  # set whenever a transition rule matched
    camera_target: Optional[Joint] = None  # wrist, while SCATTERED


@dataclass
class FrameCommands:
    """Everything the sink should receive for one tick."""
    state_change: Optional[TreeState] = None
    photo_grab: Optional[bool] = None
    camera_move: Optional[CameraDelta] = None
    features: Optional[HandFeatures] = None
    label: Optional[GestureLabel] = None

    @property
    def hand_present(self) -> bool:
        return self.features is not None


class SourceUnavailableError(RuntimeError):
    """Raised when the landmark source (camera or detector) cannot be started."""


@runtime_checkable
class SceneSinkProto(Protocol):
    """Abstract protocol for the 3D scene that consumes gesture events."""

    async def on_state_change(self, state: TreeState) -> None:
        """Called once for every committed state transition."""
        ...

    async def on_camera_move(self, dx: float, dy: float) -> None:
        """Pan the camera by the given delta."""
        ...

    async def on_photo_grab(self, is_grabbing: bool) -> None:
        """Start or stop holding the focused photo."""
        ...
