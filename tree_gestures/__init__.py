"""
Gesture Tree Controller

Turns MediaPipe hand landmarks into tree scene states and camera pan commands:
fist assembles the tree, open palm scatters it, pinch while scattered opens a photo.
"""

__version__ = "0.1.0"

from .types import (
    TreeState,
    GestureLabel,
    Joint,
    LandmarkFrame,
    HandFeatures,
    CameraDelta,
    StateUpdate,
    FrameCommands,
    SceneSinkProto,
    SourceUnavailableError,
)
from .config import load_config, Cfg
from .landmarks import to_frame, fingers_open, is_pinching, classify, label_gesture
from .gestures import TreeStateMachine, GestureController, map_camera, dispatch, TRANSITION_RULES
from .sink_mock import MockSink

__all__ = [
    "TreeState",
    "GestureLabel",
    "Joint",
    "LandmarkFrame",
    "HandFeatures",
    "CameraDelta",
    "StateUpdate",
    "FrameCommands",
    "SceneSinkProto",
    "SourceUnavailableError",
    "load_config",
    "Cfg",
    "to_frame",
    "fingers_open",
    "is_pinching",
    "classify",
    "label_gesture",
    "TreeStateMachine",
    "GestureController",
    "map_camera",
    "dispatch",
    "TRANSITION_RULES",
    "MockSink",
]
