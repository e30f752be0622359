"""
Gesture state machine and camera mapping that turn hand poses into scene commands.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from .config import Cfg
from .landmarks import classify, label_gesture, to_frame
from .types import (
    WRIST,
    CameraDelta,
    FrameCommands,
    HandFeatures,
    Joint,
    SceneSinkProto,
    StateUpdate,
    TreeState,
)

logger = logging.getLogger(__name__)

DEBOUNCE_MS = 500
# Absorbs float rounding when converting second timestamps to milliseconds
DEBOUNCE_TOLERANCE_MS = 1e-6
PAN_SCALE = (4.0, 2.0)


@dataclass(frozen=True)
class TransitionRule:
    """One entry of the ordered transition table."""
    name: str
    matches: Callable[[HandFeatures, TreeState], bool]
    target: TreeState
    photo_grab: bool


# Evaluated in order, first match wins. PHOTO_VIEW is only reachable from
# SCATTERED; nothing special-cases leaving it.
TRANSITION_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(
        name="pinch",
        matches=lambda f, state: f.is_pinching and state == TreeState.SCATTERED,
        target=TreeState.PHOTO_VIEW,
        photo_grab=True,
    ),
    TransitionRule(
        name="open_palm",
        matches=lambda f, state: f.fingers_open >= 4,
        target=TreeState.SCATTERED,
        photo_grab=False,
    ),
    TransitionRule(
        name="fist",
        matches=lambda f, state: f.fingers_open == 0 and not f.is_pinching,
        target=TreeState.TREE_SHAPE,
        photo_grab=False,
    ),
)


def match_rule(features: HandFeatures, state: TreeState,
               rules: Sequence[TransitionRule] = TRANSITION_RULES) -> Optional[TransitionRule]:
    """Return the first rule matching the features in the given state, if any."""
    for rule in rules:
        if rule.matches(features, state):
            return rule
    return None


class TreeStateMachine:
    """
    Debounced finite state machine over TreeState.

    Features:
    - Priority-ordered transition rules
    - Minimum interval between committed transitions; blocked transitions are
      dropped, not queued
    - Same-state targets never commit
    - photo_grab is reported on every rule match, committed or not
    """

    def __init__(self, debounce_ms: int = DEBOUNCE_MS,
                 rules: Sequence[TransitionRule] = TRANSITION_RULES):
        """Initialize the state machine in TREE_SHAPE."""
        self.debounce_ms = debounce_ms
        self.rules = tuple(rules)
        self._state = TreeState.TREE_SHAPE
        self._last_transition_at: Optional[float] = None

    @property
    def state(self) -> TreeState:
        return self._state

    @property
    def last_transition_at(self) -> Optional[float]:
        return self._last_transition_at

    def _debounce_elapsed(self, now: float) -> bool:
        if self._last_transition_at is None:
            return True
        elapsed_ms = (now - self._last_transition_at) * 1000
        # A clock that went backwards must not wedge the machine
        if elapsed_ms < 0:
            return True
        return elapsed_ms >= self.debounce_ms - DEBOUNCE_TOLERANCE_MS

    def update(self, fingers_open: int, is_pinching: bool, now: float,
               wrist: Optional[Joint] = None) -> StateUpdate:
        """
        Feed one frame's features into the state machine.

        Args:
            fingers_open: Number of open non-thumb fingers (0-4)
            is_pinching: Whether thumb and index tips touch
            now: Monotonic timestamp in seconds
            wrist: Wrist joint, forwarded as camera target while SCATTERED

        Returns:
            StateUpdate describing what changed this tick
        """
        result = StateUpdate()
        features = HandFeatures(fingers_open=fingers_open, is_pinching=is_pinching)
        rule = match_rule(features, self._state, self.rules)

        if rule is not None:
            result.photo_grab = rule.photo_grab
            if rule.target != self._state:
                if self._debounce_elapsed(now):
                    logger.info("State %s -> %s (%s)", self._state.value, rule.target.value, rule.name)
                    self._state = rule.target
                    self._last_transition_at = now
                    result.new_state = rule.target
                else:
                    logger.debug("Debounced %s -> %s", self._state.value, rule.target.value)

        if self._state == TreeState.SCATTERED:
            result.camera_target = wrist

        return result

    def reset(self) -> None:
        """Return to the initial state, as if no transition ever happened."""
        self._state = TreeState.TREE_SHAPE
        self._last_transition_at = None


def map_camera(wrist: Joint, state: TreeState,
               scale: Tuple[float, float] = PAN_SCALE) -> Optional[CameraDelta]:
    """
    Map wrist position to a camera pan delta.

    Pan is proportional to the wrist's offset from the frame center, with
    inverted sign to match a mirrored video feed.

    Args:
        wrist: Wrist joint in normalized coordinates
        state: Current tree state
        scale: (x, y) gain

    Returns:
        CameraDelta while SCATTERED, None otherwise
    """
    if state != TreeState.SCATTERED:
        return None
    scale_x, scale_y = scale
    return CameraDelta(dx=(0.5 - wrist.x) * scale_x, dy=(0.5 - wrist.y) * scale_y)


class GestureController:
    """
    Main gesture controller that runs classification, state machine and camera mapping per frame.
    """

    def __init__(self, cfg: Cfg):
        """Initialize the controller with configuration."""
        self.cfg = cfg
        self.classifier_cfg = cfg.gestures.classifier
        self.pan_scale = (cfg.gestures.camera_pan.scale_x, cfg.gestures.camera_pan.scale_y)
        self.state_machine = TreeStateMachine(debounce_ms=cfg.gestures.state_machine.debounce_ms)

    @property
    def state(self) -> TreeState:
        return self.state_machine.state

    def process_frame(self, landmarks: Optional[Sequence[Any]], t_now: float) -> FrameCommands:
        """
        Process one landmark frame and return the commands for the sink.

        Args:
            landmarks: Hand landmarks (None if no hand detected)
            t_now: Current monotonic timestamp in seconds

        Returns:
            FrameCommands; empty when no valid hand is present
        """
        frame = to_frame(landmarks)
        if frame is None:
            return FrameCommands()

        features = classify(
            frame,
            open_ratio=self.classifier_cfg.open_finger_ratio,
            pinch_threshold=self.classifier_cfg.pinch_distance
        )
        update = self.state_machine.update(
            features.fingers_open, features.is_pinching, t_now, wrist=frame[WRIST]
        )

        camera_move = None
        if update.camera_target is not None:
            camera_move = map_camera(update.camera_target, self.state_machine.state, self.pan_scale)

        return FrameCommands(
            state_change=update.new_state,
            photo_grab=update.photo_grab,
            camera_move=camera_move,
            features=features,
            label=label_gesture(features)
        )

    def reset(self) -> None:
        """Reset the state machine, e.g. when the landmark source stops."""
        self.state_machine.reset()


async def dispatch(commands: FrameCommands, sink: SceneSinkProto) -> None:
    """Deliver one tick's commands to the sink, each at most once."""
    if commands.state_change is not None:
        await sink.on_state_change(commands.state_change)
    if commands.photo_grab is not None:
        await sink.on_photo_grab(commands.photo_grab)
    if commands.camera_move is not None:
        await sink.on_camera_move(commands.camera_move.dx, commands.camera_move.dy)
