"""
Main application for gesture-controlled tree scene.
"""
import asyncio
import logging
import time
from typing import List, Optional

import cv2

from .args import parse_args
from .config import load_config
from .gestures import GestureController, dispatch
from .sink_mock import MockSink
from .tracker import HandsTracker, draw_landmarks, draw_state
from .types import SceneSinkProto, SourceUnavailableError

logger = logging.getLogger(__name__)


class TreeGestureApp:
    """Main application class for gesture-controlled tree scene."""

    def __init__(self, config_path: Optional[str] = None, sink: Optional[SceneSinkProto] = None):
        """
        Initialize the application with configuration.

        Raises:
            SourceUnavailableError: If the camera or hand detector cannot be started
        """
        self.config = load_config(config_path)
        self.sink = sink if sink is not None else MockSink()
        self.controller = GestureController(self.config)

        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise SourceUnavailableError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        logger.info("Starting %s", self.config.display.window_name)
        logger.info("Fist = tree shape, open palm = scatter, pinch while scattered = photo view")
        logger.info("Press 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.warning("Failed to read frame from camera")
                    break

                landmarks = self.tracker.process(frame)
                commands = self.controller.process_frame(landmarks, time.monotonic())
                await dispatch(commands, self.sink)

                status_text = "No hand detected"
                if landmarks is not None:
                    if self.config.display.show_landmarks:
                        frame = draw_landmarks(frame, landmarks)
                    status_text = (f"{commands.label.value}: {commands.features.fingers_open} fingers"
                                   f"{' | pinch' if commands.features.is_pinching else ''}")

                if self.config.camera.mirror:
                    frame = cv2.flip(frame, 1)

                if self.config.display.show_state:
                    frame = draw_state(frame, self.controller.state, status_text)

                cv2.imshow(self.config.display.window_name, frame)

                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
        finally:
            self.close()

    def close(self):
        """Release camera, detector and window, and reset the state machine."""
        self.controller.reset()
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main(argv: Optional[List[str]] = None):
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        app = TreeGestureApp(config_path=args.config)
    except SourceUnavailableError as e:
        # No retries: gesture control stays off for this session
        logger.error("Gesture control disabled: %s", e)
        return

    try:
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
