"""
Configuration management for the gesture tree controller.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int
    mirror: bool


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class ClassifierConfig:
    """Pose classifier thresholds."""
    open_finger_ratio: float  # tip/knuckle distance ratio from the wrist
    pinch_distance: float  # thumb tip to index tip, normalized units


@dataclass
class StateMachineConfig:
    """State machine configuration."""
    debounce_ms: int


@dataclass
class CameraPanConfig:
    """Wrist-to-camera pan scaling."""
    scale_x: float
    scale_y: float


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    classifier: ClassifierConfig
    state_machine: StateMachineConfig
    camera_pan: CameraPanConfig


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_state: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the bundled config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If a gesture threshold is out of range
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    cfg = _dict_to_config(data)
    _validate(cfg)
    return cfg


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps'],
        mirror=camera_data.get('mirror', True)
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data.get('model_complexity', 1),
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    classifier = ClassifierConfig(
        open_finger_ratio=float(gestures_data['classifier']['open_finger_ratio']),
        pinch_distance=float(gestures_data['classifier']['pinch_distance'])
    )
    state_machine = StateMachineConfig(
        debounce_ms=int(gestures_data['state_machine']['debounce_ms'])
    )
    camera_pan = CameraPanConfig(
        scale_x=float(gestures_data['camera_pan']['scale_x']),
        scale_y=float(gestures_data['camera_pan']['scale_y'])
    )
    gestures = GesturesConfig(
        classifier=classifier,
        state_machine=state_machine,
        camera_pan=camera_pan
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_state=display_data['show_state'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        display=display
    )


def _validate(cfg: Cfg) -> None:
    """Reject gesture settings that would make the classifier meaningless."""
    classifier = cfg.gestures.classifier
    if classifier.open_finger_ratio <= 0:
        raise ValueError(f"open_finger_ratio must be positive, got {classifier.open_finger_ratio}")
    if classifier.pinch_distance <= 0:
        raise ValueError(f"pinch_distance must be positive, got {classifier.pinch_distance}")
    if cfg.gestures.state_machine.debounce_ms < 0:
        raise ValueError(f"debounce_ms must not be negative, got {cfg.gestures.state_machine.debounce_ms}")
