"""
Test cases for configuration loading.
"""
import tempfile
import unittest
from pathlib import Path

import yaml

from tree_gestures.config import DEFAULT_CONFIG_PATH, load_config


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading and validation."""

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.gestures.classifier.open_finger_ratio, 1.2)
        self.assertEqual(cfg.gestures.classifier.pinch_distance, 0.05)
        self.assertEqual(cfg.gestures.state_machine.debounce_ms, 500)
        self.assertEqual(cfg.gestures.camera_pan.scale_x, 4.0)
        self.assertEqual(cfg.gestures.camera_pan.scale_y, 2.0)
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)
        self.assertEqual((cfg.camera.width, cfg.camera.height), (640, 480))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def _write(self, data):
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        with tmp:
            yaml.safe_dump(data, tmp)
        self.addCleanup(Path(tmp.name).unlink)
        return tmp.name

    def _defaults(self):
        with open(DEFAULT_CONFIG_PATH) as f:
            return yaml.safe_load(f)

    def test_override(self):
        data = self._defaults()
        data['gestures']['state_machine']['debounce_ms'] = 250
        data['gestures']['classifier']['pinch_distance'] = 0.08
        cfg = load_config(self._write(data))
        self.assertEqual(cfg.gestures.state_machine.debounce_ms, 250)
        self.assertEqual(cfg.gestures.classifier.pinch_distance, 0.08)

    def test_invalid_thresholds(self):
        for key, value in (('open_finger_ratio', 0), ('pinch_distance', -0.1)):
            with self.subTest(key=key):
                data = self._defaults()
                data['gestures']['classifier'][key] = value
                with self.assertRaises(ValueError):
                    load_config(self._write(data))

        data = self._defaults()
        data['gestures']['state_machine']['debounce_ms'] = -1
        with self.assertRaises(ValueError):
            load_config(self._write(data))


if __name__ == '__main__':
    unittest.main()
