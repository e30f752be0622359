"""
Command line options for the gesture tree app.
"""
import argparse
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line options.

    Args:
        argv: Arguments without the program name. If None, uses sys.argv

    Returns:
        Namespace with `config` (path or None) and `debug`
    """
    parser = argparse.ArgumentParser(
        prog="tree-gestures",
        description="Control the tree scene with hand gestures from a webcam."
    )
    parser.add_argument("--config", metavar="PATH", default=None,
                        help="YAML config file (default: bundled config.default.yaml)")
    parser.add_argument("--debug", action="store_true",
                        help="Log debounced transitions and camera moves")
    return parser.parse_args(argv)
