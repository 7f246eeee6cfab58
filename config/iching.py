"""
I Ching Configuration.

Configuration constants for coin casting, figure assembly, oracle access and
figure image rendering.
"""

import os
import warnings
from pathlib import Path

# Project paths
# Calculate project root: config/iching.py -> config/ -> project root
_PROJECT_ROOT = Path(__file__).parent.parent
_DEFAULT_IMAGES_DIR = _PROJECT_ROOT / "modules" / "iching" / "images"
IMAGES_DIR = Path(os.getenv("ICHING_IMAGES_DIR") or _DEFAULT_IMAGES_DIR)

# Casting constants
NUM_LINES = 6
COIN_COUNT = 3
HEADS_WEIGHT = 3
TAILS_WEIGHT = 2
MOVING_VALUES = frozenset({6, 9})

# Presentation timing (milliseconds)
REVEAL_STAGGER_MS = 150
BEAST_STAMP_DELAY_MS = 300

# Image generation constants
IMAGE_WIDTH = 400
IMAGE_HEIGHT = 600
LINE_HEIGHT = 80
START_Y = 50
RECTANGLE_START_X = 50
RECTANGLE_END_X = 350
RECTANGLE_MIDDLE_START = 170
RECTANGLE_MIDDLE_END = 230
RECTANGLE_HEIGHT = 20
FONT_SIZE = 24

# Font paths for different platforms
FONT_PATHS = {
    "Windows": [
        "C:/Windows/Fonts/msyh.ttc",
        "C:/Windows/Fonts/arial.ttf",
    ],
    "Darwin": [  # macOS
        "/System/Library/Fonts/PingFang.ttc",
        "/System/Library/Fonts/Helvetica.ttc",
    ],
    "Linux": [
        "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ],
}

# Oracle (Gemini) settings
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TEMPERATURE = 0.4


def _get_temperature() -> float:
    """
    Read the oracle sampling temperature from ICHING_GEMINI_TEMPERATURE.

    Returns:
        Temperature clamped to [0, 1]; the default when unset or unparsable
    """
    raw = os.getenv("ICHING_GEMINI_TEMPERATURE")
    if raw is None or not raw.strip():
        return DEFAULT_GEMINI_TEMPERATURE
    try:
        value = float(raw)
    except ValueError:
        warnings.warn(
            f"ICHING_GEMINI_TEMPERATURE is not a number: {raw!r}. Using {DEFAULT_GEMINI_TEMPERATURE}",
            UserWarning,
            stacklevel=2,
        )
        return DEFAULT_GEMINI_TEMPERATURE
    return max(0.0, min(1.0, value))


GEMINI_MODEL = os.getenv("ICHING_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
GEMINI_TEMPERATURE = _get_temperature()
