"""
Utility functions for I Ching module.
"""

import io
import os
import platform
import sys
from typing import Union

from PIL import ImageFont

import config.iching as iching_config
from config.iching import FONT_PATHS, FONT_SIZE


def ensure_utf8_stdout() -> None:
    """Ensure stdout uses UTF-8 encoding (chart labels are Chinese)."""
    if not sys.stdout.encoding or sys.stdout.encoding.lower() != "utf-8":
        sys.stdout = io.TextIOWrapper(
            sys.stdout.buffer,
            encoding="utf-8",
            errors="replace",
        )


def get_font(font_size: int = FONT_SIZE) -> Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]:
    """
    Get font appropriate for the platform, preferring CJK-capable fonts.

    Args:
        font_size: Font size

    Returns:
        Font object from PIL

    Note:
        The default bitmap font cannot draw Chinese labels; a warning is logged
        when falling back to it.
    """
    # Import logging here to avoid circular import
    from modules.common.ui.logging import log_warn

    system = platform.system()
    for font_path in FONT_PATHS.get(system, []):
        if os.path.exists(font_path):
            try:
                return ImageFont.truetype(font_path, size=font_size)
            except OSError:
                continue

    try:
        return ImageFont.truetype("arial.ttf", size=font_size)
    except OSError:
        pass

    log_warn(
        "No suitable TrueType font found, using default font. "
        "Chart labels in Chinese may render as empty boxes."
    )
    return ImageFont.load_default()


def clean_images_folder() -> int:
    """
    Delete PNG figure images from the images folder.

    Non-PNG files are left untouched.

    Returns:
        Number of files deleted
    """
    from modules.common.ui.logging import log_warn

    images_dir = iching_config.IMAGES_DIR
    images_dir.mkdir(exist_ok=True, parents=True)

    deleted_count = 0
    try:
        for file_path in images_dir.iterdir():
            if file_path.is_file() and file_path.suffix.lower() == ".png":
                try:
                    file_path.unlink()
                    deleted_count += 1
                except OSError as e:
                    log_warn(f"Unable to delete file {file_path.name}: {e}")
    except OSError as e:
        raise RuntimeError(f"Error while cleaning images folder: {e}") from e

    return deleted_count
