"""
Figure image generation.
"""

import os
import re
from typing import Optional, Sequence

from PIL import Image, ImageDraw

import config.iching as iching_config
from config.iching import (
    IMAGE_HEIGHT,
    IMAGE_WIDTH,
    LINE_HEIGHT,
    NUM_LINES,
    RECTANGLE_END_X,
    RECTANGLE_HEIGHT,
    RECTANGLE_MIDDLE_END,
    RECTANGLE_MIDDLE_START,
    RECTANGLE_START_X,
    START_Y,
)
from modules.common.ui.logging import log_info, log_success
from modules.iching.core.coins import LineValue
from modules.iching.core.data_models import AssembledFigure, CastLine
from modules.iching.utils.helpers import get_font

MOVING_MARKERS = {LineValue.OLD_YIN: "x", LineValue.OLD_YANG: "o"}


def _validate_and_sanitize_filename(filename: str) -> str:
    """
    Validate filename to prevent path traversal.

    Raises:
        ValueError: If filename is absolute, contains separators or "..",
                    is not .png, or has characters outside [a-zA-Z0-9_-]
    """
    if os.path.isabs(filename):
        raise ValueError(f"Filename must not be an absolute path: {filename}")

    if "/" in filename or "\\" in filename:
        raise ValueError(f"Filename must not contain path separators: {filename}")

    if ".." in filename:
        raise ValueError(f"Filename must not contain '..': {filename}")

    if not filename.lower().endswith(".png"):
        raise ValueError(f"Filename must have a .png extension: {filename}")

    base_name = filename[:-4]
    if not re.match(r"^[a-zA-Z0-9_-]+$", base_name):
        raise ValueError(f"Filename may only contain letters, numbers, underscore and hyphen: {filename}")

    return filename


def _draw_bar(draw: ImageDraw.ImageDraw, y_pos: int, value: LineValue, color: str) -> None:
    if value.is_yang:
        draw.rectangle([RECTANGLE_START_X, y_pos, RECTANGLE_END_X, y_pos + RECTANGLE_HEIGHT], fill=color)
    else:
        draw.rectangle([RECTANGLE_START_X, y_pos, RECTANGLE_MIDDLE_START, y_pos + RECTANGLE_HEIGHT], fill=color)
        draw.rectangle([RECTANGLE_MIDDLE_END, y_pos, RECTANGLE_END_X, y_pos + RECTANGLE_HEIGHT], fill=color)


def create_figure_image(
    lines: Sequence[CastLine],
    filename: str = "figure.png",
    figure: Optional[AssembledFigure] = None,
) -> str:
    """
    Draw a cast figure, bottom line at the bottom. Moving lines are red.

    Args:
        lines: The six cast lines
        filename: Output image filename (must be valid and safe)
        figure: Optional assembled figure; its chart annotations are written above each bar

    Returns:
        Full path to the created image file

    Raises:
        ValueError: If lines or filename is invalid
        OSError: If image file cannot be written
    """
    sanitized_filename = _validate_and_sanitize_filename(filename)

    if len(lines) != NUM_LINES:
        raise ValueError(f"Need exactly {NUM_LINES} lines to draw a figure, got {len(lines)}")

    img = Image.new("RGB", (IMAGE_WIDTH, IMAGE_HEIGHT), color="beige")
    draw = ImageDraw.Draw(img)
    font = get_font()

    for line in sorted(lines, key=lambda item: item.position):
        y_pos = START_Y + (NUM_LINES - line.position) * LINE_HEIGHT
        color = "red" if line.is_moving else "black"

        draw.text((10, y_pos - 2), str(line.position), fill="red", font=font)
        _draw_bar(draw, y_pos, line.value, color)

        marker = MOVING_MARKERS.get(line.value)
        if marker:
            draw.text((RECTANGLE_END_X + 15, y_pos - 2), marker, fill="red", font=font)

        if figure is not None:
            assembled = figure.line_at(line.position)
            if assembled is not None and assembled.chart_row is not None:
                row = assembled.chart_row
                caption = " ".join(part for part in (row.kinship_label, row.stem_branch_label, row.shi_ying_label) if part)
                draw.text((RECTANGLE_START_X, y_pos - 30), caption, fill="dimgray", font=font)

    output_dir = iching_config.IMAGES_DIR
    output_dir.mkdir(exist_ok=True, parents=True)

    full_path = output_dir / sanitized_filename
    img.save(full_path)
    log_info(f"Figure values: {[int(line.value) for line in sorted(lines, key=lambda item: item.position)]}")
    log_success(f"Saved figure image: {full_path}, size: {full_path.stat().st_size} bytes")
    return str(full_path)
