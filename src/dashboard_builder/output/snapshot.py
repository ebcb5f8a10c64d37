"""
Module: output.snapshot

Purpose:
    Render the current board to a PNG image with PIL.
    Each block becomes a card at its layout position; image blocks show
    their picture (cover-fit) or a placeholder, diagram blocks show the
    sample bar chart.

Key Functions:
    - render_board(): Board -> PIL image
    - save_snapshot(): Render and write a PNG

Key Classes:
    - SnapshotError: Snapshot could not be written

Dependencies:
    - PIL: Image drawing
    - output.diagram: Bar chart geometry

Used By:
    - dashboard_builder.gui.main_window: File > Export PNG
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from dashboard_builder.core.models import Block, BlockType, CanvasBounds, Rect

from .diagram import AXIS_COLOR, BAR_COLOR, LABEL_COLOR, axis_y, bar_layout

logger = logging.getLogger(__name__)

# Default settings
BACKGROUND_COLOR = "#f5f5f5"
CARD_COLOR = "white"
CARD_BORDER_COLOR = "#e0e0e0"
PLACEHOLDER_COLOR = "#e5e7eb"
PLACEHOLDER_TEXT_COLOR = "#9ca3af"
CARD_RADIUS = 8
# Inset of the chart inside a diagram card
DIAGRAM_PADDING = 16
LABEL_FONT_SIZE = 10


class SnapshotError(Exception):
    """Error writing a board snapshot."""
    pass


def render_board(
    blocks: Iterable[Block],
    bounds: CanvasBounds,
    *,
    background: str = BACKGROUND_COLOR,
) -> Image.Image:
    """
    Render blocks onto a canvas-sized RGB image.

    Args:
        blocks: Blocks to draw, back to front
        bounds: Canvas size (image size)
        background: Canvas fill color

    Returns:
        New RGB image of size (bounds.width, bounds.height)
    """
    canvas = Image.new("RGB", (bounds.width, bounds.height), color=background)
    draw = ImageDraw.Draw(canvas)
    font = _load_font(LABEL_FONT_SIZE)

    count = 0
    for block in blocks:
        rect = block.rect
        box = (rect.x, rect.y, rect.right - 1, rect.bottom - 1)
        draw.rounded_rectangle(box, radius=CARD_RADIUS, fill=CARD_COLOR, outline=CARD_BORDER_COLOR)

        if block.block_type is BlockType.DIAGRAM:
            _draw_diagram(draw, rect, font)
        else:
            picture = _load_picture(block.content)
            if picture is None:
                _draw_placeholder(draw, rect, font)
            else:
                canvas.paste(ImageOps.fit(picture, (rect.width, rect.height)), (rect.x, rect.y))
        count += 1

    logger.debug(f"Rendered {count} block(s) on {bounds.width}x{bounds.height} canvas")
    return canvas


def save_snapshot(
    blocks: Iterable[Block],
    bounds: CanvasBounds,
    output_path: Path,
) -> Path:
    """
    Render the board and save it as PNG.

    Args:
        blocks: Blocks to draw
        bounds: Canvas size
        output_path: Destination file; parent directories are created

    Returns:
        The written path

    Raises:
        SnapshotError: If the file cannot be written
    """
    image = render_board(blocks, bounds)
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(output_path, format="PNG")
    except OSError as e:
        raise SnapshotError(f"Failed to write snapshot to {output_path}: {e}") from e
    logger.info(f"Saved board snapshot to {output_path}")
    return output_path


def _load_picture(content: str) -> Optional[Image.Image]:
    """
    Open a local image file for an image block.

    Remote URLs are not fetched; they render as placeholders like empty
    content does.
    """
    content = content.strip()
    if not content or "://" in content:
        return None
    path = Path(content)
    if not path.is_file():
        logger.warning(f"Image not found, using placeholder: {content}")
        return None
    try:
        with Image.open(path) as img:
            return img.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Could not read image {content}: {e}")
        return None


def _draw_placeholder(draw: ImageDraw.ImageDraw, rect: Rect, font) -> None:
    inset = (rect.x + 1, rect.y + 1, rect.right - 2, rect.bottom - 2)
    draw.rectangle(inset, fill=PLACEHOLDER_COLOR)
    _draw_centered(draw, (rect.x + rect.width / 2, rect.y + rect.height / 2), "Image",
                   font, PLACEHOLDER_TEXT_COLOR)


def _draw_diagram(draw: ImageDraw.ImageDraw, rect: Rect, font) -> None:
    left = rect.x + DIAGRAM_PADDING
    top = rect.y + DIAGRAM_PADDING
    width = rect.width - 2 * DIAGRAM_PADDING
    height = rect.height - 2 * DIAGRAM_PADDING

    for bar in bar_layout(width, height):
        draw.rectangle(
            (left + bar.x, top + bar.y, left + bar.x + bar.width, top + bar.y + bar.height),
            fill=BAR_COLOR,
        )
        _draw_centered(draw, (left + bar.center_x, top + height - 15), bar.label,
                       font, LABEL_COLOR)
        _draw_centered(draw, (left + bar.center_x, top + bar.y - 10), str(bar.value),
                       font, LABEL_COLOR)

    line_y = top + axis_y(height)
    draw.line((left, line_y, left + width, line_y), fill=AXIS_COLOR)


def _draw_centered(
    draw: ImageDraw.ImageDraw,
    center: Tuple[float, float],
    text: str,
    font,
    fill: str,
) -> None:
    """Draw ``text`` centred on ``center`` using the font's text box."""
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    cx, cy = center
    draw.text((cx - (x1 - x0) / 2, cy - (y1 - y0) / 2), text, fill=fill, font=font)


def _load_font(size: int):
    """
    Load a TrueType font for chart labels.

    Falls back to PIL's default font if none is available.
    """
    font_options = [
        "arial.ttf",
        "Arial.ttf",
        "DejaVuSans.ttf",
    ]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.debug("Could not load TrueType font, using default")
    return ImageFont.load_default()
