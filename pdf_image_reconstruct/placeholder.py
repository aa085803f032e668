"""
Placeholder generator - labeled stand-in images for anything that failed.
"""

import logging
from typing import Optional, Tuple
from pymupdf import open as pdfopen

from .models import (
    ColorSpace,
    ExtractionConfig,
    ImageRecord,
    RecordStatus,
)
from .reconstructor import expand_pixels

logger = logging.getLogger(__name__)

TEXT_X = 10
NAME_Y = 50
REASON_Y = 70


def _solid_fill(size: int, fill: Tuple[float, float, float]) -> bytes:
    rgb = bytes(round(c * 255) for c in fill)
    return expand_pixels(rgb * (size * size), size, size, ColorSpace.RGB)


def _render_label(
    name: str, reason: str, config: ExtractionConfig
) -> bytes:
    """Draw the label on a scratch page and rasterize it at 72 dpi."""
    size = config.placeholder_size
    doc = pdfopen()
    try:
        page = doc.new_page(width=size, height=size)
        page.draw_rect(
            page.rect, color=config.placeholder_fill, fill=config.placeholder_fill, width=0
        )
        for y, text in ((NAME_Y, f"Image: {name}"), (REASON_Y, f"({reason})")):
            page.insert_text(
                (TEXT_X, y),
                text,
                fontsize=config.placeholder_font_size,
                color=config.placeholder_text_color,
            )
        pix = page.get_pixmap(alpha=False)
        if (pix.width, pix.height) != (size, size):
            raise ValueError(f"Rasterized label is {pix.width}x{pix.height}, expected {size}x{size}")
        return expand_pixels(pix.samples, pix.width, pix.height, ColorSpace.RGB)
    finally:
        doc.close()


def make_placeholder(
    name: str,
    page: Optional[int],
    reason: str,
    config: Optional[ExtractionConfig] = None,
    strategy: str = "structural",
) -> ImageRecord:
    """
    Create a placeholder record for an image that could not be extracted.

    Never raises: if the label cannot be drawn, a plain fill is returned.

    Args:
        name: Diagnostic name of the image
        page: 1-based page number, if known
        reason: Short human readable reason
        config: Extraction configuration (placeholder size and colors)
        strategy: Extraction strategy that produced the record

    Returns:
        ImageRecord with status PLACEHOLDER
    """
    config = config or ExtractionConfig()
    size = config.placeholder_size

    try:
        pixels = _render_label(name, reason, config)
    except Exception as e:
        logger.error(f"    Could not draw placeholder label for {name}: {e}")
        pixels = _solid_fill(size, config.placeholder_fill)

    logger.info(f"    Placeholder for {name} (page {page}): {reason}")
    return ImageRecord(
        pixels=pixels,
        width=size,
        height=size,
        source_page=page,
        source_name=name,
        status=RecordStatus.PLACEHOLDER,
        reason=reason,
        strategy=strategy,
    )
