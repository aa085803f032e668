"""
Image processing utilities for converting between pixmaps and records.
"""

import logging
from io import BytesIO
from typing import Tuple
from PIL import Image
from pymupdf import Pixmap, csRGB

from ..models import ImageRecord

logger = logging.getLogger(__name__)


def handle_alpha_channel(pix: Pixmap) -> Pixmap:
    """
    Remove alpha channel from a pixmap if present.

    Args:
        pix: Input pixmap

    Returns:
        Pixmap without alpha channel
    """
    if pix.alpha:
        return Pixmap(pix, 0)
    return pix


def to_rgb_pixmap(pix: Pixmap) -> Pixmap:
    """
    Convert a pixmap to packed RGB without alpha.

    Args:
        pix: Input pixmap in any color space

    Returns:
        Pixmap with exactly three components per pixel

    Raises:
        ValueError: If the pixmap has no color space (stencil masks)
    """
    if pix.colorspace is None:
        raise ValueError("Pixmap has no color space")

    if pix.colorspace.n != 3:
        pix = Pixmap(csRGB, pix)
    return handle_alpha_channel(pix)


def record_to_pixmap(record: ImageRecord) -> Pixmap:
    """
    Build a displayable pixmap from a record.

    Pass-through records are decoded from their embedded bitstream, all
    others are wrapped as RGB samples with the alpha plane attached.
    """
    if record.is_encoded:
        return Pixmap(record.encoded)

    rgb = bytearray(record.width * record.height * 3)
    rgb[0::3] = record.pixels[0::4]
    rgb[1::3] = record.pixels[1::4]
    rgb[2::3] = record.pixels[2::4]
    pix = Pixmap(Pixmap(csRGB, record.width, record.height, bytes(rgb), False), 1)
    # MuPDF keeps color premultiplied by alpha
    pix.set_alpha(record.pixels[3::4], premultiply=True)
    return pix


def encode_record(record: ImageRecord) -> Tuple[str, bytes]:
    """
    Serialize a record for storage.

    Returns:
        Tuple of (file extension, encoded bytes). JPEG pass-through records
        keep their original bytes, everything else becomes PNG.

    PNGs are written from the straight RGBA samples. Going through a
    pixmap would premultiply color by alpha and lose precision on
    translucent pixels.
    """
    if record.is_encoded and record.mime_type == "image/jpeg":
        return "jpg", record.encoded
    if record.is_encoded:
        return "png", record_to_pixmap(record).tobytes("png")

    image = Image.frombytes("RGBA", (record.width, record.height), record.pixels)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return "png", buffer.getvalue()
