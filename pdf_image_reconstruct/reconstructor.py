"""
Pixel reconstructor - turns image descriptors into RGBA records.
"""

import logging
from typing import Optional

from .exceptions import DecodeError, UnsupportedEncodingError
from .models import (
    ColorSpace,
    ImageDescriptor,
    ImageEncoding,
    ImageRecord,
    PixelObject,
    RecordStatus,
)
from .utils.decompress import inflate

logger = logging.getLogger(__name__)

OPAQUE = 255


def expand_pixels(
    color: bytes,
    width: int,
    height: int,
    color_space: ColorSpace,
    alpha: Optional[bytes] = None,
) -> bytes:
    """
    Interleave packed color samples and an optional alpha plane into RGBA.

    Gray samples are replicated into R, G and B. RGB samples are copied in
    order. Alpha is taken byte for byte from the mask, or is 255 without one.
    Bytes beyond width*height pixels are ignored.

    Args:
        color: Packed color samples, 1 (gray) or 3 (RGB) bytes per pixel
        width: Image width in pixels
        height: Image height in pixels
        color_space: Layout of the color samples
        alpha: Optional alpha plane, 1 byte per pixel

    Returns:
        RGBA8 row-major pixel bytes

    Raises:
        DecodeError: If the color space is unknown or either plane is too short
    """
    pixel_count = width * height
    components = color_space.components
    if components == 0:
        raise DecodeError(f"Unsupported color space: {color_space.value}")

    if len(color) < pixel_count * components:
        raise DecodeError(
            f"Color data too short: {len(color)} bytes for {width}x{height} "
            f"({pixel_count * components} required)"
        )
    if alpha is not None and len(alpha) < pixel_count:
        raise DecodeError(
            f"Alpha data too short: {len(alpha)} bytes for {pixel_count} pixels"
        )

    rgba = bytearray(pixel_count * 4)
    if color_space == ColorSpace.GRAY:
        gray = color[:pixel_count]
        rgba[0::4] = gray
        rgba[1::4] = gray
        rgba[2::4] = gray
    else:
        rgba[0::4] = color[0:pixel_count * 3:3]
        rgba[1::4] = color[1:pixel_count * 3:3]
        rgba[2::4] = color[2:pixel_count * 3:3]

    if alpha is None:
        rgba[3::4] = bytes([OPAQUE]) * pixel_count
    else:
        rgba[3::4] = alpha[:pixel_count]

    return bytes(rgba)


def expand_packed_rgb(pixel_object: PixelObject) -> bytes:
    """
    Expand a rendering-subsystem pixel object (packed RGB, no mask) to RGBA.

    Raises:
        DecodeError: If the object has no samples or too few of them
    """
    samples = pixel_object.samples
    width, height = pixel_object.dimensions
    if not samples:
        raise DecodeError("No data available")
    if width <= 0 or height <= 0:
        raise DecodeError(f"Invalid dimensions {width}x{height}")
    return expand_pixels(samples, width, height, ColorSpace.RGB)


class PixelReconstructor:
    """Decodes one primary descriptor into one ImageRecord."""

    def reconstruct(
        self, descriptor: ImageDescriptor, mask: Optional[ImageDescriptor] = None
    ) -> ImageRecord:
        """
        Reconstruct a descriptor, applying its alpha mask when given.

        JPEG streams are passed through untouched and never get the mask.

        Raises:
            DecodeError: If the stream cannot be decoded
            UnsupportedEncodingError: If the encoding has no reconstruction path
        """
        if descriptor.encoding == ImageEncoding.JPEG_ENCODED:
            if mask is not None:
                logger.debug(f"    Ignoring SMask of JPEG image {descriptor.name}")
            return ImageRecord(
                width=descriptor.width,
                height=descriptor.height,
                source_page=descriptor.page,
                source_name=descriptor.name,
                status=RecordStatus.DECODED,
                encoded=descriptor.raw_bytes,
                mime_type="image/jpeg",
            )

        if descriptor.encoding != ImageEncoding.DEFLATE_RAW:
            raise UnsupportedEncodingError(
                f"Unsupported filter {descriptor.filter_name or 'none'}"
            )

        if mask is not None and mask.encoding != ImageEncoding.DEFLATE_RAW:
            raise UnsupportedEncodingError(
                f"Unsupported SMask filter {mask.filter_name or 'none'}"
            )

        color = inflate(descriptor.raw_bytes)
        alpha = inflate(mask.raw_bytes) if mask is not None else None

        pixels = expand_pixels(
            color, descriptor.width, descriptor.height, descriptor.color_space, alpha
        )
        return ImageRecord(
            pixels=pixels,
            width=descriptor.width,
            height=descriptor.height,
            source_page=descriptor.page,
            source_name=descriptor.name,
            status=RecordStatus.DECODED,
            mime_type="image/x-rgba",
        )
