"""
Flate decompression primitive.
"""

import zlib

from ..exceptions import DecompressError


def inflate(data: bytes) -> bytes:
    """
    Inflate a zlib-wrapped DEFLATE stream.

    Args:
        data: Compressed stream payload

    Returns:
        Decompressed bytes

    Raises:
        DecompressError: If the stream is malformed or truncated
    """
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise DecompressError(f"Malformed Flate stream: {e}") from e
