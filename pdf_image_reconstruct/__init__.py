"""
PDFImageReconstruct - Extract embedded PDF images as RGBA pixel buffers

A Python package for scanning PDF documents for image streams and rebuilding
them as standalone RGBA images, merging SMask transparency where present.
"""

from .extractor import (
    PDFImageExtractor,
    ImageExtractor,
    StructuralImageExtractor,
    RenderedImageExtractor,
)
from .exceptions import (
    ImageExtractionError,
    InputError,
    DecodeError,
    DecompressError,
    RetrievalMiss,
)
from .models import (
    ExtractionConfig,
    ExtractionResult,
    ImageDescriptor,
    ImageRecord,
    PixelObject,
    ColorSpace,
    ImageEncoding,
    RecordStatus,
)

__version__ = "1.0.0"
__all__ = [
    "PDFImageExtractor",
    "ImageExtractor",
    "StructuralImageExtractor",
    "RenderedImageExtractor",
    "ImageExtractionError",
    "InputError",
    "DecodeError",
    "DecompressError",
    "RetrievalMiss",
    "ExtractionConfig",
    "ExtractionResult",
    "ImageDescriptor",
    "ImageRecord",
    "PixelObject",
    "ColorSpace",
    "ImageEncoding",
    "RecordStatus",
]
