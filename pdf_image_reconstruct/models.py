"""
Data models for PDF image reconstruction.
"""

from enum import Enum
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator


class ColorSpace(str, Enum):
    """Channel layout of the packed color samples."""

    GRAY = "gray"
    RGB = "rgb"
    OTHER = "other"

    @property
    def components(self) -> int:
        """Bytes per pixel in the decompressed color data (0 if unknown)."""
        return {ColorSpace.GRAY: 1, ColorSpace.RGB: 3}.get(self, 0)


class ImageEncoding(str, Enum):
    """How the raw stream payload is encoded."""

    DEFLATE_RAW = "deflate"
    JPEG_ENCODED = "jpeg"
    OTHER_UNSUPPORTED = "unsupported"


class RecordStatus(str, Enum):
    DECODED = "decoded"
    PLACEHOLDER = "placeholder"


class ImageDescriptor(BaseModel):
    """One candidate image stream found while scanning the document."""

    reference: int = Field(..., description="Object number (xref) of the image stream")
    width: int = Field(..., gt=0, description="Width of the image in pixels")
    height: int = Field(..., gt=0, description="Height of the image in pixels")
    color_space: ColorSpace = Field(..., description="Color space of the samples")
    encoding: ImageEncoding = Field(..., description="Stream encoding")
    raw_bytes: bytes = Field(..., repr=False, description="Undecoded stream payload")
    alpha_reference: Optional[int] = Field(
        default=None, description="Object number of the SMask, if any"
    )
    is_alpha_mask: bool = Field(
        default=False, description="Claimed as the SMask of another image"
    )
    page: Optional[int] = Field(
        default=None, description="First 1-based page that paints this image"
    )
    filter_name: str = Field(default="", description="Raw /Filter value")

    @property
    def name(self) -> str:
        """Diagnostic identity of the image."""
        return f"img{self.reference:05d}"

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


class ImageRecord(BaseModel):
    """A reconstructed image, ready for display or storage."""

    pixels: bytes = Field(default=b"", repr=False, description="RGBA8 row-major pixels")
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    source_page: Optional[int] = None
    source_name: str
    status: RecordStatus = RecordStatus.DECODED
    encoded: Optional[bytes] = Field(
        default=None, repr=False, description="Complete encoded image (JPEG pass-through)"
    )
    mime_type: Optional[str] = None
    reason: Optional[str] = None
    strategy: Literal["structural", "rendered"] = "structural"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_pixel_length(self):
        if self.encoded is None and len(self.pixels) != self.width * self.height * 4:
            raise ValueError(
                f"Expected {self.width * self.height * 4} RGBA bytes for "
                f"{self.width}x{self.height}, got {len(self.pixels)}"
            )
        return self

    @property
    def is_placeholder(self) -> bool:
        return self.status == RecordStatus.PLACEHOLDER

    @property
    def is_encoded(self) -> bool:
        """True when the record carries an encoded bitstream instead of pixels."""
        return self.encoded is not None


class Bitmap(BaseModel):
    """Alternate pixel container some rendering back ends expose."""

    width: int
    height: int
    data: bytes = Field(..., repr=False)


class PixelObject(BaseModel):
    """Pixel object handed out by the rendering subsystem (packed RGB)."""

    width: int = 0
    height: int = 0
    data: Optional[bytes] = Field(default=None, repr=False)
    bitmap: Optional[Bitmap] = None

    @property
    def samples(self) -> Optional[bytes]:
        """Packed RGB samples from whichever field carries them."""
        if self.bitmap is not None:
            return self.bitmap.data
        return self.data or None

    @property
    def dimensions(self) -> Tuple[int, int]:
        if self.bitmap is not None:
            return self.bitmap.width, self.bitmap.height
        return self.width, self.height


class Operation(BaseModel):
    """One entry of a page operator list."""

    operator: str
    args: List[str] = Field(default_factory=list)


class ExtractionConfig(BaseModel):
    """Configuration for image extraction."""

    strategies: List[Literal["structural", "rendered"]] = Field(
        default_factory=lambda: ["structural", "rendered"],
        description="Extraction strategies to run, in order",
    )
    max_workers: int = Field(
        default=4, description="Threads used to reconstruct images"
    )
    async_timeout: float = Field(
        default=0.5, description="Seconds to wait for an asynchronous pixel request"
    )
    placeholder_size: int = Field(
        default=200, description="Edge length of placeholder images in pixels"
    )
    placeholder_fill: Tuple[float, float, float] = Field(
        default=(0.83, 0.83, 0.83), description="RGB fill of placeholders (0-1)"
    )
    placeholder_text_color: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="RGB text color of placeholders (0-1)"
    )
    placeholder_font_size: int = Field(
        default=14, description="Font size of placeholder text"
    )
    output_dir: str = Field(
        default="extracted_images", description="Output directory name"
    )

    @field_validator("strategies")
    @classmethod
    def validate_strategies(cls, v):
        if not v:
            raise ValueError("At least one extraction strategy is required")
        return list(dict.fromkeys(v))

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v):
        if v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @field_validator("async_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("async_timeout must be positive")
        return v

    @field_validator("placeholder_size")
    @classmethod
    def validate_placeholder_size(cls, v):
        if v < 16:
            raise ValueError("placeholder_size must be at least 16")
        return v

    @field_validator("placeholder_fill", "placeholder_text_color")
    @classmethod
    def validate_color(cls, v):
        if any(c < 0.0 or c > 1.0 for c in v):
            raise ValueError("Color components must be between 0.0 and 1.0")
        return v


class ExtractionResult(BaseModel):
    """Summary of a path-based extraction run."""

    pdf_path: str
    total_pages: int
    records: List[ImageRecord]
    extraction_time: float
    saved_files: List[str] = Field(default_factory=list)

    @property
    def decoded_count(self) -> int:
        return sum(1 for r in self.records if not r.is_placeholder)

    @property
    def placeholder_count(self) -> int:
        return sum(1 for r in self.records if r.is_placeholder)
