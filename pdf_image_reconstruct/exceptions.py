"""
Custom exceptions for PDF image reconstruction.

Only InputError ever reaches the caller of an extraction. Every other error is
scoped to a single image and is turned into a placeholder record.
"""


class ImageExtractionError(Exception):
    """Base exception for all image extraction errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown image extraction error occurred."


class InputError(ImageExtractionError):
    """Raised when the input is not a readable PDF document."""

    @property
    def default_message(self) -> str:
        return "Input is not a valid PDF document."


class ScanSkip(ImageExtractionError):
    """Raised when an image object lacks usable geometry and must be skipped."""

    @property
    def default_message(self) -> str:
        return "Image object has no usable Width/Height."


class DecodeError(ImageExtractionError):
    """Raised when an image stream cannot be turned into pixels."""

    @property
    def default_message(self) -> str:
        return "Image data could not be decoded."


class DecompressError(DecodeError):
    """Raised when a Flate stream is malformed."""

    @property
    def default_message(self) -> str:
        return "Malformed Flate stream."


class UnsupportedEncodingError(DecodeError):
    """Raised for stream encodings the reconstructor does not handle."""

    @property
    def default_message(self) -> str:
        return "Unsupported image encoding."


class RetrievalMiss(ImageExtractionError):
    """Raised when the rendering subsystem returns no object for an image name."""

    @property
    def default_message(self) -> str:
        return "Image not available"
