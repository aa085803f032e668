"""
Object scanner - walks every indirect object and classifies image streams.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple
from pymupdf import Document

from .exceptions import ScanSkip
from .models import ColorSpace, ImageDescriptor, ImageEncoding
from .utils.pdf_utils import get_image_pages

logger = logging.getLogger(__name__)

GRAY_SPACES = {"DeviceGray", "CalGray", "G"}
RGB_SPACES = {"DeviceRGB", "CalRGB", "RGB"}
ICC_COMPONENTS = {1: ColorSpace.GRAY, 3: ColorSpace.RGB}

NAME_PATTERN = re.compile(r"/([^\s/\[\]<>()]+)")
REFERENCE_PATTERN = re.compile(r"(\d+)\s+\d+\s+R")


def parse_reference(value: str) -> Optional[int]:
    """Return the object number of an indirect reference such as '12 0 R'."""
    match = REFERENCE_PATTERN.search(value)
    return int(match.group(1)) if match else None


def parse_names(value: str) -> List[str]:
    """Return every PDF name in a name or array value, without the slash."""
    return NAME_PATTERN.findall(value)


def classify_encoding(filter_type: str, filter_value: str) -> ImageEncoding:
    """Map a /Filter entry to the reconstruction path it needs."""
    if filter_type == "null":
        return ImageEncoding.DEFLATE_RAW

    names = parse_names(filter_value)
    if len(names) != 1:
        return ImageEncoding.OTHER_UNSUPPORTED
    if names[0] in ("DCTDecode", "DCT"):
        return ImageEncoding.JPEG_ENCODED
    if names[0] in ("FlateDecode", "Fl"):
        return ImageEncoding.DEFLATE_RAW
    return ImageEncoding.OTHER_UNSUPPORTED


class ObjectScanner:
    """Produces image descriptors for every image stream in a document."""

    def __init__(self, doc: Document):
        self.doc = doc

    def _resolve_key(self, xref: int, key: str) -> Tuple[str, str]:
        """Read a dictionary entry, following one level of indirection."""
        value_type, value = self.doc.xref_get_key(xref, key)
        if value_type == "xref":
            target = parse_reference(value)
            if target is not None:
                return "object", self.doc.xref_object(target, compressed=True).strip()
        return value_type, value

    def _read_dimension(self, xref: int, key: str) -> int:
        value_type, value = self._resolve_key(xref, key)
        if value_type == "null":
            raise ScanSkip(f"xref {xref} has no /{key}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ScanSkip(f"xref {xref} has non-numeric /{key}: {value!r}")
        if number <= 0 or not number.is_integer():
            raise ScanSkip(f"xref {xref} has invalid /{key}: {value!r}")
        return int(number)

    def _icc_color_space(self, value: str) -> ColorSpace:
        icc_xref = parse_reference(value)
        if icc_xref is None:
            return ColorSpace.OTHER
        value_type, components = self.doc.xref_get_key(icc_xref, "N")
        if value_type != "int":
            return ColorSpace.OTHER
        return ICC_COMPONENTS.get(int(components), ColorSpace.OTHER)

    def _read_color_space(self, xref: int) -> ColorSpace:
        value_type, value = self.doc.xref_get_key(xref, "ColorSpace")
        if value_type == "xref":
            target = parse_reference(value)
            if target is None:
                return ColorSpace.OTHER
            value = self.doc.xref_object(target, compressed=True)

        names = parse_names(value)
        if not names:
            return ColorSpace.OTHER
        family = names[0]
        if family in GRAY_SPACES:
            return ColorSpace.GRAY
        if family in RGB_SPACES:
            return ColorSpace.RGB
        if family == "ICCBased":
            return self._icc_color_space(value)
        return ColorSpace.OTHER

    def read_descriptor(self, xref: int) -> Optional[ImageDescriptor]:
        """
        Build a descriptor for a single object.

        Returns:
            The descriptor, or None if the object is not an image stream

        Raises:
            ScanSkip: If the image lacks usable Width/Height
        """
        if not self.doc.xref_is_stream(xref):
            return None
        subtype_type, subtype = self.doc.xref_get_key(xref, "Subtype")
        if subtype_type != "name" or subtype != "/Image":
            return None

        width = self._read_dimension(xref, "Width")
        height = self._read_dimension(xref, "Height")

        filter_type, filter_value = self.doc.xref_get_key(xref, "Filter")
        smask_type, smask_value = self.doc.xref_get_key(xref, "SMask")
        alpha_reference = parse_reference(smask_value) if smask_type == "xref" else None

        return ImageDescriptor(
            reference=xref,
            width=width,
            height=height,
            color_space=self._read_color_space(xref),
            encoding=classify_encoding(filter_type, filter_value),
            raw_bytes=self.doc.xref_stream_raw(xref) or b"",
            alpha_reference=alpha_reference,
            filter_name="" if filter_type == "null" else filter_value,
        )

    def scan(self) -> List[ImageDescriptor]:
        """Scan all objects in ascending xref order."""
        descriptors: List[ImageDescriptor] = []
        pages: Dict[int, int] = get_image_pages(self.doc)

        for xref in range(1, self.doc.xref_length()):
            try:
                descriptor = self.read_descriptor(xref)
            except ScanSkip as e:
                logger.debug(f"    Skipping image object: {e}")
                continue
            except Exception as e:
                logger.warning(f"    Skipping unreadable object xref {xref}: {e}")
                continue

            if descriptor is None:
                continue

            descriptor.page = pages.get(xref)
            descriptors.append(descriptor)
            logger.debug(
                f"    Found image xref {xref}: {descriptor.width}x{descriptor.height} "
                f"{descriptor.color_space.value}/{descriptor.encoding.value}"
            )

        logger.info(f"  Scanned {self.doc.xref_length() - 1} objects, found {len(descriptors)} images")
        return descriptors


def scan_document(doc: Document) -> List[ImageDescriptor]:
    """Convenience wrapper around ObjectScanner."""
    return ObjectScanner(doc).scan()
