"""
Shared fixtures: a minimal PDF writer that gives tests full control over
image dictionaries and raw stream payloads.
"""

import zlib
from typing import Dict, List, Optional

import pytest

from pdf_image_reconstruct.models import ExtractionConfig


class PDFBuilder:
    """Assembles a classic-xref PDF from hand-written objects."""

    CATALOG = 1
    PAGES = 2

    def __init__(self):
        self.bodies: Dict[int, bytes] = {}
        self.next_num = 3
        # page number -> (page xref, contents xref, {name: image xref})
        self.pages: List[tuple] = []

    def _allocate(self) -> int:
        num = self.next_num
        self.next_num += 1
        return num

    def add_object(self, body: str) -> int:
        num = self._allocate()
        self.bodies[num] = body.encode("latin-1")
        return num

    def add_stream(self, entries: str, data: bytes) -> int:
        num = self._allocate()
        self.bodies[num] = self._stream(entries, data)
        return num

    def add_page(self) -> int:
        """Add a page and return its 0-based index."""
        self.pages.append((self._allocate(), self._allocate(), {}))
        return len(self.pages) - 1

    def add_image(
        self,
        data: bytes,
        width: Optional[int] = 2,
        height: Optional[int] = 2,
        color_space: Optional[str] = "/DeviceGray",
        filter_name: Optional[str] = "/FlateDecode",
        smask: Optional[int] = None,
        page: Optional[int] = None,
        extra: str = "",
    ) -> int:
        """Add an image XObject, painted on page (0-based) if given."""
        entries = ["/Type /XObject", "/Subtype /Image", "/BitsPerComponent 8"]
        if width is not None:
            entries.append(f"/Width {width}")
        if height is not None:
            entries.append(f"/Height {height}")
        if color_space is not None:
            entries.append(f"/ColorSpace {color_space}")
        if filter_name is not None:
            entries.append(f"/Filter {filter_name}")
        if smask is not None:
            entries.append(f"/SMask {smask} 0 R")
        if extra:
            entries.append(extra)

        num = self.add_stream(" ".join(entries), data)
        if page is not None:
            self.pages[page][2][f"Im{num}"] = num
        return num

    @staticmethod
    def _stream(entries: str, data: bytes) -> bytes:
        header = f"<< {entries} /Length {len(data)} >>\nstream\n".encode("latin-1")
        return header + data + b"\nendstream"

    def build(self) -> bytes:
        if not self.pages:
            self.add_page()

        kids = " ".join(f"{page_xref} 0 R" for page_xref, _, _ in self.pages)
        self.bodies[self.CATALOG] = f"<< /Type /Catalog /Pages {self.PAGES} 0 R >>".encode()
        self.bodies[self.PAGES] = (
            f"<< /Type /Pages /Kids [{kids}] /Count {len(self.pages)} >>".encode()
        )

        for page_xref, contents_xref, images in self.pages:
            xobjects = " ".join(f"/{name} {num} 0 R" for name, num in images.items())
            self.bodies[page_xref] = (
                f"<< /Type /Page /Parent {self.PAGES} 0 R /MediaBox [0 0 200 200] "
                f"/Resources << /XObject << {xobjects} >> >> /Contents {contents_xref} 0 R >>"
            ).encode()
            ops = "".join(f"q 20 0 0 20 0 0 cm /{name} Do Q\n" for name in images)
            self.bodies[contents_xref] = self._stream("", ops.encode())

        out = bytearray(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n")
        offsets = {}
        for num in sorted(self.bodies):
            offsets[num] = len(out)
            out += f"{num} 0 obj\n".encode() + self.bodies[num] + b"\nendobj\n"

        size = max(self.bodies) + 1
        xref_offset = len(out)
        out += f"xref\n0 {size}\n".encode()
        out += b"0000000000 65535 f \n"
        for num in range(1, size):
            if num in offsets:
                out += f"{offsets[num]:010d} 00000 n \n".encode()
            else:
                out += b"0000000000 65535 f \n"
        out += (
            f"trailer\n<< /Size {size} /Root {self.CATALOG} 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF\n"
        ).encode()
        return bytes(out)


def deflate(data: bytes) -> bytes:
    return zlib.compress(bytes(data))


def rgba(*pixels) -> bytes:
    """Flatten (r, g, b, a) tuples into RGBA bytes."""
    return bytes(channel for pixel in pixels for channel in pixel)


@pytest.fixture
def builder():
    """Create an empty PDF builder."""
    return PDFBuilder()


@pytest.fixture
def config():
    """Create a test extraction configuration with a short async deadline."""
    return ExtractionConfig(max_workers=2, async_timeout=0.05)
