"""
Rendering subsystem - page access and rasterized image objects.

The fallback retriever only depends on the RenderingSubsystem and PageHandle
protocols. PyMuPDFRenderer is the implementation backed by PyMuPDF.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Dict, List, Optional, Protocol
from pymupdf import Document, Pixmap

from .models import Operation, PixelObject
from .utils.image_processing import to_rgb_pixmap

logger = logging.getLogger(__name__)

PAINT_IMAGE = "paintImageXObject"
PAINT_IMAGE_REPEAT = "paintImageXObjectRepeat"
PAINT_JPEG = "paintJpegXObject"
IMAGE_PAINT_OPERATORS = (PAINT_IMAGE, PAINT_IMAGE_REPEAT, PAINT_JPEG)

PixelCallback = Callable[[Optional[PixelObject]], None]


class PageHandle(Protocol):
    def get_operator_list(self) -> List[Operation]:
        ...

    def get_pixel_object(
        self, name: str, callback: Optional[PixelCallback] = None
    ) -> Optional[PixelObject]:
        ...


class RenderingSubsystem(Protocol):
    @property
    def page_count(self) -> int:
        ...

    def get_page(self, page_number: int) -> PageHandle:
        ...


class PyMuPDFPage:
    """A page of a PyMuPDFRenderer document."""

    def __init__(self, renderer: "PyMuPDFRenderer", page_number: int):
        self.renderer = renderer
        self.page_number = page_number
        self._names: Optional[Dict[str, int]] = None

    def _image_names(self) -> Dict[str, int]:
        if self._names is None:
            self.get_operator_list()
        return self._names or {}

    def get_operator_list(self) -> List[Operation]:
        """List one paint operation per image the page resources expose."""
        with self.renderer.lock:
            page = self.renderer.doc[self.page_number - 1]
            images = page.get_images(full=True)

        operations: List[Operation] = []
        names: Dict[str, int] = {}
        for img in images:
            xref, name, filter_type = img[0], img[7], img[8]
            names.setdefault(name, xref)
            operator = PAINT_JPEG if filter_type == "DCTDecode" else PAINT_IMAGE
            operations.append(Operation(operator=operator, args=[name]))

        self._names = names
        return operations

    def _load(self, name: str) -> Optional[PixelObject]:
        xref = self._image_names().get(name)
        if xref is None:
            logger.debug(f"    No image named {name} on page {self.page_number}")
            return None

        with self.renderer.lock:
            pix = to_rgb_pixmap(Pixmap(self.renderer.doc, xref))
            return PixelObject(width=pix.width, height=pix.height, data=bytes(pix.samples))

    def get_pixel_object(
        self, name: str, callback: Optional[PixelCallback] = None
    ) -> Optional[PixelObject]:
        """
        Fetch the rasterized image object called name.

        With a callback the object is loaded on a worker thread and handed to
        the callback; the call itself returns None.
        """
        if callback is None:
            return self._load(name)

        def deliver(future: Future) -> None:
            if future.cancelled():
                callback(None)
                return
            error = future.exception()
            if error is not None:
                logger.error(f"    Asynchronous load of {name} failed: {error}")
                callback(None)
            else:
                callback(future.result())

        self.renderer.executor.submit(self._load, name).add_done_callback(deliver)
        return None


class PyMuPDFRenderer:
    """RenderingSubsystem implementation over an open PyMuPDF document."""

    def __init__(self, doc: Document):
        self.doc = doc
        # PyMuPDF is not thread safe
        self.lock = Lock()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pixel-loader")

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def get_page(self, page_number: int) -> PyMuPDFPage:
        """Return the 1-based page page_number."""
        if not 1 <= page_number <= self.page_count:
            raise IndexError(f"Page {page_number} out of range 1..{self.page_count}")
        return PyMuPDFPage(self, page_number)

    def close(self) -> None:
        self.executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self) -> "PyMuPDFRenderer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
