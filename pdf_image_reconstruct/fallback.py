"""
Fallback image retriever - collects rasterized images from the rendering subsystem.
"""

import logging
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import List, Optional

from .exceptions import DecodeError, RetrievalMiss
from .models import ExtractionConfig, ImageRecord, Operation, PixelObject, RecordStatus
from .placeholder import make_placeholder
from .reconstructor import expand_packed_rgb
from .rendering import IMAGE_PAINT_OPERATORS, PageHandle

logger = logging.getLogger(__name__)

STRATEGY = "rendered"


def collect_image_names(operations: List[Operation]) -> List[str]:
    """Return the image names painted by an operator list, first-seen order."""
    names: List[str] = []
    for operation in operations:
        if operation.operator in IMAGE_PAINT_OPERATORS and operation.args:
            name = operation.args[0]
            if name not in names:
                names.append(name)
    return names


class FallbackImageRetriever:
    """Retrieves images of a rendered page, one record per painted image name."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    def request_async(self, page: PageHandle, name: str) -> Optional[PixelObject]:
        """First stage: callback-based request bounded by async_timeout."""
        future: Future = Future()

        def resolve(pixel_object: Optional[PixelObject]) -> None:
            if not future.done():
                future.set_result(pixel_object)

        try:
            immediate = page.get_pixel_object(name, resolve)
        except Exception as e:
            logger.warning(f"    Asynchronous request for {name} failed: {e}")
            return None

        if immediate is not None:
            return immediate

        try:
            return future.result(timeout=self.config.async_timeout)
        except FutureTimeoutError:
            logger.warning(
                f"    No callback for {name} within {self.config.async_timeout}s"
            )
            return None

    def request_sync(self, page: PageHandle, name: str) -> Optional[PixelObject]:
        """Second stage: direct request."""
        try:
            return page.get_pixel_object(name)
        except Exception as e:
            logger.warning(f"    Synchronous request for {name} failed: {e}")
            return None

    def retrieve(self, page: PageHandle, name: str) -> PixelObject:
        """
        Fetch a pixel object, asynchronous stage first.

        Raises:
            RetrievalMiss: If neither stage yields an object
        """
        pixel_object = self.request_async(page, name)
        if pixel_object is None:
            logger.debug(f"    Callback returned no image for {name}, trying synchronous request")
            pixel_object = self.request_sync(page, name)
        if pixel_object is None:
            raise RetrievalMiss()
        return pixel_object

    def build_record(self, name: str, page_number: int, pixel_object: PixelObject) -> ImageRecord:
        """Expand a pixel object to RGBA (alpha is always opaque on this path)."""
        width, height = pixel_object.dimensions
        return ImageRecord(
            pixels=expand_packed_rgb(pixel_object),
            width=width,
            height=height,
            source_page=page_number,
            source_name=name,
            status=RecordStatus.DECODED,
            mime_type="image/x-rgba",
            strategy=STRATEGY,
        )

    def retrieve_page(self, page: PageHandle, page_number: int) -> List[ImageRecord]:
        """
        Produce one record for every image name painted on the page.

        Args:
            page: Page handle from the rendering subsystem
            page_number: 1-based page number

        Returns:
            Decoded or placeholder records, in first-seen name order
        """
        names = collect_image_names(page.get_operator_list())
        logger.info(f"  Found {len(names)} painted images on page {page_number}")

        records: List[ImageRecord] = []
        for name in names:
            try:
                pixel_object = self.retrieve(page, name)
                records.append(self.build_record(name, page_number, pixel_object))
                logger.info(f"    ✓ Retrieved: {name} ({pixel_object.dimensions[0]}x{pixel_object.dimensions[1]})")
            except (RetrievalMiss, DecodeError) as e:
                logger.warning(f"    ✗ Could not retrieve image {name}: {e}")
                records.append(
                    make_placeholder(name, page_number, str(e), self.config, strategy=STRATEGY)
                )
            except Exception as e:
                logger.error(f"    ✗ Error retrieving image {name}: {e}")
                records.append(
                    make_placeholder(name, page_number, str(e), self.config, strategy=STRATEGY)
                )
        return records
