"""
PDF Image Extractor - Core extraction functionality.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from threading import Event
from time import time
from typing import List, Optional

from .fallback import FallbackImageRetriever
from .index import ImageIndex, build_image_index
from .models import ExtractionConfig, ExtractionResult, ImageDescriptor, ImageRecord
from .placeholder import make_placeholder
from .reconstructor import PixelReconstructor
from .rendering import PyMuPDFRenderer
from .scanner import ObjectScanner
from .utils.pdf_utils import get_pdf_page_count, open_document
from .utils.storage import store_records

logger = logging.getLogger(__name__)


class ImageExtractor(ABC):
    """Capability shared by every extraction strategy."""

    strategy: str = ""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    @abstractmethod
    def extract(
        self, document: bytes, cancel_event: Optional[Event] = None
    ) -> List[ImageRecord]:
        """
        Extract image records from a complete PDF buffer.

        Raises:
            InputError: If the buffer is not a readable PDF document
        """


class StructuralImageExtractor(ImageExtractor):
    """Scans the object table and rebuilds every image stream it finds."""

    strategy = "structural"

    def __init__(self, config: Optional[ExtractionConfig] = None):
        super().__init__(config)
        self.reconstructor = PixelReconstructor()

    def scan(self, document: bytes) -> List[ImageDescriptor]:
        doc = open_document(document)
        try:
            return ObjectScanner(doc).scan()
        finally:
            doc.close()

    def _reconstruct_unless_cancelled(
        self,
        descriptor: ImageDescriptor,
        mask: Optional[ImageDescriptor],
        cancel_event: Optional[Event],
    ) -> Optional[ImageRecord]:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return self.reconstructor.reconstruct(descriptor, mask)

    def reconstruct_all(
        self, index: ImageIndex, cancel_event: Optional[Event] = None
    ) -> List[ImageRecord]:
        """
        Reconstruct every primary descriptor on a thread pool.

        Failed images become placeholders. Records come back in scan order.
        """
        primaries = index.primaries
        records: List[ImageRecord] = []

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(
                    self._reconstruct_unless_cancelled,
                    descriptor,
                    index.mask_for(descriptor),
                    cancel_event,
                )
                for descriptor in primaries
            ]

            for descriptor, future in zip(primaries, futures):
                try:
                    record = future.result()
                except Exception as e:
                    logger.error(f"    ✗ Error reconstructing image {descriptor.name}: {e}")
                    record = make_placeholder(
                        descriptor.name, descriptor.page, str(e), self.config, self.strategy
                    )
                else:
                    if record is None:
                        continue
                    logger.info(
                        f"    ✓ Reconstructed: {descriptor.name} ({descriptor.width}x{descriptor.height})"
                    )
                records.append(record)

        if cancel_event is not None and cancel_event.is_set():
            logger.warning(
                f"  Extraction cancelled after {len(records)} of {len(primaries)} images"
            )
        return records

    def extract(
        self, document: bytes, cancel_event: Optional[Event] = None
    ) -> List[ImageRecord]:
        descriptors = self.scan(document)
        index = build_image_index(descriptors)
        return self.reconstruct_all(index, cancel_event)


class RenderedImageExtractor(ImageExtractor):
    """Collects images page by page through the rendering subsystem."""

    strategy = "rendered"

    def __init__(self, config: Optional[ExtractionConfig] = None):
        super().__init__(config)
        self.retriever = FallbackImageRetriever(self.config)

    def extract(
        self, document: bytes, cancel_event: Optional[Event] = None
    ) -> List[ImageRecord]:
        doc = open_document(document)
        records: List[ImageRecord] = []

        try:
            with PyMuPDFRenderer(doc) as renderer:
                for page_number in range(1, renderer.page_count + 1):
                    if cancel_event is not None and cancel_event.is_set():
                        logger.warning(f"  Extraction cancelled before page {page_number}")
                        break

                    logger.info(f"\nRetrieving images from page {page_number}/{renderer.page_count}...")
                    try:
                        page = renderer.get_page(page_number)
                        records.extend(self.retriever.retrieve_page(page, page_number))
                    except Exception as e:
                        logger.error(f"  Error extracting images from page {page_number}: {e}")
        finally:
            doc.close()

        return records


EXTRACTORS = {
    StructuralImageExtractor.strategy: StructuralImageExtractor,
    RenderedImageExtractor.strategy: RenderedImageExtractor,
}


@dataclass
class PDFImageExtractor:
    """Runs the configured extraction strategies over a PDF document."""

    config: ExtractionConfig = field(default_factory=ExtractionConfig)
    extractors: List[ImageExtractor] = field(default_factory=list)

    def __post_init__(self):
        if not self.extractors:
            self.extractors = [EXTRACTORS[name](self.config) for name in self.config.strategies]

    def extract(
        self, document: bytes, cancel_event: Optional[Event] = None
    ) -> List[ImageRecord]:
        """
        Extract images with every configured strategy.

        The strategies are independent: their records are concatenated
        without deduplication.

        Raises:
            InputError: If the buffer is not a readable PDF document
        """
        records: List[ImageRecord] = []
        for extractor in self.extractors:
            logger.info(f"Running {extractor.strategy} extraction...")
            records.extend(extractor.extract(document, cancel_event))
        return records

    def extract_all_images(self, pdf_path: Path, save: bool = False) -> ExtractionResult:
        """Extract all images from a PDF file, optionally storing them on disk."""
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF file does not exist: {pdf_path}")

        start_time = time()
        document = pdf_path.read_bytes()

        doc = open_document(document)
        try:
            page_count = get_pdf_page_count(doc)
        finally:
            doc.close()

        logger.info(f"Processing PDF: {pdf_path}")
        logger.info(f"Total pages: {page_count}")

        records = self.extract(document)

        saved_files: List[str] = []
        if save:
            logger.info(f"Output directory: {self.config.output_dir}")
            saved_files = store_records(records, self.config.output_dir)

        return ExtractionResult(
            pdf_path=str(pdf_path),
            total_pages=page_count,
            records=records,
            extraction_time=time() - start_time,
            saved_files=saved_files,
        )
