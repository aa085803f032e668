"""
PDF document utilities.
"""

import logging
from typing import Dict, List, Tuple
from pymupdf import Document, open as pdfopen

from ..exceptions import InputError

logger = logging.getLogger(__name__)

# The header may be preceded by junk, but must appear within the first kilobyte
HEADER_SEARCH_WINDOW = 1024


def open_document(data: bytes) -> Document:
    """
    Open a PDF document from an in-memory buffer.

    Args:
        data: Complete PDF file contents

    Returns:
        Opened PDF document object

    Raises:
        InputError: If the buffer is empty, lacks a PDF header or cannot be parsed
    """
    if not data:
        raise InputError("Empty input, expected a PDF document")

    if b"%PDF-" not in bytes(data[:HEADER_SEARCH_WINDOW]):
        raise InputError("Missing %PDF- header, not a PDF document")

    try:
        doc = pdfopen(stream=bytes(data), filetype="pdf")
    except Exception as e:
        raise InputError(f"Could not parse PDF document: {e}") from e

    if not doc.is_pdf:
        doc.close()
        raise InputError("Input is not a PDF document")

    return doc


def get_pdf_page_count(doc: Document) -> int:
    """
    Get the number of pages in a PDF document.

    Args:
        doc: PDF document object

    Returns:
        Number of pages in the document
    """
    return doc.page_count


def get_page_images(doc: Document, page_num: int) -> List[Tuple]:
    """
    Get all image references from a specific page.

    Args:
        doc: PDF document object
        page_num: Page number (0-indexed)

    Returns:
        List of image tuples containing metadata
    """
    return doc.get_page_images(page_num)


def get_image_pages(doc: Document) -> Dict[int, int]:
    """
    Map each image xref to the first page that paints it.

    Args:
        doc: PDF document object

    Returns:
        Dictionary of xref to 1-based page number
    """
    pages: Dict[int, int] = {}
    for page_num in range(get_pdf_page_count(doc)):
        try:
            image_list = get_page_images(doc, page_num)
        except Exception as e:
            logger.warning(f"  Could not list images on page {page_num + 1}: {e}")
            continue
        for img in image_list:
            pages.setdefault(img[0], page_num + 1)
    return pages
