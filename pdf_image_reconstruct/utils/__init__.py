"""
Utility modules for PDF image reconstruction.
"""

from .decompress import inflate
from .image_processing import handle_alpha_channel, to_rgb_pixmap, record_to_pixmap, encode_record
from .pdf_utils import open_document, get_pdf_page_count, get_page_images, get_image_pages
from .storage import store_records

__all__ = [
    "inflate",
    "handle_alpha_channel",
    "to_rgb_pixmap",
    "record_to_pixmap",
    "encode_record",
    "open_document",
    "get_pdf_page_count",
    "get_page_images",
    "get_image_pages",
    "store_records",
]
