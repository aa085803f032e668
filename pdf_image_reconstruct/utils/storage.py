"""
Local storage of reconstructed images.
"""

import logging
from os import makedirs
from os.path import exists, join
from typing import List

from ..models import ImageRecord
from .image_processing import encode_record

logger = logging.getLogger(__name__)


def record_directory(output_dir: str, record: ImageRecord) -> str:
    """Page-specific directory a record is stored in."""
    if record.source_page is None:
        return join(output_dir, "images", "unassigned")
    return join(output_dir, "images", f"page_{record.source_page}")


def record_filename(record: ImageRecord, ext: str) -> str:
    suffix = "_placeholder" if record.is_placeholder else ""
    return f"{record.source_name}_{record.strategy}{suffix}.{ext}"


def store_records(records: List[ImageRecord], output_dir: str) -> List[str]:
    """
    Write records to disk as images/page_<n>/<name>_<strategy>.<ext>.

    Args:
        records: Records to store
        output_dir: Base output directory

    Returns:
        Paths of the written files
    """
    stored: List[str] = []

    for record in records:
        page_dir = record_directory(output_dir, record)
        if not exists(page_dir):
            makedirs(page_dir, exist_ok=True)
            logger.info(f"Created page directory: {page_dir}")

        try:
            ext, data = encode_record(record)
        except Exception as e:
            logger.error(f"    ✗ Could not encode {record.source_name}: {e}")
            continue

        filepath = join(page_dir, record_filename(record, ext))
        with open(filepath, "wb") as f:
            f.write(data)
        logger.info(f"    Stored image {record.source_name} at {filepath} ({len(data)} bytes)")
        stored.append(filepath)

    return stored
