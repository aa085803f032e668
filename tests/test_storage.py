"""
Tests for local record storage.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from pdf_image_reconstruct.models import ImageRecord, RecordStatus
from pdf_image_reconstruct.utils.storage import record_directory, record_filename, store_records


class TestStorage:
    """Test suite for storage utilities."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for testing."""
        temp_dir = tempfile.mkdtemp()
        yield Path(temp_dir)
        shutil.rmtree(temp_dir)

    @pytest.fixture
    def records(self):
        return [
            ImageRecord(pixels=bytes(16), width=2, height=2, source_page=1, source_name="img00005"),
            ImageRecord(
                width=4, height=4, source_page=2, source_name="img00007",
                encoded=b"\xff\xd8jpeg\xff\xd9", mime_type="image/jpeg",
            ),
            ImageRecord(
                pixels=bytes(16), width=2, height=2, source_name="Im3",
                status=RecordStatus.PLACEHOLDER, strategy="rendered",
            ),
        ]

    def test_record_directory(self, records):
        assert record_directory("out", records[0]) == str(Path("out", "images", "page_1"))
        assert record_directory("out", records[2]) == str(Path("out", "images", "unassigned"))

    def test_record_filename(self, records):
        assert record_filename(records[0], "png") == "img00005_structural.png"
        assert record_filename(records[2], "png") == "Im3_rendered_placeholder.png"

    def test_store_records(self, temp_dir, records):
        stored = store_records(records, str(temp_dir))

        assert len(stored) == 3
        assert (temp_dir / "images" / "page_1" / "img00005_structural.png").exists()
        jpeg = temp_dir / "images" / "page_2" / "img00007_structural.jpg"
        assert jpeg.read_bytes() == b"\xff\xd8jpeg\xff\xd9"
        assert (temp_dir / "images" / "unassigned" / "Im3_rendered_placeholder.png").exists()
