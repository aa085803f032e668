"""
Tests for PDF document utilities.
"""

import pytest
from unittest.mock import MagicMock, patch

from pdf_image_reconstruct.exceptions import DecompressError, InputError
from pdf_image_reconstruct.utils.decompress import inflate
from pdf_image_reconstruct.utils.pdf_utils import (
    get_image_pages,
    get_pdf_page_count,
    get_page_images,
    open_document,
)

from conftest import deflate


class TestPDFUtils:
    """Test suite for PDF utilities."""

    def test_get_pdf_page_count(self):
        """Test getting page count from PDF document."""
        mock_doc = MagicMock()
        mock_doc.page_count = 10

        result = get_pdf_page_count(mock_doc)

        assert result == 10

    def test_get_page_images(self):
        """Test getting image references from a page."""
        mock_doc = MagicMock()
        expected_images = [
            (1, 0, 100, 100, 8, "DeviceRGB", "", "Im1", "DCTDecode"),
            (2, 0, 200, 200, 8, "DeviceRGB", "", "Im2", "FlateDecode")
        ]
        mock_doc.get_page_images.return_value = expected_images

        result = get_page_images(mock_doc, 0)

        assert result == expected_images
        mock_doc.get_page_images.assert_called_once_with(0)

    def test_get_image_pages_first_page_wins(self):
        """An image painted on several pages maps to the first one."""
        mock_doc = MagicMock()
        mock_doc.page_count = 3
        mock_doc.get_page_images.side_effect = [
            [(5, 0, 1, 1, 8, "DeviceGray", "", "Im5", "FlateDecode")],
            RuntimeError("broken page"),
            [(5, 0, 1, 1, 8, "DeviceGray", "", "Im5", "FlateDecode"),
             (7, 0, 1, 1, 8, "DeviceGray", "", "Im7", "FlateDecode")],
        ]

        assert get_image_pages(mock_doc) == {5: 1, 7: 3}

    def test_open_document(self, builder):
        builder.add_page()
        builder.add_page()

        doc = open_document(builder.build())
        try:
            assert get_pdf_page_count(doc) == 2
        finally:
            doc.close()

    @pytest.mark.parametrize("data", [b"", b"\x89PNG\r\n\x1a\n", b"just some text"])
    def test_open_document_rejects_non_pdf(self, data):
        with pytest.raises(InputError):
            open_document(data)

    @patch("pdf_image_reconstruct.utils.pdf_utils.pdfopen")
    def test_open_document_parse_failure(self, mock_pdfopen):
        mock_pdfopen.side_effect = RuntimeError("cannot repair")

        with pytest.raises(InputError, match="cannot repair"):
            open_document(b"%PDF-1.7\ngarbage")


class TestInflate:
    """Test suite for the Flate primitive."""

    def test_round_trip(self):
        assert inflate(deflate(b"pixels")) == b"pixels"

    def test_malformed(self):
        with pytest.raises(DecompressError):
            inflate(b"\x00\x01\x02")

    def test_truncated(self):
        with pytest.raises(DecompressError):
            inflate(deflate(bytes(1000))[:-6])
