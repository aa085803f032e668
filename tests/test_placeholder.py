"""
Tests for placeholder generation.
"""

from unittest.mock import patch

from pdf_image_reconstruct.models import ExtractionConfig, RecordStatus
from pdf_image_reconstruct.placeholder import make_placeholder


class TestMakePlaceholder:
    """Test suite for make_placeholder."""

    def test_default_geometry(self):
        record = make_placeholder("Im1", 4, "Image not available")

        assert (record.width, record.height) == (200, 200)
        assert len(record.pixels) == 200 * 200 * 4
        assert record.status == RecordStatus.PLACEHOLDER
        assert record.is_placeholder
        assert record.source_page == 4
        assert record.source_name == "Im1"
        assert record.reason == "Image not available"

    def test_label_is_drawn(self):
        """Opaque gray background with darker text pixels on it."""
        record = make_placeholder("img00007", None, "Malformed Flate stream")
        pixels = record.pixels

        corner = pixels[0:4]
        assert corner[0] == corner[1] == corner[2]
        assert corner[0] > 180
        assert set(pixels[3::4]) == {255}
        assert min(pixels[0::4]) < 100

    def test_custom_size(self):
        config = ExtractionConfig(placeholder_size=64)

        record = make_placeholder("Im1", 1, "x", config, strategy="rendered")

        assert (record.width, record.height) == (64, 64)
        assert record.strategy == "rendered"

    @patch("pdf_image_reconstruct.placeholder._render_label")
    def test_never_fails(self, mock_render):
        """If drawing fails the placeholder falls back to a solid fill."""
        mock_render.side_effect = RuntimeError("no fonts")

        record = make_placeholder("Im1", 1, "broken")

        assert record.status == RecordStatus.PLACEHOLDER
        assert record.pixels[:4] == bytes([212, 212, 212, 255])
        assert len(set(record.pixels)) == 2
