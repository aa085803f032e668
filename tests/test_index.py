"""
Tests for SMask linking.
"""

from pdf_image_reconstruct.index import build_image_index
from pdf_image_reconstruct.models import ColorSpace, ImageDescriptor, ImageEncoding


def descriptor(reference, alpha_reference=None):
    return ImageDescriptor(
        reference=reference,
        width=1,
        height=1,
        color_space=ColorSpace.GRAY,
        encoding=ImageEncoding.DEFLATE_RAW,
        raw_bytes=b"",
        alpha_reference=alpha_reference,
    )


class TestBuildImageIndex:
    """Test suite for build_image_index."""

    def test_links_mask(self):
        color, mask = descriptor(5, alpha_reference=6), descriptor(6)

        index = build_image_index([color, mask])

        assert mask.is_alpha_mask
        assert not color.is_alpha_mask
        assert index.primaries == [color]
        assert index.masks == [mask]
        assert index.mask_for(color) is mask

    def test_mask_before_image(self):
        """Linking does not depend on scan order."""
        mask, color = descriptor(3), descriptor(9, alpha_reference=3)

        index = build_image_index([mask, color])

        assert index.primaries == [color]
        assert index.mask_for(color) is mask

    def test_dangling_reference_dropped(self):
        color = descriptor(5, alpha_reference=42)

        index = build_image_index([color])

        assert color.alpha_reference is None
        assert index.primaries == [color]
        assert index.mask_for(color) is None

    def test_self_reference_dropped(self):
        color = descriptor(5, alpha_reference=5)

        index = build_image_index([color])

        assert color.alpha_reference is None
        assert not color.is_alpha_mask

    def test_alpha_chain_first_link_wins(self):
        """A -> B -> C: B becomes A's mask and loses its own link, C stays primary."""
        a, b, c = descriptor(1, alpha_reference=2), descriptor(2, alpha_reference=3), descriptor(3)

        index = build_image_index([a, b, c])

        assert b.is_alpha_mask
        assert b.alpha_reference is None
        assert not c.is_alpha_mask
        assert index.primaries == [a, c]
        assert index.mask_for(a) is b

    def test_link_to_linked_image_ignored(self):
        """B -> C is honored first, so a later A -> B link is dropped."""
        b, c, a = descriptor(2, alpha_reference=3), descriptor(3), descriptor(1, alpha_reference=2)

        index = build_image_index([b, c, a])

        assert c.is_alpha_mask
        assert not b.is_alpha_mask
        assert a.alpha_reference is None
        assert index.primaries == [b, a]

    def test_shared_mask(self):
        """Two images may share one mask."""
        a, b, m = descriptor(1, alpha_reference=9), descriptor(2, alpha_reference=9), descriptor(9)

        index = build_image_index([a, b, m])

        assert index.primaries == [a, b]
        assert index.mask_for(a) is m
        assert index.mask_for(b) is m

    def test_empty(self):
        index = build_image_index([])

        assert index.primaries == []
        assert index.masks == []
