"""
Image index - links color images to the SMask images that carry their alpha.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import ImageDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ImageIndex:
    """Linked descriptors plus a reference -> position lookup."""

    descriptors: List[ImageDescriptor]
    positions: Dict[int, int] = field(default_factory=dict)

    @property
    def primaries(self) -> List[ImageDescriptor]:
        """Descriptors that produce an output record."""
        return [d for d in self.descriptors if not d.is_alpha_mask]

    @property
    def masks(self) -> List[ImageDescriptor]:
        """Descriptors only consumed as alpha channels."""
        return [d for d in self.descriptors if d.is_alpha_mask]

    def get(self, reference: int) -> Optional[ImageDescriptor]:
        position = self.positions.get(reference)
        return None if position is None else self.descriptors[position]

    def mask_for(self, descriptor: ImageDescriptor) -> Optional[ImageDescriptor]:
        """Return the linked alpha mask of a descriptor, if any."""
        if descriptor.alpha_reference is None:
            return None
        return self.get(descriptor.alpha_reference)


def build_image_index(descriptors: List[ImageDescriptor]) -> ImageIndex:
    """
    Resolve SMask references in a single pass.

    Dangling references are dropped. Chains are cut so that a mask never has
    a mask of its own: the first link established wins.

    Args:
        descriptors: Descriptors in scan order

    Returns:
        ImageIndex over the same, now linked, descriptors
    """
    positions: Dict[int, int] = {}
    for position, descriptor in enumerate(descriptors):
        positions.setdefault(descriptor.reference, position)

    index = ImageIndex(descriptors=descriptors, positions=positions)
    linked = set()

    for descriptor in descriptors:
        reference = descriptor.alpha_reference
        if reference is None:
            continue

        if descriptor.is_alpha_mask:
            logger.debug(f"    Ignoring SMask of mask {descriptor.name} (xref {reference})")
            descriptor.alpha_reference = None
            continue

        target = index.get(reference)
        if target is None or target is descriptor:
            logger.warning(
                f"    SMask xref {reference} of {descriptor.name} not found, using opaque alpha"
            )
            descriptor.alpha_reference = None
            continue

        if target.reference in linked:
            logger.debug(
                f"    SMask xref {reference} of {descriptor.name} already has its own mask, ignoring"
            )
            descriptor.alpha_reference = None
            continue

        target.is_alpha_mask = True
        target.alpha_reference = None
        linked.add(descriptor.reference)

    logger.info(
        f"  Linked {len(index.masks)} alpha masks to {len(linked)} images"
    )
    return index
