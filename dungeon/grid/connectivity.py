"""Connected-component analysis of walkable cells."""

import numpy as np
from scipy import ndimage

# 4-connectivity: cells touch only through cardinal neighbours
CARDINAL_STRUCTURE = ndimage.generate_binary_structure(2, 1)


def label_components(mask: np.ndarray) -> tuple[np.ndarray, int]:
    """Label 4-connected components of a boolean ``[y, x]`` mask.

    Returns:
        (labels, count) where labels is 0 outside the mask and 1..count inside
    """
    labels, count = ndimage.label(mask, structure=CARDINAL_STRUCTURE)
    return labels, int(count)


def count_components(mask: np.ndarray) -> int:
    return label_components(mask)[1]


def is_single_component(mask: np.ndarray) -> bool:
    """True when the mask forms at most one connected component (empty counts)."""
    return count_components(mask) <= 1
