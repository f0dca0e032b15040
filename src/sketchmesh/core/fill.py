"""Flood fill of bounded pixel regions."""

import logging

import numpy as np

from sketchmesh.domain import Color

logger = logging.getLogger(__name__)


def flood_fill(buffer: np.ndarray, x: int, y: int, color: Color) -> int:
    """Replace the 4-connected region around a seed pixel with a color.

    Only pixels whose RGB exactly equals the seed's RGB are filled, so
    anti-aliased stroke edges act as boundaries. Filled pixels get alpha 255.
    An explicit stack is used instead of recursion.

    Args:
        buffer: RGBA pixel buffer of shape (H, W, 4), mutated in place
        x: Seed column
        y: Seed row
        color: Fill color

    Returns:
        Number of pixels filled; 0 means the buffer is unchanged
    """
    height, width = buffer.shape[:2]
    x, y = round(x), round(y)
    if not (0 <= x < width and 0 <= y < height):
        return 0

    target = tuple(int(c) for c in buffer[y, x, :3])
    fill = color.to_tuple()
    if target == fill:
        return 0

    filled = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if not (0 <= cx < width and 0 <= cy < height):
            continue
        pixel = buffer[cy, cx]
        if pixel[0] != target[0] or pixel[1] != target[1] or pixel[2] != target[2]:
            continue

        pixel[0], pixel[1], pixel[2] = fill
        pixel[3] = 255
        filled += 1

        stack.append((cx + 1, cy))
        stack.append((cx - 1, cy))
        stack.append((cx, cy + 1))
        stack.append((cx, cy - 1))

    logger.debug("Flood fill at (%d, %d) changed %d pixels", x, y, filled)
    return filled
