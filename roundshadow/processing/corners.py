"""
Corner rounding for RGBA rasters.

Each corner square of side ``radius`` is masked by a quarter circle whose
center sits ``radius`` pixels in from both edges. Pixels inside the circle
are left untouched, a one pixel feather band softens the boundary and
everything further out becomes transparent. RGB values are never changed.
"""

import numbers

import numpy as np

from roundshadow.core.errors import UnsupportedRadius
from roundshadow.core.raster import raster_size, validate_raster


def clamp_radius(radius, width: int, height: int) -> int:
    """
    Normalize a corner radius for a raster of the given size.

    Negative radii become 0 and radii above half the shorter side are
    clamped to ``min(width, height) // 2`` so the corner squares never
    overlap.

    Raises:
        UnsupportedRadius: If radius is not an integer value
    """
    if isinstance(radius, bool) or not isinstance(radius, numbers.Real):
        raise UnsupportedRadius(f"Corner radius must be an integer, got {radius!r}")
    if not isinstance(radius, numbers.Integral):
        if not float(radius).is_integer():
            raise UnsupportedRadius(f"Corner radius must be an integer, got {radius!r}")
    radius = int(radius)
    return max(0, min(radius, min(width, height) // 2))


def corner_feather(radius: int) -> np.ndarray:
    """
    Alpha ceiling for the top-left corner square.

    Returns:
        (radius, radius) uint8 array. 255 inside the quarter circle, a
        truncated ``(radius + 1 - d) * 255`` in the feather band and 0 beyond.
        The other corners are mirror images of this array.
    """
    idx = np.arange(radius, dtype=np.float64)
    dy = (radius - idx)[:, np.newaxis]
    dx = (radius - idx)[np.newaxis, :]
    distance = np.sqrt(dx * dx + dy * dy)

    feather = np.clip((radius + 1.0 - distance) * 255.0, 0, 255).astype(np.uint8)
    feather[distance <= radius] = 255
    return feather


def round_corners(src: np.ndarray, radius) -> np.ndarray:
    """
    Round the corners of an RGBA raster.

    Args:
        src: Source raster (H, W, 4) uint8
        radius: Corner radius in pixels, clamped to half the shorter side

    Returns:
        New raster with the same dimensions as ``src``
    """
    validate_raster(src, "source")
    width, height = raster_size(src)
    r = clamp_radius(radius, width, height)

    rounded = src.copy()
    if r == 0:
        return rounded

    feather = corner_feather(r)
    corners = (
        (slice(0, r), slice(0, r), feather),
        (slice(0, r), slice(width - r, width), feather[:, ::-1]),
        (slice(height - r, height), slice(0, r), feather[::-1, :]),
        (slice(height - r, height), slice(width - r, width), feather[::-1, ::-1]),
    )
    for rows, cols, ceiling in corners:
        alpha = rounded[rows, cols, 3]
        rounded[rows, cols, 3] = np.minimum(alpha, ceiling)

    return rounded
