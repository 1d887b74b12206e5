"""
Raster helpers.

A raster is a numpy array of shape (height, width, 4) and dtype uint8 with
channels in R, G, B, A order. All processing stages take and return rasters
in this form.
"""

import numpy as np

from roundshadow.core.errors import InvalidDimensions

# Largest canvas side we are willing to allocate
MAX_DIMENSION = 65535


def validate_raster(raster: np.ndarray, name: str = "raster") -> np.ndarray:
    """
    Check that an array is a non-empty RGBA8 raster.

    Args:
        raster: Array to check
        name: Name used in error messages

    Returns:
        The same array, for chaining

    Raises:
        InvalidDimensions: If the array is not (H, W, 4) uint8 or is empty
    """
    if not isinstance(raster, np.ndarray):
        raise InvalidDimensions(f"{name} must be a numpy array, got {type(raster).__name__}")
    if raster.ndim != 3 or raster.shape[2] != 4:
        raise InvalidDimensions(f"{name} must have shape (height, width, 4), got {raster.shape}")
    if raster.dtype != np.uint8:
        raise InvalidDimensions(f"{name} must be uint8, got {raster.dtype}")
    height, width = raster.shape[:2]
    if width == 0 or height == 0:
        raise InvalidDimensions(f"{name} has zero size: {width}x{height}")
    return raster


def raster_size(raster: np.ndarray) -> tuple[int, int]:
    """Return (width, height) of a raster."""
    return int(raster.shape[1]), int(raster.shape[0])


def check_canvas_size(width: int, height: int) -> None:
    """Raise InvalidDimensions if a canvas of this size cannot be allocated."""
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Canvas size must be positive, got {width}x{height}")
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise InvalidDimensions(
            f"Canvas size {width}x{height} exceeds maximum of {MAX_DIMENSION} per side"
        )


def new_raster(width: int, height: int) -> np.ndarray:
    """Allocate a fully transparent raster."""
    check_canvas_size(width, height)
    return np.zeros((height, width, 4), dtype=np.uint8)


def to_rgba(image: np.ndarray) -> np.ndarray:
    """
    Promote a decoded image array to an RGBA8 raster.

    Accepts grayscale (HxW or HxWx1), gray+alpha (HxWx2), RGB (HxWx3) and
    RGBA (HxWx4) arrays in uint8 or uint16. 16-bit data is reduced to 8 bits.
    Channel order is assumed to already be RGB(A).

    Raises:
        InvalidDimensions: If the array cannot be interpreted as an image
    """
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise InvalidDimensions(f"Unsupported pixel type: {image.dtype}")

    if image.ndim == 2:
        image = image[:, :, np.newaxis]
    if image.ndim != 3:
        raise InvalidDimensions(f"Unsupported image shape: {image.shape}")

    channels = image.shape[2]
    height, width = image.shape[:2]
    opaque = np.full((height, width, 1), 255, dtype=np.uint8)

    if channels == 1:
        rgba = np.concatenate([image, image, image, opaque], axis=2)
    elif channels == 2:
        gray = image[:, :, :1]
        rgba = np.concatenate([gray, gray, gray, image[:, :, 1:2]], axis=2)
    elif channels == 3:
        rgba = np.concatenate([image, opaque], axis=2)
    elif channels == 4:
        rgba = image.copy()
    else:
        raise InvalidDimensions(f"Unsupported channel count: {channels}")

    return validate_raster(np.ascontiguousarray(rgba), "image")
