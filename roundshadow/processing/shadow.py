"""
Drop shadow synthesis.

The shadow is a black raster whose alpha is the source silhouette scaled
by the shadow opacity, padded on every side and blurred. ``spread`` is an
unsigned amount added uniformly to the padding and, halved, to the blur
radius; the silhouette itself is never resized.
"""

import numbers

import numpy as np
from scipy.ndimage import gaussian_filter

from roundshadow.core.config import DEFAULT_BLUR_RADIUS, MAX_BLUR_RADIUS
from roundshadow.core.errors import BlurParameterOutOfRange
from roundshadow.core.raster import new_raster, raster_size, validate_raster
from roundshadow.postprocess.operations import (
    FADE_EXPONENT,
    SOFTEN_POWER,
    apply_operation,
)


def validate_blur_radius(blur_radius) -> int:
    """
    Check a blur radius and return it as an int.

    Raises:
        BlurParameterOutOfRange: If the radius is negative, fractional or
            larger than MAX_BLUR_RADIUS
    """
    if isinstance(blur_radius, bool) or not isinstance(blur_radius, numbers.Real):
        raise BlurParameterOutOfRange(f"Blur radius must be an integer, got {blur_radius!r}")
    if not isinstance(blur_radius, numbers.Integral) and not float(blur_radius).is_integer():
        raise BlurParameterOutOfRange(f"Blur radius must be an integer, got {blur_radius!r}")
    blur_radius = int(blur_radius)
    if blur_radius < 0:
        raise BlurParameterOutOfRange(f"Blur radius must be non-negative, got {blur_radius}")
    if blur_radius > MAX_BLUR_RADIUS:
        raise BlurParameterOutOfRange(
            f"Blur radius {blur_radius} exceeds maximum of {MAX_BLUR_RADIUS}"
        )
    return blur_radius


def clamp_spread(spread) -> int:
    """Spread is cosmetic: negative values become 0."""
    return max(0, int(spread))


def clamp_alpha(alpha) -> int:
    """Clamp shadow opacity to 0-255."""
    return max(0, min(255, int(alpha)))


def shadow_padding(spread: int, blur_radius: int) -> int:
    """Padding added on every side of the shadow layer."""
    return clamp_spread(spread) + 2 * blur_radius


def effective_blur_radius(spread: int, blur_radius: int) -> int:
    """Gaussian sigma actually used: the blur radius grown by half the spread."""
    return blur_radius + clamp_spread(spread) // 2


def synthesize_shadow(
    src: np.ndarray,
    blur_radius: int = DEFAULT_BLUR_RADIUS,
    spread: int = 0,
    alpha: int = 255,
    *,
    edge_fade: bool = False,
    fade_exponent: float = FADE_EXPONENT,
    soften_power: float | None = SOFTEN_POWER,
) -> np.ndarray:
    """
    Build the shadow layer for a raster.

    Processing order:
    1. Pad by ``spread + 2 * blur_radius`` on every side
    2. Paste the source alpha at the padding offset
    3. Black RGB, alpha scaled by ``alpha / 255``
    4. Gaussian blur with sigma ``blur_radius + spread // 2``
    5. Optional edge fade across the padding band
    6. Power curve on visible pixels (only after an actual blur)

    Args:
        src: Source raster (H, W, 4) uint8, usually already rounded
        blur_radius: Base blur radius in pixels
        spread: Extra distance the shadow extends beyond the source
        alpha: Shadow opacity cap (0-255)
        edge_fade: Attenuate alpha towards the shadow canvas border
        fade_exponent: Exponent of the edge fade curve
        soften_power: Exponent of the cleanup pass, None to skip it

    Returns:
        New RGBA raster of size (W + 2p, H + 2p) with R = G = B = 0
    """
    validate_raster(src, "source")
    blur_radius = validate_blur_radius(blur_radius)
    spread = clamp_spread(spread)
    alpha = clamp_alpha(alpha)

    width, height = raster_size(src)
    padding = shadow_padding(spread, blur_radius)
    shadow = new_raster(width + 2 * padding, height + 2 * padding)

    # Integer math keeps alpha * original / 255 exact
    silhouette = (src[:, :, 3].astype(np.uint16) * alpha) // 255
    shadow[padding:padding + height, padding:padding + width, 3] = silhouette.astype(np.uint8)

    sigma = effective_blur_radius(spread, blur_radius)
    if sigma > 0:
        blurred = gaussian_filter(shadow[:, :, 3].astype(np.float32), sigma=sigma,
                                  mode="constant", cval=0.0)
        shadow[:, :, 3] = np.clip(blurred, 0, 255).astype(np.uint8)

    # Fade acts on the blurred tail, which is the only alpha near the border
    if edge_fade:
        shadow = apply_operation("edge_fade", shadow, width=padding, exponent=fade_exponent)

    if sigma > 0 and soften_power is not None:
        shadow = apply_operation("soften_edges", shadow, power=soften_power)

    return shadow
