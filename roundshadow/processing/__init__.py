"""
Processing module - Corner rounding and shadow synthesis.

This module provides:
- round_corners: Quarter-circle alpha mask with a one pixel feather
- synthesize_shadow: Padded, blurred black silhouette of the source alpha
"""

from roundshadow.processing.corners import (
    round_corners,
    clamp_radius,
    corner_feather,
)
from roundshadow.processing.shadow import (
    synthesize_shadow,
    shadow_padding,
    effective_blur_radius,
    validate_blur_radius,
)

__all__ = [
    "round_corners",
    "clamp_radius",
    "corner_feather",
    "synthesize_shadow",
    "shadow_padding",
    "effective_blur_radius",
    "validate_blur_radius",
]
