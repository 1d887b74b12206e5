"""
Shadow finishing operations.

This module provides a registry of operations that can be applied to a
synthesized shadow raster and produce a new raster of the same size.

To add a new operation:
1. Create a function with signature: func(shadow: np.ndarray, **params) -> np.ndarray
2. Register it with the @register_operation decorator

All operations receive:
- shadow: RGBA raster as numpy array (uint8, HxWx4)
- **params: Operation parameters

All operations must return:
- A new RGBA uint8 raster with the same shape as the input
"""

import numpy as np
from typing import Callable, Dict, Any

# Registry of available operations
_OPERATIONS: Dict[str, Dict[str, Any]] = {}

# Default exponents
SOFTEN_POWER = 0.5
FADE_EXPONENT = 2.0


def register_operation(name: str, description: str = ""):
    """Decorator to register a shadow operation."""
    def decorator(func: Callable):
        _OPERATIONS[name] = {
            'func': func,
            'description': description,
        }
        return func
    return decorator


def get_operations() -> list:
    """Return list of available operation names."""
    return list(_OPERATIONS.keys())


def get_operation(name: str) -> Callable:
    """Get an operation function by name."""
    if name not in _OPERATIONS:
        raise ValueError(f"Unknown operation: {name}. Available: {get_operations()}")
    return _OPERATIONS[name]['func']


def describe_operation(name: str) -> str:
    """Return the one-line description of an operation."""
    get_operation(name)
    return _OPERATIONS[name]['description']


def apply_operation(name: str, shadow: np.ndarray, **params) -> np.ndarray:
    """Apply a named operation to a shadow raster."""
    func = get_operation(name)
    return func(shadow, **params)


# =============================================================================
# Built-in Operations
# =============================================================================

@register_operation("soften_edges", "Scale all channels by a power of alpha to smooth blur fringes")
def soften_edges(shadow: np.ndarray, power: float = SOFTEN_POWER, **params) -> np.ndarray:
    """
    Soften hard blur fringes with a power curve on alpha.

    For every pixel with alpha > 0, all four channels are multiplied by
    ``(alpha / 255) ** power`` and truncated. Fully transparent pixels are
    left at zero.
    """
    result = np.zeros_like(shadow)
    visible = shadow[:, :, 3] > 0
    if not visible.any():
        return result

    pixels = shadow[visible].astype(np.float32)
    factor = np.power(pixels[:, 3] / 255.0, power)
    result[visible] = np.clip(pixels * factor[:, np.newaxis], 0, 255).astype(np.uint8)
    return result


@register_operation("edge_fade", "Attenuate alpha near the raster border")
def edge_fade(shadow: np.ndarray, width: int = 0, exponent: float = FADE_EXPONENT,
              **params) -> np.ndarray:
    """
    Fade alpha towards the raster border.

    Alpha is multiplied by ``(1 - p) ** exponent`` where ``p`` is the
    normalized closeness to the nearest border: 1 on the border, falling to 0
    at ``width`` pixels inside it. Set width=0 to skip.
    """
    if width <= 0:
        return shadow.copy()

    height, full_width = shadow.shape[:2]
    ys = np.arange(height, dtype=np.float32)
    xs = np.arange(full_width, dtype=np.float32)
    dist_y = np.minimum(ys, height - 1 - ys)[:, np.newaxis]
    dist_x = np.minimum(xs, full_width - 1 - xs)[np.newaxis, :]
    distance = np.minimum(dist_x, dist_y)

    closeness = np.clip(1.0 - distance / float(width), 0.0, 1.0)
    factor = np.power(1.0 - closeness, exponent)

    result = shadow.copy()
    alpha = shadow[:, :, 3].astype(np.float32) * factor
    result[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)
    return result
