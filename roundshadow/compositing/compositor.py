"""
Layer compositing.

Places the shadow layer and the rounded source on a transparent canvas
using straight-alpha "over" compositing.
"""

import numpy as np

from roundshadow.compositing.layout import Layout, compute_layout
from roundshadow.core.errors import InvalidDimensions
from roundshadow.core.raster import new_raster, raster_size, validate_raster


def alpha_over(dst: np.ndarray, src: np.ndarray, x: int, y: int) -> np.ndarray:
    """
    Composite ``src`` over ``dst`` in place with its top-left at (x, y).

    Both rasters use straight (non-premultiplied) alpha:
        out_a   = src_a + dst_a * (1 - src_a)
        out_rgb = (src_rgb * src_a + dst_rgb * dst_a * (1 - src_a)) / out_a

    Over an opaque destination this reduces to dst * (1 - src_a) + src * src_a.

    Raises:
        InvalidDimensions: If ``src`` does not fit inside ``dst`` at (x, y)
    """
    src_w, src_h = raster_size(src)
    dst_w, dst_h = raster_size(dst)
    if x < 0 or y < 0 or x + src_w > dst_w or y + src_h > dst_h:
        raise InvalidDimensions(
            f"Layer {src_w}x{src_h} at ({x}, {y}) does not fit canvas {dst_w}x{dst_h}"
        )

    region = dst[y:y + src_h, x:x + src_w]
    fg = src.astype(np.float32) / 255.0
    bg = region.astype(np.float32) / 255.0

    fg_a = fg[:, :, 3:4]
    bg_a = bg[:, :, 3:4]
    bg_weight = bg_a * (1.0 - fg_a)
    out_a = fg_a + bg_weight

    rgb = fg[:, :, :3] * fg_a + bg[:, :, :3] * bg_weight
    rgb = np.divide(rgb, out_a, out=np.zeros_like(rgb), where=out_a > 0)

    out = np.concatenate([rgb, out_a], axis=2)
    region[:] = np.clip(np.rint(out * 255.0), 0, 255).astype(np.uint8)
    return dst


def infer_padding(rounded: np.ndarray, shadow: np.ndarray) -> int:
    """
    Recover the shadow padding from the two layer sizes.

    Raises:
        InvalidDimensions: If the shadow is not uniformly padded around the source
    """
    width, height = raster_size(rounded)
    shadow_w, shadow_h = raster_size(shadow)
    pad_x, pad_y = shadow_w - width, shadow_h - height
    if pad_x != pad_y or pad_x < 0 or pad_x % 2:
        raise InvalidDimensions(
            f"Shadow {shadow_w}x{shadow_h} is not uniformly padded around source {width}x{height}"
        )
    return pad_x // 2


def compose(
    rounded: np.ndarray,
    shadow: np.ndarray,
    offset_x: int,
    offset_y: int,
    padding: int | None = None,
) -> np.ndarray:
    """
    Composite the shadow behind the rounded source.

    Args:
        rounded: Rounded source raster
        shadow: Shadow layer from synthesize_shadow()
        offset_x: Horizontal shadow displacement (negative = left)
        offset_y: Vertical shadow displacement (negative = up)
        padding: Shadow padding, inferred from the layer sizes when None

    Returns:
        New RGBA canvas containing both layers
    """
    return compose_with_layout(rounded, shadow, offset_x, offset_y, padding)[0]


def compose_with_layout(
    rounded: np.ndarray,
    shadow: np.ndarray,
    offset_x: int,
    offset_y: int,
    padding: int | None = None,
) -> tuple[np.ndarray, Layout]:
    """Same as compose() but also returns the Layout used."""
    validate_raster(rounded, "rounded")
    validate_raster(shadow, "shadow")

    inferred = infer_padding(rounded, shadow)
    if padding is None:
        padding = inferred
    elif padding != inferred:
        raise InvalidDimensions(
            f"Padding {padding} does not match shadow layer padding {inferred}"
        )

    width, height = raster_size(rounded)
    layout = compute_layout(width, height, int(offset_x), int(offset_y), padding)

    canvas = new_raster(layout.canvas_width, layout.canvas_height)
    alpha_over(canvas, shadow, layout.shadow_x, layout.shadow_y)
    alpha_over(canvas, rounded, layout.source_x, layout.source_y)
    return canvas, layout
