"""
Pipeline driver.

Runs the three stages on one image:

    source --round_corners--> rounded --synthesize_shadow--> shadow
    (rounded, shadow) --compose--> canvas

The driver owns no state between runs; everything it needs comes in
through a PipelineConfig.
"""

from dataclasses import dataclass, field

import numpy as np

from roundshadow.compositing.compositor import compose_with_layout
from roundshadow.compositing.layout import Layout
from roundshadow.core.config import PipelineConfig
from roundshadow.core.image_io import decode_image, encode_png
from roundshadow.core.raster import raster_size, validate_raster
from roundshadow.processing.corners import round_corners
from roundshadow.processing.shadow import synthesize_shadow


@dataclass
class PipelineResult:
    """Result of a pipeline run."""
    image: np.ndarray
    rounded: np.ndarray
    shadow: np.ndarray
    layout: Layout
    config: PipelineConfig = field(default_factory=PipelineConfig)

    @property
    def size(self) -> tuple[int, int]:
        """Output size as (width, height)."""
        return raster_size(self.image)


def run_pipeline(image: np.ndarray, config: PipelineConfig | None = None) -> PipelineResult:
    """
    Round the corners of an image and composite a drop shadow behind it.

    Args:
        image: Source RGBA raster (H, W, 4) uint8
        config: Pipeline parameters (defaults when None)

    Returns:
        PipelineResult holding the final canvas and intermediate layers

    Raises:
        RoundShadowError: If the image or a parameter is structurally invalid
    """
    if config is None:
        config = PipelineConfig()
    validate_raster(image, "source")
    params = config.shadow

    rounded = round_corners(image, config.radius)
    shadow = synthesize_shadow(
        rounded,
        blur_radius=params.blur_radius,
        spread=params.spread,
        alpha=params.alpha,
        edge_fade=params.edge_fade,
        fade_exponent=params.fade_exponent,
        soften_power=params.soften_power,
    )
    canvas, layout = compose_with_layout(rounded, shadow, params.offset_x, params.offset_y)

    return PipelineResult(
        image=canvas,
        rounded=rounded,
        shadow=shadow,
        layout=layout,
        config=config,
    )


def process_bytes(data: bytes, config: PipelineConfig | None = None) -> bytes:
    """Decode image bytes, run the pipeline and return PNG bytes."""
    image = decode_image(data)
    result = run_pipeline(image, config)
    return encode_png(result.image)
