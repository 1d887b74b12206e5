"""
roundshadow - Rounded corners and drop shadows for raster images
================================================================

Takes a decoded RGBA image, rounds its corners and composites a soft
drop shadow behind it.

Main modules:
- roundshadow.processing: Corner rounding and shadow synthesis
- roundshadow.postprocess: Shadow finishing operations
- roundshadow.compositing: Canvas layout and alpha-over compositing
- roundshadow.pipeline: The end-to-end driver
- roundshadow.core: Configuration, errors, rasters and image I/O

Quick start:
    >>> from roundshadow import PipelineConfig, run_pipeline, load_image, save_png
    >>> config = PipelineConfig(radius=12)
    >>> result = run_pipeline(load_image("input.jpg"), config)
    >>> save_png("output.png", result.image)
"""

__version__ = "0.1.0"

# Convenience imports
from roundshadow.core.config import PipelineConfig, ShadowParams
from roundshadow.core.errors import RoundShadowError
from roundshadow.core.image_io import load_image, save_png
from roundshadow.processing import round_corners, synthesize_shadow
from roundshadow.compositing import compose
from roundshadow.pipeline import run_pipeline, process_bytes, PipelineResult

__all__ = [
    "__version__",
    "PipelineConfig",
    "ShadowParams",
    "RoundShadowError",
    "load_image",
    "save_png",
    "round_corners",
    "synthesize_shadow",
    "compose",
    "run_pipeline",
    "process_bytes",
    "PipelineResult",
]
