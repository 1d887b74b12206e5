#!/usr/bin/env python3
"""
Minimal Example: roundshadow API Usage
======================================

Shows the essential API calls without extra boilerplate.
This is the "quick reference" version.
"""

import sys

from roundshadow import PipelineConfig, ShadowParams, load_image, run_pipeline, save_png
from roundshadow.processing import round_corners, synthesize_shadow
from roundshadow.compositing import compose


input_path = sys.argv[1] if len(sys.argv) > 1 else "input.png"


# =============================================================================
# ONE CALL
# Equivalent to: roundshadow -i input.png -o framed.png -r 12 --offset=10,14
# =============================================================================

config = PipelineConfig(
    radius=12,
    shadow=ShadowParams(offset_x=10, offset_y=14, alpha=120, spread=16),
)

image = load_image(input_path)
result = run_pipeline(image, config)
save_png("framed.png", result.image)
print(f"framed.png: {result.size[0]}x{result.size[1]}, layout {result.layout.to_dict()}")


# =============================================================================
# STAGE BY STAGE
# Same result, with each layer available for inspection
# =============================================================================

rounded = round_corners(image, 12)
shadow = synthesize_shadow(rounded, blur_radius=5, spread=16, alpha=120, edge_fade=True)
canvas = compose(rounded, shadow, 10, 14)

save_png("rounded.png", rounded)
save_png("shadow.png", shadow)
save_png("framed_faded.png", canvas)
print("Wrote rounded.png, shadow.png, framed_faded.png")
