"""
Compositing module - Canvas layout and alpha-over compositing.
"""

from roundshadow.compositing.layout import Layout, compute_layout
from roundshadow.compositing.compositor import (
    alpha_over,
    compose,
    compose_with_layout,
    infer_padding,
)

__all__ = [
    "Layout",
    "compute_layout",
    "alpha_over",
    "compose",
    "compose_with_layout",
    "infer_padding",
]
