"""
Post-processing module - Shadow finishing operations.

Available operations:
- soften_edges: Power curve on alpha that smooths blur fringes
- edge_fade: Attenuate alpha towards the raster border

To add new operations, edit roundshadow/postprocess/operations.py and use
the @register_operation decorator.
"""

from roundshadow.postprocess.operations import (
    register_operation,
    get_operations,
    get_operation,
    describe_operation,
    apply_operation,
    # Built-in operations
    soften_edges,
    edge_fade,
)

__all__ = [
    "register_operation",
    "get_operations",
    "get_operation",
    "describe_operation",
    "apply_operation",
    "soften_edges",
    "edge_fade",
]
