"""
Canvas layout for shadow compositing.

Works out how large the output canvas must be and where the shadow layer
and the source go so that the shadow silhouette is displaced from the
source by exactly the requested offset and neither layer is clipped.
"""

from dataclasses import dataclass

from roundshadow.core.raster import check_canvas_size


@dataclass(frozen=True)
class Layout:
    """Placement of the two layers on the output canvas."""
    canvas_width: int
    canvas_height: int
    shadow_x: int
    shadow_y: int
    source_x: int
    source_y: int
    padding: int

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Canvas size as (width, height)."""
        return (self.canvas_width, self.canvas_height)

    @property
    def shadow_origin(self) -> tuple[int, int]:
        return (self.shadow_x, self.shadow_y)

    @property
    def source_origin(self) -> tuple[int, int]:
        return (self.source_x, self.source_y)

    def to_dict(self) -> dict:
        """Convert to dictionary for reporting."""
        return {
            "canvas": [self.canvas_width, self.canvas_height],
            "shadow": [self.shadow_x, self.shadow_y],
            "source": [self.source_x, self.source_y],
            "padding": self.padding,
        }


def _place_axis(padding: int, offset: int) -> tuple[int, int]:
    """
    Origins of (shadow layer, source) along one axis.

    The silhouette sits ``padding`` pixels inside the shadow layer and must
    land at ``source + offset``, so the source goes at
    ``shadow + padding - offset``. Whichever origin would be negative is
    pinned to 0 and the other is pushed along.
    """
    base = padding - offset
    if base >= 0:
        return 0, base
    return -base, 0


def compute_layout(
    width: int,
    height: int,
    offset_x: int,
    offset_y: int,
    padding: int,
) -> Layout:
    """
    Compute the canvas layout for a source of the given size.

    The canvas is ``width + |offset_x| + 2 * padding`` by
    ``height + |offset_y| + 2 * padding``.

    Raises:
        InvalidDimensions: If the canvas would be empty or too large
    """
    canvas_width = width + abs(offset_x) + 2 * padding
    canvas_height = height + abs(offset_y) + 2 * padding
    check_canvas_size(canvas_width, canvas_height)

    shadow_x, source_x = _place_axis(padding, offset_x)
    shadow_y, source_y = _place_axis(padding, offset_y)

    return Layout(
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        shadow_x=shadow_x,
        shadow_y=shadow_y,
        source_x=source_x,
        source_y=source_y,
        padding=padding,
    )
