"""Placement transform shared by the live preview and the final page canvas.

Both canvases go through :func:`compute_transform`; only the target's
density and origin differ. That single derivation is what keeps the
preview and the saved PDF in agreement.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pagestamp.utils.units import PU_PER_INCH, mm_to_pixels

if TYPE_CHECKING:  # pragma: no cover
    from pagestamp.app.placement import PlacementSnapshot
    from pagestamp.app.resolution import StampResolution

Rect = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """2D affine map ``(x, y) -> (a*x + c*y + e, b*x + d*y + f)``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(e=tx, f=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> AffineTransform:
        return cls(a=sx, d=sx if sy is None else sy)

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def concat(self, other: AffineTransform) -> AffineTransform:
        """Return the transform that applies ``other`` first, then ``self``."""
        return AffineTransform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def map_rect(self, width: float, height: float) -> Rect:
        """Axis-aligned bounds of the ``(0, 0, width, height)`` box after mapping."""
        corners = [self.apply(x, y) for x in (0.0, width) for y in (0.0, height)]
        xs = [x for x, _ in corners]
        ys = [y for _, y in corners]
        return (min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True, slots=True)
class RenderTarget:
    """A canvas to draw the stamp onto.

    ``density`` is the canvas's pixels per inch; ``origin_x``/``origin_y`` is
    where the visible page's top-left corner sits on the canvas, in canvas
    pixels.
    """

    density: float
    origin_x: float = 0.0
    origin_y: float = 0.0

    @classmethod
    def page_canvas(cls) -> RenderTarget:
        """The visible page as displayed, one pixel per page-space unit."""
        return cls(density=PU_PER_INCH)

    @classmethod
    def preview(cls, density: float) -> RenderTarget:
        """A raster of the visible page, as produced by the preview renderer."""
        return cls(density=float(density))


def compute_transform(
    snapshot: PlacementSnapshot,
    target: RenderTarget,
    resolution: StampResolution,
) -> AffineTransform:
    """Map stamp-image pixels to ``target`` pixels for the given placement.

    The stamp is scaled by ``scale * target_density / stamp_density`` and then
    translated to its position, converted to target pixels and shifted by the
    target's origin.
    """
    assert math.isfinite(target.density) and target.density > 0, (
        f"target density must be > 0, got {target.density!r}"
    )
    draw_scale = snapshot.scale * (1.0 / resolution.density) * target.density
    tx = mm_to_pixels(snapshot.x_mm, target.density) + target.origin_x
    ty = mm_to_pixels(snapshot.y_mm, target.density) + target.origin_y
    return AffineTransform.translation(tx, ty).concat(AffineTransform.scaling(draw_scale))


def stamp_bounds(
    snapshot: PlacementSnapshot,
    target: RenderTarget,
    resolution: StampResolution,
    width_px: int,
    height_px: int,
) -> Rect:
    """Where a ``width_px`` x ``height_px`` stamp lands on ``target``."""
    return compute_transform(snapshot, target, resolution).map_rect(width_px, height_px)
