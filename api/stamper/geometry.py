"""Placement geometry: relative UI rectangles to PDF drawing coordinates.

Relative coordinates are fractions of the page with the origin at the top-left
corner. Absolute coordinates are PDF points with the origin at the bottom-left
corner. Nothing here performs I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import DegenerateGeometryError, EmptyImageError


@dataclass(frozen=True)
class PlacementRequest:
    relative_x: float
    relative_y: float
    relative_width: float
    relative_height: float
    page_index: int = 1  # 1-based


@dataclass(frozen=True)
class PageGeometry:
    width_points: float
    height_points: float


@dataclass(frozen=True)
class AbsoluteBox:
    x: float
    y: float  # bottom edge
    width: float
    height: float
    fallback_applied: bool = False


@dataclass(frozen=True)
class ImageDimensions:
    width: float
    height: float


@dataclass(frozen=True)
class DrawInstruction:
    x: float
    y: float
    width: float
    height: float

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class PlacementPolicy:
    """Sanitization thresholds applied by :func:`to_absolute_box`.

    Fallback ratios are fractions of the page width (x, width) and page
    height (height cap).
    """

    clamp_min: float = 0.0
    clamp_max: float = 1.0
    fallback_x_ratio: float = 0.15
    fallback_width_ratio: float = 0.20
    fallback_height_ratio: float = 0.10


DEFAULT_POLICY = PlacementPolicy()


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def to_absolute_box(
    placement: PlacementRequest,
    page: PageGeometry,
    policy: PlacementPolicy = DEFAULT_POLICY,
) -> AbsoluteBox:
    """Convert a relative top-left placement into a bottom-left point box.

    Position is clamped to the policy range; size is not. When the resulting
    left edge sits at or past the right edge of the page the box is replaced
    by the policy fallback so the stamp stays visible, and the returned box
    has ``fallback_applied`` set.
    """
    rel_x = _clamp(placement.relative_x, policy.clamp_min, policy.clamp_max)
    rel_y = _clamp(placement.relative_y, policy.clamp_min, policy.clamp_max)

    x = rel_x * page.width_points
    width = placement.relative_width * page.width_points
    height = placement.relative_height * page.height_points
    top_y = rel_y * page.height_points

    fallback = x >= page.width_points
    if fallback:
        x = policy.fallback_x_ratio * page.width_points
        width = policy.fallback_width_ratio * page.width_points
        height = min(height, policy.fallback_height_ratio * page.height_points)

    bottom_y = page.height_points - (top_y + height)
    return AbsoluteBox(x=x, y=bottom_y, width=width, height=height, fallback_applied=fallback)


def fit_centered(target: AbsoluteBox, image: ImageDimensions) -> DrawInstruction:
    """Largest aspect-preserving rectangle for ``image`` centred in ``target``."""
    if image.width <= 0 or image.height <= 0:
        raise EmptyImageError(
            f"signature image has zero dimensions ({image.width}x{image.height})"
        )
    if not all(math.isfinite(v) for v in (target.x, target.y, target.width, target.height)):
        raise DegenerateGeometryError(
            f"placement box is not finite (x={target.x}, y={target.y}, "
            f"{target.width}x{target.height} points)"
        )
    if target.width <= 0 or target.height <= 0:
        raise DegenerateGeometryError(
            f"placement box has zero area ({target.width}x{target.height} points)"
        )

    box_ratio = target.width / target.height
    image_ratio = image.width / image.height

    if image_ratio > box_ratio:
        final_width = target.width
        final_height = final_width / image_ratio
    else:
        final_height = target.height
        final_width = final_height * image_ratio

    offset_x = (target.width - final_width) / 2
    offset_y = (target.height - final_height) / 2
    return DrawInstruction(
        x=target.x + offset_x,
        y=target.y + offset_y,
        width=final_width,
        height=final_height,
    )
