"""
Geometry for the route maps.

Airports carry abstract ``(x, y, z)`` map coordinates. The flat network map
uses a plan view of x/y; the competitive map rotates the scene around the
vertical axis and applies a simple perspective divide. Everything here is
stateless: positions in, screen coordinates and SVG path strings out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

NETWORK_PALETTE = {"negative": "#E53935", "weak": "#FFC107", "strong": "#4CAF50"}
COMPETITIVE_PALETTE = {"negative": "#ff3333", "weak": "#ffcc00", "strong": "#00ff66"}


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Viewport width and height must be positive.")

    @property
    def center(self) -> Point:
        return self.width / 2, self.height / 2

    @property
    def short_side(self) -> float:
        return min(self.width, self.height)


def _as_positions(positions: Iterable[Sequence[float]]) -> np.ndarray:
    array = np.asarray(list(positions), dtype=float)
    if array.size == 0:
        return np.empty((0, 3))
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError("Positions must be (x, y, z) triples.")
    return array


def project_flat(positions: Iterable[Sequence[float]], viewport: Viewport) -> np.ndarray:
    """Plan-view projection; returns an ``(n, 2)`` array of screen x/y."""
    pts = _as_positions(positions)
    scale = viewport.short_side / 10
    cx, cy = viewport.center
    screen = np.empty((len(pts), 2))
    screen[:, 0] = cx + pts[:, 0] * scale
    screen[:, 1] = cy - pts[:, 1] * scale
    return screen


def project_perspective(
    positions: Iterable[Sequence[float]],
    rotation: float,
    perspective: float,
    viewport: Viewport,
) -> np.ndarray:
    """
    Rotate around the vertical axis, then perspective-project.

    Returns an ``(n, 4)`` array of ``screen x, screen y, rotated z, scale``.
    The rotated z is kept so callers can depth-sort. Raises ``ValueError``
    for a non-finite rotation or perspective and when a point sits on or
    behind the camera plane.
    """
    if not (np.isfinite(rotation) and np.isfinite(perspective)):
        raise ValueError("Rotation and perspective must be finite numbers.")
    pts = _as_positions(positions)
    cos_r, sin_r = np.cos(rotation), np.sin(rotation)
    x, y, z = pts[:, 0], pts[:, 1], pts[:, 2]
    rotated_x = x * cos_r - z * sin_r
    rotated_z = z * cos_r + x * sin_r

    denominator = perspective + rotated_z
    if np.any(denominator <= 0):
        raise ValueError("Perspective distance places a point behind the camera.")
    scale = perspective / denominator

    view_scale = viewport.short_side / 12
    cx, cy = viewport.center
    projected = np.empty((len(pts), 4))
    projected[:, 0] = cx + rotated_x * scale * view_scale
    projected[:, 1] = cy - y * scale * view_scale
    projected[:, 2] = rotated_z
    projected[:, 3] = scale
    return projected


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def quadratic_arc_path(start: Point, end: Point, curvature: float = 0.2) -> str:
    """SVG quadratic curve bowed perpendicular to the chord."""
    (sx, sy), (ex, ey) = start, end
    dx, dy = ex - sx, ey - sy
    distance = float(np.hypot(dx, dy))
    if distance == 0:
        return f"M {_fmt(sx)},{_fmt(sy)} L {_fmt(ex)},{_fmt(ey)}"
    mid_x, mid_y = (sx + ex) / 2, (sy + ey) / 2
    # Unit perpendicular (-dy, dx) / |d| scaled by |d| * curvature.
    control_x = mid_x - dy * curvature
    control_y = mid_y + dx * curvature
    return (
        f"M {_fmt(sx)},{_fmt(sy)} "
        f"Q {_fmt(control_x)},{_fmt(control_y)} {_fmt(ex)},{_fmt(ey)}"
    )


def elevated_arc_path(start: Point, end: Point, curvature: float = 0.3, segments: int = 20) -> str:
    """Polyline approximation of a quadratic Bezier lifted above the chord."""
    if segments < 1:
        raise ValueError("segments must be at least 1")
    (sx, sy), (ex, ey) = start, end
    mid_x = (sx + ex) / 2
    control_y = (sy + ey) / 2 - float(np.hypot(ex - sx, ey - sy)) * curvature

    t = np.arange(1, segments + 1) / segments
    mt = 1 - t
    xs = sx * mt**2 + mid_x * 2 * mt * t + ex * t**2
    ys = sy * mt**2 + control_y * 2 * mt * t + ey * t**2

    parts = [f"M {_fmt(sx)},{_fmt(sy)}"]
    parts.extend(f"L {_fmt(px)},{_fmt(py)}" for px, py in zip(xs, ys))
    return " ".join(parts)


def depth_sort(items: Iterable[Mapping[str, Any]], key: str = "z") -> List[Mapping[str, Any]]:
    """Farthest first (largest depth), ties keep their input order."""
    return sorted(items, key=lambda item: -float(item[key]))


def route_color(profitability: float, palette: Mapping[str, str] = NETWORK_PALETTE) -> str:
    if profitability < 0:
        return palette["negative"]
    if profitability < 0.5:
        return palette["weak"]
    return palette["strong"]


def stroke_width(volume: float, factor: float = 0.5, maximum: float = 5) -> float:
    return float(max(1, min(maximum, volume * factor)))


def node_radius(traffic: float | None, scale: float) -> float:
    base = max(4, min(12, (traffic or 5) * 0.8))
    return float(base * scale)


def node_opacity(scale: float) -> float:
    return float(min(1, max(0.3, scale * 1.5)))


def competitor_markers(
    start: Point, end: Point, competitors: Sequence[Mapping[str, Any]]
) -> List[Dict[str, Any]]:
    """Markers spaced evenly along the chord, sized by share and coloured by efficiency."""
    (sx, sy), (ex, ey) = start, end
    markers = []
    for index, competitor in enumerate(competitors):
        position = (index + 1) / (len(competitors) + 1)
        efficiency = competitor["efficiency"]
        if efficiency > 0.8:
            color = "#00ffcc"
        elif efficiency > 0.5:
            color = "#ffcc00"
        else:
            color = "#ff3333"
        markers.append(
            {
                "name": competitor["name"],
                "x": round(sx + (ex - sx) * position, 2),
                "y": round(sy + (ey - sy) * position, 2),
                "radius": float(max(4, min(12, competitor["marketShare"] * 20))),
                "color": color,
            }
        )
    return markers
