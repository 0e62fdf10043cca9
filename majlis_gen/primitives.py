"""Primitive shape types for majlis generation.

Patterns and furniture are composed from a handful of primitives. Each
primitive carries a color *role* rather than a color: the renderer resolves
roles against the active StyleConfig palette, except for the fixed
decorative roles (INK, GOLD, WHITE, PANEL) which always map to the same
constant.

Coordinate convention:
    - Y-up, furniture faces the room in the XZ plane
    - Flat shapes (QUAD, CIRCLE, POLYGON, CONE) lie in their local XY
      plane with +Z as the face normal

Size convention (matches MuJoCo half-extents):
    - BOX: (half_x, half_y, half_z)
    - QUAD: (half_w, half_h, 0)
    - CIRCLE: (radius, 0, 0)
    - POLYGON: (circumradius, 0, 0) -- with Prim.sides vertices
    - CONE: (base_radius, half_height, 0) -- apex toward +Y, 3 sides
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from majlis_gen.errors import InvalidColor


class Shape(Enum):
    """Primitive shape kinds."""

    BOX = "box"
    QUAD = "quad"
    CIRCLE = "circle"
    POLYGON = "polygon"
    CONE = "cone"


class ColorRole(Enum):
    """Which palette entry (or fixed constant) fills a primitive."""

    BASE = "base"  # mattress fabric
    BACKREST = "backrest"
    ACCENT = "accent"  # armrests, towers
    PATTERN = "pattern"  # embroidery
    FLOOR = "floor"
    WALL = "wall"

    # Fixed decorative constants, not user-configurable
    INK = "ink"
    GOLD = "gold"
    WHITE = "white"
    PANEL = "panel"


@dataclass(frozen=True)
class Prim:
    """A single primitive positioned relative to its owner's origin.

    Attributes:
        shape: Shape kind
        size: Size parameters, meaning depends on shape (see module doc)
        pos: Position relative to owner origin (x, y, z)
        fill: Color role
        euler: Rotation in radians (roll, pitch, yaw), default (0, 0, 0)
        sides: Vertex count for POLYGON and CONE, 0 otherwise
    """

    shape: Shape
    size: tuple[float, float, float]
    pos: tuple[float, float, float]
    fill: ColorRole
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)
    sides: int = 0

    def scaled(
        self,
        factor: float,
        offset: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> Prim:
        """Uniformly scale size and position about the origin, then translate."""
        return Prim(
            self.shape,
            tuple(s * factor for s in self.size),
            tuple(p * factor + o for p, o in zip(self.pos, offset)),
            self.fill,
            self.euler,
            self.sides,
        )


# ---------------------------------------------------------------------------
# Fixed decorative colors
# ---------------------------------------------------------------------------

INK = (0.067, 0.067, 0.067, 1.0)  # #111
GOLD = (0.831, 0.686, 0.216, 1.0)  # #d4af37
WHITE = (1.0, 1.0, 1.0, 1.0)
PANEL = (0.133, 0.133, 0.133, 1.0)  # #222

FIXED_COLORS: dict[ColorRole, tuple[float, float, float, float]] = {
    ColorRole.INK: INK,
    ColorRole.GOLD: GOLD,
    ColorRole.WHITE: WHITE,
    ColorRole.PANEL: PANEL,
}


def to_rgba(color) -> tuple[float, float, float, float]:
    """Parse a palette color: "#rgb", "#rrggbb" or an RGB(A) tuple in [0, 1]."""
    if isinstance(color, str):
        h = color.strip().lstrip("#")
        if len(h) == 3:
            h = "".join(c * 2 for c in h)
        if len(h) != 6:
            raise InvalidColor(f"Not a hex color: {color!r}")
        try:
            r, g, b = (int(h[i : i + 2], 16) / 255 for i in (0, 2, 4))
        except ValueError:
            raise InvalidColor(f"Not a hex color: {color!r}") from None
        return (r, g, b, 1.0)

    if isinstance(color, (tuple, list)) and len(color) in (3, 4):
        try:
            values = tuple(float(c) for c in color)
        except (TypeError, ValueError):
            raise InvalidColor(f"Not a color tuple: {color!r}") from None
        if not all(0.0 <= c <= 1.0 for c in values):
            raise InvalidColor(f"Color components must be in [0, 1]: {color!r}")
        return values if len(values) == 4 else (*values, 1.0)

    raise InvalidColor(f"Unsupported color value: {color!r}")


# ---------------------------------------------------------------------------
# Quaternion utilities (for composing nested transforms)
# ---------------------------------------------------------------------------


def euler_to_quat(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """Euler angles (XYZ extrinsic) to quaternion (w, x, y, z)."""
    cr, sr = np.cos(roll / 2), np.sin(roll / 2)
    cp, sp = np.cos(pitch / 2), np.sin(pitch / 2)
    cy, sy = np.cos(yaw / 2), np.sin(yaw / 2)
    return np.array(
        [
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ]
    )


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product of two quaternions (w, x, y, z)."""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ]
    )


def quat_rotate(q: np.ndarray, v) -> np.ndarray:
    """Rotate a 3D vector by a unit quaternion (w, x, y, z)."""
    w, x, y, z = q
    u = np.array([x, y, z])
    v = np.asarray(v, dtype=float)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def yaw_quat(angle: float) -> np.ndarray:
    """Rotation about the vertical (+Y) axis."""
    return euler_to_quat(0.0, angle, 0.0)


IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])

HALF_PI = math.pi / 2
