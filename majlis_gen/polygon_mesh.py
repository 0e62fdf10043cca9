"""Flat prism meshes for polygon and triangle motifs.

MuJoCo has no polygon geom type. Pattern motifs that are regular polygons
(diamonds, stars, octagons) or triangles are drawn as thin prisms built
here and registered as mesh assets by the assembler.

Convention:
    - The prism is centered at the origin, face normal along +Z
    - Outline in the XY plane, extruded from z = -half_t to z = +half_t
    - Regular polygons have their first vertex on +X, so an unrotated
      4-gon is a diamond
"""

from __future__ import annotations

import numpy as np

# Extrusion half-thickness: thin enough to read as a decal
HALF_THICKNESS = 0.0005

START_ANGLE = 0.0


def polygon_outline(sides: int, radius: float) -> np.ndarray:
    """XY outline of a regular polygon with a vertex at START_ANGLE."""
    if sides < 3:
        raise ValueError(f"A polygon needs at least 3 sides, got {sides}")
    angles = START_ANGLE + np.linspace(0, 2 * np.pi, sides, endpoint=False)
    return np.stack([np.cos(angles) * radius, np.sin(angles) * radius], axis=1)


def triangle_outline(base_radius: float, half_height: float) -> np.ndarray:
    """XY outline of an upright isosceles triangle (cone silhouette)."""
    return np.array(
        [
            [-base_radius, -half_height],
            [base_radius, -half_height],
            [0.0, half_height],
        ]
    )


def prism_faces(n: int) -> list[int]:
    """Face indices for an n-sided prism (constant topology per n).

    Vertex layout: bottom ring [0, n), top ring [n, 2n), bottom center 2n,
    top center 2n + 1.
    """
    faces: list[int] = []
    bc = n * 2
    tc = n * 2 + 1
    for i in range(n):
        j = (i + 1) % n
        # Bottom cap
        faces.extend([bc, j, i])
        # Top cap
        faces.extend([tc, i + n, j + n])
        # Side quad as 2 triangles
        faces.extend([i, j, j + n])
        faces.extend([i, j + n, i + n])
    return faces


def prism_verts(outline: np.ndarray, half_t: float = HALF_THICKNESS) -> np.ndarray:
    """Extrude an XY outline into prism vertices.

    Returns:
        ndarray of shape (2 * len(outline) + 2, 3).
    """
    n = len(outline)
    verts = np.empty((n * 2 + 2, 3), dtype=np.float64)

    verts[:n, :2] = outline
    verts[:n, 2] = -half_t

    verts[n : 2 * n, :2] = outline
    verts[n : 2 * n, 2] = half_t

    center = outline.mean(axis=0)
    verts[-2] = [center[0], center[1], -half_t]
    verts[-1] = [center[0], center[1], half_t]
    return verts
