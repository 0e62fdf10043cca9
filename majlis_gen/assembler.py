"""Builds a MuJoCo model from a FurniturePlan.

The plan is Y-up; MuJoCo is Z-up. Every world-space primitive is rotated
+90 degrees about X on the way in, so plan (x, y, z) becomes MuJoCo
(x, -z, y): the back wall ends up on +Y and the seating faces -Y.

Primitive mapping:
    BOX      -> box geom
    QUAD     -> thin box geom
    CIRCLE   -> thin cylinder geom
    POLYGON  -> thin prism mesh (polygon_mesh)
    CONE     -> thin triangular prism mesh

All geoms are static, visual-only children of the worldbody. Hover state
belongs to the caller: pass `highlight` with a section name to tint that
section's primitives.

Usage:
    plan = generate(RoomConfig(), style)
    spec = build_spec(plan, style, highlight="BACK")
    model = spec.compile()
"""

from __future__ import annotations

import logging
from typing import Iterable

import mujoco
import numpy as np

from majlis_gen.config import StyleConfig
from majlis_gen.flatten import PlacedPrim, flatten_plan
from majlis_gen.polygon_mesh import (
    polygon_outline,
    prism_faces,
    prism_verts,
    triangle_outline,
)
from majlis_gen.primitives import (
    ColorRole,
    Prim,
    Shape,
    euler_to_quat,
    quat_multiply,
    quat_rotate,
)
from majlis_gen.room import SECTION_NAMES, FurniturePlan
from majlis_gen.section import MATTRESS_DEPTH
from majlis_gen.themes import REFLECTIVE_FLOOR, WALLS, Theme

log = logging.getLogger(__name__)

# Half-thickness given to flat shapes
FLAT_HALF_THICKNESS = 0.0005

WALL_HEIGHT = 2.5
WALL_HALF_THICKNESS = 0.08
# Walls stand just behind the seating
WALL_GAP = MATTRESS_DEPTH / 2 + 0.05

FLOOR_REFLECTANCE = 0.25

# Highlighted primitives are blended this far toward the highlight color
HIGHLIGHT_MIX = 0.35
HIGHLIGHT_COLOR = (1.0, 0.95, 0.6)

DEFAULT_OFFSCREEN = (1280, 960)

RGBA = tuple[float, float, float, float]

_Y_UP_TO_Z_UP = euler_to_quat(np.pi / 2, 0.0, 0.0)


def to_z_up(
    pos: Iterable[float], quat: Iterable[float]
) -> tuple[np.ndarray, np.ndarray]:
    """Convert a Y-up world pose to MuJoCo's Z-up frame."""
    return (
        quat_rotate(_Y_UP_TO_Z_UP, list(pos)),
        quat_multiply(_Y_UP_TO_Z_UP, np.asarray(list(quat), dtype=float)),
    )


def tint(rgba: RGBA) -> RGBA:
    """Blend a color toward the highlight color, keeping alpha."""
    r, g, b, a = rgba
    m = HIGHLIGHT_MIX
    hr, hg, hb = HIGHLIGHT_COLOR
    return (r + (hr - r) * m, g + (hg - g) * m, b + (hb - b) * m, a)


def wall_prims(plan: FurniturePlan) -> list[PlacedPrim]:
    """Back and side walls enclosing the seating (the "walls" attachment)."""
    w, d = plan.room.width, plan.room.depth
    hh = WALL_HEIGHT / 2
    t = WALL_HALF_THICKNESS
    back_z = -d / 2 - WALL_GAP - t
    side_x = w / 2 + WALL_GAP + t
    half_span_x = side_x + t
    # Side walls run from the back wall to the open front edge
    half_span_z = (d / 2 - back_z) / 2
    side_z = (back_z + d / 2) / 2
    identity = (1.0, 0.0, 0.0, 0.0)

    def wall(size, pos):
        prim = Prim(Shape.BOX, size, pos, ColorRole.WALL)
        return PlacedPrim("wall", prim, pos, identity)

    return [
        wall((half_span_x, hh, t), (0.0, hh, back_z)),
        wall((t, hh, half_span_z), (-side_x, hh, side_z)),
        wall((t, hh, half_span_z), (side_x, hh, side_z)),
    ]


class _MeshCache:
    """Registers each distinct prism shape once as a mesh asset."""

    def __init__(self, spec: mujoco.MjSpec):
        self.spec = spec
        self._names: dict[tuple, str] = {}

    def get(self, prim: Prim) -> str:
        if prim.shape == Shape.CONE:
            key = ("cone", round(prim.size[0], 6), round(prim.size[1], 6))
            outline = triangle_outline(prim.size[0], prim.size[1])
        else:
            key = ("polygon", prim.sides, round(prim.size[0], 6))
            outline = polygon_outline(prim.sides, prim.size[0])

        name = self._names.get(key)
        if name is None:
            name = f"prism_{len(self._names)}"
            mesh = self.spec.add_mesh()
            mesh.name = name
            verts = prism_verts(outline, FLAT_HALF_THICKNESS)
            mesh.uservert = verts.flatten().tolist()
            mesh.userface = prism_faces(len(outline))
            self._names[key] = name
        return name


def _is_degenerate(prim: Prim) -> bool:
    """True when a size the shape depends on is non-positive."""
    if prim.shape == Shape.BOX:
        needed = prim.size
    elif prim.shape in (Shape.QUAD, Shape.CONE):
        needed = prim.size[:2]
    else:
        needed = prim.size[:1]
    return any(s <= 0 for s in needed)


def add_prims(
    spec: mujoco.MjSpec,
    prims: Iterable[PlacedPrim],
    palette: dict[ColorRole, RGBA],
    highlight: str | None = None,
    floor_material: str | None = None,
) -> int:
    """Add world-space primitives to the spec's worldbody.

    Returns the number of geoms added. Degenerate primitives (e.g. a carpet
    inset in a very small room) are skipped.
    """
    meshes = _MeshCache(spec)
    added = 0
    for i, pp in enumerate(prims):
        prim = pp.prim
        if _is_degenerate(prim):
            log.debug(
                "skipping degenerate %s in %s: size=%s",
                prim.shape.value,
                pp.tag,
                prim.size,
            )
            continue

        pos, quat = to_z_up(pp.pos, pp.quat)
        geom = spec.worldbody.add_geom()
        geom.name = f"{pp.tag}:{i}"
        geom.pos = pos.tolist()
        geom.quat = quat.tolist()
        geom.contype = 0
        geom.conaffinity = 0

        if prim.shape == Shape.BOX:
            geom.type = mujoco.mjtGeom.mjGEOM_BOX
            geom.size = list(prim.size)
        elif prim.shape == Shape.QUAD:
            geom.type = mujoco.mjtGeom.mjGEOM_BOX
            geom.size = [prim.size[0], prim.size[1], FLAT_HALF_THICKNESS]
        elif prim.shape == Shape.CIRCLE:
            geom.type = mujoco.mjtGeom.mjGEOM_CYLINDER
            geom.size = [prim.size[0], FLAT_HALF_THICKNESS, 0.0]
        else:
            geom.type = mujoco.mjtGeom.mjGEOM_MESH
            geom.meshname = meshes.get(prim)

        rgba = palette[prim.fill]
        if highlight is not None and pp.group == highlight:
            rgba = tint(rgba)
        geom.rgba = list(rgba)

        if floor_material is not None and pp.tag == "floor":
            geom.material = floor_material
        added += 1
    return added


def new_spec(offscreen: tuple[int, int] = DEFAULT_OFFSCREEN) -> mujoco.MjSpec:
    """Empty Z-up spec with a key light and an offscreen buffer."""
    spec = mujoco.MjSpec()
    spec.modelname = "majlis"
    spec.visual.global_.offwidth = max(spec.visual.global_.offwidth, offscreen[0])
    spec.visual.global_.offheight = max(spec.visual.global_.offheight, offscreen[1])
    spec.visual.headlight.ambient = [0.45, 0.45, 0.45]
    spec.visual.headlight.diffuse = [0.35, 0.35, 0.35]

    light = spec.worldbody.add_light()
    light.name = "key"
    light.pos = [3.0, -4.0, 6.0]
    light.dir = [-0.4, 0.5, -1.0]
    light.diffuse = [0.7, 0.7, 0.65]
    light.castshadow = True
    return spec


def build_spec(
    plan: FurniturePlan,
    style: StyleConfig = StyleConfig(),
    highlight: str | None = None,
    theme: Theme | None = None,
    offscreen: tuple[int, int] = DEFAULT_OFFSCREEN,
) -> mujoco.MjSpec:
    """Build an uncompiled MuJoCo spec drawing the whole plan.

    Args:
        plan: Furniture plan from generate().
        style: Palette used to resolve color roles.
        highlight: Section name (BACK/LEFT/RIGHT) to tint, or None.
        theme: Supplies cosmetic attachments (walls, reflective floor).
            The palette still comes from `style`.
        offscreen: Minimum offscreen framebuffer (width, height).
    """
    if highlight is not None and highlight not in SECTION_NAMES:
        raise ValueError(
            f"highlight must be one of {', '.join(SECTION_NAMES)}, "
            f"got {highlight!r}"
        )
    attachments = theme.attachments if theme is not None else ()

    spec = new_spec(offscreen)

    floor_material = None
    if REFLECTIVE_FLOOR in attachments:
        mat = spec.add_material()
        mat.name = "floor"
        mat.reflectance = FLOOR_REFLECTANCE
        floor_material = mat.name

    prims = flatten_plan(plan)
    if WALLS in attachments:
        prims.extend(wall_prims(plan))

    n = add_prims(spec, prims, style.palette(), highlight, floor_material)
    log.info("assembled %d geoms (%d meshes)", n, len(spec.meshes))
    return spec
