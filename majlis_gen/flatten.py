"""Flatten a FurniturePlan into world-space primitives, and describe it.

The plan is a tree of local frames (section -> armrest slot -> strip ->
tile). flatten_plan() walks the tree and composes the transforms so a
renderer only has to draw a flat list. Every primitive is tagged with its
owner ("BACK/mattress_strip", "corner_0", ...); the part before the first
"/" is the section name a renderer uses for hover highlighting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from majlis_gen.primitives import (
    IDENTITY_QUAT,
    Prim,
    euler_to_quat,
    quat_multiply,
    quat_rotate,
    yaw_quat,
)
from majlis_gen.room import FurniturePlan
from majlis_gen.section import MountedStrip, SectionPlan, armrest_origin
from majlis_gen.strip import StripPlan


@dataclass(frozen=True)
class PlacedPrim:
    """A primitive in world space (Y-up).

    Attributes:
        tag: Owner path, e.g. "LEFT/armrest_2"
        prim: Shape, size, fill and sides; prim.pos/euler are superseded
        pos: World position (x, y, z)
        quat: World orientation (w, x, y, z)
    """

    tag: str
    prim: Prim
    pos: tuple[float, float, float]
    quat: tuple[float, float, float, float]

    @property
    def group(self) -> str:
        """The top-level owner (section name for section parts)."""
        return self.tag.split("/", 1)[0]


@dataclass(frozen=True, eq=False)
class _Frame:
    pos: np.ndarray
    quat: np.ndarray

    def child(self, pos, euler=(0.0, 0.0, 0.0)) -> _Frame:
        q = self.quat
        if any(euler):
            q = quat_multiply(q, euler_to_quat(*euler))
        return _Frame(self.pos + quat_rotate(self.quat, pos), q)

    def place(self, tag: str, prim: Prim) -> PlacedPrim:
        f = self.child(prim.pos, prim.euler)
        return PlacedPrim(
            tag=tag,
            prim=prim,
            pos=tuple(float(v) for v in f.pos),
            quat=tuple(float(v) for v in f.quat),
        )


_WORLD = _Frame(np.zeros(3), IDENTITY_QUAT)


def _ground_frame(x: float, z: float, rotation: float = 0.0) -> _Frame:
    return _Frame(np.array([x, 0.0, z]), yaw_quat(rotation))


def _strip_prims(tag: str, frame: _Frame, mounted: MountedStrip) -> list[PlacedPrim]:
    sf = frame.child(mounted.pos, mounted.euler)
    return [sf.place(tag, p) for p in mounted.strip.primitives()]


def flatten_section(section: SectionPlan) -> list[PlacedPrim]:
    """World-space primitives of one section."""
    name = section.name
    frame = _ground_frame(section.origin[0], section.origin[1], section.rotation)

    out = [frame.place(f"{name}/body", p) for p in section.bodies]
    out.extend(_strip_prims(f"{name}/mattress_strip", frame, section.mattress_strip))
    if section.backrest_strip is not None:
        tag = f"{name}/backrest_strip"
        out.extend(_strip_prims(tag, frame, section.backrest_strip))

    for slot in section.armrest_slots:
        tag = f"{name}/armrest_{slot.index}"
        sf = frame.child(armrest_origin(slot))
        out.extend(sf.place(tag, p) for p in slot.bodies)
        out.extend(_strip_prims(tag, sf, slot.strip))
    return out


def flatten_plan(plan: FurniturePlan) -> list[PlacedPrim]:
    """Every primitive of the plan in world space, in draw order."""
    out = [_WORLD.place("floor", plan.floor)]
    out.extend(_WORLD.place("carpet", p) for p in plan.carpet.primitives())

    for section in plan.sections:
        out.extend(flatten_section(section))

    for corner in plan.corners:
        frame = _ground_frame(*corner.position)
        out.extend(frame.place(f"corner_{corner.index}", p) for p in corner.bodies)

    cp = plan.centerpiece
    frame = _ground_frame(*cp.position)
    out.extend(frame.place("centerpiece", p) for p in cp.bodies)
    return out


# ---------------------------------------------------------------------------
# Plan description
# ---------------------------------------------------------------------------


def describe_section(section: SectionPlan) -> str:
    """One-line description of a section."""
    x, z = section.origin
    rot_deg = math.degrees(section.rotation)
    return (
        f"{section.name:<5} at ({x:+.2f}, {z:+.2f}) rot {rot_deg:+.0f}°  "
        f"length={section.length:.2f}  dividers={len(section.armrest_slots)}  "
        f"pillows={section.pillow_count}  "
        f"tiles={section.mattress_strip.strip.repeat_count}"
    )


def describe_plan(plan: FurniturePlan) -> str:
    """Multi-line textual description of a plan.

    Example output:
        Majlis 4.00 x 3.50  patterns: mattress=Sadu backrest=Royal armrest=Najdi
          BACK  at (+0.00, -1.75) rot +0°  length=4.00  dividers=4  pillows=4  tiles=16
          ...
    """
    p = plan.patterns
    lines = [
        f"Majlis {plan.room.width:.2f} x {plan.room.depth:.2f}  "
        f"patterns: mattress={p.mattress} backrest={p.backrest} armrest={p.armrest}"
    ]
    for section in plan.sections:
        lines.append(f"  {describe_section(section)}")
    for corner in plan.corners:
        x, z = corner.position
        lines.append(f"  tower {corner.index} at ({x:+.2f}, {z:+.2f})")
    lines.append(f"  {plan.centerpiece.kind} at center")
    (ow, od), (iw, id_) = plan.carpet.outer, plan.carpet.inner
    lines.append(f"  carpet {ow:.2f} x {od:.2f}, inlay {iw:.2f} x {id_:.2f}")
    lines.append(f"  {len(flatten_plan(plan))} primitives")
    for msg in plan.diagnostics:
        lines.append(f"  ! {msg}")
    return "\n".join(lines)


def flatten_strip(
    strip: StripPlan,
    pos: tuple[float, float, float] = (0.0, 0.0, 0.0),
    tag: str = "strip",
) -> list[PlacedPrim]:
    """A lone strip in world space, facing +Z, centered at pos."""
    frame = _WORLD.child(pos)
    return [frame.place(tag, p) for p in strip.primitives()]
