"""Room layout: composes wall sections, corner towers and centerpiece.

World frame (Y-up):
    - Room centered on the origin, width along X, depth along Z
    - The back wall is at z = -depth/2, the open side toward +Z
    - Every section's local +Z front faces the room center

The back section spans the full width. Side sections are shortened by
CORNER_CLEARANCE so they stop short of the back section; the back corners
are taken by the towers instead.

Usage:
    plan = layout_room(RoomConfig(width=4.0, depth=3.5), StyleConfig())
    [s.length for s in plan.sections]   # [4.0, 2.65, 2.65]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from majlis_gen.config import RoomConfig, StyleConfig
from majlis_gen.errors import InvalidDimension, UnknownPattern, require_positive
from majlis_gen.patterns import Pattern
from majlis_gen.primitives import ColorRole, Prim, Shape
from majlis_gen.section import SectionPatterns, SectionPlan, layout_section, piping

log = logging.getLogger(__name__)

CORNER_CLEARANCE = 0.85

# Corner tower (mada'a): fixed size, independent of the room
TOWER_SIZE = (0.85, 0.75, 0.85)
TOWER_INLAY = 0.6

# Centerpieces
TABLE_SIZE = (1.2, 0.35, 1.2)
TABLE_TOP = 1.0
TV_CABINET_SIZE = (1.6, 0.45, 0.45)
TV_SCREEN_SIZE = (1.2, 0.7)

# Carpet layers shrink from the room size; the inner layer is the inlay
CARPET_INSET = 1.5
CARPET_INNER_INSET = 1.8
CARPET_Y = 0.01
CARPET_INNER_Y = 0.015

# Floor plane extends past the room on every side
FLOOR_MARGIN = 6.0
FLOOR_Y = -0.05

SECTION_NAMES = ("BACK", "LEFT", "RIGHT")

# Lays a flat shape (normal +Z) onto the floor (normal +Y)
_FLAT = (-math.pi / 2, 0.0, 0.0)


@dataclass(frozen=True)
class CornerPlan:
    """A corner tower at one of the back corners."""

    index: int
    position: tuple[float, float]
    bodies: tuple[Prim, ...]


@dataclass(frozen=True)
class CenterpiecePlan:
    """The free-standing piece at the room center."""

    kind: str
    position: tuple[float, float]
    bodies: tuple[Prim, ...]


@dataclass(frozen=True)
class CarpetPlan:
    """Nested floor carpet. Sizes are not clamped and may be non-positive."""

    outer: tuple[float, float]
    inner: tuple[float, float]

    def primitives(self) -> tuple[Prim, ...]:
        (ow, od), (iw, id_) = self.outer, self.inner
        return (
            Prim(
                Shape.QUAD,
                (ow / 2, od / 2, 0.0),
                (0.0, CARPET_Y, 0.0),
                ColorRole.BASE,
                _FLAT,
            ),
            Prim(
                Shape.QUAD,
                (iw / 2, id_ / 2, 0.0),
                (0.0, CARPET_INNER_Y, 0.0),
                ColorRole.PATTERN,
                _FLAT,
            ),
        )


@dataclass(frozen=True)
class FurniturePlan:
    """The complete furniture plan for one room/style snapshot.

    Rebuilt wholesale on every configuration change; never mutated.
    `diagnostics` lists recoverable problems (e.g. substituted patterns).
    """

    room: RoomConfig
    sections: tuple[SectionPlan, ...]
    corners: tuple[CornerPlan, ...]
    centerpiece: CenterpiecePlan
    carpet: CarpetPlan
    floor: Prim
    patterns: SectionPatterns
    diagnostics: tuple[str, ...] = ()

    def section(self, name: str) -> SectionPlan:
        """Look up a section by its tag. Raises KeyError if not found."""
        for s in self.sections:
            if s.name == name:
                return s
        raise KeyError(name)


def _tower_bodies() -> tuple[Prim, ...]:
    w, h, d = TOWER_SIZE
    center = (0.0, h / 2, 0.0)
    return (
        Prim(Shape.BOX, (w / 2, h / 2, d / 2), center, ColorRole.ACCENT),
        *piping(w, h, d, center),
        Prim(
            Shape.QUAD,
            (TOWER_INLAY / 2, TOWER_INLAY / 2, 0.0),
            (0.0, h + 0.01, 0.0),
            ColorRole.PATTERN,
            _FLAT,
        ),
    )


def _centerpiece_bodies(kind: str) -> tuple[Prim, ...]:
    if kind == "tv_unit":
        w, h, d = TV_CABINET_SIZE
        sw, sh = TV_SCREEN_SIZE
        return (
            Prim(Shape.BOX, (w / 2, h / 2, d / 2), (0.0, h / 2, 0.0), ColorRole.ACCENT),
            # Screen faces the back section
            Prim(
                Shape.QUAD,
                (sw / 2, sh / 2, 0.0),
                (0.0, h + sh / 2 + 0.05, 0.0),
                ColorRole.INK,
                (0.0, math.pi, 0.0),
            ),
        )

    w, h, d = TABLE_SIZE
    return (
        Prim(Shape.BOX, (w / 2, h / 2, d / 2), (0.0, h / 2, 0.0), ColorRole.PATTERN),
        Prim(
            Shape.QUAD,
            (TABLE_TOP / 2, TABLE_TOP / 2, 0.0),
            (0.0, h + 0.01, 0.0),
            ColorRole.INK,
            _FLAT,
        ),
    )


def _resolve_pattern(
    part: str,
    value: Pattern | str,
    strict: bool,
    diagnostics: list[str],
) -> Pattern:
    """Parse a part's pattern, substituting NONE for unknown names unless strict."""
    try:
        return Pattern.parse(value)
    except UnknownPattern as exc:
        if strict:
            raise
        msg = f"{part}: unknown pattern {exc.value!r}, substituted None"
        log.warning(msg)
        diagnostics.append(msg)
        return Pattern.NONE


def layout_room(
    room: RoomConfig,
    style: StyleConfig = StyleConfig(),
    strict: bool = False,
) -> FurniturePlan:
    """Compose the full furniture plan for a room.

    Pure and cached on the (frozen) config pair: identical inputs return
    equal plans.

    Raises:
        InvalidDimension: width/depth not positive and finite, or depth too
            small to leave a positive side section after corner clearance.
        UnknownPattern: only when strict=True.
    """
    return _layout_room(room, style, strict)


@lru_cache(maxsize=32)
def _layout_room(room: RoomConfig, style: StyleConfig, strict: bool) -> FurniturePlan:
    width = require_positive("width", room.width)
    depth = require_positive("depth", room.depth)

    side_len = depth - CORNER_CLEARANCE
    if side_len <= 0:
        raise InvalidDimension("depth - corner clearance", side_len)

    diagnostics: list[str] = []
    requested = style.section_patterns
    patterns = SectionPatterns(
        *(
            _resolve_pattern(part, getattr(requested, part), strict, diagnostics)
            for part in ("mattress", "backrest", "armrest")
        )
    )

    side_offset = width / 2
    back_offset = depth / 2

    sections = (
        layout_section(width, patterns, "BACK", (0.0, -back_offset), 0.0),
        layout_section(side_len, patterns, "LEFT", (-side_offset, 0.0), math.pi / 2),
        layout_section(side_len, patterns, "RIGHT", (side_offset, 0.0), -math.pi / 2),
    )

    tower = _tower_bodies()
    corners = (
        CornerPlan(0, (-side_offset, -back_offset), tower),
        CornerPlan(1, (side_offset, -back_offset), tower),
    )

    centerpiece = CenterpiecePlan(
        kind=style.centerpiece,
        position=(0.0, 0.0),
        bodies=_centerpiece_bodies(style.centerpiece),
    )

    carpet = CarpetPlan(
        outer=(width - CARPET_INSET, depth - CARPET_INSET),
        inner=(width - CARPET_INNER_INSET, depth - CARPET_INNER_INSET),
    )
    if min(*carpet.outer, *carpet.inner) <= 0:
        log.debug("carpet inset is degenerate for %.2f x %.2f room", width, depth)

    floor = Prim(
        Shape.QUAD,
        ((width + FLOOR_MARGIN) / 2, (depth + FLOOR_MARGIN) / 2, 0.0),
        (0.0, FLOOR_Y, 0.0),
        ColorRole.FLOOR,
        _FLAT,
    )

    log.debug(
        "room %.2f x %.2f: %s",
        width,
        depth,
        ", ".join(f"{s.name}={len(s.armrest_slots)} slots" for s in sections),
    )

    return FurniturePlan(
        room=room,
        sections=sections,
        corners=corners,
        centerpiece=centerpiece,
        carpet=carpet,
        floor=floor,
        patterns=patterns,
        diagnostics=tuple(diagnostics),
    )


def generate(
    room: RoomConfig,
    style: StyleConfig = StyleConfig(),
    strict: bool = False,
) -> FurniturePlan:
    """Entry point for renderers: the full plan for a room/style snapshot."""
    return layout_room(room, style, strict)
