"""Pattern strips: decorative bands tiled with one pattern family.

A strip is a dark background panel, a row of pattern tiles and two white
border lines, all lying in the strip's local XY plane (X along the strip,
+Z toward the viewer). The strip is centered on its origin.

The panel and the tiles are inset by STRIP_MARGIN, while the border lines
span the full requested length.

Usage:
    strip = generate_strip(2.0, pattern="Sadu")
    strip.repeat_count        # 8
    strip.primitives()        # flat tuple of Prims in the strip frame
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from majlis_gen.errors import require_positive
from majlis_gen.patterns import Pattern, get_tile_geometry
from majlis_gen.primitives import ColorRole, Prim, Shape

CELL_SIZE = 0.25
STRIP_MARGIN = 0.1
STRIP_HEIGHT = 0.25
BORDER_THICKNESS = 0.01
# Border centerlines sit this far inside the strip's top/bottom edge
BORDER_INSET = 0.005

# Offsets toward the viewer so layers don't z-fight
BORDER_LIFT = 0.001
TILE_LIFT = 0.002


@dataclass(frozen=True)
class TileInstance:
    """One repetition of a pattern along a strip.

    Attributes:
        offset: Tile center along the strip axis (strip frame, before scale)
        pattern: Pattern family
        scale: Factor mapping unit-cell geometry into the strip frame
    """

    offset: float
    pattern: Pattern
    scale: float

    def primitives(self) -> tuple[Prim, ...]:
        """Tile geometry placed at this instance's offset."""
        lift = (self.offset, 0.0, TILE_LIFT)
        geometry = get_tile_geometry(self.pattern)
        return tuple(p.scaled(self.scale, lift) for p in geometry)


@dataclass(frozen=True)
class StripPlan:
    """A fully tiled strip.

    `scale` is the strip's own group scale, applied about its center to
    every element by primitives(). All other fields are unscaled.
    """

    pattern: Pattern
    length: float
    cell_size: float
    scale: float
    repeat_count: int
    tiles: tuple[TileInstance, ...]
    panel: Prim
    borders: tuple[Prim, Prim]

    @property
    def tile_offsets(self) -> tuple[float, ...]:
        return tuple(t.offset for t in self.tiles)

    @property
    def panel_length(self) -> float:
        return self.panel.size[0] * 2

    @property
    def border_length(self) -> float:
        return self.borders[0].size[0] * 2

    def primitives(self) -> tuple[Prim, ...]:
        """Panel, tiles and borders as Prims in the strip frame (scaled)."""
        prims: list[Prim] = [self.panel]
        for tile in self.tiles:
            prims.extend(tile.primitives())
        prims.extend(self.borders)
        if self.scale == 1.0:
            return tuple(prims)
        return tuple(p.scaled(self.scale) for p in prims)


def tile_offsets(length: float, repeat_count: int) -> list[float]:
    """Tile centers spread evenly over the margined length, symmetric about 0."""
    usable = length - STRIP_MARGIN
    step = usable / repeat_count
    return [-usable / 2 + step / 2 + i * step for i in range(repeat_count)]


def generate_strip(
    length: float,
    cell_size: float = CELL_SIZE,
    pattern: Pattern | str | None = Pattern.NONE,
    scale: float = 1.0,
) -> StripPlan:
    """Tile one pattern family across a strip of the given length.

    repeat_count = max(1, floor(length / cell_size)), so a strip shorter
    than a cell still carries one centered tile.

    Raises:
        InvalidDimension: length, cell_size or scale not positive and finite.
        UnknownPattern: pattern outside the enumeration.
    """
    length = require_positive("length", length)
    cell_size = require_positive("cell_size", cell_size)
    scale = require_positive("scale", scale)
    return _build_strip(length, cell_size, Pattern.parse(pattern), scale)


@lru_cache(maxsize=256)
def _build_strip(
    length: float, cell_size: float, pattern: Pattern, scale: float
) -> StripPlan:
    repeat_count = max(1, math.floor(length / cell_size))

    tiles = tuple(
        TileInstance(offset=x, pattern=pattern, scale=cell_size)
        for x in tile_offsets(length, repeat_count)
    )

    panel = Prim(
        Shape.QUAD,
        ((length - STRIP_MARGIN) / 2, STRIP_HEIGHT / 2, 0.0),
        (0.0, 0.0, 0.0),
        ColorRole.PANEL,
    )

    border_y = STRIP_HEIGHT / 2 - BORDER_INSET
    border_size = (length / 2, BORDER_THICKNESS / 2, 0.0)
    borders = (
        Prim(Shape.QUAD, border_size, (0.0, border_y, BORDER_LIFT), ColorRole.WHITE),
        Prim(Shape.QUAD, border_size, (0.0, -border_y, BORDER_LIFT), ColorRole.WHITE),
    )

    return StripPlan(
        pattern=pattern,
        length=length,
        cell_size=cell_size,
        scale=scale,
        repeat_count=repeat_count,
        tiles=tiles,
        panel=panel,
        borders=borders,
    )
