"""Geometric motifs embroidered onto strips.

Each pattern family maps to a small tuple of flat primitives normalized to
a unit cell centered on the origin. The strip generator scales a cell to
the strip's cell size and repeats it along the strip.

=== HOW TO ADD A PATTERN ===

1. Add a member to `Pattern`
2. Write a `_pattern_name()` builder returning a tuple of Prims
3. Register it in `_BUILDERS` (and a label in `PATTERN_LABELS`)

The registry must stay total over `Pattern`; tests check this.

Usage:
    from majlis_gen.patterns import Pattern, get_tile_geometry

    prims = get_tile_geometry(Pattern.SADU)
    prims = get_tile_geometry("Royal")   # strings are parsed
"""

from __future__ import annotations

import math
from enum import Enum
from functools import lru_cache

from majlis_gen.errors import UnknownPattern
from majlis_gen.primitives import ColorRole, Prim, Shape


class Pattern(str, Enum):
    """The closed set of pattern families."""

    SADU = "Sadu"
    NAJDI = "Najdi"
    ROYAL = "Royal"
    DAMASCUS = "Damascus"
    KUFIC = "Kufic"
    MODERN = "Modern"
    NONE = "None"

    @classmethod
    def parse(cls, value: Pattern | str | None) -> Pattern:
        """Look up a pattern by value ("Sadu") or member name ("SADU").

        None maps to Pattern.NONE. Anything else raises UnknownPattern.
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            member = cls.__members__.get(value.upper())
            if member is not None:
                return member
        raise UnknownPattern(value, known=tuple(p.value for p in cls))

    def __str__(self) -> str:
        return self.value


PATTERN_LABELS: dict[Pattern, str] = {
    Pattern.SADU: "Sadu (Diamonds)",
    Pattern.NAJDI: "Najdi (Triangles)",
    Pattern.ROYAL: "Royal (Islamic Star)",
    Pattern.DAMASCUS: "Damascus (Floral)",
    Pattern.KUFIC: "Kufic (Geometric)",
    Pattern.MODERN: "Modern (Lines)",
    Pattern.NONE: "None",
}

# The motifs were drawn on a 0.25m cell; dimensions below are in meters of
# that design cell and normalized by _cell().
_DESIGN_CELL = 0.25

# Layer offset toward the viewer for inlays drawn on top of a motif
_LAYER = 0.001

_QUARTER_TURN = (0.0, 0.0, math.pi / 4)


def _cell(*values: float) -> tuple[float, ...]:
    return tuple(v / _DESIGN_CELL for v in values)


def _quad(
    w: float,
    h: float,
    x: float = 0.0,
    y: float = 0.0,
    z: float = 0.0,
    fill: ColorRole = ColorRole.PATTERN,
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Prim:
    """Quad of full width w and height h, in design-cell meters."""
    return Prim(Shape.QUAD, _cell(w / 2, h / 2, 0.0), _cell(x, y, z), fill, euler)


def _sadu() -> tuple[Prim, ...]:
    """Traditional diamond with a dark eye."""
    return (
        _quad(0.15, 0.15, euler=_QUARTER_TURN),
        _quad(0.075, 0.075, z=_LAYER, fill=ColorRole.INK, euler=_QUARTER_TURN),
    )


def _najdi() -> tuple[Prim, ...]:
    """Sawtooth: an upright triangle above an inverted one."""
    size = _cell(0.08, 0.075, 0.0)
    return (
        Prim(Shape.CONE, size, _cell(0.0, 0.05, 0.0), ColorRole.PATTERN, sides=3),
        Prim(
            Shape.CONE,
            size,
            _cell(0.0, -0.05, 0.0),
            ColorRole.PATTERN,
            euler=(0.0, 0.0, math.pi),
            sides=3,
        ),
    )


def _royal() -> tuple[Prim, ...]:
    """Eight-point Islamic star from two squares, gold octagon center."""
    r = _cell(0.08, 0.0, 0.0)
    return (
        Prim(Shape.POLYGON, r, (0.0, 0.0, 0.0), ColorRole.PATTERN, _QUARTER_TURN, 4),
        Prim(Shape.POLYGON, r, (0.0, 0.0, 0.0), ColorRole.PATTERN, sides=4),
        Prim(
            Shape.POLYGON,
            _cell(0.04, 0.0, 0.0),
            _cell(0.0, 0.0, _LAYER),
            ColorRole.GOLD,
            sides=8,
        ),
    )


def _damascus() -> tuple[Prim, ...]:
    """Floral cluster: four petals around a white center."""
    petal = _cell(0.04, 0.0, 0.0)
    petals = tuple(
        Prim(Shape.CIRCLE, petal, _cell(dx, dy, 0.0), ColorRole.PATTERN)
        for dx, dy in ((0.05, 0.05), (-0.05, 0.05), (0.05, -0.05), (-0.05, -0.05))
    )
    center = Prim(
        Shape.CIRCLE, _cell(0.03, 0.0, 0.0), _cell(0.0, 0.0, _LAYER), ColorRole.WHITE
    )
    return (*petals, center)


def _kufic() -> tuple[Prim, ...]:
    """Geometric block: a square frame of four bars."""
    return (
        _quad(0.04, 0.18, x=-0.05),
        _quad(0.04, 0.18, x=0.05),
        _quad(0.1, 0.04, y=0.07),
        _quad(0.1, 0.04, y=-0.07),
    )


def _modern() -> tuple[Prim, ...]:
    return (
        _quad(0.01, 0.22, x=-0.02),
        _quad(0.01, 0.22, x=0.02),
    )


def _none() -> tuple[Prim, ...]:
    return ()


_BUILDERS = {
    Pattern.SADU: _sadu,
    Pattern.NAJDI: _najdi,
    Pattern.ROYAL: _royal,
    Pattern.DAMASCUS: _damascus,
    Pattern.KUFIC: _kufic,
    Pattern.MODERN: _modern,
    Pattern.NONE: _none,
}


@lru_cache(maxsize=16)
def _tile_geometry(pattern: Pattern) -> tuple[Prim, ...]:
    return _BUILDERS[pattern]()


def get_tile_geometry(pattern: Pattern | str) -> tuple[Prim, ...]:
    """Unit-cell primitives for one tile of a pattern.

    Pattern.NONE yields an empty tuple; the strip's panel and borders are
    still drawn by the caller. Unknown identifiers raise UnknownPattern.
    """
    return _tile_geometry(Pattern.parse(pattern))


def list_patterns() -> list[Pattern]:
    """All patterns in declaration order."""
    return list(Pattern)
