"""Procedural majlis seating layouts.

Generates a U-shaped majlis (floor seating with backrests, armrest
dividers and pillows, corner towers, a centerpiece and a carpet) from room
dimensions and a style. Layout is pure: frozen configs in, an immutable
FurniturePlan out, cached per config pair. Rendering to MuJoCo is a
separate step.

Usage:
    from majlis_gen import RoomConfig, StyleConfig, generate, describe_plan

    plan = generate(RoomConfig(width=4.0, depth=3.5), StyleConfig())
    print(describe_plan(plan))
    prims = flatten_plan(plan)         # world-space primitives for a renderer
"""

from majlis_gen.config import RoomConfig, StyleConfig
from majlis_gen.errors import (
    ConfigError,
    InvalidColor,
    InvalidDimension,
    MajlisError,
    UnknownPattern,
)
from majlis_gen.flatten import PlacedPrim, describe_plan, flatten_plan
from majlis_gen.patterns import Pattern, get_tile_geometry
from majlis_gen.primitives import ColorRole, Prim, Shape
from majlis_gen.room import FurniturePlan, generate, layout_room
from majlis_gen.section import SectionPatterns, layout_section
from majlis_gen.strip import generate_strip

__all__ = [
    "RoomConfig",
    "StyleConfig",
    "FurniturePlan",
    "SectionPatterns",
    "Pattern",
    "Prim",
    "Shape",
    "ColorRole",
    "PlacedPrim",
    "generate",
    "layout_room",
    "layout_section",
    "generate_strip",
    "get_tile_geometry",
    "flatten_plan",
    "describe_plan",
    "MajlisError",
    "InvalidDimension",
    "UnknownPattern",
    "InvalidColor",
    "ConfigError",
]
