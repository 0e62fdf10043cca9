"""Named style presets plus optional renderer attachments.

A theme never changes the layout: it picks patterns, a palette and a
centerpiece, and lists cosmetic attachments the renderer may add around
the same FurniturePlan.

Attachments understood by the assembler:
    - "walls":            back and side walls in the wall color
    - "reflective_floor": floor material with reflectance

Usage:
    theme = THEMES["royal"]
    plan = generate(RoomConfig(), theme.style)
"""

from __future__ import annotations

from dataclasses import dataclass

from majlis_gen.config import StyleConfig
from majlis_gen.patterns import Pattern

WALLS = "walls"
REFLECTIVE_FLOOR = "reflective_floor"
ATTACHMENTS = (WALLS, REFLECTIVE_FLOOR)


@dataclass(frozen=True)
class Theme:
    """A named style preset.

    Attributes:
        name: Human-readable theme name
        style: Patterns, palette and centerpiece
        attachments: Cosmetic extras for the renderer (see module doc)
    """

    name: str
    style: StyleConfig
    attachments: tuple[str, ...] = ()

    def __post_init__(self):
        unknown = [a for a in self.attachments if a not in ATTACHMENTS]
        if unknown:
            raise ValueError(f"Unknown attachments: {', '.join(unknown)}")


THEMES: dict[str, Theme] = {
    "classic": Theme(
        name="Classic",
        style=StyleConfig(),
        attachments=(REFLECTIVE_FLOOR,),
    ),
    "royal": Theme(
        name="Royal",
        style=StyleConfig(
            mattress_pattern=Pattern.ROYAL,
            backrest_pattern=Pattern.DAMASCUS,
            armrest_pattern=Pattern.ROYAL,
            base_color="#5b0f1a",
            backrest_color="#4a0c15",
            accent_color="#7a1424",
            pattern_color="#d4af37",
            floor_color="#efe6d2",
            wall_color="#f6efe0",
        ),
        attachments=(WALLS, REFLECTIVE_FLOOR),
    ),
    "heritage": Theme(
        name="Heritage",
        style=StyleConfig(
            mattress_pattern=Pattern.SADU,
            backrest_pattern=Pattern.NAJDI,
            armrest_pattern=Pattern.SADU,
            base_color="#8b1e1e",
            backrest_color="#6d1717",
            accent_color="#1f1a17",
            pattern_color="#f2e6c9",
            floor_color="#c9b79c",
            wall_color="#e8dcc4",
        ),
        attachments=(WALLS,),
    ),
    "modern": Theme(
        name="Modern",
        style=StyleConfig(
            mattress_pattern=Pattern.MODERN,
            backrest_pattern=Pattern.KUFIC,
            armrest_pattern=Pattern.NONE,
            base_color="#3c4043",
            backrest_color="#2f3235",
            accent_color="#5f6368",
            pattern_color="#e8eaed",
            floor_color="#fafafa",
            wall_color="#ffffff",
            centerpiece="tv_unit",
        ),
        attachments=(WALLS,),
    ),
}


def list_themes() -> list[str]:
    """List available theme names."""
    return sorted(THEMES.keys())


def get(name: str) -> Theme:
    """Get a theme by name. Raises KeyError if not found."""
    return THEMES[name]
