"""Configuration for majlis generation.

Two frozen snapshots drive a generation pass: RoomConfig (dimensions) and
StyleConfig (patterns and palette). Both are hashable so a whole plan can
be cached on the pair; any change produces a new snapshot and a full
regeneration.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Literal, Mapping

from majlis_gen.errors import ConfigError, UnknownPattern, require_positive
from majlis_gen.patterns import Pattern
from majlis_gen.primitives import FIXED_COLORS, ColorRole, to_rgba
from majlis_gen.section import SectionPatterns

Centerpiece = Literal["table", "tv_unit"]
CENTERPIECES = ("table", "tv_unit")


@dataclass(frozen=True)
class RoomConfig:
    """Room dimensions in meters."""

    width: float = 4.0
    depth: float = 3.5

    def __post_init__(self):
        # Normalize to float so equal rooms hash equal (4 vs 4.0)
        object.__setattr__(self, "width", require_positive("width", self.width))
        object.__setattr__(self, "depth", require_positive("depth", self.depth))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StyleConfig:
    """Per-part patterns and the palette.

    Pattern fields accept a Pattern or its name. Unknown names are kept as
    given and surface during layout, where they are substituted or raised
    depending on the strict flag.
    """

    mattress_pattern: Pattern | str = Pattern.SADU
    backrest_pattern: Pattern | str = Pattern.ROYAL
    armrest_pattern: Pattern | str = Pattern.NAJDI

    base_color: str | tuple = "#006064"  # mattress fabric
    backrest_color: str | tuple = "#004d40"
    accent_color: str | tuple = "#00838f"  # armrests, towers
    pattern_color: str | tuple = "#e0f7fa"  # embroidery
    floor_color: str | tuple = "#f0f0f0"
    wall_color: str | tuple = "#fdfcf5"

    centerpiece: Centerpiece = "table"

    def __post_init__(self):
        for f in fields(self):
            if f.name.endswith("_pattern"):
                value = getattr(self, f.name)
                # Known names become Pattern members so equal styles hash equal
                try:
                    object.__setattr__(self, f.name, Pattern.parse(value))
                except UnknownPattern:
                    pass
            elif f.name.endswith("_color"):
                value = getattr(self, f.name)
                to_rgba(value)
                if isinstance(value, list):
                    object.__setattr__(self, f.name, tuple(value))
        if self.centerpiece not in CENTERPIECES:
            raise ConfigError(
                f"centerpiece must be one of {', '.join(CENTERPIECES)}, "
                f"got {self.centerpiece!r}"
            )

    @property
    def section_patterns(self) -> SectionPatterns:
        return SectionPatterns(
            mattress=self.mattress_pattern,
            backrest=self.backrest_pattern,
            armrest=self.armrest_pattern,
        )

    def validate_patterns(self) -> None:
        """Raise UnknownPattern if any part names an unknown pattern."""
        for f in fields(self):
            if f.name.endswith("_pattern"):
                Pattern.parse(getattr(self, f.name))

    def palette(self) -> dict[ColorRole, tuple[float, float, float, float]]:
        """Resolve every color role to RGBA."""
        colors = {
            ColorRole.BASE: to_rgba(self.base_color),
            ColorRole.BACKREST: to_rgba(self.backrest_color),
            ColorRole.ACCENT: to_rgba(self.accent_color),
            ColorRole.PATTERN: to_rgba(self.pattern_color),
            ColorRole.FLOOR: to_rgba(self.floor_color),
            ColorRole.WALL: to_rgba(self.wall_color),
        }
        colors.update(FIXED_COLORS)
        return colors

    def to_dict(self) -> dict:
        d = asdict(self)
        for key in ("mattress_pattern", "backrest_pattern", "armrest_pattern"):
            d[key] = str(d[key])
        return d

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StyleConfig:
        """Build a StyleConfig from recognized keys; the rest default.

        A "theme" key seeds defaults from the theme table before the other
        keys are applied. Unknown keys raise ConfigError.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known - {"theme"})
        if unknown:
            raise ConfigError(f"Unknown style fields: {', '.join(unknown)}")

        base = cls()
        if "theme" in data:
            from majlis_gen.themes import get as get_theme

            try:
                base = get_theme(data["theme"]).style
            except KeyError:
                raise ConfigError(f"Unknown theme {data['theme']!r}") from None

        overrides = {k: v for k, v in data.items() if k != "theme"}
        return replace(base, **overrides)
