"""Tests for configuration snapshots and theme presets."""

import pytest

from majlis_gen.config import RoomConfig, StyleConfig
from majlis_gen.errors import ConfigError, InvalidColor, InvalidDimension
from majlis_gen.patterns import Pattern
from majlis_gen.primitives import FIXED_COLORS, ColorRole, to_rgba
from majlis_gen.room import generate
from majlis_gen.themes import ATTACHMENTS, THEMES, Theme, get, list_themes

# ---------------------------------------------------------------------------
# RoomConfig / StyleConfig
# ---------------------------------------------------------------------------


class TestRoomConfig:
    def test_defaults(self):
        room = RoomConfig()
        assert (room.width, room.depth) == (4.0, 3.5)

    def test_equal_rooms_hash_equal(self):
        assert RoomConfig(4, 3.5) == RoomConfig(4.0, 3.5)
        assert hash(RoomConfig(4, 3.5)) == hash(RoomConfig(4.0, 3.5))

    @pytest.mark.parametrize(
        "width, depth",
        [(0.0, 3.5), (-1.0, 3.5), (4.0, 0.0), (float("nan"), 3.5), ("wide", 3.5)],
    )
    def test_invalid_dimensions(self, width, depth):
        with pytest.raises(InvalidDimension):
            RoomConfig(width=width, depth=depth)

    def test_to_dict(self):
        assert RoomConfig(5.0, 4.0).to_dict() == {"width": 5.0, "depth": 4.0}


class TestStyleConfig:
    def test_defaults(self):
        style = StyleConfig()
        assert style.mattress_pattern is Pattern.SADU
        assert style.backrest_pattern is Pattern.ROYAL
        assert style.armrest_pattern is Pattern.NAJDI
        assert style.centerpiece == "table"

    def test_pattern_names_normalized(self):
        style = StyleConfig(mattress_pattern="kufic", armrest_pattern="NONE")
        assert style.mattress_pattern is Pattern.KUFIC
        assert style.armrest_pattern is Pattern.NONE
        assert style == StyleConfig(
            mattress_pattern=Pattern.KUFIC, armrest_pattern=Pattern.NONE
        )

    def test_unknown_pattern_kept_until_layout(self):
        style = StyleConfig(backrest_pattern="Bogus")
        assert style.backrest_pattern == "Bogus"
        with pytest.raises(ValueError):
            style.validate_patterns()

    def test_palette_resolves_every_role(self):
        palette = StyleConfig().palette()
        assert set(palette) == set(ColorRole)
        assert palette[ColorRole.BASE] == to_rgba("#006064")
        for role, rgba in FIXED_COLORS.items():
            assert palette[role] == rgba

    def test_color_tuples_accepted(self):
        style = StyleConfig(base_color=[0.1, 0.2, 0.3])
        assert style.base_color == (0.1, 0.2, 0.3)
        assert style.palette()[ColorRole.BASE] == (0.1, 0.2, 0.3, 1.0)
        hash(style)

    @pytest.mark.parametrize("color", ["#12345", "teal", "#gggggg", (2.0, 0, 0), 7])
    def test_invalid_color(self, color):
        with pytest.raises(InvalidColor):
            StyleConfig(pattern_color=color)

    def test_invalid_centerpiece(self):
        with pytest.raises(ConfigError):
            StyleConfig(centerpiece="sofa")

    def test_from_mapping(self):
        style = StyleConfig.from_mapping(
            {"mattress_pattern": "Damascus", "base_color": "#333"}
        )
        assert style.mattress_pattern is Pattern.DAMASCUS
        assert style.palette()[ColorRole.BASE] == to_rgba("#333333")

    def test_from_mapping_with_theme(self):
        style = StyleConfig.from_mapping({"theme": "royal", "armrest_pattern": "Kufic"})
        royal = THEMES["royal"].style
        assert style.mattress_pattern is royal.mattress_pattern
        assert style.base_color == royal.base_color
        assert style.armrest_pattern is Pattern.KUFIC

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ConfigError, match="sofa_color"):
            StyleConfig.from_mapping({"sofa_color": "#fff"})

    def test_from_mapping_rejects_unknown_theme(self):
        with pytest.raises(ConfigError):
            StyleConfig.from_mapping({"theme": "baroque"})

    def test_to_dict_round_trips(self):
        style = THEMES["modern"].style
        assert StyleConfig.from_mapping(style.to_dict()) == style


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------


class TestThemes:
    @pytest.fixture(params=list_themes())
    def theme_name(self, request):
        return request.param

    def test_expected_themes(self):
        assert list_themes() == ["classic", "heritage", "modern", "royal"]

    def test_theme_valid(self, theme_name):
        theme = get(theme_name)
        assert isinstance(theme, Theme)
        assert theme.name
        assert all(a in ATTACHMENTS for a in theme.attachments)
        theme.style.validate_patterns()

    def test_theme_generates_clean_plan(self, theme_name):
        plan = generate(RoomConfig(), get(theme_name).style)
        assert plan.diagnostics == ()
        assert len(plan.sections) == 3

    def test_themes_share_layout(self):
        # Themes change patterns and colors, never positions
        plans = [generate(RoomConfig(), t.style) for t in THEMES.values()]
        origins = {tuple(s.origin for s in p.sections) for p in plans}
        slots = {tuple(len(s.armrest_slots) for s in p.sections) for p in plans}
        assert len(origins) == 1
        assert len(slots) == 1

    def test_unknown_theme(self):
        with pytest.raises(KeyError):
            get("baroque")

    def test_unknown_attachment_rejected(self):
        with pytest.raises(ValueError):
            Theme("Odd", StyleConfig(), attachments=("fountain",))
