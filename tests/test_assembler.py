"""Tests for the MuJoCo assembler and the command-line entry point.

Validates that:
- Assembled specs compile for default, themed and tiny rooms
- Colors, highlight tint and theme attachments reach the compiled model
- The Y-up -> Z-up conversion puts the floor and back wall where expected
- The CLI describes layouts and maps layout errors to exit status 2
"""

import mujoco
import numpy as np
import pytest
from PIL import Image

from majlis_gen.__main__ import main
from majlis_gen.assembler import (
    HIGHLIGHT_MIX,
    build_spec,
    tint,
    to_z_up,
)
from majlis_gen.config import RoomConfig, StyleConfig
from majlis_gen.flatten import flatten_plan
from majlis_gen.primitives import IDENTITY_QUAT, ColorRole, euler_to_quat
from majlis_gen.render import save_image
from majlis_gen.room import generate
from majlis_gen.themes import THEMES


def _geoms_with_prefix(model, prefix):
    return [i for i in range(model.ngeom) if model.geom(i).name.startswith(prefix)]


@pytest.fixture
def plan():
    return generate(RoomConfig(width=4.0, depth=3.5), StyleConfig())


# ---------------------------------------------------------------------------
# Frame conversion
# ---------------------------------------------------------------------------


class TestZUp:
    def test_position_mapping(self):
        pos, _ = to_z_up((1.0, 2.0, 3.0), IDENTITY_QUAT)
        assert pos == pytest.approx([1.0, -3.0, 2.0])

    def test_flat_shape_faces_up(self):
        # A floor-flat shape in Y-up lies flat in Z-up too
        _, quat = to_z_up((0, 0, 0), euler_to_quat(-np.pi / 2, 0.0, 0.0))
        assert abs(quat[0]) == pytest.approx(1.0)

    def test_tint_moves_toward_highlight(self):
        r, g, b, a = tint((0.0, 0.0, 0.0, 0.5))
        assert r == pytest.approx(HIGHLIGHT_MIX)
        assert a == 0.5


# ---------------------------------------------------------------------------
# Spec assembly
# ---------------------------------------------------------------------------


class TestBuildSpec:
    def test_compiles(self, plan):
        model = build_spec(plan).compile()
        assert model.ngeom > 0
        assert model.nbody == 1

    def test_geom_per_primitive(self, plan):
        model = build_spec(plan).compile()
        # The default room has no degenerate primitives
        assert model.ngeom == len(flatten_plan(plan))

    def test_visual_only(self, plan):
        model = build_spec(plan).compile()
        assert np.all(model.geom_contype == 0)
        assert np.all(model.geom_conaffinity == 0)

    def test_meshes_deduplicated(self, plan):
        model = build_spec(plan).compile()
        mesh_geoms = np.sum(model.geom_type == mujoco.mjtGeom.mjGEOM_MESH)
        assert model.nmesh >= 1
        assert model.nmesh < mesh_geoms

    def test_floor_below_furniture(self, plan):
        model = build_spec(plan).compile()
        floor = model.geom(_geoms_with_prefix(model, "floor")[0])
        assert floor.pos[2] == pytest.approx(-0.05)
        assert floor.rgba == pytest.approx(StyleConfig().palette()[ColorRole.FLOOR])

    def test_back_section_on_positive_y(self, plan):
        model = build_spec(plan).compile()
        back = _geoms_with_prefix(model, "BACK/")
        assert back
        assert all(model.geom_pos[i][1] > 1.0 for i in back)

    def test_palette_applied(self, plan):
        style = StyleConfig(base_color="#ff0000")
        model = build_spec(generate(RoomConfig(), style), style).compile()
        mattress = model.geom(_geoms_with_prefix(model, "BACK/body")[0])
        assert mattress.rgba == pytest.approx([1.0, 0.0, 0.0, 1.0])

    def test_highlight_tints_only_that_section(self, plan):
        plain = build_spec(plan).compile()
        lit = build_spec(plan, highlight="LEFT").compile()
        for i in range(plain.ngeom):
            name = plain.geom(i).name
            changed = not np.allclose(plain.geom_rgba[i], lit.geom_rgba[i])
            assert changed == name.startswith("LEFT/"), name

    def test_invalid_highlight(self, plan):
        with pytest.raises(ValueError):
            build_spec(plan, highlight="FRONT")

    def test_theme_walls_and_floor(self):
        theme = THEMES["royal"]
        plan = generate(RoomConfig(), theme.style)
        model = build_spec(plan, theme.style, theme=theme).compile()
        assert len(_geoms_with_prefix(model, "wall:")) == 3
        assert model.nmat == 1
        floor = _geoms_with_prefix(model, "floor")[0]
        assert model.geom_matid[floor] == 0

    def test_plain_build_has_no_walls(self, plan):
        model = build_spec(plan).compile()
        assert _geoms_with_prefix(model, "wall") == []
        assert model.nmat == 0

    @pytest.mark.parametrize("name", sorted(THEMES))
    def test_every_theme_compiles(self, name):
        theme = THEMES[name]
        plan = generate(RoomConfig(width=6.0, depth=4.5), theme.style)
        model = build_spec(plan, theme.style, theme=theme).compile()
        assert model.ngeom > 0

    def test_tiny_room_skips_degenerate_carpet(self):
        plan = generate(RoomConfig(width=1.5, depth=1.0))
        model = build_spec(plan).compile()
        assert _geoms_with_prefix(model, "carpet") == []
        assert model.ngeom == len(flatten_plan(plan)) - 2


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCLI:
    def test_describe(self, capsys):
        assert main(["describe", "--width", "5", "--depth", "4"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Majlis 5.00 x 4.00")
        assert "length=3.15" in out

    def test_describe_with_theme_and_override(self, capsys):
        assert main(["describe", "--theme", "modern", "--mattress", "Sadu"]) == 0
        first = capsys.readouterr().out.split("\n")[0]
        assert "mattress=Sadu" in first
        assert "backrest=Kufic" in first

    def test_unknown_pattern_substituted(self, capsys):
        assert main(["describe", "--armrest", "Bogus"]) == 0
        assert "armrest=None" in capsys.readouterr().out

    def test_strict_unknown_pattern_exits_2(self):
        assert main(["describe", "--strict", "--armrest", "Bogus"]) == 2

    @pytest.mark.parametrize("args", [["--width", "0"], ["--depth", "0.5"]])
    def test_invalid_dimension_exits_2(self, args):
        assert main(["describe", *args]) == 2

    def test_save_image(self, tmp_path):
        pixels = np.zeros((4, 6, 3), dtype=np.uint8)
        path = save_image(pixels, tmp_path / "out" / "img.png")
        assert path.exists()
        assert Image.open(path).size == (6, 4)
