"""Tests for world-space flattening and plan descriptions."""

import numpy as np
import pytest

from majlis_gen.config import RoomConfig, StyleConfig
from majlis_gen.flatten import (
    describe_plan,
    flatten_plan,
    flatten_section,
    flatten_strip,
)
from majlis_gen.primitives import ColorRole
from majlis_gen.room import generate
from majlis_gen.section import MATTRESS_DEPTH, MATTRESS_Y
from majlis_gen.strip import generate_strip


@pytest.fixture
def plan():
    return generate(RoomConfig(width=4.0, depth=3.5), StyleConfig())


def _by_tag(prims, tag):
    return [p for p in prims if p.tag == tag]


class TestFlatten:
    def test_every_primitive_tagged(self, plan):
        groups = {p.group for p in flatten_plan(plan)}
        assert groups == {
            "floor",
            "carpet",
            "BACK",
            "LEFT",
            "RIGHT",
            "corner_0",
            "corner_1",
            "centerpiece",
        }

    def test_quaternions_are_unit(self, plan):
        for p in flatten_plan(plan):
            assert np.linalg.norm(p.quat) == pytest.approx(1.0)

    def test_floor_first(self, plan):
        prims = flatten_plan(plan)
        assert prims[0].tag == "floor"
        assert prims[0].prim.fill == ColorRole.FLOOR

    def test_flat_floor_faces_up(self, plan):
        floor = flatten_plan(plan)[0]
        w, x, y, z = floor.quat
        # Local +Z normal rotated into world +Y
        normal = np.array(
            [2 * (x * z + w * y), 2 * (y * z - w * x), 1 - 2 * (x * x + y * y)]
        )
        assert normal == pytest.approx([0.0, 1.0, 0.0], abs=1e-9)

    def test_back_mattress_position(self, plan):
        back = flatten_section(plan.section("BACK"))
        mattress = _by_tag(back, "BACK/body")[0]
        assert mattress.pos == pytest.approx((0.0, MATTRESS_Y, -1.75))

    def test_side_mattress_positions(self, plan):
        left = _by_tag(flatten_section(plan.section("LEFT")), "LEFT/body")[0]
        right = _by_tag(flatten_section(plan.section("RIGHT")), "RIGHT/body")[0]
        assert left.pos == pytest.approx((-2.0, MATTRESS_Y, 0.0))
        assert right.pos == pytest.approx((2.0, MATTRESS_Y, 0.0))

    @pytest.mark.parametrize("name", ["BACK", "LEFT", "RIGHT"])
    def test_mattress_strip_faces_room_center(self, plan, name):
        section = plan.section(name)
        panel = _by_tag(flatten_section(section), f"{name}/mattress_strip")[0]
        ox, oz = section.origin
        inward = -np.array([ox, oz]) / np.hypot(ox, oz)
        offset = np.array([panel.pos[0] - ox, panel.pos[2] - oz])
        assert offset @ inward == pytest.approx(MATTRESS_DEPTH / 2, abs=0.01)
        assert panel.pos[1] == pytest.approx(MATTRESS_Y)

    def test_armrest_tags(self, plan):
        tags = {p.tag for p in flatten_section(plan.section("BACK"))}
        slots = plan.section("BACK").armrest_slots
        for slot in slots:
            assert f"BACK/armrest_{slot.index}" in tags

    def test_primitive_count_matches_plan(self, plan):
        section = plan.section("BACK")
        expected = len(section.bodies)
        expected += len(section.mattress_strip.strip.primitives())
        expected += len(section.backrest_strip.strip.primitives())
        for slot in section.armrest_slots:
            expected += len(slot.bodies) + len(slot.strip.strip.primitives())
        assert len(flatten_section(section)) == expected

    def test_flatten_strip(self):
        strip = generate_strip(1.0, pattern="Sadu")
        prims = flatten_strip(strip, pos=(1.0, 2.0, 3.0))
        assert len(prims) == len(strip.primitives())
        assert prims[0].pos == pytest.approx((1.0, 2.0, 3.0))
        assert all(p.tag == "strip" for p in prims)


class TestDescribe:
    def test_describe_plan(self, plan):
        text = describe_plan(plan)
        lines = text.split("\n")
        assert lines[0].startswith("Majlis 4.00 x 3.50")
        assert "mattress=Sadu" in lines[0]
        assert "backrest=Royal" in lines[0]
        for name in ("BACK", "LEFT", "RIGHT"):
            assert any(line.strip().startswith(name) for line in lines)
        assert "length=2.65" in text
        assert "tower 0" in text
        assert "table at center" in text
        assert f"{len(flatten_plan(plan))} primitives" in text

    def test_describe_reports_substitution(self):
        plan = generate(RoomConfig(), StyleConfig(armrest_pattern="Bogus"))
        text = describe_plan(plan)
        assert "armrest=None" in text
        assert "! armrest" in text
