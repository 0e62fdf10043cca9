"""Offscreen rendering of furniture plans and pattern swatches.

Usage:
    plan = generate(RoomConfig(width=5.0, depth=4.0), style)
    pixels = render_plan(plan, style, highlight="BACK")
    save_image(pixels, Path("out/majlis.png"))

    render_pattern_catalog(Path("docs/patterns"))   # labeled grid of every pattern
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import mujoco
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from majlis_gen.assembler import add_prims, build_spec, new_spec, to_z_up
from majlis_gen.config import StyleConfig
from majlis_gen.flatten import flatten_strip
from majlis_gen.patterns import PATTERN_LABELS, Pattern, list_patterns
from majlis_gen.primitives import IDENTITY_QUAT
from majlis_gen.room import FurniturePlan
from majlis_gen.strip import generate_strip
from majlis_gen.themes import Theme

log = logging.getLogger(__name__)

# Plan render settings
PLAN_W = 1280
PLAN_H = 960
PLAN_AZIMUTH = 90.0
PLAN_ELEVATION = -35.0
PLAN_LOOKAT_HEIGHT = 0.3
PLAN_MARGIN = 2.0

# Catalog settings
SWATCH_LENGTH = 1.5
SWATCH_SPACING = 2.5
SWATCH_HEIGHT = 1.0
CELL_W = 600
CELL_H = 240
LABEL_H = 32
BG_COLOR = (40, 42, 48)
LABEL_BG = (30, 32, 36)
LABEL_FG = (220, 220, 220)

# MuJoCo default vertical field of view
_FOVY = math.radians(45.0)


def _plan_camera(plan: FurniturePlan) -> mujoco.MjvCamera:
    """Three-quarter camera from the open side, framing the whole room."""
    cam = mujoco.MjvCamera()
    cam.lookat[:] = [0.0, 0.0, PLAN_LOOKAT_HEIGHT]
    cam.azimuth = PLAN_AZIMUTH
    cam.elevation = PLAN_ELEVATION
    extent = max(plan.room.width, plan.room.depth) + PLAN_MARGIN
    cam.distance = extent / 2 / math.tan(_FOVY / 2)
    return cam


def _render(
    model: mujoco.MjModel,
    cameras: list[mujoco.MjvCamera],
    width: int,
    height: int,
) -> list[np.ndarray]:
    """Render one image per camera from a static model."""
    data = mujoco.MjData(model)
    mujoco.mj_forward(model, data)
    renderer = mujoco.Renderer(model, height=height, width=width)
    try:
        images = []
        for cam in cameras:
            renderer.update_scene(data, cam)
            images.append(renderer.render().copy())
        return images
    finally:
        renderer.close()


def render_plan(
    plan: FurniturePlan,
    style: StyleConfig = StyleConfig(),
    highlight: str | None = None,
    theme: Theme | None = None,
    width: int = PLAN_W,
    height: int = PLAN_H,
) -> np.ndarray:
    """Render a plan to an (height, width, 3) uint8 image."""
    spec = build_spec(plan, style, highlight, theme, offscreen=(width, height))
    model = spec.compile()
    (pixels,) = _render(model, [_plan_camera(plan)], width, height)
    return pixels


def save_image(pixels: np.ndarray, path: Path) -> Path:
    """Write pixels as PNG, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(path)
    return path


# ---------------------------------------------------------------------------
# Pattern catalog
# ---------------------------------------------------------------------------


def _try_load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Try to load a nice font, fall back to default."""
    candidates = [
        "/System/Library/Fonts/SFNSMono.ttf",
        "/System/Library/Fonts/Menlo.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for path in candidates:
        if Path(path).exists():
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default()


def _swatch_camera(lookat: np.ndarray) -> mujoco.MjvCamera:
    """Head-on camera framing one swatch strip."""
    cam = mujoco.MjvCamera()
    cam.lookat[:] = lookat
    cam.azimuth = PLAN_AZIMUTH
    cam.elevation = 0.0
    half_w = SWATCH_LENGTH / 2 + 0.1
    cam.distance = half_w / (math.tan(_FOVY / 2) * CELL_W / CELL_H)
    return cam


def render_swatches(
    patterns: list[Pattern],
    style: StyleConfig = StyleConfig(),
) -> list[np.ndarray]:
    """Render a strip of each pattern, one image per pattern."""
    spec = new_spec(offscreen=(CELL_W, CELL_H))
    lookats = []
    placed = []
    for i, pattern in enumerate(patterns):
        pos = (i * SWATCH_SPACING, SWATCH_HEIGHT, 0.0)
        strip = generate_strip(SWATCH_LENGTH, pattern=pattern)
        tag = f"swatch_{pattern.name.lower()}"
        placed.extend(flatten_strip(strip, pos, tag=tag))
        lookats.append(to_z_up(pos, IDENTITY_QUAT)[0])

    add_prims(spec, placed, style.palette())
    model = spec.compile()
    return _render(model, [_swatch_camera(p) for p in lookats], CELL_W, CELL_H)


def render_pattern_catalog(
    out_dir: Path,
    style: StyleConfig = StyleConfig(),
    cols: int = 2,
) -> Path:
    """Render a labeled grid of every pattern. Returns output path."""
    patterns = list_patterns()
    images = render_swatches(patterns, style)

    cols = min(cols, len(patterns))
    rows = math.ceil(len(patterns) / cols)
    cell_total_h = CELL_H + LABEL_H

    grid = Image.new("RGB", (cols * CELL_W, rows * cell_total_h), BG_COLOR)
    draw = ImageDraw.Draw(grid)
    font = _try_load_font(14)

    for idx, (pattern, pixels) in enumerate(zip(patterns, images)):
        x = (idx % cols) * CELL_W
        y = (idx // cols) * cell_total_h
        grid.paste(Image.fromarray(pixels), (x, y))

        label = PATTERN_LABELS[pattern]
        label_y = y + CELL_H
        draw.rectangle([x, label_y, x + CELL_W, label_y + LABEL_H], fill=LABEL_BG)
        bbox = font.getbbox(label)
        tw = bbox[2] - bbox[0]
        tx = x + (CELL_W - tw) // 2
        ty = label_y + (LABEL_H - (bbox[3] - bbox[1])) // 2
        draw.text((tx, ty), label, fill=LABEL_FG, font=font)

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "patterns.png"
    grid.save(out_path)
    log.info("wrote %d swatches to %s", len(patterns), out_path)
    return out_path
