"""One wall's run of mattress, backrest and armrests.

Section frame:
    - X runs along the wall, centered on the section origin
    - Y up, floor at y=0
    - +Z is the front face, pointing into the room

Armrest dividers are laid out fence-post style at a fixed cushion pitch:
slot_count = floor(length / CUSHION_PITCH) intervals give slot_count + 1
posts, and the final post is dropped when it lands on the far end of the
wall. Each divider that opens an interval carries a pillow.

Usage:
    plan = layout_section(4.0, SectionPatterns("Sadu", "Royal", "Najdi"))
    len(plan.armrest_slots)   # 4
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from majlis_gen.errors import require_positive
from majlis_gen.patterns import Pattern
from majlis_gen.primitives import ColorRole, Prim, Shape
from majlis_gen.strip import StripPlan, generate_strip

log = logging.getLogger(__name__)

CUSHION_PITCH = 0.9
# Final divider is dropped when it sits closer than this to the far end
BOUNDARY_GUARD = 0.1

# Mattress slab; its width is the section length
MATTRESS_HEIGHT = 0.3
MATTRESS_DEPTH = 0.85
MATTRESS_Y = 0.15

# Backrest
BACKREST_HEIGHT = 0.5
BACKREST_DEPTH = 0.25
BACKREST_POS = (0.0, 0.55, -0.25)
BACKREST_STRIP_TRIM = 0.2
BACKREST_STRIP_SCALE = 0.8

# Armrest dividers
ARMREST_SIZE = (0.15, 0.4, 0.8)
ARMREST_Y = 0.45
ARMREST_STRIP_LENGTH = 0.7
ARMREST_STRIP_SCALE = 0.5
ARMREST_STRIP_X = 0.08

# Pillows lean against the backrest to the right of each divider
PILLOW_SIZE = (0.45, 0.45, 0.1)
PILLOW_OFFSET = (0.45, 0.0, 0.1)
PILLOW_TILT = -0.2

PIPING_THICKNESS = 0.008

# Strips sit just proud of the surface they decorate
_STRIP_STANDOFF = 0.005


@dataclass(frozen=True)
class SectionPatterns:
    """Pattern selection for the three decorated parts of a section."""

    mattress: Pattern | str = Pattern.SADU
    backrest: Pattern | str = Pattern.ROYAL
    armrest: Pattern | str = Pattern.NAJDI


@dataclass(frozen=True)
class MountedStrip:
    """A strip placed on a furniture face.

    Attributes:
        strip: The tiled strip
        pos: Strip center in the owner's frame
        euler: Strip orientation in the owner's frame (roll, pitch, yaw)
    """

    strip: StripPlan
    pos: tuple[float, float, float]
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ArmrestSlot:
    """One armrest divider and the pillow beside it.

    Attributes:
        index: Position in the fence-post sequence
        x_offset: Divider center along the section axis
        has_pillow: Whether a pillow sits in the interval after this divider
        pillow_fill: PATTERN for even indices, ACCENT for odd
        strip: Pattern strip on the divider's side face (slot frame)
        bodies: Divider box and pillow, in the slot frame
    """

    index: int
    x_offset: float
    has_pillow: bool
    pillow_fill: ColorRole
    strip: MountedStrip
    bodies: tuple[Prim, ...]


@dataclass(frozen=True)
class SectionPlan:
    """Layout of one wall section.

    `name` tags the section (BACK/LEFT/RIGHT) so a renderer can correlate
    pointer events with it; the plan itself carries no interaction state.
    """

    name: str
    origin: tuple[float, float]
    rotation: float
    length: float
    bodies: tuple[Prim, ...]
    mattress_strip: MountedStrip
    backrest_strip: MountedStrip | None
    armrest_slots: tuple[ArmrestSlot, ...]

    @property
    def slot_count(self) -> int:
        return math.floor(self.length / CUSHION_PITCH)

    @property
    def pillow_count(self) -> int:
        return sum(1 for s in self.armrest_slots if s.has_pillow)


def piping(
    width: float,
    height: float,
    depth: float,
    center: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> tuple[Prim, ...]:
    """White piping along the four top edges of a box (4 prims)."""
    t = PIPING_THICKNESS / 2
    cx, cy, cz = center
    top = cy + height / 2
    hw, hd = width / 2, depth / 2
    return (
        Prim(Shape.BOX, (hw, t, t), (cx, top, cz + hd), ColorRole.WHITE),
        Prim(Shape.BOX, (hw, t, t), (cx, top, cz - hd), ColorRole.WHITE),
        Prim(Shape.BOX, (t, t, hd), (cx + hw, top, cz), ColorRole.WHITE),
        Prim(Shape.BOX, (t, t, hd), (cx - hw, top, cz), ColorRole.WHITE),
    )


def divider_offsets(length: float, slot_count: int) -> list[float]:
    """Fence-post divider positions along a section, after the boundary guard."""
    if slot_count == 0:
        return []
    step = length / slot_count
    offsets = []
    for i in range(slot_count + 1):
        x = -length / 2 + i * step
        if i == slot_count and x > length / 2 - BOUNDARY_GUARD:
            continue
        offsets.append(x)
    return offsets


def _armrest_slot(
    index: int,
    x: float,
    slot_count: int,
    pattern: Pattern,
) -> ArmrestSlot:
    has_pillow = index < slot_count
    fill = ColorRole.PATTERN if index % 2 == 0 else ColorRole.ACCENT

    aw, ah, ad = ARMREST_SIZE
    divider = Prim(
        Shape.BOX, (aw / 2, ah / 2, ad / 2), (0.0, 0.0, 0.0), ColorRole.ACCENT
    )
    bodies = [divider]
    if has_pillow:
        pw, ph, pd = PILLOW_SIZE
        bodies.append(
            Prim(
                Shape.BOX,
                (pw / 2, ph / 2, pd / 2),
                PILLOW_OFFSET,
                fill,
                euler=(PILLOW_TILT, 0.0, 0.0),
            )
        )

    strip = MountedStrip(
        generate_strip(
            ARMREST_STRIP_LENGTH, pattern=pattern, scale=ARMREST_STRIP_SCALE
        ),
        pos=(ARMREST_STRIP_X, 0.0, 0.0),
        euler=(0.0, math.pi / 2, 0.0),
    )
    return ArmrestSlot(
        index=index,
        x_offset=x,
        has_pillow=has_pillow,
        pillow_fill=fill,
        strip=strip,
        bodies=tuple(bodies),
    )


def armrest_origin(slot: ArmrestSlot) -> tuple[float, float, float]:
    """Slot frame origin in the section frame."""
    return (slot.x_offset, ARMREST_Y, 0.0)


def layout_section(
    length: float,
    patterns: SectionPatterns = SectionPatterns(),
    name: str = "BACK",
    origin: tuple[float, float] = (0.0, 0.0),
    rotation: float = 0.0,
) -> SectionPlan:
    """Lay out one wall section of the given length.

    A wall shorter than one cushion pitch gets no dividers; its mattress
    and backrest strips are still generated.

    Raises:
        InvalidDimension: length not positive and finite.
        UnknownPattern: a part's pattern outside the enumeration.
    """
    length = require_positive("length", length)
    mattress_pattern = Pattern.parse(patterns.mattress)
    backrest_pattern = Pattern.parse(patterns.backrest)
    armrest_pattern = Pattern.parse(patterns.armrest)

    slot_count = math.floor(length / CUSHION_PITCH)

    # Mattress: base slab with the strip on its front face
    hl = length / 2
    mattress = Prim(
        Shape.BOX,
        (hl, MATTRESS_HEIGHT / 2, MATTRESS_DEPTH / 2),
        (0.0, MATTRESS_Y, 0.0),
        ColorRole.BASE,
    )
    mattress_strip = MountedStrip(
        generate_strip(length, pattern=mattress_pattern),
        pos=(0.0, MATTRESS_Y, MATTRESS_DEPTH / 2 + _STRIP_STANDOFF),
    )

    # Backrest: cushion against the wall, strip inset and scaled down
    bx, by, bz = BACKREST_POS
    backrest = Prim(
        Shape.BOX,
        (hl, BACKREST_HEIGHT / 2, BACKREST_DEPTH / 2),
        BACKREST_POS,
        ColorRole.BACKREST,
    )
    backrest_len = length - BACKREST_STRIP_TRIM
    backrest_strip = None
    if backrest_len > 0:
        backrest_strip = MountedStrip(
            generate_strip(
                backrest_len, pattern=backrest_pattern, scale=BACKREST_STRIP_SCALE
            ),
            pos=(bx, by, bz + BACKREST_DEPTH / 2 + _STRIP_STANDOFF),
        )

    bodies = (
        mattress,
        *piping(length, MATTRESS_HEIGHT, MATTRESS_DEPTH, mattress.pos),
        backrest,
        *piping(length, BACKREST_HEIGHT, BACKREST_DEPTH, BACKREST_POS),
    )

    offsets = divider_offsets(length, slot_count)
    slots = tuple(
        _armrest_slot(i, x, slot_count, armrest_pattern) for i, x in enumerate(offsets)
    )

    log.debug(
        "section %s: length=%.3f slots=%d pillows=%d",
        name,
        length,
        len(slots),
        sum(1 for s in slots if s.has_pillow),
    )

    return SectionPlan(
        name=name,
        origin=(float(origin[0]), float(origin[1])),
        rotation=float(rotation),
        length=length,
        bodies=bodies,
        mattress_strip=mattress_strip,
        backrest_strip=backrest_strip,
        armrest_slots=slots,
    )
