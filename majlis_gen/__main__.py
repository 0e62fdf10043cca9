"""Command-line entry point for majlis generation.

Usage:
    python -m majlis_gen describe                           # default 4.0 x 3.5 room
    python -m majlis_gen describe --width 6 --depth 4.5 --theme royal
    python -m majlis_gen describe --mattress Kufic --armrest None
    python -m majlis_gen render --out out/majlis.png --highlight BACK
    python -m majlis_gen catalog --out docs/patterns         # every pattern, labeled

Unknown pattern names are replaced with None and reported; pass --strict to
fail instead. Invalid dimensions and patterns (with --strict) exit with
status 2.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from majlis_gen.config import CENTERPIECES, RoomConfig, StyleConfig
from majlis_gen.errors import MajlisError
from majlis_gen.flatten import describe_plan
from majlis_gen.room import SECTION_NAMES, generate
from majlis_gen.themes import get as get_theme
from majlis_gen.themes import list_themes

log = logging.getLogger("majlis_gen")


def _setup_logging(verbose: bool = False) -> None:
    """Configure the root logger and install an excepthook."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Capture unhandled exceptions to the log
    _original_excepthook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.critical(
                "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb)
            )
        _original_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _logging_excepthook


def _add_layout_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--width", type=float, default=4.0, help="Room width in meters")
    p.add_argument("--depth", type=float, default=3.5, help="Room depth in meters")
    p.add_argument(
        "--theme", choices=list_themes(), default=None, help="Style preset"
    )
    p.add_argument("--mattress", default=None, help="Mattress pattern")
    p.add_argument("--backrest", default=None, help="Backrest pattern")
    p.add_argument("--armrest", default=None, help="Armrest pattern")
    p.add_argument(
        "--centerpiece", choices=CENTERPIECES, default=None, help="Centerpiece"
    )
    p.add_argument(
        "--strict", action="store_true", help="Fail on unknown pattern names"
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="python -m majlis_gen",
        description="Procedural majlis seating layouts",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # describe
    p_desc = sub.add_parser("describe", help="Print a text summary of the layout")
    _add_layout_args(p_desc)

    # render
    p_render = sub.add_parser("render", help="Render the layout to a PNG")
    _add_layout_args(p_render)
    p_render.add_argument(
        "--highlight", choices=SECTION_NAMES, default=None, help="Section to tint"
    )
    p_render.add_argument("--out", default="majlis.png", help="Output PNG path")
    p_render.add_argument(
        "--size", type=int, nargs=2, metavar=("W", "H"), default=(1280, 960)
    )

    # catalog
    p_cat = sub.add_parser("catalog", help="Render every pattern as a labeled grid")
    p_cat.add_argument(
        "--theme", choices=list_themes(), default=None, help="Palette preset"
    )
    p_cat.add_argument("--out", default="docs/patterns", help="Output directory")

    return parser


def style_from_args(args: argparse.Namespace) -> StyleConfig:
    """StyleConfig from --theme plus any per-part overrides."""
    data: dict = {}
    if args.theme:
        data["theme"] = args.theme
    for part in ("mattress", "backrest", "armrest"):
        value = getattr(args, part, None)
        if value is not None:
            data[f"{part}_pattern"] = value
    if getattr(args, "centerpiece", None):
        data["centerpiece"] = args.centerpiece
    return StyleConfig.from_mapping(data)


def run(args: argparse.Namespace) -> None:
    """Dispatch a parsed command."""
    theme = get_theme(args.theme) if args.theme else None

    if args.command == "catalog":
        from majlis_gen.render import render_pattern_catalog

        style = theme.style if theme else StyleConfig()
        path = render_pattern_catalog(Path(args.out), style)
        print(f"-> {path}")
        return

    room = RoomConfig(width=args.width, depth=args.depth)
    style = style_from_args(args)
    plan = generate(room, style, strict=args.strict)

    if args.command == "describe":
        print(describe_plan(plan))

    elif args.command == "render":
        from majlis_gen.render import render_plan, save_image

        width, height = args.size
        pixels = render_plan(plan, style, args.highlight, theme, width, height)
        path = save_image(pixels, Path(args.out))
        print(describe_plan(plan))
        print(f"\n-> {path}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        run(args)
    except MajlisError as exc:
        log.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
