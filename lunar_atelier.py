"""
Lunar Atelier command line.

Samples histograms, compiles adjustment filters, exports edited images and
manages saved edits from the shell.

Usage:
    python lunar_atelier.py histogram moon.jpg --json
    python lunar_atelier.py compile --preset monochrome --export
    python lunar_atelier.py export moon.jpg --output lunar-edit.png --brightness 130
    python lunar_atelier.py save moon.jpg --store ~/lunar --label "Crater study"
    python lunar_atelier.py edits --store ~/lunar
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from LA_Libs.constants import (
    DEFAULT_EXPORT_FILENAME,
    HISTOGRAM_MAX_SIDE,
    SESSION_EDIT_LABEL,
)
from LA_Libs.errors import LunarAtelierError
from LA_Libs.EditStoreLib.edit_store import EditStore
from LA_Libs.ImageEditingLib.adjustment_pipeline import compile_adjustments
from LA_Libs.ImageEditingLib.editor_session import EditorSession
from LA_Libs.ImageEditingLib.histogram_sampler import sample_histogram_from_source
from LA_Libs.ImageEditingLib.image_editing_ops import save_images
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters, ImageRecord
from LA_Libs.ImageEditingLib.presets import PRESETS, get_preset
from LA_Libs.ImageEditingLib.raster_filters import render_adjusted
from LA_Libs.ImageSourceLib.image_loader import load_image

logger = logging.getLogger("lunar_atelier")

ADJUSTMENT_FLAGS = (
    ("--brightness", "brightness", "Brightness in percent (50-200)"),
    ("--contrast", "contrast", "Contrast in percent (50-200)"),
    ("--saturation", "saturation", "Saturation in percent (0-200)"),
    ("--blur", "blur_radius", "Blur radius in pixels (0-10)"),
    ("--hue", "hue_rotation", "Hue rotation in degrees (-180-180)"),
    ("--temperature", "temperature", "Colour temperature (-50-50)"),
)


def _add_adjustment_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("Adjustments")
    group.add_argument("--preset", choices=list(PRESETS), help="Start from a named preset")
    for flag, dest, help_text in ADJUSTMENT_FLAGS:
        group.add_argument(flag, dest=dest, type=float, default=None, help=help_text)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Lunar Atelier photo adjustment tools")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    p_hist = sub.add_parser("histogram", help="Print the RGB histogram of an image")
    p_hist.add_argument("image", help="Image path or URL")
    p_hist.add_argument("--max-side", type=_positive_int, default=HISTOGRAM_MAX_SIDE)
    p_hist.add_argument("--json", action="store_true", help="Print all bins as JSON")

    p_compile = sub.add_parser("compile", help="Print the filter string for some adjustments")
    _add_adjustment_args(p_compile)
    p_compile.add_argument("--export", action="store_true", help="Print the export rendering")

    sub.add_parser("presets", help="List the built-in presets")

    p_export = sub.add_parser("export", help="Render adjustments onto images")
    p_export.add_argument("images", nargs="+", help="Image paths or URLs")
    p_export.add_argument("--output", default=DEFAULT_EXPORT_FILENAME,
                          help="Output file (one image) or directory (several images)")
    p_export.add_argument("--format", dest="save_format", default=None)
    _add_adjustment_args(p_export)

    p_save = sub.add_parser("save", help="Save an edit to a store")
    p_save.add_argument("image", help="Image path or URL")
    p_save.add_argument("--store", required=True, help="Store directory")
    p_save.add_argument("--label", default=SESSION_EDIT_LABEL)
    p_save.add_argument("--album", default=None, help="Album id")
    _add_adjustment_args(p_save)

    p_edits = sub.add_parser("edits", help="List saved edits")
    p_edits.add_argument("--store", required=True, help="Store directory")

    return p


def parameters_from_args(args: argparse.Namespace) -> AdjustmentParameters:
    """Start from the preset (or neutral) and clamp any explicit slider values over it."""
    base = get_preset(args.preset) if args.preset else AdjustmentParameters.neutral()
    values = {
        "brightness": base.brightness,
        "contrast": base.contrast,
        "saturation": base.saturation,
        "blur_radius": base.blur_radius,
        "hue_rotation": base.hue_rotation,
        "temperature": base.temperature,
    }
    for _, dest, _ in ADJUSTMENT_FLAGS:
        value = getattr(args, dest, None)
        if value is not None:
            values[dest] = value
    return AdjustmentParameters.clamped(**values)


def _cmd_histogram(args: argparse.Namespace) -> int:
    histogram = sample_histogram_from_source(args.image, max_side=args.max_side)
    if args.json:
        print(json.dumps(histogram.to_dict()))
    else:
        print(f"pixels sampled: {histogram.pixel_count}")
        print(f"max bin count:  {histogram.max_count}")
    return 0


def _cmd_compile(args: argparse.Namespace) -> int:
    pipeline = compile_adjustments(parameters_from_args(args))
    print(pipeline.to_export_string() if args.export else pipeline.to_preview_string())
    return 0


def _cmd_presets(args: argparse.Namespace) -> int:
    for name, params in PRESETS.items():
        print(f"{name}: {compile_adjustments(params).to_preview_string()}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    params = parameters_from_args(args)
    output = Path(args.output)

    if len(args.images) == 1:
        session = EditorSession(params)
        session.load_image(args.images[0])
        written = session.export(output, save_format=args.save_format)
        print(written)
        return 0

    records = []
    for source in args.images:
        original = load_image(source)
        records.append(ImageRecord(
            path=Path(source),
            original=original,
            modified=render_adjusted(original, params),
            parameters=params,
        ))
    count = save_images(records, output)
    print(f"saved {count} image(s) to {output}")
    return 0


def _cmd_save(args: argparse.Namespace) -> int:
    session = EditorSession(parameters_from_args(args))
    session.load_image(args.image)
    edit_id = session.save(EditStore(Path(args.store)), label=args.label, album_id=args.album)
    print(edit_id)
    return 0


def _cmd_edits(args: argparse.Namespace) -> int:
    for edit in EditStore(Path(args.store)).list_edits():
        print(f"{edit.id}  {edit.created_at}  {edit.label}  "
              f"{compile_adjustments(edit.parameters).to_preview_string()}")
    return 0


COMMANDS = {
    "histogram": _cmd_histogram,
    "compile": _cmd_compile,
    "presets": _cmd_presets,
    "export": _cmd_export,
    "save": _cmd_save,
    "edits": _cmd_edits,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except (LunarAtelierError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
