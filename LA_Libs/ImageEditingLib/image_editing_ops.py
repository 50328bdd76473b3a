"""
Image export operations for Lunar Atelier.

This module renders adjustments onto full-resolution images and writes the
results to disk.

Functions:
    resolve_save_format: Pick the Pillow format for an output path
    export_image: Render adjustments onto an image and save it
    save_images: Batch save multiple ImageRecords to disk
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set, Union

from LA_Libs.constants import (
    OUTPUT_FILE_PREFIX,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_JPEG_QUALITY,
)
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters, ImageRecord
from LA_Libs.ImageEditingLib.raster_filters import render_adjusted

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".tiff": "TIFF",
    ".webp": "WEBP",
}

# Formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}


def resolve_save_format(output_path: Path, save_format: Optional[str] = None) -> str:
    """
    Pick the Pillow format name for *output_path*.

    An explicit *save_format* wins; otherwise the suffix decides, falling
    back to PNG.
    """
    if save_format:
        name = save_format.upper()
        return "JPEG" if name == "JPG" else name
    return _SUFFIX_FORMATS.get(output_path.suffix.lower(), DEFAULT_OUTPUT_FORMAT)


def _save_kwargs(save_format: str, quality: int) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {"format": save_format}
    if save_format == "JPEG":
        kwargs["quality"] = max(1, min(100, quality))
    return kwargs


def export_image(
    image: Any,
    params: AdjustmentParameters,
    output_path: Union[str, Path],
    save_format: Optional[str] = None,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Render *params* onto *image* at full resolution and save the result.

    Args:
        image: Source PIL Image
        params: Adjustments to apply
        output_path: Destination file
        save_format: Pillow format name; derived from the suffix when omitted
        quality: JPEG quality 1-100

    Returns:
        The path written

    Raises:
        OSError: If the destination directory does not exist
    """
    output_path = Path(output_path)
    if not output_path.parent.is_dir():
        raise OSError(f"Output directory does not exist: {output_path.parent}")

    save_format = resolve_save_format(output_path, save_format)
    rendered = render_adjusted(image, params)
    if save_format in _OPAQUE_FORMATS:
        rendered = rendered.convert("RGB")

    rendered.save(output_path, **_save_kwargs(save_format, quality))
    logger.info(f"Exported edited image to {output_path}")
    return output_path


def _unique_output_name(stem: str, used_names: Set[str]) -> str:
    name = f"{OUTPUT_FILE_PREFIX}{stem}.png"
    suffix = 2
    while name in used_names:
        name = f"{OUTPUT_FILE_PREFIX}{stem}_{suffix}.png"
        suffix += 1
    used_names.add(name)
    return name


def save_images(records: Iterable[ImageRecord], output_dir: Path) -> int:
    """
    Save multiple ImageRecords to disk in PNG format.

    Each image is saved with a 'lunar_' prefix added to the original
    filename stem. Records that share a stem get a numeric suffix
    ('lunar_moon.png', 'lunar_moon_2.png', ...) so no output overwrites another.

    Args:
        records: ImageRecord objects whose ``modified`` image is saved
        output_dir: Directory path where images should be saved

    Returns:
        The number of images saved

    Raises:
        OSError: If directory cannot be accessed or files cannot be written
    """
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    saved_count = 0
    used_names: Set[str] = set()
    for record in records:
        save_path = output_dir / _unique_output_name(record.path.stem, used_names)
        record.modified.save(save_path, format=DEFAULT_OUTPUT_FORMAT)
        saved_count += 1
    logger.info(f"Saved {saved_count} image(s) to {output_dir}")
    return saved_count
