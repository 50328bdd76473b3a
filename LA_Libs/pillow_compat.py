"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace).

This module loads the Pillow-provided modules via importlib and re-exports the
symbols used by Lunar Atelier: `Image` and `ImageFilter`. Importing from
`pillow_compat` keeps a single place that reports a missing Pillow install.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")
_pil_imagefilter = _import("PIL.ImageFilter")

if _pil_image is None or _pil_imagefilter is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageFilter = _pil_imagefilter

# Helper for type hints referencing PIL.Image.Image
ImageClass = getattr(_pil_image, "Image")

UnidentifiedImageError = getattr(_pil_image, "UnidentifiedImageError")
