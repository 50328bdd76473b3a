"""
Raster rendering of compiled adjustment pipelines.

Applies the export rendering of a :class:`CompiledPipeline` to a PIL image,
one operation at a time and in pipeline order. Colour operations follow the
W3C Filter Effects definitions used by the preview surface, so an export
matches what the user saw:

- brightness: linear multiply
- contrast: ``(x - 0.5) * k + 0.5``
- saturate, hue-rotate, sepia: 3x3 colour matrices
- blur: Gaussian blur with the given radius

Each colour operation clips its result to [0, 1] before the next one runs.

Example:
    >>> from PIL import Image
    >>> img = Image.open("moon.jpg")
    >>> params = AdjustmentParameters(brightness=120, contrast=140)
    >>> edited = render_adjusted(img, params)
"""

import logging
import math
from typing import Any, Callable, Dict

import numpy as np

from LA_Libs.pillow_compat import Image, ImageFilter
from LA_Libs.constants import (
    OP_BRIGHTNESS,
    OP_CONTRAST,
    OP_SATURATE,
    OP_BLUR,
    OP_HUE_ROTATE,
    OP_SEPIA,
)
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters
from LA_Libs.ImageEditingLib.adjustment_pipeline import (
    CompiledPipeline,
    PipelineOperation,
    compile_adjustments,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Colour matrices
# ============================================================================

def saturate_matrix(amount: float) -> np.ndarray:
    s = amount
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float64)


def hue_rotate_matrix(degrees: float) -> np.ndarray:
    radians = math.radians(degrees)
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float64)


def sepia_matrix(amount: float) -> np.ndarray:
    """Sepia matrix; *amount* is clamped to [0, 1]."""
    inv = 1.0 - max(0.0, min(1.0, amount))
    return np.array([
        [0.393 + 0.607 * inv, 0.769 - 0.769 * inv, 0.189 - 0.189 * inv],
        [0.349 - 0.349 * inv, 0.686 + 0.314 * inv, 0.168 - 0.168 * inv],
        [0.272 - 0.272 * inv, 0.534 - 0.534 * inv, 0.131 + 0.869 * inv],
    ], dtype=np.float64)


def _apply_matrix(rgb: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    return np.clip(rgb @ matrix.T, 0.0, 1.0)


# ============================================================================
# Operations on float RGB arrays
# ============================================================================

def _brightness(rgb: np.ndarray, amount: float) -> np.ndarray:
    return np.clip(rgb * amount, 0.0, 1.0)


def _contrast(rgb: np.ndarray, amount: float) -> np.ndarray:
    return np.clip((rgb - 0.5) * amount + 0.5, 0.0, 1.0)


def _saturate(rgb: np.ndarray, amount: float) -> np.ndarray:
    return _apply_matrix(rgb, saturate_matrix(amount))


def _hue_rotate(rgb: np.ndarray, degrees: float) -> np.ndarray:
    return _apply_matrix(rgb, hue_rotate_matrix(degrees))


def _sepia(rgb: np.ndarray, amount: float) -> np.ndarray:
    return _apply_matrix(rgb, sepia_matrix(amount))


COLOR_OPERATIONS: Dict[str, Callable[[np.ndarray, float], np.ndarray]] = {
    OP_BRIGHTNESS: _brightness,
    OP_CONTRAST: _contrast,
    OP_SATURATE: _saturate,
    OP_HUE_ROTATE: _hue_rotate,
    OP_SEPIA: _sepia,
}


def _to_float(image: Any) -> np.ndarray:
    return np.asarray(image, dtype=np.float64) / 255.0


def _to_image(pixels: np.ndarray) -> Any:
    data = np.rint(np.clip(pixels, 0.0, 1.0) * 255.0).astype(np.uint8)
    return Image.fromarray(data)


def _gaussian_blur(pixels: np.ndarray, radius: float) -> np.ndarray:
    blurred = _to_image(pixels).filter(ImageFilter.GaussianBlur(radius=radius))
    return _to_float(blurred)


def apply_operation(pixels: np.ndarray, operation: PipelineOperation) -> np.ndarray:
    """
    Apply one export-rendered operation to an RGBA float array.

    Args:
        pixels: Float array shaped (height, width, 4) with values in [0, 1]
        operation: Operation in export units

    Returns:
        New float array; alpha is untouched except by blur

    Raises:
        ValueError: If the operation name is unknown
    """
    if operation.name == OP_BLUR:
        if operation.value <= 0:
            return pixels
        return _gaussian_blur(pixels, operation.value)

    color_op = COLOR_OPERATIONS.get(operation.name)
    if color_op is None:
        raise ValueError(f"Unknown filter operation: {operation.name}")

    result = pixels.copy()
    result[:, :, :3] = color_op(pixels[:, :, :3], operation.value)
    return result


def apply_pipeline(image: Any, pipeline: CompiledPipeline) -> Any:
    """
    Render *pipeline* onto a copy of *image*.

    Args:
        image: PIL Image in any mode
        pipeline: Compiled pipeline; its export rendering is applied

    Returns:
        New RGBA PIL Image

    Raises:
        TypeError: If *image* is not a PIL Image
    """
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    rgba = image.convert("RGBA")
    if pipeline.is_identity:
        return rgba

    pixels = _to_float(rgba)
    for operation in pipeline.export_operations():
        if operation.is_identity:
            continue
        pixels = apply_operation(pixels, operation)

    logger.debug(f"Rendered '{pipeline.to_export_string()}' onto {image.size[0]}x{image.size[1]} image")
    return _to_image(pixels)


def render_adjusted(image: Any, params: AdjustmentParameters) -> Any:
    """Compile *params* and render them onto *image*."""
    return apply_pipeline(image, compile_adjustments(params))
