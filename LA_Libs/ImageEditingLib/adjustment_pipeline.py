"""
Adjustment pipeline compiler for Lunar Atelier.

Turns :class:`AdjustmentParameters` into an ordered list of filter
operations. One :class:`CompiledPipeline` serves both consumers:

- the preview rendering, in percentages, for the on-screen display
  (``brightness(150%) contrast(100%) ...``)
- the export rendering, in unitless multipliers, for the offscreen raster
  (``brightness(1.5) contrast(1) ...``)

Blur, hue rotation and the temperature term use the same units in both.
The operation order is fixed because the operations do not commute:

    brightness -> contrast -> saturate -> blur -> hue-rotate -> temperature

Temperature becomes ``sepia(t / 100)`` when warm (t > 0) and
``hue-rotate(t * 2deg)`` otherwise, so a neutral temperature still emits a
``hue-rotate(0deg)`` term.

Example:
    >>> params = AdjustmentParameters(brightness=150, temperature=30)
    >>> compile_adjustments(params).to_export_string()
    'brightness(1.5) contrast(1) saturate(1) blur(0px) hue-rotate(0deg) sepia(0.3)'
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from LA_Libs.constants import (
    OP_BRIGHTNESS,
    OP_CONTRAST,
    OP_SATURATE,
    OP_BLUR,
    OP_HUE_ROTATE,
    OP_SEPIA,
    UNIT_PERCENT,
    UNIT_PIXELS,
    UNIT_DEGREES,
    UNIT_NONE,
    RENDERING_PREVIEW,
    RENDERING_EXPORT,
    TEMPERATURE_SEPIA_DIVISOR,
    TEMPERATURE_HUE_FACTOR,
)
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters

logger = logging.getLogger(__name__)

RENDERINGS = (RENDERING_PREVIEW, RENDERING_EXPORT)

# Operations whose neutral value is 100% (or 1 in export units)
MULTIPLIER_OPERATIONS = frozenset({OP_BRIGHTNESS, OP_CONTRAST, OP_SATURATE})


def format_number(value: float) -> str:
    """
    Format a number in its shortest round-trip form.

    Integral values drop the fraction, so ``150.0`` renders as ``150`` and
    ``1.0`` as ``1``.
    """
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class PipelineOperation:
    """A single named filter operation.

    Attributes:
        name: Operation name (brightness, contrast, saturate, blur, hue-rotate, sepia)
        value: Numeric argument in the operation's unit
        unit: Unit suffix ('%', 'px', 'deg' or '' for unitless)
    """

    name: str
    value: float
    unit: str = UNIT_NONE

    def render(self) -> str:
        return f"{self.name}({format_number(self.value)}{self.unit})"

    def to_export(self) -> "PipelineOperation":
        """Return the operation in export units (percentages become multipliers)."""
        if self.unit != UNIT_PERCENT:
            return self
        return PipelineOperation(self.name, self.value / 100, UNIT_NONE)

    @property
    def is_identity(self) -> bool:
        if self.unit == UNIT_PERCENT:
            return self.value == 100
        if self.name in MULTIPLIER_OPERATIONS:
            return self.value == 1
        return self.value == 0


@dataclass(frozen=True)
class CompiledPipeline:
    """Ordered filter operations with preview and export serializers.

    Operations are stored in preview units; the export rendering is derived
    from them, so the two can never disagree on order or arguments.
    """

    operations: Tuple[PipelineOperation, ...]

    def preview_operations(self) -> Tuple[PipelineOperation, ...]:
        return self.operations

    def export_operations(self) -> Tuple[PipelineOperation, ...]:
        return tuple(op.to_export() for op in self.operations)

    def rendered(self, rendering: str = RENDERING_PREVIEW) -> Tuple[PipelineOperation, ...]:
        """
        Return the operations in the given rendering.

        Raises:
            ValueError: If *rendering* is not 'preview' or 'export'
        """
        if rendering == RENDERING_PREVIEW:
            return self.preview_operations()
        if rendering == RENDERING_EXPORT:
            return self.export_operations()
        raise ValueError(f"Unknown rendering '{rendering}', expected one of {RENDERINGS}")

    def to_preview_string(self) -> str:
        return " ".join(op.render() for op in self.preview_operations())

    def to_export_string(self) -> str:
        return " ".join(op.render() for op in self.export_operations())

    def operation(self, name: str, rendering: str = RENDERING_PREVIEW) -> Optional[PipelineOperation]:
        """Return the first operation called *name*, or None.

        ``hue-rotate`` can appear twice (hue and cool temperature); use
        :meth:`temperature_operation` for the temperature term.
        """
        for op in self.rendered(rendering):
            if op.name == name:
                return op
        return None

    def temperature_operation(self, rendering: str = RENDERING_PREVIEW) -> PipelineOperation:
        """The temperature term, which is always the last operation."""
        return self.rendered(rendering)[-1]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(op.name for op in self.operations)

    @property
    def is_identity(self) -> bool:
        return all(op.is_identity for op in self.operations)

    def __str__(self) -> str:
        return self.to_preview_string()


def temperature_operation(temperature: float) -> PipelineOperation:
    """
    Map the temperature slider to its filter term.

    Warm values (> 0) become a sepia overlay of strength ``t / 100``; cool
    and neutral values become a hue rotation of ``t * 2`` degrees.
    """
    if temperature > 0:
        return PipelineOperation(OP_SEPIA, temperature / TEMPERATURE_SEPIA_DIVISOR, UNIT_NONE)
    return PipelineOperation(OP_HUE_ROTATE, temperature * TEMPERATURE_HUE_FACTOR, UNIT_DEGREES)


def compile_adjustments(params: AdjustmentParameters) -> CompiledPipeline:
    """
    Compile adjustment parameters into a filter pipeline.

    Args:
        params: Validated adjustment parameters

    Returns:
        CompiledPipeline with six operations in fixed order
    """
    operations = (
        PipelineOperation(OP_BRIGHTNESS, params.brightness, UNIT_PERCENT),
        PipelineOperation(OP_CONTRAST, params.contrast, UNIT_PERCENT),
        PipelineOperation(OP_SATURATE, params.saturation, UNIT_PERCENT),
        PipelineOperation(OP_BLUR, params.blur_radius, UNIT_PIXELS),
        PipelineOperation(OP_HUE_ROTATE, params.hue_rotation, UNIT_DEGREES),
        temperature_operation(params.temperature),
    )
    pipeline = CompiledPipeline(operations)
    logger.debug(f"Compiled adjustments: {pipeline.to_preview_string()}")
    return pipeline


def compile_preview_filter(params: AdjustmentParameters) -> str:
    """Filter string for the live preview surface."""
    return compile_adjustments(params).to_preview_string()


def compile_export_filter(params: AdjustmentParameters) -> str:
    """Filter string for the offscreen export raster."""
    return compile_adjustments(params).to_export_string()
