"""
Image editing data models for Lunar Atelier.

This module defines core data structures used throughout the image editing system.

Classes:
    AdjustmentParameters: The six slider values that describe an edit
    Histogram: Per-channel 256-bin intensity distribution of an image
    ImageRecord: Container for an image's path and both original and modified versions

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

import math
from dataclasses import dataclass, fields, replace as dataclass_replace
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from LA_Libs.pillow_compat import Image
from LA_Libs.errors import InvalidParameterError
from LA_Libs.constants import (
    BRIGHTNESS_RANGE,
    CONTRAST_RANGE,
    SATURATION_RANGE,
    BLUR_RADIUS_RANGE,
    HUE_ROTATION_RANGE,
    TEMPERATURE_RANGE,
    NEUTRAL_BRIGHTNESS,
    NEUTRAL_CONTRAST,
    NEUTRAL_SATURATION,
    NEUTRAL_BLUR_RADIUS,
    NEUTRAL_HUE_ROTATION,
    NEUTRAL_TEMPERATURE,
    SETTING_BRIGHTNESS,
    SETTING_CONTRAST,
    SETTING_SATURATION,
    SETTING_BLUR,
    SETTING_HUE,
    SETTING_TEMPERATURE,
    HISTOGRAM_BINS,
)

RgbaColor = Tuple[int, int, int, int]
Number = float

# field name -> (low, high) inclusive domain
PARAMETER_DOMAINS: Dict[str, Tuple[float, float]] = {
    "brightness": BRIGHTNESS_RANGE,
    "contrast": CONTRAST_RANGE,
    "saturation": SATURATION_RANGE,
    "blur_radius": BLUR_RADIUS_RANGE,
    "hue_rotation": HUE_ROTATION_RANGE,
    "temperature": TEMPERATURE_RANGE,
}

SETTINGS_KEYS: Dict[str, str] = {
    "brightness": SETTING_BRIGHTNESS,
    "contrast": SETTING_CONTRAST,
    "saturation": SETTING_SATURATION,
    "blur_radius": SETTING_BLUR,
    "hue_rotation": SETTING_HUE,
    "temperature": SETTING_TEMPERATURE,
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _coerce_number(name: str, value: Any) -> Number:
    """Return *value* as a number, rejecting bools, NaN and non-numbers."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(
            f"Adjustment '{name}' must be a number, got {type(value).__name__}"
        )
    if math.isnan(value):
        raise InvalidParameterError(f"Adjustment '{name}' must not be NaN")
    return value


@dataclass(frozen=True)
class AdjustmentParameters:
    """The six adjustment sliders of an edit.

    Values are in the units shown to the user: brightness, contrast and
    saturation in percent, blur radius in pixels, hue rotation in degrees and
    temperature as a unitless -50..50 offset. Construction rejects values
    outside their domain; use :meth:`clamped` or :meth:`from_dict` to bring
    user input into range first.

    Attributes:
        brightness: Percentage, 50-200 (neutral 100)
        contrast: Percentage, 50-200 (neutral 100)
        saturation: Percentage, 0-200 (neutral 100)
        blur_radius: Pixels, 0-10 (neutral 0)
        hue_rotation: Degrees, -180-180 (neutral 0)
        temperature: Unitless, -50-50 (neutral 0)
    """

    brightness: Number = NEUTRAL_BRIGHTNESS
    contrast: Number = NEUTRAL_CONTRAST
    saturation: Number = NEUTRAL_SATURATION
    blur_radius: Number = NEUTRAL_BLUR_RADIUS
    hue_rotation: Number = NEUTRAL_HUE_ROTATION
    temperature: Number = NEUTRAL_TEMPERATURE

    def __post_init__(self):
        for name, (low, high) in PARAMETER_DOMAINS.items():
            value = _coerce_number(name, getattr(self, name))
            if not low <= value <= high:
                raise InvalidParameterError(
                    f"Adjustment '{name}' must be between {low:g} and {high:g}, got {value}"
                )

    @classmethod
    def neutral(cls) -> "AdjustmentParameters":
        """Return the parameters that leave an image visually unchanged."""
        return cls()

    @classmethod
    def clamped(cls, **values: Any) -> "AdjustmentParameters":
        """Create parameters with every supplied value clamped into its domain.

        Missing fields take their neutral value.

        Raises:
            InvalidParameterError: If a field name is unknown or a value is not numeric
        """
        unknown = set(values) - set(PARAMETER_DOMAINS)
        if unknown:
            raise InvalidParameterError(f"Unknown adjustments: {', '.join(sorted(unknown))}")

        clamped: Dict[str, Number] = {}
        for name, value in values.items():
            low, high = PARAMETER_DOMAINS[name]
            clamped[name] = _clamp(_coerce_number(name, value), low, high)
        return cls(**clamped)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AdjustmentParameters":
        """Create from persisted settings.

        Accepts both the settings keys (``saturate``, ``blur``, ``hue``) and
        the field names. Missing or ``None`` values fall back to neutral and
        every value is clamped into its domain.
        """
        values: Dict[str, Any] = {}
        for name, key in SETTINGS_KEYS.items():
            value = data.get(key)
            if value is None:
                value = data.get(name)
            if value is not None:
                values[name] = value
        return cls.clamped(**values)

    def to_dict(self) -> Dict[str, Number]:
        """Convert to persisted settings using the settings keys."""
        return {SETTINGS_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    def replace(self, **changes: Any) -> "AdjustmentParameters":
        """Return a copy with *changes* applied (validated, not clamped)."""
        return dataclass_replace(self, **changes)

    @property
    def is_neutral(self) -> bool:
        return self == AdjustmentParameters.neutral()


@dataclass(frozen=True)
class Histogram:
    """Red, green and blue intensity counts over 256 bins.

    Attributes:
        red: 256 pixel counts for the red channel
        green: 256 pixel counts for the green channel
        blue: 256 pixel counts for the blue channel
        max_count: Largest single bin across all three channels
    """

    red: Tuple[int, ...]
    green: Tuple[int, ...]
    blue: Tuple[int, ...]
    max_count: int

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            if len(getattr(self, name)) != HISTOGRAM_BINS:
                raise ValueError(f"Histogram channel '{name}' must have {HISTOGRAM_BINS} bins")

    @property
    def pixel_count(self) -> int:
        return sum(self.red)

    def normalized(self) -> Tuple[Tuple[float, ...], Tuple[float, ...], Tuple[float, ...]]:
        """Return bar heights as a percentage of ``max_count`` for each channel."""
        if self.max_count <= 0:
            zeros = (0.0,) * HISTOGRAM_BINS
            return zeros, zeros, zeros

        scale = 100.0 / self.max_count
        return (
            tuple(count * scale for count in self.red),
            tuple(count * scale for count in self.green),
            tuple(count * scale for count in self.blue),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``{r, g, b, maxVal}`` shape drawn by the histogram panel."""
        return {
            "r": list(self.red),
            "g": list(self.green),
            "b": list(self.blue),
            "maxVal": self.max_count,
        }


@dataclass
class ImageRecord:
    path: Path
    original: 'Image.Image'
    modified: 'Image.Image'
    parameters: Optional[AdjustmentParameters] = None
