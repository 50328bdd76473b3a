"""
Named adjustment presets.

A preset is a fixed set of adjustment values that replaces the current
parameters wholesale when applied.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from LA_Libs.errors import InvalidParameterError
from LA_Libs.constants import (
    PRESET_LUNAR_SURFACE,
    PRESET_DEEP_CRATER,
    PRESET_BRIGHT_MOON,
    PRESET_MONOCHROME,
)
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters

logger = logging.getLogger(__name__)

PRESETS: Mapping[str, AdjustmentParameters] = MappingProxyType({
    PRESET_LUNAR_SURFACE: AdjustmentParameters(
        brightness=120, contrast=140, saturation=80, blur_radius=0, hue_rotation=0, temperature=5,
    ),
    PRESET_DEEP_CRATER: AdjustmentParameters(
        brightness=110, contrast=160, saturation=90, blur_radius=0, hue_rotation=-5, temperature=-10,
    ),
    PRESET_BRIGHT_MOON: AdjustmentParameters(
        brightness=140, contrast=110, saturation=100, blur_radius=0, hue_rotation=10, temperature=15,
    ),
    PRESET_MONOCHROME: AdjustmentParameters(
        brightness=115, contrast=135, saturation=0, blur_radius=0, hue_rotation=0, temperature=0,
    ),
})


def list_presets() -> List[str]:
    """Return the preset names in display order."""
    return list(PRESETS)


def get_preset(name: str) -> AdjustmentParameters:
    """
    Look up a preset by name.

    Raises:
        InvalidParameterError: If no preset has that name
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown preset '{name}', expected one of: {', '.join(PRESETS)}"
        ) from None


def apply_preset(name: str, current: Optional[AdjustmentParameters] = None) -> AdjustmentParameters:
    """
    Apply a preset to the current parameters.

    Every field is replaced by the preset's value; *current* is accepted so
    callers can treat presets like any other parameter transition.
    """
    preset = get_preset(name)
    if current is not None and current != preset:
        logger.debug(f"Replacing adjustments with preset '{name}'")
    return preset


def reset_adjustments() -> AdjustmentParameters:
    """Return the neutral parameters."""
    return AdjustmentParameters.neutral()
