"""
Tests for named adjustment presets.
"""

import pytest

from LA_Libs.errors import InvalidParameterError
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters
from LA_Libs.ImageEditingLib.presets import (
    PRESETS,
    apply_preset,
    get_preset,
    list_presets,
    reset_adjustments,
)


class TestPresets:
    """Tests for the preset table."""

    def test_names_in_display_order(self):
        assert list_presets() == ["lunar-surface", "deep-crater", "bright-moon", "monochrome"]

    @pytest.mark.parametrize("name, expected", [
        ("lunar-surface", (120, 140, 80, 0, 0, 5)),
        ("deep-crater", (110, 160, 90, 0, -5, -10)),
        ("bright-moon", (140, 110, 100, 0, 10, 15)),
        ("monochrome", (115, 135, 0, 0, 0, 0)),
    ])
    def test_preset_values(self, name, expected):
        """Should hold the exact values for each preset."""
        assert get_preset(name) == AdjustmentParameters(*expected)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PRESETS["custom"] = AdjustmentParameters()

    def test_unknown_preset(self):
        """Should raise InvalidParameterError for unknown names."""
        with pytest.raises(InvalidParameterError, match="sunset"):
            get_preset("sunset")

    def test_apply_replaces_every_field(self):
        """Should replace the current parameters wholesale."""
        current = AdjustmentParameters(brightness=70, blur_radius=8, hue_rotation=90)

        applied = apply_preset("monochrome", current)

        assert applied == PRESETS["monochrome"]
        assert applied.blur_radius == 0
        assert applied.hue_rotation == 0

    def test_apply_without_current(self):
        assert apply_preset("bright-moon") == PRESETS["bright-moon"]

    def test_apply_unknown_keeps_nothing(self):
        with pytest.raises(InvalidParameterError):
            apply_preset("sunset", AdjustmentParameters())

    def test_reset(self):
        """Should return the neutral parameters."""
        assert reset_adjustments() == AdjustmentParameters()
        assert reset_adjustments().is_neutral
