"""
Unit tests for image_models module.

Tests adjustment parameter validation, clamping and persistence, and the
Histogram value object.
"""

import pytest

from LA_Libs.errors import InvalidParameterError
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters, Histogram


class TestAdjustmentParameters:
    """Tests for AdjustmentParameters."""

    def test_defaults_are_neutral(self):
        """Should default every field to its neutral value."""
        params = AdjustmentParameters()

        assert params.brightness == 100
        assert params.contrast == 100
        assert params.saturation == 100
        assert params.blur_radius == 0
        assert params.hue_rotation == 0
        assert params.temperature == 0
        assert params.is_neutral

    def test_accepts_domain_bounds(self):
        """Should accept values exactly on the domain edges."""
        low = AdjustmentParameters(50, 50, 0, 0, -180, -50)
        high = AdjustmentParameters(200, 200, 200, 10, 180, 50)

        assert low.saturation == 0
        assert high.temperature == 50

    @pytest.mark.parametrize("field, value", [
        ("brightness", 49),
        ("brightness", 201),
        ("contrast", 49.9),
        ("saturation", -1),
        ("blur_radius", 10.5),
        ("hue_rotation", -181),
        ("temperature", 51),
    ])
    def test_rejects_out_of_range(self, field, value):
        """Should raise InvalidParameterError outside the domain."""
        with pytest.raises(InvalidParameterError):
            AdjustmentParameters(**{field: value})

    @pytest.mark.parametrize("value", ["120", None, True, float("nan")])
    def test_rejects_non_numbers(self, value):
        """Should reject strings, None, bools and NaN."""
        with pytest.raises(InvalidParameterError):
            AdjustmentParameters(brightness=value)

    def test_invalid_parameter_error_is_value_error(self):
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            AdjustmentParameters(contrast=0)

    def test_is_immutable(self):
        """Should not allow fields to be reassigned."""
        params = AdjustmentParameters()
        with pytest.raises(AttributeError):
            params.brightness = 150

    def test_clamped_limits_values(self):
        """Should clamp each supplied value into its domain."""
        params = AdjustmentParameters.clamped(
            brightness=500, contrast=10, saturation=-20,
            blur_radius=99, hue_rotation=-720, temperature=80,
        )

        assert params == AdjustmentParameters(200, 50, 0, 10, -180, 50)

    def test_clamped_fills_missing_with_neutral(self):
        """Should use neutral values for fields not supplied."""
        params = AdjustmentParameters.clamped(brightness=130)

        assert params == AdjustmentParameters(brightness=130)

    def test_clamped_rejects_unknown_field(self):
        """Should reject unknown adjustment names."""
        with pytest.raises(InvalidParameterError):
            AdjustmentParameters.clamped(exposure=1)

    def test_to_dict_uses_settings_keys(self):
        """Should serialize with the persisted settings keys."""
        params = AdjustmentParameters(120, 140, 80, 2, -5, 5)

        assert params.to_dict() == {
            "brightness": 120,
            "contrast": 140,
            "saturate": 80,
            "blur": 2,
            "hue": -5,
            "temperature": 5,
        }

    def test_from_dict_reads_settings_keys(self):
        """Should read back what to_dict wrote."""
        params = AdjustmentParameters(110, 160, 90, 0, -5, -10)

        assert AdjustmentParameters.from_dict(params.to_dict()) == params

    def test_from_dict_reads_field_names(self):
        """Should also accept the dataclass field names."""
        params = AdjustmentParameters.from_dict({"saturation": 40, "hue_rotation": 15})

        assert params.saturation == 40
        assert params.hue_rotation == 15

    def test_from_dict_keeps_zero_saturation(self):
        """A stored saturation of 0 is a real value, not a missing one."""
        params = AdjustmentParameters.from_dict({"saturate": 0})

        assert params.saturation == 0

    def test_from_dict_missing_and_none_are_neutral(self):
        """Should fall back to neutral for missing or None values."""
        params = AdjustmentParameters.from_dict({"brightness": None})

        assert params.is_neutral

    def test_from_dict_clamps(self):
        """Should clamp stored values into their domains."""
        params = AdjustmentParameters.from_dict({"blur": 25, "temperature": -90})

        assert params.blur_radius == 10
        assert params.temperature == -50

    def test_replace_validates(self):
        """Should return a validated copy with the changes applied."""
        params = AdjustmentParameters()

        assert params.replace(contrast=150).contrast == 150
        assert params.contrast == 100
        with pytest.raises(InvalidParameterError):
            params.replace(contrast=300)


class TestHistogram:
    """Tests for the Histogram value object."""

    def _histogram(self):
        red = [0] * 256
        green = [0] * 256
        blue = [0] * 256
        red[10] = 4
        green[20] = 2
        green[30] = 2
        blue[255] = 4
        return Histogram(tuple(red), tuple(green), tuple(blue), max_count=4)

    def test_pixel_count(self):
        """Should report the number of binned pixels."""
        assert self._histogram().pixel_count == 4

    def test_requires_256_bins(self):
        """Should reject channels of the wrong length."""
        with pytest.raises(ValueError):
            Histogram((0,) * 255, (0,) * 256, (0,) * 256, max_count=0)

    def test_normalized_heights(self):
        """Should scale bins to a percentage of max_count."""
        red, green, blue = self._histogram().normalized()

        assert red[10] == 100.0
        assert green[20] == 50.0
        assert blue[255] == 100.0
        assert red[0] == 0.0

    def test_normalized_empty(self):
        """Should return zeros when max_count is 0."""
        empty = Histogram((0,) * 256, (0,) * 256, (0,) * 256, max_count=0)

        red, green, blue = empty.normalized()

        assert set(red) == {0.0}
        assert len(blue) == 256

    def test_to_dict_shape(self):
        """Should expose r/g/b lists and maxVal."""
        data = self._histogram().to_dict()

        assert set(data) == {"r", "g", "b", "maxVal"}
        assert data["maxVal"] == 4
        assert len(data["g"]) == 256
