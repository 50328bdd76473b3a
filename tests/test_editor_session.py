"""
Tests for EditorSession.

Tests cover:
- Image loading, histogram recomputation and failure atomicity
- Slider updates, presets and reset
- Filter strings, export and saving to a store
"""

import pytest
from PIL import Image

from LA_Libs.errors import ImageLoadError
from LA_Libs.ImageEditingLib.editor_session import EditorSession
from LA_Libs.ImageEditingLib.histogram_sampler import sample_histogram
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters
from LA_Libs.ImageEditingLib.presets import PRESETS


class TestSessionImage:
    """Tests for loading and clearing the session image."""

    def test_starts_empty(self):
        session = EditorSession()

        assert not session.has_image
        assert session.histogram is None
        assert session.parameters.is_neutral

    def test_load_computes_histogram(self, moon_png_path, moon_image):
        """Should decode the image and compute its histogram."""
        session = EditorSession()

        histogram = session.load_image(moon_png_path)

        assert session.has_image
        assert session.histogram is histogram
        assert histogram == sample_histogram(moon_image)
        assert session.image_ref == str(moon_png_path)

    def test_bytes_reference_is_data_url(self, moon_png_bytes):
        session = EditorSession()

        session.load_image(moon_png_bytes)

        assert session.image_ref.startswith("data:image/jpeg;base64,")

    def test_new_image_replaces_histogram(self, moon_png_path, tmp_path):
        other = tmp_path / "red.png"
        Image.new("RGBA", (3, 3), (255, 0, 0, 255)).save(other)
        session = EditorSession()
        session.load_image(moon_png_path)

        session.load_image(other)

        assert session.histogram.red[255] == 9
        assert session.image_ref == str(other)

    def test_failed_load_keeps_previous_image(self, moon_png_path):
        """Should leave the previous image and histogram in place on failure."""
        session = EditorSession()
        session.load_image(moon_png_path)
        before = session.histogram

        with pytest.raises(ImageLoadError):
            session.load_image(b"not an image")

        assert session.histogram is before
        assert session.image_ref == str(moon_png_path)

    def test_parameters_survive_new_image(self, moon_png_path, moon_png_bytes):
        session = EditorSession()
        session.load_image(moon_png_path)
        session.update(brightness=150)

        session.load_image(moon_png_bytes)

        assert session.parameters.brightness == 150

    def test_clear(self, moon_png_path):
        session = EditorSession()
        session.load_image(moon_png_path)

        session.clear_image()

        assert not session.has_image
        assert session.histogram is None
        assert session.image_ref is None


class TestSessionParameters:
    """Tests for slider changes, presets and reset."""

    def test_update_changes_only_given_fields(self):
        session = EditorSession(PRESETS["bright-moon"])

        params = session.update(contrast=170)

        assert params.contrast == 170
        assert params.brightness == 140
        assert session.parameters is params

    def test_update_clamps(self):
        session = EditorSession()

        session.update(blur_radius=50, temperature=-75)

        assert session.parameters.blur_radius == 10
        assert session.parameters.temperature == -50

    def test_apply_preset(self):
        session = EditorSession(AdjustmentParameters(blur_radius=6))

        session.apply_preset("monochrome")

        assert session.parameters == PRESETS["monochrome"]

    def test_reset(self):
        session = EditorSession(PRESETS["deep-crater"])

        session.reset()

        assert session.parameters.is_neutral

    def test_filters_follow_parameters(self):
        """Should recompile the filter on every change."""
        session = EditorSession()
        assert session.preview_filter().startswith("brightness(100%)")

        session.update(brightness=150, temperature=30)

        assert session.preview_filter() == (
            "brightness(150%) contrast(100%) saturate(100%) blur(0px) hue-rotate(0deg) sepia(0.3)"
        )
        assert session.export_filter() == (
            "brightness(1.5) contrast(1) saturate(1) blur(0px) hue-rotate(0deg) sepia(0.3)"
        )
        assert session.pipeline().temperature_operation().name == "sepia"


class TestSessionOutput:
    """Tests for exporting and saving."""

    def test_export(self, moon_png_path, tmp_path):
        session = EditorSession(PRESETS["lunar-surface"])
        session.load_image(moon_png_path)

        written = session.export(tmp_path / "lunar-edit.png")

        with Image.open(written) as saved:
            assert saved.size == (40, 30)

    def test_export_without_image(self, tmp_path):
        with pytest.raises(ValueError):
            EditorSession().export(tmp_path / "out.png")

    def test_save_to_store(self, moon_png_path, edit_store):
        """Should persist the current parameters with the image reference."""
        session = EditorSession(PRESETS["deep-crater"])
        session.load_image(moon_png_path)

        edit_id = session.save(edit_store)
        record = edit_store.load_edit(edit_id)

        assert record.label == "Custom Edit"
        assert record.parameters == PRESETS["deep-crater"]
        assert record.image_ref == str(moon_png_path)

    def test_save_without_image(self, edit_store):
        with pytest.raises(ValueError):
            EditorSession().save(edit_store)
