"""
Tests for the lunar_atelier command line.
"""

import json

import pytest
from PIL import Image

import lunar_atelier
from LA_Libs.EditStoreLib.edit_store import EditStore
from LA_Libs.ImageEditingLib.presets import PRESETS


class TestParametersFromArgs:
    """Tests for turning flags into parameters."""

    def test_neutral_by_default(self):
        args = lunar_atelier.build_argparser().parse_args(["compile"])

        assert lunar_atelier.parameters_from_args(args).is_neutral

    def test_flags_override_preset(self):
        args = lunar_atelier.build_argparser().parse_args(
            ["compile", "--preset", "monochrome", "--saturation", "40"]
        )

        params = lunar_atelier.parameters_from_args(args)

        assert params.saturation == 40
        assert params.contrast == PRESETS["monochrome"].contrast

    def test_flags_are_clamped(self):
        args = lunar_atelier.build_argparser().parse_args(["compile", "--blur", "30"])

        assert lunar_atelier.parameters_from_args(args).blur_radius == 10


class TestCommands:
    """Tests for each subcommand through main()."""

    def test_compile_preview(self, capsys):
        assert lunar_atelier.main(["compile", "--brightness", "150", "--temperature", "30"]) == 0

        out = capsys.readouterr().out.strip()
        assert out == "brightness(150%) contrast(100%) saturate(100%) blur(0px) hue-rotate(0deg) sepia(0.3)"

    def test_compile_export(self, capsys):
        assert lunar_atelier.main(["compile", "--temperature", "-20", "--export"]) == 0

        out = capsys.readouterr().out.strip()
        assert out == "brightness(1) contrast(1) saturate(1) blur(0px) hue-rotate(0deg) hue-rotate(-40deg)"

    def test_presets(self, capsys):
        assert lunar_atelier.main(["presets"]) == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert [line.split(":")[0] for line in lines] == list(PRESETS)

    def test_histogram_json(self, capsys, moon_png_path):
        assert lunar_atelier.main(["histogram", str(moon_png_path), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert sum(data["r"]) == 40 * 30
        assert data["maxVal"] == max(max(data["r"]), max(data["g"]), max(data["b"]))

    def test_histogram_summary(self, capsys, moon_png_path):
        assert lunar_atelier.main(["histogram", str(moon_png_path)]) == 0

        assert "pixels sampled: 1200" in capsys.readouterr().out

    def test_histogram_bad_image(self, capsys, tmp_path):
        """Should report load failures on stderr and return 1."""
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"nope")

        assert lunar_atelier.main(["histogram", str(bad)]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_export_single(self, capsys, moon_png_path, tmp_path):
        output = tmp_path / "out.png"

        assert lunar_atelier.main(
            ["export", str(moon_png_path), "--output", str(output), "--preset", "bright-moon"]
        ) == 0

        assert capsys.readouterr().out.strip() == str(output)
        with Image.open(output) as saved:
            assert saved.size == (40, 30)

    def test_export_many(self, capsys, moon_png_path, tmp_path):
        second = tmp_path / "second.png"
        Image.new("RGB", (5, 5), (9, 9, 9)).save(second)
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        assert lunar_atelier.main(
            ["export", str(moon_png_path), str(second), "--output", str(out_dir)]
        ) == 0

        assert (out_dir / "lunar_moon.png").exists()
        assert (out_dir / "lunar_second.png").exists()
        assert "saved 2 image(s)" in capsys.readouterr().out

    def test_export_many_with_same_name(self, capsys, tmp_path):
        first_dir = tmp_path / "night1"
        second_dir = tmp_path / "night2"
        first_dir.mkdir()
        second_dir.mkdir()
        Image.new("RGB", (4, 4), (10, 10, 10)).save(first_dir / "moon.png")
        Image.new("RGB", (4, 4), (250, 250, 250)).save(second_dir / "moon.png")
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        assert lunar_atelier.main(
            ["export", str(first_dir / "moon.png"), str(second_dir / "moon.png"), "--output", str(out_dir)]
        ) == 0

        with Image.open(out_dir / "lunar_moon.png") as first, Image.open(out_dir / "lunar_moon_2.png") as second:
            assert first.getpixel((0, 0))[0] == 10
            assert second.getpixel((0, 0))[0] == 250
        assert "saved 2 image(s)" in capsys.readouterr().out

    @pytest.mark.parametrize("max_side", ["0", "-5"])
    def test_histogram_rejects_non_positive_max_side(self, capsys, moon_png_path, max_side):
        """Should report a usage error instead of a traceback."""
        with pytest.raises(SystemExit) as exit_info:
            lunar_atelier.main(["histogram", str(moon_png_path), "--max-side", max_side])

        assert exit_info.value.code == 2
        assert "--max-side" in capsys.readouterr().err

    def test_histogram_small_max_side(self, capsys, moon_png_path):
        assert lunar_atelier.main(["histogram", str(moon_png_path), "--max-side", "20"]) == 0

        assert "pixels sampled: 300" in capsys.readouterr().out

    def test_export_missing_directory(self, capsys, moon_png_path, tmp_path):
        assert lunar_atelier.main(
            ["export", str(moon_png_path), "--output", str(tmp_path / "no" / "out.png")]
        ) == 1

    def test_save_and_list_edits(self, capsys, moon_png_path, tmp_path):
        store_dir = tmp_path / "store"

        assert lunar_atelier.main(
            ["save", str(moon_png_path), "--store", str(store_dir),
             "--label", "Crater study", "--preset", "deep-crater"]
        ) == 0
        edit_id = capsys.readouterr().out.strip()

        assert EditStore(store_dir).load_edit(edit_id).parameters == PRESETS["deep-crater"]

        assert lunar_atelier.main(["edits", "--store", str(store_dir)]) == 0
        listing = capsys.readouterr().out
        assert edit_id in listing
        assert "Crater study" in listing

    def test_unknown_preset_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            lunar_atelier.main(["compile", "--preset", "sunset"])
