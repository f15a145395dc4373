"""Unit tests for export filenames and export configuration."""

import pytest

from vita.contexts.rendering.config import load_export_config
from vita.contexts.rendering.exceptions import RenderError
from vita.contexts.rendering.exporter import DEFAULT_FILENAME, export_filename


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("Senior Engineer Resume", "Senior_Engineer_Resume.pdf"),
        ("  Padded   Title  ", "Padded_Title.pdf"),
        ("Tabs\tand\nnewlines", "Tabs_and_newlines.pdf"),
        ("Data/ML Engineer", "Data_ML_Engineer.pdf"),
        ("Résumé", "Résumé.pdf"),
        ("", DEFAULT_FILENAME),
        ("   ", DEFAULT_FILENAME),
    ],
)
def test_export_filename(title, expected):
    assert export_filename(title) == expected


@pytest.mark.unit
def test_default_export_config():
    config = load_export_config()
    assert config.page.format == "a4"
    assert config.raster.scale == 2
    assert config.canvas.width == 794


@pytest.mark.unit
def test_override_file_and_mapping_merge_over_defaults(tmp_path):
    override = tmp_path / "export.yaml"
    override.write_text("page:\n  format: letter\nraster:\n  jpeg_quality: 80\n")

    config = load_export_config(override, overrides={"raster": {"scale": 3}})

    assert config.page.format == "letter"
    assert config.raster.jpeg_quality == 80
    assert config.raster.scale == 3
    # untouched keys keep their defaults
    assert config.canvas.padding == 40


@pytest.mark.unit
def test_missing_override_file(tmp_path):
    with pytest.raises(RenderError) as excinfo:
        load_export_config(tmp_path / "missing.yaml")
    assert excinfo.value.stage == "config"


@pytest.mark.unit
def test_render_error_message_includes_stage_and_cause():
    error = RenderError("Could not write PDF", stage="write", original_error=OSError("disk full"))
    assert str(error) == "Could not write PDF\nStage: write\nOriginal error: disk full"
