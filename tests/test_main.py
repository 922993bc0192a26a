"""Tests for the command-line interface.

Tests cover:
- Parsing image dimensions and backend names
- Rendering a scene file end to end with both backends
- Generating the gradient image
- Error reporting through the exit code
"""

import argparse

import pytest
from PIL import Image as PILImage

from pathtracer.main import build_parser, main, parse_dims
from pathtracer.renderer.base import RenderBackend

SCENE = """
objects:
  - sphere:
      center: [0, 0, -1]
      radius: 0.5
      material: normal_map
  - sphere:
      center: [0, -100.5, -1]
      radius: 100
      material:
        diffuse: [0.5, 0.5, 0.5]
"""


@pytest.fixture
def scene_path(tmp_path):
    path = tmp_path / "scene.yml"
    path.write_text(SCENE)
    return path


class TestParseDims:

    def test_valid(self):
        assert parse_dims("800x600") == (800, 600)

    @pytest.mark.parametrize("raw", ["800", "800x", "x600", "ax600", "0x10", "10x-1"])
    def test_invalid(self, raw):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_dims(raw)


class TestParser:

    def test_render_defaults(self):
        args = build_parser().parse_args(["render", "scene.yml"])
        assert args.output_path == "./image.png"
        assert args.dims == (800, 600)
        assert args.backend is RenderBackend.SINGLE
        assert args.fix_dirs is False

    def test_render_options(self):
        args = build_parser().parse_args([
            "render", "scene.yml", "out.png", "-d", "32x16", "-b", "multi-threaded", "-t", "3",
            "--rays-per-pixel", "4",
        ])
        assert args.dims == (32, 16)
        assert args.backend is RenderBackend.MULTI
        assert args.threads == 3
        assert args.rays_per_pixel == 4

    def test_bad_dims_exit(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["render", "scene.yml", "-d", "big"])


class TestRenderCommand:

    def test_single_threaded(self, scene_path, tmp_path, capsys):
        output = tmp_path / "out.png"
        code = main(["render", str(scene_path), str(output), "-d", "8x6",
                     "--disable-anti-aliasing", "--max-depth", "3", "--seed", "5"])
        assert code == 0
        with PILImage.open(output) as image:
            assert image.size == (8, 6)
        assert "Successfully rendered scene" in capsys.readouterr().out

    def test_multi_threaded(self, scene_path, tmp_path):
        output = tmp_path / "nested" / "out.png"
        code = main(["render", str(scene_path), str(output), "-d", "8x6", "-f",
                     "--rays-per-pixel", "2", "--max-depth", "3", "-b", "multi", "-t", "2"])
        assert code == 0
        assert output.is_file()

    def test_features_file(self, scene_path, tmp_path):
        features = tmp_path / "features.yml"
        features.write_text("rays_per_pixel: 2\nmax_depth: 2\ngamma_correction: false\n")
        output = tmp_path / "out.png"
        code = main(["render", str(scene_path), str(output), "-d", "4x4", "-F", str(features)])
        assert code == 0
        assert output.is_file()

    def test_missing_scene(self, tmp_path, caplog):
        code = main(["render", str(tmp_path / "missing.yml"), str(tmp_path / "out.png"), "-d", "4x4"])
        assert code == 1
        assert "Failed to read scene file" in caplog.text
        assert "Caused by:" in caplog.text

    def test_missing_output_directory(self, scene_path, tmp_path):
        output = tmp_path / "missing" / "out.png"
        code = main(["render", str(scene_path), str(output), "-d", "4x4", "--disable-anti-aliasing"])
        assert code == 1
        assert not output.exists()


class TestGenerateCommand:

    def test_gradient(self, tmp_path):
        output = tmp_path / "gradient.png"
        assert main(["generate", "gradient", str(output), "12x4"]) == 0
        with PILImage.open(output) as image:
            assert image.size == (12, 4)

    def test_gradient_fix_dirs(self, tmp_path):
        output = tmp_path / "a" / "gradient.png"
        assert main(["generate", "gradient", str(output)]) == 1
        assert main(["generate", "-f", "gradient", str(output)]) == 0
        assert output.is_file()
