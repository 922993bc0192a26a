"""Unit tests for render features and YAML file loading.

Tests cover:
- Feature defaults and validation
- Precedence of defaults, features files and command-line flags
- Reading and parsing failures
"""

import argparse

import pytest

from pathtracer.core.errors import ConfigError, FileParseError, FileReadError
from pathtracer.specifications.features import Features, FeaturesCli, FeaturesFile
from pathtracer.specifications.files import load_yaml


class TestFeatures:

    def test_defaults(self):
        features = Features()
        assert features.n_samples == 100
        assert features.max_depth == 50
        assert features.gamma_correction is True

    @pytest.mark.parametrize("kwargs", [
        {"n_samples": 0},
        {"max_depth": -1},
        {"n_samples": 2.5},
        {"gamma_correction": "yes"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            Features(**kwargs)

    def test_zero_depth_allowed(self):
        assert Features(max_depth=0).max_depth == 0


class TestFeaturesResolve:

    def test_nothing_given(self):
        assert Features.resolve() == Features()

    def test_file_overrides_defaults(self):
        file = FeaturesFile(n_samples=10, gamma_correction=False)
        assert Features.resolve(file) == Features(n_samples=10, max_depth=50, gamma_correction=False)

    def test_file_disables_anti_aliasing(self):
        file = FeaturesFile(n_samples=10, anti_aliasing=False)
        assert Features.resolve(file).n_samples == 1

    def test_cli_overrides_file(self):
        file = FeaturesFile(n_samples=10, max_depth=3)
        cli = FeaturesCli(rays_per_pixel=4, max_depth=7)
        assert Features.resolve(file, cli) == Features(n_samples=4, max_depth=7)

    def test_cli_flags(self):
        cli = FeaturesCli(rays_per_pixel=4, disable_anti_aliasing=True, disable_gamma=True)
        features = Features.resolve(FeaturesFile(gamma_correction=True), cli)
        assert features.n_samples == 1
        assert features.gamma_correction is False

    def test_invalid_cli_value(self):
        with pytest.raises(ConfigError):
            Features.resolve(cli=FeaturesCli(rays_per_pixel=0))


class TestFeaturesFile:

    def test_empty(self):
        assert FeaturesFile.from_dict(None) == FeaturesFile()

    def test_rays_per_pixel_alias(self):
        assert FeaturesFile.from_dict({"rays_per_pixel": 8}).n_samples == 8

    def test_alias_conflict(self):
        with pytest.raises(ConfigError):
            FeaturesFile.from_dict({"rays_per_pixel": 8, "n_samples": 4})

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            FeaturesFile.from_dict({"samples": 8})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            FeaturesFile.from_dict([1, 2])

    def test_from_path(self, tmp_path):
        path = tmp_path / "features.yml"
        path.write_text("max_depth: 12\nanti_aliasing: false\n")
        file = FeaturesFile.from_path(path)
        assert file.max_depth == 12
        assert file.anti_aliasing is False

    def test_from_path_invalid(self, tmp_path):
        path = tmp_path / "features.yml"
        path.write_text("max_depth: deep\n")
        with pytest.raises(ConfigError) as excinfo:
            FeaturesFile.from_path(path)
        assert isinstance(excinfo.value.__cause__, ConfigError)


class TestFeaturesCli:

    def test_from_args(self):
        parser = argparse.ArgumentParser()
        FeaturesCli.add_arguments(parser)
        args = parser.parse_args(["--rays-per-pixel", "3", "--disable-gamma"])
        assert FeaturesCli.from_args(args) == FeaturesCli(rays_per_pixel=3, disable_gamma=True)


class TestLoadYaml:

    def test_loads(self, tmp_path):
        path = tmp_path / "data.yml"
        path.write_text("a: [1, 2]\n")
        assert load_yaml(path, "test") == {"a": [1, 2]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileReadError) as excinfo:
            load_yaml(tmp_path / "nope.yml", "scene")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("objects: [\n")
        with pytest.raises(FileParseError):
            load_yaml(path, "scene")
