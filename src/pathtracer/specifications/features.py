# specifications/features.py
"""
Render features: how many rays per pixel, how deep rays may bounce and
whether gamma correction is applied.

Features come from three places, in increasing order of precedence: the
defaults, an optional YAML features file, and command-line flags.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from pathtracer.core.errors import ConfigError
from pathtracer.specifications.files import load_yaml

logger = logging.getLogger(__name__)


def _check_int(name: str, value, minimum: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{name}' must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"'{name}' must be at least {minimum}, got {value}")


def _check_bool(name: str, value):
    if not isinstance(value, bool):
        raise ConfigError(f"'{name}' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class Features:
    n_samples: int = 100
    max_depth: int = 50
    gamma_correction: bool = True

    def __post_init__(self):
        _check_int("n_samples", self.n_samples, 1)
        _check_int("max_depth", self.max_depth, 0)
        _check_bool("gamma_correction", self.gamma_correction)

    @classmethod
    def resolve(cls, file: Optional["FeaturesFile"] = None, cli: Optional["FeaturesCli"] = None) -> "Features":
        values = {}
        if file is not None:
            if file.n_samples is not None:
                values["n_samples"] = file.n_samples
            if file.max_depth is not None:
                values["max_depth"] = file.max_depth
            if file.gamma_correction is not None:
                values["gamma_correction"] = file.gamma_correction
            if file.anti_aliasing is False:
                values["n_samples"] = 1
        if cli is not None:
            if cli.rays_per_pixel is not None:
                values["n_samples"] = cli.rays_per_pixel
            if cli.max_depth is not None:
                values["max_depth"] = cli.max_depth
            if cli.disable_anti_aliasing:
                values["n_samples"] = 1
            if cli.disable_gamma:
                values["gamma_correction"] = False
        features = cls(**values)
        logger.info("Using features: %s", features)
        return features


@dataclass(frozen=True)
class FeaturesFile:
    """The contents of a features file; every key is optional."""
    n_samples: Optional[int] = None
    max_depth: Optional[int] = None
    gamma_correction: Optional[bool] = None
    anti_aliasing: Optional[bool] = None

    @classmethod
    def from_dict(cls, data) -> "FeaturesFile":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"features must be a mapping, got {type(data).__name__}")
        data = dict(data)
        if "rays_per_pixel" in data:
            if "n_samples" in data:
                raise ConfigError("'rays_per_pixel' and 'n_samples' cannot both be given")
            data["n_samples"] = data.pop("rays_per_pixel")
        unknown = sorted(set(data) - {"n_samples", "max_depth", "gamma_correction", "anti_aliasing"})
        if unknown:
            raise ConfigError(f"unknown feature(s): {', '.join(unknown)}")
        if data.get("n_samples") is not None:
            _check_int("n_samples", data["n_samples"], 1)
        if data.get("max_depth") is not None:
            _check_int("max_depth", data["max_depth"], 0)
        for key in ("gamma_correction", "anti_aliasing"):
            if data.get(key) is not None:
                _check_bool(key, data[key])
        return cls(**data)

    @classmethod
    def from_path(cls, path) -> "FeaturesFile":
        data = load_yaml(path, "features")
        try:
            return cls.from_dict(data)
        except ConfigError as err:
            raise ConfigError(f"Invalid features file '{path}'") from err


@dataclass(frozen=True)
class FeaturesCli:
    """Feature overrides given on the command line."""
    rays_per_pixel: Optional[int] = None
    max_depth: Optional[int] = None
    disable_anti_aliasing: bool = False
    disable_gamma: bool = False

    @staticmethod
    def add_arguments(parser):
        parser.add_argument("--rays-per-pixel", type=int, default=None,
                            help="Sets the number of rays to shoot per pixel. Setting '1' implies disabling anti-aliasing.")
        parser.add_argument("--max-depth", type=int, default=None,
                            help="The maximum times that a ray can bounce between objects.")
        parser.add_argument("--disable-anti-aliasing", action="store_true",
                            help="If given, sends only one ray per pixel. Shortcut for '--rays-per-pixel 1'.")
        parser.add_argument("--disable-gamma", action="store_true",
                            help="If given, does not apply gamma correction to the rendered image.")

    @classmethod
    def from_args(cls, args) -> "FeaturesCli":
        return cls(
            rays_per_pixel=args.rays_per_pixel,
            max_depth=args.max_depth,
            disable_anti_aliasing=args.disable_anti_aliasing,
            disable_gamma=args.disable_gamma,
        )
