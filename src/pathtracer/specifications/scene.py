# specifications/scene.py
"""
Scene files.

A scene is a YAML document listing objects. Objects and materials are written
as single-key mappings naming their type:

    objects:
      - sphere:
          center: [0, 0, -1]
          radius: 0.5
          material:
            diffuse: [0.5, 0.5, 0.5]
      - group:
          - sphere: {center: [0, -100.5, -1], radius: 100, material: normal_map}
"""
import logging
from numbers import Real
from typing import List, Tuple

from pathtracer.core.colour import Colour
from pathtracer.core.errors import SceneParseError
from pathtracer.core.vector import Vector3
from pathtracer.geometry.group import Group
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.normal_map import NormalMap
from pathtracer.materials.static_colour import StaticColour
from pathtracer.specifications.files import load_yaml

logger = logging.getLogger(__name__)


class SceneFile:
    """
    A parsed scene: the top-level objects of the scene tree.
    """
    def __init__(self, objects: List):
        self.objects = objects

    @classmethod
    def from_dict(cls, data) -> "SceneFile":
        if not isinstance(data, dict):
            raise SceneParseError("<root>", "expected a mapping with an 'objects' key")
        unknown = sorted(set(data) - {"objects"})
        if unknown:
            raise SceneParseError("<root>", f"unknown key(s): {', '.join(map(str, unknown))}")
        objects = data.get("objects")
        if objects is None:
            objects = []
        return cls(_parse_objects(objects, "objects"))

    @classmethod
    def from_path(cls, path) -> "SceneFile":
        data = load_yaml(path, "scene")
        scene = cls.from_dict(data)
        logger.info("Loaded scene '%s' with %d top-level object(s)", path, len(scene.objects))
        return scene


def _tagged(data, location: str) -> Tuple[str, object]:
    """Unpacks a `{tag: value}` mapping; a bare string is a tag without value."""
    if isinstance(data, str):
        return data, None
    if not isinstance(data, dict) or len(data) != 1:
        raise SceneParseError(location, "expected a mapping with exactly one key naming the type")
    (tag, value), = data.items()
    return str(tag), value


def _parse_number(data, location: str) -> float:
    if isinstance(data, bool) or not isinstance(data, Real):
        raise SceneParseError(location, f"expected a number, got {data!r}")
    return float(data)


def _parse_vector(data, location: str) -> Vector3:
    if not isinstance(data, (list, tuple)) or len(data) != 3:
        raise SceneParseError(location, "expected a list of three numbers")
    return Vector3(*(_parse_number(v, f"{location}[{i}]") for i, v in enumerate(data)))


def _parse_colour(data, location: str) -> Colour:
    if isinstance(data, dict):
        keys = set(data)
        if keys == {"colour"}:
            return _parse_colour(data["colour"], f"{location}.colour")
        if keys == {"color"}:
            return _parse_colour(data["color"], f"{location}.color")
        raise SceneParseError(location, "expected a colour list or a mapping with a 'colour' key")
    if not isinstance(data, (list, tuple)) or len(data) not in (3, 4):
        raise SceneParseError(location, "expected a list of three or four numbers")
    return Colour.from_sequence(_parse_number(v, f"{location}[{i}]") for i, v in enumerate(data))


def _parse_material(data, location: str):
    tag, value = _tagged(data, location)
    here = f"{location}.{tag}"
    if tag == "static_colour":
        return StaticColour(_parse_colour(value, here))
    if tag == "normal_map":
        if value not in (None, {}):
            raise SceneParseError(here, "normal_map takes no arguments")
        return NormalMap()
    if tag == "diffuse":
        return Diffuse(_parse_colour(value, here))
    raise SceneParseError(location, f"unknown material type '{tag}'")


def _parse_sphere(data, location: str) -> Sphere:
    if not isinstance(data, dict):
        raise SceneParseError(location, "expected a mapping with 'center', 'radius' and 'material'")
    missing = [key for key in ("center", "radius", "material") if key not in data]
    if missing:
        raise SceneParseError(location, f"missing key(s): {', '.join(missing)}")
    unknown = sorted(set(data) - {"center", "radius", "material"})
    if unknown:
        raise SceneParseError(location, f"unknown key(s): {', '.join(map(str, unknown))}")
    return Sphere(
        _parse_vector(data["center"], f"{location}.center"),
        _parse_number(data["radius"], f"{location}.radius"),
        _parse_material(data["material"], f"{location}.material"),
    )


def _parse_object(data, location: str):
    tag, value = _tagged(data, location)
    here = f"{location}.{tag}"
    if tag == "sphere":
        return _parse_sphere(value, here)
    if tag == "group":
        return Group(_parse_objects(value if value is not None else [], here))
    raise SceneParseError(location, f"unknown object type '{tag}'")


def _parse_objects(data, location: str) -> List:
    if not isinstance(data, list):
        raise SceneParseError(location, "expected a list of objects")
    return [_parse_object(obj, f"{location}[{i}]") for i, obj in enumerate(data)]
