# hitlist/hitlist.py
"""
Flattened, per-material representation of a scene.

The scene tree (spheres nested in groups) is compiled once into one flat list
per material type. A group becomes a marker entry that carries the bounding
box of its contents and the number of entries that follow it, so traversal
can jump over a whole group when the ray misses its box:

    [Group(3), Sphere, Group(1), Sphere, Sphere]
     |-- covers the next 3 entries --|

Each list only ever holds spheres of one material type, so hit resolution and
scattering run through a dedicated path per material instead of asking every
object for its material.
"""
import logging
from collections import namedtuple
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.colour import Colour
from pathtracer.core.ray import Ray
from pathtracer.geometry.group import Group, surround_boxes
from pathtracer.geometry.hittable import HitRecord
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.normal_map import NormalMap
from pathtracer.materials.static_colour import StaticColour

logger = logging.getLogger(__name__)


class MaterialKind(Enum):
    STATIC_COLOUR = "static_colour"
    NORMAL_MAP = "normal_map"
    DIFFUSE = "diffuse"


MATERIAL_TYPES = {
    MaterialKind.STATIC_COLOUR: StaticColour,
    MaterialKind.NORMAL_MAP: NormalMap,
    MaterialKind.DIFFUSE: Diffuse,
}

# Identifies a hit object by its material list and its position in that list
HitIndex = namedtuple("HitIndex", ["kind", "index"])


class HitItem:
    """
    An entry in a flattened hit list.
    """
    is_group = False

    def __init__(self, aabb: AABB):
        self.aabb = aabb


class ObjectItem(HitItem):
    """A primitive together with its precomputed bounding box."""

    def __init__(self, obj: Sphere, aabb: AABB):
        super().__init__(aabb)
        self.obj = obj

    def __repr__(self) -> str:
        return f"ObjectItem({self.obj!r})"


class GroupMarker(HitItem):
    """Marks that the next `size` entries belong to one group."""
    is_group = True

    def __init__(self, size: int, aabb: AABB):
        super().__init__(aabb)
        self.size = size

    def __repr__(self) -> str:
        return f"GroupMarker({self.size})"


def top_level(items: Sequence[HitItem]) -> Iterator[HitItem]:
    """
    Yields the entries of a flattened list that are not inside any of its
    groups, jumping over group contents.
    """
    i = 0
    while i < len(items):
        item = items[i]
        yield item
        if item.is_group:
            i += item.size
        i += 1


def flatten(objects, material_type: type) -> List[HitItem]:
    """
    Flattens a scene tree into the entries for one material type.

    Spheres of other materials are left out, but every group still gets a
    marker so that all lists share the same group structure.
    """
    items: List[HitItem] = []
    for obj in objects:
        if isinstance(obj, Group):
            children = flatten(obj.objects, material_type)
            aabb = surround_boxes(item.aabb for item in top_level(children))
            items.append(GroupMarker(len(children), aabb))
            items.extend(children)
        elif isinstance(obj, Sphere):
            if type(obj.material) is material_type:
                items.append(ObjectItem(obj, obj.bounding_box()))
        else:
            raise TypeError(f"Cannot add object of type '{type(obj).__name__}' to a hit list")
    return items


class HitVec:
    """
    The hit list for objects of a single material type.
    """
    def __init__(self, items: List[HitItem]):
        self.items = items

    @classmethod
    def from_objects(cls, objects, material_type: type) -> "HitVec":
        return cls(flatten(objects, material_type))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[Tuple[int, HitRecord]]:
        """
        Returns the position and record of the closest hit with t in
        [t_min, t_max], or None.
        """
        closest = None
        closest_t = t_max
        items = self.items
        n = len(items)
        i = 0
        while i < n:
            item = items[i]
            if item.is_group:
                # Skip the whole group if its box is missed
                if not item.aabb.hit(ray, t_min, closest_t):
                    i += item.size
            elif item.aabb.hit(ray, t_min, closest_t):
                record = item.obj.hit(ray, t_min, closest_t)
                if record is not None and record.t < closest_t:
                    closest = (i, record)
                    closest_t = record.t
            i += 1
        return closest

    def objects(self) -> Iterator[Sphere]:
        for item in self.items:
            if not item.is_group:
                yield item.obj

    def __getitem__(self, index: int) -> Sphere:
        item = self.items[index]
        if item.is_group:
            raise IndexError(f"Entry {index} is a group marker, not an object")
        return item.obj

    def __len__(self) -> int:
        return len(self.items)


class HitList:
    """
    The complete flattened scene: one HitVec per material type.

    Built once before rendering and only read afterwards, so a single instance
    can be shared between render threads.
    """
    def __init__(self, sphere_static_colour: HitVec, sphere_normal_map: HitVec, sphere_diffuse: HitVec):
        self.sphere_static_colour = sphere_static_colour
        self.sphere_normal_map = sphere_normal_map
        self.sphere_diffuse = sphere_diffuse

    @classmethod
    def from_objects(cls, objects) -> "HitList":
        objects = list(objects)
        _check_materials(objects)
        hit_list = cls(
            HitVec.from_objects(objects, StaticColour),
            HitVec.from_objects(objects, NormalMap),
            HitVec.from_objects(objects, Diffuse),
        )
        logger.debug("Built hit list with %d objects (%d entries)", hit_list.n_objects(), len(hit_list))
        return hit_list

    def lists(self):
        """Returns (kind, list) pairs in the order ties are resolved."""
        return (
            (MaterialKind.STATIC_COLOUR, self.sphere_static_colour),
            (MaterialKind.NORMAL_MAP, self.sphere_normal_map),
            (MaterialKind.DIFFUSE, self.sphere_diffuse),
        )

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[Tuple[HitIndex, HitRecord]]:
        """
        Finds the closest hit over all material lists. On an exact tie the
        earlier list wins.
        """
        closest = None
        for kind, vec in self.lists():
            found = vec.hit(ray, t_min, t_max)
            if found is not None and (closest is None or found[1].t < closest[1].t):
                closest = (HitIndex(kind, found[0]), found[1])
        return closest

    def scatter(self, ray: Ray, index: HitIndex, record: HitRecord, rng) -> Tuple[Optional[Ray], Colour]:
        kind, i = index
        if kind is MaterialKind.STATIC_COLOUR:
            return self.sphere_static_colour[i].material.scatter(ray, record, rng)
        if kind is MaterialKind.NORMAL_MAP:
            return self.sphere_normal_map[i].material.scatter(ray, record, rng)
        if kind is MaterialKind.DIFFUSE:
            return self.sphere_diffuse[i].material.scatter(ray, record, rng)
        raise ValueError(f"Unknown hit index kind '{kind}'")

    def n_objects(self) -> int:
        return sum(1 for _, vec in self.lists() for _ in vec.objects())

    def __len__(self) -> int:
        return sum(len(vec) for _, vec in self.lists())


def _check_materials(objects):
    for obj in objects:
        if isinstance(obj, Group):
            _check_materials(obj.objects)
        elif isinstance(obj, Sphere) and type(obj.material) not in MATERIAL_TYPES.values():
            raise TypeError(f"Unsupported material '{type(obj.material).__name__}'")
