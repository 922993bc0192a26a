# geometry/group.py
from typing import Iterable, List
from pathtracer.core.aabb import AABB


class Group:
    """
    An ordered collection of scene objects (spheres or nested groups).

    Groups only exist in the scene tree; the hit list replaces them with
    group markers that let traversal jump over their contents.
    """
    def __init__(self, objects: List = None):
        self.objects = list(objects) if objects is not None else []

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return f"Group({self.objects!r})"


def surround_boxes(boxes: Iterable[AABB]) -> AABB:
    """
    Returns the box surrounding all given boxes, or a degenerate box at the
    origin if there are none.
    """
    result = None
    for box in boxes:
        result = box if result is None else AABB.surrounding_box(result, box)
    return result if result is not None else AABB.empty()
