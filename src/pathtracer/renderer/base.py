# renderer/base.py
from abc import ABC, abstractmethod
from enum import Enum

from pathtracer.renderer.image import Image


class RayRenderer(ABC):
    """
    Something that turns a hit list into a complete frame.
    """
    @abstractmethod
    def render_frame(self, hit_list) -> Image:
        raise NotImplementedError


class RenderBackend(Enum):
    SINGLE = "single"
    MULTI = "multi"

    @classmethod
    def parse(cls, value: str) -> "RenderBackend":
        """
        Parses a backend name, accepting the long forms (e.g. 'multi-threaded').
        """
        name = value.strip().lower().replace("-", "_")
        if name in ("single", "single_threaded"):
            return cls.SINGLE
        if name in ("multi", "multi_threaded"):
            return cls.MULTI
        raise ValueError(f"unknown render backend '{value}' (expected 'single' or 'multi')")
