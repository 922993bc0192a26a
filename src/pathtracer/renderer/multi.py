# renderer/multi.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tqdm import tqdm

from pathtracer.core.errors import AvailableThreadsError, ConfigError, RenderWorkerError
from pathtracer.renderer.base import RayRenderer
from pathtracer.renderer.image import Image
from pathtracer.renderer.single import SingleThreadRenderer
from pathtracer.specifications.features import Features
from pathtracer.specifications.files import load_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultiThreadRendererConfig:
    # None means one thread per hardware thread
    n_threads: Optional[int] = None

    def __post_init__(self):
        if self.n_threads is not None:
            if isinstance(self.n_threads, bool) or not isinstance(self.n_threads, int) or self.n_threads < 1:
                raise ConfigError(f"'n_threads' must be a positive integer, got {self.n_threads!r}")

    @classmethod
    def from_dict(cls, data) -> "MultiThreadRendererConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"backend config must be a mapping, got {type(data).__name__}")
        unknown = sorted(set(data) - {"n_threads"})
        if unknown:
            raise ConfigError(f"unknown backend option(s): {', '.join(map(str, unknown))}")
        return cls(n_threads=data.get("n_threads"))

    @classmethod
    def from_path(cls, path) -> "MultiThreadRendererConfig":
        data = load_yaml(path, "backend config")
        try:
            return cls.from_dict(data)
        except ConfigError as err:
            raise ConfigError(f"Invalid backend config file '{path}'") from err


def split_rows(height: int, n_bands: int) -> List[Tuple[int, int]]:
    """
    Splits `height` rows into `n_bands` (start, end) bands of equal size, the
    last band taking the remaining rows.
    """
    rows_per_band = height // n_bands
    bands = []
    for i in range(n_bands):
        start = i * rows_per_band
        end = height if i == n_bands - 1 else start + rows_per_band
        bands.append((start, end))
    return bands


class MultiThreadRenderer(RayRenderer):
    """
    Renders a frame by splitting it into horizontal bands, each rendered by a
    single-threaded renderer on its own worker thread.

    The hit list is shared by all workers and only read; each worker writes to
    its own band image, which is copied into the frame once it finishes.
    """
    def __init__(self, dims: Tuple[int, int], features: Features,
                 config: Optional[MultiThreadRendererConfig] = None, seed: Optional[int] = None,
                 show_progress: bool = False):
        config = config if config is not None else MultiThreadRendererConfig()
        n_threads = config.n_threads
        if n_threads is None:
            n_threads = os.cpu_count()
            if n_threads is None:
                raise AvailableThreadsError()
        self.dims = dims
        self.features = features
        self.n_threads = n_threads
        self.seed = seed
        self.show_progress = show_progress

    def bands(self) -> List[Tuple[int, int]]:
        height = self.dims[1]
        if height == 0:
            return []
        return split_rows(height, min(self.n_threads, height))

    def _render_band(self, rows: Tuple[int, int], hit_list) -> Image:
        renderer = SingleThreadRenderer(self.dims, self.features, rows=rows, seed=self.seed)
        return renderer.render_frame(hit_list)

    def render_frame(self, hit_list) -> Image:
        bands = self.bands()
        logger.info("Rendering %dx%d frame on %d thread(s)", self.dims[0], self.dims[1], len(bands))
        logger.debug("Bands: %s", bands)

        result = Image(self.dims)
        if not bands:
            return result
        with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="render-band") as pool:
            futures = {
                pool.submit(self._render_band, rows, hit_list): band
                for band, rows in enumerate(bands)
            }
            with tqdm(total=len(bands), unit="band", disable=not self.show_progress) as progress:
                for future in as_completed(futures):
                    band = futures[future]
                    try:
                        image = future.result()
                    except Exception as err:
                        for other in futures:
                            other.cancel()
                        raise RenderWorkerError(band) from err
                    result.move_into(image, (0, bands[band][0]))
                    progress.update(1)
        return result
