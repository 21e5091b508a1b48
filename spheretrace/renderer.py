"""
Renderer module - drives the integrator over every pixel.

Implements:
- Jittered multi-sample anti-aliasing per pixel
- Gamma correction of the averaged linear color
- Tile-based parallel rendering on threads or processes
- Reproducible output from a single seed
"""

from __future__ import annotations
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, List, Tuple
import numpy as np

from .vec3 import Color
from .camera import Camera
from .integrator import PathIntegrator
from .shapes import Hittable

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 800
    height: int = 600
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 32
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None
    gamma: float = 2.0
    use_processes: bool = False

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel', 'max_depth', 'tile_size'):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def _render_tile(
    tile: Tile,
    seed_seq: np.random.SeedSequence,
    world: Hittable,
    camera: Camera,
    integrator: PathIntegrator,
    width: int,
    height: int,
    samples: int
) -> Tuple[Tile, np.ndarray]:
    """Render one tile with its own random generator.

    Returns the tile and its averaged linear colors, shape (rows, cols, 3).
    Module-level so that process pools can pickle it.
    """
    rng = np.random.default_rng(seed_seq)
    x0, y0, x1, y1 = tile
    tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

    for j in range(y1 - y0):
        for i in range(x1 - x0):
            pixel_color = Color(0, 0, 0)

            for _ in range(samples):
                s = (x0 + i + rng.random()) / width
                t = (height - 1 - (y0 + j) + rng.random()) / height
                ray = camera.get_ray(s, t, rng)
                pixel_color = pixel_color + integrator.ray_color(ray, world, rng)

            tile_image[j, i] = pixel_color.to_array() / samples

    return tile, tile_image


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self.integrator = PathIntegrator(max_depth=self.settings.max_depth)
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0).
                It is always called from the rendering thread.
        """
        self._progress_callback = callback

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render the world and return the image as a numpy array.

        Args:
            world: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Gamma-corrected image of shape (height, width, 3), row 0 at the
            top, every channel in [0, 1]
        """
        settings = self.settings
        width, height = settings.width, settings.height

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        seeds = np.random.SeedSequence(settings.seed).spawn(len(tiles))
        total_tiles = len(tiles)

        logger.info(
            "Rendering %dx%d, %d spp, max depth %d, %d tiles on %d %s",
            width, height, settings.samples_per_pixel, settings.max_depth,
            total_tiles, settings.num_threads,
            'processes' if settings.use_processes else 'threads'
        )
        start = time.perf_counter()

        jobs = [
            (tile, seed_seq, world, camera, self.integrator,
             width, height, settings.samples_per_pixel)
            for tile, seed_seq in zip(tiles, seeds)
        ]

        if settings.num_threads > 1:
            pool_cls = ProcessPoolExecutor if settings.use_processes else ThreadPoolExecutor
            with pool_cls(max_workers=settings.num_threads) as executor:
                futures = [executor.submit(_render_tile, *job) for job in jobs]
                for completed, future in enumerate(as_completed(futures), start=1):
                    self._store_tile(image, *future.result())
                    self._report_progress(completed, total_tiles)
        else:
            for completed, job in enumerate(jobs, start=1):
                self._store_tile(image, *_render_tile(*job))
                self._report_progress(completed, total_tiles)

        logger.debug("Render finished in %.2fs", time.perf_counter() - start)

        return self.gamma_correct(image)

    def gamma_correct(self, linear: np.ndarray) -> np.ndarray:
        """Clamp linear colors to [0, 1] and apply 1/gamma power."""
        return np.power(np.clip(linear, 0.0, 1.0), 1.0 / self.settings.gamma)

    @staticmethod
    def _store_tile(image: np.ndarray, tile: Tile, tile_image: np.ndarray) -> None:
        x0, y0, x1, y1 = tile
        image[y0:y1, x0:x1] = tile_image

    def _report_progress(self, completed: int, total: int) -> None:
        if self._progress_callback:
            self._progress_callback(completed / total)

    def _generate_tiles(self, width: int, height: int) -> List[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, row-major order
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    @staticmethod
    def to_colors(image: np.ndarray) -> List[Color]:
        """Flatten an image into a row-major list of colors."""
        return [Color.from_array(pixel) for pixel in image.reshape(-1, 3)]

    @staticmethod
    def to_ldr(image: np.ndarray) -> np.ndarray:
        """Convert a display-referred image in [0, 1] to 8-bit.

        Args:
            image: Gamma-corrected image array (float64)

        Returns:
            LDR image as uint8 array
        """
        return np.clip(image * 255.99, 0, 255).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (float in [0, 1] or uint8)
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        PILImage.fromarray(image).save(path)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
