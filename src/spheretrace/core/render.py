"""Render driver: camera rays, row partitioning and the pixel buffer.

Each pixel (x, y) gets one primary ray from the eye through the viewport
point

    ((x + 0.5) * 2 / width - 1,  1 - (y + 0.5) * 2 / height,  viewport_distance)

so x runs left to right and y top to bottom across [-1, 1].

Work is split across a fixed number of workers by striding over rows:
worker i renders rows i, i + n, i + 2n, ... for n workers. The loop over
workers is the kernel's parallel loop, so every pixel is written exactly
once by exactly one worker and the image is identical for any worker count.

Example:
    >>> from spheretrace.core.runtime import init_runtime
    >>> init_runtime()
    >>> from spheretrace.core.config import RenderConfig
    >>> from spheretrace.core.render import Renderer
    >>> from spheretrace.scene.default_scene import create_default_scene
    >>> renderer = Renderer(RenderConfig(width=256, height=256))
    >>> renderer.render(create_default_scene())
    >>> image = renderer.get_image_numpy()  # (256, 256, 4) uint8
"""

import logging
import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from spheretrace.core.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderConfig
from spheretrace.core.status import check_status, clear_status
from spheretrace.core.tracer import rgba, trace_ray
from spheretrace.core.vector import Vector3, vec3
from spheretrace.lighting.light import ShadingParams
from spheretrace.scene.storage import load_scene

if TYPE_CHECKING:
    from spheretrace.scene.default_scene import Scene

logger = logging.getLogger(__name__)

# RGBA pixel buffer (preallocated to max size), indexed [x, y]
_pixels = ti.Vector.field(4, dtype=ti.u8, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def camera_direction(x: int, y: int, config: RenderConfig) -> Vector3:
    """Direction of the primary ray through the center of pixel (x, y)."""
    return Vector3(
        (x + 0.5) * 2.0 / config.width - 1.0,
        1.0 - (y + 0.5) * 2.0 / config.height,
        config.viewport_distance,
    )


@ti.func
def _camera_ray_direction(
    x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, viewport_distance: ti.f64
) -> vec3:
    return vec3(
        (ti.cast(x, ti.f64) + 0.5) * 2.0 / ti.cast(width, ti.f64) - 1.0,
        1.0 - (ti.cast(y, ti.f64) + 0.5) * 2.0 / ti.cast(height, ti.f64),
        viewport_distance,
    )


@ti.kernel
def _render_rows(
    width: ti.i32,
    height: ti.i32,
    num_workers: ti.i32,
    eye: vec3,
    viewport_distance: ti.f64,
    depth: ti.i32,
    t_min: ti.f64,
    t_max: ti.f64,
    epsilon: ti.f64,
    max_intensity: ti.f64,
):
    """Render the whole image, one parallel task per worker."""
    params = ShadingParams(epsilon=epsilon, max_intensity=max_intensity)
    rows_per_worker = (height + num_workers - 1) // num_workers

    for worker in range(num_workers):
        for k in range(rows_per_worker):
            y = worker + k * num_workers
            if y < height:
                for x in range(width):
                    direction = _camera_ray_direction(x, y, width, height, viewport_distance)
                    color = trace_ray(eye, direction, depth, t_min, t_max, params)
                    _pixels[x, y] = ti.cast(color, ti.u8)


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
    viewport_distance: ti.f64,
    depth: ti.i32,
    t_min: ti.f64,
    t_max: ti.f64,
    epsilon: ti.f64,
    max_intensity: ti.f64,
) -> rgba:
    params = ShadingParams(epsilon=epsilon, max_intensity=max_intensity)
    direction = _camera_ray_direction(x, y, width, height, viewport_distance)
    return trace_ray(eye, direction, depth, t_min, t_max, params)


class Renderer:
    """Renders a scene into the RGBA pixel buffer.

    The renderer owns one immutable ``RenderConfig`` and writes into the
    module-level Taichi pixel buffer.

    Attributes:
        config: The render configuration.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Render configuration; defaults to ``RenderConfig()``.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config if config is not None else RenderConfig()
        self.config.validate()
        self._rendered = False

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _kernel_args(self) -> tuple:
        c = self.config
        return (
            vec3(*c.eye),
            c.viewport_distance,
            c.recursion_depth,
            c.t_min,
            c.t_max,
            c.epsilon,
            c.max_intensity,
        )

    def render(self, scene: "Scene") -> None:
        """Render ``scene`` into the pixel buffer.

        The scene is loaded into storage, every pixel is traced, and the
        kernel status is checked before the image becomes available.

        Raises:
            RenderError: If any ray met a degenerate vector. The image is
                left unavailable.
        """
        c = self.config
        self._rendered = False
        load_scene(scene)
        logger.info(
            "Rendering %dx%d image: %d spheres, %d lights, depth %d, %d workers",
            c.width,
            c.height,
            len(scene.spheres),
            len(scene.lights),
            c.recursion_depth,
            c.num_workers,
        )

        start = time.perf_counter()
        _pixels.fill(0)
        clear_status()
        _render_rows(c.width, c.height, c.num_workers, *self._kernel_args())
        ti.sync()
        check_status()
        self._rendered = True
        logger.info("Render finished in %.2fs", time.perf_counter() - start)

    def render_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Trace the primary ray of a single pixel against the stored scene.

        Used for testing and debugging; does not touch the pixel buffer.

        Raises:
            ValueError: If (x, y) is outside the image.
            RenderError: If the ray met a degenerate vector.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")

        clear_status()
        color = _render_single_pixel(x, y, self.width, self.height, *self._kernel_args())
        check_status()
        return int(color[0]), int(color[1]), int(color[2]), int(color[3])

    def get_image_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the rendered image as a NumPy array.

        Returns:
            Array of shape (height, width, 4), dtype uint8, row 0 at the top.

        Raises:
            RuntimeError: If no render has completed successfully.
        """
        if not self._rendered:
            raise RuntimeError("No completed render. Call render() first.")

        full_image = _pixels.to_numpy()
        image = full_image[: self.width, : self.height, :]

        # Transpose from (width, height, 4) to (height, width, 4)
        return np.ascontiguousarray(np.transpose(image, (1, 0, 2)))
