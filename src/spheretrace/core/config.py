"""Render configuration.

``RenderConfig`` gathers every tunable of a render in one immutable object
built once per render. The defaults reproduce the reference render: a
2048x2048 image seen from the origin through a viewport at distance 1,
three reflection bounces, and all available CPUs.

Example:
    >>> from spheretrace.core.config import RenderConfig
    >>> config = RenderConfig(width=256, height=256, num_workers=2)
    >>> config.validate()
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

from spheretrace.core.runtime import default_worker_count
from spheretrace.core.vector import Vector3

# Offset keeping secondary rays from hitting the surface they leave
DEFAULT_EPSILON = 0.001

# Ceiling on the summed light intensity at a point
DEFAULT_MAX_INTENSITY = 1.0

DEFAULT_IMAGE_SIZE = 2048
DEFAULT_RECURSION_DEPTH = 3

# Reflection bounces are unrolled in the kernel, so depth has a hard cap
MAX_REFLECTION_DEPTH = 5

# Preallocated pixel buffer size
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


@dataclass(frozen=True)
class RenderConfig:
    """Parameters for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        recursion_depth: Maximum number of reflection bounces.
        epsilon: t_min used for shadow and reflected rays.
        max_intensity: Upper clamp applied to the summed lighting.
        t_min: t_min for primary rays (rays start at the viewport).
        t_max: t_max for primary and reflected rays.
        eye: Camera position.
        viewport_distance: Distance from the eye to the viewport plane.
        num_workers: Number of parallel row workers.
    """

    width: int = DEFAULT_IMAGE_SIZE
    height: int = DEFAULT_IMAGE_SIZE
    recursion_depth: int = DEFAULT_RECURSION_DEPTH
    epsilon: float = DEFAULT_EPSILON
    max_intensity: float = DEFAULT_MAX_INTENSITY
    t_min: float = 1.0
    t_max: float = sys.float_info.max
    eye: Vector3 = field(default_factory=Vector3)
    viewport_distance: float = 1.0
    num_workers: int = field(default_factory=default_worker_count)

    def validate(self) -> None:
        """Check the configuration.

        Raises:
            ValueError: If any parameter is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if not 0 <= self.recursion_depth <= MAX_REFLECTION_DEPTH:
            raise ValueError(
                f"recursion_depth must be in [0, {MAX_REFLECTION_DEPTH}], got {self.recursion_depth}"
            )
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if not math.isfinite(self.max_intensity) or self.max_intensity < 0.0:
            raise ValueError(
                f"max_intensity must be finite and non-negative, got {self.max_intensity}"
            )
        if self.t_min > self.t_max:
            raise ValueError(f"t_min ({self.t_min}) must not exceed t_max ({self.t_max})")
        if self.num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {self.num_workers}")
