"""Core rendering module.

Components:
    vector: Host ``Vector3`` value type and kernel-side vector functions
    config: ``RenderConfig`` and rendering constants
    runtime: Taichi initialisation
    status: Kernel error flag reported back to the host
    tracer: Closest-hit shading and unrolled reflection
    render: Camera rays, row-strided workers and the pixel buffer

Only modules that declare no Taichi fields are imported here, so this
package can be imported before ``init_runtime()``. Import tracer, render
and status directly once Taichi is initialised:

    from spheretrace.core.render import Renderer
"""

from .config import (
    DEFAULT_EPSILON,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_MAX_INTENSITY,
    DEFAULT_RECURSION_DEPTH,
    MAX_REFLECTION_DEPTH,
    RenderConfig,
)
from .runtime import default_worker_count, init_runtime
from .vector import Vector3, vec3

__all__ = [
    "Vector3",
    "vec3",
    "RenderConfig",
    "DEFAULT_EPSILON",
    "DEFAULT_MAX_INTENSITY",
    "DEFAULT_IMAGE_SIZE",
    "DEFAULT_RECURSION_DEPTH",
    "MAX_REFLECTION_DEPTH",
    "init_runtime",
    "default_worker_count",
]
