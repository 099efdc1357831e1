"""Exception hierarchy for the ray tracer.

Kernels cannot raise, so degenerate inputs met on the device are recorded as
status codes (see ``spheretrace.core.status``) and turned into the
exceptions below once the kernel returns.
"""


class SpheretraceError(RuntimeError):
    """Base class for all ray tracer failures."""


class RenderError(SpheretraceError):
    """A kernel met an input the shading model has no answer for."""

    code = 0


class DegenerateRayError(RenderError):
    """A zero-length direction reached ray-sphere intersection."""

    code = 1


class DegenerateSpecularError(RenderError):
    """A zero-length reflected or view vector reached the specular term."""

    code = 2


class ZeroDirectionError(RenderError):
    """A zero-length direction was handed to the tracer."""

    code = 3


class ImageWriteError(SpheretraceError):
    """Encoding or writing the output image failed."""


RENDER_ERRORS: dict[int, type[RenderError]] = {
    cls.code: cls for cls in (DegenerateRayError, DegenerateSpecularError, ZeroDirectionError)
}
