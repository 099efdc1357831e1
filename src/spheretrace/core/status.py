"""Kernel status flag for reporting degenerate inputs to the host.

Taichi kernels cannot raise exceptions. Kernel code calls ``flag_error``
with one of the codes below; the highest code wins when several pixels
fail. After a launch the host calls ``check_status`` which raises the
matching ``RenderError`` subclass.

Example:
    >>> clear_status()
    >>> some_kernel()
    >>> check_status()  # raises DegenerateRayError if code 1 was flagged
"""

import taichi as ti

from spheretrace.errors import (
    RENDER_ERRORS,
    DegenerateRayError,
    DegenerateSpecularError,
    RenderError,
    ZeroDirectionError,
)

STATUS_OK = 0
DEGENERATE_RAY = DegenerateRayError.code
DEGENERATE_SPECULAR = DegenerateSpecularError.code
ZERO_DIRECTION = ZeroDirectionError.code

_MESSAGES = {
    DEGENERATE_RAY: "ray direction has zero length in sphere intersection",
    DEGENERATE_SPECULAR: "zero-length reflected or view vector in specular lighting",
    ZERO_DIRECTION: "ray direction passed to the tracer has zero length",
}

_status_code = ti.field(dtype=ti.i32, shape=())


@ti.func
def flag_error(code: ti.i32):
    """Record a failure code from kernel code."""
    ti.atomic_max(_status_code[None], code)


def clear_status() -> None:
    """Reset the status flag before a kernel launch."""
    _status_code[None] = STATUS_OK


def get_status() -> int:
    return int(_status_code[None])


def check_status() -> None:
    """Raise the error recorded by the last kernel launch, if any.

    The flag is cleared before raising so the next launch starts clean.

    Raises:
        RenderError: The subclass matching the recorded code.
    """
    code = get_status()
    if code == STATUS_OK:
        return
    clear_status()
    error_cls = RENDER_ERRORS.get(code, RenderError)
    raise error_cls(_MESSAGES.get(code, f"kernel reported status {code}"))
