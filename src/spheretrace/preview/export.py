"""Image export utilities for rendered images.

Rendered images are written as 8-bit RGBA PNG files via Pillow.

Example:
    >>> from spheretrace.preview.export import save_png
    >>> renderer.render(create_default_scene())
    >>> save_png(renderer, "img.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.errors import ImageWriteError

if TYPE_CHECKING:
    from spheretrace.core.render import Renderer


def image_to_pil(image: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap an RGBA array in a Pillow image.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8.

    Returns:
        The Pillow image in RGBA mode.

    Raises:
        ValueError: If the array shape or dtype is wrong.
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")
    return PILImage.fromarray(image)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an RGBA array as a PNG file.

    The format is always PNG regardless of the file extension.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8.
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        ValueError: If the array shape or dtype is wrong.
        ImageWriteError: If encoding or writing the file fails.
    """
    path = Path(filepath)
    pil_image = image_to_pil(image)
    try:
        pil_image.save(path, format="PNG")
    except (OSError, ValueError) as e:
        raise ImageWriteError(f"Failed to write {path}: {e}") from e
    return path


def save_png(renderer: Renderer, filepath: str | Path) -> Path:
    """Save the renderer's completed image as a PNG file.

    Raises:
        RuntimeError: If the renderer has no completed render.
        ImageWriteError: If encoding or writing the file fails.
    """
    return save_png_from_array(renderer.get_image_numpy(), filepath)
