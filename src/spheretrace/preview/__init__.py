"""Preview module: PNG export of rendered images."""

from .export import image_to_pil, save_png, save_png_from_array

__all__ = [
    "save_png",
    "save_png_from_array",
    "image_to_pil",
]
