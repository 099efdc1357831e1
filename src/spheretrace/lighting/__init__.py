"""Lighting module: point and ambient lights with shadow testing."""

from .light import (
    Light,
    LightType,
    ShadingParams,
    compute_lighting,
    compute_total_lighting,
    lighting_at,
    reflect_ray,
    total_lighting_at,
)

__all__ = [
    "Light",
    "LightType",
    "ShadingParams",
    "compute_lighting",
    "compute_total_lighting",
    "lighting_at",
    "total_lighting_at",
    "reflect_ray",
]
