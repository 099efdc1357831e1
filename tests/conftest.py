"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Fields are declared when modules are first imported, so every test
    imports spheretrace modules inside the test body, after this runs.
    """
    from spheretrace.core.runtime import init_runtime

    init_runtime()
    yield


@pytest.fixture(autouse=True)
def clear_scene_and_status():
    """Clear scene storage and the kernel status flag around each test."""
    from spheretrace.core.status import clear_status
    from spheretrace.scene.storage import clear_scene

    clear_scene()
    clear_status()
    yield
    clear_scene()
    clear_status()
