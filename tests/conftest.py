"""Shared pytest fixtures for the Whitted ray tracer tests.

Taichi must be initialized before any module that declares fields is
imported, so test modules import the package inside test bodies.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Start the Taichi CPU backend once for the whole session.

    Calling ti.init() again mid-session would drop every field the package
    modules have already declared.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def reset_render_state():
    """Empty the scene, material, light and framebuffer storage around each test."""
    from src.whitted.core.integrator import clear_render_target
    from src.whitted.materials.phong import clear_phong_materials
    from src.whitted.scene.environment import clear_environment
    from src.whitted.scene.intersection import clear_scene

    def _reset():
        clear_scene()
        clear_phong_materials()
        clear_environment()
        clear_render_target()

    _reset()
    yield
    _reset()
