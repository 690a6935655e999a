"""Unit tests for the frame renderer.

Tests cover:
- WhittedRenderer setup and properties
- Batched rendering with progress callbacks
- The render(scene, camera) entry point
"""

import numpy as np
import pytest


class TestWhittedRenderer:
    """Tests for the WhittedRenderer class."""

    def test_properties(self):
        """Test renderer exposes its image size."""
        from src.whitted.core.renderer import WhittedRenderer

        renderer = WhittedRenderer(32, 16)
        assert renderer.width == 32
        assert renderer.height == 16
        assert renderer.rows_done == 0

    def test_invalid_size(self):
        """Test that invalid sizes fail at construction."""
        from src.whitted.core.renderer import WhittedRenderer

        with pytest.raises(ValueError):
            WhittedRenderer(0, 16)

    def test_callback_reports_progress(self):
        """Test callback receives (rows_done, height) after each batch."""
        from src.whitted.camera.pinhole import PinholeCamera, setup_camera
        from src.whitted.core.renderer import WhittedRenderer

        setup_camera(PinholeCamera(width=8, height=10, fov=1.05))
        renderer = WhittedRenderer(8, 10)

        calls = []
        renderer.render(rows_per_batch=4, callback=lambda done, total: calls.append((done, total)))

        assert calls == [(4, 10), (8, 10), (10, 10)]
        assert renderer.rows_done == 10

    def test_single_batch_by_default(self):
        """Test that without rows_per_batch the frame is one batch."""
        from src.whitted.camera.pinhole import PinholeCamera, setup_camera
        from src.whitted.core.renderer import WhittedRenderer

        setup_camera(PinholeCamera(width=8, height=6, fov=1.05))
        renderer = WhittedRenderer(8, 6)

        calls = []
        renderer.render(callback=lambda done, total: calls.append((done, total)))

        assert calls == [(6, 6)]

    @pytest.mark.parametrize("rows_per_batch", [0, -3])
    def test_invalid_batch_size(self, rows_per_batch):
        """Test that non-positive batch sizes are rejected."""
        from src.whitted.core.renderer import WhittedRenderer

        renderer = WhittedRenderer(8, 6)
        with pytest.raises(ValueError, match="rows_per_batch"):
            renderer.render(rows_per_batch=rows_per_batch)

    def test_batched_matches_single_launch(self):
        """Test that rendering in batches gives the same image as one launch."""
        from src.whitted.camera.pinhole import setup_camera
        from src.whitted.core.renderer import WhittedRenderer
        from src.whitted.scene.manager import load_scene
        from src.whitted.scene.showcase import create_showcase_scene

        scene, camera = create_showcase_scene(32, 24)
        load_scene(scene)
        setup_camera(camera)

        renderer = WhittedRenderer(32, 24)
        renderer.render()
        whole = renderer.get_image_numpy().copy()

        renderer = WhittedRenderer(32, 24)
        renderer.render(rows_per_batch=5)
        batched = renderer.get_image_numpy()

        assert np.array_equal(whole, batched)


class TestRenderFunction:
    """Tests for render(scene, camera)."""

    def test_empty_scene_is_background(self):
        """Test an empty scene renders the background everywhere."""
        from src.whitted.camera.pinhole import PinholeCamera
        from src.whitted.core.renderer import render
        from src.whitted.scene.model import Scene

        image = render(Scene(background=(0.1, 0.2, 0.3)), PinholeCamera(width=12, height=9))

        assert image.shape == (9, 12, 3)
        assert image.dtype == np.float32
        assert np.allclose(image, np.array([0.1, 0.2, 0.3], dtype=np.float32), atol=1e-6)

    def test_empty_scene_bytes(self):
        """Test that the default background maps to bytes (51, 178, 204)."""
        from src.whitted.camera.pinhole import PinholeCamera
        from src.whitted.core.renderer import render
        from src.whitted.preview.export import image_to_uint8
        from src.whitted.scene.model import Scene

        image = render(Scene(), PinholeCamera(width=4, height=3))
        pixels = image_to_uint8(image)

        assert np.all(pixels == np.array([51, 178, 204], dtype=np.uint8))

    def test_render_with_callback(self):
        """Test render() forwards the progress callback."""
        from src.whitted.camera.pinhole import PinholeCamera
        from src.whitted.core.renderer import render
        from src.whitted.scene.model import Scene

        calls = []
        render(
            Scene(),
            PinholeCamera(width=4, height=6),
            rows_per_batch=3,
            callback=lambda done, total: calls.append(done),
        )
        assert calls == [3, 6]

    def test_invalid_camera(self):
        """Test render() validates the camera before tracing."""
        from src.whitted.camera.pinhole import PinholeCamera
        from src.whitted.core.renderer import render
        from src.whitted.scene.model import Scene

        with pytest.raises(ValueError, match="Field of view"):
            render(Scene(), PinholeCamera(width=4, height=4, fov=0.0))
