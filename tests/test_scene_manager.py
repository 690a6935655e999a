"""Unit tests for the SceneManager and the immutable scene model.

Tests cover:
- Material registration and lookup
- Material de-duplication for shared Material objects
- Primitive addition with registered materials
- Light and background setup
- Whole-scene upload with load_scene
- Scene clearing
"""

import pytest


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager for each test."""
    from src.whitted.scene.manager import SceneManager

    scene = SceneManager()
    yield scene
    scene.clear()


class TestMaterialRegistration:
    """Tests for material registration."""

    def test_add_material(self, fresh_scene):
        """Test adding a material."""
        mat_id = fresh_scene.add_material(albedo=(0.9, 0.5, 0.1, 0.0), name="ivory")
        assert mat_id == 0
        assert fresh_scene.get_material_count() == 1

    def test_material_info(self, fresh_scene):
        """Test that material parameters are recorded."""
        mat_id = fresh_scene.add_material(
            refractive_index=1.5,
            albedo=(0.0, 0.9, 0.1, 0.8),
            diffuse_color=(0.6, 0.7, 0.8),
            specular_exponent=125.0,
            name="glass",
        )

        info = fresh_scene.get_material_info(mat_id)
        assert info.material_id == mat_id
        assert info.name == "glass"
        assert info.params["refractive_index"] == 1.5
        assert info.params["specular_exponent"] == 125.0

    def test_material_info_out_of_range(self, fresh_scene):
        """Test that unknown material ids raise IndexError."""
        with pytest.raises(IndexError):
            fresh_scene.get_material_info(0)

    def test_invalid_material_rejected(self, fresh_scene):
        """Test that registry validation errors reach the caller."""
        with pytest.raises(ValueError):
            fresh_scene.add_material(refractive_index=0.5)
        assert fresh_scene.get_material_count() == 0

    def test_equal_materials_share_id(self, fresh_scene):
        """Test that material_id registers each distinct Material once."""
        from src.whitted.scene.model import Material

        ivory = Material("ivory", 1.0, (0.9, 0.5, 0.1, 0.0), (0.4, 0.4, 0.3), 50.0)
        rubber = Material("red_rubber", 1.0, (1.4, 0.3, 0.0, 0.0), (0.3, 0.1, 0.1), 10.0)

        first = fresh_scene.material_id(ivory)
        second = fresh_scene.material_id(rubber)
        again = fresh_scene.material_id(ivory)

        assert first == again
        assert first != second
        assert fresh_scene.get_material_count() == 2


class TestPrimitives:
    """Tests for adding primitives and lights."""

    def test_add_sphere(self, fresh_scene):
        """Test adding a sphere with a registered material."""
        mat_id = fresh_scene.add_material()
        idx = fresh_scene.add_sphere(center=(-3.0, 0.0, -16.0), radius=2.0, material_id=mat_id)

        assert idx == 0
        assert fresh_scene.get_sphere_count() == 1
        assert fresh_scene.spheres[0].center == (-3.0, 0.0, -16.0)
        assert fresh_scene.spheres[0].material_id == mat_id

    def test_add_sphere_unknown_material(self, fresh_scene):
        """Test that spheres need a registered material."""
        with pytest.raises(ValueError, match="not registered"):
            fresh_scene.add_sphere(center=(0.0, 0.0, -5.0), radius=1.0, material_id=3)

    def test_add_checkerboard(self, fresh_scene):
        """Test adding a checkerboard with two tile materials."""
        light = fresh_scene.add_material(diffuse_color=(0.3, 0.3, 0.3))
        dark = fresh_scene.add_material(diffuse_color=(0.3, 0.2, 0.1))

        idx = fresh_scene.add_checkerboard(-4.0, 10.0, -30.0, -10.0, light, dark)

        assert idx == 0
        assert fresh_scene.get_checkerboard_count() == 1
        assert fresh_scene.checkerboards[0].odd_material_id == light
        assert fresh_scene.checkerboards[0].even_material_id == dark

    def test_add_checkerboard_unknown_material(self, fresh_scene):
        """Test that checkerboards need registered tile materials."""
        mat_id = fresh_scene.add_material()
        with pytest.raises(ValueError, match="not registered"):
            fresh_scene.add_checkerboard(-4.0, 10.0, -30.0, -10.0, mat_id, mat_id + 1)

    def test_add_light_and_background(self, fresh_scene):
        """Test lights and background reach the environment storage."""
        from src.whitted.scene.environment import get_background, get_light_count

        fresh_scene.add_light((-20.0, 20.0, 20.0))
        fresh_scene.add_light((30.0, 50.0, -25.0))
        fresh_scene.set_background((0.1, 0.2, 0.3))

        assert fresh_scene.get_light_count() == 2
        assert get_light_count() == 2
        assert get_background() == pytest.approx((0.1, 0.2, 0.3))

    def test_clear(self, fresh_scene):
        """Test clearing resets everything, including the background."""
        from src.whitted.scene.environment import get_background
        from src.whitted.scene.model import DEFAULT_BACKGROUND

        mat_id = fresh_scene.add_material()
        fresh_scene.add_sphere((0.0, 0.0, -5.0), 1.0, mat_id)
        fresh_scene.add_light((0.0, 10.0, 0.0))
        fresh_scene.set_background((0.0, 0.0, 0.0))

        fresh_scene.clear()

        assert fresh_scene.get_sphere_count() == 0
        assert fresh_scene.get_material_count() == 0
        assert fresh_scene.get_light_count() == 0
        assert get_background() == pytest.approx(DEFAULT_BACKGROUND)


class TestLoadScene:
    """Tests for uploading an immutable Scene."""

    def test_load_scene_counts(self):
        """Test that load_scene uploads every primitive and light."""
        from src.whitted.scene.manager import load_scene
        from src.whitted.scene.model import Material, Scene, SceneCheckerboard, SceneSphere

        red = Material("red", albedo=(1.4, 0.3, 0.0, 0.0), diffuse_color=(0.3, 0.1, 0.1))
        scene = Scene(
            spheres=(
                SceneSphere((0.0, 0.0, -16.0), 2.0, red),
                SceneSphere((3.0, 0.0, -16.0), 1.0, red),
            ),
            checkerboards=(SceneCheckerboard(),),
            lights=((-20.0, 20.0, 20.0),),
            background=(0.0, 0.0, 0.0),
        )

        manager = load_scene(scene)

        assert manager.get_sphere_count() == 2
        assert manager.get_checkerboard_count() == 1
        assert manager.get_light_count() == 1
        # Two tile materials plus the shared sphere material
        assert manager.get_material_count() == 3
        assert manager.spheres[0].material_id == manager.spheres[1].material_id

    def test_load_scene_replaces_previous(self):
        """Test that loading a second scene drops the first."""
        from src.whitted.scene.manager import load_scene
        from src.whitted.scene.model import Material, Scene, SceneSphere

        mat = Material("plain")
        load_scene(Scene(spheres=(SceneSphere((0.0, 0.0, -5.0), 1.0, mat),) * 3))
        manager = load_scene(Scene(spheres=(SceneSphere((0.0, 0.0, -5.0), 1.0, mat),)))

        assert manager.get_sphere_count() == 1
        assert manager.get_material_count() == 1

    def test_scene_materials_in_first_use_order(self):
        """Test Scene.materials lists distinct materials once."""
        from src.whitted.scene.model import Material, Scene, SceneCheckerboard, SceneSphere

        a = Material("a")
        b = Material("b", diffuse_color=(1.0, 0.0, 0.0))
        board = SceneCheckerboard()
        scene = Scene(
            spheres=(SceneSphere((0.0, 0.0, -5.0), 1.0, a), SceneSphere((1.0, 0.0, -5.0), 1.0, b),
                     SceneSphere((2.0, 0.0, -5.0), 1.0, a)),
            checkerboards=(board,),
        )

        assert scene.materials == (board.odd_material, board.even_material, a, b)

    def test_load_scene_registers_materials_in_scene_order(self):
        """Test material ids follow the order of Scene.materials."""
        from src.whitted.scene.manager import load_scene
        from src.whitted.scene.model import Material, Scene, SceneCheckerboard, SceneSphere

        a = Material("a")
        b = Material("b", diffuse_color=(1.0, 0.0, 0.0))
        scene = Scene(
            spheres=(SceneSphere((0.0, 0.0, -5.0), 1.0, b), SceneSphere((1.0, 0.0, -5.0), 1.0, a),
                     SceneSphere((2.0, 0.0, -5.0), 1.0, b)),
            checkerboards=(SceneCheckerboard(),),
        )

        manager = load_scene(scene)

        names = [manager.get_material_info(i).name for i in range(manager.get_material_count())]
        assert names == [material.name for material in scene.materials]
        assert names == ["checker_light", "checker_dark", "b", "a"]
        assert manager.spheres[0].material_id == manager.spheres[2].material_id == 2
        assert manager.spheres[1].material_id == 3

    def test_checkerboard_defaults(self):
        """Test the default floor geometry and tile colors."""
        from src.whitted.scene.model import SceneCheckerboard

        board = SceneCheckerboard()
        assert (board.height, board.half_extent_x, board.z_min, board.z_max) == (
            -4.0,
            10.0,
            -30.0,
            -10.0,
        )
        assert board.odd_material.diffuse_color == (0.3, 0.3, 0.3)
        assert board.even_material.diffuse_color == (0.3, 0.2, 0.1)
        assert board.odd_material.albedo == (2.0, 0.0, 0.0, 0.0)
