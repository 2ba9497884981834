import numpy as np
import pytest

from phongray.app import App
from phongray.color import Color
from phongray.common import DegenerateGeometryError, Settings
from phongray.cpu_rt import CpuRenderer
from phongray.light import Light
from phongray.material import Material
from phongray.numba_rt import NumbaRenderer, pack_argb, scene_to_arrays
from phongray.renderer import framebuffer_to_rgb, make_renderer, new_framebuffer
from phongray.shapes import Shape, Sphere
from phongray.vector import vector

from conftest import make_scene

BLACK = Color.black().argb()


def render(renderer, scene):
    framebuffer = new_framebuffer(scene.camera.width, scene.camera.height)
    renderer.render(scene, framebuffer)
    return framebuffer_to_rgb(framebuffer, scene.camera.width, scene.camera.height)


def assert_backends_agree(scene, settings):
    cpu = render(CpuRenderer(settings), scene).astype(int)
    jit = render(NumbaRenderer(settings), scene).astype(int)

    off = np.abs(cpu - jit).max(axis=-1) > 1
    # only silhouette pixels may flip between hit and miss through rounding
    assert np.count_nonzero(off) <= max(1, off.size // 100)


def test_make_renderer_picks_backend():
    assert isinstance(make_renderer(Settings(backend="numba")), NumbaRenderer)
    assert isinstance(make_renderer(Settings(backend="cpu")), CpuRenderer)


def test_matches_cpu_on_default_world():
    settings = Settings(width=32, height=24)
    app = App(settings)

    assert_backends_agree(app.scene, settings)


def test_matches_cpu_with_several_spheres_and_lights(front_sphere):
    shapes = [
        Sphere(1.5, vector(0, 0, 6), Material(color=Color.red())),
        front_sphere,
        Sphere(0.5, vector(1.2, 0.4, 3.5), Material(ambient=0.2, diffuse=0.7, specular=0.5, shininess=5, color=Color.green())),
    ]
    lights = [
        Light(vector(0, 0, 0), intensity=2.0),
        Light(vector(2, 3, -1), intensity=10.0, color=Color(1.0, 0.8, 0.2)),
    ]
    scene = make_scene(shapes, lights, width=30, height=20)

    assert_backends_agree(scene, Settings(width=30, height=20))


def test_single_sphere_scene(single_sphere_scene):
    rgb = render(NumbaRenderer(Settings()), single_sphere_scene)

    assert rgb[10, 10].any()
    assert not rgb[0, 0].any()
    assert not rgb[20, 20].any()


def test_centered_sphere_is_mirror_symmetric(single_sphere_scene):
    rgb = render(NumbaRenderer(Settings()), single_sphere_scene).astype(int)

    assert np.abs(rgb - rgb[:, ::-1]).max() <= 1
    assert np.abs(rgb - rgb[::-1, :]).max() <= 1


def test_sphere_behind_camera_is_invisible(front_sphere):
    behind = Sphere(1.0, vector(0, 0, -3), Material(color=Color.red()))
    renderer = NumbaRenderer(Settings())

    np.testing.assert_array_equal(
        render(renderer, make_scene([behind, front_sphere])),
        render(renderer, make_scene([front_sphere])),
    )


def test_rendering_is_idempotent(single_sphere_scene):
    renderer = NumbaRenderer(Settings())
    np.testing.assert_array_equal(render(renderer, single_sphere_scene), render(renderer, single_sphere_scene))


def test_light_on_surface_is_reported(front_sphere):
    scene = make_scene([front_sphere], [Light(vector(0, 0, 2))])
    with pytest.raises(DegenerateGeometryError):
        render(NumbaRenderer(Settings()), scene)


def test_only_spheres(single_sphere_scene):
    single_sphere_scene.shapes.append(Shape(Material()))
    with pytest.raises(TypeError):
        render(NumbaRenderer(Settings()), single_sphere_scene)


def test_scene_to_arrays(single_sphere_scene):
    spheres, lights, camera = scene_to_arrays(single_sphere_scene, 10.0)

    np.testing.assert_array_equal(spheres[0, :4], [0, 0, 3, 1])
    np.testing.assert_array_equal(spheres[0, 8:], [0, 0, 1, 1])
    np.testing.assert_array_equal(lights[0], [0, 0, 0, 1, 1, 1, 1, 1])
    np.testing.assert_allclose(camera[9:12], [0, 0, 1])
    assert camera[14] == 10.0


def test_pack_argb():
    image = np.array([[[0.0, 0.0, 0.0], [1.0, 0.5, 0.2]]])
    packed = pack_argb(image)

    assert packed.dtype == np.uint32
    assert packed[0, 0] == BLACK
    assert packed[0, 1] == Color(1.0, 0.5, 0.2).argb()
