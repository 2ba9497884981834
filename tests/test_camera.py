import math

import numpy as np
import pytest

from phongray.camera import Camera
from phongray.common import DegenerateGeometryError
from phongray.vector import WORLD_Y, dot, normalize, vector

from conftest import make_camera


def angle_between(u, v):
    return math.degrees(math.acos(max(-1.0, min(1.0, dot(u, v)))))


def test_center_pixel_looks_along_view_direction():
    camera = make_camera(21, 21)
    ray = camera.shoot_ray(10, 10, 10.0)

    np.testing.assert_array_equal(ray.origin, vector(0, 0, 0))
    np.testing.assert_allclose(ray.direction, vector(0, 0, 1), atol=1e-15)


def test_center_pixel_follows_arbitrary_direction():
    camera = Camera(vector(1, 2, 3), vector(1, 0.5, 1), 41, 31, 75)
    ray = camera.shoot_ray(20, 15, 3.0)

    np.testing.assert_allclose(ray.direction, normalize(vector(1, 0.5, 1)), atol=1e-12)
    np.testing.assert_array_equal(ray.origin, vector(1, 2, 3))


def test_single_pixel_viewport():
    camera = make_camera(1, 1)
    np.testing.assert_allclose(camera.shoot_ray(0, 0, 1.0).direction, vector(0, 0, 1), atol=1e-15)


def test_direction_is_normalized():
    camera = make_camera(16, 9)
    for x, y in [(0, 0), (15, 8), (3, 7)]:
        assert math.isclose(np.linalg.norm(camera.shoot_ray(x, y, 5.0).direction), 1.0)


@pytest.mark.parametrize("width", [20, 21, 64])
def test_horizontal_edges_spread_half_fov_symmetrically(width):
    camera = make_camera(width, 21, fov=60)

    left = camera.shoot_ray(0, 10, 10.0).direction
    right = camera.shoot_ray(width - 1, 10, 10.0).direction
    assert angle_between(left, camera.direction) == pytest.approx(30.0)
    assert angle_between(right, camera.direction) == pytest.approx(30.0)
    assert left[0] < 0 < right[0]
    np.testing.assert_allclose(left * [-1, 1, 1], right, atol=1e-12)


def test_vertical_edges_are_symmetric():
    camera = make_camera(20, 10, fov=60)

    top = camera.shoot_ray(5, 0, 1.0).direction
    bottom = camera.shoot_ray(5, 9, 1.0).direction
    np.testing.assert_allclose(top * [1, -1, 1], bottom, atol=1e-12)
    assert top[1] > 0


def test_vertical_spread_follows_aspect_ratio():
    camera = make_camera(201, 101, fov=60)
    top = camera.shoot_ray(100, 0, 1.0).direction

    expected = normalize(vector(0, math.tan(math.radians(30)) * 101 / 201, 1))
    np.testing.assert_allclose(top, expected, atol=1e-12)


def test_focal_distance_does_not_change_direction():
    camera = make_camera(21, 21)
    np.testing.assert_allclose(
        camera.shoot_ray(3, 4, 1.0).direction,
        camera.shoot_ray(3, 4, 25.0).direction,
        atol=1e-12,
    )


def test_resize_changes_spread_not_position():
    camera = make_camera(21, 21)
    before = camera.shoot_ray(11, 10, 10.0)
    step_before = angle_between(before.direction, camera.shoot_ray(10, 10, 10.0).direction)

    camera.resize(41, 21)
    after = camera.shoot_ray(21, 10, 10.0)
    step_after = angle_between(after.direction, camera.shoot_ray(20, 10, 10.0).direction)

    np.testing.assert_array_equal(after.origin, before.origin)
    np.testing.assert_array_equal(camera.position, vector(0, 0, 0))
    assert step_after < step_before
    # the full horizontal extent still spans the field of view
    assert angle_between(camera.shoot_ray(0, 10, 10.0).direction, camera.direction) == pytest.approx(30.0)
    assert angle_between(camera.shoot_ray(40, 10, 10.0).direction, camera.direction) == pytest.approx(30.0)


@pytest.mark.parametrize("fov", [0, 180, -10, 200])
def test_invalid_fov(fov):
    with pytest.raises(DegenerateGeometryError):
        make_camera(fov=fov)


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-5, 5)])
def test_invalid_viewport(size):
    with pytest.raises(DegenerateGeometryError):
        make_camera(*size)


def test_failed_resize_leaves_camera_untouched():
    camera = make_camera(20, 20)
    with pytest.raises(DegenerateGeometryError):
        camera.resize(30, 0)
    assert (camera.width, camera.height) == (20, 20)


def test_pixel_outside_viewport():
    camera = make_camera(20, 20)
    with pytest.raises(ValueError):
        camera.shoot_ray(20, 0, 1.0)


def test_non_positive_focal_distance():
    with pytest.raises(DegenerateGeometryError):
        make_camera().shoot_ray(0, 0, 0.0)


def test_zero_direction():
    with pytest.raises(DegenerateGeometryError):
        Camera(vector(0, 0, 0), vector(0, 0, 0), 10, 10, 60)


def test_rotate():
    camera = make_camera()
    camera.rotate(WORLD_Y, 90)
    np.testing.assert_allclose(camera.direction, vector(1, 0, 0), atol=1e-12)


def test_basis_when_looking_straight_up():
    camera = Camera(vector(0, 0, 0), vector(0, 1, 0), 10, 10, 60)
    right, up, forward = camera.basis()

    np.testing.assert_allclose(forward, vector(0, 1, 0))
    assert dot(right, forward) == pytest.approx(0.0)
    assert dot(up, forward) == pytest.approx(0.0)
    assert np.linalg.norm(right) == pytest.approx(1.0)
