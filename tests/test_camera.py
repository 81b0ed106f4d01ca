"""
Test Suite: Orbit Camera
========================
Zoom and drag limits plus perspective projection of the scene canvas.
"""

import math

import numpy as np
import pytest

from impact_sim.render.camera import OrbitCamera


def make_camera(distance=6.0):
    return OrbitCamera((400, 400), distance, min_distance=3.0, max_distance=15.0)


class TestZoom:
    def test_initial_distance_clamped(self):
        assert make_camera(1.0).distance == 3.0
        assert make_camera(40.0).distance == 15.0

    def test_zoom_target_clamped(self):
        camera = make_camera()
        camera.zoom_by(-100.0)
        assert camera.distance_target == 3.0
        camera.zoom_by(100.0)
        assert camera.distance_target == 15.0

    def test_update_eases_toward_target(self):
        camera = make_camera()
        camera.zoom_by(4.0)
        camera.update(0.5)
        assert camera.distance == pytest.approx(8.0)
        for _ in range(200):
            camera.update(0.5)
        assert camera.distance == pytest.approx(10.0)

    def test_set_zoom_is_immediate(self):
        camera = make_camera()
        camera.set_zoom(12.0)
        assert camera.distance == camera.distance_target == 12.0


class TestDrag:
    def test_drag_rotates(self):
        camera = make_camera()
        camera.begin_drag((100, 100))
        camera.drag((150, 120))
        assert camera.yaw == pytest.approx(0.5)
        assert camera.pitch == pytest.approx(0.2)
        assert camera.dragging

    def test_pitch_clamped(self):
        camera = make_camera()
        camera.begin_drag((0, 0))
        camera.drag((0, 10_000))
        assert camera.pitch == pytest.approx(math.pi / 2.0)

    def test_drag_without_anchor_ignored(self):
        camera = make_camera()
        camera.drag((50, 50))
        camera.begin_drag((0, 0))
        camera.end_drag()
        camera.drag((50, 50))
        assert (camera.yaw, camera.pitch) == (0.0, 0.0)
        assert not camera.dragging


class TestProjection:
    def test_origin_projects_to_center(self):
        screen, visible = make_camera().project(np.zeros(3))
        np.testing.assert_allclose(screen[0], [200.0, 200.0])
        assert visible[0]

    def test_up_is_up_on_screen(self):
        screen, _ = make_camera().project(np.array([[0.0, 1.0, 0.0]]))
        assert screen[0, 1] < 200.0

    def test_points_behind_camera_hidden(self):
        _, visible = make_camera().project(np.array([[0.0, 0.0, 10.0], [0.0, 0.0, -10.0]]))
        assert visible.tolist() == [False, True]
