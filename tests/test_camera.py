import numpy as np
import pytest

import config
from idea_verse.core.camera import CameraProjector, CameraState, rotation_matrix


@pytest.fixture
def flat_camera() -> CameraState:
    return CameraState(pitch=0.0, yaw=0.0, roll=0.0)


@pytest.fixture
def projector() -> CameraProjector:
    return CameraProjector(width=1000, height=700)


def test_default_camera_matches_fit_view() -> None:
    camera = CameraState()
    assert camera.rotation == (config.DEFAULT_PITCH, config.DEFAULT_YAW, config.DEFAULT_ROLL)
    assert camera.pan == (0.0, 0.0)
    assert camera.scale == 1.0


def test_reset_restores_defaults() -> None:
    camera = CameraState(pitch=10, yaw=-80, roll=5, pan_x=30, pan_y=-40, scale=2.5)
    camera.reset()
    assert camera == CameraState()


def test_zero_rotation_is_identity() -> None:
    assert np.allclose(rotation_matrix(0, 0, 0), np.eye(3))


def test_rotation_applies_pitch_then_yaw() -> None:
    # Pitch 90 takes +y to +z, yaw 90 then takes +z to +x
    rotated = rotation_matrix(90, 90, 0) @ np.array([0.0, 100.0, 0.0])
    assert np.allclose(rotated, [100.0, 0.0, 0.0], atol=1e-9)


def test_roll_rotates_in_screen_plane() -> None:
    rotated = rotation_matrix(0, 0, 90) @ np.array([100.0, 0.0, 0.0])
    assert np.allclose(rotated, [0.0, 100.0, 0.0], atol=1e-9)


def test_positive_yaw_turns_world_toward_screen_right() -> None:
    rotated = rotation_matrix(0, 30, 0) @ np.array([0.0, 0.0, 100.0])
    assert rotated[0] > 0.0

    undo = rotation_matrix(0, -30, 0) @ rotated
    assert np.allclose(undo, [0.0, 0.0, 100.0])


def test_origin_projects_to_viewport_center(projector, flat_camera) -> None:
    point = projector.project((0, 0, 0), flat_camera)
    assert point.screen_x == pytest.approx(500.0)
    assert point.screen_y == pytest.approx(350.0)
    assert point.depth == pytest.approx(config.FOCAL_LENGTH)
    assert point.scale == pytest.approx(1.0)


def test_perspective_shrinks_far_points(projector, flat_camera) -> None:
    point = projector.project((100, 0, 2000), flat_camera)
    assert point.scale == pytest.approx(0.5)
    assert point.screen_x == pytest.approx(550.0)


def test_perspective_factor_is_clamped(projector, flat_camera) -> None:
    # z + F == 0 takes the maximum factor
    assert projector.project((0, 0, -2000), flat_camera).scale == pytest.approx(3.0)
    # Behind the camera clamps to the minimum
    assert projector.project((0, 0, -3000), flat_camera).scale == pytest.approx(0.2)
    # Very close to the camera plane clamps to the maximum
    assert projector.project((0, 0, -1900), flat_camera).scale == pytest.approx(3.0)


def test_pan_and_zoom_apply_in_screen_space(projector) -> None:
    camera = CameraState(pitch=0, yaw=0, roll=0, pan_x=10, pan_y=-5, scale=2.0)
    point = projector.project((100, 0, 0), camera)
    assert point.screen_x == pytest.approx(500 + 200 + 10)
    assert point.screen_y == pytest.approx(350 - 5)


def test_yaw_changes_depth(projector) -> None:
    camera = CameraState(pitch=0, yaw=90, roll=0)
    point = projector.project((100, 0, 0), camera)
    assert point.screen_x == pytest.approx(500.0, abs=1e-6)
    assert point.depth == pytest.approx(config.FOCAL_LENGTH - 100)


def test_project_many_matches_project(projector) -> None:
    camera = CameraState()
    points = np.array([[0, 0, 0], [300, -200, 150], [-800, 40, -600]], dtype=float)
    many = projector.project_many(points, camera)

    assert many.shape == (3, 4)
    for row, point in zip(many, points):
        assert np.allclose(row, tuple(projector.project(point, camera)))


def test_project_many_empty(projector, flat_camera) -> None:
    assert projector.project_many(np.zeros((0, 3)), flat_camera).shape == (0, 4)
